from datetime import date
from pydantic import BaseModel
from typing import Optional


class PublicHoliday(BaseModel):
    """
    A row of the public_holidays collection, shaped like the holiday feed it
    was imported from:
        {"name": ..., "country": {"id": "in"},
         "date": {"iso": "2024-01-26", "datetime": {"year": 2024, "month": 1, "day": 26}}}
    """
    name: Optional[str] = None
    country: str
    date: date

    @classmethod
    def from_document(cls, document: dict) -> "PublicHoliday":
        parts = document["date"]["datetime"]
        return cls(
            name=document.get("name"),
            country=document["country"]["id"],
            date=date(parts["year"], parts["month"], parts["day"]),
        )
