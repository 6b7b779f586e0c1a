from datetime import date, datetime, timezone
from uuid import uuid4
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

UTC = timezone.utc


def to_datetime(day: date) -> datetime:
    # BSON has no date type, days are stored as UTC midnight
    return datetime.combine(day, datetime.min.time(), UTC)


class LeaveRecord(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    start_date: date
    end_date: date
    approved: Optional[bool] = None # None while pending
    approver: Optional[str] = None
    decided_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _strip_time(cls, value):
        if isinstance(value, datetime):
            return value.date()
        return value

    def to_document(self) -> dict:
        document = self.model_dump()
        document["start_date"] = to_datetime(self.start_date)
        document["end_date"] = to_datetime(self.end_date)
        return document


class UserLeaves(BaseModel):
    username: str
    approver: Optional[str] = None
    leaves: List[LeaveRecord] = Field(default_factory=list)
