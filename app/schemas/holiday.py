from pydantic import BaseModel, Field
from typing import List
from models.holidays import PublicHoliday


class HolidayQuery(BaseModel):
    country: str = Field(..., min_length=2, max_length=3)
    year: int = Field(..., ge=1900, le=2200)


class HolidayList(BaseModel):
    country: str
    year: int
    holidays: List[PublicHoliday]
