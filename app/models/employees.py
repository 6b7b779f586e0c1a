from pydantic import BaseModel, Field
from datetime import datetime, timezone
from typing import Optional

UTC = timezone.utc


class Employee(BaseModel):
    username: str
    password: str
    team: Optional[str] = None
    approver_name: Optional[str] = None
    country: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    employment_status: str = "active" # or inactive
    date_created: datetime = Field(default_factory=lambda: datetime.now(UTC))
