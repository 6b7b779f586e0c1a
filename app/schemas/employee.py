from pydantic import BaseModel
from typing import Optional


class Identity(BaseModel):
    """A verified caller, resolved from the bearer token on every request."""
    username: str
    team: Optional[str] = None
    approver_name: Optional[str] = None
    country: Optional[str] = None
    session_id: Optional[str] = None
