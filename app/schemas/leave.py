from datetime import date
from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional, List
from models.leaves import LeaveRecord, UserLeaves


class LeaveInterval(BaseModel):
    """Inclusive day range. Ordering is checked by the decomposition step."""
    start_date: date
    end_date: date


class LeaveApplication(BaseModel):
    username: str
    leaves: List[LeaveInterval] = Field(..., min_length=1)

    class Config:
        json_schema_extra = {
            "example": {
                "username": "jdoe",
                "leaves": [
                    {"start_date": "2024-01-22", "end_date": "2024-01-26"}
                ]
            }
        }


class ApprovalState(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def stored_value(self) -> Optional[bool]:
        return {
            ApprovalState.PENDING: None,
            ApprovalState.APPROVED: True,
            ApprovalState.REJECTED: False,
        }[self]

    @classmethod
    def of(cls, approved: Optional[bool]) -> "ApprovalState":
        if approved is None:
            return cls.PENDING
        return cls.APPROVED if approved else cls.REJECTED


class ViewApplications(BaseModel):
    approver_name: str
    # omitted means every state
    state: Optional[ApprovalState] = None


class TeamLeavesRequest(BaseModel):
    username: str
    team: Optional[str] = None


class ApprovalDecision(BaseModel):
    leave_id: str
    approved: bool


class ApprovalRequest(BaseModel):
    username: str
    decisions: List[ApprovalDecision] = Field(..., min_length=1)


class OutcomeStatus(str, Enum):
    UPDATED = "updated"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    ALREADY_DECIDED = "already_decided"
    FAILED = "failed"


class MatchResult(BaseModel):
    matched_count: int
    modified_count: int


class ApprovalOutcome(MatchResult):
    leave_id: str
    approved: bool
    status: OutcomeStatus


class LeaveList(BaseModel):
    leave_data: List[UserLeaves]


class AppliedLeaves(BaseModel):
    username: str
    created: List[LeaveRecord]
