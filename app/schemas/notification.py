from pydantic import BaseModel, Field
from typing import Optional, Union, List
from datetime import datetime, timezone
from enum import Enum

UTC = timezone.utc

class NotificationType(str, Enum):
    LEAVE_REQUEST = "leave_request"
    LEAVE_APPROVED = "leave_approved"
    LEAVE_REJECTED = "leave_rejected"

class NotificationCreate(BaseModel):
    recipient_id: Union[str, List[str]]
    type: NotificationType
    message: str
    related_id: Optional[str]
    is_read: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

class NotificationResponse(NotificationCreate):
    id: str
