import logging
from pymongo.errors import PyMongoError
from db import notifications_collection
from schemas.notification import NotificationCreate, NotificationType

logger = logging.getLogger(__name__)


async def create_notification(notification: NotificationCreate):
    return await notifications_collection.insert_one(notification.model_dump())


async def create_leave_notification(leave_request, notification_type, recipient_id):
    message = {
        NotificationType.LEAVE_REQUEST: f"New leave request from {leave_request['employee_name']}",
        NotificationType.LEAVE_APPROVED: "Your leave request has been approved",
        NotificationType.LEAVE_REJECTED: "Your leave request has been rejected",
    }

    notification = NotificationCreate(
        recipient_id=recipient_id,
        type=notification_type,
        message=message[notification_type],
        related_id=str(leave_request['_id'])
    )

    # the leave change is already stored, a lost notification must not undo it
    try:
        await create_notification(notification)
    except PyMongoError:
        logger.exception("Could not store %s notification for %s", notification_type.value, recipient_id)
