from fastapi import APIRouter, Depends, HTTPException
from typing import List
from bson import ObjectId
from bson.errors import InvalidId
from db import notifications_collection
from schemas.employee import Identity
from schemas.notification import NotificationResponse
from utils.app_utils import get_current_identity

router = APIRouter()

@router.get("/", response_model=List[NotificationResponse])
async def get_notifications(
    identity: Identity = Depends(get_current_identity),
    skip: int = 0,
    limit: int = 10
):
    """
    Retrieves unread notifications addressed to the caller, newest first.
    Args:
        identity (Identity): The authenticated caller
        skip (int, optional): Number of records to skip for pagination. Defaults to 0
        limit (int, optional): Maximum number of records to return. Defaults to 10
    Returns:
        list: notifications with the MongoDB _id exposed as id
    """
    query = {
        "is_read": False,
        "recipient_id": identity.username,
    }

    notifications = await notifications_collection.find(query)\
        .sort("created_at", -1)\
        .skip(skip)\
        .limit(limit)\
        .to_list(None)

    transformed_notifications = []
    for notification in notifications:
        notification["id"] = str(notification.pop("_id"))
        transformed_notifications.append(notification)

    return transformed_notifications

@router.put("/{notification_id}/read")
async def mark_notification_read(
    notification_id: str,
    identity: Identity = Depends(get_current_identity)
):
    """
    Mark a notification as read for the current user.
    Raises:
        HTTPException: 404 if notification is not found for the given ID and recipient
    """
    try:
        object_id = ObjectId(notification_id)
    except InvalidId:
        raise HTTPException(status_code=404, detail="Notification not found")

    result = await notifications_collection.update_one(
        {"_id": object_id, "recipient_id": identity.username},
        {"$set": {"is_read": True}}
    )

    if result.modified_count == 0:
        raise HTTPException(status_code=404, detail="Notification not found")

    return {"message": "Notification marked as read"}
