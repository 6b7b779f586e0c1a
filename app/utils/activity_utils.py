import logging
from datetime import datetime
from pytz import UTC
from pymongo.errors import PyMongoError
from db import system_activity_collection

logger = logging.getLogger(__name__)


async def log_approval_activity(approver: str = None, username: str = None, leave_id: str = None, action: str = None):
    """
    Record an approval decision in the audit trail.

    Args:
        approver (str): Who decided.
        username (str): Whose leave was decided.
        leave_id (str): The decided leave record.
        action (str): "approved" or "rejected".
    """
    log_entry = {
        "approver": approver,
        "username": username,
        "leave_id": leave_id,
        "type": "leave",
        "action": action,
        "timestamp": datetime.now(UTC)
    }
    try:
        await system_activity_collection.insert_one(log_entry)
    except PyMongoError:
        logger.exception("Could not write approval activity for leave %s", leave_id)
