import logging
from datetime import datetime, timezone
from typing import List
from pymongo.errors import PyMongoError
from db import leaves_collection
from exceptions import DependencyError, ValidationError
from schemas.employee import Identity
from schemas.leave import ApprovalOutcome, ApprovalRequest, OutcomeStatus
from schemas.notification import NotificationType
from utils.activity_utils import log_approval_activity
from utils.notification_utils import create_leave_notification

UTC = timezone.utc

logger = logging.getLogger(__name__)


async def _classify_miss(username: str, leave_id: str, approver: str) -> OutcomeStatus:
    record_doc = await leaves_collection.find_one(
        {"username": username, "leaves.id": leave_id},
        {"leaves.$": 1}
    )
    if not record_doc or not record_doc.get("leaves"):
        return OutcomeStatus.NOT_FOUND

    record = record_doc["leaves"][0]
    if record.get("approver") != approver:
        return OutcomeStatus.FORBIDDEN
    return OutcomeStatus.ALREADY_DECIDED


async def approve(username: str, leave_id: str, decision: bool, approver: str) -> ApprovalOutcome:
    """
    Moves one pending leave record of `username` to approved or rejected.

    Only the array element whose id matches is written, through the
    positional operator, so the user's other records keep their state. A
    record is only decided once and only by its own approver. A miss is
    reported in the outcome and never raised.

    Two decisions racing on the same record are settled by the pending
    guard in the filter: the first write wins, the second sees no match.
    """
    try:
        result = await leaves_collection.update_one(
            {
                "username": username,
                "leaves": {"$elemMatch": {"id": leave_id, "approved": None, "approver": approver}},
            },
            {
                "$set": {
                    "leaves.$.approved": decision,
                    "leaves.$.decided_at": datetime.now(UTC),
                }
            },
        )

        if result.matched_count:
            outcome_status = OutcomeStatus.UPDATED
        else:
            outcome_status = await _classify_miss(username, leave_id, approver)

    except PyMongoError as e:
        logger.error("Approval of leave %s for %s failed: %s", leave_id, username, e)
        raise DependencyError("Could not update the leave record") from e

    return ApprovalOutcome(
        leave_id=leave_id,
        approved=decision,
        status=outcome_status,
        matched_count=result.matched_count,
        modified_count=result.modified_count,
    )


async def apply_decisions(approver: Identity, request: ApprovalRequest) -> List[ApprovalOutcome]:
    """
    Resolves every (leave_id, decision) pair on its own, in request order.
    A storage failure on one pair is reported as a failed outcome for that
    pair; the remaining pairs are still attempted.
    """
    leave_ids = [decision.leave_id for decision in request.decisions]
    duplicates = sorted({leave_id for leave_id in leave_ids if leave_ids.count(leave_id) > 1})
    if duplicates:
        raise ValidationError(f"Leave ids appear more than once: {', '.join(duplicates)}")

    outcomes = []
    for decision in request.decisions:
        try:
            outcome = await approve(request.username, decision.leave_id, decision.approved, approver.username)
        except DependencyError:
            # earlier decisions are already stored, report this one and go on
            outcome = ApprovalOutcome(
                leave_id=decision.leave_id,
                approved=decision.approved,
                status=OutcomeStatus.FAILED,
                matched_count=0,
                modified_count=0,
            )
        outcomes.append(outcome)

        if outcome.status != OutcomeStatus.UPDATED:
            logger.info("Leave %s of %s not decided: %s", decision.leave_id, request.username, outcome.status.value)
            continue

        action = "approved" if decision.approved else "rejected"
        await create_leave_notification(
            leave_request={"_id": decision.leave_id, "employee_name": request.username},
            notification_type=NotificationType.LEAVE_APPROVED if decision.approved else NotificationType.LEAVE_REJECTED,
            recipient_id=request.username,
        )
        await log_approval_activity(
            approver=approver.username,
            username=request.username,
            leave_id=decision.leave_id,
            action=action,
        )

    return outcomes
