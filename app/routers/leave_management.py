from fastapi import APIRouter, Depends
from typing import List
from exceptions import LeaveError, to_http_exception
from schemas.employee import Identity
from schemas.leave import ApprovalOutcome, ApprovalRequest, LeaveList, ViewApplications
from utils.app_utils import get_current_identity
from utils.approval_utils import apply_decisions
from utils.visibility_utils import view_leave_applications

router = APIRouter()


@router.post("/applications", response_model=LeaveList)
async def list_leave_applications(
    view: ViewApplications,
    identity: Identity = Depends(get_current_identity)
):
    """
    List the leave records the caller is the approver of.
    Args:
        view (ViewApplications): approver_name must be the caller; state
            narrows the result to pending, approved or rejected records and
            may be omitted to get all of them.
        identity (Identity): The authenticated caller.
    Returns:
        dict: leave_data, one entry per employee with at least one matching record.
    Raises:
        HTTPException:
            - 401: If approver_name is not the caller
            - 404: If nothing matches
    """
    try:
        leave_data = await view_leave_applications(identity, view.approver_name, view.state)
    except LeaveError as e:
        raise to_http_exception(e)

    return {"leave_data": leave_data}


@router.post("/approve", response_model=List[ApprovalOutcome])
async def decide_leaves(
    request: ApprovalRequest,
    identity: Identity = Depends(get_current_identity)
):
    """
    Approve or reject leave records of one employee.
    Every (leave_id, approved) pair is handled on its own and gets its own
    outcome: updated, not_found, forbidden (the caller is not that record's
    approver), already_decided or failed (storage error on that pair; the
    other pairs are still attempted). Only updated records notify the employee.
    Example:
        >>> await decide_leaves(ApprovalRequest(username="jdoe", decisions=[
        ...     {"leave_id": "a1", "approved": True},
        ...     {"leave_id": "b2", "approved": False}]), identity)
        [{"leave_id": "a1", "status": "updated", ...}, {"leave_id": "b2", "status": "not_found", ...}]
    """
    try:
        return await apply_decisions(identity, request)
    except LeaveError as e:
        raise to_http_exception(e)
