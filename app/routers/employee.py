from fastapi import APIRouter, Depends, status
from exceptions import LeaveError, to_http_exception
from schemas.employee import Identity
from schemas.leave import AppliedLeaves, LeaveApplication, LeaveList, TeamLeavesRequest
from utils.app_utils import get_current_identity
from utils.leave_utils import apply_leaves
from utils.visibility_utils import view_own_leaves, view_team_leaves

router = APIRouter()


@router.post("/leaves", status_code=status.HTTP_201_CREATED, response_model=AppliedLeaves)
async def apply_for_leave(
    application: LeaveApplication,
    identity: Identity = Depends(get_current_identity)
):
    """Apply for one or more leave intervals.
    Each requested interval is split around public holidays of the
    employee's country and around weekends. Every remaining piece is stored
    as its own pending leave record, addressed to the employee's approver.
    Args:
        application (LeaveApplication): username plus the requested intervals.
        identity (Identity): The authenticated caller.
    Returns:
        dict: The username and the records that were created. An application
            made only of holidays and weekends creates nothing.
    Raises:
        HTTPException:
            - 400: If an interval ends before it starts
            - 401: If the application is made for someone else
            - 503: If holidays cannot be read or the leaves cannot be stored
    """
    try:
        created = await apply_leaves(identity, application)
    except LeaveError as e:
        raise to_http_exception(e)

    return {"username": identity.username, "created": created}


@router.get("/leaves", response_model=LeaveList)
async def list_my_leaves(identity: Identity = Depends(get_current_identity)):
    """
    List every leave record of the authenticated employee.
    Raises:
        HTTPException: 404 if the employee has never applied for leave
    """
    try:
        leave_data = await view_own_leaves(identity)
    except LeaveError as e:
        raise to_http_exception(e)

    return {"leave_data": leave_data}


@router.post("/team-leaves", response_model=LeaveList)
async def list_team_leaves(
    claimed: TeamLeavesRequest,
    identity: Identity = Depends(get_current_identity)
):
    """
    List the leave records of everyone on the caller's team.
    Args:
        claimed (TeamLeavesRequest): The identity the caller claims to be.
        identity (Identity): The identity behind the bearer token.
    Raises:
        HTTPException:
            - 401: If the claimed identity is not the authenticated one
            - 404: If no team member has any leave
    """
    try:
        leave_data = await view_team_leaves(identity, claimed)
    except LeaveError as e:
        raise to_http_exception(e)

    return {"leave_data": leave_data}
