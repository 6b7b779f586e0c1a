import logging
from typing import List, Optional
from pymongo.errors import PyMongoError
from db import employees_collection, leaves_collection
from exceptions import DependencyError, NotFoundError, UnauthorizedError
from models.leaves import UserLeaves
from schemas.employee import Identity
from schemas.leave import ApprovalState, TeamLeavesRequest

logger = logging.getLogger(__name__)


def _to_user_leaves(documents: List[dict], scope: str) -> List[UserLeaves]:
    if not documents:
        raise NotFoundError(f"No leaves found for {scope}")
    return [UserLeaves(**document) for document in documents]


async def view_own_leaves(identity: Identity) -> List[UserLeaves]:
    try:
        documents = await leaves_collection.find({"username": identity.username}).to_list(length=None)
    except PyMongoError as e:
        logger.error("Leave lookup for %s failed: %s", identity.username, e)
        raise DependencyError("Could not read leaves") from e

    return _to_user_leaves(documents, identity.username)


async def team_usernames(team: str) -> List[str]:
    members = await employees_collection.find({"team": team}, {"username": 1}).to_list(length=None)
    return [member["username"] for member in members]


async def view_team_leaves(identity: Identity, claimed: TeamLeavesRequest) -> List[UserLeaves]:
    """
    Leaves of everyone on the caller's team.

    The claimed identity has to be the authenticated one, a differing team
    claim is refused too.
    """
    if claimed.username != identity.username:
        raise UnauthorizedError("You can only view the leaves of your own team")

    if claimed.team is not None and claimed.team != identity.team:
        raise UnauthorizedError("You can only view the leaves of your own team")

    if not identity.team:
        raise NotFoundError(f"{identity.username} does not belong to a team")

    try:
        usernames = await team_usernames(identity.team)
        documents = await leaves_collection.find({"username": {"$in": usernames}}).to_list(length=None)
    except PyMongoError as e:
        logger.error("Team leave lookup for %s failed: %s", identity.team, e)
        raise DependencyError("Could not read team leaves") from e

    return _to_user_leaves(documents, f"team {identity.team}")


def build_applications_pipeline(approver: str, state: Optional[ApprovalState] = None) -> List[dict]:
    """
    Aggregation restricting every user's leaves to the records `approver`
    decides, optionally narrowed to one approval state. Users left with no
    record are dropped.
    """
    conditions = [{"$eq": ["$$leave.approver", approver]}]
    if state is not None:
        conditions.append({"$eq": [{"$ifNull": ["$$leave.approved", None]}, state.stored_value]})

    return [
        {"$match": {"leaves.approver": approver}},
        {"$addFields": {
            "leaves": {
                "$filter": {
                    "input": "$leaves",
                    "as": "leave",
                    "cond": {"$and": conditions},
                }
            }
        }},
        {"$match": {"leaves": {"$ne": []}}},
    ]


async def view_leave_applications(
    identity: Identity,
    approver_name: str,
    state: Optional[ApprovalState] = None,
) -> List[UserLeaves]:
    if approver_name != identity.username:
        raise UnauthorizedError("You can only view the applications you approve")

    pipeline = build_applications_pipeline(approver_name, state)
    try:
        documents = await leaves_collection.aggregate(pipeline).to_list(length=None)
    except PyMongoError as e:
        logger.error("Application lookup for approver %s failed: %s", approver_name, e)
        raise DependencyError("Could not read leave applications") from e

    return _to_user_leaves(documents, f"approver {approver_name}")
