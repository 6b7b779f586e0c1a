from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError as SchemaValidationError
from typing import Optional
from config import settings
from exceptions import LeaveError, to_http_exception
from schemas.employee import Identity
from schemas.holiday import HolidayList, HolidayQuery
from utils.app_utils import get_current_identity
from utils.leave_utils import list_holidays

router = APIRouter()


@router.get("/", response_model=HolidayList)
async def get_holidays(
    year: int = Query(..., ge=1900, le=2200),
    country: Optional[str] = Query(
        None,
        min_length=2,
        max_length=3,
        description="Country code, defaults to the caller's country"
    ),
    identity: Identity = Depends(get_current_identity)
):
    try:
        query = HolidayQuery(
            country=(country or identity.country or settings.DEFAULT_COUNTRY).lower(),
            year=year,
        )
    except SchemaValidationError as e:
        # the caller's directory country can still be malformed
        raise HTTPException(status_code=400, detail=f"Invalid holiday query - {e.errors()[0]['msg']}")

    try:
        holidays = await list_holidays(query.country, query.year)
    except LeaveError as e:
        raise to_http_exception(e)

    return {"country": query.country, "year": query.year, "holidays": holidays}
