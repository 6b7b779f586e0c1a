import logging
from datetime import date
from typing import Awaitable, Callable, Dict, List, Set
from pymongo.errors import PyMongoError
from config import settings
from db import leaves_collection, holidays_collection
from exceptions import (DependencyError, HolidayLookupFailure, InvalidRange,
                        UnauthorizedError, ValidationError)
from models.holidays import PublicHoliday
from models.leaves import LeaveRecord
from schemas.employee import Identity
from schemas.leave import LeaveApplication, LeaveInterval
from schemas.notification import NotificationType
from utils.calendar_utils import days_matching, filter_interval, is_weekend, years_spanned
from utils.notification_utils import create_leave_notification

logger = logging.getLogger(__name__)

HolidaySource = Callable[[str, int], Awaitable[List[date]]]


async def list_holidays(country: str, year: int) -> List[PublicHoliday]:
    """
    Reads the public holidays of one country for one calendar year.
    Raises HolidayLookupFailure when the collection cannot be read or holds
    malformed rows.
    """
    query = {"country.id": country.lower(), "date.datetime.year": year}
    try:
        documents = await holidays_collection.find(query).to_list(length=None)
    except PyMongoError as e:
        logger.error("Holiday lookup for %s/%s failed: %s", country, year, e)
        raise HolidayLookupFailure(country, year) from e

    try:
        holidays = [PublicHoliday.from_document(document) for document in documents]
    except (KeyError, TypeError, ValueError) as e:
        logger.error("Malformed holiday data for %s/%s: %s", country, year, e)
        raise HolidayLookupFailure(country, year) from e

    holidays.sort(key=lambda holiday: holiday.date)
    return holidays


async def fetch_holiday_dates(country: str, year: int) -> List[date]:
    return [holiday.date for holiday in await list_holidays(country, year)]


def validate_intervals(intervals: List[LeaveInterval]):
    for interval in intervals:
        if interval.start_date > interval.end_date:
            raise InvalidRange(interval.start_date, interval.end_date)


async def decompose(
    application: LeaveApplication,
    holidays_of: HolidaySource,
    approver: str,
    country: str,
    weekend: Callable[[date], bool] = is_weekend,
) -> List[LeaveRecord]:
    """
    Turns the requested intervals into pending leave records with no holiday
    and no weekend day inside them.

    Holidays come from a single country for the whole application, looked up
    for every year an interval touches. Any lookup failure aborts the whole
    application so nothing half-decomposed can be stored.
    """
    validate_intervals(application.leaves)

    holiday_cache: Dict[int, Set[date]] = {}
    records = []

    for interval in application.leaves:
        holidays = set()
        for year in years_spanned(interval):
            if year not in holiday_cache:
                try:
                    holiday_cache[year] = set(await holidays_of(country, year))
                except HolidayLookupFailure:
                    raise
                except DependencyError as e:
                    raise HolidayLookupFailure(country, year) from e
            holidays |= holiday_cache[year]

        for holiday_free in filter_interval(interval, holidays):
            for piece in filter_interval(holiday_free, days_matching(holiday_free, weekend)):
                records.append(LeaveRecord(
                    start_date=piece.start_date,
                    end_date=piece.end_date,
                    approver=approver,
                ))

    return records


async def apply_leaves(identity: Identity, application: LeaveApplication) -> List[LeaveRecord]:
    """
    Decomposes an application and appends the resulting records to the
    applicant's leave document in a single write.
    """
    if application.username != identity.username:
        raise UnauthorizedError("You can only apply for leave for yourself")

    if not identity.approver_name:
        raise ValidationError(f"No leave approver is configured for {identity.username}")

    country = identity.country or settings.DEFAULT_COUNTRY
    records = await decompose(
        application,
        holidays_of=fetch_holiday_dates,
        approver=identity.approver_name,
        country=country,
    )

    if not records:
        logger.info("Leave application by %s covers only holidays and weekends", identity.username)
        return []

    try:
        await leaves_collection.update_one(
            {"username": identity.username},
            {
                "$push": {"leaves": {"$each": [record.to_document() for record in records]}},
                "$set": {"approver": identity.approver_name},
            },
            upsert=True,
        )
    except PyMongoError as e:
        logger.error("Could not persist leaves of %s: %s", identity.username, e)
        raise DependencyError("Could not persist the leave application") from e

    logger.info("Stored %d leave record(s) for %s", len(records), identity.username)

    await create_leave_notification(
        leave_request={"_id": records[0].id, "employee_name": identity.username},
        notification_type=NotificationType.LEAVE_REQUEST,
        recipient_id=identity.approver_name,
    )

    return records
