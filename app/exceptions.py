from fastapi import HTTPException, status


class LeaveError(Exception):
    """Base class for every error the leave core raises."""


class ValidationError(LeaveError):
    pass


class InvalidRange(ValidationError):
    def __init__(self, start_date, end_date):
        self.start_date = start_date
        self.end_date = end_date
        super().__init__(f"Leave start date {start_date} is after end date {end_date}")


class NotFoundError(LeaveError):
    pass


class UnauthorizedError(LeaveError):
    pass


class DependencyError(LeaveError):
    """Storage, directory or holiday source failed or is unreachable."""


class HolidayLookupFailure(DependencyError):
    def __init__(self, country: str, year: int):
        self.country = country
        self.year = year
        super().__init__(f"Could not load holidays for {country}/{year}")


class InvariantViolation(Exception):
    """Raised on programming defects. Deliberately not a LeaveError."""


def get_user_exception():
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    return credentials_exception


def get_unknown_entity_exception(detail: str = "Entity not found"):
    entity_exception = HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=detail
    )
    return entity_exception


def to_http_exception(error: LeaveError) -> HTTPException:
    if isinstance(error, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(error, UnauthorizedError):
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(error) or "You are not authorized to perform this function",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if isinstance(error, NotFoundError):
        return get_unknown_entity_exception(str(error) or "Entity not found")
    if isinstance(error, DependencyError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="A backing service is unavailable, please retry later"
        )
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error))
