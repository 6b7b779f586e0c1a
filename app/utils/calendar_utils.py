from datetime import date, timedelta
from typing import Callable, Iterable, Iterator, List, Set
from exceptions import InvariantViolation
from schemas.leave import LeaveInterval

ONE_DAY = timedelta(days=1)
SATURDAY, SUNDAY = 5, 6


def is_weekend(day: date) -> bool:
    return day.weekday() in (SATURDAY, SUNDAY)


def iter_days(interval: LeaveInterval) -> Iterator[date]:
    day = interval.start_date
    while day <= interval.end_date:
        yield day
        day += ONE_DAY


def years_spanned(interval: LeaveInterval) -> List[int]:
    return list(range(interval.start_date.year, interval.end_date.year + 1))


def days_matching(interval: LeaveInterval, predicate: Callable[[date], bool]) -> Set[date]:
    """Days of the interval the predicate selects, e.g. weekend days."""
    return {day for day in iter_days(interval) if predicate(day)}


def filter_interval(interval: LeaveInterval, excluded: Iterable[date]) -> List[LeaveInterval]:
    """
    Split an inclusive interval around excluded days.

    Consecutive non-excluded days are grouped into one interval, so a run of
    excluded days leaves a single gap. The result is in chronological order,
    is empty when every day is excluded and is [interval] when none is.
    """
    if interval.start_date > interval.end_date:
        # callers validate first, reaching here is a bug
        raise InvariantViolation(
            f"filter_interval got an inverted interval {interval.start_date}..{interval.end_date}"
        )

    excluded = set(excluded)
    pieces = []
    run_start = None
    previous = None

    for day in iter_days(interval):
        if day in excluded:
            if run_start is not None:
                pieces.append(LeaveInterval(start_date=run_start, end_date=previous))
                run_start = None
        elif run_start is None:
            run_start = day
        previous = day

    if run_start is not None:
        pieces.append(LeaveInterval(start_date=run_start, end_date=interval.end_date))

    return pieces
