# stayplanner/services/availability.py
"""
Availability predicate and blocked-day expansion.

All ranges are half-open [from, to): the checkout day is never blocked, so a
checkout and the next check-in can share a calendar day.
"""

from datetime import date, datetime, timedelta
from typing import Iterable, Iterator, List, NamedTuple, Set, Tuple

from stayplanner.core.errors import InvalidDateError, InvalidDateRangeError


class BookedRange(NamedTuple):
    from_date: date
    to_date: date


def to_calendar_date(value) -> date:
    """
    Accepts a date, a datetime (time-of-day dropped) or an ISO-8601 string
    ("2025-01-05" or "2025-01-05T10:00:00.000Z").
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        raw = value.strip()
        try:
            if len(raw) == 10:
                return date.fromisoformat(raw)
            if raw.endswith("Z"):
                raw = raw[:-1] + "+00:00"
            return datetime.fromisoformat(raw).date()
        except ValueError:
            raise InvalidDateError(f"Invalid date format: {value!r}")
    raise InvalidDateError(f"Invalid date format: {value!r}")


def validate_range(from_value, to_value) -> Tuple[date, date]:
    from_date = to_calendar_date(from_value)
    to_date = to_calendar_date(to_value)
    if from_date >= to_date:
        raise InvalidDateRangeError("Start date must be before end date.")
    return from_date, to_date


def nights_between(start: date, end: date) -> int:
    return (end - start).days


def overlaps(a_from: date, a_to: date, b_from: date, b_to: date) -> bool:
    return a_from < b_to and a_to > b_from


def snapshot(reservations: Iterable) -> List[BookedRange]:
    """
    Freeze reservation rows (anything with from_date/to_date) into plain
    date pairs so the pure helpers below never touch ORM state.
    """
    return [
        BookedRange(to_calendar_date(r.from_date), to_calendar_date(r.to_date))
        for r in reservations
    ]


def is_range_free(reservations: Iterable[BookedRange], from_date: date, to_date: date) -> bool:
    return not any(
        overlaps(from_date, to_date, r.from_date, r.to_date) for r in reservations
    )


def iter_nights(from_date: date, to_date: date) -> Iterator[date]:
    current = from_date
    while current < to_date:
        yield current
        current += timedelta(days=1)


def expand_blocked_days(reservations: Iterable[BookedRange]) -> Set[date]:
    blocked: Set[date] = set()
    for r in reservations:
        blocked.update(iter_nights(r.from_date, r.to_date))
    return blocked
