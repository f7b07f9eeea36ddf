# stayplanner/services/suggestions.py
"""
Nearest-alternative search for blocked date requests.

Works on an immutable snapshot of a property's reservations; nothing here
talks to the database.
"""

from datetime import date, timedelta
from typing import Collection, Iterable, Iterator, List, Optional

from stayplanner.core.errors import InvalidDateRangeError
from stayplanner.schemas.availability import Gap, RequestedRange, Suggestion, SuggestionResult
from stayplanner.services.availability import (
    BookedRange,
    expand_blocked_days,
    nights_between,
)

DEFAULT_HORIZON_DAYS = 60
DEFAULT_MAX_SUGGESTIONS = 5
DEFAULT_MAX_GAPS = 3

# "after" sorts ahead of "before" at equal distance
_DIRECTION_RANK = {"after": 0, "before": 1}


def resolve_duration(from_date: date, to_date: date, duration: Optional[int] = None) -> int:
    if duration is None:
        return nights_between(from_date, to_date)
    if duration < 1:
        raise InvalidDateRangeError("Duration must be at least one night.")
    return duration


def range_available(blocked: Collection[date], start: date, nights: int) -> bool:
    return all(start + timedelta(days=i) not in blocked for i in range(nights))


def _candidates(requested_from: date, horizon: int) -> Iterator[tuple]:
    for offset in range(1, horizon + 1):
        yield offset, "after", requested_from + timedelta(days=offset)
        yield offset, "before", requested_from - timedelta(days=offset)


def find_suggestions(
    blocked: Collection[date],
    requested_from: date,
    duration: int,
    *,
    today: date,
    horizon: int = DEFAULT_HORIZON_DAYS,
    limit: int = DEFAULT_MAX_SUGGESTIONS,
) -> List[Suggestion]:
    """
    Scan outward from requested_from one day at a time, trying the later
    start before the earlier one at each distance. Candidates starting in
    the past are skipped. Stops once `limit` suggestions are collected or
    the horizon is exhausted.
    """
    found: List[Suggestion] = []
    if limit <= 0:
        return found

    for offset, direction, start in _candidates(requested_from, horizon):
        if start < today or not range_available(blocked, start, duration):
            continue
        found.append(
            Suggestion(
                start_date=start,
                end_date=start + timedelta(days=duration),
                nights=duration,
                days_from_original=offset,
                direction=direction,
            )
        )
        if len(found) >= limit:
            break

    found.sort(key=lambda s: (s.days_from_original, _DIRECTION_RANK[s.direction]))
    return found[:limit]


def find_gaps(
    reservations: Iterable[BookedRange],
    duration: int,
    *,
    today: date,
    limit: int = DEFAULT_MAX_GAPS,
) -> List[Gap]:
    """
    Open stretches from today to the first reservation and between
    consecutive reservations that fit `duration` nights. The open-ended
    future after the last reservation is not reported.
    """
    ordered = sorted(reservations, key=lambda r: r.from_date)
    if not ordered:
        return []

    bounds = [(today, ordered[0].from_date)]
    bounds.extend(
        (current.to_date, following.from_date)
        for current, following in zip(ordered, ordered[1:])
    )

    gaps: List[Gap] = []
    for start, end in bounds:
        nights = nights_between(start, end)
        if nights >= duration:
            gaps.append(Gap(start=start, end=end, nights=nights))
            if len(gaps) >= limit:
                break
    return gaps


def build_suggestion_result(
    reservations: List[BookedRange],
    requested_from: date,
    requested_to: date,
    duration: Optional[int] = None,
    *,
    today: date,
    horizon: int = DEFAULT_HORIZON_DAYS,
    max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
    max_gaps: int = DEFAULT_MAX_GAPS,
) -> SuggestionResult:
    nights = resolve_duration(requested_from, requested_to, duration)
    blocked = expand_blocked_days(reservations)

    suggestions = find_suggestions(
        blocked,
        requested_from,
        nights,
        today=today,
        horizon=horizon,
        limit=max_suggestions,
    )
    gaps = find_gaps(reservations, nights, today=today, limit=max_gaps)

    if suggestions:
        message = f"Found {len(suggestions)} alternative dates nearby"
    else:
        message = f"No alternative dates found within {horizon} days"

    return SuggestionResult(
        requested_range=RequestedRange(
            start_date=requested_from,
            end_date=requested_to,
            nights=nights,
        ),
        suggestions=suggestions,
        available_gaps=gaps,
        message=message,
    )
