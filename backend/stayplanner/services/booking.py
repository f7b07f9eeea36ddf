# stayplanner/services/booking.py
"""
Async entry points used by the routers: read a property's reservations
from the store, then hand an immutable snapshot to the pure helpers.
"""

import logging
from datetime import date
from typing import List, Optional, Set

from sqlalchemy.ext.asyncio import AsyncSession

from stayplanner.core.config import get_settings
from stayplanner.db import crud_properties, crud_reservations
from stayplanner.db.models import Reservation
from stayplanner.schemas.availability import SuggestionResult
from stayplanner.services.availability import (
    BookedRange,
    expand_blocked_days,
    snapshot,
    validate_range,
)
from stayplanner.services.suggestions import build_suggestion_result

logger = logging.getLogger("uvicorn.error")


async def load_booked_ranges(db: AsyncSession, property_id: int) -> List[BookedRange]:
    rows = await crud_reservations.find_reservations_by_property(db, property_id)
    if not rows and await crud_properties.get_property(db, property_id) is None:
        # Unknown property reads as "nothing booked"
        logger.warning("property %s not found, treating as fully available", property_id)
    return snapshot(rows)


async def is_available(db: AsyncSession, property_id: int, from_value, to_value) -> bool:
    """
    Same half-open overlap query the write path runs, so a range reported
    free here is one create_reservation would accept.
    """
    from_date, to_date = validate_range(from_value, to_value)
    clash = await crud_reservations.find_overlapping(db, property_id, from_date, to_date)
    return clash is None


async def blocked_days_for_property(db: AsyncSession, property_id: int) -> Set[date]:
    return expand_blocked_days(await load_booked_ranges(db, property_id))


async def suggest_dates(
    db: AsyncSession,
    property_id: int,
    from_value,
    to_value,
    duration: Optional[int] = None,
    today: Optional[date] = None,
) -> SuggestionResult:
    settings = get_settings()
    requested_from, requested_to = validate_range(from_value, to_value)
    booked = await load_booked_ranges(db, property_id)
    return build_suggestion_result(
        booked,
        requested_from,
        requested_to,
        duration,
        today=today or date.today(),
        horizon=settings.SUGGESTION_HORIZON_DAYS,
        max_suggestions=settings.MAX_SUGGESTIONS,
        max_gaps=settings.MAX_GAPS,
    )


async def book(
    db: AsyncSession,
    *,
    property_id: int,
    from_value,
    to_value,
    guest_name: str | None = None,
    guest_email: str | None = None,
    guests: int = 1,
) -> Reservation:
    """
    Validate and persist a reservation. Raises ReservationConflictError when
    the range is taken, including when a concurrent booking won the race.
    """
    from_date, to_date = validate_range(from_value, to_value)
    reservation = await crud_reservations.create_reservation(
        db,
        property_id=property_id,
        from_date=from_date,
        to_date=to_date,
        guest_name=guest_name,
        guest_email=guest_email,
        guests=guests,
    )
    logger.info(
        "reservation %s created for property %s (%s..%s)",
        reservation.id, property_id, from_date, to_date,
    )
    return reservation


async def cancel(db: AsyncSession, reservation: Reservation) -> None:
    reservation_id = reservation.id
    await crud_reservations.delete_reservation(db, reservation)
    logger.info("reservation %s cancelled", reservation_id)
