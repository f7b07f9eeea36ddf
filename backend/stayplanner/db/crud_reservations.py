# stayplanner/db/crud_reservations.py

import asyncio
import logging
import weakref
from datetime import date
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from stayplanner.core.errors import (
    PropertyNotFoundError,
    ReservationConflictError,
    StayPlannerError,
)
from stayplanner.db.models import Property, Reservation

logger = logging.getLogger("uvicorn.error")

# One lock per property while someone is writing to it; entries vanish
# once no coroutine holds a reference.
_property_locks: "weakref.WeakValueDictionary[int, asyncio.Lock]" = weakref.WeakValueDictionary()


def _lock_for(property_id: int) -> asyncio.Lock:
    lock = _property_locks.get(property_id)
    if lock is None:
        lock = asyncio.Lock()
        _property_locks[property_id] = lock
    return lock


async def find_reservations_by_property(
    db: AsyncSession,
    property_id: int,
) -> List[Reservation]:
    stmt = (
        select(Reservation)
        .where(Reservation.property_id == property_id)
        .order_by(Reservation.from_date.asc(), Reservation.id.asc())
    )
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def get_reservation(db: AsyncSession, reservation_id: int) -> Reservation | None:
    res = await db.execute(select(Reservation).where(Reservation.id == reservation_id))
    return res.scalars().first()


async def find_overlapping(
    db: AsyncSession,
    property_id: int,
    from_date: date,
    to_date: date,
) -> Reservation | None:
    """
    First reservation on the property intersecting [from_date, to_date).
    """
    stmt = (
        select(Reservation)
        .where(Reservation.property_id == property_id)
        .where(Reservation.from_date < to_date)
        .where(Reservation.to_date > from_date)
        .limit(1)
    )
    res = await db.execute(stmt)
    return res.scalars().first()


async def create_reservation(
    db: AsyncSession,
    *,
    property_id: int,
    from_date: date,
    to_date: date,
    guest_name: str | None = None,
    guest_email: str | None = None,
    guests: int = 1,
) -> Reservation:
    """
    Overlap check and insert in a single transaction, serialized per
    property. The property row is locked FOR UPDATE on databases that
    support it; the in-process lock covers SQLite.
    """
    async with _lock_for(property_id):
        try:
            prop_res = await db.execute(
                select(Property).where(Property.id == property_id).with_for_update()
            )
            if prop_res.scalar_one_or_none() is None:
                raise PropertyNotFoundError(property_id)

            clash = await find_overlapping(db, property_id, from_date, to_date)
            if clash is not None:
                logger.info(
                    "reservation %s blocks property %s for %s..%s",
                    clash.id, property_id, from_date, to_date,
                )
                raise ReservationConflictError(property_id, from_date, to_date)

            reservation = Reservation(
                property_id=property_id,
                from_date=from_date,
                to_date=to_date,
                guest_name=guest_name,
                guest_email=guest_email,
                guests=guests,
            )
            db.add(reservation)
            await db.commit()
        except IntegrityError as exc:
            await db.rollback()
            logger.info("write rejected for property %s: %s", property_id, exc.orig)
            raise ReservationConflictError(property_id, from_date, to_date) from exc
        except StayPlannerError:
            await db.rollback()
            raise

    await db.refresh(reservation)
    return reservation


async def delete_reservation(db: AsyncSession, reservation: Reservation):
    await db.delete(reservation)
    await db.commit()
    return True
