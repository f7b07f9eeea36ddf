# stayplanner/api/routers/reservations.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from stayplanner.core.errors import (
    InvalidDateError,
    InvalidDateRangeError,
    PropertyNotFoundError,
    ReservationConflictError,
)
from stayplanner.db import crud_properties, crud_reservations
from stayplanner.db.session import get_db
from stayplanner.schemas.availability import AvailabilityOut, UnavailableDatesOut
from stayplanner.schemas.reservation import ReservationCreate, ReservationOut
from stayplanner.services import booking
from stayplanner.services.availability import validate_range


router = APIRouter()


async def resolve_property_id(
    db: AsyncSession,
    property_id: Optional[int],
    slug: Optional[str],
) -> int:
    """
    Calendar widgets address a property by id or by slug. An id is taken
    as-is; a slug must match an existing property.
    """
    if property_id is not None:
        return property_id
    if not slug:
        raise HTTPException(status_code=400, detail="Property slug or ID is required")
    prop = await crud_properties.get_property_by_slug(db, slug)
    if not prop:
        raise HTTPException(status_code=404, detail="Property not found")
    return prop.id


@router.get("")
async def list_reservations(
    property_id: int,
    db: AsyncSession = Depends(get_db),
):
    items = await crud_reservations.find_reservations_by_property(db, property_id)
    return {"items": [ReservationOut.model_validate(r) for r in items]}


@router.get("/availability")
async def check_availability(
    start_date: str,
    end_date: str,
    property_id: Optional[int] = None,
    slug: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    pid = await resolve_property_id(db, property_id, slug)
    try:
        from_date, to_date = validate_range(start_date, end_date)
    except (InvalidDateError, InvalidDateRangeError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    available = await booking.is_available(db, pid, from_date, to_date)
    data = AvailabilityOut(
        property_id=pid,
        start_date=from_date,
        end_date=to_date,
        available=available,
    )
    return {"success": True, "data": data}


@router.get("/unavailable-dates")
async def unavailable_dates(
    property_id: Optional[int] = None,
    slug: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    pid = await resolve_property_id(db, property_id, slug)
    blocked = await booking.blocked_days_for_property(db, pid)
    data = UnavailableDatesOut(property_id=pid, unavailable_dates=sorted(blocked))
    return {"success": True, "data": data}


@router.get("/suggest-dates")
async def suggest_dates(
    start_date: str,
    end_date: str,
    property_id: Optional[int] = None,
    slug: Optional[str] = None,
    duration: Optional[int] = Query(None, ge=1),
    db: AsyncSession = Depends(get_db),
):
    pid = await resolve_property_id(db, property_id, slug)
    try:
        result = await booking.suggest_dates(db, pid, start_date, end_date, duration)
    except (InvalidDateError, InvalidDateRangeError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"success": True, "data": result}


@router.post("", status_code=201)
async def create_reservation(
    body: ReservationCreate,
    db: AsyncSession = Depends(get_db),
):
    try:
        reservation = await booking.book(
            db,
            property_id=body.property_id,
            from_value=body.from_date,
            to_value=body.to_date,
            guest_name=body.guest_name,
            guest_email=body.guest_email,
            guests=body.guests,
        )
    except (InvalidDateError, InvalidDateRangeError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PropertyNotFoundError:
        raise HTTPException(status_code=404, detail="Property not found")
    except ReservationConflictError as e:
        # Same path for "not available" and "lost the write race":
        # hand back alternatives with the rejection.
        alternatives = await booking.suggest_dates(db, e.property_id, e.from_date, e.to_date)
        raise HTTPException(
            status_code=409,
            detail={
                "message": "The selected dates overlap with an existing booking.",
                "alternatives": alternatives.model_dump(mode="json"),
            },
        )

    return {"success": True, "data": ReservationOut.model_validate(reservation)}


@router.delete("/{reservation_id}")
async def cancel_reservation(
    reservation_id: int,
    db: AsyncSession = Depends(get_db),
):
    reservation = await crud_reservations.get_reservation(db, reservation_id)
    if not reservation:
        raise HTTPException(status_code=404, detail="Not found")

    await booking.cancel(db, reservation)
    return {"message": "cancelled"}
