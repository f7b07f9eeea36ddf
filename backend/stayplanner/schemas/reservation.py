# stayplanner/schemas/reservation.py
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field


class ReservationCreate(BaseModel):
    property_id: int
    # Kept as raw values so date-only and full ISO timestamps both go
    # through the same normalization as the query endpoints.
    from_date: str | date
    to_date: str | date
    guest_name: Optional[str] = None
    guest_email: Optional[str] = None
    guests: int = Field(1, ge=1)


class ReservationOut(BaseModel):
    id: int
    property_id: int
    from_date: date
    to_date: date
    guest_name: Optional[str] = None
    guest_email: Optional[str] = None
    guests: int
    created_at: datetime

    # Pydantic v2 style – replaces orm_mode=True
    model_config = {"from_attributes": True}
