# stayplanner/core/errors.py
from datetime import date


class StayPlannerError(Exception):
    """Base class for booking-core errors."""


class InvalidDateError(StayPlannerError, ValueError):
    """A value could not be read as a calendar date."""


class InvalidDateRangeError(StayPlannerError, ValueError):
    """Start date is not strictly before end date, or duration is not positive."""


class PropertyNotFoundError(StayPlannerError):
    def __init__(self, ref):
        self.ref = ref
        super().__init__(f"Property {ref!r} not found")


class ReservationConflictError(StayPlannerError):
    """
    Raised when a new reservation would overlap an existing one for the
    same property, either at check time or when losing a write race.
    """

    def __init__(self, property_id: int, from_date: date, to_date: date):
        self.property_id = property_id
        self.from_date = from_date
        self.to_date = to_date
        super().__init__(
            f"Property {property_id} is already booked between "
            f"{from_date.isoformat()} and {to_date.isoformat()}"
        )
