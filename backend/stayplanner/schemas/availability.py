# stayplanner/schemas/availability.py
from datetime import date
from typing import List, Literal

from pydantic import BaseModel


class Suggestion(BaseModel):
    start_date: date
    end_date: date
    nights: int
    days_from_original: int
    direction: Literal["before", "after"]


class Gap(BaseModel):
    start: date
    end: date
    nights: int


class RequestedRange(BaseModel):
    start_date: date
    end_date: date
    nights: int


class SuggestionResult(BaseModel):
    requested_range: RequestedRange
    suggestions: List[Suggestion]
    available_gaps: List[Gap]
    message: str


class AvailabilityOut(BaseModel):
    property_id: int
    start_date: date
    end_date: date
    available: bool


class UnavailableDatesOut(BaseModel):
    property_id: int
    unavailable_dates: List[date]
