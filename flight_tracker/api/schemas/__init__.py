"""
Pydantic schemas for API request/response models.
"""

from flight_tracker.api.schemas.flight import FlightResponse, ObservationResponse
from flight_tracker.api.schemas.stats import (
    BookingDateStatsResponse,
    DaysToDepartureStatsResponse,
    FlexStatsResponse,
    WeekdayStatsResponse,
)

__all__ = [
    "FlightResponse",
    "ObservationResponse",
    "WeekdayStatsResponse",
    "BookingDateStatsResponse",
    "DaysToDepartureStatsResponse",
    "FlexStatsResponse",
]
