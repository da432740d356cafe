"""
Pydantic schemas for price statistics endpoints.
"""

import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from flight_tracker.api.schemas.flight import FlightResponse
from flight_tracker.api.schemas.types import OptionalPrice, Price


class StatsAggregate(BaseModel):
    """Count/min/max/avg/median over a bucket. All prices are None when count is 0."""

    min: OptionalPrice = None
    max: OptionalPrice = None
    avg: OptionalPrice = None
    median: OptionalPrice = None
    count: int = 0


class WeekdayStatsBucket(StatsAggregate):
    weekday: int = Field(description="ISO weekday, 1=Mon ... 7=Sun")
    label: str = Field(description="Mon .. Sun")


class BookingDateStatsBucket(StatsAggregate):
    date: datetime.date = Field(description="Local booking date (YYYY-MM-DD)")


class DaysToDepartureStatsBucket(StatsAggregate):
    days_from: int = Field(description="Start of the range, inclusive")
    days_to: int = Field(description="End of the range, exclusive")


class WeekdayStatsResponse(BaseModel):
    flight_id: str
    flight: FlightResponse
    timezone: str
    series: List[WeekdayStatsBucket]


class BookingDateStatsResponse(BaseModel):
    flight_id: str
    flight: FlightResponse
    timezone: str
    series: List[BookingDateStatsBucket]


class DaysToDepartureStatsResponse(BaseModel):
    flight_id: str
    flight: FlightResponse
    timezone: str
    series: List[DaysToDepartureStatsBucket]


class FlexStatsBucket(BaseModel):
    """Cheapest flight for one departure date of the window."""

    departure_date: datetime.date = Field(description="Departure date (YYYY-MM-DD)")
    median_price_chf: Price
    flight_id: str


class FlexStatsResponse(BaseModel):
    """Flexible-date ranking around a target date."""

    origin: str
    destination: str
    target_date: datetime.date
    flex_days: int
    timezone: str
    series: List[FlexStatsBucket]
    best: Optional[FlexStatsBucket] = None
