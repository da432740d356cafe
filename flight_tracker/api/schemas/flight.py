"""
Pydantic schemas for Flight API endpoints.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from flight_tracker.api.schemas.types import Price
from flight_tracker.utils.date_utils import ensure_utc, format_date


class FlightResponse(BaseModel):
    """Flight information in API responses."""

    id: str
    flight_number: str
    departure_date: str = Field(description="Departure calendar date (YYYY-MM-DD)")
    origin_iata: str
    destination_iata: str

    class Config:
        from_attributes = True

    @field_validator("id", mode="before")
    @classmethod
    def id_to_string(cls, v):
        return str(v)

    @field_validator("departure_date", mode="before")
    @classmethod
    def departure_to_date_string(cls, v):
        if isinstance(v, datetime):
            return format_date(v)
        return v


class ObservationResponse(BaseModel):
    """A single price reading in API responses."""

    id: str
    flight_id: str
    observed_at_utc: datetime
    price_chf: Price = Field(description="Observed price in CHF")

    class Config:
        from_attributes = True

    @field_validator("id", "flight_id", mode="before")
    @classmethod
    def id_to_string(cls, v):
        return str(v)

    @field_validator("observed_at_utc")
    @classmethod
    def observed_at_as_utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)
