"""
Flight API endpoints.

Provides flight search, single-flight lookup, raw observations, and the
three per-flight price statistics views (weekday, booking date, days to
departure).
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from flight_tracker.api.dependencies import get_flight_stats_service
from flight_tracker.api.routes.params import parse_date_param, utc_range_params
from flight_tracker.api.schemas.flight import FlightResponse, ObservationResponse
from flight_tracker.api.schemas.stats import (
    BookingDateStatsResponse,
    DaysToDepartureStatsResponse,
    WeekdayStatsResponse,
)
from flight_tracker.config import settings
from flight_tracker.database import get_async_session
from flight_tracker.models.flight import Flight
from flight_tracker.models.observation import Observation
from flight_tracker.services.flight_query_service import FlightQueryService
from flight_tracker.services.flight_stats_service import FlightStatsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/flights", tags=["flights"])


async def _require_flight(db: AsyncSession, flight_id: str) -> Flight:
    flight = await FlightQueryService.get_flight(db, flight_id)
    if flight is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Flight {flight_id} not found"
        )
    return flight


async def _load_observations(
    db: AsyncSession, flight: Flight, from_date: Optional[str], to_date: Optional[str]
) -> List[Observation]:
    from_utc, to_utc = utc_range_params(from_date, to_date)
    if from_utc is None and to_utc is None:
        return await FlightQueryService.get_observations(db, flight.id)
    return await FlightQueryService.get_observations_between(db, flight.id, from_utc, to_utc)


# ============================================================================
# Endpoints
# ============================================================================


@router.get("", response_model=List[FlightResponse])
async def search_flights(
    origin: Optional[str] = Query(None, description="Origin airport IATA code (e.g., ZRH)"),
    destination: Optional[str] = Query(None, description="Destination airport IATA code (e.g., JFK)"),
    date: Optional[str] = Query(None, description="Departure date (YYYY-MM-DD)"),
    flight_number: Optional[str] = Query(None, description="Exact flight number"),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Search flights. All filters are optional and combined with AND.

    Example:
        GET /api/flights?origin=ZRH&destination=BCN&date=2026-02-15
    """
    departure_date = parse_date_param(date, "date")

    return await FlightQueryService.search_flights(
        db,
        origin=origin,
        destination=destination,
        departure_date=departure_date,
        flight_number=flight_number,
    )


@router.get("/{flight_id}", response_model=FlightResponse)
async def get_flight(flight_id: str, db: AsyncSession = Depends(get_async_session)):
    """Get a single flight. Unknown and malformed ids both return 404."""
    return await _require_flight(db, flight_id)


@router.get("/{flight_id}/observations", response_model=List[ObservationResponse])
async def get_observations(
    flight_id: str,
    from_date: Optional[str] = Query(None, description="First UTC day to include (YYYY-MM-DD)"),
    to_date: Optional[str] = Query(None, description="Last UTC day to include (YYYY-MM-DD)"),
    db: AsyncSession = Depends(get_async_session),
):
    """
    List price observations of a flight, oldest first.

    Example:
        GET /api/flights/1/observations?from_date=2026-01-10&to_date=2026-01-15
    """
    flight = await _require_flight(db, flight_id)
    return await _load_observations(db, flight, from_date, to_date)


@router.get("/{flight_id}/stats/weekday", response_model=WeekdayStatsResponse)
async def get_weekday_stats(
    flight_id: str,
    from_date: Optional[str] = Query(None, description="First UTC day to include (YYYY-MM-DD)"),
    to_date: Optional[str] = Query(None, description="Last UTC day to include (YYYY-MM-DD)"),
    db: AsyncSession = Depends(get_async_session),
    stats_service: FlightStatsService = Depends(get_flight_stats_service),
):
    """
    Price statistics per local booking weekday. Always 7 buckets (Mon..Sun).

    Example:
        GET /api/flights/1/stats/weekday
    """
    flight = await _require_flight(db, flight_id)
    observations = await _load_observations(db, flight, from_date, to_date)
    return stats_service.compute_weekday_stats(flight, observations)


@router.get("/{flight_id}/stats/booking-date", response_model=BookingDateStatsResponse)
async def get_booking_date_stats(
    flight_id: str,
    from_date: Optional[str] = Query(None, description="First UTC day to include (YYYY-MM-DD)"),
    to_date: Optional[str] = Query(None, description="Last UTC day to include (YYYY-MM-DD)"),
    db: AsyncSession = Depends(get_async_session),
    stats_service: FlightStatsService = Depends(get_flight_stats_service),
):
    """
    Price statistics per local booking date, only dates with observations.

    Example:
        GET /api/flights/1/stats/booking-date
    """
    flight = await _require_flight(db, flight_id)
    observations = await _load_observations(db, flight, from_date, to_date)
    return stats_service.compute_booking_date_stats(flight, observations)


@router.get(
    "/{flight_id}/stats/days-to-departure", response_model=DaysToDepartureStatsResponse
)
async def get_days_to_departure_stats(
    flight_id: str,
    bucket: int = Query(
        settings.default_bucket_days, description="Bucket width in days (e.g., 1, 3, 7)"
    ),
    from_date: Optional[str] = Query(None, description="First UTC day to include (YYYY-MM-DD)"),
    to_date: Optional[str] = Query(None, description="Last UTC day to include (YYYY-MM-DD)"),
    db: AsyncSession = Depends(get_async_session),
    stats_service: FlightStatsService = Depends(get_flight_stats_service),
):
    """
    Price statistics by days to departure, grouped in [from, to) buckets.

    Observations recorded after the departure date are excluded. A bucket
    width below 1 answers 400.

    Example:
        GET /api/flights/1/stats/days-to-departure?bucket=7
    """
    flight = await _require_flight(db, flight_id)
    observations = await _load_observations(db, flight, from_date, to_date)
    return stats_service.compute_days_to_departure_stats(flight, observations, bucket)
