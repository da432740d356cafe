"""
Flight and observation query service.

This module provides:
- Lookup of a single flight by identity
- Filtered flight search (exact match, calendar-day departure match)
- Observation retrieval, optionally restricted to a UTC instant range
- Find-or-create and bulk-append helpers used by importers and the seeder

Malformed identities never raise: they behave exactly like an unknown id.
"""

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from flight_tracker.models.flight import Flight
from flight_tracker.models.observation import Observation
from flight_tracker.utils.date_utils import ensure_utc, start_of_day, start_of_next_day

logger = logging.getLogger(__name__)


def parse_flight_id(value: object) -> Optional[int]:
    """
    Validate a flight identity.

    Accepts positive integers and strings of decimal digits.

    Returns:
        The integer id, or None when the value is not a well-formed identity

    Examples:
        >>> parse_flight_id("42")
        42
        >>> parse_flight_id("not-an-id") is None
        True
    """
    if isinstance(value, bool):
        return None

    if isinstance(value, int):
        return value if value > 0 else None

    if isinstance(value, str):
        candidate = value.strip()
        if candidate.isascii() and candidate.isdigit():
            parsed = int(candidate)
            return parsed if parsed > 0 else None

    return None


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class FlightQueryService:
    """Read access to flights and their price observations."""

    @staticmethod
    async def get_flight(db: AsyncSession, flight_id: object) -> Optional[Flight]:
        """
        Fetch a single flight.

        Args:
            db: Database session
            flight_id: Flight identity (int or digit string)

        Returns:
            Flight, or None if absent or malformed
        """
        parsed = parse_flight_id(flight_id)
        if parsed is None:
            logger.debug(f"Ignoring malformed flight id {flight_id!r}")
            return None

        return await db.get(Flight, parsed)

    @staticmethod
    async def search_flights(
        db: AsyncSession,
        origin: Optional[str] = None,
        destination: Optional[str] = None,
        departure_date: Optional[date] = None,
        flight_number: Optional[str] = None,
    ) -> List[Flight]:
        """
        Search flights. All filters are optional and combined with AND.

        Args:
            db: Database session
            origin: Origin IATA code (exact match; blank means no constraint)
            destination: Destination IATA code (exact match; blank means no constraint)
            departure_date: Calendar day the flight departs on
            flight_number: Flight number (exact match; blank means no constraint)

        Returns:
            List of flights ordered by departure then id
        """
        conditions = []

        if not _is_blank(origin):
            conditions.append(Flight.origin_iata == origin)
        if not _is_blank(destination):
            conditions.append(Flight.destination_iata == destination)
        if not _is_blank(flight_number):
            conditions.append(Flight.flight_number == flight_number)
        if departure_date is not None:
            if isinstance(departure_date, datetime):
                departure_date = departure_date.date()
            conditions.append(Flight.departure_date >= start_of_day(departure_date))
            # date.max has no following day to bound it
            if departure_date < date.max:
                conditions.append(Flight.departure_date < start_of_next_day(departure_date))

        query = select(Flight)
        if conditions:
            query = query.where(and_(*conditions))
        query = query.order_by(Flight.departure_date, Flight.id)

        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def find_unique(
        db: AsyncSession,
        flight_number: str,
        departure_date: date,
        origin_iata: str,
        destination_iata: str,
    ) -> Optional[Flight]:
        """Find the flight identified by number, departure day and route."""
        flights = await FlightQueryService.search_flights(
            db,
            origin=origin_iata,
            destination=destination_iata,
            departure_date=departure_date,
            flight_number=flight_number,
        )
        return flights[0] if flights else None

    @staticmethod
    async def get_observations(db: AsyncSession, flight_id: object) -> List[Observation]:
        """
        Fetch every observation of a flight, oldest first.

        Returns:
            List of observations; empty for unknown or malformed ids
        """
        return await FlightQueryService.get_observations_between(db, flight_id)

    @staticmethod
    async def get_observations_between(
        db: AsyncSession,
        flight_id: object,
        from_utc: Optional[datetime] = None,
        to_utc: Optional[datetime] = None,
    ) -> List[Observation]:
        """
        Fetch observations of a flight within [from_utc, to_utc).

        The lower bound is inclusive and the upper bound exclusive. To include
        a whole end day, pass midnight of the following day as to_utc.

        Args:
            db: Database session
            flight_id: Flight identity
            from_utc: Inclusive lower bound (naive means UTC)
            to_utc: Exclusive upper bound (naive means UTC)

        Returns:
            Observations ordered by observed_at_utc ascending
        """
        parsed = parse_flight_id(flight_id)
        if parsed is None:
            logger.debug(f"Ignoring malformed flight id {flight_id!r}")
            return []

        query = select(Observation).where(Observation.flight_id == parsed)

        if from_utc is not None:
            query = query.where(Observation.observed_at_utc >= ensure_utc(from_utc))
        if to_utc is not None:
            query = query.where(Observation.observed_at_utc < ensure_utc(to_utc))

        query = query.order_by(Observation.observed_at_utc, Observation.id)

        result = await db.execute(query)
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Write helpers for importers (scraper collaborator, seeder)
    # ------------------------------------------------------------------

    @staticmethod
    async def find_or_create_flight(
        db: AsyncSession,
        flight_number: str,
        departure_date: datetime,
        origin_iata: str,
        destination_iata: str,
    ) -> Tuple[Flight, bool]:
        """
        Return the flight for (number, departure day, route), creating it if needed.

        Returns:
            Tuple of (flight, created)
        """
        existing = await FlightQueryService.find_unique(
            db, flight_number, departure_date.date(), origin_iata, destination_iata
        )
        if existing is not None:
            return existing, False

        flight = Flight(
            flight_number=flight_number,
            departure_date=departure_date,
            origin_iata=origin_iata,
            destination_iata=destination_iata,
        )
        db.add(flight)
        await db.flush()

        logger.info(
            f"Flight created: {flight_number} {origin_iata}-{destination_iata} "
            f"departing {departure_date.date()}"
        )
        return flight, True

    @staticmethod
    async def add_observations(
        db: AsyncSession,
        flight: Flight,
        readings: Iterable[Tuple[datetime, Decimal]],
    ) -> List[Observation]:
        """
        Append price observations to a flight.

        Args:
            db: Database session
            flight: Owning flight (must already be flushed)
            readings: (observed_at, price) pairs; naive timestamps are UTC

        Returns:
            The new observations
        """
        observations = [
            Observation(
                flight_id=flight.id,
                observed_at_utc=ensure_utc(observed_at),
                price_chf=Decimal(price),
            )
            for observed_at, price in readings
        ]
        db.add_all(observations)
        await db.flush()

        logger.debug(f"Stored {len(observations)} observations for flight {flight.id}")
        return observations
