"""
Seed data for development databases.
Populates a few Zurich departures with price observations.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from flight_tracker.services.flight_query_service import FlightQueryService
from flight_tracker.utils.logging_config import get_logger

logger = get_logger(__name__, {"component": "seeder"})

Reading = Tuple[datetime, Decimal]

# (flight number, departure, origin, destination, readings in UTC)
SAMPLE_FLIGHTS: List[Tuple[str, datetime, str, str, List[Reading]]] = [
    (
        "LX1070",
        datetime(2026, 2, 15),
        "ZRH",
        "BCN",
        [
            (datetime(2026, 1, 10, 9, 0), Decimal("150")),
            (datetime(2026, 1, 10, 14, 0), Decimal("155")),
            (datetime(2026, 1, 11, 10, 0), Decimal("145")),
            (datetime(2026, 1, 12, 11, 0), Decimal("160")),
            (datetime(2026, 1, 13, 9, 0), Decimal("148")),
            (datetime(2026, 1, 15, 10, 0), Decimal("152")),
            (datetime(2026, 1, 20, 14, 0), Decimal("170")),
            (datetime(2026, 1, 25, 9, 0), Decimal("180")),
            (datetime(2026, 2, 1, 10, 0), Decimal("200")),
            (datetime(2026, 2, 5, 11, 0), Decimal("220")),
            (datetime(2026, 2, 10, 9, 0), Decimal("250")),
        ],
    ),
    (
        "LX8080",
        datetime(2026, 2, 20),
        "ZRH",
        "JFK",
        [
            (datetime(2026, 1, 15, 10, 0), Decimal("450")),
            (datetime(2026, 1, 20, 11, 0), Decimal("480")),
            (datetime(2026, 1, 25, 9, 0), Decimal("500")),
            (datetime(2026, 2, 1, 14, 0), Decimal("520")),
            (datetime(2026, 2, 10, 10, 0), Decimal("580")),
        ],
    ),
    (
        "LX1071",
        datetime(2026, 2, 15),
        "ZRH",
        "BCN",
        [
            (datetime(2026, 1, 10, 10, 0), Decimal("140")),
            (datetime(2026, 1, 12, 9, 0), Decimal("135")),
            (datetime(2026, 1, 15, 14, 0), Decimal("138")),
            (datetime(2026, 1, 20, 11, 0), Decimal("142")),
        ],
    ),
]


async def seed_sample_flights(db: AsyncSession) -> Tuple[int, int]:
    """
    Insert the sample flights and their observations.

    Flights go through find-or-create, so running the seeder twice does not
    duplicate flights. Observations are only added to newly created flights.

    Args:
        db: Async database session (committed by the caller)

    Returns:
        Tuple of (flights created, observations created)
    """
    flights_created = 0
    observations_created = 0

    for flight_number, departure, origin, destination, readings in SAMPLE_FLIGHTS:
        flight, created = await FlightQueryService.find_or_create_flight(
            db, flight_number, departure, origin, destination
        )
        if not created:
            logger.info(f"Flight {flight_number} on {departure.date()} already exists, skipping")
            continue

        observations = await FlightQueryService.add_observations(db, flight, readings)
        flights_created += 1
        observations_created += len(observations)

    logger.info(
        f"Seeding finished: {flights_created} flights, {observations_created} observations"
    )
    return flights_created, observations_created
