"""
Unit tests for the development seeder.
"""

from datetime import date
from decimal import Decimal

import pytest

from flight_tracker.services.flex_window_service import FlexWindowService
from flight_tracker.services.flight_query_service import FlightQueryService
from flight_tracker.utils.seed_data import SAMPLE_FLIGHTS, seed_sample_flights


class TestSeedSampleFlights:
    """Tests for seed_sample_flights."""

    @pytest.mark.asyncio
    async def test_creates_flights_and_observations(self, db_session):
        flights_created, observations_created = await seed_sample_flights(db_session)
        await db_session.commit()

        assert flights_created == len(SAMPLE_FLIGHTS)
        assert observations_created == sum(len(readings) for *_, readings in SAMPLE_FLIGHTS)

        flights = await FlightQueryService.search_flights(db_session)
        assert {f.flight_number for f in flights} == {"LX1070", "LX1071", "LX8080"}

    @pytest.mark.asyncio
    async def test_second_run_is_a_no_op(self, db_session):
        await seed_sample_flights(db_session)
        await db_session.commit()

        assert await seed_sample_flights(db_session) == (0, 0)

        flights = await FlightQueryService.search_flights(db_session)
        assert len(flights) == 3

    @pytest.mark.asyncio
    async def test_seeded_data_supports_flex_ranking(self, db_session):
        await seed_sample_flights(db_session)
        await db_session.commit()

        result = await FlexWindowService("Europe/Zurich").rank(
            db_session, "ZRH", "BCN", date(2026, 2, 15), 0
        )

        # LX1071 (140, 135, 138, 142) beats LX1070 on median
        lx1071 = await FlightQueryService.find_unique(
            db_session, "LX1071", date(2026, 2, 15), "ZRH", "BCN"
        )
        assert result.best.flight_id == str(lx1071.id)
        assert result.best.median_price_chf == Decimal(139)
