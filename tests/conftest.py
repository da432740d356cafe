"""
Pytest configuration and shared fixtures for Flight Price Tracker tests.
"""

import os
from datetime import datetime
from decimal import Decimal
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Load test environment variables before any flight_tracker imports
env_file = Path(__file__).parent.parent / ".env.test"
if env_file.exists():
    load_dotenv(env_file, override=True)
else:
    # Fallback: minimal environment for testing
    os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    os.environ.setdefault("TIMEZONE", "Europe/Zurich")
    os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "False")
    os.environ.setdefault("DEBUG", "False")

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402

from flight_tracker.models.base import Base  # noqa: E402
from flight_tracker.services.flight_query_service import FlightQueryService  # noqa: E402


@pytest.fixture
async def db_session():
    """Create an in-memory database session for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_maker = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session_maker() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def make_flight(db_session):
    """
    Factory creating a flight with observations.

    Usage:
        flight = await make_flight("LX1070", datetime(2026, 2, 15), "ZRH", "BCN",
                                   [(datetime(2026, 1, 10, 9), "150")])
    """

    async def _make(flight_number, departure, origin="ZRH", destination="BCN", readings=()):
        flight, _ = await FlightQueryService.find_or_create_flight(
            db_session, flight_number, departure, origin, destination
        )
        await FlightQueryService.add_observations(
            db_session,
            flight,
            [(observed_at, Decimal(str(price))) for observed_at, price in readings],
        )
        await db_session.commit()
        return flight

    return _make


@pytest.fixture
def temp_logs_dir(tmp_path):
    """Create a temporary logs directory for testing."""
    logs_dir = tmp_path / "logs"
    logs_dir.mkdir(exist_ok=True)
    return logs_dir


@pytest.fixture
def departure():
    """Default departure used across service tests."""
    return datetime(2026, 2, 15)
