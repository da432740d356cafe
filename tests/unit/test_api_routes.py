"""
Unit tests for the HTTP API.

Requests go through httpx over ASGI against an in-memory database session.
"""

from datetime import datetime

import httpx
import pytest

from flight_tracker.api.main import app
from flight_tracker.config import Settings, get_settings
from flight_tracker.database import get_async_session


@pytest.fixture
async def client(db_session):
    """HTTP client whose requests share the test database session."""

    async def override_session():
        yield db_session

    app.dependency_overrides[get_async_session] = override_session
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def seeded(make_flight):
    lx1070 = await make_flight(
        "LX1070",
        datetime(2026, 2, 15, 7, 30),
        "ZRH",
        "BCN",
        [
            (datetime(2026, 1, 12, 9, 0), "150.00"),  # Mon, 34 days
            (datetime(2026, 1, 12, 14, 0), "155.50"),  # Mon, 34 days
            (datetime(2026, 1, 14, 10, 0), "145.00"),  # Wed, 32 days
            (datetime(2026, 2, 10, 9, 0), "250.00"),  # Tue, 5 days
            (datetime(2026, 2, 16, 9, 0), "90.00"),  # after departure
        ],
    )
    lx1071 = await make_flight(
        "LX1071",
        datetime(2026, 2, 16, 9, 0),
        "ZRH",
        "BCN",
        [(datetime(2026, 1, 10, 10, 0), "120.00")],
    )
    return {"lx1070": lx1070, "lx1071": lx1071}


class TestFlightEndpoints:
    """Tests for /api/flights."""

    @pytest.mark.asyncio
    async def test_search_all(self, client, seeded):
        response = await client.get("/api/flights")
        assert response.status_code == 200
        data = response.json()
        assert [f["flight_number"] for f in data] == ["LX1070", "LX1071"]
        assert data[0]["id"] == str(seeded["lx1070"].id)
        assert data[0]["departure_date"] == "2026-02-15"

    @pytest.mark.asyncio
    async def test_search_by_date(self, client, seeded):
        response = await client.get("/api/flights", params={"date": "2026-02-16"})
        assert response.status_code == 200
        assert [f["flight_number"] for f in response.json()] == ["LX1071"]

    @pytest.mark.asyncio
    async def test_search_bad_date(self, client, seeded):
        response = await client.get("/api/flights", params={"date": "16.02.2026"})
        assert response.status_code == 400
        assert "YYYY-MM-DD" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_get_flight(self, client, seeded):
        flight_id = seeded["lx1070"].id
        response = await client.get(f"/api/flights/{flight_id}")
        assert response.status_code == 200
        assert response.json()["origin_iata"] == "ZRH"

    @pytest.mark.parametrize("flight_id", ["9999", "not-an-id", "-1"])
    @pytest.mark.asyncio
    async def test_unknown_or_malformed_id_is_404(self, client, seeded, flight_id):
        response = await client.get(f"/api/flights/{flight_id}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_observations(self, client, seeded):
        flight_id = seeded["lx1070"].id
        response = await client.get(f"/api/flights/{flight_id}/observations")
        assert response.status_code == 200
        data = response.json()
        assert len(data) == 5
        assert data[0]["price_chf"] == 150.0
        assert isinstance(data[1]["price_chf"], float)

    @pytest.mark.asyncio
    async def test_observations_date_range_includes_to_day(self, client, seeded):
        flight_id = seeded["lx1070"].id
        response = await client.get(
            f"/api/flights/{flight_id}/observations",
            params={"from_date": "2026-01-12", "to_date": "2026-01-14"},
        )
        assert response.status_code == 200
        assert len(response.json()) == 3

    @pytest.mark.asyncio
    async def test_observations_reversed_range(self, client, seeded):
        flight_id = seeded["lx1070"].id
        response = await client.get(
            f"/api/flights/{flight_id}/observations",
            params={"from_date": "2026-01-14", "to_date": "2026-01-12"},
        )
        assert response.status_code == 400


class TestStatsEndpoints:
    """Tests for the per-flight statistics views."""

    @pytest.mark.asyncio
    async def test_weekday_stats(self, client, seeded):
        flight_id = seeded["lx1070"].id
        response = await client.get(f"/api/flights/{flight_id}/stats/weekday")
        assert response.status_code == 200
        data = response.json()

        assert data["flight_id"] == str(flight_id)
        assert data["timezone"] == "Europe/Zurich"
        assert data["flight"]["flight_number"] == "LX1070"
        assert len(data["series"]) == 7

        monday = data["series"][0]
        assert monday["label"] == "Mon"
        assert monday["count"] == 3  # 2026-02-16 is also a Monday
        assert monday["min"] == 90.0
        assert monday["max"] == 155.5

        sunday = data["series"][6]
        assert sunday["count"] == 0
        assert sunday["median"] is None

    @pytest.mark.asyncio
    async def test_booking_date_stats(self, client, seeded):
        flight_id = seeded["lx1070"].id
        response = await client.get(
            f"/api/flights/{flight_id}/stats/booking-date",
            params={"to_date": "2026-01-31"},
        )
        assert response.status_code == 200
        series = response.json()["series"]
        assert [b["date"] for b in series] == ["2026-01-12", "2026-01-14"]
        assert series[0]["median"] == 152.75

    @pytest.mark.asyncio
    async def test_days_to_departure_default_bucket(self, client, seeded):
        flight_id = seeded["lx1070"].id
        response = await client.get(f"/api/flights/{flight_id}/stats/days-to-departure")
        assert response.status_code == 200
        series = response.json()["series"]
        assert [(b["days_from"], b["days_to"]) for b in series] == [(5, 6), (32, 33), (34, 35)]

    @pytest.mark.asyncio
    async def test_days_to_departure_weekly_bucket(self, client, seeded):
        flight_id = seeded["lx1070"].id
        response = await client.get(
            f"/api/flights/{flight_id}/stats/days-to-departure", params={"bucket": 7}
        )
        assert response.status_code == 200
        series = response.json()["series"]
        assert [(b["days_from"], b["days_to"], b["count"]) for b in series] == [
            (0, 7, 1),
            (28, 35, 3),
        ]

    @pytest.mark.parametrize("bucket", [0, -7])
    @pytest.mark.asyncio
    async def test_days_to_departure_rejects_non_positive_bucket(self, client, seeded, bucket):
        flight_id = seeded["lx1070"].id
        response = await client.get(
            f"/api/flights/{flight_id}/stats/days-to-departure", params={"bucket": bucket}
        )
        assert response.status_code == 400
        assert "bucket" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_stats_unknown_flight(self, client, seeded):
        response = await client.get("/api/flights/abc/stats/weekday")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_unsupported_timezone_is_501(self, client, seeded):
        app.dependency_overrides[get_settings] = lambda: Settings(timezone="UTC")
        flight_id = seeded["lx1070"].id
        response = await client.get(f"/api/flights/{flight_id}/stats/weekday")
        assert response.status_code == 501
        assert "UTC" in response.json()["detail"]


class TestFlexEndpoint:
    """Tests for /api/routes/{origin}/{destination}/stats/flex."""

    @pytest.mark.asyncio
    async def test_flex_window(self, client, seeded):
        response = await client.get(
            "/api/routes/ZRH/BCN/stats/flex",
            params={"target_date": "2026-02-15", "flex_days": 1},
        )
        assert response.status_code == 200
        data = response.json()

        assert data["target_date"] == "2026-02-15"
        assert data["flex_days"] == 1
        assert [e["departure_date"] for e in data["series"]] == ["2026-02-15", "2026-02-16"]
        assert data["best"]["departure_date"] == "2026-02-16"
        assert data["best"]["flight_id"] == str(seeded["lx1071"].id)
        assert data["best"]["median_price_chf"] == 120.0

    @pytest.mark.asyncio
    async def test_flex_empty_window(self, client, seeded):
        response = await client.get(
            "/api/routes/ZRH/JFK/stats/flex", params={"target_date": "2026-02-15"}
        )
        assert response.status_code == 200
        assert response.json()["series"] == []
        assert response.json()["best"] is None

    @pytest.mark.asyncio
    async def test_flex_negative_days(self, client, seeded):
        response = await client.get(
            "/api/routes/ZRH/BCN/stats/flex",
            params={"target_date": "2026-02-15", "flex_days": -1},
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_flex_too_many_days(self, client, seeded):
        response = await client.get(
            "/api/routes/ZRH/BCN/stats/flex",
            params={"target_date": "2026-02-15", "flex_days": 365},
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_flex_requires_target_date(self, client, seeded):
        response = await client.get("/api/routes/ZRH/BCN/stats/flex")
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_flex_bad_target_date(self, client, seeded):
        response = await client.get(
            "/api/routes/ZRH/BCN/stats/flex", params={"target_date": "2026-02-31"}
        )
        assert response.status_code == 400

    @pytest.mark.parametrize(
        "target_date,flex_days", [("0001-01-01", 1), ("9999-12-31", 3)]
    )
    @pytest.mark.asyncio
    async def test_flex_window_past_calendar_edge(self, client, seeded, target_date, flex_days):
        response = await client.get(
            "/api/routes/ZRH/BCN/stats/flex",
            params={"target_date": target_date, "flex_days": flex_days},
        )
        assert response.status_code == 400
        assert "supported date range" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_flex_on_last_representable_day(self, client, seeded):
        response = await client.get(
            "/api/routes/ZRH/BCN/stats/flex", params={"target_date": "9999-12-31"}
        )
        assert response.status_code == 200
        assert response.json()["series"] == []

    @pytest.mark.asyncio
    async def test_observations_to_last_representable_day(self, client, seeded):
        flight_id = seeded["lx1070"].id
        response = await client.get(
            f"/api/flights/{flight_id}/observations", params={"to_date": "9999-12-31"}
        )
        assert response.status_code == 200
        assert len(response.json()) == 5


class TestHealth:
    """Tests for /health."""

    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["dependencies"]["database"] == "healthy"
