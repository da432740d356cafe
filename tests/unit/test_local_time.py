"""
Unit tests for local-time mapping.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from flight_tracker.exceptions import ConfigurationException, UnsupportedTimezoneError
from flight_tracker.services.local_time import (
    SUPPORTED_TIMEZONE,
    LocalTimeMapper,
    resolve_timezone,
    weekday_label,
)


@pytest.fixture
def mapper():
    return LocalTimeMapper.for_timezone("Europe/Zurich")


class TestResolveTimezone:
    """Tests for zone resolution."""

    def test_supported_zone(self):
        zone = resolve_timezone(SUPPORTED_TIMEZONE)
        assert str(zone) == "Europe/Zurich"

    @pytest.mark.parametrize("name", ["UTC", "Europe/Berlin", "America/New_York", ""])
    def test_unsupported_zone_raises(self, name):
        with pytest.raises(UnsupportedTimezoneError) as exc_info:
            resolve_timezone(name)
        assert exc_info.value.timezone_name == name
        assert "Europe/Zurich" in str(exc_info.value)

    def test_unsupported_zone_is_configuration_error(self):
        with pytest.raises(ConfigurationException):
            LocalTimeMapper.for_timezone("Asia/Tokyo")
        with pytest.raises(NotImplementedError):
            LocalTimeMapper.for_timezone("Asia/Tokyo")


class TestToLocal:
    """Tests for UTC to local conversion."""

    def test_winter_offset_plus_one(self, mapper):
        local = mapper.to_local(datetime(2026, 1, 15, 10, 0))
        assert local.hour == 11
        assert local.utcoffset() == timedelta(hours=1)

    def test_summer_offset_plus_two(self, mapper):
        local = mapper.to_local(datetime(2026, 7, 15, 10, 0))
        assert local.hour == 12
        assert local.utcoffset() == timedelta(hours=2)

    def test_aware_input(self, mapper):
        local = mapper.to_local(datetime(2026, 1, 15, 10, 0, tzinfo=timezone.utc))
        assert local.hour == 11

    def test_booking_date_crosses_midnight(self, mapper):
        assert mapper.booking_date(datetime(2026, 1, 15, 23, 30)) == date(2026, 1, 16)

    def test_booking_date_same_day(self, mapper):
        assert mapper.booking_date(datetime(2026, 1, 15, 22, 59)) == date(2026, 1, 15)

    def test_injected_zone(self):
        utc_mapper = LocalTimeMapper(timezone.utc, "UTC")
        assert utc_mapper.to_local(datetime(2026, 1, 15, 23, 30)).day == 15
        assert utc_mapper.name == "UTC"


class TestWeekday:
    """Tests for ISO weekday numbering."""

    def test_week_maps_monday_to_sunday(self, mapper):
        # 2026-01-12 is a Monday
        for offset in range(7):
            instant = datetime(2026, 1, 12, 10, 0) + timedelta(days=offset)
            assert mapper.weekday(instant) == offset + 1

    def test_weekday_uses_local_date(self, mapper):
        # Sunday 23:30 UTC is already Monday in Zurich
        assert mapper.weekday(datetime(2026, 1, 18, 23, 30)) == 1

    def test_labels(self):
        assert [weekday_label(n) for n in range(1, 8)] == [
            "Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"
        ]

    @pytest.mark.parametrize("number", [0, 8, -1])
    def test_out_of_range_label_is_empty(self, number):
        assert weekday_label(number) == ""


class TestDaysToDeparture:
    """Tests for days-to-departure computation."""

    def test_days_before_departure(self, mapper):
        assert mapper.days_to_departure(datetime(2026, 2, 5, 10, 0), datetime(2026, 2, 15)) == 10

    def test_departure_day_is_zero(self, mapper):
        assert mapper.days_to_departure(datetime(2026, 2, 15, 6, 0), datetime(2026, 2, 15, 18, 0)) == 0

    def test_after_departure_is_negative(self, mapper):
        assert mapper.days_to_departure(datetime(2026, 2, 20, 10, 0), date(2026, 2, 15)) == -5

    def test_floors_to_local_booking_date(self, mapper):
        # 23:30 UTC on 2026-02-14 is 00:30 on 2026-02-15 in Zurich
        assert mapper.days_to_departure(datetime(2026, 2, 14, 23, 30), date(2026, 2, 15)) == 0
