"""
FastAPI dependencies for analytics services.

The local-time mapper is built per request from configuration, so no zone
object lives in module state.
"""

from fastapi import Depends

from flight_tracker.config import Settings, get_settings
from flight_tracker.services.flex_window_service import FlexWindowService
from flight_tracker.services.flight_stats_service import FlightStatsService
from flight_tracker.services.local_time import LocalTimeMapper


def get_local_time_mapper(settings: Settings = Depends(get_settings)) -> LocalTimeMapper:
    """Resolve the configured zone; raises UnsupportedTimezoneError for unknown zones."""
    return LocalTimeMapper.for_timezone(settings.timezone)


def get_flight_stats_service(
    mapper: LocalTimeMapper = Depends(get_local_time_mapper),
) -> FlightStatsService:
    return FlightStatsService(mapper)


def get_flex_window_service(
    mapper: LocalTimeMapper = Depends(get_local_time_mapper),
) -> FlexWindowService:
    return FlexWindowService(mapper.name)
