"""
Flight price statistics service.

Groups the price observations of one flight three ways and summarizes each
group with count/min/max/avg/median:
- by local weekday (dense: always 7 buckets, Mon..Sun)
- by local booking date (sparse, ascending)
- by days to departure, in buckets of a chosen width (sparse, ascending)

All grouping happens in the civil time of the mapper's zone.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, List, Sequence

from flight_tracker.exceptions import InvalidInputError
from flight_tracker.models.flight import Flight
from flight_tracker.models.observation import Observation
from flight_tracker.services.local_time import LocalTimeMapper, weekday_label
from flight_tracker.utils.date_utils import format_date
from flight_tracker.utils.price_stats import StatsBucket, aggregate

logger = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class WeekdayBucket(StatsBucket):
    """Stats for one ISO weekday (1=Mon ... 7=Sun)."""

    weekday: int
    label: str


@dataclass(frozen=True, kw_only=True)
class BookingDateBucket(StatsBucket):
    """Stats for one local calendar date on which prices were observed."""

    date: date


@dataclass(frozen=True, kw_only=True)
class DaysToDepartureBucket(StatsBucket):
    """Stats for the half-open range [days_from, days_to) before departure."""

    days_from: int
    days_to: int


@dataclass(frozen=True)
class FlightSummary:
    """Normalized flight fields handed to the presentation layer."""

    id: str
    flight_number: str
    departure_date: str  # YYYY-MM-DD
    origin_iata: str
    destination_iata: str

    @classmethod
    def from_flight(cls, flight: Flight) -> "FlightSummary":
        return cls(
            id=str(flight.id),
            flight_number=flight.flight_number,
            departure_date=format_date(flight.departure_date),
            origin_iata=flight.origin_iata,
            destination_iata=flight.destination_iata,
        )


@dataclass(frozen=True)
class FlightStatsResult:
    """A bucket series together with the flight it describes."""

    flight_id: str
    flight: FlightSummary
    timezone: str
    series: List[StatsBucket] = field(default_factory=list)


def bucket_start(days: int, width: int) -> int:
    """
    Start of the days-to-departure bucket that `days` falls into.

    Args:
        days: Days to departure
        width: Bucket width in days, positive

    Returns:
        floor(days / width) * width

    Raises:
        InvalidInputError: If width is not a positive integer

    Examples:
        >>> bucket_start(8, 7)
        7
        >>> bucket_start(6, 3)
        6
        >>> bucket_start(-1, 7)
        -7
    """
    if isinstance(width, bool) or not isinstance(width, int) or width < 1:
        raise InvalidInputError("bucket", width, "must be a positive integer")
    return (days // width) * width


class FlightStatsService:
    """Bucketing engine over the observations of a single flight."""

    def __init__(self, mapper: LocalTimeMapper):
        self.mapper = mapper

    def _result(self, flight: Flight, series: Sequence[StatsBucket]) -> FlightStatsResult:
        return FlightStatsResult(
            flight_id=str(flight.id),
            flight=FlightSummary.from_flight(flight),
            timezone=self.mapper.name,
            series=list(series),
        )

    def compute_weekday_stats(
        self, flight: Flight, observations: Sequence[Observation]
    ) -> FlightStatsResult:
        """
        Summarize prices per local weekday.

        Always returns 7 buckets, weekday 1 through 7, with empty weekdays
        reported as count 0.
        """
        groups: Dict[int, List[Decimal]] = defaultdict(list)
        for obs in observations:
            groups[self.mapper.weekday(obs.observed_at_utc)].append(obs.price_chf)

        series = [
            WeekdayBucket(
                weekday=weekday,
                label=weekday_label(weekday),
                **aggregate(groups.get(weekday, [])).stats_fields(),
            )
            for weekday in range(1, 8)
        ]

        logger.debug(
            f"Weekday stats for flight {flight.id}: {len(observations)} observations "
            f"over {len(groups)} weekdays"
        )
        return self._result(flight, series)

    def compute_booking_date_stats(
        self, flight: Flight, observations: Sequence[Observation]
    ) -> FlightStatsResult:
        """Summarize prices per local booking date, only dates with data."""
        groups: Dict[date, List[Decimal]] = defaultdict(list)
        for obs in observations:
            groups[self.mapper.booking_date(obs.observed_at_utc)].append(obs.price_chf)

        series = [
            BookingDateBucket(date=booking_date, **aggregate(prices).stats_fields())
            for booking_date, prices in sorted(groups.items())
        ]

        logger.debug(f"Booking-date stats for flight {flight.id}: {len(series)} dates")
        return self._result(flight, series)

    def compute_days_to_departure_stats(
        self, flight: Flight, observations: Sequence[Observation], bucket: int = 1
    ) -> FlightStatsResult:
        """
        Summarize prices by days to departure in buckets of `bucket` days.

        Observations recorded after the departure date (negative days) are
        left out of this view.

        Raises:
            InvalidInputError: If bucket is not a positive integer
        """
        # Validates the width even when there are no observations.
        bucket_start(0, bucket)

        groups: Dict[int, List[Decimal]] = defaultdict(list)
        skipped = 0
        for obs in observations:
            days = self.mapper.days_to_departure(obs.observed_at_utc, flight.departure_date)
            if days < 0:
                skipped += 1
                continue
            groups[bucket_start(days, bucket)].append(obs.price_chf)

        series = [
            DaysToDepartureBucket(
                days_from=start,
                days_to=start + bucket,
                **aggregate(prices).stats_fields(),
            )
            for start, prices in sorted(groups.items())
        ]

        if skipped:
            logger.debug(
                f"Flight {flight.id}: skipped {skipped} observations recorded after departure"
            )
        return self._result(flight, series)
