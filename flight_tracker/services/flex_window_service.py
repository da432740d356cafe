"""
Flexible departure date ranking.

For a route and a target date +/- N days, finds the cheapest flight on each
date (by the median of all its observations) and the cheapest date overall.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from flight_tracker.services.flight_query_service import FlightQueryService
from flight_tracker.utils.date_utils import flex_window
from flight_tracker.utils.price_stats import median

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FlexWindowEntry:
    """Cheapest flight found for one departure date."""

    departure_date: date
    flight_id: str
    median_price_chf: Decimal


@dataclass(frozen=True)
class FlexWindowResult:
    """Per-date winners across the window plus the overall best entry."""

    origin: str
    destination: str
    target_date: date
    flex_days: int
    timezone: str
    series: List[FlexWindowEntry] = field(default_factory=list)
    best: Optional[FlexWindowEntry] = None


class FlexWindowService:
    """Ranks departure dates around a target date by median flight price."""

    def __init__(self, timezone_label: str):
        self.timezone_label = timezone_label

    @staticmethod
    async def cheapest_for_date(
        db: AsyncSession, origin: str, destination: str, departure_date: date
    ) -> Optional[FlexWindowEntry]:
        """
        Find the flight with the lowest median price departing on a date.

        Medians use every observation of the flight, not only those near the
        date. Flights without observations are ignored. Equal medians go to
        the lowest flight id.

        Returns:
            FlexWindowEntry, or None if no flight on that date has prices
        """
        flights = await FlightQueryService.search_flights(
            db, origin=origin, destination=destination, departure_date=departure_date
        )

        candidates = []
        for flight in flights:
            observations = await FlightQueryService.get_observations(db, flight.id)
            flight_median = median(obs.price_chf for obs in observations)
            if flight_median is not None:
                candidates.append((flight_median, flight.id))

        if not candidates:
            return None

        best_median, best_id = min(candidates)
        return FlexWindowEntry(
            departure_date=departure_date,
            flight_id=str(best_id),
            median_price_chf=best_median,
        )

    async def rank(
        self,
        db: AsyncSession,
        origin: str,
        destination: str,
        target_date: date,
        flex_days: int,
    ) -> FlexWindowResult:
        """
        Rank every date in [target_date - flex_days, target_date + flex_days].

        Dates without priced flights are skipped, not zero-filled. Past dates
        are queried like any other.

        Raises:
            InvalidInputError: If flex_days is negative
        """
        dates = list(flex_window(target_date, flex_days))

        series: List[FlexWindowEntry] = []
        for departure_date in dates:
            entry = await self.cheapest_for_date(db, origin, destination, departure_date)
            if entry is not None:
                series.append(entry)

        series.sort(key=lambda entry: entry.departure_date)

        # Equal medians resolve to the earliest date.
        best = min(series, key=lambda entry: entry.median_price_chf) if series else None

        logger.info(
            f"Flex window {origin}-{destination} {target_date} +/-{flex_days}d: "
            f"{len(series)}/{len(dates)} dates priced, "
            f"best={best.departure_date if best else None}"
        )

        return FlexWindowResult(
            origin=origin,
            destination=destination,
            target_date=target_date,
            flex_days=flex_days,
            timezone=self.timezone_label,
            series=series,
            best=best,
        )
