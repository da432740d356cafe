"""
Price statistics for Flight Price Tracker.

Provides the median and the five-number aggregate used by every bucketing
strategy. All arithmetic stays in Decimal so currency values never drift.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional


@dataclass(frozen=True, kw_only=True)
class StatsBucket:
    """
    Aggregate view over a group of prices.

    A bucket with count == 0 carries None in every other field. Callers must
    not read "no data" as zero.
    """

    count: int = 0
    min: Optional[Decimal] = None
    max: Optional[Decimal] = None
    avg: Optional[Decimal] = None
    median: Optional[Decimal] = None

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    def stats_fields(self) -> dict:
        """Return the aggregate fields, for building derived bucket types."""
        return {
            "count": self.count,
            "min": self.min,
            "max": self.max,
            "avg": self.avg,
            "median": self.median,
        }


EMPTY_STATS = StatsBucket()


def median(prices: Iterable[Decimal]) -> Optional[Decimal]:
    """
    Calculate the median of a collection of prices.

    Args:
        prices: Prices in any order, duplicates allowed

    Returns:
        The middle value for an odd count, the mean of the two middle values
        for an even count, or None when there are no prices

    Examples:
        >>> median([Decimal("3"), Decimal("1"), Decimal("2")])
        Decimal('2')
        >>> median([Decimal("100"), Decimal("200")])
        Decimal('150')
        >>> median([]) is None
        True
    """
    ordered = sorted(prices)
    count = len(ordered)
    if count == 0:
        return None

    middle = count // 2
    if count % 2 == 1:
        return ordered[middle]

    return (ordered[middle - 1] + ordered[middle]) / 2


def aggregate(prices: Iterable[Decimal]) -> StatsBucket:
    """
    Build a StatsBucket (count, min, max, avg, median) from prices.

    Args:
        prices: Prices to summarize

    Returns:
        StatsBucket; count 0 with None everywhere else for no prices

    Examples:
        >>> aggregate([Decimal("10"), Decimal("20"), Decimal("60")]).avg
        Decimal('30')
        >>> aggregate([]).count
        0
    """
    values = list(prices)
    if not values:
        return EMPTY_STATS

    return StatsBucket(
        count=len(values),
        min=min(values),
        max=max(values),
        avg=sum(values, Decimal(0)) / len(values),
        median=median(values),
    )
