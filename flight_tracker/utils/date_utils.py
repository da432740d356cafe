"""
Date utility functions for Flight Price Tracker.

Parsing and formatting of YYYY-MM-DD calendar dates at the presentation
boundary, calendar-day ranges, and UTC normalization of stored instants.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Iterator

from flight_tracker.exceptions import InvalidInputError

ISO_DATE_FORMAT = "%Y-%m-%d"


def parse_iso_date(value: str, field: str = "date") -> date:
    """
    Parse a strict YYYY-MM-DD date string.

    Args:
        value: Date string to parse
        field: Input name used in the error message

    Returns:
        Parsed date

    Raises:
        InvalidInputError: If the value is empty or not a valid YYYY-MM-DD date

    Examples:
        >>> parse_iso_date("2026-01-15")
        datetime.date(2026, 1, 15)
    """
    if not value or not isinstance(value, str):
        raise InvalidInputError(field, value, "a date in YYYY-MM-DD format is required")

    try:
        return datetime.strptime(value.strip(), ISO_DATE_FORMAT).date()
    except ValueError:
        raise InvalidInputError(
            field, value, "invalid date format, use YYYY-MM-DD (e.g., 2026-01-15)"
        ) from None


def format_date(value: date | datetime) -> str:
    """
    Format a calendar date (or the date part of a datetime) as YYYY-MM-DD.

    Examples:
        >>> format_date(datetime(2026, 2, 15, 7, 30))
        '2026-02-15'
    """
    if isinstance(value, datetime):
        value = value.date()
    return value.strftime(ISO_DATE_FORMAT)


def date_range(start: date, end: date) -> Iterator[date]:
    """
    Generate all dates between start and end (inclusive).

    Args:
        start: Start date
        end: End date

    Yields:
        Each date from start to end (inclusive); nothing if start > end

    Examples:
        >>> dates = list(date_range(date(2026, 1, 14), date(2026, 1, 16)))
        >>> len(dates)
        3
    """
    current = start
    while current <= end:
        yield current
        if current == end:
            break
        current += timedelta(days=1)


def flex_window(target: date, flex_days: int) -> Iterator[date]:
    """
    Yield every date in [target - flex_days, target + flex_days].

    Raises:
        InvalidInputError: If flex_days is negative, or the window runs past
            the first or last representable date
    """
    if flex_days < 0:
        raise InvalidInputError("flex_days", flex_days, "must be non-negative")

    span = timedelta(days=flex_days)
    try:
        first, last = target - span, target + span
    except OverflowError:
        raise InvalidInputError(
            "target_date", target, "flex window falls outside the supported date range"
        ) from None
    return date_range(first, last)


def start_of_day(day: date) -> datetime:
    """Midnight of a calendar day as a naive datetime."""
    return datetime.combine(day, time.min)


def start_of_next_day(day: date) -> datetime:
    """
    Midnight after a calendar day as a naive datetime.

    Pass this as an exclusive upper bound to include the whole of `day`.
    """
    return start_of_day(day + timedelta(days=1))


def utc_start_of_day(day: date) -> datetime:
    """Midnight UTC of a calendar day."""
    return start_of_day(day).replace(tzinfo=timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """
    Return value as an aware UTC datetime.

    Naive values are taken to already be UTC (that is how SQLite hands back
    DateTime(timezone=True) columns).
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_start_of_next_day(day: date) -> datetime:
    """Midnight UTC after a calendar day, the exclusive bound covering all of `day`."""
    return start_of_next_day(day).replace(tzinfo=timezone.utc)
