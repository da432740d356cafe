"""
Query parameter parsing shared by the API routes.
"""

from datetime import date, datetime
from typing import Optional, Tuple

from fastapi import HTTPException, status

from flight_tracker.exceptions import InvalidInputError
from flight_tracker.utils.date_utils import (
    parse_iso_date,
    utc_start_of_day,
    utc_start_of_next_day,
)


def parse_date_param(value: Optional[str], name: str) -> Optional[date]:
    """Parse an optional YYYY-MM-DD query parameter, 400 on malformed input."""
    if value is None:
        return None
    try:
        return parse_iso_date(value, field=name)
    except InvalidInputError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


def utc_range_params(
    from_date: Optional[str], to_date: Optional[str]
) -> Tuple[Optional[datetime], Optional[datetime]]:
    """
    Turn inclusive from/to calendar dates into a [from_utc, to_utc) range.

    to_date includes the whole day, so the exclusive bound is midnight UTC of
    the following day.
    """
    start = parse_date_param(from_date, "from_date")
    end = parse_date_param(to_date, "to_date")

    if start is not None and end is not None and start > end:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="from_date must not be after to_date",
        )

    from_utc = utc_start_of_day(start) if start is not None else None
    to_utc = utc_start_of_next_day(end) if end is not None and end < date.max else None
    return from_utc, to_utc
