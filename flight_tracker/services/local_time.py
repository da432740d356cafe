"""
Local-time mapping for price observations.

Observations are stored as UTC instants. Every bucketing strategy works on
the civil time of a single deployment zone, so this module converts those
instants into a local date-time, a local calendar date and an ISO weekday.
"""

import logging
from datetime import date, datetime, tzinfo
from zoneinfo import ZoneInfo

from flight_tracker.exceptions import UnsupportedTimezoneError
from flight_tracker.utils.date_utils import ensure_utc

logger = logging.getLogger(__name__)

SUPPORTED_TIMEZONE = "Europe/Zurich"

WEEKDAY_LABELS = {
    1: "Mon",
    2: "Tue",
    3: "Wed",
    4: "Thu",
    5: "Fri",
    6: "Sat",
    7: "Sun",
}


def resolve_timezone(name: str) -> ZoneInfo:
    """
    Resolve a deployment time zone identifier.

    Args:
        name: IANA zone identifier

    Returns:
        ZoneInfo for the supported zone

    Raises:
        UnsupportedTimezoneError: For any identifier other than Europe/Zurich
    """
    if name != SUPPORTED_TIMEZONE:
        raise UnsupportedTimezoneError(name, SUPPORTED_TIMEZONE)
    return ZoneInfo(name)


def weekday_label(weekday: int) -> str:
    """
    Three-letter label for an ISO weekday number.

    Out-of-range numbers map to an empty string instead of raising.

    Examples:
        >>> weekday_label(1)
        'Mon'
        >>> weekday_label(8)
        ''
    """
    return WEEKDAY_LABELS.get(weekday, "")


class LocalTimeMapper:
    """
    Converts UTC instants into the civil time of one zone.

    The zone is passed in rather than looked up globally, so tests can build
    a mapper over any tzinfo. Production code goes through for_timezone(),
    which only accepts the supported zone.

    Examples:
        >>> mapper = LocalTimeMapper.for_timezone("Europe/Zurich")
        >>> mapper.to_local(datetime(2026, 1, 15, 10, 0)).hour
        11
    """

    def __init__(self, zone: tzinfo, name: str):
        self.zone = zone
        self.name = name

    @classmethod
    def for_timezone(cls, name: str = SUPPORTED_TIMEZONE) -> "LocalTimeMapper":
        """Build a mapper for a configured zone identifier."""
        return cls(resolve_timezone(name), name)

    def __repr__(self) -> str:
        return f"<LocalTimeMapper(zone='{self.name}')>"

    def to_local(self, instant_utc: datetime) -> datetime:
        """Convert a UTC instant (naive means UTC) to local date-time."""
        return ensure_utc(instant_utc).astimezone(self.zone)

    def booking_date(self, instant_utc: datetime) -> date:
        """Local calendar date on which an observation was recorded."""
        return self.to_local(instant_utc).date()

    def weekday(self, instant_utc: datetime) -> int:
        """ISO weekday of the local time: Monday=1 ... Sunday=7."""
        return self.to_local(instant_utc).isoweekday()

    def days_to_departure(self, observed_at_utc: datetime, departure: date | datetime) -> int:
        """
        Whole days between the local booking date and the departure date.

        The observation is floored to its local calendar date first, so
        partial days never count. Negative when recorded after departure.
        """
        if isinstance(departure, datetime):
            departure = departure.date()
        return (departure - self.booking_date(observed_at_utc)).days
