"""
Input validators for CLI commands.
Rejects malformed input before it reaches the analytics core.
"""

from datetime import date
from typing import Optional

import typer

from flight_tracker.exceptions import InvalidInputError
from flight_tracker.utils.date_utils import parse_iso_date


def validate_airport_code(value: str) -> str:
    """
    Validate airport IATA code.

    Must be exactly 3 alphabetic characters (case-insensitive).
    Returns uppercase version of the code.

    Raises:
        typer.BadParameter: If code is invalid
    """
    if not value:
        raise typer.BadParameter("Airport code cannot be empty")

    value = value.strip()

    if len(value) != 3:
        raise typer.BadParameter(
            f"Airport code must be exactly 3 characters (got '{value}' with {len(value)} characters)"
        )

    if not value.isalpha():
        raise typer.BadParameter(
            f"Airport code must contain only letters (got '{value}')"
        )

    return value.upper()


def validate_date_string(value: str) -> date:
    """
    Validate a date string in YYYY-MM-DD format.

    Past dates are allowed: analytics run over historical departures too.

    Returns:
        The parsed date

    Raises:
        typer.BadParameter: If the date is malformed
    """
    try:
        return parse_iso_date(value)
    except InvalidInputError:
        raise typer.BadParameter(
            f"Invalid date format. Expected YYYY-MM-DD (e.g., 2026-02-15), got '{value}'"
        )


def validate_flex_days(value: int) -> int:
    """Flexibility window must be zero or more days."""
    if value < 0:
        raise typer.BadParameter(f"Flex days must be non-negative (got {value})")
    return value


def validate_bucket_width(value: int) -> int:
    """Days-to-departure bucket width must be at least one day."""
    if value < 1:
        raise typer.BadParameter(f"Bucket width must be a positive number of days (got {value})")
    return value


# Typer callback functions for use with Option/Argument
def airport_code_callback(value: Optional[str]) -> Optional[str]:
    """Callback for validating airport codes in Typer options."""
    if value is None:
        return None
    return validate_airport_code(value)


def date_callback(value: Optional[str]) -> Optional[str]:
    """Callback for validating dates in Typer options; keeps the string form."""
    if value is None:
        return None
    validate_date_string(value)
    return value
