"""
Custom exceptions for the Flight Price Tracker.

This module provides:
1. Base exception hierarchy for application-wide error handling
2. Informative exceptions with actionable guidance

Not-found lookups are not exceptions: query functions return None or an
empty list and the presentation layer decides what that means.
"""

from typing import Optional


# ============================================================================
# Base Exception Hierarchy (for application-wide error handling)
# ============================================================================


class FlightTrackerException(Exception):
    """Base exception class for all Flight Price Tracker exceptions."""

    pass


class ConfigurationException(FlightTrackerException):
    """Exception raised for configuration errors."""

    pass


class DatabaseException(FlightTrackerException):
    """Exception raised for database-related errors."""

    pass


class InvalidInputError(FlightTrackerException, ValueError):
    """
    Raised when a caller passes a value the analytics core cannot work with.

    Examples are malformed date strings, a negative flexibility window or a
    non-positive bucket width.

    Attributes:
        field: Name of the offending input
        value: The rejected value
        reason: Human readable explanation
    """

    def __init__(self, field: str, value: object, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field} {value!r}: {reason}")


class UnsupportedTimezoneError(ConfigurationException, NotImplementedError):
    """Raised when a time zone other than the supported one is requested."""

    def __init__(self, timezone_name: str, supported: str):
        self.timezone_name = timezone_name
        self.supported = supported
        super().__init__(
            f"Time zone '{timezone_name}' is not supported (only '{supported}' is implemented)"
        )


# ============================================================================
# Informative Exceptions with Actionable Guidance
# ============================================================================


class InformativeException(FlightTrackerException):
    """Base class for informative exceptions with actionable guidance."""

    def __init__(self, message: str, remediation: Optional[str] = None,
                 details: Optional[str] = None, commands: Optional[list[str]] = None):
        """
        Initialize an informative exception.

        Args:
            message: Clear explanation of what went wrong
            remediation: Specific remediation instructions
            details: Relevant configuration or context details
            commands: List of troubleshooting commands to try
        """
        self.message = message
        self.remediation = remediation
        self.details = details
        self.commands = commands or []

        full_message = f"\n{'=' * 80}\n"
        full_message += f"ERROR: {message}\n"

        if details:
            full_message += f"\nDETAILS:\n{details}\n"

        if remediation:
            full_message += f"\nHOW TO FIX:\n{remediation}\n"

        if commands:
            full_message += "\nTROUBLESHOOTING COMMANDS:\n"
            for cmd in commands:
                full_message += f"  $ {cmd}\n"

        full_message += f"{'=' * 80}\n"

        super().__init__(full_message)


class DatabaseConnectionError(InformativeException, DatabaseException):
    """Raised when database connection fails."""

    def __init__(self, database_url: str = "unknown", error_details: str = ""):
        message = "Database connection failed"

        details = f"Database URL: {database_url}"
        if error_details:
            details += f"\nError: {error_details}"

        remediation = """
1. Verify DATABASE_URL in your .env file is correct
2. For SQLite, check that the database directory exists and is writable
3. For a server database, check network connectivity and credentials
4. Create the schema with 'tracker db init' if the database is new
        """.strip()

        commands = [
            "tracker db init",
            "tracker db seed",
        ]

        super().__init__(message, remediation, details, commands)
