"""
Command-line interface for Flight Price Tracker.
Rich-formatted tables for flight search and price statistics.
"""

import asyncio
import logging
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from flight_tracker import __app_name__, __version__
from flight_tracker.cli.validators import (
    airport_code_callback,
    date_callback,
    validate_bucket_width,
    validate_flex_days,
)
from flight_tracker.config import settings
from flight_tracker.database import get_async_session_context
from flight_tracker.services.flex_window_service import FlexWindowService
from flight_tracker.services.flight_query_service import FlightQueryService
from flight_tracker.services.flight_stats_service import FlightStatsResult, FlightStatsService
from flight_tracker.services.local_time import LocalTimeMapper
from flight_tracker.utils.date_utils import (
    format_date,
    parse_iso_date,
    utc_start_of_day,
    utc_start_of_next_day,
)
from flight_tracker.utils.logging_config import LogContext, setup_logging

app = typer.Typer(
    name="tracker",
    help="Flight Price Tracker - price statistics for tracked flights",
    add_completion=False,
)

db_app = typer.Typer(help="Database management")
app.add_typer(db_app, name="db")

console = Console()
logger = logging.getLogger(__name__)


# ============================================================================
# Utility Functions
# ============================================================================

def handle_error(e: Exception, message: str = "An error occurred"):
    """Handle errors with nice formatting."""
    console.print(f"\n[bold red]✗ {message}[/bold red]")
    console.print(f"[red]{type(e).__name__}: {str(e)}[/red]\n")
    if settings.debug:
        console.print_exception()
    raise typer.Exit(code=1)


def success(message: str):
    """Print success message."""
    console.print(f"[bold green]✓ {message}[/bold green]")


def info(message: str):
    """Print info message."""
    console.print(f"[blue]{message}[/blue]")


def warning(message: str):
    """Print warning message."""
    console.print(f"[yellow]⚠ {message}[/yellow]")


def fmt_price(value: Optional[Decimal]) -> str:
    """Format a CHF amount, dash for missing values."""
    if value is None:
        return "-"
    return f"{value:,.2f}"


def _mapper() -> LocalTimeMapper:
    return LocalTimeMapper.for_timezone(settings.timezone)


# ============================================================================
# Main Callback
# ============================================================================

def version_callback(value: bool):
    """Show version and exit."""
    if value:
        console.print(Panel(
            f"[bold blue]{__app_name__}[/bold blue] version [green]{__version__}[/green]",
            border_style="blue",
        ))
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", callback=version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """
    Flight Price Tracker CLI.

    Use 'tracker COMMAND --help' for command-specific help.
    """
    setup_logging(level=settings.log_level, json_format=settings.log_json, log_file=settings.log_file)


# ============================================================================
# FLIGHTS Command
# ============================================================================

@app.command()
def flights(
    origin: Optional[str] = typer.Option(None, help="Origin IATA code", callback=airport_code_callback),
    destination: Optional[str] = typer.Option(None, help="Destination IATA code", callback=airport_code_callback),
    date: Optional[str] = typer.Option(None, help="Departure date (YYYY-MM-DD)", callback=date_callback),
    flight_number: Optional[str] = typer.Option(None, help="Exact flight number"),
):
    """
    List tracked flights.

    Examples:
        tracker flights --origin ZRH --destination BCN
        tracker flights --date 2026-02-15
    """
    try:
        asyncio.run(_show_flights(origin, destination, date, flight_number))
    except typer.Exit:
        raise
    except Exception as e:
        handle_error(e, "Failed to list flights")


async def _show_flights(
    origin: Optional[str],
    destination: Optional[str],
    date: Optional[str],
    flight_number: Optional[str],
):
    departure_date = parse_iso_date(date) if date else None

    async with get_async_session_context() as db:
        results = await FlightQueryService.search_flights(
            db,
            origin=origin,
            destination=destination,
            departure_date=departure_date,
            flight_number=flight_number,
        )

    if not results:
        warning("No flights found")
        return

    table = Table(title="✈ Flights", show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Flight", style="bold")
    table.add_column("Route")
    table.add_column("Departure", style="green")

    for flight in results:
        table.add_row(
            str(flight.id), flight.flight_number, flight.route, format_date(flight.departure_date)
        )

    console.print(table)


# ============================================================================
# STATS Commands
# ============================================================================

def _stats_table(result: FlightStatsResult, title: str, key_header: str, keys: Sequence[str]) -> Table:
    flight = result.flight
    table = Table(
        title=f"{title} - {flight.flight_number} {flight.origin_iata}-{flight.destination_iata} "
        f"{flight.departure_date} ({result.timezone})",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column(key_header, style="cyan")
    table.add_column("Count", justify="right")
    table.add_column("Min", justify="right", style="green")
    table.add_column("Median", justify="right")
    table.add_column("Avg", justify="right")
    table.add_column("Max", justify="right", style="red")

    for key, bucket in zip(keys, result.series):
        table.add_row(
            key,
            str(bucket.count),
            fmt_price(bucket.min),
            fmt_price(bucket.median),
            fmt_price(bucket.avg),
            fmt_price(bucket.max),
        )
    return table


async def _compute_stats(
    flight_id: str,
    view: str,
    bucket: int,
    from_date: Optional[str],
    to_date: Optional[str],
) -> Optional[FlightStatsResult]:
    service = FlightStatsService(_mapper())
    from_utc = utc_start_of_day(parse_iso_date(from_date)) if from_date else None
    last_day = parse_iso_date(to_date) if to_date else None
    to_utc = utc_start_of_next_day(last_day) if last_day and last_day < date.max else None

    async with get_async_session_context() as db:
        flight = await FlightQueryService.get_flight(db, flight_id)
        if flight is None:
            return None
        observations = await FlightQueryService.get_observations_between(
            db, flight.id, from_utc, to_utc
        )

    with LogContext({"flight_id": flight_id, "view": view}):
        if view == "weekday":
            return service.compute_weekday_stats(flight, observations)
        if view == "booking-date":
            return service.compute_booking_date_stats(flight, observations)
        return service.compute_days_to_departure_stats(flight, observations, bucket)


def _run_stats(
    flight_id: str,
    view: str,
    from_date: Optional[str],
    to_date: Optional[str],
    bucket: int = 1,
) -> FlightStatsResult:
    try:
        result = asyncio.run(_compute_stats(flight_id, view, bucket, from_date, to_date))
    except Exception as e:
        handle_error(e, "Failed to compute statistics")

    if result is None:
        console.print(f"[bold red]✗ Flight {flight_id} not found[/bold red]")
        raise typer.Exit(code=1)
    return result


@app.command("weekday-stats")
def weekday_stats(
    flight_id: str = typer.Argument(..., help="Flight ID"),
    from_date: Optional[str] = typer.Option(None, help="First UTC day (YYYY-MM-DD)", callback=date_callback),
    to_date: Optional[str] = typer.Option(None, help="Last UTC day (YYYY-MM-DD)", callback=date_callback),
):
    """
    Price statistics per local booking weekday.

    Examples:
        tracker weekday-stats 1
    """
    result = _run_stats(flight_id, "weekday", from_date, to_date)
    keys = [bucket.label for bucket in result.series]
    console.print(_stats_table(result, "Weekday stats", "Weekday", keys))


@app.command("booking-date-stats")
def booking_date_stats(
    flight_id: str = typer.Argument(..., help="Flight ID"),
    from_date: Optional[str] = typer.Option(None, help="First UTC day (YYYY-MM-DD)", callback=date_callback),
    to_date: Optional[str] = typer.Option(None, help="Last UTC day (YYYY-MM-DD)", callback=date_callback),
):
    """
    Price statistics per local booking date.

    Examples:
        tracker booking-date-stats 1 --from-date 2026-01-10
    """
    result = _run_stats(flight_id, "booking-date", from_date, to_date)
    if not result.series:
        warning("No observations in range")
        return
    keys = [format_date(bucket.date) for bucket in result.series]
    console.print(_stats_table(result, "Booking-date stats", "Booked on", keys))


@app.command("days-to-departure-stats")
def days_to_departure_stats(
    flight_id: str = typer.Argument(..., help="Flight ID"),
    bucket: int = typer.Option(
        settings.default_bucket_days, help="Bucket width in days", callback=validate_bucket_width
    ),
    from_date: Optional[str] = typer.Option(None, help="First UTC day (YYYY-MM-DD)", callback=date_callback),
    to_date: Optional[str] = typer.Option(None, help="Last UTC day (YYYY-MM-DD)", callback=date_callback),
):
    """
    Price statistics by days to departure.

    Examples:
        tracker days-to-departure-stats 1 --bucket 7
    """
    result = _run_stats(flight_id, "days-to-departure", from_date, to_date, bucket)
    if not result.series:
        warning("No observations before departure")
        return
    keys = [
        f"{b.days_from}-{b.days_to - 1}" if bucket > 1 else str(b.days_from)
        for b in result.series
    ]
    console.print(_stats_table(result, "Days-to-departure stats", "Days", keys))


# ============================================================================
# FLEX Command
# ============================================================================

@app.command()
def flex(
    origin: str = typer.Argument(..., help="Origin IATA code", callback=airport_code_callback),
    destination: str = typer.Argument(..., help="Destination IATA code", callback=airport_code_callback),
    target_date: str = typer.Option(..., help="Target departure date (YYYY-MM-DD)", callback=date_callback),
    flex_days: int = typer.Option(0, help="Days to search on each side", callback=validate_flex_days),
):
    """
    Cheapest departure date around a target date.

    Examples:
        tracker flex ZRH BCN --target-date 2026-02-15 --flex-days 3
    """
    try:
        asyncio.run(_show_flex(origin, destination, target_date, flex_days))
    except Exception as e:
        handle_error(e, "Failed to rank flexible dates")


async def _show_flex(origin: str, destination: str, target_date: str, flex_days: int):
    service = FlexWindowService(_mapper().name)

    async with get_async_session_context() as db:
        result = await service.rank(db, origin, destination, parse_iso_date(target_date), flex_days)

    if not result.series:
        warning(f"No priced flights {origin}-{destination} within {target_date} ±{flex_days} days")
        return

    table = Table(
        title=f"Flex window {origin}-{destination} {target_date} ±{flex_days}d",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Departure", style="cyan")
    table.add_column("Flight ID", justify="right")
    table.add_column("Median CHF", justify="right", style="green")

    for entry in result.series:
        marker = " ★" if entry == result.best else ""
        table.add_row(
            format_date(entry.departure_date) + marker,
            entry.flight_id,
            fmt_price(entry.median_price_chf),
        )

    console.print(table)
    if result.best:
        success(
            f"Best: {format_date(result.best.departure_date)} "
            f"(flight {result.best.flight_id}, CHF {fmt_price(result.best.median_price_chf)})"
        )


# ============================================================================
# DB Commands
# ============================================================================

@db_app.command("init")
def db_init():
    """Create all database tables that do not exist yet."""
    try:
        asyncio.run(_db_init())
    except Exception as e:
        handle_error(e, "Database initialization failed")


async def _db_init():
    from flight_tracker.database import init_db

    with console.status("[bold yellow]Creating database tables..."):
        await init_db()

    success("Database initialized successfully")
    info("Use 'tracker db seed' to populate with sample data")


@db_app.command("seed")
def db_seed():
    """Seed database with sample flights and observations."""
    try:
        created = asyncio.run(_db_seed())
    except Exception as e:
        handle_error(e, "Database seeding failed")

    flights_created, observations_created = created
    success(f"Seeded {flights_created} flights and {observations_created} observations")


async def _db_seed():
    from flight_tracker.database import init_db
    from flight_tracker.utils.seed_data import seed_sample_flights

    await init_db()
    async with get_async_session_context() as db:
        with console.status("[bold yellow]Seeding database..."):
            return await seed_sample_flights(db)


@db_app.command("reset")
def db_reset():
    """
    Reset database (drop all tables and recreate).

    WARNING: This will delete ALL data!
    """
    console.print(Panel(
        "[bold red]⚠️ DANGER ZONE ⚠️[/bold red]\n\n"
        "This will DELETE ALL DATA and recreate tables.\n"
        "This action cannot be undone!",
        border_style="red",
    ))

    if not typer.confirm("Are you absolutely sure?"):
        warning("Operation cancelled")
        raise typer.Exit()

    try:
        asyncio.run(_db_reset())
    except Exception as e:
        handle_error(e, "Database reset failed")


async def _db_reset():
    from flight_tracker.database import drop_db, init_db

    with console.status("[bold red]Dropping all tables..."):
        await drop_db()
    info("All tables dropped")

    with console.status("[bold yellow]Creating tables..."):
        await init_db()
    success("Database reset complete")


if __name__ == "__main__":
    app()
