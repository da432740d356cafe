"""
FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from flight_tracker import __app_name__, __version__
from flight_tracker.api.routes import flights, routes
from flight_tracker.config import settings
from flight_tracker.database import (
    check_db_connection,
    close_db_connections,
    init_db,
    wait_for_db,
)
from flight_tracker.exceptions import InvalidInputError, UnsupportedTimezoneError
from flight_tracker.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Configures logging, waits for the database and creates tables if enabled.
    """
    setup_logging(
        level=settings.log_level,
        json_format=settings.log_json,
        log_file=settings.log_file,
    )
    logger.info(f"Starting {__app_name__} v{__version__}")
    logger.info(f"Environment: {settings.environment}, time zone: {settings.timezone}")

    try:
        await wait_for_db()
    except Exception as e:
        logger.error(
            f"Failed to connect to database after retries: {e}\n"
            "To fix: verify DATABASE_URL in .env and run 'tracker db init'",
            exc_info=True,
        )
        raise

    if settings.create_tables_on_startup:
        await init_db()

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application")
    await close_db_connections()
    logger.info("Application shutdown complete")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Price-observation analytics for tracked flights",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins_list(),
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)

app.include_router(flights.router, prefix="/api")
app.include_router(routes.router, prefix="/api")


# Exception handlers
@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    """Invalid caller input that reached the core: 400."""
    logger.warning(f"Invalid input on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc)},
    )


@app.exception_handler(UnsupportedTimezoneError)
async def unsupported_timezone_handler(
    request: Request, exc: UnsupportedTimezoneError
) -> JSONResponse:
    """Configured zone is not implemented: 501."""
    logger.error(f"Unsupported time zone configured: {exc}")
    return JSONResponse(
        status_code=status.HTTP_501_NOT_IMPLEMENTED,
        content={"detail": str(exc)},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler for unhandled exceptions."""
    logger.error(
        f"Unhandled exception during {request.method} {request.url.path}: {exc}",
        exc_info=True,
    )

    if settings.debug:
        content = {
            "error": "Internal server error",
            "message": str(exc),
            "type": exc.__class__.__name__,
            "path": str(request.url.path),
            "method": request.method,
        }
    else:
        content = {
            "error": "Internal server error",
            "message": "An unexpected error occurred. Please check the logs.",
        }

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
    )


@app.get("/health", tags=["Health"], status_code=status.HTTP_200_OK)
async def health_check() -> JSONResponse:
    """
    Health check endpoint.

    Returns the application status and database health.
    """
    db_healthy = await check_db_connection()
    status_code = status.HTTP_200_OK if db_healthy else status.HTTP_503_SERVICE_UNAVAILABLE

    response: Dict[str, Any] = {
        "status": "healthy" if db_healthy else "unhealthy",
        "version": __version__,
        "environment": settings.environment,
        "timezone": settings.timezone,
        "dependencies": {
            "database": "healthy" if db_healthy else "unhealthy",
        },
    }

    return JSONResponse(content=response, status_code=status_code)
