"""
Route-level API endpoints.

Currently the flexible departure date ranking for an origin/destination pair.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from flight_tracker.api.dependencies import get_flex_window_service
from flight_tracker.api.routes.params import parse_date_param
from flight_tracker.api.schemas.stats import FlexStatsResponse
from flight_tracker.config import settings
from flight_tracker.database import get_async_session
from flight_tracker.services.flex_window_service import FlexWindowService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/routes", tags=["routes"])


@router.get("/{origin}/{destination}/stats/flex", response_model=FlexStatsResponse)
async def get_flex_stats(
    origin: str,
    destination: str,
    target_date: str = Query(..., description="Target departure date (YYYY-MM-DD)"),
    flex_days: int = Query(0, description="Days to search on each side of the target"),
    db: AsyncSession = Depends(get_async_session),
    flex_service: FlexWindowService = Depends(get_flex_window_service),
):
    """
    Cheapest flight per departure date within target_date +/- flex_days.

    Each flight is priced by the median of all its observations. Dates
    without priced flights are left out of the series.

    Example:
        GET /api/routes/ZRH/JFK/stats/flex?target_date=2026-02-20&flex_days=3
    """
    target = parse_date_param(target_date, "target_date")

    if flex_days < 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="flex_days must be non-negative"
        )
    if flex_days > settings.max_flex_days:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"flex_days must not exceed {settings.max_flex_days}",
        )

    return await flex_service.rank(db, origin, destination, target, flex_days)
