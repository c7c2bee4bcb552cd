# taskvibe/api/routes/stats.py
from typing import Any, List

from fastapi import APIRouter, Depends, Query

from taskvibe import models, schemas
from taskvibe.api import deps
from taskvibe.core.logging import log_context
from taskvibe.services.stats_service import MAX_HISTORY_DAYS, StatsService

router = APIRouter()


@router.get("/", response_model=schemas.UserStats)
def read_stats(
    current_user: models.User = Depends(deps.get_current_user),
    stats_service: StatsService = Depends(deps.get_stats_service()),
) -> Any:
    """
    Dashboard counters for the current user.
    """
    with log_context(user_id=current_user.id, action="get_stats"):
        return stats_service.get_user_stats(current_user.id)


@router.get("/daily", response_model=List[schemas.DailyStat])
def read_daily_stats(
    days: int = Query(7, ge=1, le=MAX_HISTORY_DAYS),
    current_user: models.User = Depends(deps.get_current_user),
    stats_service: StatsService = Depends(deps.get_stats_service()),
) -> Any:
    """
    Per-day completion totals for the last ``days`` days, newest first.
    """
    with log_context(user_id=current_user.id, action="get_daily_stats", days=days):
        return stats_service.get_daily_stats(current_user.id, days=days)
