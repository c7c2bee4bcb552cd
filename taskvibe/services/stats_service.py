# taskvibe/services/stats_service.py
from datetime import timedelta
from typing import List

from taskvibe import models, schemas
from taskvibe.core.config import settings
from taskvibe.core.exceptions import ValidationException
from taskvibe.models.task import Urgency
from taskvibe.storage.base import EntityStore
from taskvibe.utils.clock import Clock, local_now, start_of_day

MAX_HISTORY_DAYS = 366


class StatsService:
    """Read-only dashboard counters, recomputed from the store on every call."""

    def __init__(self, store: EntityStore, clock: Clock = local_now):
        self.store = store
        self.clock = clock

    def get_user_stats(self, user_id: str) -> schemas.UserStats:
        today = start_of_day(self.clock())
        count = self.store.count_tasks

        return schemas.UserStats(
            total_completed=count(user_id, completed=True),
            today_completed=count(user_id, completed=True, completed_since=today),
            immediate_count=count(user_id, completed=False, urgency=Urgency.IMMEDIATE.value),
            medium_count=count(user_id, completed=False, urgency=Urgency.MEDIUM.value),
            delayed_count=count(user_id, completed=False, urgency=Urgency.DELAYED.value),
            recent_achievements=[
                schemas.Achievement.model_validate(achievement)
                for achievement in self.store.list_achievements(
                    user_id, limit=settings.RECENT_ACHIEVEMENTS_LIMIT
                )
            ],
        )

    def get_daily_stats(self, user_id: str, days: int = 7) -> List[models.DailyStat]:
        """Daily rows for the last ``days`` days including today, newest first."""
        if days < 1 or days > MAX_HISTORY_DAYS:
            raise ValidationException(
                f"days must be between 1 and {MAX_HISTORY_DAYS}", details={"days": days}
            )
        since = start_of_day(self.clock()) - timedelta(days=days - 1)
        return self.store.list_daily_stats(user_id, since)
