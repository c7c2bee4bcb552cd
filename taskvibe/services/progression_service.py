# taskvibe/services/progression_service.py
import logging
from datetime import datetime
from typing import Dict, Optional

from taskvibe import models
from taskvibe.core.config import settings
from taskvibe.services.achievement_service import AchievementService
from taskvibe.services.gamification_service import (
    daily_counter_for_urgency,
    level_for_xp,
    level_up_achievement,
    xp_for_urgency,
)
from taskvibe.storage.base import DAILY_STAT_COUNTERS, EntityStore
from taskvibe.utils.clock import Clock, days_between, local_now, start_of_day

logger = logging.getLogger(__name__)


class ProgressionService:
    """
    Completion engine: moves tasks between active and completed and keeps
    XP, level, daily stats and achievements in step with those moves.
    """

    def __init__(self, store: EntityStore, clock: Clock = local_now):
        self.store = store
        self.clock = clock
        self.achievement_service = AchievementService(store, clock)

    def complete(self, task_id: str, user_id: str) -> models.Task:
        """Mark a task completed and award its XP."""
        with self.store.atomic():
            task = self.store.get_task(task_id, user_id)
            if task.completed:
                logger.info(f"Task {task_id} is already completed, nothing to award")
                return task

            now = self.clock()
            task = self.store.update_task(
                task_id,
                user_id,
                {"completed": True, "completed_at": now, "updated_at": now},
            )

            xp = xp_for_urgency(task.urgency)
            self._adjust_daily_stat(user_id, start_of_day(now), task.urgency, 1, xp)
            self._apply_xp(user_id, xp, now)

        logger.info(f"User {user_id} completed task {task_id} (+{xp} XP)")
        return task

    def uncomplete(self, task_id: str, user_id: str) -> models.Task:
        """
        Reopen a completed task and take back its XP and daily counters.
        Achievements unlocked by the completion are kept.
        """
        with self.store.atomic():
            task = self.store.get_task(task_id, user_id)
            if not task.completed:
                logger.info(f"Task {task_id} is not completed, nothing to reverse")
                return task

            now = self.clock()
            completed_day = start_of_day(task.completed_at or now)
            task = self.store.update_task(
                task_id,
                user_id,
                {"completed": False, "completed_at": None, "updated_at": now},
            )

            xp = xp_for_urgency(task.urgency)
            self._adjust_daily_stat(user_id, completed_day, task.urgency, -1, xp)
            self._apply_xp(user_id, -xp, now)

        logger.info(f"User {user_id} reopened task {task_id} (-{xp} XP)")
        return task

    def _adjust_daily_stat(
        self, user_id: str, day: datetime, urgency: str, direction: int, xp: int
    ) -> Optional[models.DailyStat]:
        """
        Add (direction=1) or remove (direction=-1) one completion worth ``xp``
        from the user's row for ``day``. Counters never go below zero, and a
        missing row is only created when adding.
        """
        stat = self.store.get_daily_stat(user_id, day, for_update=True)
        if stat is None and direction < 0:
            logger.warning(f"No daily stats for user {user_id} on {day:%Y-%m-%d} to reverse")
            return None

        current: Dict[str, int] = {
            counter: (getattr(stat, counter) or 0) if stat is not None else 0
            for counter in DAILY_STAT_COUNTERS
        }
        updates = {
            "tasks_completed": max(0, current["tasks_completed"] + direction),
            "xp_earned": max(0, current["xp_earned"] + direction * xp),
        }
        counter = daily_counter_for_urgency(urgency)
        if counter:
            updates[counter] = max(0, current[counter] + direction)

        return self.store.save_daily_stat(user_id, day, updates)

    def _apply_xp(self, user_id: str, delta: int, now: datetime) -> Optional[models.User]:
        user = self.store.get_user(user_id, for_update=True)
        if user is None:
            logger.error(f"User {user_id} not found while applying {delta} XP")
            return None

        previous_xp = user.xp or 0
        previous_level = user.level or 1
        new_xp = max(0, previous_xp + delta)
        new_level = level_for_xp(new_xp)

        fields = {"xp": new_xp, "level": new_level}
        if delta > 0:
            fields["last_active_date"] = now
            if settings.ENABLE_STREAKS:
                fields["streak"] = self._next_streak(user, now)

        user = self.store.update_user(user_id, fields)
        logger.info(f"User {user_id} XP: {previous_xp} -> {new_xp}")

        if new_level != previous_level:
            logger.info(f"User {user_id} level: {previous_level} -> {new_level}")
        if new_level > previous_level:
            # One unlock per completion, naming the level finally reached
            self.achievement_service.unlock(user_id, level_up_achievement(new_level))

        return user

    @staticmethod
    def _next_streak(user: models.User, now: datetime) -> int:
        if user.last_active_date is None:
            return 1

        gap = days_between(user.last_active_date, now)
        if gap <= 0:
            return max(user.streak or 0, 1)
        if gap == 1:
            return (user.streak or 0) + 1
        return 1
