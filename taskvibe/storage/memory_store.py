# taskvibe/storage/memory_store.py
import threading
import uuid
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional, Tuple

from taskvibe import models
from taskvibe.core.exceptions import ResourceNotFoundException
from taskvibe.storage.base import DAILY_STAT_COUNTERS, EntityStore

USER_DEFAULTS = {
    "email": None,
    "first_name": None,
    "last_name": None,
    "profile_image_url": None,
    "nickname": None,
    "theme": models.Theme.SYSTEM.value,
    "level": 1,
    "xp": 0,
    "streak": 0,
    "last_active_date": None,
    "completed_onboarding": False,
}

TASK_DEFAULTS = {
    "description": None,
    "completed": False,
    "completed_at": None,
    "priority": 0,
}


class MemoryStore(EntityStore):
    """
    Process-local entity store.

    Holds plain (never persisted) model instances in dicts. A re-entrant lock
    serializes writers, and ``atomic()`` holds it across a whole operation.
    Nothing is rolled back on error.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._users: Dict[str, models.User] = {}
        self._tasks: Dict[str, models.Task] = {}
        self._achievements: Dict[str, models.Achievement] = {}
        self._daily_stats: Dict[Tuple[str, datetime], models.DailyStat] = {}

    @contextmanager
    def atomic(self) -> Iterator["MemoryStore"]:
        with self._lock:
            yield self

    @staticmethod
    def _new_id() -> str:
        return str(uuid.uuid4())

    @staticmethod
    def _apply(obj, fields: Dict[str, Any]) -> None:
        for field, value in fields.items():
            if hasattr(obj, field):
                setattr(obj, field, value)

    def _owned(self, table: Dict[str, Any], entity_id: str, user_id: str, label: str):
        obj = table.get(entity_id)
        if obj is None or obj.user_id != user_id:
            raise ResourceNotFoundException(f"{label} not found")
        return obj

    # Users

    def get_user(self, user_id: str, for_update: bool = False) -> Optional[models.User]:
        return self._users.get(user_id)

    def upsert_user(self, user_id: str, fields: Dict[str, Any]) -> models.User:
        now = datetime.now()
        with self.atomic():
            user = self._users.get(user_id)
            if user is None:
                user = models.User(
                    **{**USER_DEFAULTS, **fields, "id": user_id},
                    created_at=now,
                    updated_at=now,
                )
                self._users[user_id] = user
            else:
                self._apply(user, {**fields, "updated_at": now})
            return user

    def update_user(self, user_id: str, fields: Dict[str, Any]) -> models.User:
        with self.atomic():
            user = self._users.get(user_id)
            if user is None:
                raise ResourceNotFoundException(f"User with ID {user_id} not found")
            self._apply(user, {"updated_at": datetime.now(), **fields})
            return user

    # Tasks

    def create_task(self, user_id: str, fields: Dict[str, Any]) -> models.Task:
        now = datetime.now()
        values = {
            **TASK_DEFAULTS,
            "created_at": now,
            "updated_at": now,
            **fields,
            "id": self._new_id(),
            "user_id": user_id,
        }
        with self.atomic():
            task = models.Task(**values)
            self._tasks[task.id] = task
            return task

    def get_task(self, task_id: str, user_id: str) -> models.Task:
        return self._owned(self._tasks, task_id, user_id, "Task")

    def list_tasks(
        self,
        user_id: str,
        completed: Optional[bool] = None,
        urgency: Optional[str] = None,
        completed_since: Optional[datetime] = None,
    ) -> List[models.Task]:
        with self._lock:
            tasks = list(self._tasks.values())
        return [
            task
            for task in tasks
            if task.user_id == user_id
            and (completed is None or task.completed == completed)
            and (urgency is None or task.urgency == urgency)
            and (
                completed_since is None
                or (task.completed_at is not None and task.completed_at >= completed_since)
            )
        ]

    def count_tasks(
        self,
        user_id: str,
        completed: Optional[bool] = None,
        urgency: Optional[str] = None,
        completed_since: Optional[datetime] = None,
    ) -> int:
        return len(self.list_tasks(user_id, completed, urgency, completed_since))

    def update_task(self, task_id: str, user_id: str, fields: Dict[str, Any]) -> models.Task:
        with self.atomic():
            task = self.get_task(task_id, user_id)
            self._apply(task, {"updated_at": datetime.now(), **fields})
            return task

    def delete_task(self, task_id: str, user_id: str) -> None:
        with self.atomic():
            self.get_task(task_id, user_id)
            del self._tasks[task_id]

    # Achievements

    def add_achievement(self, user_id: str, fields: Dict[str, Any]) -> models.Achievement:
        values = {
            "description": None,
            "unlocked_at": datetime.now(),
            **fields,
            "id": self._new_id(),
            "user_id": user_id,
        }
        with self.atomic():
            achievement = models.Achievement(**values)
            self._achievements[achievement.id] = achievement
            return achievement

    def get_achievement(self, achievement_id: str, user_id: str) -> models.Achievement:
        return self._owned(self._achievements, achievement_id, user_id, "Achievement")

    def list_achievements(
        self, user_id: str, limit: Optional[int] = None
    ) -> List[models.Achievement]:
        with self._lock:
            owned = [a for a in self._achievements.values() if a.user_id == user_id]
        # Ties on unlocked_at fall back to id, as in the SQL ordering
        owned.sort(key=lambda a: (a.unlocked_at, a.id), reverse=True)
        return owned if limit is None else owned[:limit]

    # Daily stats

    def get_daily_stat(
        self, user_id: str, day: datetime, for_update: bool = False
    ) -> Optional[models.DailyStat]:
        return self._daily_stats.get((user_id, day))

    def save_daily_stat(
        self, user_id: str, day: datetime, fields: Dict[str, Any]
    ) -> models.DailyStat:
        counters = {k: v for k, v in fields.items() if k in DAILY_STAT_COUNTERS}
        with self.atomic():
            stat = self._daily_stats.get((user_id, day))
            if stat is None:
                stat = models.DailyStat(
                    id=self._new_id(),
                    user_id=user_id,
                    date=day,
                    **{counter: 0 for counter in DAILY_STAT_COUNTERS},
                )
                self._daily_stats[(user_id, day)] = stat
            self._apply(stat, counters)
            return stat

    def list_daily_stats(self, user_id: str, since: datetime) -> List[models.DailyStat]:
        with self._lock:
            rows = [
                stat
                for (owner, day), stat in self._daily_stats.items()
                if owner == user_id and day >= since
            ]
        return sorted(rows, key=lambda stat: stat.date, reverse=True)
