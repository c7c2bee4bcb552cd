# taskvibe/storage/base.py
"""
Entity store contract.

Services only talk to an ``EntityStore``; the in-memory and SQLAlchemy
backends are interchangeable. Every lookup that takes a ``user_id`` enforces
ownership and raises ``ResourceNotFoundException`` both when the entity does
not exist and when it belongs to someone else.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, ContextManager, Dict, List, Optional

from taskvibe import models


class EntityStore(ABC):
    @abstractmethod
    def atomic(self) -> ContextManager["EntityStore"]:
        """
        Group several operations into one unit of work.

        Blocks nest; only the outermost block commits (or rolls back).
        """

    # Users

    @abstractmethod
    def get_user(self, user_id: str, for_update: bool = False) -> Optional[models.User]:
        """Get a user by id, locking the row when ``for_update`` is set."""

    @abstractmethod
    def upsert_user(self, user_id: str, fields: Dict[str, Any]) -> models.User:
        """Insert a user or overwrite the given fields of an existing one."""

    @abstractmethod
    def update_user(self, user_id: str, fields: Dict[str, Any]) -> models.User:
        """Update fields of an existing user; raises if absent."""

    # Tasks

    @abstractmethod
    def create_task(self, user_id: str, fields: Dict[str, Any]) -> models.Task:
        pass

    @abstractmethod
    def get_task(self, task_id: str, user_id: str) -> models.Task:
        pass

    @abstractmethod
    def list_tasks(
        self,
        user_id: str,
        completed: Optional[bool] = None,
        urgency: Optional[str] = None,
        completed_since: Optional[datetime] = None,
    ) -> List[models.Task]:
        """List a user's tasks matching every filter given. Order is unspecified."""

    @abstractmethod
    def count_tasks(
        self,
        user_id: str,
        completed: Optional[bool] = None,
        urgency: Optional[str] = None,
        completed_since: Optional[datetime] = None,
    ) -> int:
        pass

    @abstractmethod
    def update_task(self, task_id: str, user_id: str, fields: Dict[str, Any]) -> models.Task:
        pass

    @abstractmethod
    def delete_task(self, task_id: str, user_id: str) -> None:
        pass

    # Achievements (append-only)

    @abstractmethod
    def add_achievement(self, user_id: str, fields: Dict[str, Any]) -> models.Achievement:
        pass

    @abstractmethod
    def get_achievement(self, achievement_id: str, user_id: str) -> models.Achievement:
        pass

    @abstractmethod
    def list_achievements(
        self, user_id: str, limit: Optional[int] = None
    ) -> List[models.Achievement]:
        """Achievements of a user, most recently unlocked first."""

    # Daily stats, keyed by (user_id, local midnight)

    @abstractmethod
    def get_daily_stat(
        self, user_id: str, day: datetime, for_update: bool = False
    ) -> Optional[models.DailyStat]:
        pass

    @abstractmethod
    def save_daily_stat(
        self, user_id: str, day: datetime, fields: Dict[str, Any]
    ) -> models.DailyStat:
        """Apply counter values to the row for ``day``, creating it zero-seeded if absent."""

    @abstractmethod
    def list_daily_stats(self, user_id: str, since: datetime) -> List[models.DailyStat]:
        """Rows dated on or after ``since``, newest first."""


DAILY_STAT_COUNTERS = (
    "tasks_completed",
    "immediate_completed",
    "medium_completed",
    "delayed_completed",
    "xp_earned",
)
