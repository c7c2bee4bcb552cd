# taskvibe/storage/sql_store.py
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy.orm import Session

from taskvibe import models
from taskvibe.core.exceptions import ResourceNotFoundException
from taskvibe.repositories.achievement_repository import AchievementRepository
from taskvibe.repositories.daily_stat_repository import DailyStatRepository
from taskvibe.repositories.task_repository import TaskRepository
from taskvibe.repositories.user_repository import UserRepository
from taskvibe.storage.base import DAILY_STAT_COUNTERS, EntityStore

logger = logging.getLogger(__name__)


class SqlAlchemyStore(EntityStore):
    """Entity store backed by one SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db)
        self.tasks = TaskRepository(db)
        self.achievements = AchievementRepository(db)
        self.daily_stats = DailyStatRepository(db)
        self._depth = 0

    @contextmanager
    def atomic(self) -> Iterator["SqlAlchemyStore"]:
        self._depth += 1
        try:
            yield self
        except Exception:
            self._depth -= 1
            if self._depth == 0:
                logger.debug("Rolling back unit of work")
                self.db.rollback()
            raise
        else:
            self._depth -= 1
            if self._depth == 0:
                self.db.commit()

    # Users

    def get_user(self, user_id: str, for_update: bool = False) -> Optional[models.User]:
        return self.users.get_by_id(user_id, for_update=for_update)

    def upsert_user(self, user_id: str, fields: Dict[str, Any]) -> models.User:
        with self.atomic():
            user = self.users.get_by_id(user_id, for_update=True)
            if user is None:
                return self.users.create({**fields, "id": user_id})
            return self.users.update(user, {**fields, "updated_at": datetime.now()})

    def update_user(self, user_id: str, fields: Dict[str, Any]) -> models.User:
        with self.atomic():
            user = self.users.get_by_id(user_id, for_update=True)
            if user is None:
                raise ResourceNotFoundException(f"User with ID {user_id} not found")
            return self.users.update(user, {"updated_at": datetime.now(), **fields})

    # Tasks

    def create_task(self, user_id: str, fields: Dict[str, Any]) -> models.Task:
        with self.atomic():
            return self.tasks.create({**fields, "user_id": user_id})

    def get_task(self, task_id: str, user_id: str) -> models.Task:
        task = self.tasks.get_owned(task_id, user_id)
        if task is None:
            raise ResourceNotFoundException("Task not found")
        return task

    def list_tasks(
        self,
        user_id: str,
        completed: Optional[bool] = None,
        urgency: Optional[str] = None,
        completed_since: Optional[datetime] = None,
    ) -> List[models.Task]:
        return self.tasks.get_user_tasks(user_id, completed, urgency, completed_since)

    def count_tasks(
        self,
        user_id: str,
        completed: Optional[bool] = None,
        urgency: Optional[str] = None,
        completed_since: Optional[datetime] = None,
    ) -> int:
        return self.tasks.count_user_tasks(user_id, completed, urgency, completed_since)

    def update_task(self, task_id: str, user_id: str, fields: Dict[str, Any]) -> models.Task:
        with self.atomic():
            task = self.get_task(task_id, user_id)
            return self.tasks.update(task, {"updated_at": datetime.now(), **fields})

    def delete_task(self, task_id: str, user_id: str) -> None:
        with self.atomic():
            self.tasks.delete(self.get_task(task_id, user_id))

    # Achievements

    def add_achievement(self, user_id: str, fields: Dict[str, Any]) -> models.Achievement:
        with self.atomic():
            return self.achievements.create({**fields, "user_id": user_id})

    def get_achievement(self, achievement_id: str, user_id: str) -> models.Achievement:
        achievement = self.achievements.get_owned(achievement_id, user_id)
        if achievement is None:
            raise ResourceNotFoundException("Achievement not found")
        return achievement

    def list_achievements(
        self, user_id: str, limit: Optional[int] = None
    ) -> List[models.Achievement]:
        return self.achievements.get_user_achievements(user_id, limit=limit)

    # Daily stats

    def get_daily_stat(
        self, user_id: str, day: datetime, for_update: bool = False
    ) -> Optional[models.DailyStat]:
        return self.daily_stats.get_for_day(user_id, day, for_update=for_update)

    def save_daily_stat(
        self, user_id: str, day: datetime, fields: Dict[str, Any]
    ) -> models.DailyStat:
        counters = {k: v for k, v in fields.items() if k in DAILY_STAT_COUNTERS}
        with self.atomic():
            stat = self.daily_stats.get_for_day(user_id, day, for_update=True)
            if stat is None:
                seeded = {counter: 0 for counter in DAILY_STAT_COUNTERS}
                return self.daily_stats.create(
                    {**seeded, **counters, "user_id": user_id, "date": day}
                )
            return self.daily_stats.update(stat, counters)

    def list_daily_stats(self, user_id: str, since: datetime) -> List[models.DailyStat]:
        return self.daily_stats.get_since(user_id, since)
