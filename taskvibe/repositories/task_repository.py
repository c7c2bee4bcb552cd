# taskvibe/repositories/task_repository.py
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from taskvibe.models.task import Task
from taskvibe.repositories.base_repository import BaseRepository


class TaskRepository(BaseRepository[Task]):
    """Repository for task operations."""

    def __init__(self, db: Session):
        super().__init__(Task, db)

    def _filtered(
        self,
        query: Query,
        user_id: str,
        completed: Optional[bool] = None,
        urgency: Optional[str] = None,
        completed_since: Optional[datetime] = None,
    ) -> Query:
        query = query.filter(Task.user_id == user_id)

        if completed is not None:
            query = query.filter(Task.completed == completed)

        if urgency is not None:
            query = query.filter(Task.urgency == urgency)

        if completed_since is not None:
            query = query.filter(Task.completed_at >= completed_since)

        return query

    def get_user_tasks(
        self,
        user_id: str,
        completed: Optional[bool] = None,
        urgency: Optional[str] = None,
        completed_since: Optional[datetime] = None,
    ) -> List[Task]:
        """Get tasks for a specific user with optional filtering."""
        return self._filtered(
            self.db.query(Task), user_id, completed, urgency, completed_since
        ).all()

    def count_user_tasks(
        self,
        user_id: str,
        completed: Optional[bool] = None,
        urgency: Optional[str] = None,
        completed_since: Optional[datetime] = None,
    ) -> int:
        """Count tasks for a specific user with optional filtering."""
        query = self.db.query(func.count(Task.id))
        return self._filtered(query, user_id, completed, urgency, completed_since).scalar() or 0
