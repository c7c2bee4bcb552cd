# taskvibe/services/task_service.py
import logging
from typing import Any, Dict, List, Union

from taskvibe import models, schemas
from taskvibe.core.exceptions import ValidationException
from taskvibe.models.task import Urgency
from taskvibe.services.priority_service import PriorityService, sort_tasks
from taskvibe.services.progression_service import ProgressionService
from taskvibe.storage.base import EntityStore
from taskvibe.utils.clock import Clock, local_now

logger = logging.getLogger(__name__)

URGENCIES = {urgency.value for urgency in Urgency}

# Fields an update may touch; the rest of the task is managed by the service
UPDATABLE_FIELDS = ("title", "description", "urgency", "completed")


class TaskService:
    """Service for task operations."""

    def __init__(self, store: EntityStore, clock: Clock = local_now):
        self.store = store
        self.clock = clock
        self.priority_service = PriorityService(store)
        self.progression_service = ProgressionService(store, clock)

    def create_task(
        self, user_id: str, task_in: Union[schemas.TaskCreate, Dict[str, Any]]
    ) -> models.Task:
        """Create a task at the back of its urgency bucket."""
        data = self._as_dict(task_in)
        title = self._clean_title(data.get("title"))
        urgency = self._clean_urgency(data.get("urgency"))
        now = self.clock()

        with self.store.atomic():
            priority = self.priority_service.assign_priority(user_id, urgency)
            task = self.store.create_task(
                user_id,
                {
                    "title": title,
                    "description": data.get("description"),
                    "urgency": urgency,
                    "completed": False,
                    "completed_at": None,
                    "priority": priority,
                    "created_at": now,
                    "updated_at": now,
                },
            )

        logger.info(f"Created task {task.id} for user {user_id} in {urgency} bucket")
        return task

    def get_task(self, user_id: str, task_id: str) -> models.Task:
        return self.store.get_task(task_id, user_id)

    def list_tasks(self, user_id: str, completed: bool = False) -> List[models.Task]:
        """Get the user's tasks in display order."""
        return sort_tasks(self.store.list_tasks(user_id, completed=completed))

    def update_task(
        self,
        user_id: str,
        task_id: str,
        task_in: Union[schemas.TaskUpdate, Dict[str, Any]],
    ) -> models.Task:
        """
        Apply the supplied fields only. Priority and stats are left alone,
        even when ``completed`` changes through this path.
        """
        data = self._as_dict(task_in, exclude_unset=True)
        updates: Dict[str, Any] = {}

        for field in UPDATABLE_FIELDS:
            if field not in data:
                continue
            value = data[field]
            if value is None and field != "description":
                # title, urgency and completed cannot be cleared
                continue
            updates[field] = value

        if "title" in updates:
            updates["title"] = self._clean_title(updates["title"])
        if "urgency" in updates:
            updates["urgency"] = self._clean_urgency(updates["urgency"])

        now = self.clock()
        with self.store.atomic():
            task = self.store.get_task(task_id, user_id)
            if task.completed and updates.get("urgency", task.urgency) != task.urgency:
                # Uncompleting reverses XP and counters by the task's urgency
                raise ValidationException(
                    "Urgency of a completed task cannot be changed",
                    details={"urgency": updates["urgency"]},
                )
            if "completed" in updates and updates["completed"] != task.completed:
                updates["completed_at"] = now if updates["completed"] else None
            updates["updated_at"] = now
            task = self.store.update_task(task_id, user_id, updates)

        logger.info(f"Updated task {task_id} for user {user_id}: {sorted(updates)}")
        return task

    def delete_task(self, user_id: str, task_id: str) -> None:
        """Delete a task permanently. XP and daily stats already awarded stay."""
        self.store.delete_task(task_id, user_id)
        logger.info(f"Deleted task {task_id} for user {user_id}")

    def complete_task(self, user_id: str, task_id: str) -> models.Task:
        return self.progression_service.complete(task_id, user_id)

    def uncomplete_task(self, user_id: str, task_id: str) -> models.Task:
        return self.progression_service.uncomplete(task_id, user_id)

    @staticmethod
    def _as_dict(payload, exclude_unset: bool = False) -> Dict[str, Any]:
        if isinstance(payload, dict):
            return dict(payload)
        return payload.model_dump(exclude_unset=exclude_unset)

    @staticmethod
    def _clean_title(title: Any) -> str:
        if not isinstance(title, str) or not title.strip():
            raise ValidationException("Task title must not be empty", details={"title": title})
        return title.strip()

    @staticmethod
    def _clean_urgency(urgency: Any) -> str:
        if isinstance(urgency, Urgency):
            return urgency.value
        if urgency not in URGENCIES:
            raise ValidationException(
                f"Urgency must be one of {sorted(URGENCIES)}", details={"urgency": urgency}
            )
        return urgency
