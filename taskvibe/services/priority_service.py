# taskvibe/services/priority_service.py
import logging
from typing import Iterable, List, Tuple

from taskvibe import models
from taskvibe.models.task import Urgency
from taskvibe.storage.base import EntityStore

logger = logging.getLogger(__name__)

# Display rank of each bucket; unknown urgencies sort after all of them
URGENCY_RANK = {
    Urgency.IMMEDIATE.value: 0,
    Urgency.MEDIUM.value: 1,
    Urgency.DELAYED.value: 2,
}


def task_sort_key(task: models.Task) -> Tuple[int, int, float]:
    """Bucket first, then ascending priority, then newest created first."""
    return (
        URGENCY_RANK.get(task.urgency, len(URGENCY_RANK)),
        task.priority or 0,
        -task.created_at.timestamp(),
    )


def sort_tasks(tasks: Iterable[models.Task]) -> List[models.Task]:
    return sorted(tasks, key=task_sort_key)


class PriorityService:
    """Places new tasks at the back of their urgency bucket."""

    def __init__(self, store: EntityStore):
        self.store = store

    def assign_priority(self, user_id: str, urgency: str) -> int:
        """
        Return 1 + the highest priority among the user's incomplete tasks of
        this urgency, or 1 for an empty bucket. Gaps left by completed or
        deleted tasks are never renumbered.
        """
        pending = self.store.list_tasks(user_id, completed=False, urgency=urgency)
        priority = max((task.priority or 0 for task in pending), default=0) + 1
        logger.debug(f"Assigned priority {priority} in {urgency} bucket for user {user_id}")
        return priority
