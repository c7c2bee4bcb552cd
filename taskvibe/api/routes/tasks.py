# taskvibe/api/routes/tasks.py
import logging
from typing import Any, List

from fastapi import APIRouter, Depends, Query

from taskvibe import models, schemas
from taskvibe.api import deps
from taskvibe.core.logging import log_context
from taskvibe.services.task_service import TaskService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=List[schemas.Task])
def read_tasks(
    completed: bool = Query(False),
    current_user: models.User = Depends(deps.get_current_user),
    task_service: TaskService = Depends(deps.get_task_service()),
) -> Any:
    """
    Retrieve tasks ordered by urgency bucket, then priority.
    """
    with log_context(user_id=current_user.id, action="list_tasks", completed=completed):
        return task_service.list_tasks(current_user.id, completed=completed)


@router.get("/completed", response_model=List[schemas.Task])
def read_completed_tasks(
    current_user: models.User = Depends(deps.get_current_user),
    task_service: TaskService = Depends(deps.get_task_service()),
) -> Any:
    """
    Retrieve the task history (completed tasks).
    """
    with log_context(user_id=current_user.id, action="list_completed_tasks"):
        return task_service.list_tasks(current_user.id, completed=True)


@router.post("/", response_model=schemas.Task)
def create_task(
    *,
    task_in: schemas.TaskCreate,
    current_user: models.User = Depends(deps.get_current_user),
    task_service: TaskService = Depends(deps.get_task_service()),
) -> Any:
    """
    Create new task.
    """
    with log_context(user_id=current_user.id, action="create_task", urgency=task_in.urgency):
        logger.info(f"User {current_user.id} creating task: {task_in.title}")
        return task_service.create_task(current_user.id, task_in)


@router.patch("/{task_id}", response_model=schemas.Task)
def update_task(
    *,
    task_id: str,
    task_in: schemas.TaskUpdate,
    current_user: models.User = Depends(deps.get_current_user),
    task_service: TaskService = Depends(deps.get_task_service()),
) -> Any:
    """
    Update a task.
    """
    with log_context(user_id=current_user.id, action="update_task", task_id=task_id):
        return task_service.update_task(current_user.id, task_id, task_in)


@router.delete("/{task_id}")
def delete_task(
    *,
    task_id: str,
    current_user: models.User = Depends(deps.get_current_user),
    task_service: TaskService = Depends(deps.get_task_service()),
) -> Any:
    """
    Delete a task.
    """
    with log_context(user_id=current_user.id, action="delete_task", task_id=task_id):
        task_service.delete_task(current_user.id, task_id)
        return {"success": True}


@router.post("/{task_id}/complete", response_model=schemas.Task)
def complete_task(
    *,
    task_id: str,
    current_user: models.User = Depends(deps.get_current_user),
    task_service: TaskService = Depends(deps.get_task_service()),
) -> Any:
    """
    Complete a task and collect its XP.
    """
    with log_context(user_id=current_user.id, action="complete_task", task_id=task_id):
        return task_service.complete_task(current_user.id, task_id)


@router.post("/{task_id}/uncomplete", response_model=schemas.Task)
def uncomplete_task(
    *,
    task_id: str,
    current_user: models.User = Depends(deps.get_current_user),
    task_service: TaskService = Depends(deps.get_task_service()),
) -> Any:
    """
    Move a completed task back to the active list.
    """
    with log_context(user_id=current_user.id, action="uncomplete_task", task_id=task_id):
        return task_service.uncomplete_task(current_user.id, task_id)
