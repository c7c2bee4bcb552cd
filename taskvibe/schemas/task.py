# taskvibe/schemas/task.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from taskvibe.models.task import Urgency


def _strip_title(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("Title must not be empty")
    return value


# Shared properties
class TaskBase(BaseModel):
    title: str = Field(..., max_length=500)
    description: Optional[str] = None
    urgency: Urgency


# Properties to receive on task creation
class TaskCreate(TaskBase):
    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value):
        return _strip_title(value)


# Properties to receive on task update; only the fields sent are applied
class TaskUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = None
    urgency: Optional[Urgency] = None
    completed: Optional[bool] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value):
        return _strip_title(value)


class TaskInDBBase(TaskBase):
    id: str
    user_id: str
    urgency: str
    completed: bool
    completed_at: Optional[datetime] = None
    priority: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# Additional properties to return via API
class Task(TaskInDBBase):
    pass
