"""
Housekeeping task schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from frontdesk.models.base.enums import TaskPriority, TaskStatus, TaskType
from frontdesk.schemas.common.base import (
    BaseCreateSchema,
    BaseFilterSchema,
    BaseResponseSchema,
    BaseSchema,
    BaseUpdateSchema,
)

__all__ = [
    "TaskCreate",
    "TaskUpdate",
    "TaskStatusUpdate",
    "TaskResponse",
    "TaskFilter",
]


class TaskCreate(BaseCreateSchema):
    room_id: str = Field(..., description="Room the task is for")
    assigned_to: str = Field(..., min_length=1, max_length=100, description="Assignee staff name")
    task_type: TaskType = TaskType.CLEANING
    priority: TaskPriority = TaskPriority.MEDIUM
    description: Optional[str] = Field(None, max_length=2000)
    notes: Optional[str] = Field(None, max_length=2000)


class TaskUpdate(BaseUpdateSchema):
    """Admin edit of a task's assignment and details."""

    assigned_to: Optional[str] = Field(None, min_length=1, max_length=100)
    task_type: Optional[TaskType] = None
    priority: Optional[TaskPriority] = None
    description: Optional[str] = Field(None, max_length=2000)
    notes: Optional[str] = Field(None, max_length=2000)


class TaskStatusUpdate(BaseSchema):
    status: TaskStatus
    notes: Optional[str] = Field(None, max_length=2000)


class TaskResponse(BaseResponseSchema):
    room_id: str
    booking_id: Optional[str] = None
    assigned_to: str
    assigned_by: Optional[str] = None
    task_type: TaskType
    status: TaskStatus
    priority: TaskPriority
    description: Optional[str] = None
    notes: Optional[str] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class TaskFilter(BaseFilterSchema):
    status: Optional[TaskStatus] = None
    room_id: Optional[str] = None
    assigned_to: Optional[str] = None
    task_type: Optional[TaskType] = None
    priority: Optional[TaskPriority] = None
