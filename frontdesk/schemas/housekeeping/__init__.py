"""Housekeeping schemas."""

from frontdesk.schemas.housekeeping.task import (
    TaskCreate,
    TaskFilter,
    TaskResponse,
    TaskStatusUpdate,
    TaskUpdate,
)

__all__ = ["TaskCreate", "TaskFilter", "TaskResponse", "TaskStatusUpdate", "TaskUpdate"]
