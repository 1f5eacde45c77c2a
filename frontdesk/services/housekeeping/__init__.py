"""Housekeeping services."""

from frontdesk.services.housekeeping.housekeeping_service import (
    ROOM_RELEASING_TASKS,
    TASK_TRANSITIONS,
    HousekeepingService,
)

__all__ = ["HousekeepingService", "ROOM_RELEASING_TASKS", "TASK_TRANSITIONS"]
