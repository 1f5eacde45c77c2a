"""Housekeeping models."""

from frontdesk.models.housekeeping.housekeeping_task import HousekeepingTask

__all__ = ["HousekeepingTask"]
