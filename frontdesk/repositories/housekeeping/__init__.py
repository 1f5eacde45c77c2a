from frontdesk.repositories.housekeeping.housekeeping_task_repository import HousekeepingTaskRepository

__all__ = ["HousekeepingTaskRepository"]
