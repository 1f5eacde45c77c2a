"""
Housekeeping task repository.
"""

from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from frontdesk.models.base.enums import TaskStatus
from frontdesk.models.housekeeping import HousekeepingTask
from frontdesk.repositories.base.base_repository import BaseRepository
from frontdesk.schemas.housekeeping.task import TaskFilter


class HousekeepingTaskRepository(BaseRepository[HousekeepingTask]):

    def __init__(self, db: Session):
        super().__init__(HousekeepingTask, db)

    def list_tasks(self, task_filter: Optional[TaskFilter] = None) -> List[HousekeepingTask]:
        stmt = select(HousekeepingTask)
        if task_filter is not None:
            if task_filter.status is not None:
                stmt = stmt.where(HousekeepingTask.status == task_filter.status)
            if task_filter.room_id:
                stmt = stmt.where(HousekeepingTask.room_id == task_filter.room_id)
            if task_filter.assigned_to:
                stmt = stmt.where(HousekeepingTask.assigned_to == task_filter.assigned_to)
            if task_filter.task_type is not None:
                stmt = stmt.where(HousekeepingTask.task_type == task_filter.task_type)
            if task_filter.priority is not None:
                stmt = stmt.where(HousekeepingTask.priority == task_filter.priority)
        stmt = stmt.order_by(HousekeepingTask.created_at.desc())
        return self.find(stmt)

    def for_assignee(self, assignee: str) -> List[HousekeepingTask]:
        return self.list_tasks(TaskFilter(assigned_to=assignee))

    def count_by_status(self) -> Dict[TaskStatus, int]:
        return self.count_by(HousekeepingTask.status)
