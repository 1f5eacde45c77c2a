# frontdesk/services/housekeeping/housekeeping_service.py
"""
Housekeeping task service.

Tasks move pending -> in_progress -> completed. A pending task may also be
completed in one step, and either open status may be cancelled. Completing
a cleaning task releases a room waiting in ``cleaning`` in the same
transaction.
"""

from typing import Callable, Dict, FrozenSet, List, Optional

from sqlalchemy.orm import Session

from frontdesk.core.exceptions import ValidationError
from frontdesk.core.logging import get_audit_logger, get_logger
from frontdesk.models.base.enums import RoomStatus, TaskStatus, TaskType, UserRole
from frontdesk.models.housekeeping import HousekeepingTask
from frontdesk.repositories.housekeeping import HousekeepingTaskRepository
from frontdesk.repositories.room import RoomRepository
from frontdesk.schemas.housekeeping.task import TaskCreate, TaskFilter, TaskUpdate
from frontdesk.services.common.permissions import (
    CurrentUser,
    can_manage_housekeeping,
    can_update_task,
    require,
    require_capability,
)
from frontdesk.services.common.unit_of_work import UnitOfWork
from frontdesk.utils.date_utils import now_utc

logger = get_logger(__name__)
audit = get_audit_logger()

TASK_TRANSITIONS: Dict[TaskStatus, FrozenSet[TaskStatus]] = {
    TaskStatus.PENDING: frozenset({TaskStatus.IN_PROGRESS, TaskStatus.COMPLETED, TaskStatus.CANCELLED}),
    TaskStatus.IN_PROGRESS: frozenset({TaskStatus.COMPLETED, TaskStatus.CANCELLED}),
    TaskStatus.COMPLETED: frozenset(),
    TaskStatus.CANCELLED: frozenset(),
}

ROOM_RELEASING_TASKS = frozenset({TaskType.CLEANING, TaskType.DEEP_CLEAN})


class HousekeepingService:
    """
    Service for housekeeping tasks.

    Responsibilities:
    - Create, edit and delete tasks (admin)
    - Task lists for the dashboard and per assignee
    - Status updates by the assignee, with the room release on completion
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def create_task(self, data: TaskCreate, user: CurrentUser) -> HousekeepingTask:
        require_capability(can_manage_housekeeping, user)
        with UnitOfWork(self.session_factory) as uow:
            room = uow.get_repo(RoomRepository).get_or_raise(data.room_id)
            task = uow.get_repo(HousekeepingTaskRepository).create(
                HousekeepingTask(**data.model_dump(), assigned_by=user.actor)
            )
        logger.info(
            f"Task created for room {room.number}",
            extra={"task_id": task.id, "assigned_to": task.assigned_to},
        )
        return task

    def list_tasks(self, task_filter: Optional[TaskFilter], user: CurrentUser) -> List[HousekeepingTask]:
        require(user.is_staff or user.role == UserRole.HOUSEKEEPING, user, "view_tasks")
        with UnitOfWork(self.session_factory) as uow:
            return uow.get_repo(HousekeepingTaskRepository).list_tasks(task_filter)

    def tasks_for(self, assignee: str) -> List[HousekeepingTask]:
        """Tasks assigned to a staff member, newest first."""
        with UnitOfWork(self.session_factory) as uow:
            return uow.get_repo(HousekeepingTaskRepository).for_assignee(assignee)

    def tasks_for_user(self, user: CurrentUser) -> List[HousekeepingTask]:
        """Tasks assigned to the caller by name or user id."""
        tasks = self.tasks_for(user.actor)
        if user.name and user.name != user.user_id:
            seen = {task.id for task in tasks}
            tasks += [task for task in self.tasks_for(user.user_id) if task.id not in seen]
        return tasks

    def update_task_status(
        self,
        task_id: str,
        status: TaskStatus,
        user: CurrentUser,
        notes: Optional[str] = None,
    ) -> HousekeepingTask:
        """
        Advance a task.

        Args:
            task_id: Task to update
            status: Target status
            user: Caller; must be the assignee or an admin
            notes: Optional notes replacing the current ones

        Returns:
            Updated task

        Raises:
            ValidationError: If the move is not allowed from the current status
        """
        with UnitOfWork(self.session_factory) as uow:
            tasks = uow.get_repo(HousekeepingTaskRepository)
            task = tasks.get_or_raise(task_id, for_update=True)
            require(can_update_task(user, task), user, "update_task")

            if status not in TASK_TRANSITIONS[task.status]:
                raise ValidationError(
                    f"Cannot move task from {task.status.value} to {status.value}",
                    field_errors={"status": [f"not allowed from {task.status.value}"]},
                )

            changes = {"status": status}
            if notes is not None:
                changes["notes"] = notes
            if status == TaskStatus.IN_PROGRESS:
                changes["started_at"] = now_utc()
            elif status == TaskStatus.COMPLETED:
                changes["completed_at"] = now_utc()
                if task.started_at is None:
                    changes["started_at"] = changes["completed_at"]
            previous = task.status
            tasks.update(task, changes)

            released = False
            if status == TaskStatus.COMPLETED and task.task_type in ROOM_RELEASING_TASKS:
                rooms = uow.get_repo(RoomRepository)
                room = rooms.get_or_raise(task.room_id, for_update=True)
                if room.status == RoomStatus.CLEANING:
                    rooms.update_status(room, RoomStatus.AVAILABLE)
                    released = True

        audit.info(
            "task_status_changed",
            task_id=task.id,
            room_id=task.room_id,
            from_status=previous.value,
            to_status=status.value,
            room_released=released,
            user_id=user.user_id,
        )
        return task

    def update_task(self, task_id: str, data: TaskUpdate, user: CurrentUser) -> HousekeepingTask:
        require_capability(can_manage_housekeeping, user)
        changes = data.model_dump(exclude_unset=True)
        with UnitOfWork(self.session_factory) as uow:
            tasks = uow.get_repo(HousekeepingTaskRepository)
            task = tasks.get_or_raise(task_id, for_update=True)
            tasks.update(task, changes)
        return task

    def delete_task(self, task_id: str, user: CurrentUser) -> None:
        require_capability(can_manage_housekeeping, user)
        with UnitOfWork(self.session_factory) as uow:
            tasks = uow.get_repo(HousekeepingTaskRepository)
            tasks.delete(tasks.get_or_raise(task_id))
