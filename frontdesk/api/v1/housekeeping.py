"""
Housekeeping task endpoints.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from frontdesk.api.deps import get_current_user, get_housekeeping_service
from frontdesk.models.base.enums import TaskPriority, TaskStatus, TaskType
from frontdesk.schemas.common import MessageResponse
from frontdesk.schemas.housekeeping import (
    TaskCreate,
    TaskFilter,
    TaskResponse,
    TaskStatusUpdate,
    TaskUpdate,
)
from frontdesk.services.common.permissions import CurrentUser
from frontdesk.services.housekeeping import HousekeepingService

router = APIRouter(prefix="/housekeeping", tags=["Housekeeping"])


@router.get("/tasks", response_model=List[TaskResponse])
def list_tasks(
    task_status: Optional[TaskStatus] = Query(None, alias="status"),
    room_id: Optional[str] = None,
    assigned_to: Optional[str] = None,
    task_type: Optional[TaskType] = None,
    priority: Optional[TaskPriority] = None,
    service: HousekeepingService = Depends(get_housekeeping_service),
    user: CurrentUser = Depends(get_current_user),
):
    task_filter = TaskFilter(
        status=task_status,
        room_id=room_id,
        assigned_to=assigned_to,
        task_type=task_type,
        priority=priority,
    )
    return service.list_tasks(task_filter, user)


@router.get("/tasks/mine", response_model=List[TaskResponse])
def list_my_tasks(
    service: HousekeepingService = Depends(get_housekeeping_service),
    user: CurrentUser = Depends(get_current_user),
):
    return service.tasks_for_user(user)


@router.post("/tasks", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    payload: TaskCreate,
    service: HousekeepingService = Depends(get_housekeeping_service),
    user: CurrentUser = Depends(get_current_user),
):
    return service.create_task(payload, user)


@router.patch("/tasks/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: str,
    payload: TaskUpdate,
    service: HousekeepingService = Depends(get_housekeeping_service),
    user: CurrentUser = Depends(get_current_user),
):
    return service.update_task(task_id, payload, user)


@router.patch("/tasks/{task_id}/status", response_model=TaskResponse)
def update_task_status(
    task_id: str,
    payload: TaskStatusUpdate,
    service: HousekeepingService = Depends(get_housekeeping_service),
    user: CurrentUser = Depends(get_current_user),
):
    return service.update_task_status(task_id, payload.status, user, notes=payload.notes)


@router.delete("/tasks/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: str,
    service: HousekeepingService = Depends(get_housekeeping_service),
    user: CurrentUser = Depends(get_current_user),
):
    service.delete_task(task_id, user)
    return MessageResponse(message="Task deleted")
