from __future__ import annotations

from datetime import date

import pytest

from frontdesk.core.exceptions import AuthorizationError, ResourceNotFoundError, ValidationError
from frontdesk.models import Room
from frontdesk.models.base.enums import RoomStatus, TaskPriority, TaskStatus, TaskType, UserRole
from frontdesk.schemas.booking import BookingCreate
from frontdesk.schemas.housekeeping import TaskCreate, TaskFilter, TaskUpdate
from frontdesk.services.common.permissions import CurrentUser
from frontdesk.services.housekeeping import HousekeepingService


@pytest.fixture()
def housekeeping(session_factory):
    return HousekeepingService(session_factory)


def _room_status(session_factory, room_id):
    with session_factory() as session:
        return session.get(Room, room_id).status


def _checked_out_task(lifecycle, receptionist, housekeeping, room, guest_details):
    booking = lifecycle.create_booking(
        BookingCreate(guest=guest_details, room_id=room.id, check_in=date(2024, 3, 5), check_out=date(2024, 3, 6)),
        receptionist,
    )
    lifecycle.check_in(booking.id, receptionist)
    lifecycle.check_out(booking.id, receptionist)
    (task,) = housekeeping.tasks_for("unassigned")
    return task


def _assign(housekeeping, admin, task, user):
    return housekeeping.update_task(task.id, TaskUpdate(assigned_to=user.name), admin)


def test_completing_checkout_cleaning_frees_the_room(
    session_factory, lifecycle, housekeeping, admin, receptionist, housekeeper, rooms, guest_details
):
    room = rooms["101"]
    task = _checked_out_task(lifecycle, receptionist, housekeeping, room, guest_details)
    task = _assign(housekeeping, admin, task, housekeeper)
    assert _room_status(session_factory, room.id) == RoomStatus.CLEANING

    started = housekeeping.update_task_status(task.id, TaskStatus.IN_PROGRESS, housekeeper)
    assert started.started_at is not None
    assert _room_status(session_factory, room.id) == RoomStatus.CLEANING

    done = housekeeping.update_task_status(task.id, TaskStatus.COMPLETED, housekeeper, notes="Linen changed")
    assert done.completed_at is not None
    assert done.notes == "Linen changed"
    assert _room_status(session_factory, room.id) == RoomStatus.AVAILABLE


def test_pending_checkout_task_can_be_completed_in_one_step(
    session_factory, lifecycle, housekeeping, admin, receptionist, housekeeper, rooms, guest_details
):
    room = rooms["102"]
    task = _checked_out_task(lifecycle, receptionist, housekeeping, room, guest_details)
    task = _assign(housekeeping, admin, task, housekeeper)
    assert task.status == TaskStatus.PENDING

    done = housekeeping.update_task_status(task.id, TaskStatus.COMPLETED, housekeeper)
    assert done.status == TaskStatus.COMPLETED
    assert done.started_at == done.completed_at
    assert _room_status(session_factory, room.id) == RoomStatus.AVAILABLE


def test_checkout_task_waits_for_reassignment(lifecycle, housekeeping, admin, receptionist, housekeeper, rooms, guest_details):
    task = _checked_out_task(lifecycle, receptionist, housekeeping, rooms["101"], guest_details)
    assert task.assigned_to == "unassigned"
    with pytest.raises(AuthorizationError):
        housekeeping.update_task_status(task.id, TaskStatus.COMPLETED, housekeeper)

    _assign(housekeeping, admin, task, housekeeper)
    assert [t.id for t in housekeeping.tasks_for_user(housekeeper)] == [task.id]


def test_completing_maintenance_does_not_touch_room(session_factory, housekeeping, admin, rooms):
    room = rooms["301"]
    task = housekeeping.create_task(
        TaskCreate(room_id=room.id, assigned_to="Bob Fixit", task_type=TaskType.MAINTENANCE),
        admin,
    )
    housekeeping.update_task_status(task.id, TaskStatus.IN_PROGRESS, admin)
    housekeeping.update_task_status(task.id, TaskStatus.COMPLETED, admin)
    assert _room_status(session_factory, room.id) == RoomStatus.MAINTENANCE


def test_cleaning_an_available_room_leaves_it_available(session_factory, housekeeping, admin, rooms):
    task = housekeeping.create_task(TaskCreate(room_id=rooms["102"].id, assigned_to="Ann"), admin)
    assert task.assigned_by == admin.actor
    assert task.priority == TaskPriority.MEDIUM
    housekeeping.update_task_status(task.id, TaskStatus.IN_PROGRESS, admin)
    housekeeping.update_task_status(task.id, TaskStatus.COMPLETED, admin)
    assert _room_status(session_factory, rooms["102"].id) == RoomStatus.AVAILABLE


@pytest.mark.parametrize(
    "path",
    [
        [TaskStatus.IN_PROGRESS, TaskStatus.PENDING],
        [TaskStatus.CANCELLED, TaskStatus.IN_PROGRESS],
        [TaskStatus.IN_PROGRESS, TaskStatus.COMPLETED, TaskStatus.CANCELLED],
    ],
)
def test_invalid_task_moves_are_rejected(housekeeping, admin, rooms, path):
    task = housekeeping.create_task(TaskCreate(room_id=rooms["101"].id, assigned_to="Ann"), admin)
    *allowed, rejected = path
    for status in allowed:
        housekeeping.update_task_status(task.id, status, admin)
    with pytest.raises(ValidationError):
        housekeeping.update_task_status(task.id, rejected, admin)


def test_only_assignee_or_admin_may_update_status(housekeeping, admin, receptionist, rooms):
    task = housekeeping.create_task(TaskCreate(room_id=rooms["101"].id, assigned_to="Ann"), admin)
    stranger = CurrentUser(user_id="u-other", role=UserRole.HOUSEKEEPING, name="Bea")
    ann = CurrentUser(user_id="u-ann", role=UserRole.HOUSEKEEPING, name="Ann")

    with pytest.raises(AuthorizationError):
        housekeeping.update_task_status(task.id, TaskStatus.IN_PROGRESS, stranger)
    with pytest.raises(AuthorizationError):
        housekeeping.update_task_status(task.id, TaskStatus.IN_PROGRESS, receptionist)
    assert housekeeping.update_task_status(task.id, TaskStatus.IN_PROGRESS, ann).status == TaskStatus.IN_PROGRESS


def test_task_management_is_admin_only(housekeeping, admin, receptionist, housekeeper, rooms):
    with pytest.raises(AuthorizationError):
        housekeeping.create_task(TaskCreate(room_id=rooms["101"].id, assigned_to="Ann"), receptionist)

    task = housekeeping.create_task(TaskCreate(room_id=rooms["101"].id, assigned_to="Ann"), admin)
    with pytest.raises(AuthorizationError):
        housekeeping.update_task(task.id, TaskUpdate(assigned_to="Bea"), housekeeper)
    with pytest.raises(AuthorizationError):
        housekeeping.delete_task(task.id, housekeeper)

    updated = housekeeping.update_task(task.id, TaskUpdate(assigned_to="Bea", priority=TaskPriority.HIGH), admin)
    assert updated.assigned_to == "Bea"
    assert updated.priority == TaskPriority.HIGH

    housekeeping.delete_task(task.id, admin)
    with pytest.raises(ResourceNotFoundError):
        housekeeping.update_task_status(task.id, TaskStatus.IN_PROGRESS, admin)


def test_task_for_missing_room_is_not_found(housekeeping, admin):
    with pytest.raises(ResourceNotFoundError):
        housekeeping.create_task(TaskCreate(room_id="missing", assigned_to="Ann"), admin)


def test_task_lists(housekeeping, admin, housekeeper, rooms):
    ann = housekeeping.create_task(TaskCreate(room_id=rooms["101"].id, assigned_to="Ann"), admin)
    mine = housekeeping.create_task(
        TaskCreate(room_id=rooms["102"].id, assigned_to="Hana Keeper", task_type=TaskType.INSPECTION),
        admin,
    )

    assert {t.id for t in housekeeping.list_tasks(None, housekeeper)} == {ann.id, mine.id}
    inspections = housekeeping.list_tasks(TaskFilter(task_type=TaskType.INSPECTION), admin)
    assert [t.id for t in inspections] == [mine.id]
    assert [t.id for t in housekeeping.tasks_for_user(housekeeper)] == [mine.id]


def test_guests_cannot_list_tasks(housekeeping, guest_user):
    with pytest.raises(AuthorizationError):
        housekeeping.list_tasks(None, guest_user)
