# frontdesk/services/room/room_service.py
"""
Room directory service.

CRUD for rooms plus explicit status changes by staff.
"""

from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from frontdesk.core.exceptions import DuplicateEntryError
from frontdesk.core.logging import get_audit_logger, get_logger
from frontdesk.models.base.enums import RoomStatus
from frontdesk.models.room import Room
from frontdesk.repositories.room import RoomRepository
from frontdesk.schemas.room.room import RoomCreate, RoomFilter, RoomUpdate
from frontdesk.services.common.permissions import (
    CurrentUser,
    can_manage_rooms,
    can_update_room_status,
    require,
    require_capability,
)
from frontdesk.services.common.unit_of_work import UnitOfWork

logger = get_logger(__name__)
audit = get_audit_logger()


class RoomService:
    """
    Service for the room directory.

    Responsibilities:
    - List and read rooms
    - Create and edit rooms (admin)
    - Change room status (staff and housekeeping)
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def list_rooms(self, room_filter: Optional[RoomFilter] = None) -> List[Room]:
        with UnitOfWork(self.session_factory) as uow:
            return uow.get_repo(RoomRepository).list_rooms(room_filter)

    def get_room(self, room_id: str) -> Room:
        with UnitOfWork(self.session_factory) as uow:
            return uow.get_repo(RoomRepository).get_or_raise(room_id)

    def create_room(self, data: RoomCreate, user: CurrentUser) -> Room:
        require_capability(can_manage_rooms, user)
        with UnitOfWork(self.session_factory) as uow:
            repo = uow.get_repo(RoomRepository)
            if repo.get_by_number(data.number) is not None:
                raise DuplicateEntryError("Room", "number", data.number)
            room = repo.create(Room(**data.model_dump()))

        logger.info(f"Room {room.number} created", extra={"room_id": room.id})
        return room

    def update_room(self, room_id: str, data: RoomUpdate, user: CurrentUser) -> Room:
        require_capability(can_manage_rooms, user)
        changes = data.model_dump(exclude_unset=True)
        with UnitOfWork(self.session_factory) as uow:
            repo = uow.get_repo(RoomRepository)
            room = repo.get_or_raise(room_id, for_update=True)
            new_number = changes.get("number")
            if new_number and new_number != room.number:
                existing = repo.get_by_number(new_number)
                if existing is not None:
                    raise DuplicateEntryError("Room", "number", new_number)
            repo.update(room, changes)
        return room

    def update_room_status(self, room_id: str, status: RoomStatus, user: CurrentUser) -> Room:
        """
        Set a room's status directly.

        Args:
            room_id: Room to update
            status: New status
            user: Caller (staff or housekeeping)

        Returns:
            Updated room
        """
        require(can_update_room_status(user), user, "update_room_status")
        with UnitOfWork(self.session_factory) as uow:
            repo = uow.get_repo(RoomRepository)
            room = repo.get_or_raise(room_id, for_update=True)
            previous = room.status
            repo.update_status(room, status)

        audit.info(
            "room_status_changed",
            room_id=room.id,
            room_number=room.number,
            from_status=previous.value,
            to_status=status.value,
            user_id=user.user_id,
        )
        return room
