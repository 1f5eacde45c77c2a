"""
Room repository: the room directory's data access.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from frontdesk.models.base.enums import RoomStatus
from frontdesk.models.room import Room
from frontdesk.repositories.base.base_repository import BaseRepository
from frontdesk.schemas.room.room import RoomFilter


class RoomRepository(BaseRepository[Room]):
    """Data access for rooms, always returned in room-number order."""

    def __init__(self, db: Session):
        super().__init__(Room, db)

    def list_rooms(self, room_filter: Optional[RoomFilter] = None) -> List[Room]:
        stmt = select(Room)
        if room_filter is not None:
            if room_filter.status is not None:
                stmt = stmt.where(Room.status == room_filter.status)
            if room_filter.type is not None:
                stmt = stmt.where(Room.type == room_filter.type)
            if room_filter.floor is not None:
                stmt = stmt.where(Room.floor == room_filter.floor)
        stmt = stmt.order_by(Room.number)
        return self.find(stmt)

    def get_by_number(self, number: str) -> Optional[Room]:
        stmt = select(Room).where(Room.number == number)
        rooms = self.find(stmt)
        return rooms[0] if rooms else None

    def update_status(self, room: Room, status: RoomStatus) -> Room:
        return self.update(room, {"status": status})
