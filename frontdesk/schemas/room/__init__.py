"""Room schemas."""

from frontdesk.schemas.room.room import (
    AvailabilityCriteria,
    RoomCreate,
    RoomFilter,
    RoomResponse,
    RoomStatusUpdate,
    RoomUpdate,
)

__all__ = [
    "AvailabilityCriteria",
    "RoomCreate",
    "RoomFilter",
    "RoomResponse",
    "RoomStatusUpdate",
    "RoomUpdate",
]
