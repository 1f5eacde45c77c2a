"""Room directory and availability services."""

from frontdesk.services.room.availability_service import (
    AvailabilityService,
    find_available_rooms,
    matches_criteria,
)
from frontdesk.services.room.room_service import RoomService

__all__ = ["AvailabilityService", "RoomService", "find_available_rooms", "matches_criteria"]
