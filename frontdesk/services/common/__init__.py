"""
Shared service-layer building blocks.
"""

from frontdesk.services.common.permissions import (
    CurrentUser,
    can_create_booking,
    can_delete_bookings,
    can_manage_bookings,
    can_manage_guests,
    can_manage_housekeeping,
    can_manage_rooms,
    can_update_room_status,
    can_update_task,
    can_view_booking,
    can_view_reports,
    require,
    require_capability,
)
from frontdesk.services.common.unit_of_work import UnitOfWork

__all__ = [
    "CurrentUser",
    "UnitOfWork",
    "can_create_booking",
    "can_delete_bookings",
    "can_manage_bookings",
    "can_manage_guests",
    "can_manage_housekeeping",
    "can_manage_rooms",
    "can_update_room_status",
    "can_update_task",
    "can_view_booking",
    "can_view_reports",
    "require",
    "require_capability",
]
