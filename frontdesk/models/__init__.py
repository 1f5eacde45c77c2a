"""
ORM models.

Importing this package registers every table on ``Base.metadata``.
"""

from frontdesk.models.base import Base
from frontdesk.models.booking import Booking, BookingStatusHistory
from frontdesk.models.guest import Guest
from frontdesk.models.housekeeping import HousekeepingTask
from frontdesk.models.payment import Payment
from frontdesk.models.room import Room

__all__ = [
    "Base",
    "Booking",
    "BookingStatusHistory",
    "Guest",
    "HousekeepingTask",
    "Payment",
    "Room",
]
