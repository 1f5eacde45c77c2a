"""
Repositories package.

One repository per aggregate; all share the session of the Unit of Work
that created them.
"""

from frontdesk.repositories.base import BaseRepository
from frontdesk.repositories.booking import BookingRepository
from frontdesk.repositories.guest import GuestRepository
from frontdesk.repositories.housekeeping import HousekeepingTaskRepository
from frontdesk.repositories.payment import PaymentRepository
from frontdesk.repositories.room import RoomRepository

__all__ = [
    "BaseRepository",
    "BookingRepository",
    "GuestRepository",
    "HousekeepingTaskRepository",
    "PaymentRepository",
    "RoomRepository",
]
