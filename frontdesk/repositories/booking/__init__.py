"""
Booking repositories package.
"""

from frontdesk.repositories.booking.booking_repository import ACTIVE_STATUSES, BookingRepository

__all__ = ["ACTIVE_STATUSES", "BookingRepository"]
