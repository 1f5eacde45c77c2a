"""
Booking models package.
"""

from frontdesk.models.booking.booking import Booking, BookingStatusHistory

__all__ = ["Booking", "BookingStatusHistory"]
