"""
Booking lifecycle services.
"""

from frontdesk.services.booking.booking_lifecycle_service import (
    BOOKING_TRANSITIONS,
    PAYABLE_STATUSES,
    BookingLifecycleService,
    PaymentReceipt,
    assert_booking_transition,
)

__all__ = [
    "BOOKING_TRANSITIONS",
    "PAYABLE_STATUSES",
    "BookingLifecycleService",
    "PaymentReceipt",
    "assert_booking_transition",
]
