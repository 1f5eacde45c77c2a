"""
Booking schemas package.
"""

from frontdesk.schemas.booking.booking_base import (
    BookingCancel,
    BookingCreate,
    BookingFilter,
    BookingUpdate,
)
from frontdesk.schemas.booking.booking_response import (
    BookingResponse,
    BookingStatusHistoryResponse,
    InvoiceBreakdown,
)

__all__ = [
    "BookingCancel",
    "BookingCreate",
    "BookingFilter",
    "BookingUpdate",
    "BookingResponse",
    "BookingStatusHistoryResponse",
    "InvoiceBreakdown",
]
