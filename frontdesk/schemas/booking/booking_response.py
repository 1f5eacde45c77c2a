"""
Booking response schemas.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import Field

from frontdesk.models.base.enums import (
    BookingPaymentStatus,
    BookingSource,
    BookingStatus,
    PaymentMethod,
)
from frontdesk.schemas.common.base import BaseResponseSchema, BaseSchema

__all__ = [
    "BookingResponse",
    "BookingStatusHistoryResponse",
    "InvoiceBreakdown",
]


class BookingResponse(BaseResponseSchema):
    booking_number: str
    guest_id: str
    guest_snapshot: Dict[str, Any] = Field(default_factory=dict)
    room_id: str
    check_in: datetime
    check_out: datetime
    nights: int
    adults: int
    children: int
    status: BookingStatus
    source: BookingSource
    room_rate: int
    subtotal: int
    tax_rate: Optional[Decimal] = None
    tax_amount: Optional[int] = None
    service_charge_rate: Optional[Decimal] = None
    service_charge: Optional[int] = None
    total_amount: int
    paid_amount: int
    balance: int = Field(..., description="total_amount - paid_amount")
    payment_status: BookingPaymentStatus
    payment_method: Optional[PaymentMethod] = None
    special_requests: Optional[str] = None
    actual_check_in_at: Optional[datetime] = None
    actual_check_out_at: Optional[datetime] = None
    checked_in_by: Optional[str] = None
    checked_out_by: Optional[str] = None
    cancelled_at: Optional[datetime] = None
    cancelled_by: Optional[str] = None
    cancellation_reason: Optional[str] = None
    created_by: Optional[str] = None


class BookingStatusHistoryResponse(BaseSchema):
    id: str
    booking_id: str
    from_status: Optional[BookingStatus] = None
    to_status: BookingStatus
    changed_by: Optional[str] = None
    reason: Optional[str] = None
    changed_at: datetime


class InvoiceBreakdown(BaseSchema):
    """Cost breakdown recomputed from the booking's stored rate snapshot."""

    booking_id: str
    booking_number: str
    currency: str
    nights: int
    room_rate: int
    subtotal: int
    tax_rate: Optional[Decimal] = None
    tax: Optional[int] = None
    service_charge_rate: Optional[Decimal] = None
    service_charge: Optional[int] = None
    total: int
    paid_amount: int
    balance: int
    payment_status: BookingPaymentStatus
