"""
Payment schemas.
"""

from typing import Optional

from pydantic import Field

from frontdesk.models.base.enums import PaymentMethod, PaymentStatus
from frontdesk.schemas.booking.booking_response import BookingResponse
from frontdesk.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema

__all__ = ["PaymentCreate", "PaymentReceiptResponse", "PaymentResponse"]


class PaymentCreate(BaseCreateSchema):
    """
    Payment against a booking.

    The amount is checked by the lifecycle service (positive, within the
    outstanding balance) so the caller gets the domain error.
    """

    amount: int = Field(..., description="Amount in integer currency units")
    method: PaymentMethod = Field(..., description="mpesa, cash, card or bank_transfer")
    transaction_id: Optional[str] = Field(None, max_length=100)


class PaymentResponse(BaseResponseSchema):
    booking_id: str
    amount: int
    method: PaymentMethod
    status: PaymentStatus
    transaction_id: Optional[str] = None
    processed_by: Optional[str] = None


class PaymentReceiptResponse(BaseSchema):
    """A recorded payment with the booking balance after it."""

    payment: PaymentResponse
    booking: BookingResponse
