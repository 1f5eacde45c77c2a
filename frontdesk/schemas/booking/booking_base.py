"""
Booking request schemas.

This module defines the payloads accepted by the booking lifecycle:
creation, explicit edits, cancellation and filters.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator, model_validator

from frontdesk.models.base.enums import BookingSource, BookingStatus, PaymentMethod
from frontdesk.schemas.common.base import (
    BaseCreateSchema,
    BaseFilterSchema,
    BaseSchema,
    BaseUpdateSchema,
)
from frontdesk.schemas.guest.guest import GuestCreate
from frontdesk.utils.date_utils import coerce_stay_instant

__all__ = [
    "BookingCreate",
    "BookingUpdate",
    "BookingCancel",
    "BookingFilter",
]


class BookingCreate(BaseCreateSchema):
    """
    Booking creation payload.

    The guest is either an existing ``guest_id`` or inline ``guest``
    details, which are matched to a registered guest by email or
    registered on the fly.
    """

    guest_id: Optional[str] = Field(None, description="Existing guest identifier")
    guest: Optional[GuestCreate] = Field(None, description="Inline guest details")
    room_id: str = Field(..., description="Room to book")
    check_in: datetime = Field(..., description="Planned check-in (date or datetime)")
    check_out: datetime = Field(..., description="Planned check-out, after check-in")
    adults: int = Field(1, ge=1, le=20)
    children: int = Field(0, ge=0, le=20)
    payment_method: Optional[PaymentMethod] = None
    special_requests: Optional[str] = Field(None, max_length=2000)
    source: BookingSource = BookingSource.WALK_IN

    normalize_stay_dates = field_validator("check_in", "check_out", mode="before")(coerce_stay_instant)

    @model_validator(mode="after")
    def require_guest(self) -> "BookingCreate":
        if not self.guest_id and self.guest is None:
            raise ValueError("Either guest_id or guest details are required")
        return self


class BookingUpdate(BaseUpdateSchema):
    """Explicit edit of a confirmed booking. Totals are recomputed when dates change."""

    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    adults: Optional[int] = Field(None, ge=1, le=20)
    children: Optional[int] = Field(None, ge=0, le=20)
    payment_method: Optional[PaymentMethod] = None
    special_requests: Optional[str] = Field(None, max_length=2000)

    normalize_stay_dates = field_validator("check_in", "check_out", mode="before")(coerce_stay_instant)


class BookingCancel(BaseSchema):
    reason: Optional[str] = Field(None, max_length=1000, description="Cancellation reason")


class BookingFilter(BaseFilterSchema):
    """Booking store filter; every field is optional."""

    status: Optional[BookingStatus] = None
    room_id: Optional[str] = None
    guest_id: Optional[str] = None
    check_in_from: Optional[datetime] = None
    check_in_to: Optional[datetime] = None
    search_text: Optional[str] = Field(None, max_length=100, description="Booking number or guest name/email")
    skip: int = Field(0, ge=0)
    limit: int = Field(100, ge=1, le=500)
