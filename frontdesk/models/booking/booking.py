"""
Booking models for managing hotel stays.

This module defines the booking entity with its lifecycle status,
financial fields and the per-transition status history.
"""

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import (
    JSON,
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from frontdesk.models.base.base_model import BaseModel, TimestampModel
from frontdesk.models.base.enums import (
    BookingPaymentStatus,
    BookingSource,
    BookingStatus,
    PaymentMethod,
)
from frontdesk.utils.date_utils import now_utc

if TYPE_CHECKING:
    from frontdesk.models.payment.payment import Payment

__all__ = [
    "Booking",
    "BookingStatusHistory",
]


class Booking(TimestampModel):
    """
    Room booking for a guest.

    Attributes:
        booking_number: Human-readable reference (BK-YYYYMMDD-NNNN)
        guest_id: Registered guest the stay belongs to
        guest_snapshot: Guest details as they were at booking time
        room_id: Booked room
        check_in / check_out: Planned stay instants (naive UTC)
        nights: Billable nights
        status: Lifecycle status
        room_rate: Nightly rate the stay was priced at
        subtotal: nights x room_rate
        tax_rate / tax_amount: Tax applied at booking time, if any
        service_charge_rate / service_charge: Service charge, if any
        total_amount: Amount owed for the stay
        paid_amount: Sum of completed payments
    """

    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("check_out > check_in", name="ck_bookings_dates"),
        CheckConstraint("nights >= 1", name="ck_bookings_nights"),
        CheckConstraint("adults >= 1", name="ck_bookings_adults"),
        CheckConstraint("children >= 0", name="ck_bookings_children"),
        CheckConstraint(
            "paid_amount >= 0 AND paid_amount <= total_amount",
            name="ck_bookings_paid_within_total",
        ),
        Index("ix_bookings_room_dates", "room_id", "check_in", "check_out"),
    )

    booking_number: Mapped[str] = mapped_column(
        String(32),
        unique=True,
        nullable=False,
        index=True,
        comment="Unique booking reference (BK-YYYYMMDD-NNNN)",
    )

    # Foreign Keys
    guest_id: Mapped[str] = mapped_column(
        ForeignKey("guests.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
        comment="Guest the booking belongs to",
    )
    room_id: Mapped[str] = mapped_column(
        ForeignKey("rooms.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
        comment="Booked room",
    )
    guest_snapshot: Mapped[dict] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        comment="Guest details at booking time",
    )

    # Stay
    check_in: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    check_out: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    nights: Mapped[int] = mapped_column(Integer, nullable=False)
    adults: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    children: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    status: Mapped[BookingStatus] = mapped_column(
        Enum(BookingStatus, name="booking_status"),
        nullable=False,
        default=BookingStatus.CONFIRMED,
        index=True,
        comment="Lifecycle status",
    )
    source: Mapped[BookingSource] = mapped_column(
        Enum(BookingSource, name="booking_source"),
        nullable=False,
        default=BookingSource.WALK_IN,
        comment="Booking channel",
    )

    # Pricing (integer currency units)
    room_rate: Mapped[int] = mapped_column(Integer, nullable=False, comment="Nightly rate snapshot")
    subtotal: Mapped[int] = mapped_column(Integer, nullable=False)
    tax_rate: Mapped[Optional[Decimal]] = mapped_column(Numeric(6, 4), nullable=True)
    tax_amount: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    service_charge_rate: Mapped[Optional[Decimal]] = mapped_column(Numeric(6, 4), nullable=True)
    service_charge: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    total_amount: Mapped[int] = mapped_column(Integer, nullable=False)
    paid_amount: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    payment_method: Mapped[Optional[PaymentMethod]] = mapped_column(
        Enum(PaymentMethod, name="payment_method"),
        nullable=True,
    )

    special_requests: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Lifecycle audit
    actual_check_in_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    actual_check_out_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    checked_in_by: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    checked_out_by: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    cancelled_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    cancelled_by: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    cancellation_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_by: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # Relationships
    payments: Mapped[List["Payment"]] = relationship(
        "Payment",
        back_populates="booking",
        cascade="all, delete-orphan",
        order_by="Payment.created_at",
    )
    status_history: Mapped[List["BookingStatusHistory"]] = relationship(
        "BookingStatusHistory",
        back_populates="booking",
        cascade="all, delete-orphan",
        order_by="BookingStatusHistory.changed_at",
    )

    @property
    def balance(self) -> int:
        """Outstanding amount (total - paid)."""
        return self.total_amount - self.paid_amount

    @property
    def payment_status(self) -> BookingPaymentStatus:
        if self.paid_amount <= 0:
            return BookingPaymentStatus.PENDING
        if self.paid_amount < self.total_amount:
            return BookingPaymentStatus.PARTIAL
        return BookingPaymentStatus.PAID

    def __repr__(self) -> str:
        return f"<Booking(number={self.booking_number}, status={self.status})>"


class BookingStatusHistory(BaseModel):
    """One row per lifecycle transition of a booking."""

    __tablename__ = "booking_status_history"

    booking_id: Mapped[str] = mapped_column(
        ForeignKey("bookings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    from_status: Mapped[Optional[BookingStatus]] = mapped_column(
        Enum(BookingStatus, name="booking_status"),
        nullable=True,
        comment="Previous status (NULL on creation)",
    )
    to_status: Mapped[BookingStatus] = mapped_column(
        Enum(BookingStatus, name="booking_status"),
        nullable=False,
    )
    changed_by: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    changed_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=now_utc)

    booking: Mapped["Booking"] = relationship("Booking", back_populates="status_history")
