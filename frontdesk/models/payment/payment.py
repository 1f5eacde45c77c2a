"""
Payment model.

The sum of completed payments for a booking always equals the booking's
paid amount.
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import CheckConstraint, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from frontdesk.models.base.base_model import TimestampModel
from frontdesk.models.base.enums import PaymentMethod, PaymentStatus

if TYPE_CHECKING:
    from frontdesk.models.booking.booking import Booking

__all__ = ["Payment"]


class Payment(TimestampModel):
    """Payment recorded against a booking."""

    __tablename__ = "payments"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_payments_amount_positive"),
    )

    booking_id: Mapped[str] = mapped_column(
        ForeignKey("bookings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Booking the payment applies to",
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False, comment="Amount (integer currency units)")
    method: Mapped[PaymentMethod] = mapped_column(
        Enum(PaymentMethod, name="payment_method"),
        nullable=False,
    )
    status: Mapped[PaymentStatus] = mapped_column(
        Enum(PaymentStatus, name="payment_status"),
        nullable=False,
        default=PaymentStatus.COMPLETED,
        index=True,
    )
    transaction_id: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
        comment="External reference (M-Pesa code, card auth, bank ref)",
    )
    processed_by: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    booking: Mapped["Booking"] = relationship("Booking", back_populates="payments")
