"""
Guest model for the guest registry.
"""

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, validates

from frontdesk.models.base.base_model import TimestampModel

__all__ = ["Guest"]


class Guest(TimestampModel):
    """
    Registered hotel guest.

    Identity fields (names, email, id number) are only changed through the
    explicit guest edit operation.
    """

    __tablename__ = "guests"

    first_name: Mapped[str] = mapped_column(String(100), nullable=False, comment="Given name")
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, comment="Family name")
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="Contact email (lower-cased)",
    )
    phone: Mapped[str] = mapped_column(String(30), nullable=False, comment="Contact phone")
    id_number: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        index=True,
        comment="National ID or passport number",
    )
    nationality: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    emergency_contact: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    special_requests: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    @validates("email")
    def normalize_email(self, key: str, value: str) -> str:
        return value.strip().lower()

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def snapshot(self) -> dict:
        """Guest details copied onto a booking at creation time."""
        return {
            "guest_id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "phone": self.phone,
            "id_number": self.id_number,
        }
