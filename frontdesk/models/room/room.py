"""
Room model.

A room's status is the only signal the front desk uses to decide whether
it can be offered for a new booking.
"""

from typing import Optional

from sqlalchemy import CheckConstraint, Enum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from frontdesk.models.base.base_model import TimestampModel
from frontdesk.models.base.enums import RoomStatus, RoomType

__all__ = ["Room"]


class Room(TimestampModel):
    """
    Bookable hotel room.

    Attributes:
        number: Unique room number shown to staff and guests
        type: Room category
        price: Nightly rate in whole currency units
        capacity: Maximum number of occupants
        floor: Floor the room is on
        status: Current offerability status
        description: Free-form description
    """

    __tablename__ = "rooms"
    __table_args__ = (
        CheckConstraint("price > 0", name="ck_rooms_price_positive"),
        CheckConstraint("capacity >= 1", name="ck_rooms_capacity_positive"),
        CheckConstraint("floor >= 0", name="ck_rooms_floor_non_negative"),
    )

    number: Mapped[str] = mapped_column(
        String(20),
        unique=True,
        nullable=False,
        index=True,
        comment="Room number",
    )
    type: Mapped[RoomType] = mapped_column(
        Enum(RoomType, name="room_type"),
        nullable=False,
        index=True,
        comment="Room category",
    )
    price: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Nightly rate (integer currency units)",
    )
    capacity: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
        comment="Maximum occupants",
    )
    floor: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Floor number",
    )
    status: Mapped[RoomStatus] = mapped_column(
        Enum(RoomStatus, name="room_status"),
        nullable=False,
        default=RoomStatus.AVAILABLE,
        index=True,
        comment="Offerability status",
    )
    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="Room description",
    )

    @property
    def is_available(self) -> bool:
        return self.status == RoomStatus.AVAILABLE

    def __repr__(self) -> str:
        return f"<Room(number={self.number}, status={self.status})>"
