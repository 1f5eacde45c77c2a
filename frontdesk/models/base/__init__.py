"""
Base models package.

Declarative base, abstract models and shared enums.
"""

from frontdesk.models.base.base_model import Base, BaseModel, TimestampModel
from frontdesk.models.base.enums import (
    BookingPaymentStatus,
    BookingSource,
    BookingStatus,
    PaymentMethod,
    PaymentStatus,
    RoomStatus,
    RoomType,
    TaskPriority,
    TaskStatus,
    TaskType,
    UserRole,
)

__all__ = [
    "Base",
    "BaseModel",
    "TimestampModel",
    "BookingPaymentStatus",
    "BookingSource",
    "BookingStatus",
    "PaymentMethod",
    "PaymentStatus",
    "RoomStatus",
    "RoomType",
    "TaskPriority",
    "TaskStatus",
    "TaskType",
    "UserRole",
]
