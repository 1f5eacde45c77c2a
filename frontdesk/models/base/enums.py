"""
Database enums mirroring schema enums.

Provides SQLAlchemy-compatible enum definitions shared by the
ORM models and the Pydantic schemas.
"""

import enum


class UserRole(str, enum.Enum):
    """Front desk user roles."""
    ADMIN = "admin"
    RECEPTIONIST = "receptionist"
    HOUSEKEEPING = "housekeeping"
    GUEST = "guest"


class RoomType(str, enum.Enum):
    """Room type categorization."""
    SINGLE = "single"
    DOUBLE = "double"
    SUITE = "suite"
    DELUXE = "deluxe"


class RoomStatus(str, enum.Enum):
    """Room offerability status."""
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    CLEANING = "cleaning"
    MAINTENANCE = "maintenance"
    OUT_OF_ORDER = "out_of_order"


class BookingStatus(str, enum.Enum):
    """Booking lifecycle status."""
    CONFIRMED = "confirmed"
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"
    CANCELLED = "cancelled"


class BookingSource(str, enum.Enum):
    """Channel the booking came through."""
    WALK_IN = "walk_in"
    PHONE = "phone"
    WEBSITE = "website"
    SELF_SERVICE = "self_service"
    OTHER = "other"


class PaymentStatus(str, enum.Enum):
    """Status of a single payment record."""
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class BookingPaymentStatus(str, enum.Enum):
    """Derived settlement state of a booking."""
    PENDING = "pending"
    PARTIAL = "partial"
    PAID = "paid"


class PaymentMethod(str, enum.Enum):
    """Accepted payment methods."""
    MPESA = "mpesa"
    CASH = "cash"
    CARD = "card"
    BANK_TRANSFER = "bank_transfer"


class TaskType(str, enum.Enum):
    """Housekeeping task type."""
    CLEANING = "cleaning"
    MAINTENANCE = "maintenance"
    INSPECTION = "inspection"
    DEEP_CLEAN = "deep_clean"


class TaskStatus(str, enum.Enum):
    """Housekeeping task status."""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TaskPriority(str, enum.Enum):
    """Housekeeping task priority."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


__all__ = [
    "UserRole",
    "RoomType",
    "RoomStatus",
    "BookingStatus",
    "BookingSource",
    "PaymentStatus",
    "BookingPaymentStatus",
    "PaymentMethod",
    "TaskType",
    "TaskStatus",
    "TaskPriority",
]
