"""
Housekeeping task model.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from frontdesk.models.base.base_model import TimestampModel
from frontdesk.models.base.enums import TaskPriority, TaskStatus, TaskType

__all__ = ["HousekeepingTask"]


class HousekeepingTask(TimestampModel):
    """
    Cleaning, maintenance or inspection job for a room.

    Tasks generated on checkout carry the booking that triggered them.
    """

    __tablename__ = "housekeeping_tasks"

    room_id: Mapped[str] = mapped_column(
        ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    booking_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("bookings.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
        comment="Booking whose checkout generated the task",
    )
    assigned_to: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
        comment="Staff member the task is assigned to",
    )
    assigned_by: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    task_type: Mapped[TaskType] = mapped_column(
        Enum(TaskType, name="task_type"),
        nullable=False,
        default=TaskType.CLEANING,
    )
    status: Mapped[TaskStatus] = mapped_column(
        Enum(TaskStatus, name="task_status"),
        nullable=False,
        default=TaskStatus.PENDING,
        index=True,
    )
    priority: Mapped[TaskPriority] = mapped_column(
        Enum(TaskPriority, name="task_priority"),
        nullable=False,
        default=TaskPriority.MEDIUM,
    )
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    started_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
