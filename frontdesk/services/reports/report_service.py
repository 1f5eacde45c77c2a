# frontdesk/services/reports/report_service.py
"""
Dashboard reports.

Totals over non-cancelled bookings, room and housekeeping counts, and daily
revenue from completed payments. Date arguments are inclusive calendar days.
"""

from datetime import date, datetime, timedelta
from typing import Callable, Optional, Tuple

from sqlalchemy.orm import Session

from frontdesk.config.settings import Settings, get_settings
from frontdesk.core.exceptions import InvalidDateRangeError
from frontdesk.core.logging import get_logger, log_execution_time
from frontdesk.models.base.enums import BookingStatus, RoomStatus, TaskStatus
from frontdesk.models.room import Room
from frontdesk.repositories.booking import BookingRepository
from frontdesk.repositories.housekeeping import HousekeepingTaskRepository
from frontdesk.repositories.payment import PaymentRepository
from frontdesk.repositories.room import RoomRepository
from frontdesk.schemas.reports.summary import ReportSummary, RevenuePoint, RevenueReport
from frontdesk.services.common.permissions import CurrentUser, can_view_reports, require_capability
from frontdesk.services.common.unit_of_work import UnitOfWork
from frontdesk.utils.date_utils import date_range, start_of_day

logger = get_logger(__name__)


def _window(start: Optional[date], end: Optional[date]) -> Tuple[Optional[datetime], Optional[datetime]]:
    if start is not None and end is not None and end < start:
        raise InvalidDateRangeError(
            "Report end must not be before start",
            start_date=start.isoformat(),
            end_date=end.isoformat(),
        )
    start_at = start_of_day(start) if start is not None else None
    end_at = start_of_day(end) + timedelta(days=1) if end is not None else None
    return start_at, end_at


class ReportService:
    """Admin-only reporting over bookings, rooms, payments and tasks."""

    def __init__(self, session_factory: Callable[[], Session], config: Optional[Settings] = None):
        self.session_factory = session_factory
        self.config = config or get_settings()

    @log_execution_time()
    def summary(
        self,
        start: Optional[date],
        end: Optional[date],
        user: CurrentUser,
    ) -> ReportSummary:
        """
        Financial and operational totals.

        Bookings count when their stay overlaps the window; rooms and
        tasks are counted as they are now.
        """
        require_capability(can_view_reports, user)
        start_at, end_at = _window(start, end)

        with UnitOfWork(self.session_factory) as uow:
            bookings = uow.get_repo(BookingRepository)
            totals = bookings.financial_totals(start_at, end_at)
            by_status = bookings.count_by_status(start_at, end_at)
            rooms_by_status = uow.get_repo(RoomRepository).count_by(Room.status)
            tasks_by_status = uow.get_repo(HousekeepingTaskRepository).count_by_status()

        total_rooms = sum(rooms_by_status.values())
        occupied = rooms_by_status.get(RoomStatus.OCCUPIED, 0)
        occupancy = round(occupied / total_rooms, 4) if total_rooms else 0.0

        return ReportSummary(
            start=start,
            end=end,
            currency=self.config.CURRENCY,
            total_collected=totals["total_collected"],
            outstanding=totals["outstanding"],
            total_billed=totals["total_billed"],
            bookings_by_status={status.value: by_status.get(status, 0) for status in BookingStatus},
            rooms_by_status={status.value: rooms_by_status.get(status, 0) for status in RoomStatus},
            total_rooms=total_rooms,
            occupancy_rate=occupancy,
            pending_tasks=tasks_by_status.get(TaskStatus.PENDING, 0)
            + tasks_by_status.get(TaskStatus.IN_PROGRESS, 0),
            completed_tasks=tasks_by_status.get(TaskStatus.COMPLETED, 0),
        )

    def revenue_by_period(self, start: date, end: date, user: CurrentUser) -> RevenueReport:
        """Completed payments per day over [start, end], zero-filled."""
        require_capability(can_view_reports, user)
        start_at, end_at = _window(start, end)

        with UnitOfWork(self.session_factory) as uow:
            per_day = uow.get_repo(PaymentRepository).revenue_by_day(start_at, end_at)

        points = []
        for day in date_range(start, end):
            amount, count = per_day.get(day, (0, 0))
            points.append(RevenuePoint(day=day, amount=amount, payments=count))

        return RevenueReport(
            start=start,
            end=end,
            currency=self.config.CURRENCY,
            total=sum(point.amount for point in points),
            points=points,
        )
