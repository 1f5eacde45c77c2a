"""
Booking repository: the booking store's data access.

Holds booking queries, status history writes, booking number
allocation and the aggregate queries used by reports.
"""

from datetime import date, datetime
from typing import Dict, List, Optional, Sequence

from sqlalchemy import and_, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from frontdesk.models.base.enums import BookingStatus
from frontdesk.models.booking import Booking, BookingStatusHistory
from frontdesk.models.guest import Guest
from frontdesk.repositories.base.base_repository import BaseRepository
from frontdesk.schemas.booking.booking_base import BookingFilter

ACTIVE_STATUSES = (BookingStatus.CONFIRMED, BookingStatus.CHECKED_IN)


class BookingRepository(BaseRepository[Booking]):
    """Data access for bookings and their status history."""

    def __init__(self, db: Session):
        super().__init__(Booking, db)

    # ==================== BOOKING NUMBERS ====================

    def next_booking_number(self, day: date) -> str:
        """
        Allocate the next BK-YYYYMMDD-NNNN number for a day.

        Numbers are sequential per day starting at 0001.
        """
        prefix = f"BK-{day.strftime('%Y%m%d')}-"
        stmt = select(func.max(Booking.booking_number)).where(
            Booking.booking_number.like(f"{prefix}%")
        )
        try:
            last = self.db.execute(stmt).scalar()
        except SQLAlchemyError as e:
            raise self._store_error("query", e) from e
        sequence = int(last[len(prefix):]) + 1 if last else 1
        return f"{prefix}{sequence:04d}"

    def get_by_number(self, booking_number: str) -> Optional[Booking]:
        rows = self.find(select(Booking).where(Booking.booking_number == booking_number))
        return rows[0] if rows else None

    # ==================== QUERIES ====================

    def list_bookings(self, booking_filter: Optional[BookingFilter] = None) -> List[Booking]:
        """
        List bookings newest first.

        Args:
            booking_filter: Optional status/room/guest/date/text criteria

        Returns:
            Matching bookings
        """
        booking_filter = booking_filter or BookingFilter()
        stmt = select(Booking)
        if booking_filter.status is not None:
            stmt = stmt.where(Booking.status == booking_filter.status)
        if booking_filter.room_id:
            stmt = stmt.where(Booking.room_id == booking_filter.room_id)
        if booking_filter.guest_id:
            stmt = stmt.where(Booking.guest_id == booking_filter.guest_id)
        if booking_filter.check_in_from is not None:
            stmt = stmt.where(Booking.check_in >= booking_filter.check_in_from)
        if booking_filter.check_in_to is not None:
            stmt = stmt.where(Booking.check_in <= booking_filter.check_in_to)
        if booking_filter.search_text:
            term = f"%{booking_filter.search_text.lower()}%"
            stmt = stmt.join(Guest, Guest.id == Booking.guest_id).where(
                or_(
                    Booking.booking_number.ilike(term),
                    Guest.first_name.ilike(term),
                    Guest.last_name.ilike(term),
                    Guest.email.ilike(term),
                )
            )
        stmt = (
            stmt.order_by(Booking.created_at.desc(), Booking.booking_number.desc())
            .offset(booking_filter.skip)
            .limit(booking_filter.limit)
        )
        return self.find(stmt)

    def list_for_guest(self, guest_id: str) -> List[Booking]:
        stmt = (
            select(Booking)
            .where(Booking.guest_id == guest_id)
            .order_by(Booking.check_in.desc())
        )
        return self.find(stmt)

    def in_range(
        self,
        start: datetime,
        end: datetime,
        status: Optional[BookingStatus] = None,
    ) -> List[Booking]:
        """Bookings whose stay overlaps [start, end)."""
        stmt = select(Booking).where(
            and_(Booking.check_in < end, Booking.check_out > start)
        )
        if status is not None:
            stmt = stmt.where(Booking.status == status)
        stmt = stmt.order_by(Booking.check_in)
        return self.find(stmt)

    def find_overlapping(
        self,
        room_ids: Sequence[str],
        check_in: datetime,
        check_out: datetime,
        exclude_booking_id: Optional[str] = None,
    ) -> List[Booking]:
        """
        Active bookings of the given rooms overlapping a stay.

        Args:
            room_ids: Rooms to check
            check_in: Requested check-in
            check_out: Requested check-out
            exclude_booking_id: Booking to ignore (edits of itself)

        Returns:
            Conflicting confirmed or checked-in bookings
        """
        if not room_ids:
            return []
        stmt = select(Booking).where(
            and_(
                Booking.room_id.in_(list(room_ids)),
                Booking.status.in_(ACTIVE_STATUSES),
                Booking.check_in < check_out,
                Booking.check_out > check_in,
            )
        )
        if exclude_booking_id:
            stmt = stmt.where(Booking.id != exclude_booking_id)
        return self.find(stmt)

    # ==================== STATUS TRACKING ====================

    def record_status_change(
        self,
        booking: Booking,
        from_status: Optional[BookingStatus],
        to_status: BookingStatus,
        changed_by: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> BookingStatusHistory:
        """Create status history entry."""
        history = BookingStatusHistory(
            booking_id=booking.id,
            from_status=from_status,
            to_status=to_status,
            changed_by=changed_by,
            reason=reason,
        )
        try:
            self.db.add(history)
            self.db.flush()
        except SQLAlchemyError as e:
            raise self._store_error("status history write", e) from e
        return history

    def update_status(
        self,
        booking: Booking,
        status: BookingStatus,
        changed_by: Optional[str] = None,
        reason: Optional[str] = None,
        **fields,
    ) -> Booking:
        """
        Move a booking to a new status and record the transition.

        Extra keyword fields (timestamps, actor columns) are applied in
        the same flush.
        """
        old_status = booking.status
        self.update(booking, {"status": status, **fields})
        self.record_status_change(booking, old_status, status, changed_by, reason)
        return booking

    def get_status_history(self, booking_id: str) -> List[BookingStatusHistory]:
        stmt = (
            select(BookingStatusHistory)
            .where(BookingStatusHistory.booking_id == booking_id)
            .order_by(BookingStatusHistory.changed_at)
        )
        try:
            return list(self.db.execute(stmt).scalars().all())
        except SQLAlchemyError as e:
            raise self._store_error("query", e) from e

    # ==================== AGGREGATES ====================

    def financial_totals(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Dict[str, int]:
        """
        Billed, collected and outstanding totals over non-cancelled bookings.

        When a range is given, only bookings overlapping it count.
        """
        stmt = select(
            func.coalesce(func.sum(Booking.total_amount), 0),
            func.coalesce(func.sum(Booking.paid_amount), 0),
        ).where(Booking.status != BookingStatus.CANCELLED)
        if start is not None:
            stmt = stmt.where(Booking.check_out > start)
        if end is not None:
            stmt = stmt.where(Booking.check_in < end)
        try:
            billed, collected = self.db.execute(stmt).one()
        except SQLAlchemyError as e:
            raise self._store_error("aggregate", e) from e
        billed, collected = int(billed), int(collected)
        return {
            "total_billed": billed,
            "total_collected": collected,
            "outstanding": billed - collected,
        }

    def count_by_status(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Dict[BookingStatus, int]:
        stmt = select(Booking.status, func.count()).group_by(Booking.status)
        if start is not None:
            stmt = stmt.where(Booking.check_out > start)
        if end is not None:
            stmt = stmt.where(Booking.check_in < end)
        try:
            return {status: int(total) for status, total in self.db.execute(stmt).all()}
        except SQLAlchemyError as e:
            raise self._store_error("aggregate", e) from e
