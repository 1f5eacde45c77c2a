from __future__ import annotations

from datetime import date, datetime

import pytest
from sqlalchemy import update

from frontdesk.core.exceptions import AuthorizationError, InvalidDateRangeError
from frontdesk.models import Payment
from frontdesk.models.base.enums import PaymentMethod
from frontdesk.schemas.booking import BookingCreate
from frontdesk.services.reports import ReportService


@pytest.fixture()
def reports(session_factory, config):
    return ReportService(session_factory, config)


def _book(lifecycle, user, room, guest_details, check_in, check_out):
    return lifecycle.create_booking(
        BookingCreate(guest=guest_details, room_id=room.id, check_in=check_in, check_out=check_out),
        user,
    )


def test_summary_totals(reports, lifecycle, admin, receptionist, rooms, guest_details):
    paid = _book(lifecycle, receptionist, rooms["101"], guest_details, date(2024, 3, 1), date(2024, 3, 3))
    partial = _book(lifecycle, receptionist, rooms["102"], guest_details, date(2024, 3, 5), date(2024, 3, 6))
    cancelled = _book(lifecycle, receptionist, rooms["201"], guest_details, date(2024, 3, 5), date(2024, 3, 7))

    lifecycle.record_payment(paid.id, 10000, PaymentMethod.CASH, receptionist)
    lifecycle.record_payment(partial.id, 2500, PaymentMethod.MPESA, receptionist)
    lifecycle.cancel(cancelled.id, None, receptionist)

    summary = reports.summary(None, None, admin)

    assert summary.total_billed == 10000 + 7500
    assert summary.total_collected == 12500
    assert summary.outstanding == 5000
    assert summary.bookings_by_status["confirmed"] == 2
    assert summary.bookings_by_status["cancelled"] == 1
    assert summary.bookings_by_status["checked_out"] == 0
    assert summary.currency == "KES"

    # 101 went occupied on creation (arrival today) plus the seeded 202
    assert summary.total_rooms == 5
    assert summary.rooms_by_status["occupied"] == 2
    assert summary.occupancy_rate == pytest.approx(0.4)


def test_summary_window_only_counts_overlapping_stays(reports, lifecycle, admin, receptionist, rooms, guest_details):
    _book(lifecycle, receptionist, rooms["101"], guest_details, date(2024, 3, 1), date(2024, 3, 3))
    _book(lifecycle, receptionist, rooms["102"], guest_details, date(2024, 4, 1), date(2024, 4, 2))

    march = reports.summary(date(2024, 3, 1), date(2024, 3, 31), admin)
    assert march.total_billed == 10000
    assert sum(march.bookings_by_status.values()) == 1


def test_summary_counts_housekeeping(reports, lifecycle, admin, receptionist, rooms, guest_details):
    booking = _book(lifecycle, receptionist, rooms["101"], guest_details, date(2024, 3, 2), date(2024, 3, 3))
    lifecycle.check_in(booking.id, receptionist)
    lifecycle.check_out(booking.id, receptionist)

    summary = reports.summary(None, None, admin)
    assert summary.pending_tasks == 1
    assert summary.completed_tasks == 0
    assert summary.rooms_by_status["cleaning"] == 1


def test_revenue_is_grouped_by_day(session_factory, reports, lifecycle, admin, receptionist, rooms, guest_details):
    booking = _book(lifecycle, receptionist, rooms["201"], guest_details, date(2024, 3, 2), date(2024, 3, 5))
    first = lifecycle.record_payment(booking.id, 10000, PaymentMethod.CASH, receptionist).payment
    second = lifecycle.record_payment(booking.id, 5000, PaymentMethod.CARD, receptionist).payment
    third = lifecycle.record_payment(booking.id, 2000, PaymentMethod.CARD, receptionist).payment

    stamps = {
        first.id: datetime(2024, 3, 1, 9, 0),
        second.id: datetime(2024, 3, 1, 18, 30),
        third.id: datetime(2024, 3, 3, 8, 15),
    }
    with session_factory() as session:
        for payment_id, created_at in stamps.items():
            session.execute(update(Payment).where(Payment.id == payment_id).values(created_at=created_at))
        session.commit()

    report = reports.revenue_by_period(date(2024, 3, 1), date(2024, 3, 3), admin)
    assert [(p.day, p.amount, p.payments) for p in report.points] == [
        (date(2024, 3, 1), 15000, 2),
        (date(2024, 3, 2), 0, 0),
        (date(2024, 3, 3), 2000, 1),
    ]
    assert report.total == 17000


def test_reports_are_admin_only(reports, receptionist):
    with pytest.raises(AuthorizationError):
        reports.summary(None, None, receptionist)
    with pytest.raises(AuthorizationError):
        reports.revenue_by_period(date(2024, 3, 1), date(2024, 3, 2), receptionist)


def test_reversed_report_window_is_rejected(reports, admin):
    with pytest.raises(InvalidDateRangeError):
        reports.revenue_by_period(date(2024, 3, 5), date(2024, 3, 1), admin)
