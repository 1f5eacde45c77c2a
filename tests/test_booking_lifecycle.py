from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import func, select, update

from frontdesk.config.settings import Settings
from frontdesk.core.exceptions import (
    AuthorizationError,
    BookingConflictError,
    InsufficientCapacityError,
    InvalidDateRangeError,
    InvalidTransitionError,
    OverpaymentRejectedError,
    PaymentLedgerMismatchError,
    ResourceNotFoundError,
    RoomUnavailableError,
    ValidationError,
)
from frontdesk.models import Booking, BookingStatusHistory, Guest, HousekeepingTask, Payment, Room
from frontdesk.models.base.enums import (
    BookingPaymentStatus,
    BookingSource,
    BookingStatus,
    PaymentMethod,
    RoomStatus,
    TaskStatus,
    TaskType,
)
from frontdesk.schemas.booking import BookingCreate, BookingFilter, BookingUpdate
from frontdesk.services.booking import BOOKING_TRANSITIONS, BookingLifecycleService

from conftest import TODAY


def _create(lifecycle, user, room, guest_details, check_in=date(2024, 3, 10), check_out=date(2024, 3, 13), **extra):
    payload = BookingCreate(
        guest=guest_details,
        room_id=room.id,
        check_in=check_in,
        check_out=check_out,
        **extra,
    )
    return lifecycle.create_booking(payload, user)


def _room_status(session_factory, room_id):
    with session_factory() as session:
        return session.get(Room, room_id).status


def _booking(session_factory, booking_id):
    with session_factory() as session:
        return session.get(Booking, booking_id)


# ---------------------------------------------------------------------- #
# Creation
# ---------------------------------------------------------------------- #

def test_end_to_end_stay(session_factory, lifecycle, receptionist, rooms, guest_details):
    room = rooms["101"]
    booking = _create(lifecycle, receptionist, room, guest_details, date(2024, 3, 1), date(2024, 3, 4))

    assert booking.nights == 3
    assert booking.total_amount == 15000
    assert booking.paid_amount == 0
    assert booking.status == BookingStatus.CONFIRMED
    assert booking.booking_number == "BK-20240301-0001"

    receipt = lifecycle.record_payment(booking.id, 15000, PaymentMethod.MPESA, receptionist)
    assert receipt.booking.paid_amount == 15000
    assert receipt.booking.balance == 0
    assert receipt.booking.payment_status == BookingPaymentStatus.PAID

    checked_in = lifecycle.check_in(booking.id, receptionist)
    assert checked_in.status == BookingStatus.CHECKED_IN
    assert checked_in.actual_check_in_at is not None
    assert _room_status(session_factory, room.id) == RoomStatus.OCCUPIED

    checked_out = lifecycle.check_out(booking.id, receptionist)
    assert checked_out.status == BookingStatus.CHECKED_OUT
    assert checked_out.checked_out_by == receptionist.actor
    assert _room_status(session_factory, room.id) == RoomStatus.CLEANING

    history = lifecycle.get_status_history(booking.id, receptionist)
    assert [(h.from_status, h.to_status) for h in history] == [
        (None, BookingStatus.CONFIRMED),
        (BookingStatus.CONFIRMED, BookingStatus.CHECKED_IN),
        (BookingStatus.CHECKED_IN, BookingStatus.CHECKED_OUT),
    ]


def test_same_day_arrival_occupies_room(session_factory, lifecycle, receptionist, rooms, guest_details):
    _create(lifecycle, receptionist, rooms["101"], guest_details, TODAY, date(2024, 3, 2))
    assert _room_status(session_factory, rooms["101"].id) == RoomStatus.OCCUPIED


def test_future_arrival_leaves_room_available(session_factory, lifecycle, receptionist, rooms, guest_details):
    _create(lifecycle, receptionist, rooms["101"], guest_details)
    assert _room_status(session_factory, rooms["101"].id) == RoomStatus.AVAILABLE


@pytest.mark.parametrize("number", ["202", "301"])
def test_unavailable_room_is_rejected(session_factory, lifecycle, receptionist, rooms, guest_details, number):
    with pytest.raises(RoomUnavailableError) as exc:
        _create(lifecycle, receptionist, rooms[number], guest_details)
    assert exc.value.status_code == 409
    with session_factory() as session:
        assert session.scalar(select(func.count()).select_from(Booking)) == 0


def test_reversed_dates_are_rejected(lifecycle, receptionist, rooms, guest_details):
    with pytest.raises(InvalidDateRangeError):
        _create(lifecycle, receptionist, rooms["101"], guest_details, date(2024, 3, 5), date(2024, 3, 5))


def test_party_larger_than_room_is_rejected(lifecycle, receptionist, rooms, guest_details):
    with pytest.raises(InsufficientCapacityError):
        _create(lifecycle, receptionist, rooms["102"], guest_details, adults=2, children=1)


def test_inline_guest_is_matched_by_email(session_factory, lifecycle, receptionist, rooms, guest_details):
    first = _create(lifecycle, receptionist, rooms["101"], guest_details)
    second = _create(lifecycle, receptionist, rooms["102"], dict(guest_details, email="JANE@example.com"))

    assert first.guest_id == second.guest_id
    assert first.guest_snapshot["email"] == "jane@example.com"
    with session_factory() as session:
        assert session.scalar(select(func.count()).select_from(Guest)) == 1


def test_booking_numbers_are_sequential_per_day(lifecycle, receptionist, rooms, guest_details):
    numbers = [
        _create(lifecycle, receptionist, rooms[n], guest_details).booking_number
        for n in ("101", "102", "201")
    ]
    assert numbers == ["BK-20240301-0001", "BK-20240301-0002", "BK-20240301-0003"]


def test_configured_rates_are_snapshotted(session_factory, config, receptionist, rooms, guest_details):
    taxed = config.model_copy(update={"BOOKING_TAX_RATE": "0.16", "BOOKING_SERVICE_CHARGE_RATE": "0.10"})
    service = BookingLifecycleService(session_factory, taxed, today_provider=lambda: TODAY)
    booking = _create(service, receptionist, rooms["101"], guest_details, date(2024, 3, 1), date(2024, 3, 4))

    assert booking.subtotal == 15000
    assert booking.tax_amount == 2400
    assert booking.service_charge == 1500
    assert booking.total_amount == 18900

    invoice = service.get_invoice(booking.id, receptionist)
    assert invoice.total == booking.total_amount
    assert invoice.tax == 2400
    assert invoice.balance == 18900


def test_settings_reject_rates_the_snapshot_cannot_hold():
    with pytest.raises(PydanticValidationError):
        Settings(_env_file=None, BOOKING_TAX_RATE=Decimal("0.16555"))
    assert Settings(_env_file=None, BOOKING_TAX_RATE="0.1655").BOOKING_TAX_RATE == Decimal("0.1655")


def test_invoice_matches_stored_totals_for_configured_rate(session_factory, config, receptionist, rooms, guest_details):
    taxed = config.model_copy(update={"BOOKING_TAX_RATE": Decimal("0.1655")})
    service = BookingLifecycleService(session_factory, taxed, today_provider=lambda: TODAY)
    booking = _create(service, receptionist, rooms["201"], guest_details, date(2024, 3, 5), date(2024, 3, 8))
    assert booking.tax_amount == 7448
    assert booking.total_amount == 52448

    invoice = service.get_invoice(booking.id, receptionist)
    assert invoice.tax_rate == Decimal("0.1655")
    assert (invoice.tax, invoice.total, invoice.balance) == (7448, 52448, 52448)


def test_invoice_reports_stored_amounts(session_factory, lifecycle, receptionist, rooms, guest_details):
    booking = _create(lifecycle, receptionist, rooms["101"], guest_details)
    with session_factory() as session:
        session.execute(update(Booking).where(Booking.id == booking.id).values(room_rate=9999))
        session.commit()

    invoice = lifecycle.get_invoice(booking.id, receptionist)
    assert invoice.room_rate == 9999
    assert invoice.subtotal == booking.subtotal == 15000
    assert invoice.total == booking.total_amount


def test_overlap_is_rejected_only_when_enabled(session_factory, config, receptionist, rooms, guest_details):
    relaxed = BookingLifecycleService(session_factory, config, today_provider=lambda: TODAY)
    strict = BookingLifecycleService(
        session_factory,
        config.model_copy(update={"ENFORCE_BOOKING_OVERLAP": True}),
        today_provider=lambda: TODAY,
    )
    first = _create(relaxed, receptionist, rooms["101"], guest_details)
    _create(relaxed, receptionist, rooms["101"], guest_details, date(2024, 3, 11), date(2024, 3, 12))

    with pytest.raises(BookingConflictError) as exc:
        _create(strict, receptionist, rooms["101"], guest_details, date(2024, 3, 12), date(2024, 3, 14))
    assert exc.value.details["room_id"] == rooms["101"].id

    relaxed.cancel(first.id, "changed plans", receptionist)
    # The remaining booking still blocks 11th -> 12th, but not a back-to-back stay
    _create(strict, receptionist, rooms["101"], guest_details, date(2024, 3, 12), date(2024, 3, 14))


def test_guest_books_for_themselves(lifecycle, guest_user, rooms, guest_details):
    booking = _create(lifecycle, guest_user, rooms["101"], guest_details, source=BookingSource.PHONE)
    assert booking.source == BookingSource.SELF_SERVICE
    assert lifecycle.get_booking(booking.id, guest_user).id == booking.id
    assert [b.id for b in lifecycle.list_for_current_guest(guest_user)] == [booking.id]


def test_guest_cannot_book_for_someone_else(lifecycle, guest_user, rooms, guest_details):
    with pytest.raises(AuthorizationError):
        _create(lifecycle, guest_user, rooms["101"], dict(guest_details, email="other@example.com"))


def test_housekeeping_cannot_create_bookings(lifecycle, housekeeper, rooms, guest_details):
    with pytest.raises(AuthorizationError):
        _create(lifecycle, housekeeper, rooms["101"], guest_details)


def test_missing_room_is_not_found(lifecycle, receptionist, guest_details):
    with pytest.raises(ResourceNotFoundError):
        lifecycle.create_booking(
            BookingCreate(guest=guest_details, room_id="missing", check_in=date(2024, 3, 1), check_out=date(2024, 3, 2)),
            receptionist,
        )


# ---------------------------------------------------------------------- #
# Transitions
# ---------------------------------------------------------------------- #

def test_check_out_requires_check_in(lifecycle, receptionist, rooms, guest_details):
    booking = _create(lifecycle, receptionist, rooms["101"], guest_details)
    with pytest.raises(InvalidTransitionError) as exc:
        lifecycle.check_out(booking.id, receptionist)
    assert exc.value.details["current_status"] == "confirmed"


def test_second_check_in_is_rejected(lifecycle, receptionist, rooms, guest_details):
    booking = _create(lifecycle, receptionist, rooms["101"], guest_details)
    lifecycle.check_in(booking.id, receptionist)
    lifecycle.check_out(booking.id, receptionist)
    with pytest.raises(InvalidTransitionError):
        lifecycle.check_in(booking.id, receptionist)


@pytest.mark.parametrize("terminal", [BookingStatus.CHECKED_OUT, BookingStatus.CANCELLED])
def test_terminal_states_have_no_transitions(terminal):
    assert BOOKING_TRANSITIONS[terminal] == frozenset()


def test_cancelled_booking_rejects_every_transition(lifecycle, receptionist, rooms, guest_details):
    booking = _create(lifecycle, receptionist, rooms["101"], guest_details)
    cancelled = lifecycle.cancel(booking.id, "no show", receptionist)
    assert cancelled.status == BookingStatus.CANCELLED
    assert cancelled.cancellation_reason == "no show"

    for action in (lifecycle.check_in, lifecycle.check_out):
        with pytest.raises(InvalidTransitionError):
            action(booking.id, receptionist)
    with pytest.raises(InvalidTransitionError):
        lifecycle.cancel(booking.id, None, receptionist)
    with pytest.raises(InvalidTransitionError):
        lifecycle.record_payment(booking.id, 100, PaymentMethod.CASH, receptionist)


def test_cancel_leaves_occupied_room_as_is(session_factory, lifecycle, receptionist, rooms, guest_details):
    booking = _create(lifecycle, receptionist, rooms["101"], guest_details)
    lifecycle.check_in(booking.id, receptionist)
    lifecycle.cancel(booking.id, "early departure", receptionist)
    assert _room_status(session_factory, rooms["101"].id) == RoomStatus.OCCUPIED


def test_check_out_opens_cleaning_task(session_factory, lifecycle, receptionist, rooms, guest_details):
    booking = _create(lifecycle, receptionist, rooms["101"], guest_details)
    lifecycle.check_in(booking.id, receptionist)
    lifecycle.check_out(booking.id, receptionist)

    with session_factory() as session:
        tasks = session.scalars(select(HousekeepingTask)).all()
    assert len(tasks) == 1
    assert tasks[0].booking_id == booking.id
    assert tasks[0].room_id == rooms["101"].id
    assert tasks[0].task_type == TaskType.CLEANING
    assert tasks[0].status == TaskStatus.PENDING
    assert tasks[0].assigned_to == "unassigned"


def test_check_out_without_auto_housekeeping(session_factory, config, receptionist, rooms, guest_details):
    service = BookingLifecycleService(
        session_factory,
        config.model_copy(update={"AUTO_HOUSEKEEPING_ON_CHECKOUT": False}),
        today_provider=lambda: TODAY,
    )
    booking = _create(service, receptionist, rooms["101"], guest_details)
    service.check_in(booking.id, receptionist)
    service.check_out(booking.id, receptionist)

    assert _room_status(session_factory, rooms["101"].id) == RoomStatus.CLEANING
    with session_factory() as session:
        assert session.scalar(select(func.count()).select_from(HousekeepingTask)) == 0


def test_guest_cannot_check_in(lifecycle, receptionist, guest_user, rooms, guest_details):
    booking = _create(lifecycle, receptionist, rooms["101"], guest_details)
    with pytest.raises(AuthorizationError):
        lifecycle.check_in(booking.id, guest_user)


# ---------------------------------------------------------------------- #
# Payments
# ---------------------------------------------------------------------- #

def test_partial_payments_accumulate(lifecycle, receptionist, rooms, guest_details):
    booking = _create(lifecycle, receptionist, rooms["101"], guest_details)
    first = lifecycle.record_payment(booking.id, 5000, PaymentMethod.CASH, receptionist)
    assert first.booking.payment_status == BookingPaymentStatus.PARTIAL
    assert first.payment.amount == 5000
    assert first.payment.processed_by == receptionist.actor

    second = lifecycle.record_payment(booking.id, 10000, "card", receptionist, transaction_id="TX-1")
    assert second.booking.paid_amount == 15000
    assert second.payment.method == PaymentMethod.CARD
    assert [p.amount for p in lifecycle.list_payments(booking.id, receptionist)] == [5000, 10000]


def test_overpayment_leaves_paid_amount_unchanged(session_factory, lifecycle, receptionist, rooms, guest_details):
    booking = _create(lifecycle, receptionist, rooms["101"], guest_details)
    lifecycle.record_payment(booking.id, 14000, PaymentMethod.CASH, receptionist)

    with pytest.raises(OverpaymentRejectedError) as exc:
        lifecycle.record_payment(booking.id, 1001, PaymentMethod.CASH, receptionist)
    assert exc.value.details["balance"] == 1000

    stored = _booking(session_factory, booking.id)
    assert stored.paid_amount == 14000
    with session_factory() as session:
        assert session.scalar(select(func.count()).select_from(Payment)) == 1


def test_overpay_by_one_on_fully_paid_booking(lifecycle, receptionist, rooms, guest_details):
    booking = _create(lifecycle, receptionist, rooms["101"], guest_details)
    lifecycle.record_payment(booking.id, booking.total_amount, PaymentMethod.MPESA, receptionist)
    with pytest.raises(OverpaymentRejectedError):
        lifecycle.record_payment(booking.id, 1, PaymentMethod.MPESA, receptionist)


@pytest.mark.parametrize("amount", [0, -50, 10.5])
def test_non_positive_payment_is_rejected(lifecycle, receptionist, rooms, guest_details, amount):
    booking = _create(lifecycle, receptionist, rooms["101"], guest_details)
    with pytest.raises(ValidationError):
        lifecycle.record_payment(booking.id, amount, PaymentMethod.CASH, receptionist)


def test_unknown_payment_method_is_rejected(lifecycle, receptionist, rooms, guest_details):
    booking = _create(lifecycle, receptionist, rooms["101"], guest_details)
    with pytest.raises(ValidationError):
        lifecycle.record_payment(booking.id, 100, "cheque", receptionist)


def test_balance_can_be_settled_after_check_out(lifecycle, receptionist, rooms, guest_details):
    booking = _create(lifecycle, receptionist, rooms["101"], guest_details)
    lifecycle.check_in(booking.id, receptionist)
    lifecycle.check_out(booking.id, receptionist)
    receipt = lifecycle.record_payment(booking.id, booking.total_amount, PaymentMethod.CASH, receptionist)
    assert receipt.booking.balance == 0


def test_ledger_mismatch_is_detected(session_factory, lifecycle, receptionist, rooms, guest_details):
    booking = _create(lifecycle, receptionist, rooms["101"], guest_details)
    with session_factory() as session:
        stored = session.get(Booking, booking.id)
        stored.paid_amount = 500
        session.commit()

    with pytest.raises(PaymentLedgerMismatchError) as exc:
        lifecycle.record_payment(booking.id, 100, PaymentMethod.CASH, receptionist)
    assert exc.value.status_code == 500
    assert _booking(session_factory, booking.id).paid_amount == 500


# ---------------------------------------------------------------------- #
# Edits, deletes and reads
# ---------------------------------------------------------------------- #

def test_changing_dates_recomputes_totals(lifecycle, receptionist, rooms, guest_details):
    booking = _create(lifecycle, receptionist, rooms["101"], guest_details)
    updated = lifecycle.update_booking(
        booking.id,
        BookingUpdate(check_out=date(2024, 3, 15), special_requests="Late arrival"),
        receptionist,
    )
    assert updated.nights == 5
    assert updated.total_amount == 25000
    assert updated.special_requests == "Late arrival"
    assert updated.check_out == datetime(2024, 3, 15)


def test_edit_cannot_drop_total_below_paid(session_factory, lifecycle, receptionist, rooms, guest_details):
    booking = _create(lifecycle, receptionist, rooms["101"], guest_details)
    lifecycle.record_payment(booking.id, 15000, PaymentMethod.CASH, receptionist)
    with pytest.raises(ValidationError):
        lifecycle.update_booking(booking.id, BookingUpdate(check_out=date(2024, 3, 11)), receptionist)
    assert _booking(session_factory, booking.id).total_amount == 15000


def test_only_confirmed_bookings_can_be_edited(lifecycle, receptionist, rooms, guest_details):
    booking = _create(lifecycle, receptionist, rooms["101"], guest_details)
    lifecycle.check_in(booking.id, receptionist)
    with pytest.raises(InvalidTransitionError):
        lifecycle.update_booking(booking.id, BookingUpdate(special_requests="x"), receptionist)


def test_edit_checks_capacity(lifecycle, receptionist, rooms, guest_details):
    booking = _create(lifecycle, receptionist, rooms["101"], guest_details)
    with pytest.raises(InsufficientCapacityError):
        lifecycle.update_booking(booking.id, BookingUpdate(adults=2), receptionist)


def test_admin_delete_removes_payments_and_history(session_factory, lifecycle, admin, receptionist, rooms, guest_details):
    booking = _create(lifecycle, receptionist, rooms["101"], guest_details)
    lifecycle.record_payment(booking.id, 1000, PaymentMethod.CASH, receptionist)

    with pytest.raises(AuthorizationError):
        lifecycle.delete_booking(booking.id, receptionist)
    lifecycle.delete_booking(booking.id, admin)

    with session_factory() as session:
        assert session.get(Booking, booking.id) is None
        assert session.scalar(select(func.count()).select_from(Payment)) == 0
        assert session.scalar(select(func.count()).select_from(BookingStatusHistory)) == 0


def test_list_and_range_queries(lifecycle, receptionist, rooms, guest_details):
    early = _create(lifecycle, receptionist, rooms["101"], guest_details, date(2024, 3, 2), date(2024, 3, 4))
    late = _create(lifecycle, receptionist, rooms["102"], guest_details, date(2024, 3, 20), date(2024, 3, 22))
    lifecycle.check_in(early.id, receptionist)

    assert {b.id for b in lifecycle.list_bookings(None, receptionist)} == {early.id, late.id}
    confirmed = lifecycle.list_bookings(BookingFilter(status=BookingStatus.CONFIRMED), receptionist)
    assert [b.id for b in confirmed] == [late.id]
    by_text = lifecycle.list_bookings(BookingFilter(search_text="doe"), receptionist)
    assert len(by_text) == 2

    in_range = lifecycle.bookings_in_range(date(2024, 3, 3), date(2024, 3, 10), receptionist)
    assert [b.id for b in in_range] == [early.id]
    with pytest.raises(InvalidDateRangeError):
        lifecycle.bookings_in_range(date(2024, 3, 10), date(2024, 3, 3), receptionist)


def test_guest_cannot_view_other_bookings(lifecycle, receptionist, guest_user, rooms, guest_details):
    mine = _create(lifecycle, receptionist, rooms["101"], guest_details)
    other = _create(lifecycle, receptionist, rooms["102"], dict(guest_details, email="someone@example.com"))

    assert lifecycle.get_booking(mine.id, guest_user).id == mine.id
    with pytest.raises(AuthorizationError):
        lifecycle.get_booking(other.id, guest_user)
    with pytest.raises(AuthorizationError):
        lifecycle.list_for_guest(other.guest_id, guest_user)
    with pytest.raises(AuthorizationError):
        lifecycle.list_bookings(None, guest_user)
