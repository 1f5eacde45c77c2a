# frontdesk/services/booking/booking_lifecycle_service.py
"""
Booking lifecycle engine.

Owns booking creation, the status transitions
confirmed -> checked_in -> checked_out (or -> cancelled), and the
financial fields (nights, totals, paid amount). Each operation runs in one
Unit of Work, so the booking, its room and the rows it owns (status
history, payment, housekeeping task) change together or not at all.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Dict, FrozenSet, List, Optional

from sqlalchemy.orm import Session

from frontdesk.config.settings import Settings, get_settings
from frontdesk.core.exceptions import (
    AuthorizationError,
    BookingConflictError,
    InsufficientCapacityError,
    InvalidDateRangeError,
    InvalidTransitionError,
    OverpaymentRejectedError,
    PaymentLedgerMismatchError,
    RoomUnavailableError,
    ValidationError,
)
from frontdesk.core.logging import get_audit_logger, get_logger, log_execution_time
from frontdesk.models.base.enums import (
    BookingSource,
    BookingStatus,
    PaymentMethod,
    RoomStatus,
    TaskPriority,
    TaskType,
    UserRole,
)
from frontdesk.models.booking import Booking, BookingStatusHistory
from frontdesk.models.housekeeping import HousekeepingTask
from frontdesk.models.payment import Payment
from frontdesk.models.room import Room
from frontdesk.repositories.booking import BookingRepository
from frontdesk.repositories.guest import GuestRepository
from frontdesk.repositories.housekeeping import HousekeepingTaskRepository
from frontdesk.repositories.payment import PaymentRepository
from frontdesk.repositories.room import RoomRepository
from frontdesk.schemas.booking.booking_base import BookingCreate, BookingFilter, BookingUpdate
from frontdesk.schemas.booking.booking_response import InvoiceBreakdown
from frontdesk.services.common.permissions import (
    CurrentUser,
    can_create_booking,
    can_delete_bookings,
    can_manage_bookings,
    can_view_booking,
    require,
    require_capability,
)
from frontdesk.services.common.unit_of_work import UnitOfWork
from frontdesk.services.guest.guest_service import find_or_register_guest
from frontdesk.services.pricing.stay_pricing import compute_stay, invoice_breakdown
from frontdesk.utils.date_utils import DateLike, now_utc, to_naive_utc, today_utc

logger = get_logger(__name__)
audit = get_audit_logger()

BOOKING_TRANSITIONS: Dict[BookingStatus, FrozenSet[BookingStatus]] = {
    BookingStatus.CONFIRMED: frozenset({BookingStatus.CHECKED_IN, BookingStatus.CANCELLED}),
    BookingStatus.CHECKED_IN: frozenset({BookingStatus.CHECKED_OUT, BookingStatus.CANCELLED}),
    BookingStatus.CHECKED_OUT: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}

# Balances can still be settled after departure
PAYABLE_STATUSES = frozenset({
    BookingStatus.CONFIRMED,
    BookingStatus.CHECKED_IN,
    BookingStatus.CHECKED_OUT,
})


def assert_booking_transition(booking: Booking, target: BookingStatus, action: str) -> None:
    """Raise InvalidTransitionError unless ``booking`` may move to ``target``."""
    allowed = BOOKING_TRANSITIONS.get(booking.status, frozenset())
    if target not in allowed:
        raise InvalidTransitionError(
            action=action,
            current_status=booking.status.value,
            booking_id=booking.id,
        )


@dataclass(frozen=True)
class PaymentReceipt:
    """A recorded payment together with the booking it was applied to."""

    booking: Booking
    payment: Payment


class BookingLifecycleService:
    """
    Service for the booking lifecycle.

    Responsibilities:
    - Create bookings priced by the stay pricing calculator
    - Check-in, check-out and cancellation transitions with room side effects
    - Payment recording against the outstanding balance
    - Explicit edits and admin deletes
    - Booking reads, invoices and status history
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        config: Optional[Settings] = None,
        today_provider: Callable[[], date] = today_utc,
        clock: Callable[[], datetime] = now_utc,
    ):
        """
        Args:
            session_factory: Factory returning new database sessions
            config: Settings to read rates and feature flags from
            today_provider: Returns "today" for the immediate-occupancy rule
            clock: Returns the current naive UTC time for audit columns
        """
        self.session_factory = session_factory
        self.config = config or get_settings()
        self.today_provider = today_provider
        self.clock = clock

    # ------------------------------------------------------------------ #
    # Creation
    # ------------------------------------------------------------------ #

    @log_execution_time()
    def create_booking(self, data: BookingCreate, user: CurrentUser) -> Booking:
        """
        Create a confirmed booking with nothing paid.

        Args:
            data: Booking payload (existing guest id or inline guest details)
            user: Caller; guests may only book for themselves

        Returns:
            The new booking

        Raises:
            InvalidDateRangeError: If check_out <= check_in
            ValidationError: If the party size is invalid
            RoomUnavailableError: If the room's status is not available
            InsufficientCapacityError: If the party does not fit the room
            BookingConflictError: If overlap checking is enabled and the room
                already has an active booking for the dates
        """
        require_capability(can_create_booking, user)
        check_in, check_out = self._normalize_stay(data.check_in, data.check_out)
        self._validate_party(data.adults, data.children)

        with UnitOfWork(self.session_factory) as uow:
            rooms = uow.get_repo(RoomRepository)
            bookings = uow.get_repo(BookingRepository)

            room = rooms.get_or_raise(data.room_id, for_update=True)
            if not room.is_available:
                raise RoomUnavailableError(
                    f"Room {room.number} is {room.status.value}",
                    room_id=room.id,
                    room_status=room.status.value,
                )
            self._check_capacity(room, data.adults, data.children)
            if self.config.ENFORCE_BOOKING_OVERLAP:
                self._check_overlap(bookings, room, check_in, check_out)

            guest = self._resolve_guest(uow.get_repo(GuestRepository), data, user)

            quote = compute_stay(
                room.price,
                check_in,
                check_out,
                tax_rate=self.config.BOOKING_TAX_RATE,
                service_charge_rate=self.config.BOOKING_SERVICE_CHARGE_RATE,
            )
            today = self.today_provider()
            booking = Booking(
                booking_number=bookings.next_booking_number(today),
                guest_id=guest.id,
                guest_snapshot=guest.snapshot(),
                room_id=room.id,
                check_in=check_in,
                check_out=check_out,
                nights=quote.nights,
                adults=data.adults,
                children=data.children,
                status=BookingStatus.CONFIRMED,
                source=BookingSource.SELF_SERVICE if user.role == UserRole.GUEST else data.source,
                room_rate=quote.nightly_rate,
                subtotal=quote.subtotal,
                tax_rate=quote.tax_rate,
                tax_amount=quote.tax,
                service_charge_rate=quote.service_charge_rate,
                service_charge=quote.service_charge,
                total_amount=quote.total,
                paid_amount=0,
                payment_method=data.payment_method,
                special_requests=data.special_requests,
                created_by=user.actor,
            )
            bookings.create(booking)
            bookings.record_status_change(
                booking, None, BookingStatus.CONFIRMED, user.actor, "Booking created"
            )

            # Same-day arrivals occupy the room immediately
            if check_in.date() == today:
                rooms.update_status(room, RoomStatus.OCCUPIED)

        audit.info(
            "booking_created",
            booking_id=booking.id,
            booking_number=booking.booking_number,
            room_id=room.id,
            nights=booking.nights,
            total_amount=booking.total_amount,
            room_status=room.status.value,
            user_id=user.user_id,
        )
        return booking

    # ------------------------------------------------------------------ #
    # Transitions
    # ------------------------------------------------------------------ #

    @log_execution_time()
    def check_in(self, booking_id: str, user: CurrentUser) -> Booking:
        """Move a confirmed booking to checked_in and occupy its room."""
        require_capability(can_manage_bookings, user)
        with UnitOfWork(self.session_factory) as uow:
            bookings = uow.get_repo(BookingRepository)
            rooms = uow.get_repo(RoomRepository)

            booking = bookings.get_or_raise(booking_id, for_update=True)
            assert_booking_transition(booking, BookingStatus.CHECKED_IN, "check_in")
            room = rooms.get_or_raise(booking.room_id, for_update=True)
            if room.status not in (RoomStatus.AVAILABLE, RoomStatus.OCCUPIED):
                logger.warning(
                    f"Checking in to room {room.number} while it is {room.status.value}",
                    extra={"booking_id": booking.id, "room_id": room.id},
                )

            bookings.update_status(
                booking,
                BookingStatus.CHECKED_IN,
                user.actor,
                "Guest checked in",
                actual_check_in_at=self.clock(),
                checked_in_by=user.actor,
            )
            rooms.update_status(room, RoomStatus.OCCUPIED)

        self._audit_transition("booking_checked_in", booking, room, user)
        return booking

    @log_execution_time()
    def check_out(self, booking_id: str, user: CurrentUser) -> Booking:
        """
        Move a checked-in booking to checked_out.

        The room goes to cleaning (never straight back to available) and,
        when enabled, a cleaning task is opened for it.
        """
        require_capability(can_manage_bookings, user)
        with UnitOfWork(self.session_factory) as uow:
            bookings = uow.get_repo(BookingRepository)
            rooms = uow.get_repo(RoomRepository)

            booking = bookings.get_or_raise(booking_id, for_update=True)
            assert_booking_transition(booking, BookingStatus.CHECKED_OUT, "check_out")
            room = rooms.get_or_raise(booking.room_id, for_update=True)

            bookings.update_status(
                booking,
                BookingStatus.CHECKED_OUT,
                user.actor,
                "Guest checked out",
                actual_check_out_at=self.clock(),
                checked_out_by=user.actor,
            )
            rooms.update_status(room, RoomStatus.CLEANING)

            if self.config.AUTO_HOUSEKEEPING_ON_CHECKOUT:
                task = uow.get_repo(HousekeepingTaskRepository).create(
                    HousekeepingTask(
                        room_id=room.id,
                        booking_id=booking.id,
                        assigned_to=self.config.DEFAULT_HOUSEKEEPER,
                        assigned_by=user.actor,
                        task_type=TaskType.CLEANING,
                        priority=TaskPriority.HIGH,
                        description=f"Checkout cleaning for room {room.number} ({booking.booking_number})",
                    )
                )
                logger.info(
                    f"Cleaning task opened for room {room.number}",
                    extra={"booking_id": booking.id, "room_id": room.id, "task_id": task.id},
                )

        self._audit_transition("booking_checked_out", booking, room, user)
        return booking

    @log_execution_time()
    def cancel(self, booking_id: str, reason: Optional[str], user: CurrentUser) -> Booking:
        """
        Cancel a confirmed or checked-in booking.

        The room is left as it is; an occupied room has to be released
        through the room directory.
        """
        require_capability(can_manage_bookings, user)
        with UnitOfWork(self.session_factory) as uow:
            bookings = uow.get_repo(BookingRepository)

            booking = bookings.get_or_raise(booking_id, for_update=True)
            assert_booking_transition(booking, BookingStatus.CANCELLED, "cancel")
            room = uow.get_repo(RoomRepository).get_or_raise(booking.room_id)

            bookings.update_status(
                booking,
                BookingStatus.CANCELLED,
                user.actor,
                reason or "Cancelled",
                cancelled_at=self.clock(),
                cancelled_by=user.actor,
                cancellation_reason=reason,
            )

        if room.status == RoomStatus.OCCUPIED:
            logger.warning(
                f"Booking {booking.booking_number} cancelled; room {room.number} is still occupied",
                extra={"booking_id": booking.id, "room_id": room.id},
            )
        self._audit_transition("booking_cancelled", booking, room, user, reason=reason)
        return booking

    # ------------------------------------------------------------------ #
    # Payments
    # ------------------------------------------------------------------ #

    @log_execution_time()
    def record_payment(
        self,
        booking_id: str,
        amount: int,
        method: PaymentMethod,
        user: CurrentUser,
        transaction_id: Optional[str] = None,
    ) -> PaymentReceipt:
        """
        Apply a completed payment to a booking.

        Args:
            booking_id: Booking to pay for
            amount: Amount in integer currency units (> 0)
            method: Payment method
            user: Caller
            transaction_id: Optional external reference

        Returns:
            PaymentReceipt with the updated booking and the payment row

        Raises:
            ValidationError: If the amount is not a positive integer
            InvalidTransitionError: If the booking is cancelled
            OverpaymentRejectedError: If the payment exceeds the balance
            PaymentLedgerMismatchError: If recorded payments disagree with
                the booking's paid amount
        """
        require_capability(can_manage_bookings, user)
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise ValidationError(
                "Payment amount must be a positive integer",
                field_errors={"amount": ["must be > 0"]},
            )
        try:
            method = PaymentMethod(method)
        except ValueError as e:
            raise ValidationError(
                f"Unknown payment method: {method}",
                field_errors={"method": ["unknown payment method"]},
            ) from e

        with UnitOfWork(self.session_factory) as uow:
            bookings = uow.get_repo(BookingRepository)
            payments = uow.get_repo(PaymentRepository)

            booking = bookings.get_or_raise(booking_id, for_update=True)
            if booking.status not in PAYABLE_STATUSES:
                raise InvalidTransitionError(
                    action="record_payment",
                    current_status=booking.status.value,
                    booking_id=booking.id,
                )

            ledger_total = payments.completed_total(booking.id)
            if ledger_total != booking.paid_amount:
                logger.error(
                    "Payment ledger out of sync with booking",
                    extra={"booking_id": booking.id},
                )
                raise PaymentLedgerMismatchError(booking.paid_amount, ledger_total, booking.id)

            if booking.paid_amount + amount > booking.total_amount:
                raise OverpaymentRejectedError(amount, booking.balance, booking.id)

            payment = payments.record(
                booking.id,
                amount,
                method,
                transaction_id=transaction_id,
                processed_by=user.actor,
            )
            bookings.update(booking, {"paid_amount": booking.paid_amount + amount})

        audit.info(
            "payment_recorded",
            booking_id=booking.id,
            payment_id=payment.id,
            amount=amount,
            method=method.value,
            paid_amount=booking.paid_amount,
            balance=booking.balance,
            user_id=user.user_id,
        )
        return PaymentReceipt(booking=booking, payment=payment)

    # ------------------------------------------------------------------ #
    # Explicit edits
    # ------------------------------------------------------------------ #

    def update_booking(self, booking_id: str, data: BookingUpdate, user: CurrentUser) -> Booking:
        """
        Edit a confirmed booking.

        Changing the dates recomputes nights and totals at the booking's
        stored rates. The new total may not fall below what has been paid.
        """
        require_capability(can_manage_bookings, user)
        changes = data.model_dump(exclude_unset=True)

        with UnitOfWork(self.session_factory) as uow:
            bookings = uow.get_repo(BookingRepository)
            booking = bookings.get_or_raise(booking_id, for_update=True)
            if booking.status != BookingStatus.CONFIRMED:
                raise InvalidTransitionError(
                    action="update",
                    current_status=booking.status.value,
                    booking_id=booking.id,
                )

            adults = changes.get("adults", booking.adults)
            children = changes.get("children", booking.children)
            self._validate_party(adults, children)
            if "adults" in changes or "children" in changes:
                room = uow.get_repo(RoomRepository).get_or_raise(booking.room_id)
                self._check_capacity(room, adults, children)

            updates = {
                key: changes[key]
                for key in ("adults", "children", "special_requests", "payment_method")
                if key in changes
            }

            if "check_in" in changes or "check_out" in changes:
                check_in, check_out = self._normalize_stay(
                    changes.get("check_in") or booking.check_in,
                    changes.get("check_out") or booking.check_out,
                )
                if self.config.ENFORCE_BOOKING_OVERLAP:
                    room = uow.get_repo(RoomRepository).get_or_raise(booking.room_id)
                    self._check_overlap(bookings, room, check_in, check_out, exclude_booking_id=booking.id)
                quote = compute_stay(
                    booking.room_rate,
                    check_in,
                    check_out,
                    tax_rate=booking.tax_rate,
                    service_charge_rate=booking.service_charge_rate,
                )
                if quote.total < booking.paid_amount:
                    raise ValidationError(
                        f"New total {quote.total} is below the amount already paid ({booking.paid_amount})",
                        field_errors={"check_out": ["total would fall below paid amount"]},
                    )
                updates.update(
                    check_in=check_in,
                    check_out=check_out,
                    nights=quote.nights,
                    subtotal=quote.subtotal,
                    tax_amount=quote.tax,
                    service_charge=quote.service_charge,
                    total_amount=quote.total,
                )

            bookings.update(booking, updates)

        logger.info(
            f"Booking {booking.booking_number} updated",
            extra={"booking_id": booking.id, "fields": sorted(updates)},
        )
        return booking

    def delete_booking(self, booking_id: str, user: CurrentUser) -> None:
        """Remove a booking with its payments and history (admin only)."""
        require_capability(can_delete_bookings, user)
        with UnitOfWork(self.session_factory) as uow:
            bookings = uow.get_repo(BookingRepository)
            booking = bookings.get_or_raise(booking_id, for_update=True)
            number = booking.booking_number
            bookings.delete(booking)

        audit.warning("booking_deleted", booking_id=booking_id, booking_number=number, user_id=user.user_id)

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    def get_booking(self, booking_id: str, user: CurrentUser) -> Booking:
        with UnitOfWork(self.session_factory) as uow:
            booking = uow.get_repo(BookingRepository).get_or_raise(booking_id)
        require(can_view_booking(user, booking), user, "view_booking")
        return booking

    def list_bookings(self, booking_filter: Optional[BookingFilter], user: CurrentUser) -> List[Booking]:
        require_capability(can_manage_bookings, user)
        with UnitOfWork(self.session_factory) as uow:
            return uow.get_repo(BookingRepository).list_bookings(booking_filter)

    def list_for_guest(self, guest_id: str, user: CurrentUser) -> List[Booking]:
        """Bookings of one guest; guests may only list their own."""
        with UnitOfWork(self.session_factory) as uow:
            guest = uow.get_repo(GuestRepository).get_or_raise(guest_id)
            if not can_manage_bookings(user):
                own = user.role == UserRole.GUEST and user.email and guest.email == user.email.lower()
                require(bool(own), user, "view_booking")
            return uow.get_repo(BookingRepository).list_for_guest(guest.id)

    def list_for_current_guest(self, user: CurrentUser) -> List[Booking]:
        """Bookings of the guest registered under the caller's email."""
        if not user.email:
            return []
        with UnitOfWork(self.session_factory) as uow:
            guest = uow.get_repo(GuestRepository).get_by_email(user.email)
            if guest is None:
                return []
            return uow.get_repo(BookingRepository).list_for_guest(guest.id)

    def bookings_in_range(
        self,
        start: DateLike,
        end: DateLike,
        user: CurrentUser,
        status: Optional[BookingStatus] = None,
    ) -> List[Booking]:
        """Bookings whose stay overlaps [start, end)."""
        require_capability(can_manage_bookings, user)
        start_at, end_at = self._normalize_stay(start, end)
        with UnitOfWork(self.session_factory) as uow:
            return uow.get_repo(BookingRepository).in_range(start_at, end_at, status)

    def get_status_history(self, booking_id: str, user: CurrentUser) -> List[BookingStatusHistory]:
        booking = self.get_booking(booking_id, user)
        with UnitOfWork(self.session_factory) as uow:
            return uow.get_repo(BookingRepository).get_status_history(booking.id)

    def list_payments(self, booking_id: str, user: CurrentUser) -> List[Payment]:
        booking = self.get_booking(booking_id, user)
        with UnitOfWork(self.session_factory) as uow:
            return uow.get_repo(PaymentRepository).list_for_booking(booking.id)

    def get_invoice(self, booking_id: str, user: CurrentUser) -> InvoiceBreakdown:
        booking = self.get_booking(booking_id, user)
        return invoice_breakdown(booking, self.config.CURRENCY)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _normalize_stay(check_in: DateLike, check_out: DateLike):
        start = to_naive_utc(check_in)
        end = to_naive_utc(check_out)
        if end <= start:
            raise InvalidDateRangeError(start_date=start.isoformat(), end_date=end.isoformat())
        return start, end

    @staticmethod
    def _validate_party(adults: int, children: int) -> None:
        errors = {}
        if adults is None or adults < 1:
            errors["adults"] = ["at least one adult is required"]
        if children is None or children < 0:
            errors["children"] = ["must be zero or more"]
        if errors:
            raise ValidationError("Invalid party size", field_errors=errors)

    @staticmethod
    def _check_capacity(room: Room, adults: int, children: int) -> None:
        guests = adults + children
        if guests > room.capacity:
            raise InsufficientCapacityError(
                f"Room {room.number} holds {room.capacity} guest(s), {guests} requested",
                requested=guests,
                available=room.capacity,
            )

    @staticmethod
    def _check_overlap(
        bookings: BookingRepository,
        room: Room,
        check_in: datetime,
        check_out: datetime,
        exclude_booking_id: Optional[str] = None,
    ) -> None:
        conflicts = bookings.find_overlapping([room.id], check_in, check_out, exclude_booking_id)
        if conflicts:
            raise BookingConflictError(
                room_id=room.id,
                conflicting_booking_id=conflicts[0].id,
            )

    @staticmethod
    def _resolve_guest(repo: GuestRepository, data: BookingCreate, user: CurrentUser):
        if data.guest_id:
            guest = repo.get_or_raise(data.guest_id)
        else:
            guest = find_or_register_guest(repo, data.guest)

        if user.role == UserRole.GUEST:
            if not user.email or guest.email != user.email.lower():
                raise AuthorizationError(
                    "Guests can only book for themselves",
                    user_id=user.user_id,
                    role=user.role.value,
                    capability="create_booking",
                )
        return guest

    @staticmethod
    def _audit_transition(event: str, booking: Booking, room: Room, user: CurrentUser, **extra) -> None:
        audit.info(
            event,
            booking_id=booking.id,
            booking_number=booking.booking_number,
            status=booking.status.value,
            room_id=room.id,
            room_status=room.status.value,
            user_id=user.user_id,
            **extra,
        )
