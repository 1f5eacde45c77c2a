# frontdesk/services/pricing/stay_pricing.py
"""
Stay pricing calculator.

Pure functions: nights x nightly rate, plus optional tax and service
charge. The same inputs always produce the same integer amounts, so the
quote computed at booking time and the invoice recomputed later agree
exactly.
"""

from dataclasses import dataclass
from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import TYPE_CHECKING, Optional, Union

from frontdesk.config.settings import RATE_DECIMAL_PLACES
from frontdesk.core.exceptions import InvalidDateRangeError, ValidationError
from frontdesk.core.logging import get_logger
from frontdesk.schemas.booking.booking_response import InvoiceBreakdown
from frontdesk.utils.date_utils import DateLike, to_naive_utc

if TYPE_CHECKING:
    from frontdesk.models.booking import Booking

logger = get_logger(__name__)

RateLike = Union[Decimal, float, int, str]

ONE_NIGHT = timedelta(days=1)
RATE_QUANTUM = Decimal(1).scaleb(-RATE_DECIMAL_PLACES)


@dataclass(frozen=True)
class StayQuote:
    """Result of pricing a stay. ``tax``/``service_charge`` are None when not applied."""

    nights: int
    nightly_rate: int
    subtotal: int
    tax_rate: Optional[Decimal]
    tax: Optional[int]
    service_charge_rate: Optional[Decimal]
    service_charge: Optional[int]
    total: int


def count_nights(check_in: DateLike, check_out: DateLike) -> int:
    """
    Billable nights between two instants.

    Partial days round up: any part of a day is charged as a night.

    Raises:
        InvalidDateRangeError: If check_out is not after check_in
    """
    start = to_naive_utc(check_in)
    end = to_naive_utc(check_out)
    if end <= start:
        raise InvalidDateRangeError(
            start_date=start.isoformat(),
            end_date=end.isoformat(),
        )
    # Integer ceiling on microseconds keeps this exact
    whole, remainder = divmod(end - start, ONE_NIGHT)
    return whole + (1 if remainder else 0)


def _to_rate(value: Optional[RateLike], field: str) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        rate = Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValidationError(
            f"{field} must be a number",
            field_errors={field: ["not a number"]},
        ) from e
    if not rate.is_finite() or rate < 0:
        raise ValidationError(
            f"{field} must be zero or positive",
            field_errors={field: ["must be >= 0"]},
        )
    if rate != rate.quantize(RATE_QUANTUM):
        raise ValidationError(
            f"{field} allows at most {RATE_DECIMAL_PLACES} decimal places",
            field_errors={field: [f"at most {RATE_DECIMAL_PLACES} decimal places"]},
        )
    return rate


def _apply_rate(amount: int, rate: Optional[Decimal]) -> Optional[int]:
    if rate is None:
        return None
    return int((Decimal(amount) * rate).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_stay(
    nightly_rate: int,
    check_in: DateLike,
    check_out: DateLike,
    tax_rate: Optional[RateLike] = None,
    service_charge_rate: Optional[RateLike] = None,
) -> StayQuote:
    """
    Price a stay.

    Args:
        nightly_rate: Nightly rate in integer currency units (> 0)
        check_in: Check-in date or datetime (dates are midnight)
        check_out: Check-out date or datetime, after check_in
        tax_rate: Optional tax fraction (0.16 for 16%)
        service_charge_rate: Optional service charge fraction on the subtotal

    Returns:
        StayQuote with nights, subtotal, tax, service charge and total

    Raises:
        InvalidDateRangeError: If check_out <= check_in
        ValidationError: If the rate is not a positive integer or a
            percentage is negative or has more than four decimal places
    """
    if isinstance(nightly_rate, bool) or not isinstance(nightly_rate, int) or nightly_rate <= 0:
        raise ValidationError(
            "Nightly rate must be a positive integer amount",
            field_errors={"nightly_rate": ["must be > 0"]},
        )

    nights = count_nights(check_in, check_out)
    tax_fraction = _to_rate(tax_rate, "tax_rate")
    service_fraction = _to_rate(service_charge_rate, "service_charge_rate")

    subtotal = nights * nightly_rate
    tax = _apply_rate(subtotal, tax_fraction)
    service_charge = _apply_rate(subtotal, service_fraction)
    total = subtotal + (tax or 0) + (service_charge or 0)

    return StayQuote(
        nights=nights,
        nightly_rate=nightly_rate,
        subtotal=subtotal,
        tax_rate=tax_fraction,
        tax=tax,
        service_charge_rate=service_fraction,
        service_charge=service_charge,
        total=total,
    )


def quote_for_booking(booking: "Booking") -> StayQuote:
    """Recompute the quote from a booking's stored rate snapshot."""
    return compute_stay(
        booking.room_rate,
        booking.check_in,
        booking.check_out,
        tax_rate=booking.tax_rate,
        service_charge_rate=booking.service_charge_rate,
    )


def invoice_breakdown(booking: "Booking", currency: str) -> InvoiceBreakdown:
    """
    Invoice lines for a booking.

    Lines are recomputed from the stored rate snapshot as a check. The
    amounts reported are the stored ones; a disagreement is logged as an
    error.
    """
    quote = quote_for_booking(booking)
    stored = (booking.nights, booking.subtotal, booking.tax_amount, booking.service_charge, booking.total_amount)
    computed = (quote.nights, quote.subtotal, quote.tax, quote.service_charge, quote.total)
    if stored != computed:
        logger.error(
            "Invoice recomputation disagrees with stored booking totals",
            extra={"booking_id": booking.id, "stored": stored, "computed": computed},
        )

    return InvoiceBreakdown(
        booking_id=booking.id,
        booking_number=booking.booking_number,
        currency=currency,
        nights=booking.nights,
        room_rate=booking.room_rate,
        subtotal=booking.subtotal,
        tax_rate=booking.tax_rate,
        tax=booking.tax_amount,
        service_charge_rate=booking.service_charge_rate,
        service_charge=booking.service_charge,
        total=booking.total_amount,
        paid_amount=booking.paid_amount,
        balance=booking.balance,
        payment_status=booking.payment_status,
    )
