"""Stay pricing."""

from frontdesk.services.pricing.quote_service import QuoteService
from frontdesk.services.pricing.stay_pricing import (
    StayQuote,
    compute_stay,
    count_nights,
    invoice_breakdown,
    quote_for_booking,
)

__all__ = [
    "QuoteService",
    "StayQuote",
    "compute_stay",
    "count_nights",
    "invoice_breakdown",
    "quote_for_booking",
]
