# frontdesk/services/pricing/quote_service.py
"""
Stay quotes for the pricing endpoint.
"""

from typing import Callable, Optional

from sqlalchemy.orm import Session

from frontdesk.config.settings import Settings, get_settings
from frontdesk.repositories.room import RoomRepository
from frontdesk.schemas.pricing.quote import QuoteRequest, QuoteResponse
from frontdesk.services.common.unit_of_work import UnitOfWork
from frontdesk.services.pricing.stay_pricing import compute_stay


class QuoteService:
    """Prices a stay for a directory room or an explicit nightly rate."""

    def __init__(self, session_factory: Callable[[], Session], config: Optional[Settings] = None):
        self.session_factory = session_factory
        self.config = config or get_settings()

    def quote(self, request: QuoteRequest) -> QuoteResponse:
        nightly_rate = request.nightly_rate
        if request.room_id is not None:
            with UnitOfWork(self.session_factory) as uow:
                nightly_rate = uow.get_repo(RoomRepository).get_or_raise(request.room_id).price

        tax_rate = request.tax_rate
        if tax_rate is None and request.apply_default_tax:
            tax_rate = self.config.INVOICE_TAX_RATE

        quote = compute_stay(
            nightly_rate,
            request.check_in,
            request.check_out,
            tax_rate=tax_rate,
            service_charge_rate=request.service_charge_rate,
        )
        return QuoteResponse(
            nights=quote.nights,
            nightly_rate=quote.nightly_rate,
            subtotal=quote.subtotal,
            tax_rate=quote.tax_rate,
            tax=quote.tax,
            service_charge_rate=quote.service_charge_rate,
            service_charge=quote.service_charge,
            total=quote.total,
            currency=self.config.CURRENCY,
        )
