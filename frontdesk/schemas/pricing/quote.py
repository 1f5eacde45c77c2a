"""
Stay pricing schemas.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator, model_validator

from frontdesk.schemas.common.base import BaseSchema
from frontdesk.utils.date_utils import coerce_stay_instant

__all__ = ["QuoteRequest", "QuoteResponse"]


class QuoteRequest(BaseSchema):
    """
    Price a stay either for a room in the directory or an explicit rate.

    ``apply_default_tax`` uses the configured invoice tax rate when no
    explicit ``tax_rate`` is given.
    """

    room_id: Optional[str] = None
    nightly_rate: Optional[int] = None
    check_in: datetime
    check_out: datetime
    tax_rate: Optional[Decimal] = Field(None, ge=0, le=1, decimal_places=4)
    service_charge_rate: Optional[Decimal] = Field(None, ge=0, le=1, decimal_places=4)
    apply_default_tax: bool = False

    normalize_stay_dates = field_validator("check_in", "check_out", mode="before")(coerce_stay_instant)

    @model_validator(mode="after")
    def require_rate_source(self) -> "QuoteRequest":
        if self.room_id is None and self.nightly_rate is None:
            raise ValueError("Either room_id or nightly_rate is required")
        return self


class QuoteResponse(BaseSchema):
    nights: int
    nightly_rate: int
    subtotal: int
    tax_rate: Optional[Decimal] = None
    tax: Optional[int] = None
    service_charge_rate: Optional[Decimal] = None
    service_charge: Optional[int] = None
    total: int
    currency: str
