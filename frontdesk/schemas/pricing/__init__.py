"""Pricing schemas."""

from frontdesk.schemas.pricing.quote import QuoteRequest, QuoteResponse

__all__ = ["QuoteRequest", "QuoteResponse"]
