"""Payment models."""

from frontdesk.models.payment.payment import Payment

__all__ = ["Payment"]
