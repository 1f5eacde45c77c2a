"""Payment schemas."""

from frontdesk.schemas.payment.payment import PaymentCreate, PaymentReceiptResponse, PaymentResponse

__all__ = ["PaymentCreate", "PaymentReceiptResponse", "PaymentResponse"]
