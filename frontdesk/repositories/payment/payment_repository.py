"""
Payment repository: the payment recorder's data access.
"""

from collections import OrderedDict
from datetime import date, datetime
from typing import Dict, List, Optional, Tuple

from sqlalchemy import and_, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from frontdesk.models.base.enums import PaymentMethod, PaymentStatus
from frontdesk.models.payment import Payment
from frontdesk.repositories.base.base_repository import BaseRepository


class PaymentRepository(BaseRepository[Payment]):

    def __init__(self, db: Session):
        super().__init__(Payment, db)

    def record(
        self,
        booking_id: str,
        amount: int,
        method: PaymentMethod,
        transaction_id: Optional[str] = None,
        processed_by: Optional[str] = None,
        status: PaymentStatus = PaymentStatus.COMPLETED,
    ) -> Payment:
        """Append a payment row for a booking."""
        payment = Payment(
            booking_id=booking_id,
            amount=amount,
            method=method,
            status=status,
            transaction_id=transaction_id,
            processed_by=processed_by,
        )
        return self.create(payment)

    def list_for_booking(self, booking_id: str) -> List[Payment]:
        stmt = (
            select(Payment)
            .where(Payment.booking_id == booking_id)
            .order_by(Payment.created_at)
        )
        return self.find(stmt)

    def completed_total(self, booking_id: str) -> int:
        """Sum of completed payments for a booking."""
        stmt = select(func.coalesce(func.sum(Payment.amount), 0)).where(
            and_(
                Payment.booking_id == booking_id,
                Payment.status == PaymentStatus.COMPLETED,
            )
        )
        try:
            return int(self.db.execute(stmt).scalar_one())
        except SQLAlchemyError as e:
            raise self._store_error("aggregate", e) from e

    def revenue_by_day(self, start: datetime, end: datetime) -> "OrderedDict[date, Tuple[int, int]]":
        """
        Completed payments in [start, end) grouped by calendar day.

        Returns:
            day -> (amount, payment count), in day order
        """
        stmt = (
            select(Payment.created_at, Payment.amount)
            .where(
                and_(
                    Payment.status == PaymentStatus.COMPLETED,
                    Payment.created_at >= start,
                    Payment.created_at < end,
                )
            )
            .order_by(Payment.created_at)
        )
        try:
            rows = self.db.execute(stmt).all()
        except SQLAlchemyError as e:
            raise self._store_error("aggregate", e) from e

        totals: Dict[date, Tuple[int, int]] = OrderedDict()
        for created_at, amount in rows:
            day = created_at.date()
            amount_total, count = totals.get(day, (0, 0))
            totals[day] = (amount_total + amount, count + 1)
        return totals
