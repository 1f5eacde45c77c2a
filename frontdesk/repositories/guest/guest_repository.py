"""
Guest repository: the guest directory's data access.
"""

from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from frontdesk.models.guest import Guest
from frontdesk.repositories.base.base_repository import BaseRepository
from frontdesk.schemas.guest.guest import GuestSearch


class GuestRepository(BaseRepository[Guest]):

    def __init__(self, db: Session):
        super().__init__(Guest, db)

    def get_by_email(self, email: str) -> Optional[Guest]:
        stmt = select(Guest).where(Guest.email == email.strip().lower())
        guests = self.find(stmt)
        return guests[0] if guests else None

    def search(self, criteria: GuestSearch, skip: int = 0, limit: int = 100) -> List[Guest]:
        """
        Find guests matching every given criterion.

        Args:
            criteria: Exact email/id number and/or a free-text term
            skip: Offset for pagination
            limit: Page size

        Returns:
            Guests ordered by last name, first name
        """
        stmt = select(Guest)
        if criteria.email:
            stmt = stmt.where(Guest.email == criteria.email.strip().lower())
        if criteria.id_number:
            stmt = stmt.where(Guest.id_number == criteria.id_number)
        if criteria.search_text:
            term = f"%{criteria.search_text.lower()}%"
            stmt = stmt.where(
                or_(
                    Guest.first_name.ilike(term),
                    Guest.last_name.ilike(term),
                    Guest.email.ilike(term),
                    Guest.phone.ilike(term),
                )
            )
        stmt = stmt.order_by(Guest.last_name, Guest.first_name).offset(skip).limit(limit)
        return self.find(stmt)
