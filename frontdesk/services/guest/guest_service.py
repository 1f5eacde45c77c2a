# frontdesk/services/guest/guest_service.py
"""
Guest directory service.
"""

from typing import Callable, List

from sqlalchemy.orm import Session

from frontdesk.core.exceptions import DuplicateEntryError
from frontdesk.core.logging import get_logger
from frontdesk.models.guest import Guest
from frontdesk.repositories.guest import GuestRepository
from frontdesk.schemas.guest.guest import GuestCreate, GuestSearch, GuestUpdate
from frontdesk.services.common.permissions import CurrentUser, can_manage_guests, require_capability
from frontdesk.services.common.unit_of_work import UnitOfWork

logger = get_logger(__name__)


def find_or_register_guest(repo: GuestRepository, details: GuestCreate) -> Guest:
    """
    Match inline guest details to a registered guest by email, or register them.

    Runs inside the caller's transaction. Identity fields of an existing
    guest are left untouched.
    """
    existing = repo.get_by_email(details.email)
    if existing is not None:
        return existing
    guest = repo.create(Guest(**details.model_dump()))
    logger.info("Guest registered", extra={"guest_id": guest.id})
    return guest


class GuestService:
    """
    Service for the guest registry.

    Responsibilities:
    - Register guests (unique email)
    - Look guests up by email, id number or free text
    - Explicit edits of guest details
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def create_guest(self, data: GuestCreate, user: CurrentUser) -> Guest:
        require_capability(can_manage_guests, user)
        with UnitOfWork(self.session_factory) as uow:
            repo = uow.get_repo(GuestRepository)
            if repo.get_by_email(data.email) is not None:
                raise DuplicateEntryError("Guest", "email", data.email)
            guest = repo.create(Guest(**data.model_dump()))
        logger.info("Guest registered", extra={"guest_id": guest.id})
        return guest

    def find_guests(self, criteria: GuestSearch, user: CurrentUser) -> List[Guest]:
        require_capability(can_manage_guests, user)
        with UnitOfWork(self.session_factory) as uow:
            return uow.get_repo(GuestRepository).search(criteria)

    def get_guest(self, guest_id: str, user: CurrentUser) -> Guest:
        require_capability(can_manage_guests, user)
        with UnitOfWork(self.session_factory) as uow:
            return uow.get_repo(GuestRepository).get_or_raise(guest_id)

    def update_guest(self, guest_id: str, data: GuestUpdate, user: CurrentUser) -> Guest:
        """Apply an explicit edit; only the fields sent are changed."""
        require_capability(can_manage_guests, user)
        changes = data.model_dump(exclude_unset=True)
        with UnitOfWork(self.session_factory) as uow:
            repo = uow.get_repo(GuestRepository)
            guest = repo.get_or_raise(guest_id, for_update=True)
            new_email = changes.get("email")
            if new_email and new_email != guest.email:
                if repo.get_by_email(new_email) is not None:
                    raise DuplicateEntryError("Guest", "email", new_email)
            repo.update(guest, changes)
        logger.info("Guest updated", extra={"guest_id": guest.id, "fields": sorted(changes)})
        return guest
