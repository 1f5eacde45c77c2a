# frontdesk/services/common/permissions.py
"""
Permission and authorization utilities.

The caller is an explicit ``CurrentUser`` value passed into every service
operation. Role checks are expressed as capability predicates rather than
role strings compared at call sites.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

from frontdesk.core.exceptions import AuthorizationError
from frontdesk.models.base.enums import UserRole

if TYPE_CHECKING:
    from frontdesk.models.booking import Booking
    from frontdesk.models.housekeeping import HousekeepingTask

STAFF_ROLES = frozenset({UserRole.ADMIN, UserRole.RECEPTIONIST})


@dataclass(frozen=True)
class CurrentUser:
    """
    Represents the authenticated caller in the service layer.

    Attributes:
        user_id: Unique identifier for the user
        role: User's role
        name: Display name; housekeeping tasks are assigned by name
        email: Contact email, used to match guests to their bookings
    """
    user_id: str
    role: UserRole
    name: Optional[str] = None
    email: Optional[str] = None

    @property
    def actor(self) -> str:
        """Identifier written into audit columns."""
        return self.name or self.user_id

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_staff(self) -> bool:
        return self.role in STAFF_ROLES


# ---------------------------------------------------------------------- #
# Capability predicates
# ---------------------------------------------------------------------- #

def can_manage_bookings(user: CurrentUser) -> bool:
    """Create for others, edit, check in/out, cancel, take payments."""
    return user.is_staff


def can_create_booking(user: CurrentUser) -> bool:
    return user.is_staff or user.role == UserRole.GUEST


def can_delete_bookings(user: CurrentUser) -> bool:
    return user.is_admin


def can_view_booking(user: CurrentUser, booking: "Booking") -> bool:
    if user.is_staff:
        return True
    if user.role == UserRole.GUEST and user.email:
        snapshot_email = (booking.guest_snapshot or {}).get("email")
        return bool(snapshot_email) and snapshot_email == user.email.lower()
    return False


def can_manage_rooms(user: CurrentUser) -> bool:
    return user.is_admin


def can_update_room_status(user: CurrentUser) -> bool:
    return user.is_staff or user.role == UserRole.HOUSEKEEPING


def can_manage_guests(user: CurrentUser) -> bool:
    return user.is_staff


def can_view_reports(user: CurrentUser) -> bool:
    return user.is_admin


def can_manage_housekeeping(user: CurrentUser) -> bool:
    """Create, edit, reassign and delete tasks."""
    return user.is_admin


def can_update_task(user: CurrentUser, task: "HousekeepingTask") -> bool:
    """Only the assignee or an admin may move a task's status."""
    if user.is_admin:
        return True
    if user.role != UserRole.HOUSEKEEPING:
        return False
    return task.assigned_to in {user.user_id, user.name}


def require(
    allowed: bool,
    user: CurrentUser,
    capability: str,
    message: Optional[str] = None,
) -> None:
    """
    Raise AuthorizationError unless ``allowed``.

    Example:
        >>> require(can_view_reports(user), user, "view_reports")
    """
    if not allowed:
        raise AuthorizationError(
            message or f"User is not allowed to {capability.replace('_', ' ')}",
            user_id=user.user_id,
            role=user.role.value,
            capability=capability,
        )


def require_capability(
    predicate: Callable[[CurrentUser], bool],
    user: CurrentUser,
) -> None:
    """Check a single-argument predicate, naming it in the error."""
    require(predicate(user), user, predicate.__name__.replace("can_", "", 1))
