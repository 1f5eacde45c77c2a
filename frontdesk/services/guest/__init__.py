"""Guest directory service."""

from frontdesk.services.guest.guest_service import GuestService, find_or_register_guest

__all__ = ["GuestService", "find_or_register_guest"]
