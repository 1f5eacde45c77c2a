"""Guest schemas."""

from frontdesk.schemas.guest.guest import GuestCreate, GuestResponse, GuestSearch, GuestUpdate

__all__ = ["GuestCreate", "GuestResponse", "GuestSearch", "GuestUpdate"]
