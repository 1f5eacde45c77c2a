"""Guest models."""

from frontdesk.models.guest.guest import Guest

__all__ = ["Guest"]
