"""Room models."""

from frontdesk.models.room.room import Room

__all__ = ["Room"]
