"""
Room schemas.

Create/update payloads, the response model, directory filters and the
availability criteria.
"""

from typing import Optional

from pydantic import Field

from frontdesk.models.base.enums import RoomStatus, RoomType
from frontdesk.schemas.common.base import (
    BaseCreateSchema,
    BaseFilterSchema,
    BaseResponseSchema,
    BaseSchema,
    BaseUpdateSchema,
)

__all__ = [
    "RoomCreate",
    "RoomUpdate",
    "RoomStatusUpdate",
    "RoomResponse",
    "RoomFilter",
    "AvailabilityCriteria",
]


class RoomCreate(BaseCreateSchema):
    """Payload for adding a room to the directory."""

    number: str = Field(..., min_length=1, max_length=20, description="Room number")
    type: RoomType = Field(..., description="Room category")
    price: int = Field(..., gt=0, description="Nightly rate (integer currency units)")
    capacity: int = Field(1, ge=1, description="Maximum occupants")
    floor: int = Field(0, ge=0, description="Floor number")
    status: RoomStatus = Field(RoomStatus.AVAILABLE, description="Initial status")
    description: Optional[str] = Field(None, max_length=2000)


class RoomUpdate(BaseUpdateSchema):
    """Partial room edit. Status changes go through RoomStatusUpdate."""

    number: Optional[str] = Field(None, min_length=1, max_length=20)
    type: Optional[RoomType] = None
    price: Optional[int] = Field(None, gt=0)
    capacity: Optional[int] = Field(None, ge=1)
    floor: Optional[int] = Field(None, ge=0)
    description: Optional[str] = Field(None, max_length=2000)


class RoomStatusUpdate(BaseSchema):
    status: RoomStatus = Field(..., description="New room status")


class RoomResponse(BaseResponseSchema):
    number: str
    type: RoomType
    price: int
    capacity: int
    floor: int
    status: RoomStatus
    description: Optional[str] = None


class RoomFilter(BaseFilterSchema):
    """Room directory filter; every field is optional."""

    status: Optional[RoomStatus] = None
    type: Optional[RoomType] = None
    floor: Optional[int] = Field(None, ge=0)


class AvailabilityCriteria(BaseFilterSchema):
    """
    Criteria for the availability filter.

    Attributes:
        type: Exact room type to match
        min_capacity: Minimum capacity the room must offer
        search_text: Case-insensitive substring of room number or type
    """

    type: Optional[RoomType] = None
    min_capacity: Optional[int] = Field(None, ge=1)
    search_text: Optional[str] = Field(None, max_length=100)
