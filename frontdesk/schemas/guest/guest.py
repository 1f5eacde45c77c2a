"""
Guest registry schemas.
"""

from typing import Optional

from pydantic import EmailStr, Field, field_validator

from frontdesk.schemas.common.base import (
    BaseCreateSchema,
    BaseFilterSchema,
    BaseResponseSchema,
    BaseUpdateSchema,
)

__all__ = [
    "GuestCreate",
    "GuestUpdate",
    "GuestResponse",
    "GuestSearch",
]


class GuestCreate(BaseCreateSchema):
    """Guest registration payload (staff-entered or self-service)."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr = Field(..., description="Contact email, unique per guest")
    phone: str = Field(..., min_length=5, max_length=30)
    id_number: str = Field(..., min_length=1, max_length=50, description="National ID or passport")
    nationality: Optional[str] = Field(None, max_length=100)
    address: Optional[str] = None
    emergency_contact: Optional[str] = Field(None, max_length=255)
    special_requests: Optional[str] = None

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()


class GuestUpdate(BaseUpdateSchema):
    """Explicit guest edit; the only path that changes identity fields."""

    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=5, max_length=30)
    id_number: Optional[str] = Field(None, min_length=1, max_length=50)
    nationality: Optional[str] = Field(None, max_length=100)
    address: Optional[str] = None
    emergency_contact: Optional[str] = Field(None, max_length=255)
    special_requests: Optional[str] = None

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v else v


class GuestResponse(BaseResponseSchema):
    first_name: str
    last_name: str
    email: str
    phone: str
    id_number: str
    nationality: Optional[str] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = None
    special_requests: Optional[str] = None


class GuestSearch(BaseFilterSchema):
    """
    Guest lookup criteria.

    ``email`` and ``id_number`` match exactly; ``search_text`` matches a
    substring of the name, email or phone.
    """

    email: Optional[str] = None
    id_number: Optional[str] = None
    search_text: Optional[str] = Field(None, max_length=100)
