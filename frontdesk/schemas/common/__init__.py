"""Common schema building blocks."""

from frontdesk.schemas.common.base import (
    BaseCreateSchema,
    BaseDBSchema,
    BaseFilterSchema,
    BaseResponseSchema,
    BaseSchema,
    BaseUpdateSchema,
    MessageResponse,
)

__all__ = [
    "BaseCreateSchema",
    "BaseDBSchema",
    "BaseFilterSchema",
    "BaseResponseSchema",
    "BaseSchema",
    "BaseUpdateSchema",
    "MessageResponse",
]
