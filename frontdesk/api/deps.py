# frontdesk/api/deps.py
"""
FastAPI dependencies shared by the v1 routers.

Example usage in a router:
    from fastapi import Depends, APIRouter
    from frontdesk.api import deps

    router = APIRouter()

    @router.get("/rooms")
    def list_rooms(service = Depends(deps.get_room_service)):
        ...
"""

from typing import Callable, Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from frontdesk.config.settings import Settings, get_settings
from frontdesk.core.exceptions import AuthenticationError
from frontdesk.core.logging import user_id as user_id_var
from frontdesk.db.session import SessionLocal
from frontdesk.models.base.enums import UserRole
from frontdesk.services.booking import BookingLifecycleService
from frontdesk.services.common.permissions import CurrentUser
from frontdesk.services.guest import GuestService
from frontdesk.services.housekeeping import HousekeepingService
from frontdesk.services.pricing import QuoteService
from frontdesk.services.reports import ReportService
from frontdesk.services.room import AvailabilityService, RoomService

SessionFactory = Callable[[], Session]


# --- Database & settings -------------------------------------------------------

def get_session_factory() -> SessionFactory:
    return SessionLocal


def get_app_settings() -> Settings:
    return get_settings()


# --- Caller identity -----------------------------------------------------------

def get_current_user(
    x_user_id: Optional[str] = Header(None),
    x_user_role: Optional[str] = Header(None),
    x_user_name: Optional[str] = Header(None),
    x_user_email: Optional[str] = Header(None),
) -> CurrentUser:
    """
    Build the caller from identity headers set by the authentication proxy.

    Raises:
        AuthenticationError: If the id or role header is missing or the
            role is unknown
    """
    if not x_user_id or not x_user_role:
        raise AuthenticationError()
    try:
        role = UserRole(x_user_role.strip().lower())
    except ValueError as e:
        raise AuthenticationError(f"Unknown role: {x_user_role}") from e

    user_id_var.set(x_user_id)
    return CurrentUser(
        user_id=x_user_id,
        role=role,
        name=x_user_name or None,
        email=x_user_email.strip().lower() if x_user_email else None,
    )


# --- Services ------------------------------------------------------------------

def get_room_service(session_factory: SessionFactory = Depends(get_session_factory)) -> RoomService:
    return RoomService(session_factory)


def get_availability_service(
    session_factory: SessionFactory = Depends(get_session_factory),
    config: Settings = Depends(get_app_settings),
) -> AvailabilityService:
    return AvailabilityService(session_factory, enforce_overlap=config.ENFORCE_BOOKING_OVERLAP)


def get_guest_service(session_factory: SessionFactory = Depends(get_session_factory)) -> GuestService:
    return GuestService(session_factory)


def get_quote_service(
    session_factory: SessionFactory = Depends(get_session_factory),
    config: Settings = Depends(get_app_settings),
) -> QuoteService:
    return QuoteService(session_factory, config)


def get_booking_service(
    session_factory: SessionFactory = Depends(get_session_factory),
    config: Settings = Depends(get_app_settings),
) -> BookingLifecycleService:
    return BookingLifecycleService(session_factory, config)


def get_housekeeping_service(
    session_factory: SessionFactory = Depends(get_session_factory),
) -> HousekeepingService:
    return HousekeepingService(session_factory)


def get_report_service(
    session_factory: SessionFactory = Depends(get_session_factory),
    config: Settings = Depends(get_app_settings),
) -> ReportService:
    return ReportService(session_factory, config)


__all__ = [
    "get_session_factory",
    "get_app_settings",
    "get_current_user",
    "get_room_service",
    "get_availability_service",
    "get_guest_service",
    "get_quote_service",
    "get_booking_service",
    "get_housekeeping_service",
    "get_report_service",
]
