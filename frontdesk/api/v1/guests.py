"""
Guest directory endpoints.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from frontdesk.api.deps import get_booking_service, get_current_user, get_guest_service
from frontdesk.schemas.booking import BookingResponse
from frontdesk.schemas.guest import GuestCreate, GuestResponse, GuestSearch, GuestUpdate
from frontdesk.services.booking import BookingLifecycleService
from frontdesk.services.common.permissions import CurrentUser
from frontdesk.services.guest import GuestService

router = APIRouter(prefix="/guests", tags=["Guests"])


@router.get("", response_model=List[GuestResponse])
def find_guests(
    email: Optional[str] = None,
    id_number: Optional[str] = None,
    search_text: Optional[str] = Query(None, max_length=100),
    service: GuestService = Depends(get_guest_service),
    user: CurrentUser = Depends(get_current_user),
):
    criteria = GuestSearch(email=email, id_number=id_number, search_text=search_text)
    return service.find_guests(criteria, user)


@router.post("", response_model=GuestResponse, status_code=status.HTTP_201_CREATED)
def create_guest(
    payload: GuestCreate,
    service: GuestService = Depends(get_guest_service),
    user: CurrentUser = Depends(get_current_user),
):
    return service.create_guest(payload, user)


@router.get("/{guest_id}", response_model=GuestResponse)
def get_guest(
    guest_id: str,
    service: GuestService = Depends(get_guest_service),
    user: CurrentUser = Depends(get_current_user),
):
    return service.get_guest(guest_id, user)


@router.patch("/{guest_id}", response_model=GuestResponse)
def update_guest(
    guest_id: str,
    payload: GuestUpdate,
    service: GuestService = Depends(get_guest_service),
    user: CurrentUser = Depends(get_current_user),
):
    return service.update_guest(guest_id, payload, user)


@router.get("/{guest_id}/bookings", response_model=List[BookingResponse])
def list_guest_bookings(
    guest_id: str,
    service: BookingLifecycleService = Depends(get_booking_service),
    user: CurrentUser = Depends(get_current_user),
):
    return service.list_for_guest(guest_id, user)
