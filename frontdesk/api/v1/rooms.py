"""
Room directory and availability endpoints.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from frontdesk.api.deps import get_availability_service, get_current_user, get_room_service
from frontdesk.models.base.enums import RoomStatus, RoomType
from frontdesk.schemas.room import (
    AvailabilityCriteria,
    RoomCreate,
    RoomFilter,
    RoomResponse,
    RoomStatusUpdate,
    RoomUpdate,
)
from frontdesk.services.common.permissions import CurrentUser
from frontdesk.services.room import AvailabilityService, RoomService

router = APIRouter(prefix="/rooms", tags=["Rooms"])


@router.get("", response_model=List[RoomResponse])
def list_rooms(
    room_status: Optional[RoomStatus] = Query(None, alias="status"),
    room_type: Optional[RoomType] = Query(None, alias="type"),
    floor: Optional[int] = Query(None, ge=0),
    service: RoomService = Depends(get_room_service),
    _: CurrentUser = Depends(get_current_user),
):
    return service.list_rooms(RoomFilter(status=room_status, type=room_type, floor=floor))


@router.get("/available", response_model=List[RoomResponse])
def list_available_rooms(
    room_type: Optional[RoomType] = Query(None, alias="type"),
    min_capacity: Optional[int] = Query(None, ge=1),
    search_text: Optional[str] = Query(None, max_length=100),
    check_in: Optional[datetime] = None,
    check_out: Optional[datetime] = None,
    service: AvailabilityService = Depends(get_availability_service),
    _: CurrentUser = Depends(get_current_user),
):
    """Rooms that can be offered for a new booking."""
    criteria = AvailabilityCriteria(type=room_type, min_capacity=min_capacity, search_text=search_text)
    return service.list_available(criteria, check_in, check_out)


@router.post("", response_model=RoomResponse, status_code=status.HTTP_201_CREATED)
def create_room(
    payload: RoomCreate,
    service: RoomService = Depends(get_room_service),
    user: CurrentUser = Depends(get_current_user),
):
    return service.create_room(payload, user)


@router.get("/{room_id}", response_model=RoomResponse)
def get_room(
    room_id: str,
    service: RoomService = Depends(get_room_service),
    _: CurrentUser = Depends(get_current_user),
):
    return service.get_room(room_id)


@router.patch("/{room_id}", response_model=RoomResponse)
def update_room(
    room_id: str,
    payload: RoomUpdate,
    service: RoomService = Depends(get_room_service),
    user: CurrentUser = Depends(get_current_user),
):
    return service.update_room(room_id, payload, user)


@router.patch("/{room_id}/status", response_model=RoomResponse)
def update_room_status(
    room_id: str,
    payload: RoomStatusUpdate,
    service: RoomService = Depends(get_room_service),
    user: CurrentUser = Depends(get_current_user),
):
    return service.update_room_status(room_id, payload.status, user)
