"""
Booking lifecycle endpoints.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from frontdesk.api.deps import get_booking_service, get_current_user
from frontdesk.models.base.enums import BookingStatus
from frontdesk.schemas.booking import (
    BookingCancel,
    BookingCreate,
    BookingFilter,
    BookingResponse,
    BookingStatusHistoryResponse,
    BookingUpdate,
    InvoiceBreakdown,
)
from frontdesk.schemas.common import MessageResponse
from frontdesk.schemas.payment import PaymentCreate, PaymentReceiptResponse, PaymentResponse
from frontdesk.services.booking import BookingLifecycleService
from frontdesk.services.common.permissions import CurrentUser

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.get("", response_model=List[BookingResponse])
def list_bookings(
    booking_status: Optional[BookingStatus] = Query(None, alias="status"),
    room_id: Optional[str] = None,
    guest_id: Optional[str] = None,
    check_in_from: Optional[datetime] = None,
    check_in_to: Optional[datetime] = None,
    search_text: Optional[str] = Query(None, max_length=100),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    service: BookingLifecycleService = Depends(get_booking_service),
    user: CurrentUser = Depends(get_current_user),
):
    booking_filter = BookingFilter(
        status=booking_status,
        room_id=room_id,
        guest_id=guest_id,
        check_in_from=check_in_from,
        check_in_to=check_in_to,
        search_text=search_text,
        skip=skip,
        limit=limit,
    )
    return service.list_bookings(booking_filter, user)


@router.get("/mine", response_model=List[BookingResponse])
def list_my_bookings(
    service: BookingLifecycleService = Depends(get_booking_service),
    user: CurrentUser = Depends(get_current_user),
):
    """Bookings of the guest registered under the caller's email."""
    return service.list_for_current_guest(user)


@router.get("/range", response_model=List[BookingResponse])
def list_bookings_in_range(
    start: datetime,
    end: datetime,
    booking_status: Optional[BookingStatus] = Query(None, alias="status"),
    service: BookingLifecycleService = Depends(get_booking_service),
    user: CurrentUser = Depends(get_current_user),
):
    return service.bookings_in_range(start, end, user, booking_status)


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_booking(
    payload: BookingCreate,
    service: BookingLifecycleService = Depends(get_booking_service),
    user: CurrentUser = Depends(get_current_user),
):
    return service.create_booking(payload, user)


@router.get("/{booking_id}", response_model=BookingResponse)
def get_booking(
    booking_id: str,
    service: BookingLifecycleService = Depends(get_booking_service),
    user: CurrentUser = Depends(get_current_user),
):
    return service.get_booking(booking_id, user)


@router.patch("/{booking_id}", response_model=BookingResponse)
def update_booking(
    booking_id: str,
    payload: BookingUpdate,
    service: BookingLifecycleService = Depends(get_booking_service),
    user: CurrentUser = Depends(get_current_user),
):
    return service.update_booking(booking_id, payload, user)


@router.delete("/{booking_id}", response_model=MessageResponse)
def delete_booking(
    booking_id: str,
    service: BookingLifecycleService = Depends(get_booking_service),
    user: CurrentUser = Depends(get_current_user),
):
    service.delete_booking(booking_id, user)
    return MessageResponse(message="Booking deleted")


@router.get("/{booking_id}/invoice", response_model=InvoiceBreakdown)
def get_invoice(
    booking_id: str,
    service: BookingLifecycleService = Depends(get_booking_service),
    user: CurrentUser = Depends(get_current_user),
):
    return service.get_invoice(booking_id, user)


@router.get("/{booking_id}/history", response_model=List[BookingStatusHistoryResponse])
def get_status_history(
    booking_id: str,
    service: BookingLifecycleService = Depends(get_booking_service),
    user: CurrentUser = Depends(get_current_user),
):
    return service.get_status_history(booking_id, user)


# ==================== TRANSITIONS ====================

@router.post("/{booking_id}/check-in", response_model=BookingResponse)
def check_in(
    booking_id: str,
    service: BookingLifecycleService = Depends(get_booking_service),
    user: CurrentUser = Depends(get_current_user),
):
    return service.check_in(booking_id, user)


@router.post("/{booking_id}/check-out", response_model=BookingResponse)
def check_out(
    booking_id: str,
    service: BookingLifecycleService = Depends(get_booking_service),
    user: CurrentUser = Depends(get_current_user),
):
    return service.check_out(booking_id, user)


@router.post("/{booking_id}/cancel", response_model=BookingResponse)
def cancel_booking(
    booking_id: str,
    payload: Optional[BookingCancel] = Body(None),
    service: BookingLifecycleService = Depends(get_booking_service),
    user: CurrentUser = Depends(get_current_user),
):
    reason = payload.reason if payload is not None else None
    return service.cancel(booking_id, reason, user)


# ==================== PAYMENTS ====================

@router.get("/{booking_id}/payments", response_model=List[PaymentResponse])
def list_payments(
    booking_id: str,
    service: BookingLifecycleService = Depends(get_booking_service),
    user: CurrentUser = Depends(get_current_user),
):
    return service.list_payments(booking_id, user)


@router.post(
    "/{booking_id}/payments",
    response_model=PaymentReceiptResponse,
    status_code=status.HTTP_201_CREATED,
)
def record_payment(
    booking_id: str,
    payload: PaymentCreate,
    service: BookingLifecycleService = Depends(get_booking_service),
    user: CurrentUser = Depends(get_current_user),
):
    receipt = service.record_payment(
        booking_id,
        payload.amount,
        payload.method,
        user,
        transaction_id=payload.transaction_id,
    )
    return PaymentReceiptResponse(
        payment=PaymentResponse.model_validate(receipt.payment),
        booking=BookingResponse.model_validate(receipt.booking),
    )
