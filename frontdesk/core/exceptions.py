"""
Custom Exceptions for the Front Desk Application

This module defines the exception classes raised by the booking core and
its collaborators. Every exception carries a stable error code, a details
mapping and the HTTP status the API layer renders it with.
"""

from typing import Any, Dict, List, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # Authentication & Authorization
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    AUTHORIZATION_FAILED = "AUTHORIZATION_FAILED"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"

    # Business logic errors
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"
    ROOM_UNAVAILABLE = "ROOM_UNAVAILABLE"
    BOOKING_CONFLICT = "BOOKING_CONFLICT"
    INSUFFICIENT_CAPACITY = "INSUFFICIENT_CAPACITY"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    OVERPAYMENT_REJECTED = "OVERPAYMENT_REJECTED"
    PAYMENT_LEDGER_MISMATCH = "PAYMENT_LEDGER_MISMATCH"

    # External service errors
    REMOTE_SERVICE_ERROR = "REMOTE_SERVICE_ERROR"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format"""
        return {
            "error": {
                "message": self.message,
                "code": self.error_code.value,
                "details": self.details,
                "type": self.__class__.__name__
            }
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# General Application Exceptions
# ========================================

class ValidationError(BaseAppException):
    """Exception raised when a required field is missing or invalid"""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, List[str]]] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        status_code: int = 422
    ):
        details = {"field_errors": field_errors} if field_errors else {}
        super().__init__(message, error_code, details, status_code)


class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None
    ):
        if not message:
            message = f"{resource_type} not found"
            if resource_id:
                message += f" (ID: {resource_id})"

        details = {
            "resource_type": resource_type,
            "resource_id": resource_id
        }
        super().__init__(message, ErrorCode.RESOURCE_NOT_FOUND, details, 404)


class DuplicateEntryError(BaseAppException):
    """Exception raised when a unique field already holds the value"""

    def __init__(
        self,
        resource_type: str,
        field: str,
        value: Any
    ):
        message = f"{resource_type} with {field}='{value}' already exists"
        details = {"resource_type": resource_type, "field": field}
        super().__init__(message, ErrorCode.DUPLICATE_ENTRY, details, 409)


# ========================================
# Authentication & Authorization Exceptions
# ========================================

class AuthenticationError(BaseAppException):
    """Exception raised when the caller cannot be identified"""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, ErrorCode.AUTHENTICATION_FAILED, {}, 401)


class AuthorizationError(BaseAppException):
    """Exception raised when the current user may not perform an action"""

    def __init__(
        self,
        message: str = "Action not permitted",
        user_id: Optional[str] = None,
        role: Optional[str] = None,
        capability: Optional[str] = None
    ):
        details = {
            "user_id": user_id,
            "role": role,
            "capability": capability
        }
        super().__init__(message, ErrorCode.AUTHORIZATION_FAILED, details, 403)


# ========================================
# Business Logic Exceptions
# ========================================

class InvalidDateRangeError(BaseAppException):
    """Exception raised when check-out is not after check-in"""

    def __init__(
        self,
        message: str = "Check-out must be after check-in",
        start_date: Optional[str] = None,
        end_date: Optional[str] = None
    ):
        details = {
            "start_date": start_date,
            "end_date": end_date
        }
        super().__init__(message, ErrorCode.INVALID_DATE_RANGE, details, 422)


class BookingError(BaseAppException):
    """Base class for booking-related exceptions"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        booking_id: Optional[str] = None,
        room_id: Optional[str] = None,
        status_code: int = 409
    ):
        details = {
            "booking_id": booking_id,
            "room_id": room_id
        }
        super().__init__(message, error_code, details, status_code)


class RoomUnavailableError(BookingError):
    """Exception raised when the selected room is no longer available"""

    def __init__(
        self,
        message: str = "Room is not available",
        room_id: Optional[str] = None,
        room_status: Optional[str] = None
    ):
        super().__init__(message, ErrorCode.ROOM_UNAVAILABLE, room_id=room_id)
        if room_status:
            self.details["room_status"] = room_status


class BookingConflictError(BookingError):
    """Exception raised when a stay overlaps an active booking of the room"""

    def __init__(
        self,
        message: str = "Room already has a booking for these dates",
        room_id: Optional[str] = None,
        conflicting_booking_id: Optional[str] = None
    ):
        super().__init__(message, ErrorCode.BOOKING_CONFLICT, room_id=room_id)
        self.details["conflicting_booking_id"] = conflicting_booking_id


class InvalidTransitionError(BookingError):
    """Exception raised when a lifecycle action is not allowed from the current state"""

    def __init__(
        self,
        action: str,
        current_status: str,
        booking_id: Optional[str] = None,
        message: Optional[str] = None
    ):
        if not message:
            message = f"Action '{action}' not permitted while booking is {current_status}"
        super().__init__(message, ErrorCode.INVALID_TRANSITION, booking_id=booking_id)
        self.details.update({"action": action, "current_status": current_status})


class OverpaymentRejectedError(BookingError):
    """Exception raised when a payment would exceed the outstanding balance"""

    def __init__(
        self,
        amount: int,
        balance: int,
        booking_id: Optional[str] = None
    ):
        message = f"Payment of {amount} exceeds outstanding balance of {balance}"
        super().__init__(message, ErrorCode.OVERPAYMENT_REJECTED, booking_id=booking_id)
        self.details.update({"amount": amount, "balance": balance})


class PaymentLedgerMismatchError(BookingError):
    """Exception raised when completed payments disagree with the booking's paid amount"""

    def __init__(
        self,
        paid_amount: int,
        ledger_total: int,
        booking_id: Optional[str] = None
    ):
        message = (
            f"Booking paid amount {paid_amount} does not match "
            f"completed payments total {ledger_total}"
        )
        super().__init__(
            message,
            ErrorCode.PAYMENT_LEDGER_MISMATCH,
            booking_id=booking_id,
            status_code=500,
        )
        self.details.update({"paid_amount": paid_amount, "ledger_total": ledger_total})


class InsufficientCapacityError(BaseAppException):
    """Exception raised when the party does not fit the room"""

    def __init__(
        self,
        message: str = "Room capacity exceeded",
        requested: Optional[int] = None,
        available: Optional[int] = None
    ):
        details = {
            "requested": requested,
            "available": available
        }
        super().__init__(message, ErrorCode.INSUFFICIENT_CAPACITY, details, 409)


# ========================================
# External Service Exceptions
# ========================================

class RemoteServiceError(BaseAppException):
    """Exception raised when a collaborator (store, directory, recorder) fails"""

    def __init__(
        self,
        message: str = "Remote service failure",
        service_name: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        details = {
            "service_name": service_name,
            "error_type": type(original_error).__name__ if original_error else None
        }
        super().__init__(message, ErrorCode.REMOTE_SERVICE_ERROR, details, 502)
