"""
Service layer.

Services own business rules and transactions; each public operation runs in
its own Unit of Work and takes the caller as an explicit ``CurrentUser``.
"""

from frontdesk.services.booking import BookingLifecycleService
from frontdesk.services.common import CurrentUser, UnitOfWork
from frontdesk.services.guest import GuestService
from frontdesk.services.housekeeping import HousekeepingService
from frontdesk.services.pricing import QuoteService
from frontdesk.services.reports import ReportService
from frontdesk.services.room import AvailabilityService, RoomService

__all__ = [
    "AvailabilityService",
    "BookingLifecycleService",
    "CurrentUser",
    "GuestService",
    "HousekeepingService",
    "QuoteService",
    "ReportService",
    "RoomService",
    "UnitOfWork",
]
