"""
API v1 Router - Main Entry Point
Aggregates all v1 API endpoints for the front desk
"""

from fastapi import APIRouter

from frontdesk.api.v1 import bookings, guests, health, housekeeping, pricing, reports, rooms

# Create main API v1 router with proper configuration
router = APIRouter(
    responses={
        400: {"description": "Bad Request"},
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        404: {"description": "Not Found"},
        409: {"description": "Conflict"},
        422: {"description": "Validation Error"},
        500: {"description": "Internal Server Error"},
        502: {"description": "Store Unavailable"},
    }
)

router.include_router(health.router)
router.include_router(rooms.router)
router.include_router(guests.router)
router.include_router(pricing.router)
router.include_router(bookings.router)
router.include_router(housekeeping.router)
router.include_router(reports.router)
