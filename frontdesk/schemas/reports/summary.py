"""
Report schemas for the admin dashboard.
"""

from datetime import date
from typing import Dict, List, Optional

from pydantic import Field

from frontdesk.schemas.common.base import BaseSchema

__all__ = ["ReportSummary", "RevenuePoint", "RevenueReport"]


class ReportSummary(BaseSchema):
    """Financial and operational totals over non-cancelled bookings."""

    start: Optional[date] = None
    end: Optional[date] = None
    currency: str
    total_collected: int = Field(..., description="Sum of paid_amount")
    outstanding: int = Field(..., description="Sum of balances")
    total_billed: int
    bookings_by_status: Dict[str, int]
    rooms_by_status: Dict[str, int]
    total_rooms: int
    occupancy_rate: float = Field(..., description="Occupied rooms / total rooms")
    pending_tasks: int
    completed_tasks: int


class RevenuePoint(BaseSchema):
    day: date
    amount: int
    payments: int


class RevenueReport(BaseSchema):
    start: date
    end: date
    currency: str
    total: int
    points: List[RevenuePoint]
