"""
Admin report endpoints.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends

from frontdesk.api.deps import get_current_user, get_report_service
from frontdesk.schemas.reports import ReportSummary, RevenueReport
from frontdesk.services.common.permissions import CurrentUser
from frontdesk.services.reports import ReportService

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/summary", response_model=ReportSummary)
def report_summary(
    start: Optional[date] = None,
    end: Optional[date] = None,
    service: ReportService = Depends(get_report_service),
    user: CurrentUser = Depends(get_current_user),
):
    return service.summary(start, end, user)


@router.get("/revenue", response_model=RevenueReport)
def report_revenue(
    start: date,
    end: date,
    service: ReportService = Depends(get_report_service),
    user: CurrentUser = Depends(get_current_user),
):
    return service.revenue_by_period(start, end, user)
