"""Report schemas."""

from frontdesk.schemas.reports.summary import ReportSummary, RevenuePoint, RevenueReport

__all__ = ["ReportSummary", "RevenuePoint", "RevenueReport"]
