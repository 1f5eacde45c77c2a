"""Reporting services."""

from frontdesk.services.reports.report_service import ReportService

__all__ = ["ReportService"]
