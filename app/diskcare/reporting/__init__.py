"""Reporting over persisted run logs."""

from diskcare.reporting.service import ReportService, ReportSummary

__all__ = ["ReportService", "ReportSummary"]
