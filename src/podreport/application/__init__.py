"""Application facade exports for stable use-case API."""

from podreport.application.resource_report_service import (
    ResourceReport,
    build_resource_report,
)
from podreport.application.resource_report_use_case import (
    ReportResult,
    execute_resource_report,
    execute_resource_summary,
)
from podreport.application.stdout_renderer import render_report_summary

__all__ = [
    "build_resource_report",
    "execute_resource_report",
    "execute_resource_summary",
    "render_report_summary",
    "ReportResult",
    "ResourceReport",
]
