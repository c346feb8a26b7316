"""Resource report use-cases."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from podreport.application.resource_report_service import (
    ResourceReport,
    build_resource_report,
)
from podreport.application.workbook_writer import write_resource_workbook
from podreport.domain.input_policy import (
    namespace_display,
    resolve_output_path,
    validate_namespace,
    validate_path,
)
from podreport.infrastructure.kubectl_client import DEFAULT_TIMEOUT_SECONDS
from podreport.infrastructure.pod_source import list_pods

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportResult:
    """Written workbook and the report it was built from."""

    output_path: Path
    report: ResourceReport


def _collect_report(
    namespace: str,
    kubeconfig: str | None,
    timeout: float,
) -> ResourceReport:
    logger.info("Fetching pods from namespace: %s", namespace_display(namespace))
    pods = list_pods(namespace, kubeconfig=kubeconfig, timeout=timeout)
    return build_resource_report(pods)


def execute_resource_summary(
    *,
    namespace: str = "",
    kubeconfig: str | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> ResourceReport:
    """Build the report without writing a workbook."""
    validate_namespace(namespace)
    if kubeconfig:
        validate_path(kubeconfig)
    return _collect_report(namespace, kubeconfig, timeout)


def execute_resource_report(
    *,
    namespace: str = "",
    kubeconfig: str | None = None,
    output: str | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> ReportResult:
    """Fetch pods, build the report and write it to an xlsx workbook.

    Inputs are validated and pods fetched before anything touches the output
    path, so a failed run leaves no file behind.
    """
    validate_namespace(namespace)
    if kubeconfig:
        validate_path(kubeconfig)
    output_path = resolve_output_path(output)
    validate_path(output_path)

    report = _collect_report(namespace, kubeconfig, timeout)
    written = write_resource_workbook(report, Path(output_path))
    return ReportResult(output_path=written, report=report)


__all__ = ["ReportResult", "execute_resource_report", "execute_resource_summary"]
