"""Build the resource report from a materialized pod list."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from podreport.domain.aggregation import aggregate
from podreport.domain.models import AggregationResult
from podreport.domain.recommendations import (
    DEFAULT_MESSAGES,
    RecommendationMessages,
    generate_recommendations,
)
from podreport.domain.statistics import (
    EfficiencySummary,
    NodeDistribution,
    describe_node_distribution,
    resource_warnings,
    summarize_efficiency,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceReport:
    """Aggregates, derived statistics and advice for one cluster snapshot."""

    aggregation: AggregationResult
    efficiency: EfficiencySummary
    distribution: NodeDistribution
    recommendations: tuple[str, ...]
    warnings: tuple[str, ...]


def _log_warnings(report: ResourceReport) -> None:
    if report.warnings:
        logger.warning("Resource validation warnings:")
        for warning in report.warnings:
            logger.warning("  - %s", warning)
    logger.info(
        "Validation complete: %d namespaces, %d nodes, %d containers",
        len(report.aggregation.namespace_totals),
        len(report.aggregation.node_totals),
        report.aggregation.container_count,
    )


def build_resource_report(
    pods: list[dict[str, Any]],
    *,
    messages: RecommendationMessages = DEFAULT_MESSAGES,
) -> ResourceReport:
    """Aggregate pods and derive efficiency, balance and recommendations."""
    logger.info("Processing %d pods...", len(pods))
    aggregation = aggregate(pods)
    efficiency = summarize_efficiency(aggregation.namespace_totals)
    distribution = describe_node_distribution(aggregation.node_totals)
    recommendations = generate_recommendations(
        efficiency.cpu_efficiency,
        efficiency.memory_efficiency,
        efficiency.over_provisioned,
        efficiency.under_provisioned,
        distribution.balance_score,
        messages=messages,
    )
    report = ResourceReport(
        aggregation=aggregation,
        efficiency=efficiency,
        distribution=distribution,
        recommendations=tuple(recommendations),
        warnings=tuple(
            resource_warnings(aggregation.namespace_totals, aggregation.node_totals)
        ),
    )
    _log_warnings(report)
    return report
