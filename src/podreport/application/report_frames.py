"""Tabular views of a resource report for sheets and console output."""

from __future__ import annotations

import pandas as pd

from podreport.application.resource_report_service import ResourceReport
from podreport.domain.models import (
    BYTES_PER_MIB,
    MILLICORES_PER_CORE,
    AggregationResult,
    ResourceTotals,
)
from podreport.domain.statistics import efficiency_rating

CLUSTER_TOTAL_LABEL = "CLUSTER TOTAL"

NAMESPACE_COLUMNS: tuple[str, ...] = (
    "Namespace",
    "Request CPU (cores)",
    "Limit CPU (cores)",
    "Request Memory (Mi)",
    "Limit Memory (Mi)",
)

NODE_COLUMNS: tuple[str, ...] = (
    "Node IP",
    "Pod Count",
    "Request CPU (cores)",
    "Limit CPU (cores)",
    "Request Memory (Mi)",
    "Limit Memory (Mi)",
)

INSIGHT_COLUMNS: tuple[str, ...] = ("Metric", "Value", "Notes")


def _resource_values(totals: ResourceTotals) -> list[float]:
    return [
        totals.request_cpu / MILLICORES_PER_CORE,
        totals.limit_cpu / MILLICORES_PER_CORE,
        totals.request_memory / BYTES_PER_MIB,
        totals.limit_memory / BYTES_PER_MIB,
    ]


def namespace_frame(aggregation: AggregationResult) -> pd.DataFrame:
    """Namespace totals in cores/Mi, sorted by namespace."""
    rows = [
        [name, *_resource_values(totals)]
        for name, totals in aggregation.sorted_namespaces()
    ]
    return pd.DataFrame(rows, columns=list(NAMESPACE_COLUMNS))


def cluster_total_row(aggregation: AggregationResult) -> list[object]:
    """Sum of all namespace totals, labelled as the cluster total."""
    total = ResourceTotals()
    for _, totals in aggregation.sorted_namespaces():
        total.request_cpu += totals.request_cpu
        total.limit_cpu += totals.limit_cpu
        total.request_memory += totals.request_memory
        total.limit_memory += totals.limit_memory
    return [CLUSTER_TOTAL_LABEL, *_resource_values(total)]


def node_frame(aggregation: AggregationResult) -> pd.DataFrame:
    """Node totals with pod counts, sorted by node identifier."""
    rows = [
        [name, totals.pod_count, *_resource_values(totals)]
        for name, totals in aggregation.sorted_nodes()
    ]
    return pd.DataFrame(rows, columns=list(NODE_COLUMNS))


def _pct(value: float | None) -> str:
    return "N/A" if value is None else f"{value:.1f}%"


def efficiency_insights(report: ResourceReport) -> pd.DataFrame:
    """Resource efficiency analysis rows."""
    eff = report.efficiency
    rows = [
        [
            "Cluster CPU Efficiency",
            _pct(eff.cpu_efficiency),
            efficiency_rating(eff.cpu_efficiency),
        ],
        [
            "Cluster Memory Efficiency",
            _pct(eff.memory_efficiency),
            efficiency_rating(eff.memory_efficiency),
        ],
        ["Over-provisioned Namespaces", eff.over_provisioned, "< 50% efficiency"],
        ["Well-balanced Namespaces", eff.balanced, "50-80% efficiency"],
        ["Under-provisioned Namespaces", eff.under_provisioned, "> 80% efficiency"],
        ["Namespaces Without Limits", eff.unclassified, "Not classified"],
        [
            "Potential CPU Savings",
            f"{eff.potential_cpu_savings_cores:.1f} cores",
            "If limits = requests",
        ],
        [
            "Potential Memory Savings",
            f"{eff.potential_memory_savings_gib:.1f} Gi",
            "If limits = requests",
        ],
    ]
    return pd.DataFrame(rows, columns=list(INSIGHT_COLUMNS))


def node_insights(report: ResourceReport) -> pd.DataFrame:
    """Node distribution analysis rows."""
    dist = report.distribution
    rows = [
        ["Total Nodes", dist.node_count, ""],
        ["Average Pods per Node", f"{dist.mean_pods:.1f}", ""],
        [
            "Pod Distribution StdDev",
            f"{dist.stddev_pods:.1f}",
            "Lower = better balance",
        ],
        ["Most Loaded Node", f"{dist.max_pods} pods", ""],
        ["Least Loaded Node", f"{dist.min_pods} pods", ""],
        ["Load Balance Score", f"{dist.balance_score:.0f}", "0-100 (100 = perfect)"],
    ]
    return pd.DataFrame(rows, columns=list(INSIGHT_COLUMNS))
