"""Efficiency classification and node balance statistics."""

from __future__ import annotations

import statistics
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum

from podreport.domain.models import (
    BYTES_PER_GIB,
    MILLICORES_PER_CORE,
    NodeTotals,
    ResourceTotals,
)

OVER_PROVISIONED_THRESHOLD = 50.0
UNDER_PROVISIONED_THRESHOLD = 80.0

HIGH_EFFICIENCY = 80.0
MEDIUM_EFFICIENCY = 60.0
LOW_EFFICIENCY = 40.0

PERFECT_BALANCE = 100.0
IMBALANCE_FACTOR = 2
MAX_LISTED_NAMESPACES = 3


class Provisioning(str, Enum):
    """Namespace provisioning bucket derived from request/limit efficiency."""

    OVER = "over-provisioned"
    BALANCED = "balanced"
    UNDER = "under-provisioned"


def ratio_pct(part: int, whole: int) -> float | None:
    """Return ``part / whole * 100`` or None when there is no denominator."""
    if whole <= 0:
        return None
    return part / whole * 100


def average_efficiency(totals: ResourceTotals) -> float | None:
    """Average CPU and memory efficiency over the resources that have limits."""
    available = [
        eff
        for eff in (
            ratio_pct(totals.request_cpu, totals.limit_cpu),
            ratio_pct(totals.request_memory, totals.limit_memory),
        )
        if eff is not None
    ]
    if not available:
        return None
    return sum(available) / len(available)


def classify_provisioning(totals: ResourceTotals) -> Provisioning | None:
    """Classify a namespace; None when it has no limits to compare against."""
    avg = average_efficiency(totals)
    if avg is None:
        return None
    if avg < OVER_PROVISIONED_THRESHOLD:
        return Provisioning.OVER
    if avg > UNDER_PROVISIONED_THRESHOLD:
        return Provisioning.UNDER
    return Provisioning.BALANCED


@dataclass(frozen=True)
class EfficiencySummary:
    """Cluster-level efficiency and namespace provisioning counts."""

    cpu_efficiency: float | None
    memory_efficiency: float | None
    over_provisioned: int
    balanced: int
    under_provisioned: int
    unclassified: int
    potential_cpu_savings_cores: float
    potential_memory_savings_gib: float


def summarize_efficiency(
    namespace_totals: Mapping[str, ResourceTotals],
) -> EfficiencySummary:
    """Summarize namespace totals into cluster efficiency and class counts."""
    cluster = ResourceTotals()
    counts = {bucket: 0 for bucket in Provisioning}
    unclassified = 0
    for totals in namespace_totals.values():
        # requests count only where a limit exists to compare against
        if totals.limit_cpu > 0:
            cluster.request_cpu += totals.request_cpu
            cluster.limit_cpu += totals.limit_cpu
        if totals.limit_memory > 0:
            cluster.request_memory += totals.request_memory
            cluster.limit_memory += totals.limit_memory

        bucket = classify_provisioning(totals)
        if bucket is None:
            unclassified += 1
        else:
            counts[bucket] += 1

    return EfficiencySummary(
        cpu_efficiency=ratio_pct(cluster.request_cpu, cluster.limit_cpu),
        memory_efficiency=ratio_pct(cluster.request_memory, cluster.limit_memory),
        over_provisioned=counts[Provisioning.OVER],
        balanced=counts[Provisioning.BALANCED],
        under_provisioned=counts[Provisioning.UNDER],
        unclassified=unclassified,
        potential_cpu_savings_cores=(cluster.limit_cpu - cluster.request_cpu)
        / MILLICORES_PER_CORE,
        potential_memory_savings_gib=(cluster.limit_memory - cluster.request_memory)
        / BYTES_PER_GIB,
    )


def efficiency_rating(efficiency: float | None) -> str:
    """Return rating label for a cluster efficiency percentage."""
    if efficiency is None:
        return "No data"
    if efficiency >= HIGH_EFFICIENCY:
        return "Under-provisioned"
    if efficiency >= MEDIUM_EFFICIENCY:
        return "Well-balanced"
    if efficiency >= LOW_EFFICIENCY:
        return "Over-provisioned"
    return "Severely over-provisioned"


def mean(values: Sequence[int]) -> float:
    """Arithmetic mean; 0 for an empty sequence."""
    if not values:
        return 0.0
    return statistics.fmean(values)


def population_stddev(values: Sequence[int]) -> float:
    """Standard deviation with divisor N; 0 for an empty sequence."""
    if not values:
        return 0.0
    return statistics.pstdev(values)


def coefficient_of_variation(values: Sequence[int]) -> float:
    """``stddev / mean``; a zero mean counts as perfectly even."""
    avg = mean(values)
    if avg == 0:
        return 0.0
    return population_stddev(values) / avg


def balance_score(values: Sequence[int]) -> float:
    """Return 0-100 evenness of pod counts (100 = identical counts)."""
    if len(values) <= 1:
        return PERFECT_BALANCE
    return max(0.0, PERFECT_BALANCE - coefficient_of_variation(values) * 100)


@dataclass(frozen=True)
class NodeDistribution:
    """Descriptive statistics of pod counts across nodes."""

    node_count: int
    mean_pods: float
    stddev_pods: float
    min_pods: int
    max_pods: int
    coefficient_of_variation: float
    balance_score: float


def describe_node_distribution(
    node_totals: Mapping[str, NodeTotals],
) -> NodeDistribution:
    """Compute pod-count distribution statistics, iterating nodes in key order."""
    counts = [node_totals[node].pod_count for node in sorted(node_totals)]
    return NodeDistribution(
        node_count=len(counts),
        mean_pods=mean(counts),
        stddev_pods=population_stddev(counts),
        min_pods=min(counts, default=0),
        max_pods=max(counts, default=0),
        coefficient_of_variation=coefficient_of_variation(counts),
        balance_score=balance_score(counts),
    )


def resource_warnings(
    namespace_totals: Mapping[str, ResourceTotals],
    node_totals: Mapping[str, NodeTotals],
) -> list[str]:
    """Return data-quality warnings about missing limits and pod imbalance."""
    warnings: list[str] = []

    without_limits = [
        name
        for name in sorted(namespace_totals)
        if not namespace_totals[name].has_limits
    ]
    warnings.extend(
        f"Namespace '{name}' has no resource limits"
        for name in without_limits[:MAX_LISTED_NAMESPACES]
    )
    if len(without_limits) > MAX_LISTED_NAMESPACES:
        hidden = len(without_limits) - MAX_LISTED_NAMESPACES
        warnings.append(f"... and {hidden} more namespaces without limits")

    if len(node_totals) > 1:
        counts = [totals.pod_count for totals in node_totals.values()]
        low, high = min(counts), max(counts)
        if high > low * IMBALANCE_FACTOR:
            warnings.append(f"Pod distribution imbalanced: {low}-{high} pods per node")

    return warnings