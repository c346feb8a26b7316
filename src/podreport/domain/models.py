"""Data models for pod resource aggregation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple

DEFAULT_NAMESPACE = "default"
UNKNOWN_NODE = "Unknown"
UNSET = "-"

BYTES_PER_MIB = 1024 * 1024
BYTES_PER_GIB = 1024 * 1024 * 1024
MILLICORES_PER_CORE = 1000


@dataclass(frozen=True)
class ContainerResourceSample:
    """Resources of one container within one pod."""

    namespace: str
    pod_name: str
    node: str
    container_name: str
    phase: str
    request_cpu: int
    request_memory: int
    limit_cpu: int
    limit_memory: int
    request_cpu_text: str = UNSET
    request_memory_text: str = UNSET
    limit_cpu_text: str = UNSET
    limit_memory_text: str = UNSET

    @property
    def namespace_key(self) -> str:
        """Namespace bucket this container contributes to."""
        return self.namespace or DEFAULT_NAMESPACE


@dataclass
class ResourceTotals:
    """Running request/limit sums (millicores and bytes)."""

    request_cpu: int = 0
    limit_cpu: int = 0
    request_memory: int = 0
    limit_memory: int = 0

    def add(self, sample: ContainerResourceSample) -> None:
        """Accumulate one container sample."""
        self.request_cpu += sample.request_cpu
        self.limit_cpu += sample.limit_cpu
        self.request_memory += sample.request_memory
        self.limit_memory += sample.limit_memory

    @property
    def has_limits(self) -> bool:
        """Return whether any CPU or memory limit was accumulated."""
        return self.limit_cpu > 0 or self.limit_memory > 0


@dataclass
class NodeTotals(ResourceTotals):
    """Per-node sums plus the number of qualifying pods scheduled there."""

    pod_count: int = 0


class ClusterTotals(NamedTuple):
    """Cluster-wide requested resources used as percentage denominators."""

    request_cpu: int
    request_memory: int


class ContainerDetailRow(NamedTuple):
    """One row of the per-container resources sheet."""

    namespace: str
    pod: str
    node: str
    container: str
    status: str
    request_cpu_m: int
    request_cpu: str
    request_memory_mi: float
    request_memory: str
    limit_cpu_m: int
    limit_cpu: str
    limit_memory_mi: float
    limit_memory: str
    cpu_efficiency: str | None
    memory_efficiency: str | None
    cpu_cluster_pct: str | None
    memory_cluster_pct: str | None


DETAIL_HEADERS: tuple[str, ...] = (
    "Namespace",
    "Pod",
    "Node",
    "Container",
    "Status",
    "Request CPU (m)",
    "Request CPU",
    "Request Memory (Mi)",
    "Request Memory",
    "Limit CPU (m)",
    "Limit CPU",
    "Limit Memory (Mi)",
    "Limit Memory",
    "CPU Efficiency %",
    "Memory Efficiency %",
    "CPU % of Cluster",
    "Memory % of Cluster",
)


@dataclass
class AggregationResult:
    """Outcome of a single aggregation pass over the pod list."""

    cluster_totals: ClusterTotals
    namespace_totals: dict[str, ResourceTotals] = field(default_factory=dict)
    node_totals: dict[str, NodeTotals] = field(default_factory=dict)
    rows: list[ContainerDetailRow] = field(default_factory=list)
    pods_seen: int = 0
    pods_included: int = 0

    @property
    def container_count(self) -> int:
        """Number of containers written as detail rows."""
        return len(self.rows)

    def sorted_namespaces(self) -> list[tuple[str, ResourceTotals]]:
        """Return namespace totals in lexical namespace order."""
        return sorted(self.namespace_totals.items(), key=lambda item: item[0])

    def sorted_nodes(self) -> list[tuple[str, NodeTotals]]:
        """Return node totals in lexical node order."""
        return sorted(self.node_totals.items(), key=lambda item: item[0])
