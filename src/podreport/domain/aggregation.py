"""Single-pass aggregation of pod container resources.

Pods arrive as ``kubectl get pods -o json`` items. Only Running and Pending
pods are considered; every other phase is dropped before any total or detail
row is produced.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable, Iterator
from typing import Any

from podreport.domain.models import (
    BYTES_PER_MIB,
    UNKNOWN_NODE,
    UNSET,
    AggregationResult,
    ClusterTotals,
    ContainerDetailRow,
    ContainerResourceSample,
    NodeTotals,
    ResourceTotals,
)
from podreport.domain.quantity_parser import parse_cpu, parse_memory

logger = logging.getLogger(__name__)

QUALIFYING_PHASES: frozenset[str] = frozenset({"Running", "Pending"})
PROGRESS_INTERVAL = 50


def is_qualifying_pod(pod: dict[str, Any]) -> bool:
    """Return whether the pod is active or about to be scheduled."""
    return pod.get("status", {}).get("phase") in QUALIFYING_PHASES


def qualifying_pods(pods: Iterable[dict[str, Any]]) -> Iterator[dict[str, Any]]:
    """Yield qualifying pods in input order."""
    return (pod for pod in pods if is_qualifying_pod(pod))


def pod_node_key(pod: dict[str, Any]) -> str:
    """Return the node bucket for a pod (host IP, or Unknown when unscheduled)."""
    return pod.get("status", {}).get("hostIP") or UNKNOWN_NODE


def _quantity(resources: dict[str, Any], section: str, name: str) -> Any:
    return (resources.get(section) or {}).get(name)


def _display(raw: Any, value: int) -> str:
    return str(raw).strip() if value else UNSET


def container_samples(pod: dict[str, Any]) -> Iterator[ContainerResourceSample]:
    """Yield one resource sample per container, in pod-spec order."""
    metadata = pod.get("metadata", {})
    status = pod.get("status", {})
    for container in pod.get("spec", {}).get("containers") or []:
        resources = container.get("resources") or {}
        raw_req_cpu = _quantity(resources, "requests", "cpu")
        raw_req_mem = _quantity(resources, "requests", "memory")
        raw_lim_cpu = _quantity(resources, "limits", "cpu")
        raw_lim_mem = _quantity(resources, "limits", "memory")

        request_cpu = parse_cpu(raw_req_cpu)
        request_memory = parse_memory(raw_req_mem)
        limit_cpu = parse_cpu(raw_lim_cpu)
        limit_memory = parse_memory(raw_lim_mem)

        yield ContainerResourceSample(
            namespace=metadata.get("namespace") or "",
            pod_name=metadata.get("name") or "",
            node=status.get("hostIP") or "",
            container_name=container.get("name") or "",
            phase=status.get("phase") or "",
            request_cpu=request_cpu,
            request_memory=request_memory,
            limit_cpu=limit_cpu,
            limit_memory=limit_memory,
            request_cpu_text=_display(raw_req_cpu, request_cpu),
            request_memory_text=_display(raw_req_mem, request_memory),
            limit_cpu_text=_display(raw_lim_cpu, limit_cpu),
            limit_memory_text=_display(raw_lim_mem, limit_memory),
        )


def compute_cluster_totals(pods: Iterable[dict[str, Any]]) -> ClusterTotals:
    """Sum requested CPU (millicores) and memory (bytes) over qualifying pods."""
    request_cpu = 0
    request_memory = 0
    for pod in qualifying_pods(pods):
        for sample in container_samples(pod):
            request_cpu += sample.request_cpu
            request_memory += sample.request_memory
    return ClusterTotals(request_cpu=request_cpu, request_memory=request_memory)


def format_ratio(part: int, whole: int, *, digits: int) -> str | None:
    """Format ``part / whole`` as a percentage, or None when whole is zero."""
    if whole <= 0:
        return None
    return f"{part / whole * 100:.{digits}f}%"


def efficiency_text(request: int, limit: int) -> str | None:
    """Container efficiency, present only when both request and limit are set."""
    if request <= 0 or limit <= 0:
        return None
    return format_ratio(request, limit, digits=1)


def build_detail_row(
    sample: ContainerResourceSample, cluster: ClusterTotals
) -> ContainerDetailRow:
    """Build the resources-sheet row for one container."""
    return ContainerDetailRow(
        namespace=sample.namespace,
        pod=sample.pod_name,
        node=sample.node,
        container=sample.container_name,
        status=sample.phase,
        request_cpu_m=sample.request_cpu,
        request_cpu=sample.request_cpu_text,
        request_memory_mi=sample.request_memory / BYTES_PER_MIB,
        request_memory=sample.request_memory_text,
        limit_cpu_m=sample.limit_cpu,
        limit_cpu=sample.limit_cpu_text,
        limit_memory_mi=sample.limit_memory / BYTES_PER_MIB,
        limit_memory=sample.limit_memory_text,
        cpu_efficiency=efficiency_text(sample.request_cpu, sample.limit_cpu),
        memory_efficiency=efficiency_text(sample.request_memory, sample.limit_memory),
        cpu_cluster_pct=format_ratio(
            sample.request_cpu, cluster.request_cpu, digits=2
        ),
        memory_cluster_pct=format_ratio(
            sample.request_memory, cluster.request_memory, digits=2
        ),
    )


def aggregate(pods: list[dict[str, Any]]) -> AggregationResult:
    """Aggregate namespace totals, node totals and detail rows in one pass."""
    cluster = compute_cluster_totals(pods)
    namespace_totals: dict[str, ResourceTotals] = defaultdict(ResourceTotals)
    node_totals: dict[str, NodeTotals] = defaultdict(NodeTotals)
    result = AggregationResult(cluster_totals=cluster, pods_seen=len(pods))

    for index, pod in enumerate(pods):
        if index and index % PROGRESS_INTERVAL == 0:
            logger.debug(
                "Processed %d/%d pods (%d containers)",
                index,
                len(pods),
                len(result.rows),
            )
        if not is_qualifying_pod(pod):
            continue

        node_key = pod_node_key(pod)
        for sample in container_samples(pod):
            namespace_totals[sample.namespace_key].add(sample)
            node_totals[node_key].add(sample)
            result.rows.append(build_detail_row(sample, cluster))

        # once per pod, regardless of container count
        node_totals[node_key].pod_count += 1
        result.pods_included += 1

    result.namespace_totals = dict(namespace_totals)
    result.node_totals = dict(node_totals)
    logger.info(
        "Completed processing: %d pods, %d containers",
        result.pods_included,
        result.container_count,
    )
    return result
