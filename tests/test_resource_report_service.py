"""Tests for report assembly and tabular views."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from podreport.application.report_frames import (
    CLUSTER_TOTAL_LABEL,
    cluster_total_row,
    efficiency_insights,
    namespace_frame,
    node_frame,
)
from podreport.application.resource_report_service import build_resource_report
from podreport.domain.recommendations import DEFAULT_MESSAGES

Factory = Callable[..., dict[str, Any]]


def test_build_resource_report(sample_pods: list[dict[str, Any]]) -> None:
    report = build_resource_report(sample_pods)

    assert report.efficiency.cpu_efficiency == 50.0
    assert report.efficiency.balanced == 1
    assert report.distribution.node_count == 1
    assert report.distribution.balance_score == 100
    assert report.recommendations == (DEFAULT_MESSAGES.well_balanced,)
    assert report.warnings == ()


def test_report_for_no_pods() -> None:
    report = build_resource_report([])
    assert report.efficiency.cpu_efficiency is None
    assert report.distribution.node_count == 0
    assert report.recommendations == (DEFAULT_MESSAGES.well_balanced,)


def test_namespace_frame_units(sample_pods: list[dict[str, Any]]) -> None:
    aggregation = build_resource_report(sample_pods).aggregation
    frame = namespace_frame(aggregation)
    assert frame.iloc[0].tolist() == ["default", 0.2, 0.4, 256.0, 512.0]
    assert cluster_total_row(aggregation) == [
        CLUSTER_TOTAL_LABEL,
        0.2,
        0.4,
        256.0,
        512.0,
    ]


def test_node_frame(sample_pods: list[dict[str, Any]]) -> None:
    frame = node_frame(build_resource_report(sample_pods).aggregation)
    assert frame["Node IP"].tolist() == ["10.0.0.1"]
    assert frame["Pod Count"].tolist() == [2]


def test_efficiency_insights_without_limits(
    make_pod: Factory, make_container: Factory
) -> None:
    pods = [make_pod("p", containers=[make_container(requests={"cpu": "1"})])]
    frame = efficiency_insights(build_resource_report(pods))
    values = dict(zip(frame["Metric"], frame["Value"], strict=True))
    assert values["Cluster CPU Efficiency"] == "N/A"
    assert values["Namespaces Without Limits"] == 1
