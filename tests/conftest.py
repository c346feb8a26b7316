"""Shared pod fixtures."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

PodFactory = Callable[..., dict[str, Any]]


def build_pod(
    name: str,
    *,
    namespace: str = "default",
    phase: str = "Running",
    host_ip: str | None = "10.0.0.1",
    containers: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    status: dict[str, Any] = {"phase": phase}
    if host_ip is not None:
        status["hostIP"] = host_ip
    return {
        "metadata": {"name": name, "namespace": namespace},
        "spec": {"containers": containers if containers is not None else []},
        "status": status,
    }


def build_container(
    name: str = "app",
    *,
    requests: dict[str, str] | None = None,
    limits: dict[str, str] | None = None,
) -> dict[str, Any]:
    resources: dict[str, Any] = {}
    if requests is not None:
        resources["requests"] = requests
    if limits is not None:
        resources["limits"] = limits
    return {"name": name, "resources": resources}


@pytest.fixture
def make_pod() -> PodFactory:
    return build_pod


@pytest.fixture
def make_container() -> Callable[..., dict[str, Any]]:
    return build_container


@pytest.fixture
def sample_pods() -> list[dict[str, Any]]:
    """Two identical default pods on one node plus one failed pod."""
    container = build_container(
        requests={"cpu": "100m", "memory": "128Mi"},
        limits={"cpu": "200m", "memory": "256Mi"},
    )
    return [
        build_pod("web-1", containers=[container]),
        build_pod("web-2", containers=[container]),
        build_pod("job-1", phase="Failed", containers=[container]),
    ]
