"""Tests for kubectl helper functions."""

from __future__ import annotations

import json
import subprocess
from unittest.mock import patch

import pytest

from podreport.infrastructure.kubectl_client import KubectlError, kubectl_json

RUN = "podreport.infrastructure.kubectl_client.subprocess.run"


def _completed(stdout: str) -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(
        args=["kubectl", "get", "pods", "-o", "json"],
        returncode=0,
        stdout=stdout,
        stderr="",
    )


def test_kubectl_json_success() -> None:
    with patch(RUN, return_value=_completed(json.dumps({"items": []}))) as run:
        assert kubectl_json("get pods", timeout=12.0) == {"items": []}
    args = run.call_args.args[0]
    assert args == ["kubectl", "get", "pods", "-o", "json"]
    assert run.call_args.kwargs["timeout"] == 12.0


def test_kubectl_json_passes_kubeconfig() -> None:
    with patch(RUN, return_value=_completed("{}")) as run:
        kubectl_json("get pods", kubeconfig="/home/me/.kube/config")
    args = run.call_args.args[0]
    assert args[-4:] == ["--kubeconfig", "/home/me/.kube/config", "-o", "json"]


def test_kubectl_json_invalid_json() -> None:
    with (
        patch(RUN, return_value=_completed("{invalid}")),
        pytest.raises(KubectlError, match="invalid JSON"),
    ):
        kubectl_json("get pods")


def test_kubectl_command_failure() -> None:
    with (
        patch(
            RUN,
            side_effect=subprocess.CalledProcessError(
                1,
                ["kubectl", "get", "pods"],
                stderr="cluster unavailable",
            ),
        ),
        pytest.raises(KubectlError, match="cluster unavailable"),
    ):
        kubectl_json("get pods")


def test_kubectl_timeout() -> None:
    with (
        patch(RUN, side_effect=subprocess.TimeoutExpired(["kubectl"], 30)),
        pytest.raises(KubectlError, match="timed out"),
    ):
        kubectl_json("get pods", timeout=30)


def test_kubectl_missing_binary() -> None:
    with (
        patch(RUN, side_effect=FileNotFoundError("kubectl")),
        pytest.raises(KubectlError, match="not found"),
    ):
        kubectl_json("get pods")
