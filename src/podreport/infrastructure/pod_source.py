"""Pod listing through kubectl."""

import logging
from typing import Any

from podreport.infrastructure.kubectl_client import (
    DEFAULT_TIMEOUT_SECONDS,
    KubectlError,
    kubectl_json,
)

logger = logging.getLogger(__name__)


class PodSourceError(RuntimeError):
    """Raised when pods cannot be listed from the cluster."""


def pods_command(namespace: str = "") -> str:
    """Return kubectl arguments listing pods in one or all namespaces."""
    if namespace:
        return f"get pods --namespace {namespace}"
    return "get pods --all-namespaces"


def list_pods(
    namespace: str = "",
    *,
    kubeconfig: str | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> list[dict[str, Any]]:
    """Return pod items of ``kubectl get pods``; any failure is fatal."""
    try:
        payload = kubectl_json(
            pods_command(namespace),
            kubeconfig=kubeconfig,
            timeout=timeout,
        )
    except KubectlError as exc:
        raise PodSourceError(f"Failed to list pods: {exc}") from exc

    items = payload.get("items")
    if not isinstance(items, list):
        raise PodSourceError("Failed to list pods: response has no 'items' list")
    logger.info("Found %d pods", len(items))
    return items
