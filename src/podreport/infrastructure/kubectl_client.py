"""Shared kubectl execution helpers."""

import json
import logging
import shlex
import subprocess
from typing import Any, cast

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


class KubectlError(RuntimeError):
    """Raised when kubectl command execution fails."""


def _run_kubectl(
    command: str,
    *,
    kubeconfig: str | None = None,
    timeout: float | None = DEFAULT_TIMEOUT_SECONDS,
) -> subprocess.CompletedProcess[str]:
    args = ["kubectl", *shlex.split(command)]
    if kubeconfig:
        args.extend(["--kubeconfig", kubeconfig])
    args.extend(["-o", "json"])
    logger.debug("Running %s", shlex.join(args))
    try:
        return subprocess.run(
            args,
            capture_output=True,
            text=True,
            check=True,
            timeout=timeout,
        )
    except subprocess.CalledProcessError as exc:
        stderr = exc.stderr.strip() if exc.stderr else str(exc)
        raise KubectlError(f"kubectl command failed: {stderr}") from exc
    except subprocess.TimeoutExpired as exc:
        raise KubectlError(f"kubectl command timed out after {timeout}s") from exc
    except FileNotFoundError as exc:
        raise KubectlError("kubectl executable not found in PATH") from exc


def kubectl_json(
    command: str,
    *,
    kubeconfig: str | None = None,
    timeout: float | None = DEFAULT_TIMEOUT_SECONDS,
) -> dict[str, Any]:
    """Execute kubectl command and parse JSON output."""
    result = _run_kubectl(
        command,
        kubeconfig=kubeconfig,
        timeout=timeout,
    )
    try:
        return cast(dict[str, Any], json.loads(result.stdout) if result.stdout else {})
    except json.JSONDecodeError as exc:
        raise KubectlError(f"kubectl returned invalid JSON: {exc}") from exc
