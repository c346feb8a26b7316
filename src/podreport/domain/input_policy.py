"""Validation of user-supplied namespace and file path inputs."""

import os
import re
from datetime import date

NAMESPACE_MAX_LENGTH = 63
_NAMESPACE_RE = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$")

PROTECTED_PREFIXES: tuple[str, ...] = ("/etc/", "/sys/", "/proc/", "/dev/")


def validate_namespace(namespace: str) -> None:
    """Raise ValueError unless namespace is empty or a valid DNS label."""
    if not namespace:
        return
    if len(namespace) > NAMESPACE_MAX_LENGTH:
        raise ValueError(
            f"namespace too long (max {NAMESPACE_MAX_LENGTH} characters)"
        )
    if not _NAMESPACE_RE.match(namespace):
        raise ValueError(f"invalid namespace format: {namespace}")


def validate_path(path: str) -> None:
    """Raise ValueError for path traversal or paths inside system directories."""
    if not path:
        return
    clean_path = os.path.normpath(path)
    if ".." in clean_path.split(os.sep):
        raise ValueError(f"path traversal detected: {path}")
    abs_path = os.path.abspath(clean_path)
    if any(
        abs_path.startswith(prefix) or abs_path == prefix.rstrip("/")
        for prefix in PROTECTED_PREFIXES
    ):
        raise ValueError(f"access to system directories not allowed: {path}")


def namespace_display(namespace: str) -> str:
    """Return human-readable namespace scope."""
    return namespace or "all namespaces"


def default_output_filename(today: date | None = None) -> str:
    """Return dated default report filename."""
    day = today or date.today()
    return f"resource_{day.isoformat()}.xlsx"


def resolve_output_path(output: str | None, today: date | None = None) -> str:
    """Return normalized output path, falling back to the dated default."""
    if output:
        return os.path.normpath(output)
    return default_output_filename(today)
