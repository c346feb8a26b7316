"""Application configuration, environment loading and logging setup."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

DEFAULT_API_TIMEOUT_SECONDS = 30.0
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class ReportConfig:
    """Defaults for a report run; CLI options take precedence."""

    namespace: str = ""
    kubeconfig: Path | None = None
    output: str | None = None
    api_timeout_seconds: float = DEFAULT_API_TIMEOUT_SECONDS
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def kubeconfig_path(self) -> str | None:
        """Return kubeconfig as a string for the kubectl command line."""
        return str(self.kubeconfig) if self.kubeconfig else None


def _parse_timeout(raw: str | None) -> float:
    if not raw:
        return DEFAULT_API_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"POD_REPORT_API_TIMEOUT must be a number: {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"POD_REPORT_API_TIMEOUT must be positive: {raw!r}")
    return value


def load_config(env_path: Path = Path(".env")) -> ReportConfig:
    """Load config from environment and optional .env file."""
    load_dotenv(env_path, override=False)
    kubeconfig_raw = os.getenv("POD_REPORT_KUBECONFIG")
    return ReportConfig(
        namespace=os.getenv("K8S_NAMESPACE", ""),
        kubeconfig=Path(kubeconfig_raw) if kubeconfig_raw else None,
        output=os.getenv("POD_REPORT_OUTPUT") or None,
        api_timeout_seconds=_parse_timeout(os.getenv("POD_REPORT_API_TIMEOUT")),
        log_level=os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    )


def setup_logging(*, verbose: bool = False, level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure application-wide logging to stderr through rich."""
    resolved = logging.DEBUG if verbose else getattr(logging, level, logging.INFO)
    logging.basicConfig(
        level=resolved,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=verbose)],
        force=True,
    )
