"""Tests for application config."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from podreport.config import ReportConfig, load_config, setup_logging

ENV_VARS = (
    "K8S_NAMESPACE",
    "POD_REPORT_KUBECONFIG",
    "POD_REPORT_OUTPUT",
    "POD_REPORT_API_TIMEOUT",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # setenv first so values written by load_dotenv are undone after the test
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def test_defaults(tmp_path: Path) -> None:
    cfg = load_config(tmp_path / ".env")
    assert cfg == ReportConfig()
    assert cfg.kubeconfig_path is None
    assert cfg.api_timeout_seconds == 30


def test_environment_values(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("K8S_NAMESPACE", "team-a")
    monkeypatch.setenv("POD_REPORT_KUBECONFIG", "/tmp/kubeconfig")
    monkeypatch.setenv("POD_REPORT_API_TIMEOUT", "12.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    cfg = load_config(tmp_path / ".env")
    assert cfg.namespace == "team-a"
    assert cfg.kubeconfig_path == "/tmp/kubeconfig"
    assert cfg.api_timeout_seconds == 12.5
    assert cfg.log_level == "DEBUG"


def test_dotenv_file(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("POD_REPORT_OUTPUT=weekly.xlsx\n", encoding="utf-8")
    assert load_config(env_file).output == "weekly.xlsx"


@pytest.mark.parametrize("raw", ["0", "-5", "soon"])
def test_invalid_timeout(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, raw: str
) -> None:
    monkeypatch.setenv("POD_REPORT_API_TIMEOUT", raw)
    with pytest.raises(ValueError, match="POD_REPORT_API_TIMEOUT"):
        load_config(tmp_path / ".env")


def test_setup_logging_levels() -> None:
    setup_logging(level="WARNING")
    assert logging.getLogger().level == logging.WARNING
    setup_logging(verbose=True, level="WARNING")
    assert logging.getLogger().level == logging.DEBUG
