"""Tests for Kubernetes quantity parsing."""

from __future__ import annotations

from decimal import Decimal

import pytest

from podreport.domain.quantity_parser import (
    is_unset,
    parse_cpu,
    parse_memory,
    parse_quantity,
)


def test_parse_cpu_variants() -> None:
    assert parse_cpu("100m") == 100
    assert parse_cpu("1") == 1000
    assert parse_cpu("0.5") == 500
    assert parse_cpu("2.25") == 2250
    assert parse_cpu("") == 0
    assert parse_cpu(None) == 0


def test_parse_cpu_rounds_fractional_millicores_up() -> None:
    assert parse_cpu("0.0001") == 1
    assert parse_cpu("1500u") == 2


def test_parse_memory_binary_and_decimal_suffixes() -> None:
    assert parse_memory("128Mi") == 134217728
    assert parse_memory("1Gi") == 1073741824
    assert parse_memory("1.5Gi") == 1610612736
    assert parse_memory("1k") == 1000
    assert parse_memory("1M") == 1_000_000
    assert parse_memory("2Ki") == 2048
    assert parse_memory("1e3") == 1000


def test_unset_values_parse_as_zero() -> None:
    for raw in ("", "0", "<none>", None):
        assert is_unset(raw)
        assert parse_quantity(raw) == Decimal(0)
    assert not is_unset("1")


@pytest.mark.parametrize("raw", ["abc", "12Q", "1.2.3", "Mi", "1K"])
def test_invalid_quantity_raises(raw: str) -> None:
    with pytest.raises(ValueError, match="invalid resource quantity"):
        parse_quantity(raw)
