"""Tests for the xlsx workbook sink."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest
from openpyxl import load_workbook

from podreport.application.resource_report_service import build_resource_report
from podreport.application.workbook_writer import (
    ReportWorkbook,
    ReportWriteError,
    StyleSpec,
    chart_size_px,
    efficiency_fill,
    write_resource_workbook,
)
from podreport.domain.models import DETAIL_HEADERS

Factory = Callable[..., dict[str, Any]]


def test_workbook_sheets_and_contents(
    tmp_path: Path,
    sample_pods: list[dict[str, Any]],
    make_pod: Factory,
    make_container: Factory,
) -> None:
    pods = [
        *sample_pods,
        make_pod(
            "worker",
            namespace="batch",
            host_ip="10.0.0.2",
            containers=[make_container(requests={"cpu": "500m"})],
        ),
    ]
    path = write_resource_workbook(build_resource_report(pods), tmp_path / "r.xlsx")

    book = load_workbook(path)
    assert book.sheetnames == ["Resources", "Namespaces", "Nodes", "Chart", "Insights"]

    resources = book["Resources"]
    assert [cell.value for cell in resources[2]] == list(DETAIL_HEADERS)
    assert resources["F1"].value == "=SUBTOTAL(109,F3:F5)/1000"
    assert resources["H1"].value == "=SUBTOTAL(109,H3:H5)"
    assert resources.freeze_panes == "A3"
    assert resources.auto_filter.ref == "A2:Q5"
    assert resources["A3"].value == "default"
    assert resources["N3"].value == "50.0%"
    assert resources["I5"].value == "-"
    assert resources["N5"].value is None

    namespaces = book["Namespaces"]
    assert [namespaces.cell(row=r, column=1).value for r in range(2, 5)] == [
        "batch",
        "default",
        "CLUSTER TOTAL",
    ]
    assert namespaces["B4"].value == pytest.approx(0.7)
    assert namespaces["A4"].font.bold

    nodes = book["Nodes"]
    assert nodes["A2"].value == "10.0.0.1"
    assert nodes["B2"].value == 2
    assert nodes["B3"].value == 1

    insights = book["Insights"]
    assert insights["A1"].value == "KUBERNETES RESOURCE INSIGHTS"
    column_a = [cell.value for cell in insights["A"]]
    assert "OPTIMIZATION RECOMMENDATIONS" in column_a
    assert "Load Balance Score" in column_a


def test_empty_report_writes_chart_note(tmp_path: Path) -> None:
    path = write_resource_workbook(build_resource_report([]), tmp_path / "e.xlsx")
    book = load_workbook(path)
    assert book["Chart"]["A1"].value == (
        "No namespace data available for chart creation"
    )
    assert book["Resources"]["F1"].value == "=SUBTOTAL(109,F3:F3)/1000"
    assert book["Namespaces"]["A2"].value == "CLUSTER TOTAL"


def test_save_creates_parent_directories(
    tmp_path: Path, sample_pods: list[dict[str, Any]]
) -> None:
    target = tmp_path / "nested" / "dir" / "r.xlsx"
    write_resource_workbook(build_resource_report(sample_pods), target)
    assert target.exists()
    assert [p.name for p in target.parent.iterdir()] == ["r.xlsx"]


def test_failed_save_leaves_no_file(tmp_path: Path) -> None:
    target = tmp_path / "r.xlsx"
    book = ReportWorkbook()
    with (
        patch.object(book.workbook, "save", side_effect=OSError("disk full")),
        pytest.raises(ReportWriteError, match="disk full"),
    ):
        book.save(target)
    assert list(tmp_path.iterdir()) == []


def test_style_failure_is_logged_not_raised(caplog: pytest.LogCaptureFixture) -> None:
    book = ReportWorkbook()
    sheet = book.sheet("Resources")
    with patch.object(book, "define_style", side_effect=ValueError("bad style")):
        book.apply_style(sheet, "A1", StyleSpec(bold=True))
    assert "Failed to set cell style" in caplog.text


def test_named_styles_are_reused() -> None:
    book = ReportWorkbook()
    assert book.define_style(StyleSpec(bold=True)) == book.define_style(
        StyleSpec(bold=True)
    )
    assert book.define_style(StyleSpec(fill="FF6B6B")) != book.define_style(
        StyleSpec(bold=True)
    )


def test_efficiency_fill_bands() -> None:
    assert efficiency_fill(95.0) == "FF6B6B"
    assert efficiency_fill(60.0) == "FFE66D"
    assert efficiency_fill(45.0) == "4ECDC4"
    assert efficiency_fill(10.0) == "95E1D3"


def test_chart_size_is_capped() -> None:
    assert chart_size_px(2) == (2000, 2160)
    assert chart_size_px(100)[1] == 3600
