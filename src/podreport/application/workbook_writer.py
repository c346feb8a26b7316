"""Excel workbook sink for the resource report.

Sheet structure errors and save failures abort the report. Per-cell styling is
cosmetic: a style that cannot be applied is logged and skipped.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

import pandas as pd
from openpyxl import Workbook
from openpyxl.chart import BarChart, Reference
from openpyxl.styles import Font, NamedStyle, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.utils.dataframe import dataframe_to_rows
from openpyxl.worksheet.worksheet import Worksheet

from podreport.application.report_frames import (
    cluster_total_row,
    efficiency_insights,
    namespace_frame,
    node_frame,
    node_insights,
)
from podreport.application.resource_report_service import ResourceReport
from podreport.domain.models import DETAIL_HEADERS, ContainerDetailRow

logger = logging.getLogger(__name__)

RESOURCES_SHEET = "Resources"
NAMESPACES_SHEET = "Namespaces"
NODES_SHEET = "Nodes"
CHART_SHEET = "Chart"
INSIGHTS_SHEET = "Insights"

HEADER_ROW = 2
FIRST_DATA_ROW = 3
ONE_DECIMAL = "0.0"

RESOURCES_COLUMN_WIDTHS: dict[str, float] = {
    "A": 15,
    "B": 25,
    "C": 15,
    "D": 20,
    "E": 10,
    "F": 12,
    "G": 15,
    "H": 18,
    "I": 15,
    "J": 12,
    "K": 15,
    "L": 18,
    "M": 15,
    "N": 16,
    "O": 18,
    "P": 16,
    "Q": 18,
}
NAMESPACE_COLUMN_WIDTHS: dict[str, float] = {
    "A": 20,
    "B": 18,
    "C": 16,
    "D": 20,
    "E": 18,
}
NODE_COLUMN_WIDTHS: dict[str, float] = {
    "A": 20,
    "B": 12,
    "C": 18,
    "D": 16,
    "E": 20,
    "F": 18,
}
INSIGHT_COLUMN_WIDTHS: dict[str, float] = {"A": 25, "B": 20, "C": 30}

# Request/limit memory (Mi) columns on the resources sheet.
MEMORY_COLUMNS = ("H", "L")
EFFICIENCY_COLUMNS = {"N": "cpu_efficiency", "O": "memory_efficiency"}
SUBTOTAL_COLUMNS: dict[str, str] = {"F": "/1000", "H": "", "J": "/1000", "L": ""}

# Efficiency fill colors, highest threshold first.
EFFICIENCY_FILLS: tuple[tuple[float, str], ...] = (
    (80.0, "FF6B6B"),
    (60.0, "FFE66D"),
    (40.0, "4ECDC4"),
)
LOW_EFFICIENCY_FILL = "95E1D3"

CHART_BASE_WIDTH_PX = 800
CHART_BASE_HEIGHT_PX = 600
CHART_WIDTH_SCALE = 2.5
CHART_HEIGHT_SCALE = 3
CHART_ROW_HEIGHT_PX = 60
CHART_MAX_HEIGHT_PX = 3600
PX_PER_CM = 37.8
ROW_HEIGHT_PX = 15


class ReportWriteError(RuntimeError):
    """Raised when the report workbook cannot be built or saved."""


@dataclass(frozen=True)
class StyleSpec:
    """Cell style request understood by the workbook sink."""

    bold: bool = False
    size: float | None = None
    fill: str | None = None
    number_format: str = "General"


NUMBER_STYLE = StyleSpec(number_format=ONE_DECIMAL)
BOLD_STYLE = StyleSpec(bold=True)
BOLD_NUMBER_STYLE = StyleSpec(bold=True, number_format=ONE_DECIMAL)
TITLE_STYLE = StyleSpec(bold=True, size=16)
SECTION_STYLE = StyleSpec(bold=True, size=12)


def efficiency_fill(efficiency: float) -> str:
    """Return fill color for an efficiency percentage."""
    for threshold, color in EFFICIENCY_FILLS:
        if efficiency >= threshold:
            return color
    return LOW_EFFICIENCY_FILL


def _percent_value(text: str) -> float:
    return float(text.rstrip("%"))


class ReportWorkbook:
    """openpyxl workbook with a cache of named styles."""

    def __init__(self) -> None:
        self.workbook = Workbook()
        self._styles: dict[StyleSpec, str] = {}
        self._default_sheet_unused = True

    def define_style(self, spec: StyleSpec) -> str:
        """Register a named style for the spec once and return its name."""
        name = self._styles.get(spec)
        if name is not None:
            return name
        name = f"podreport-{len(self._styles) + 1}"
        style = NamedStyle(
            name=name,
            font=Font(bold=spec.bold, size=spec.size),
            number_format=spec.number_format,
        )
        if spec.fill:
            style.fill = PatternFill(
                fill_type="solid", start_color=spec.fill, end_color=spec.fill
            )
        self.workbook.add_named_style(style)
        self._styles[spec] = name
        return name

    def apply_style(self, sheet: Worksheet, coordinate: str, spec: StyleSpec) -> None:
        """Apply a style to one cell; failures are logged and skipped."""
        try:
            sheet[coordinate].style = self.define_style(spec)
        except (ValueError, TypeError, KeyError) as exc:
            logger.warning(
                "Failed to set cell style for %s!%s: %s", sheet.title, coordinate, exc
            )

    def sheet(self, title: str) -> Worksheet:
        """Return a new sheet; the default empty sheet is reused for the first."""
        if self._default_sheet_unused:
            self._default_sheet_unused = False
            sheet = self.workbook.active
            sheet.title = title
            return sheet
        return self.workbook.create_sheet(title)

    def save(self, path: Path) -> None:
        """Save atomically: write a sibling temp file, then rename over path."""
        directory = path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=".podreport_", suffix=".xlsx", dir=directory
            )
            os.close(fd)
        except OSError as exc:
            raise ReportWriteError(f"failed to save file: {exc}") from exc

        try:
            self.workbook.save(tmp_name)
            os.replace(tmp_name, path)
        except OSError as exc:
            raise ReportWriteError(f"failed to save file: {exc}") from exc
        finally:
            Path(tmp_name).unlink(missing_ok=True)


def _set_column_widths(sheet: Worksheet, widths: Mapping[str, float]) -> None:
    for column, width in widths.items():
        sheet.column_dimensions[column].width = width


def _append_frame(sheet: Worksheet, frame: pd.DataFrame) -> None:
    for row in dataframe_to_rows(frame, index=False, header=True):
        sheet.append(row)


def _write_resources_sheet(
    book: ReportWorkbook, rows: Sequence[ContainerDetailRow]
) -> None:
    sheet = book.sheet(RESOURCES_SHEET)
    for column, header in enumerate(DETAIL_HEADERS, start=1):
        sheet.cell(row=HEADER_ROW, column=column, value=header)

    row_number = FIRST_DATA_ROW
    for row in rows:
        for column, value in enumerate(row, start=1):
            sheet.cell(row=row_number, column=column, value=value)
        for column in MEMORY_COLUMNS:
            book.apply_style(sheet, f"{column}{row_number}", NUMBER_STYLE)
        for column, field_name in EFFICIENCY_COLUMNS.items():
            text = getattr(row, field_name)
            if text:
                fill = efficiency_fill(_percent_value(text))
                book.apply_style(sheet, f"{column}{row_number}", StyleSpec(fill=fill))
        row_number += 1

    last_row = max(row_number - 1, FIRST_DATA_ROW)
    for column, scale in SUBTOTAL_COLUMNS.items():
        sheet[f"{column}1"] = (
            f"=SUBTOTAL(109,{column}{FIRST_DATA_ROW}:{column}{last_row}){scale}"
        )

    last_column = get_column_letter(len(DETAIL_HEADERS))
    sheet.auto_filter.ref = f"A{HEADER_ROW}:{last_column}{last_row}"
    sheet.freeze_panes = f"A{FIRST_DATA_ROW}"
    _set_column_widths(sheet, RESOURCES_COLUMN_WIDTHS)


def _write_namespaces_sheet(book: ReportWorkbook, report: ResourceReport) -> None:
    sheet = book.sheet(NAMESPACES_SHEET)
    _append_frame(sheet, namespace_frame(report.aggregation))
    for row_number in range(2, sheet.max_row + 1):
        for column in ("D", "E"):
            book.apply_style(sheet, f"{column}{row_number}", NUMBER_STYLE)

    sheet.append(cluster_total_row(report.aggregation))
    total_row = sheet.max_row
    for column in ("A", "B", "C"):
        book.apply_style(sheet, f"{column}{total_row}", BOLD_STYLE)
    for column in ("D", "E"):
        book.apply_style(sheet, f"{column}{total_row}", BOLD_NUMBER_STYLE)
    _set_column_widths(sheet, NAMESPACE_COLUMN_WIDTHS)


def _write_nodes_sheet(book: ReportWorkbook, report: ResourceReport) -> None:
    sheet = book.sheet(NODES_SHEET)
    _append_frame(sheet, node_frame(report.aggregation))
    for row_number in range(2, sheet.max_row + 1):
        for column in ("E", "F"):
            book.apply_style(sheet, f"{column}{row_number}", NUMBER_STYLE)
    _set_column_widths(sheet, NODE_COLUMN_WIDTHS)


def chart_size_px(namespace_count: int) -> tuple[int, int]:
    """Return (width, height) in pixels covering both namespace charts."""
    width = int(CHART_BASE_WIDTH_PX * CHART_WIDTH_SCALE)
    height = (
        CHART_BASE_HEIGHT_PX + namespace_count * CHART_ROW_HEIGHT_PX
    ) * CHART_HEIGHT_SCALE
    return width, min(height, CHART_MAX_HEIGHT_PX)


def _namespace_bar_chart(
    source: Worksheet,
    *,
    title: str,
    first_column: int,
    last_row: int,
    width_px: int,
    height_px: int,
) -> BarChart:
    chart = BarChart()
    chart.type = "bar"
    chart.grouping = "stacked"
    chart.overlap = 100
    chart.title = title
    chart.legend.position = "t"
    chart.width = width_px / PX_PER_CM
    chart.height = height_px / PX_PER_CM
    values = Reference(
        source,
        min_col=first_column,
        max_col=first_column + 1,
        min_row=1,
        max_row=last_row,
    )
    categories = Reference(source, min_col=1, min_row=2, max_row=last_row)
    chart.add_data(values, titles_from_data=True)
    chart.set_categories(categories)
    return chart


def _write_chart_sheet(book: ReportWorkbook, report: ResourceReport) -> None:
    sheet = book.sheet(CHART_SHEET)
    namespace_count = len(report.aggregation.namespace_totals)
    if namespace_count == 0:
        logger.warning("No namespace data available for chart creation")
        sheet["A1"] = "No namespace data available for chart creation"
        return

    source = book.workbook[NAMESPACES_SHEET]
    last_row = namespace_count + 1
    width, height = chart_size_px(namespace_count)
    chart_height = height // 2

    cpu_chart = _namespace_bar_chart(
        source,
        title="CPU Resources by Namespace (cores)",
        first_column=2,
        last_row=last_row,
        width_px=width,
        height_px=chart_height,
    )
    sheet.add_chart(cpu_chart, "A1")

    memory_chart = _namespace_bar_chart(
        source,
        title="Memory Resources by Namespace (Mi)",
        first_column=4,
        last_row=last_row,
        width_px=width,
        height_px=chart_height,
    )
    sheet.add_chart(memory_chart, f"A{chart_height // ROW_HEIGHT_PX + 5}")
    logger.info(
        "Created chart sheet with %d namespaces (size: %dx%d)",
        namespace_count,
        width,
        height,
    )


def _write_section(
    book: ReportWorkbook,
    sheet: Worksheet,
    row_number: int,
    title: str,
    rows: Iterable[Sequence[object]],
) -> int:
    sheet.cell(row=row_number, column=1, value=title)
    book.apply_style(sheet, f"A{row_number}", SECTION_STYLE)
    row_number += 2
    for values in rows:
        for column, value in enumerate(values, start=1):
            sheet.cell(row=row_number, column=column, value=value)
        row_number += 1
    return row_number + 2


def _write_insights_sheet(book: ReportWorkbook, report: ResourceReport) -> None:
    sheet = book.sheet(INSIGHTS_SHEET)
    sheet["A1"] = "KUBERNETES RESOURCE INSIGHTS"
    book.apply_style(sheet, "A1", TITLE_STYLE)

    row_number = _write_section(
        book,
        sheet,
        4,
        "RESOURCE EFFICIENCY ANALYSIS",
        efficiency_insights(report).itertuples(index=False, name=None),
    )
    row_number = _write_section(
        book,
        sheet,
        row_number,
        "NODE DISTRIBUTION ANALYSIS",
        node_insights(report).itertuples(index=False, name=None),
    )
    _write_section(
        book,
        sheet,
        row_number,
        "OPTIMIZATION RECOMMENDATIONS",
        (("•", recommendation) for recommendation in report.recommendations),
    )
    _set_column_widths(sheet, INSIGHT_COLUMN_WIDTHS)


def build_workbook(report: ResourceReport) -> ReportWorkbook:
    """Build all report sheets in memory."""
    book = ReportWorkbook()
    _write_resources_sheet(book, report.aggregation.rows)
    _write_namespaces_sheet(book, report)
    _write_nodes_sheet(book, report)
    _write_chart_sheet(book, report)
    _write_insights_sheet(book, report)
    book.workbook.active = 0
    return book


def write_resource_workbook(report: ResourceReport, path: Path) -> Path:
    """Build and save the report workbook, returning the written path."""
    book = build_workbook(report)
    book.save(path)
    logger.info("Excel file created: %s", path)
    return path
