"""Render a resource report to the terminal using rich."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
from pandas.api.types import is_numeric_dtype
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from podreport.application.report_frames import (
    efficiency_insights,
    namespace_frame,
    node_frame,
    node_insights,
)
from podreport.application.resource_report_service import ResourceReport

_MAX_PREVIEW_ROWS = 20


def _cell(value: object) -> str:
    if isinstance(value, float):
        return f"{value:.1f}"
    return str(value)


def _build_table(title: str, frame: pd.DataFrame) -> Table:
    table = Table(
        title=title,
        show_lines=False,
        expand=True,
        box=box.SIMPLE_HEAVY,
    )
    for column in frame.columns:
        if is_numeric_dtype(frame[column]):
            table.add_column(column, overflow="fold", no_wrap=False, justify="right")
        else:
            table.add_column(column, overflow="fold", no_wrap=False, justify="left")
    return table


def _render_frame(console: Console, title: str, frame: pd.DataFrame) -> None:
    if frame.empty:
        console.print(f"[yellow]{title}: no data[/yellow]")
        return

    table = _build_table(title, frame)
    for row in frame.head(_MAX_PREVIEW_ROWS).itertuples(index=False, name=None):
        table.add_row(*(_cell(value) for value in row))
    console.print(table)
    if len(frame) > _MAX_PREVIEW_ROWS:
        console.print(
            f"[dim]Showing first {_MAX_PREVIEW_ROWS} of {len(frame)} rows.[/dim]"
        )


def render_report_summary(
    report: ResourceReport,
    *,
    title: str = "Pod Resource Report",
    output_path: Path | None = None,
    console: Console | None = None,
) -> None:
    """Render namespace/node totals, insights and recommendations."""
    console = console or Console()
    console.print(f"[bold cyan]{title}[/bold cyan]")
    aggregation = report.aggregation
    console.print(
        f"[dim]{aggregation.pods_included} of {aggregation.pods_seen} pods, "
        f"{aggregation.container_count} containers[/dim]"
    )

    _render_frame(console, "Namespaces", namespace_frame(aggregation))
    _render_frame(console, "Nodes", node_frame(aggregation))
    _render_frame(console, "Resource Efficiency", efficiency_insights(report))
    _render_frame(console, "Node Distribution", node_insights(report))

    console.print(
        Panel(
            "\n".join(f"• {item}" for item in report.recommendations),
            title="Recommendations",
            border_style="green",
        )
    )
    if report.warnings:
        console.print(
            Panel(
                "\n".join(f"- {item}" for item in report.warnings),
                title="Warnings",
                border_style="yellow",
            )
        )
    if output_path is not None:
        console.print(f"[dim]Generated file: {output_path}[/dim]")
