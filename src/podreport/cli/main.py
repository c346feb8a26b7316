"""CLI entrypoint for pod resource reporting."""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as package_version

import typer
from rich.console import Console

from podreport.application import (
    execute_resource_report,
    execute_resource_summary,
    render_report_summary,
)
from podreport.config import ReportConfig, load_config, setup_logging

app = typer.Typer(
    name="podreport",
    help="Kubernetes pod resource request/limit reporting",
    no_args_is_help=True,
    add_completion=False,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()

NAMESPACE_HELP = "Kubernetes namespace (default: all namespaces, env K8S_NAMESPACE)."
KUBECONFIG_HELP = "Path to kubeconfig file (default: kubectl's own resolution)."
TIMEOUT_HELP = "Seconds allowed for listing pods (default: 30)."
VERBOSE_HELP = "Enable verbose logging."


def _resolve_version() -> str:
    """Return installed package version or local fallback."""
    try:
        return package_version("pod-resource-report")
    except PackageNotFoundError:
        return "0.1.0"


@app.callback()
def callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
    ),
) -> None:
    """Handle global CLI options."""
    if version:
        console.print(f"podreport {_resolve_version()}")
        raise typer.Exit(code=0)
    if ctx.invoked_subcommand is None:
        raise typer.Exit(code=0)


def _handle_error(exc: Exception) -> None:
    """Convert domain exceptions to CLI exit codes."""
    if isinstance(exc, ValueError):
        console.print(f"[red]ERROR:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    if isinstance(exc, RuntimeError):
        console.print(f"[red]ERROR:[/red] {exc}")
        raise typer.Exit(code=2) from exc
    raise exc


def _prepare(verbose: bool) -> ReportConfig:
    config = load_config()
    setup_logging(verbose=verbose, level=config.log_level)
    return config


def _resolve_timeout(timeout: float | None, config: ReportConfig) -> float:
    if timeout is None:
        return config.api_timeout_seconds
    if timeout <= 0:
        raise ValueError(f"--timeout must be positive: {timeout}")
    return timeout


@app.command("report")
def report_command(
    namespace: str | None = typer.Option(
        None, "--namespace", "-n", help=NAMESPACE_HELP
    ),
    kubeconfig: str | None = typer.Option(None, "--kubeconfig", help=KUBECONFIG_HELP),
    output: str | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output filename (default: resource_YYYY-MM-DD.xlsx).",
    ),
    timeout: float | None = typer.Option(None, "--timeout", help=TIMEOUT_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=VERBOSE_HELP),
) -> None:
    """Write the pod resource workbook.

    Sheets: Resources, Namespaces, Nodes, Chart and Insights.
    """
    try:
        config = _prepare(verbose)
        result = execute_resource_report(
            namespace=config.namespace if namespace is None else namespace,
            kubeconfig=kubeconfig or config.kubeconfig_path,
            output=output or config.output,
            timeout=_resolve_timeout(timeout, config),
        )
        render_report_summary(result.report, console=console)
        console.print(f"[green]Report:[/green] {result.output_path}")
    except (ValueError, RuntimeError) as exc:
        _handle_error(exc)


@app.command("summary")
def summary_command(
    namespace: str | None = typer.Option(
        None, "--namespace", "-n", help=NAMESPACE_HELP
    ),
    kubeconfig: str | None = typer.Option(None, "--kubeconfig", help=KUBECONFIG_HELP),
    timeout: float | None = typer.Option(None, "--timeout", help=TIMEOUT_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=VERBOSE_HELP),
) -> None:
    """Print the resource analysis without writing a workbook."""
    try:
        config = _prepare(verbose)
        report = execute_resource_summary(
            namespace=config.namespace if namespace is None else namespace,
            kubeconfig=kubeconfig or config.kubeconfig_path,
            timeout=_resolve_timeout(timeout, config),
        )
        render_report_summary(report, console=console)
    except (ValueError, RuntimeError) as exc:
        _handle_error(exc)


def main() -> None:
    """Project entrypoint for `podreport` script."""
    app()


if __name__ == "__main__":
    main()
