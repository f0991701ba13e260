"""Export run log commands."""

import typer
from typing import Optional
from rich.console import Console
from rich.table import Table

from ..logging import get_run_logger

app = typer.Typer(help="Inspect the export run log")
console = Console()


@app.command("list")
def list_runs(
    status: Optional[str] = typer.Option(None, "--status", "-s", help="Filter by status (success, error)"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Filter by export format"),
    since_hours: int = typer.Option(24, "--since-hours", help="Look back N hours"),
    limit: int = typer.Option(20, "--limit", "-n", help="Maximum number of runs"),
):
    """List recent export runs."""
    run_logger = get_run_logger()
    if not run_logger.enabled:
        console.print("[yellow]Run logging is disabled.[/yellow]")
        return

    runs = run_logger.query_runs(status=status, format=format, since_hours=since_hours, limit=limit)
    if not runs:
        console.print("[yellow]No runs found.[/yellow]")
        return

    table = Table(title="Export runs")
    table.add_column("Run", style="cyan")
    table.add_column("Time")
    table.add_column("Format", style="magenta")
    table.add_column("Source")
    table.add_column("Tables", justify="right")
    table.add_column("Status")
    table.add_column("ms", justify="right")

    for run in runs:
        status_text = run.get("status") or ""
        style = "green" if status_text == "success" else "red" if status_text == "error" else "yellow"
        table.add_row(
            run["run_id"],
            (run.get("timestamp") or "")[:19],
            run.get("format") or "-",
            run.get("source_path") or "-",
            str(run.get("tables_count") or 0),
            f"[{style}]{status_text}[/{style}]",
            str(run.get("duration_ms") or ""),
        )

    console.print(table)


@app.command("stats")
def run_stats(
    since_hours: int = typer.Option(24, "--since-hours", help="Look back N hours"),
):
    """Show export run statistics."""
    run_logger = get_run_logger()
    if not run_logger.enabled:
        console.print("[yellow]Run logging is disabled.[/yellow]")
        return

    stats = run_logger.get_stats(since_hours=since_hours)
    console.print(f"[bold]Export runs in the last {since_hours}h[/bold]")
    console.print(f"  Total: {stats['total_runs']}")
    console.print(f"  Succeeded: {stats['success_count']}")
    console.print(f"  Failed: {stats['error_count']}")
    console.print(f"  Average duration: {stats['avg_duration_ms']}ms")
    console.print(f"  Tables exported: {stats['total_tables_exported']}")

    for row in stats["by_format"]:
        console.print(f"  {row['format']}: {row['count']} ({row['errors']} failed)")

    if stats["recent_errors"]:
        console.print("[bold]Recent errors[/bold]")
        for error in stats["recent_errors"]:
            console.print(f"  [red]{error['run_id']}[/red] {error['error_code'] or ''} {error['error_message']}")


@app.command("show")
def show_run(run_id: str = typer.Argument(..., help="Run ID")):
    """Show details of one export run."""
    run = get_run_logger().get_run(run_id)
    if run is None:
        console.print(f"[red]Run not found: {run_id}[/red]")
        raise typer.Exit(1)

    console.print(f"[bold]Run {run_id}[/bold]")
    for key, value in run.items():
        if key in ("id", "run_id") or value is None:
            continue
        console.print(f"  {key}: {value}")
