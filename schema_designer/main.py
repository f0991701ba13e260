"""schema-designer CLI - Main entry point."""

import logging

import typer
from rich.console import Console
from .commands import export, runs
from .config import settings

app = typer.Typer(
    name="schema-designer",
    help="Export designed database schemas as PostgreSQL, MySQL or MongoDB definition code",
    add_completion=False,
)

# Add subcommands
app.add_typer(export.app, name="export")
app.add_typer(runs.app, name="runs")

console = Console()


@app.command()
def config():
    """Show current configuration."""
    console.print("[bold]Current Configuration[/bold]")
    console.print(f"  Default format: {settings.default_format}")
    console.print(f"  Max tables: {settings.max_tables}")
    console.print(f"  Max columns per table: {settings.max_columns_per_table}")
    console.print(f"  Log level: {settings.log_level}")
    console.print(f"  Run logging: {'Enabled' if settings.run_logging_enabled else 'Disabled'}")
    console.print(f"  Run log database: {settings.run_logging_db_path or '~/.schema-designer/export_runs.db'}")
    console.print(f"  Run log retention: {settings.run_logging_retention_days} days")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """
    schema-designer - Export designed database schemas as definition code.

    Examples:

        schema-designer export run shop.json --format postgres

        schema-designer export validate shop.json

        schema-designer export formats

        schema-designer runs list --status error
    """
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


if __name__ == "__main__":
    app()
