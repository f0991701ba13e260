"""Export commands - generate definition code from schema documents."""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from ..config import settings
from ..delivery import attachment_filename, build_payload
from ..errors import ExportError, SchemaLoadError
from ..exporters import export_result, resolve_format
from ..exporters.dispatcher import DIALECTS
from ..loader import load_schema_file
from ..logging import get_run_logger
from ..models import ExportFormat
from ..schema import SchemaData, order_tables, validate_schema

app = typer.Typer(help="Export schema documents as definition code")
console = Console()
logger = logging.getLogger(__name__)


def check_limits(schema: SchemaData) -> None:
    """Reject schemas larger than the configured limits.

    Raises:
        SchemaLoadError: If a limit is exceeded
    """
    if len(schema.tables) > settings.max_tables:
        raise SchemaLoadError(
            f"Schema has {len(schema.tables)} tables, limit is {settings.max_tables}",
            details={"tables": len(schema.tables), "limit": settings.max_tables},
        )
    for table in schema.tables:
        if len(table.columns) > settings.max_columns_per_table:
            raise SchemaLoadError(
                f"Table '{table.name}' has {len(table.columns)} columns, "
                f"limit is {settings.max_columns_per_table}",
                details={"table": table.name, "limit": settings.max_columns_per_table},
            )


def print_error(error: ExportError) -> None:
    console.print(f"[red]Error: {error.message}[/red]")
    for key, value in error.details.items():
        if key != "errors":
            console.print(f"  {key}: {value}")
    for item in error.details.get("errors", []):
        location = ".".join(str(part) for part in item.get("loc", ()))
        console.print(f"  - {location}: {item.get('msg')}")


@app.command("run")
def run_export(
    schema_file: str = typer.Argument(..., help="Schema JSON file ({\"tables\": [...]} or a stored schema record)"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Export format: postgres, mysql or mongo"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write the script to this file"),
    download: bool = typer.Option(False, "--download", help="Write the script to <name>_<format>.<ext> in the current directory"),
    as_json: bool = typer.Option(False, "--json", help="Print the {sql, format} JSON payload"),
):
    """
    Generate definition code for a schema document.

    Examples:

        schema-designer export run shop.json

        schema-designer export run shop.json --format mysql -o shop.sql

        schema-designer export run shop.json --format mongo --download
    """
    requested = format or settings.default_format
    output_path = output

    try:
        with get_run_logger().log_run(command="export run", format=requested, source_path=schema_file) as ctx:
            name, schema = load_schema_file(schema_file)
            ctx.schema_name = name
            ctx.tables_count = len(schema.tables)
            ctx.columns_count = schema.column_count()
            ctx.foreign_keys_count = schema.foreign_key_count()
            check_limits(schema)

            result = export_result(schema, requested)
            ctx.output_bytes = len(result.sql.encode("utf-8"))

            if download and not output_path:
                output_path = attachment_filename(name, result.format)
            if output_path:
                Path(output_path).write_text(result.sql, encoding="utf-8")
                ctx.output_path = output_path
            logger.info("Exported %s as %s (%d bytes)", name, result.format, ctx.output_bytes)
    except ExportError as e:
        print_error(e)
        raise typer.Exit(1)

    if as_json:
        console.print_json(json.dumps(build_payload(result)))
    elif output_path:
        console.print(f"[green]Wrote {result.format} script for '{name}' to {output_path}[/green]")
    else:
        # Plain output keeps the script pipeable
        typer.echo(result.sql, nl=False)


@app.command("validate")
def validate(
    schema_file: str = typer.Argument(..., help="Schema JSON file"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Format whose naming rules apply"),
):
    """Validate a schema document and show the table emission order."""
    try:
        export_format = resolve_format(format or settings.default_format)
        name, schema = load_schema_file(schema_file)
        check_limits(schema)
        dialect = DIALECTS[export_format]
        case_sensitive = dialect.case_sensitive_names
        validate_schema(
            schema,
            case_sensitive=case_sensitive,
            auto_increment_needs_key=dialect.auto_increment_needs_key,
        )
        ordered = order_tables(schema.tables, case_sensitive=case_sensitive)
    except ExportError as e:
        print_error(e)
        raise typer.Exit(1)

    console.print(f"[green]Schema '{name}' is valid for {export_format.value}[/green]")

    table = Table(title="Emission order")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Table", style="green")
    table.add_column("Columns", justify="right")
    table.add_column("References", style="blue")

    for position, item in enumerate(ordered, start=1):
        table.add_row(
            str(position),
            item.name,
            str(len(item.columns)),
            ", ".join(item.referenced_tables()) or "-",
        )

    console.print(table)


@app.command("formats")
def list_formats():
    """List supported export formats."""
    table = Table(title="Export formats")
    table.add_column("Format", style="cyan")
    table.add_column("Kind", style="green")
    table.add_column("Extension", style="magenta")
    table.add_column("Default")

    default = resolve_format(settings.default_format)
    for export_format in ExportFormat:
        table.add_row(
            export_format.value,
            "relational DDL" if export_format.is_relational else "document validation script",
            export_format.extension,
            "yes" if export_format is default else "",
        )

    console.print(table)


@app.command("preview")
def preview(
    schema_file: str = typer.Argument(..., help="Schema JSON file"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Export format"),
):
    """Show the generated script with syntax highlighting."""
    try:
        name, schema = load_schema_file(schema_file)
        check_limits(schema)
        result = export_result(schema, format or settings.default_format)
    except ExportError as e:
        print_error(e)
        raise typer.Exit(1)

    lexer = "javascript" if result.format == ExportFormat.MONGO.value else "sql"
    console.print(f"[bold]{name}[/bold] ({result.format})")
    console.print(Syntax(result.sql, lexer, line_numbers=True))
