"""Export entry point: format lookup and the validate, order, emit pipeline."""

from dataclasses import dataclass
from typing import Dict, Optional, Type, Union

from ..errors import UnsupportedFormatError
from ..models import ExportFormat, ExportResult, DEFAULT_FORMAT
from ..schema.models import SchemaData
from ..schema.ordering import order_tables
from ..schema.type_mappers import TypeMapper, PostgresTypeMapper, MySQLTypeMapper, MongoTypeMapper
from ..schema.validator import validate_schema
from .base import Emitter
from .mongo import MongoEmitter
from .mysql import MySQLEmitter
from .postgres import PostgresEmitter


@dataclass(frozen=True)
class Dialect:
    """Type mapper and emitter pair for one export format."""
    type_mapper: Type[TypeMapper]
    emitter: Type[Emitter]
    # Whether names differing only in case are distinct
    case_sensitive_names: bool = True
    # Whether auto-increment columns must be a primary key or unique
    auto_increment_needs_key: bool = False


DIALECTS: Dict[ExportFormat, Dialect] = {
    ExportFormat.POSTGRES: Dialect(PostgresTypeMapper, PostgresEmitter),
    ExportFormat.MYSQL: Dialect(
        MySQLTypeMapper,
        MySQLEmitter,
        case_sensitive_names=False,
        auto_increment_needs_key=True,
    ),
    ExportFormat.MONGO: Dialect(MongoTypeMapper, MongoEmitter),
}


def resolve_format(format: Union[str, ExportFormat, None]) -> ExportFormat:
    """Look up a format identifier.

    Identifiers are case-sensitive. None or an empty string selects the
    default format.

    Raises:
        UnsupportedFormatError: If the identifier is not recognized
    """
    if isinstance(format, ExportFormat):
        return format
    if not format:
        return DEFAULT_FORMAT
    try:
        return ExportFormat(format)
    except ValueError:
        raise UnsupportedFormatError(format) from None


def export(schema: SchemaData, format: Union[str, ExportFormat, None] = None) -> str:
    """Generate the definition script for a schema.

    Args:
        schema: Schema to export; it is not modified
        format: Format identifier ('postgres', 'mysql' or 'mongo');
            defaults to 'postgres'

    Returns:
        The full definition script

    Raises:
        UnsupportedFormatError: Unknown format identifier
        ValidationError: Structural problem in the schema
        CycleError: Foreign keys form a cycle across tables
        UnknownTypeError: A column type has no mapping in the dialect
    """
    export_format = resolve_format(format)
    dialect = DIALECTS[export_format]

    validate_schema(
        schema,
        case_sensitive=dialect.case_sensitive_names,
        auto_increment_needs_key=dialect.auto_increment_needs_key,
    )
    tables = order_tables(schema.tables, case_sensitive=dialect.case_sensitive_names)

    return dialect.emitter().emit(tables, dialect.type_mapper())


def export_result(schema: SchemaData, format: Optional[str] = None) -> ExportResult:
    """Export a schema and wrap the script with its format."""
    export_format = resolve_format(format)
    return ExportResult(sql=export(schema, export_format), format=export_format)
