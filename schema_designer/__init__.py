"""schema-designer: export designed database schemas as definition code."""

from .errors import (
    ExportError,
    UnsupportedFormatError,
    ValidationError,
    CycleError,
    UnknownTypeError,
    SchemaLoadError,
)
from .exporters import export, export_result
from .models import ExportFormat, ExportResult, DEFAULT_FORMAT
from .schema import SchemaData, Table, Column, ForeignKey, Reference

__version__ = "0.1.0"

__all__ = [
    "export",
    "export_result",
    "ExportFormat",
    "ExportResult",
    "DEFAULT_FORMAT",
    "SchemaData",
    "Table",
    "Column",
    "ForeignKey",
    "Reference",
    "ExportError",
    "UnsupportedFormatError",
    "ValidationError",
    "CycleError",
    "UnknownTypeError",
    "SchemaLoadError",
]
