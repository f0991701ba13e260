"""Error types for the schema export engine."""

from typing import Optional, Dict, Any, List


class ExportError(Exception):
    """Base exception for export errors.

    Every export error is caused by the caller's input, so callers should
    surface it as a client error.
    """

    status_code = 400

    def __init__(self, message: str, code: str = "EXPORT_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for API responses."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class UnsupportedFormatError(ExportError):
    """Requested export format is not one of the recognized identifiers."""

    def __init__(self, format: str):
        super().__init__(
            f"Unsupported export format: {format}",
            code="UNSUPPORTED_FORMAT",
            details={"format": format},
        )
        self.format = format


class ValidationError(ExportError):
    """Structural problem in the input schema."""

    def __init__(
        self,
        kind: str,
        detail: str,
        table: Optional[str] = None,
        column: Optional[str] = None,
    ):
        details: Dict[str, Any] = {"kind": kind}
        if table is not None:
            details["table"] = table
        if column is not None:
            details["column"] = column
        super().__init__(detail, code="VALIDATION_ERROR", details=details)
        self.kind = kind
        self.detail = detail
        self.table = table
        self.column = column


class CycleError(ExportError):
    """Foreign keys form a cycle spanning two or more tables."""

    def __init__(self, tables: List[str]):
        super().__init__(
            "Foreign key cycle between tables: " + " -> ".join(tables + tables[:1]),
            code="CYCLE_ERROR",
            details={"tables": list(tables)},
        )
        self.tables = list(tables)


class UnknownTypeError(ExportError):
    """Column type has no mapping in the selected dialect."""

    def __init__(self, token: str, table: Optional[str] = None, column: Optional[str] = None):
        location = ""
        if table is not None and column is not None:
            location = f" (column {table}.{column})"
        super().__init__(
            f"Unknown column type '{token}'{location}",
            code="UNKNOWN_TYPE",
            details={"token": token, "table": table, "column": column},
        )
        self.token = token
        self.table = table
        self.column = column

    def for_column(self, table: str, column: str) -> "UnknownTypeError":
        """Return a copy of this error located at the given column."""
        return UnknownTypeError(self.token, table=table, column=column)


class SchemaLoadError(ExportError):
    """A schema document could not be read or parsed."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="SCHEMA_LOAD_ERROR", details=details)
