"""Loading schema documents from JSON files."""

import json
import logging
from pathlib import Path
from typing import Any, Tuple

from pydantic import ValidationError as PydanticValidationError

from .errors import SchemaLoadError
from .models import SchemaRecord
from .schema.models import SchemaData

logger = logging.getLogger(__name__)


def parse_schema_document(data: Any, default_name: str = "schema") -> Tuple[str, SchemaData]:
    """Parse a decoded JSON schema document.

    Supports two shapes:
    - Bare schema data: {"tables": [...]}
    - Stored schema record: {"name": "...", "data": {"tables": [...]}, ...}

    Args:
        data: Decoded JSON value
        default_name: Name to use when the document carries none

    Returns:
        Tuple of (schema_name, schema_data)

    Raises:
        SchemaLoadError: If the document has neither shape or fails validation
    """
    if not isinstance(data, dict):
        raise SchemaLoadError("Schema document must be a JSON object")

    try:
        if "data" in data:
            record = SchemaRecord.model_validate(data)
            name = data.get("name") or default_name
            logger.debug("Parsed schema record '%s' with %d tables", name, len(record.data.tables))
            return name, record.data
        if "tables" in data:
            schema = SchemaData.model_validate(data)
            logger.debug("Parsed schema data with %d tables", len(schema.tables))
            return default_name, schema
    except PydanticValidationError as e:
        raise SchemaLoadError(
            f"Invalid schema document: {e.error_count()} error(s)",
            details={"errors": e.errors(include_url=False, include_context=False)},
        ) from e

    raise SchemaLoadError("Schema document must contain 'tables' or 'data'")


def load_schema_file(path: str) -> Tuple[str, SchemaData]:
    """Load a schema document from a JSON file.

    The file stem is used as the schema name for bare schema data.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed
    """
    file_path = Path(path)
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise SchemaLoadError(f"Schema file not found: {path}", details={"path": path}) from None
    except json.JSONDecodeError as e:
        raise SchemaLoadError(
            f"Invalid JSON in {path}: {e.msg} (line {e.lineno}, column {e.colno})",
            details={"path": path},
        ) from e

    return parse_schema_document(data, default_name=file_path.stem)
