"""Helpers for serving export results over HTTP.

These cover the contract between the export engine and a web layer: the
inline JSON payload, the attachment filename and the status code for a
failed export.
"""

import re
from typing import Any, Dict

from .errors import ExportError
from .models import ExportResult
from .exporters.dispatcher import resolve_format

_UNSAFE_FILENAME = re.compile(r'[\\/:*?"<>|\r\n]+')


def build_payload(result: ExportResult) -> Dict[str, str]:
    """Inline JSON payload: {"sql": ..., "format": ...}."""
    return {"sql": result.sql, "format": resolve_format(result.format).value}


def attachment_filename(schema_name: str, format: str) -> str:
    """Download filename, e.g. 'shop_postgres.sql' or 'shop_mongo.js'."""
    export_format = resolve_format(format)
    name = _UNSAFE_FILENAME.sub("_", schema_name).strip() or "schema"
    return f"{name}_{export_format.value}.{export_format.extension}"


def http_status_for(exc: BaseException) -> int:
    """400 for errors caused by the request, 500 for anything else."""
    if isinstance(exc, ExportError):
        return exc.status_code
    return 500


def error_body(exc: BaseException) -> Dict[str, Any]:
    """JSON error body for a failed export."""
    if isinstance(exc, ExportError):
        return {"error": exc.message, "code": exc.code, "details": exc.details}
    return {"error": "internal error", "code": "INTERNAL_ERROR", "details": {}}
