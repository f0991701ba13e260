"""Export run logging module for schema-designer.

Records CLI export runs in a local SQLite database to help with
debugging and auditing.
"""

from schema_designer.logging.run_db import ExportRunDatabase, get_default_run_db_path
from schema_designer.logging.run_service import (
    ExportRunLogger,
    RunContext,
    get_run_logger,
)

__all__ = [
    "ExportRunDatabase",
    "get_default_run_db_path",
    "ExportRunLogger",
    "RunContext",
    "get_run_logger",
]
