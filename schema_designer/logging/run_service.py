"""Export run logging service for schema-designer.

Provides a high-level interface for recording CLI export runs. Failures
to write the log never interrupt the export itself.
"""

import logging
import sys
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from schema_designer.errors import ExportError
from schema_designer.logging.run_db import ExportRunDatabase

logger = logging.getLogger(__name__)

# Global logger instance
_run_logger: Optional["ExportRunLogger"] = None


def get_run_logger() -> "ExportRunLogger":
    """Get or create the global run logger instance from settings."""
    global _run_logger
    if _run_logger is None:
        from schema_designer.config import settings

        _run_logger = ExportRunLogger(
            db_path=settings.run_logging_db_path,
            enabled=settings.run_logging_enabled,
            retention_days=settings.run_logging_retention_days,
        )
    return _run_logger


@dataclass
class RunContext:
    """Context for an export run, filled in while the run progresses."""

    run_id: str
    command: str
    format: Optional[str] = None
    source_path: Optional[str] = None
    start_time: float = field(default_factory=time.time)

    schema_name: Optional[str] = None
    tables_count: int = 0
    columns_count: int = 0
    foreign_keys_count: int = 0
    output_bytes: Optional[int] = None
    output_path: Optional[str] = None


class ExportRunLogger:
    """High-level logger for export runs.

    Example usage:
        run_logger = get_run_logger()

        with run_logger.log_run(command="export run", format="mysql") as ctx:
            name, schema = load_schema_file(path)
            ctx.tables_count = len(schema.tables)
            script = export(schema, "mysql")
            ctx.output_bytes = len(script.encode())
    """

    def __init__(self, db_path: Optional[str] = None, enabled: bool = True, retention_days: int = 30):
        """Initialize the run logger.

        Args:
            db_path: Path to the SQLite database. If None, uses default.
            enabled: Whether logging is enabled.
            retention_days: Age after which runs are purged.
        """
        self.enabled = enabled
        self._db: Optional[ExportRunDatabase] = None

        if self.enabled:
            try:
                self._db = ExportRunDatabase(db_path)
                self._db.initialize()
                self._db.cleanup_old_runs(retention_days)
            except Exception as e:
                logger.warning("Failed to initialize export run logging: %s", e)
                self.enabled = False

    @property
    def db(self) -> Optional[ExportRunDatabase]:
        """Get the database instance."""
        return self._db

    def _get_package_version(self) -> str:
        """Get the schema-designer package version."""
        try:
            from importlib.metadata import version
            return version("schema-designer")
        except Exception:
            return "unknown"

    @contextmanager
    def log_run(
        self,
        command: str,
        format: Optional[str] = None,
        source_path: Optional[str] = None,
    ):
        """Context manager for logging an export run.

        Args:
            command: CLI command (e.g., 'export run')
            format: Requested export format
            source_path: Schema file path

        Yields:
            RunContext that can be updated during the run
        """
        run_id = str(uuid.uuid4())[:8]
        ctx = RunContext(
            run_id=run_id,
            command=command,
            format=format,
            source_path=source_path,
        )

        if not self.enabled or self._db is None:
            yield ctx
            return

        try:
            self._db.insert_run(
                run_id=run_id,
                command=command,
                format=format,
                source_path=source_path,
                python_version=f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
                package_version=self._get_package_version(),
            )
        except Exception as e:
            logger.warning("Failed to log run start: %s", e)

        try:
            yield ctx
        except Exception as e:
            duration_ms = int((time.time() - ctx.start_time) * 1000)
            self._record_input(ctx)
            try:
                self._db.update_error(
                    run_id=run_id,
                    error_message=str(e),
                    error_code=e.code if isinstance(e, ExportError) else None,
                    error_type=type(e).__name__,
                    duration_ms=duration_ms,
                )
            except Exception as log_err:
                logger.warning("Failed to log run error: %s", log_err)

            logger.debug("Export run %s failed after %dms: %s", run_id, duration_ms, e)
            raise

        duration_ms = int((time.time() - ctx.start_time) * 1000)
        self._record_input(ctx)
        try:
            self._db.update_success(
                run_id,
                duration_ms,
                output_bytes=ctx.output_bytes,
                output_path=ctx.output_path,
            )
        except Exception as e:
            logger.warning("Failed to log run success: %s", e)

        logger.debug("Export run %s completed successfully in %dms", run_id, duration_ms)

    def _record_input(self, ctx: RunContext) -> None:
        if not self._db or ctx.tables_count == 0:
            return
        try:
            self._db.update_input(
                run_id=ctx.run_id,
                schema_name=ctx.schema_name,
                tables_count=ctx.tables_count,
                columns_count=ctx.columns_count,
                foreign_keys_count=ctx.foreign_keys_count,
            )
        except Exception as e:
            logger.warning("Failed to update run input: %s", e)

    def query_runs(
        self,
        status: Optional[str] = None,
        format: Optional[str] = None,
        since_hours: int = 24,
        limit: int = 100,
    ) -> List[Dict[str, Any]]:
        """Query export runs with optional filters."""
        if not self.enabled or not self._db:
            return []

        return self._db.query_runs(
            status=status,
            format=format,
            since_hours=since_hours,
            limit=limit,
        )

    def get_stats(self, since_hours: int = 24) -> Dict[str, Any]:
        """Get statistics about export runs."""
        if not self.enabled or not self._db:
            return {"error": "Logging not enabled"}

        return self._db.get_stats(since_hours=since_hours)

    def get_run(self, run_id: str) -> Optional[Dict[str, Any]]:
        """Get a specific run by ID."""
        if not self.enabled or not self._db:
            return None

        return self._db.get_run_by_id(run_id)
