"""Database operations for export run logging."""

import sqlite3
import logging
from pathlib import Path
from typing import Optional, List, Dict, Any
from datetime import datetime, timedelta

logger = logging.getLogger(__name__)


# SQL schema for export run logging
SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS export_runs (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    run_id TEXT UNIQUE NOT NULL,
    timestamp DATETIME NOT NULL,
    command TEXT NOT NULL,
    format TEXT,
    source_path TEXT,
    schema_name TEXT,
    status TEXT DEFAULT 'started',  -- 'started', 'success', 'error'
    duration_ms INTEGER,

    -- Input size
    tables_count INTEGER,
    columns_count INTEGER,
    foreign_keys_count INTEGER,

    -- Output
    output_bytes INTEGER,
    output_path TEXT,

    -- Error information
    error_code TEXT,
    error_message TEXT,
    error_type TEXT,

    -- Environment info
    python_version TEXT,
    package_version TEXT
);

CREATE INDEX IF NOT EXISTS idx_export_runs_timestamp ON export_runs(timestamp);
CREATE INDEX IF NOT EXISTS idx_export_runs_status ON export_runs(status);
CREATE INDEX IF NOT EXISTS idx_export_runs_format ON export_runs(format);
"""


def get_default_run_db_path() -> str:
    """Get the default database path (~/.schema-designer/export_runs.db)."""
    home = Path.home()
    app_dir = home / ".schema-designer"
    app_dir.mkdir(exist_ok=True)
    return str(app_dir / "export_runs.db")


class ExportRunDatabase:
    """SQLite database for export run logging."""

    def __init__(self, db_path: Optional[str] = None):
        """Initialize database connection.

        Args:
            db_path: Path to SQLite database file. If None, uses default.
        """
        self.db_path = db_path or get_default_run_db_path()
        self._connection: Optional[sqlite3.Connection] = None
        self._initialized = False

    def _get_connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = sqlite3.connect(
                self.db_path,
                check_same_thread=False,
                isolation_level=None,  # Auto-commit mode
            )
            self._connection.row_factory = sqlite3.Row
        return self._connection

    def initialize(self) -> None:
        """Initialize database schema."""
        if self._initialized:
            return

        try:
            conn = self._get_connection()
            conn.executescript(SCHEMA_SQL)
            self._initialized = True
            logger.debug("Export run database initialized at %s", self.db_path)
        except Exception as e:
            logger.error("Failed to initialize export run database: %s", e)
            raise

    def close(self) -> None:
        """Close database connection."""
        if self._connection:
            self._connection.close()
            self._connection = None
            self._initialized = False

    def insert_run(
        self,
        run_id: str,
        command: str,
        format: Optional[str] = None,
        source_path: Optional[str] = None,
        python_version: Optional[str] = None,
        package_version: Optional[str] = None,
    ) -> int:
        """Insert a new export run entry.

        Args:
            run_id: Unique identifier for this run
            command: CLI command (e.g., 'export run')
            format: Requested export format
            source_path: Schema file path
            python_version: Python version
            package_version: schema-designer version

        Returns:
            The row ID of the inserted entry
        """
        self.initialize()
        conn = self._get_connection()

        cursor = conn.execute(
            """
            INSERT INTO export_runs (
                run_id, timestamp, command, format, source_path, status,
                python_version, package_version
            )
            VALUES (?, ?, ?, ?, ?, 'started', ?, ?)
            """,
            (
                run_id, datetime.utcnow().isoformat(), command, format, source_path,
                python_version, package_version,
            ),
        )
        return cursor.lastrowid

    def update_input(
        self,
        run_id: str,
        schema_name: Optional[str],
        tables_count: int,
        columns_count: int,
        foreign_keys_count: int,
    ) -> None:
        """Update run with the size of the loaded schema."""
        conn = self._get_connection()
        conn.execute(
            """
            UPDATE export_runs
            SET schema_name = ?, tables_count = ?, columns_count = ?, foreign_keys_count = ?
            WHERE run_id = ?
            """,
            (schema_name, tables_count, columns_count, foreign_keys_count, run_id),
        )

    def update_success(
        self,
        run_id: str,
        duration_ms: int,
        output_bytes: Optional[int] = None,
        output_path: Optional[str] = None,
    ) -> None:
        """Mark run as successful.

        Args:
            run_id: Run identifier
            duration_ms: Total duration in milliseconds
            output_bytes: Size of the generated script
            output_path: File the script was written to, if any
        """
        conn = self._get_connection()
        conn.execute(
            """
            UPDATE export_runs
            SET status = 'success', duration_ms = ?, output_bytes = ?, output_path = ?
            WHERE run_id = ?
            """,
            (duration_ms, output_bytes, output_path, run_id),
        )

    def update_error(
        self,
        run_id: str,
        error_message: str,
        error_code: Optional[str] = None,
        error_type: Optional[str] = None,
        duration_ms: Optional[int] = None,
    ) -> None:
        """Mark run as failed with error details."""
        conn = self._get_connection()
        conn.execute(
            """
            UPDATE export_runs
            SET status = 'error', error_message = ?, error_code = ?,
                error_type = ?, duration_ms = ?
            WHERE run_id = ?
            """,
            (error_message, error_code, error_type, duration_ms, run_id),
        )

    def query_runs(
        self,
        status: Optional[str] = None,
        format: Optional[str] = None,
        since_hours: int = 24,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Dict[str, Any]]:
        """Query run entries with optional filters.

        Args:
            status: Filter by status
            format: Filter by export format
            since_hours: Look back N hours (default 24)
            limit: Maximum number of results
            offset: Offset for pagination

        Returns:
            List of run entries as dictionaries, newest first
        """
        self.initialize()
        conn = self._get_connection()

        conditions = []
        params: List[Any] = []

        # Time filter
        since_time = datetime.utcnow() - timedelta(hours=since_hours)
        conditions.append("timestamp >= ?")
        params.append(since_time.isoformat())

        if status:
            conditions.append("status = ?")
            params.append(status)

        if format:
            conditions.append("format = ?")
            params.append(format)

        where_clause = " AND ".join(conditions)
        params.extend([limit, offset])

        query = f"""
            SELECT * FROM export_runs
            WHERE {where_clause}
            ORDER BY timestamp DESC, id DESC
            LIMIT ? OFFSET ?
        """

        cursor = conn.execute(query, params)
        return [dict(row) for row in cursor.fetchall()]

    def get_run_by_id(self, run_id: str) -> Optional[Dict[str, Any]]:
        """Get a specific run by ID."""
        self.initialize()
        conn = self._get_connection()

        cursor = conn.execute(
            "SELECT * FROM export_runs WHERE run_id = ?",
            (run_id,),
        )
        row = cursor.fetchone()

        return dict(row) if row else None

    def get_stats(self, since_hours: int = 24) -> Dict[str, Any]:
        """Get statistics about export runs.

        Args:
            since_hours: Look back N hours

        Returns:
            Dict with statistics
        """
        self.initialize()
        conn = self._get_connection()

        since_time = datetime.utcnow() - timedelta(hours=since_hours)

        cursor = conn.execute(
            """
            SELECT
                COUNT(*) as total,
                SUM(CASE WHEN status = 'success' THEN 1 ELSE 0 END) as success_count,
                SUM(CASE WHEN status = 'error' THEN 1 ELSE 0 END) as error_count,
                AVG(duration_ms) as avg_duration_ms,
                SUM(tables_count) as total_tables
            FROM export_runs
            WHERE timestamp >= ?
            """,
            (since_time.isoformat(),),
        )
        row = cursor.fetchone()

        # Counts by format
        cursor = conn.execute(
            """
            SELECT format, COUNT(*) as count,
                   SUM(CASE WHEN status = 'success' THEN 1 ELSE 0 END) as success,
                   SUM(CASE WHEN status = 'error' THEN 1 ELSE 0 END) as errors
            FROM export_runs
            WHERE timestamp >= ? AND format IS NOT NULL
            GROUP BY format
            ORDER BY count DESC
            """,
            (since_time.isoformat(),),
        )
        format_stats = [dict(r) for r in cursor.fetchall()]

        # Recent errors
        cursor = conn.execute(
            """
            SELECT run_id, timestamp, command, format, error_code, error_message
            FROM export_runs
            WHERE timestamp >= ? AND status = 'error'
            ORDER BY timestamp DESC
            LIMIT 5
            """,
            (since_time.isoformat(),),
        )
        recent_errors = [dict(r) for r in cursor.fetchall()]

        return {
            "total_runs": row["total"] or 0,
            "success_count": row["success_count"] or 0,
            "error_count": row["error_count"] or 0,
            "avg_duration_ms": round(row["avg_duration_ms"] or 0, 2),
            "total_tables_exported": row["total_tables"] or 0,
            "since_hours": since_hours,
            "by_format": format_stats,
            "recent_errors": recent_errors,
        }

    def cleanup_old_runs(self, retention_days: int = 30) -> int:
        """Delete runs older than retention period.

        Returns:
            Number of deleted rows
        """
        self.initialize()
        conn = self._get_connection()

        cutoff_time = datetime.utcnow() - timedelta(days=retention_days)
        cursor = conn.execute(
            "DELETE FROM export_runs WHERE timestamp < ?",
            (cutoff_time.isoformat(),),
        )

        deleted = cursor.rowcount
        if deleted > 0:
            logger.info("Cleaned up %d old export run entries", deleted)

        return deleted

    def __enter__(self):
        """Context manager entry."""
        self.initialize()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
