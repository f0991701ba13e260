"""Configuration management for schema-designer."""

import os
from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional


def _find_env_file() -> Optional[str]:
    """Find .env file in multiple locations.

    Search order:
    1. Current working directory
    2. ~/.schema-designer/.env
    3. Package directory (where this file is located)
    """
    # Current directory
    if os.path.exists(".env"):
        return ".env"

    # User config directory
    user_env = Path.home() / ".schema-designer" / ".env"
    if user_env.exists():
        return str(user_env)

    # Package directory
    package_dir = Path(__file__).parent.parent
    package_env = package_dir / ".env"
    if package_env.exists():
        return str(package_env)

    return None


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    default_format: str = Field(
        default="postgres",
        description="Export format used when none is given (postgres, mysql, mongo)"
    )

    # Input size guards applied before export
    max_tables: int = Field(
        default=500,
        description="Maximum number of tables accepted in one schema"
    )
    max_columns_per_table: int = Field(
        default=500,
        description="Maximum number of columns accepted in one table"
    )

    log_level: str = Field(
        default="WARNING",
        description="Logging level for the CLI (DEBUG, INFO, WARNING, ERROR)"
    )

    # Export run logging configuration
    run_logging_enabled: bool = Field(
        default=True,
        description="Record CLI export runs in a local SQLite database"
    )
    run_logging_db_path: Optional[str] = Field(
        default=None,
        description="Path to export runs database file (default: ~/.schema-designer/export_runs.db)"
    )
    run_logging_retention_days: int = Field(
        default=30,
        description="Number of days to retain export run entries"
    )

    class Config:
        env_prefix = "SCHEMA_DESIGNER_"
        env_file = _find_env_file()
        env_file_encoding = "utf-8"
        extra = "ignore"


# Global settings instance
settings = Settings()
