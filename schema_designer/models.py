"""Pydantic models for export requests and results."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .schema.models import SchemaData


class ExportFormat(str, Enum):
    """Recognized export formats."""
    POSTGRES = "postgres"
    MYSQL = "mysql"
    MONGO = "mongo"

    @property
    def extension(self) -> str:
        """File extension of the generated script."""
        return "js" if self is ExportFormat.MONGO else "sql"

    @property
    def is_relational(self) -> bool:
        return self is not ExportFormat.MONGO


DEFAULT_FORMAT = ExportFormat.POSTGRES


class ExportRequest(BaseModel):
    """Request to export schema data directly, without a stored record."""
    data: SchemaData
    format: Optional[str] = None


class ExportResult(BaseModel):
    """Generated definition script and the format it was generated for."""
    sql: str
    format: ExportFormat

    class Config:
        use_enum_values = True


class SchemaRecord(BaseModel):
    """Persisted schema as stored by the designer backend."""
    id: Optional[int] = None
    user_id: Optional[int] = None
    name: str = "schema"
    data: SchemaData = Field(default_factory=SchemaData)
    is_public: bool = False
