"""Schema model module for schema-designer.

This module provides the technology-neutral schema model together with
validation, dependency ordering and per-dialect type mapping.
"""

from .models import SchemaData, Table, Column, ForeignKey, Reference
from .types import TypeSpec, parse_type_token
from .validator import SchemaValidator, validate_schema, normalize_action
from .ordering import DependencyOrderer, order_tables
from .type_mappers import TypeMapper, PostgresTypeMapper, MySQLTypeMapper, MongoTypeMapper

__all__ = [
    # Data models
    "SchemaData",
    "Table",
    "Column",
    "ForeignKey",
    "Reference",
    # Type tokens
    "TypeSpec",
    "parse_type_token",
    # Validation and ordering
    "SchemaValidator",
    "validate_schema",
    "normalize_action",
    "DependencyOrderer",
    "order_tables",
    # Type mappers
    "TypeMapper",
    "PostgresTypeMapper",
    "MySQLTypeMapper",
    "MongoTypeMapper",
]
