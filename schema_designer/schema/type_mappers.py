"""Dialect-specific type mapping strategies."""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Set, Tuple

from ..errors import UnknownTypeError
from .models import Column
from .quoting import (
    POSTGRES_MAX_IDENTIFIER_BYTES,
    quote_mysql_literal,
    quote_postgres_identifier,
    unique_identifier,
)
from .types import TypeSpec, parse_type_token


class TypeMapper(ABC):
    """Abstract base class for mapping abstract column types to a dialect.

    Subclasses provide a static map from abstract base names to concrete
    type names, the concrete names that accept parameters, and the
    dialect's enumeration policy.
    """

    TYPE_MAP: Dict[str, str] = {}
    # Concrete types that accept a parameter list, e.g. VARCHAR(255)
    PARAMETERIZED: Set[str] = set()
    # Parameters supplied when a parameterized type is given none
    DEFAULT_PARAMS: Dict[str, str] = {}

    @property
    @abstractmethod
    def dialect(self) -> str:
        """Return the dialect name (e.g., 'postgres', 'mysql')."""
        pass

    def parse(self, column: Column, table_name: str) -> TypeSpec:
        """Parse a column's type token, locating errors at the column."""
        try:
            return parse_type_token(column.type)
        except UnknownTypeError as e:
            raise e.for_column(table_name, column.name)

    def map_type(self, column: Column, table_name: str) -> str:
        """Convert a column's abstract type to the dialect's type syntax.

        Args:
            column: Column to map
            table_name: Name of the owning table

        Returns:
            Concrete type syntax

        Raises:
            UnknownTypeError: If the type has no mapping in this dialect
        """
        spec = self.parse(column, table_name)
        if spec.is_enum:
            return self.map_enum(spec, column, table_name)
        if column.auto_increment or spec.is_serial:
            return self.map_auto_increment(spec, column, table_name)
        return self.map_base(spec, column, table_name)

    def map_base(self, spec: TypeSpec, column: Column, table_name: str) -> str:
        concrete = self.TYPE_MAP.get(spec.base)
        if concrete is None:
            raise UnknownTypeError(spec.token, table=table_name, column=column.name)
        return self.render(concrete, spec.params)

    def render(self, concrete: str, params: Optional[str]) -> str:
        """Attach parameters to a concrete type that accepts them."""
        if concrete not in self.PARAMETERIZED:
            return concrete
        if params:
            return f"{concrete}({params})"
        if concrete in self.DEFAULT_PARAMS:
            return f"{concrete}({self.DEFAULT_PARAMS[concrete]})"
        return concrete

    def map_auto_increment(self, spec: TypeSpec, column: Column, table_name: str) -> str:
        """Map an auto-increment column. Defaults to the plain mapping."""
        return self.map_base(spec, column, table_name)

    def auto_increment_clause(self, column: Column) -> Optional[str]:
        """Return a clause the emitter appends for auto-increment columns."""
        return None

    @abstractmethod
    def map_enum(self, spec: TypeSpec, column: Column, table_name: str) -> str:
        """Map an enum or set column."""
        pass


class PostgresTypeMapper(TypeMapper):
    """Type mapper for PostgreSQL.

    Enumerations become native enumerated types named
    ``<table>_<column>_enum``; the emitter declares them before the table.
    Auto-increment integers become serial types.
    """

    TYPE_MAP = {
        "int": "INTEGER",
        "integer": "INTEGER",
        "mediumint": "INTEGER",
        "tinyint": "SMALLINT",
        "smallint": "SMALLINT",
        "bigint": "BIGINT",
        "serial": "SERIAL",
        "smallserial": "SMALLSERIAL",
        "bigserial": "BIGSERIAL",
        "float": "REAL",
        "real": "REAL",
        "double": "DOUBLE PRECISION",
        "double precision": "DOUBLE PRECISION",
        "decimal": "DECIMAL",
        "numeric": "NUMERIC",
        "date": "DATE",
        "datetime": "TIMESTAMP",
        "timestamp": "TIMESTAMP",
        "timestamptz": "TIMESTAMPTZ",
        "time": "TIME",
        "year": "SMALLINT",
        "interval": "INTERVAL",
        "char": "CHAR",
        "varchar": "VARCHAR",
        "text": "TEXT",
        "tinytext": "TEXT",
        "mediumtext": "TEXT",
        "longtext": "TEXT",
        "binary": "BYTEA",
        "varbinary": "BYTEA",
        "bytea": "BYTEA",
        "blob": "BYTEA",
        "tinyblob": "BYTEA",
        "mediumblob": "BYTEA",
        "longblob": "BYTEA",
        "boolean": "BOOLEAN",
        "bool": "BOOLEAN",
        "json": "JSON",
        "jsonb": "JSONB",
        "uuid": "UUID",
    }
    PARAMETERIZED = {
        "VARCHAR", "CHAR", "DECIMAL", "NUMERIC",
        "TIMESTAMP", "TIMESTAMPTZ", "TIME", "INTERVAL",
    }
    SERIAL_TYPES = {
        "SMALLINT": "SMALLSERIAL",
        "INTEGER": "SERIAL",
        "BIGINT": "BIGSERIAL",
    }

    def __init__(self):
        self._enum_type_names: Dict[Tuple[str, str], str] = {}

    @property
    def dialect(self) -> str:
        return "postgres"

    def map_auto_increment(self, spec: TypeSpec, column: Column, table_name: str) -> str:
        concrete = self.map_base(spec, column, table_name)
        return self.SERIAL_TYPES.get(concrete, concrete)

    def map_enum(self, spec: TypeSpec, column: Column, table_name: str) -> str:
        if spec.base == "set":
            # No native set type
            raise UnknownTypeError(spec.token, table=table_name, column=column.name)
        return quote_postgres_identifier(self.enum_type_name(table_name, column.name))

    def enum_type_name(self, table_name: str, column_name: str) -> str:
        """Name of the enumerated type for a column, unique within one mapper.

        ``order.status_kind`` and ``order_status.kind`` would both produce
        ``order_status_kind_enum``; the later one gets a numeric suffix.
        Names are cut to PostgreSQL's identifier length.
        """
        key = (table_name, column_name)
        if key not in self._enum_type_names:
            taken = set(self._enum_type_names.values())
            self._enum_type_names[key] = unique_identifier(
                f"{table_name}_{column_name}_enum", taken, POSTGRES_MAX_IDENTIFIER_BYTES
            )
        return self._enum_type_names[key]


class MySQLTypeMapper(TypeMapper):
    """Type mapper for MySQL.

    Enumerations use the native ENUM and SET column types. Auto-increment
    columns keep their integer type and get an AUTO_INCREMENT clause.
    """

    TYPE_MAP = {
        "int": "INT",
        "integer": "INT",
        "tinyint": "TINYINT",
        "smallint": "SMALLINT",
        "mediumint": "MEDIUMINT",
        "bigint": "BIGINT",
        "serial": "INT",
        "smallserial": "SMALLINT",
        "bigserial": "BIGINT",
        "float": "FLOAT",
        "real": "FLOAT",
        "double": "DOUBLE",
        "double precision": "DOUBLE",
        "decimal": "DECIMAL",
        "numeric": "DECIMAL",
        "date": "DATE",
        "datetime": "DATETIME",
        "timestamp": "TIMESTAMP",
        "timestamptz": "TIMESTAMP",
        "time": "TIME",
        "year": "YEAR",
        "char": "CHAR",
        "varchar": "VARCHAR",
        "text": "TEXT",
        "tinytext": "TINYTEXT",
        "mediumtext": "MEDIUMTEXT",
        "longtext": "LONGTEXT",
        "binary": "BINARY",
        "varbinary": "VARBINARY",
        "bytea": "BLOB",
        "blob": "BLOB",
        "tinyblob": "TINYBLOB",
        "mediumblob": "MEDIUMBLOB",
        "longblob": "LONGBLOB",
        "boolean": "BOOLEAN",
        "bool": "BOOLEAN",
        "json": "JSON",
        "jsonb": "JSON",
        "uuid": "CHAR(36)",
    }
    PARAMETERIZED = {
        "INT", "TINYINT", "SMALLINT", "MEDIUMINT", "BIGINT",
        "FLOAT", "DOUBLE", "DECIMAL",
        "DATETIME", "TIMESTAMP", "TIME",
        "CHAR", "VARCHAR", "BINARY", "VARBINARY", "BLOB", "TEXT",
    }
    # MySQL rejects VARCHAR and VARBINARY without a length
    DEFAULT_PARAMS = {
        "VARCHAR": "255",
        "VARBINARY": "255",
    }

    @property
    def dialect(self) -> str:
        return "mysql"

    def map_enum(self, spec: TypeSpec, column: Column, table_name: str) -> str:
        values = ", ".join(quote_mysql_literal(v) for v in column.enum_values or [])
        return f"{spec.base.upper()}({values})"

    def auto_increment_clause(self, column: Column) -> Optional[str]:
        if column.auto_increment:
            return "AUTO_INCREMENT"
        spec = parse_type_token(column.type)
        return "AUTO_INCREMENT" if spec.is_serial else None


class MongoTypeMapper(TypeMapper):
    """Type mapper for MongoDB $jsonSchema validators (BSON type aliases)."""

    TYPE_MAP = {
        "int": "int",
        "integer": "int",
        "tinyint": "int",
        "smallint": "int",
        "mediumint": "int",
        "bigint": "long",
        "serial": "int",
        "smallserial": "int",
        "bigserial": "long",
        "float": "double",
        "real": "double",
        "double": "double",
        "double precision": "double",
        "decimal": "decimal",
        "numeric": "decimal",
        "date": "date",
        "datetime": "date",
        "timestamp": "date",
        "timestamptz": "date",
        "time": "string",
        "year": "int",
        "interval": "string",
        "char": "string",
        "varchar": "string",
        "text": "string",
        "tinytext": "string",
        "mediumtext": "string",
        "longtext": "string",
        "uuid": "string",
        "binary": "binData",
        "varbinary": "binData",
        "bytea": "binData",
        "blob": "binData",
        "tinyblob": "binData",
        "mediumblob": "binData",
        "longblob": "binData",
        "boolean": "bool",
        "bool": "bool",
        "json": "object",
        "jsonb": "object",
    }

    @property
    def dialect(self) -> str:
        return "mongo"

    def map_enum(self, spec: TypeSpec, column: Column, table_name: str) -> str:
        return "array" if spec.base == "set" else "string"
