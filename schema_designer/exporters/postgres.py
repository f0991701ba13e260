"""PostgreSQL DDL emitter."""

from typing import List

from ..schema.models import Table
from ..schema.quoting import quote_postgres_identifier, quote_postgres_literal
from ..schema.type_mappers import TypeMapper, PostgresTypeMapper
from .base import SQLEmitter


class PostgresEmitter(SQLEmitter):
    """Generates PostgreSQL CREATE TYPE and CREATE TABLE statements.

    Each enum column gets its own enumerated type, declared right before
    the table that uses it. Storage-engine hints are ignored.
    """

    def quote_identifier(self, name: str) -> str:
        return quote_postgres_identifier(name)

    def quote_literal(self, value: str) -> str:
        return quote_postgres_literal(value)

    def table_statements(self, table: Table, type_mapper: TypeMapper) -> List[str]:
        statements = []
        if isinstance(type_mapper, PostgresTypeMapper):
            for column in table.columns:
                if type_mapper.parse(column, table.name).base != "enum":
                    continue
                type_name = type_mapper.enum_type_name(table.name, column.name)
                values = ", ".join(self.quote_literal(v) for v in column.enum_values or [])
                statements.append(
                    f"CREATE TYPE {self.quote_identifier(type_name)} AS ENUM ({values});"
                )
        statements.append(self.create_table(table, type_mapper))
        return statements
