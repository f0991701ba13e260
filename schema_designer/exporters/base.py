"""Base classes for dialect emitters."""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Set

from ..schema.models import Table, Column, ForeignKey
from ..schema.quoting import POSTGRES_MAX_IDENTIFIER_BYTES, render_default, unique_identifier
from ..schema.type_mappers import TypeMapper
from ..schema.types import try_parse_type_token
from ..schema.validator import normalize_action


class Emitter(ABC):
    """Abstract base class for generating definition code from tables."""

    @abstractmethod
    def emit(self, tables: Sequence[Table], type_mapper: TypeMapper) -> str:
        """Generate the definition script.

        Args:
            tables: Validated tables in dependency order
            type_mapper: Type mapper of the same dialect

        Returns:
            The full definition script as a string
        """
        pass

    @staticmethod
    def join_statements(statements: List[str]) -> str:
        """Join statements with a blank line and end with a newline."""
        if not statements:
            return ""
        return "\n\n".join(statements) + "\n"


class SQLEmitter(Emitter):
    """Shared CREATE TABLE generation for relational dialects.

    Column clauses are emitted in a fixed order: type, NOT NULL, UNIQUE,
    DEFAULT, then the auto-increment clause and an inline PRIMARY KEY for
    single-column keys. Composite keys and foreign keys become trailing
    table constraints.
    """

    INDENT = "  "
    MAX_IDENTIFIER_BYTES = POSTGRES_MAX_IDENTIFIER_BYTES

    def __init__(self):
        self._tables: Dict[str, Table] = {}
        self._constraint_names: Set[str] = set()

    @abstractmethod
    def quote_identifier(self, name: str) -> str:
        pass

    @abstractmethod
    def quote_literal(self, value: str) -> str:
        pass

    def emit(self, tables: Sequence[Table], type_mapper: TypeMapper) -> str:
        self._tables = {table.name: table for table in tables}
        self._constraint_names = set()

        statements: List[str] = []
        for table in tables:
            statements.extend(self.table_statements(table, type_mapper))
        return self.join_statements(statements)

    def table_statements(self, table: Table, type_mapper: TypeMapper) -> List[str]:
        """Statements defining one table. Dialects may add preludes."""
        return [self.create_table(table, type_mapper)]

    def create_table(self, table: Table, type_mapper: TypeMapper) -> str:
        primary_keys = table.primary_key_columns()
        inline_pk = len(primary_keys) == 1

        body = [
            self.column_definition(table, column, type_mapper, inline_pk)
            for column in table.columns
        ]
        if len(primary_keys) > 1:
            names = ", ".join(self.quote_identifier(c.name) for c in primary_keys)
            body.append(f"PRIMARY KEY ({names})")
        for fk in table.foreign_keys:
            body.append(self.foreign_key_constraint(table, fk))

        lines = [f"CREATE TABLE {self.quote_identifier(table.name)} ("]
        lines.append(",\n".join(self.INDENT + line for line in body))
        lines.append(")" + self.table_options(table) + ";")
        return "\n".join(lines)

    def column_definition(
        self,
        table: Table,
        column: Column,
        type_mapper: TypeMapper,
        inline_pk: bool,
    ) -> str:
        parts = [self.quote_identifier(column.name), type_mapper.map_type(column, table.name)]
        if column.not_null:
            parts.append("NOT NULL")
        if column.unique:
            parts.append("UNIQUE")
        if column.has_default:
            spec = try_parse_type_token(column.type)
            parts.append("DEFAULT " + render_default(column.default, spec, self.quote_literal))
        auto_increment = type_mapper.auto_increment_clause(column)
        if auto_increment:
            parts.append(auto_increment)
        if column.primary_key and inline_pk:
            parts.append("PRIMARY KEY")
        return " ".join(parts)

    def constraint_name(self, table: Table, column: str) -> str:
        """Foreign key constraint name, unique across the script."""
        name = unique_identifier(
            f"fk_{table.name}_{column}", self._constraint_names, self.MAX_IDENTIFIER_BYTES
        )
        self._constraint_names.add(name)
        return name

    def resolve_table(self, name: str) -> Table:
        """Find a referenced table, preferring an exact name match.

        Case-insensitive dialects accept references spelled in another
        case; the declared spelling is emitted.
        """
        if name in self._tables:
            return self._tables[name]
        wanted = name.lower()
        for table in self._tables.values():
            if table.name.lower() == wanted:
                return table
        raise KeyError(name)

    def resolve_column(self, table: Table, name: str) -> str:
        """Declared spelling of a column name in a table."""
        column = table.get_column(name)
        if column is not None:
            return column.name
        wanted = name.lower()
        for column in table.columns:
            if column.name.lower() == wanted:
                return column.name
        raise KeyError(name)

    def foreign_key_constraint(self, table: Table, fk: ForeignKey) -> str:
        source = self.resolve_column(table, fk.column)
        target = self.resolve_table(fk.references.table)
        target_column = self.resolve_column(target, fk.references.column)
        clause = (
            f"CONSTRAINT {self.quote_identifier(self.constraint_name(table, source))} "
            f"FOREIGN KEY ({self.quote_identifier(source)}) "
            f"REFERENCES {self.quote_identifier(target.name)} "
            f"({self.quote_identifier(target_column)})"
        )
        # Absent actions fall back to the database default (NO ACTION)
        on_delete = normalize_action(fk.on_delete)
        if on_delete:
            clause += f" ON DELETE {on_delete}"
        on_update = normalize_action(fk.on_update)
        if on_update:
            clause += f" ON UPDATE {on_update}"
        return clause

    def table_options(self, table: Table) -> str:
        """Text placed between the closing parenthesis and the semicolon."""
        return ""


def storage_engine(hint: Optional[str], known: Sequence[str]) -> Optional[str]:
    """Match an engine hint against known engine names, case-insensitively."""
    if not hint:
        return None
    wanted = hint.strip().lower()
    for name in known:
        if name.lower() == wanted:
            return name
    return None
