"""Structural validation of a schema before export."""

from typing import Dict, Optional

from ..errors import ValidationError
from .models import SchemaData, Table, Column, ForeignKey
from .types import try_parse_type_token


# Referential actions accepted on foreign keys, keyed by normalized spelling
FK_ACTIONS = {
    "CASCADE": "CASCADE",
    "RESTRICT": "RESTRICT",
    "SET NULL": "SET NULL",
    "SET DEFAULT": "SET DEFAULT",
    "NO ACTION": "NO ACTION",
}


def normalize_action(action: Optional[str]) -> Optional[str]:
    """Normalize a referential action keyword.

    Accepts any case and '-', '_' or spaces as separators, so "set-null",
    "SET_NULL" and "Set Null" all become "SET NULL".

    Returns:
        The canonical keyword, or None if the action is absent or unknown
    """
    if action is None:
        return None
    key = " ".join(action.replace("-", " ").replace("_", " ").split()).upper()
    return FK_ACTIONS.get(key)


class SchemaValidator:
    """Checks structural invariants of a SchemaData.

    Validation stops at the first problem found.
    """

    def __init__(
        self,
        schema: SchemaData,
        case_sensitive: bool = True,
        auto_increment_needs_key: bool = False,
    ):
        self.schema = schema
        self.case_sensitive = case_sensitive
        self.auto_increment_needs_key = auto_increment_needs_key

    def _key(self, name: str) -> str:
        return name if self.case_sensitive else name.lower()

    def validate(self) -> None:
        """Run all checks.

        Raises:
            ValidationError: On the first structural problem found
        """
        tables: Dict[str, Table] = {}
        for table in self.schema.tables:
            if not table.name.strip():
                raise ValidationError("empty_name", "Table name must not be empty")
            key = self._key(table.name)
            if key in tables:
                raise ValidationError(
                    "duplicate_table",
                    f"Duplicate table name '{table.name}'",
                    table=table.name,
                )
            tables[key] = table

        for table in self.schema.tables:
            self._check_columns(table)

        for table in self.schema.tables:
            for fk in table.foreign_keys:
                self._check_foreign_key(table, fk, tables)

        for table in self.schema.tables:
            for column in table.columns:
                if column.primary_key and not column.type.strip():
                    raise ValidationError(
                        "missing_type",
                        f"Primary key column '{table.name}.{column.name}' has no type",
                        table=table.name,
                        column=column.name,
                    )

        for table in self.schema.tables:
            for column in table.columns:
                self._check_enum(table, column)
                self._check_auto_increment(table, column)

    def _check_columns(self, table: Table) -> None:
        if not table.columns:
            raise ValidationError(
                "empty_table",
                f"Table '{table.name}' has no columns",
                table=table.name,
            )
        seen = set()
        for column in table.columns:
            if not column.name.strip():
                raise ValidationError(
                    "empty_name",
                    f"Table '{table.name}' has a column without a name",
                    table=table.name,
                )
            key = self._key(column.name)
            if key in seen:
                raise ValidationError(
                    "duplicate_column",
                    f"Duplicate column name '{column.name}' in table '{table.name}'",
                    table=table.name,
                    column=column.name,
                )
            seen.add(key)

    def _find_column(self, table: Table, name: str) -> Optional[Column]:
        key = self._key(name)
        for column in table.columns:
            if self._key(column.name) == key:
                return column
        return None

    def _check_foreign_key(self, table: Table, fk: ForeignKey, tables: Dict[str, Table]) -> None:
        if self._find_column(table, fk.column) is None:
            raise ValidationError(
                "missing_column",
                f"Foreign key column '{fk.column}' does not exist in table '{table.name}'",
                table=table.name,
                column=fk.column,
            )

        target = tables.get(self._key(fk.references.table))
        if target is None:
            raise ValidationError(
                "dangling_reference",
                f"Foreign key '{table.name}.{fk.column}' references unknown table "
                f"'{fk.references.table}'",
                table=table.name,
                column=fk.column,
            )
        if self._find_column(target, fk.references.column) is None:
            raise ValidationError(
                "dangling_reference",
                f"Foreign key '{table.name}.{fk.column}' references unknown column "
                f"'{fk.references.table}.{fk.references.column}'",
                table=table.name,
                column=fk.column,
            )

        for action in (fk.on_delete, fk.on_update):
            if action is not None and normalize_action(action) is None:
                raise ValidationError(
                    "invalid_action",
                    f"Unknown referential action '{action}' on foreign key "
                    f"'{table.name}.{fk.column}'",
                    table=table.name,
                    column=fk.column,
                )

    def _check_enum(self, table: Table, column: Column) -> None:
        spec = try_parse_type_token(column.type)
        if spec is None or not spec.is_enum:
            return
        values = column.enum_values or []
        if not values:
            raise ValidationError(
                "invalid_enum",
                f"Column '{table.name}.{column.name}' of type {spec.base} has no enum values",
                table=table.name,
                column=column.name,
            )
        if len(set(values)) != len(values):
            raise ValidationError(
                "invalid_enum",
                f"Column '{table.name}.{column.name}' has duplicate enum values",
                table=table.name,
                column=column.name,
            )

    def _check_auto_increment(self, table: Table, column: Column) -> None:
        spec = try_parse_type_token(column.type)
        # Serial tokens carry an implicit auto-increment
        increments = column.auto_increment or (spec is not None and spec.is_serial)
        if increments and self.auto_increment_needs_key:
            if not (column.primary_key or column.unique):
                raise ValidationError(
                    "invalid_auto_increment",
                    f"Auto-increment column '{table.name}.{column.name}' must be a "
                    f"primary key or unique",
                    table=table.name,
                    column=column.name,
                )
        if not column.auto_increment:
            return
        # Malformed tokens are reported by the type mapper
        if spec is not None and not (spec.is_integer or spec.is_serial):
            raise ValidationError(
                "invalid_auto_increment",
                f"Auto-increment column '{table.name}.{column.name}' must have an "
                f"integer type, not '{column.type}'",
                table=table.name,
                column=column.name,
            )
        if column.has_default:
            raise ValidationError(
                "invalid_auto_increment",
                f"Auto-increment column '{table.name}.{column.name}' cannot declare a default",
                table=table.name,
                column=column.name,
            )


def validate_schema(
    schema: SchemaData,
    case_sensitive: bool = True,
    auto_increment_needs_key: bool = False,
) -> None:
    """Validate a schema, raising ValidationError on the first problem.

    Args:
        schema: Schema to check
        case_sensitive: Whether names differing only in case are distinct
        auto_increment_needs_key: Require auto-increment columns to be a
            primary key or unique, as MySQL does
    """
    SchemaValidator(
        schema,
        case_sensitive=case_sensitive,
        auto_increment_needs_key=auto_increment_needs_key,
    ).validate()
