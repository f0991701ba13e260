"""Schema model for designed databases."""

from typing import Optional, List, Any

from pydantic import BaseModel, Field, field_validator


class Reference(BaseModel):
    """Target of a foreign key."""
    table: str
    column: str

    class Config:
        frozen = True


class ForeignKey(BaseModel):
    """Foreign key from a column of the owning table to another table."""
    column: str
    references: Reference
    relation_type: Optional[str] = Field(default=None, alias="relationType")  # '1:1', '1:n', 'n:1', 'n:m'
    on_delete: Optional[str] = Field(default=None, alias="onDelete")
    on_update: Optional[str] = Field(default=None, alias="onUpdate")

    class Config:
        populate_by_name = True
        frozen = True

    @field_validator("on_delete", "on_update", mode="before")
    @classmethod
    def _blank_action_is_absent(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class Column(BaseModel):
    """A column of a designed table.

    ``default`` is None when the column has no default; an empty string is
    a real default value.
    """
    name: str
    type: str = ""
    primary_key: bool = Field(default=False, alias="primaryKey")
    not_null: bool = Field(default=False, alias="notNull")
    unique: bool = False
    default: Optional[str] = None
    auto_increment: bool = Field(default=False, alias="autoIncrement")
    enum_values: Optional[List[str]] = Field(default=None, alias="enumValues")

    class Config:
        populate_by_name = True
        frozen = True

    @field_validator("default", mode="before")
    @classmethod
    def _coerce_default(cls, value: Any) -> Any:
        # The designer sends numbers and booleans as JSON scalars
        if isinstance(value, bool):
            return "TRUE" if value else "FALSE"
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @property
    def has_default(self) -> bool:
        return self.default is not None


class Table(BaseModel):
    """A designed table."""
    name: str
    columns: List[Column] = Field(default_factory=list)
    foreign_keys: List[ForeignKey] = Field(default_factory=list, alias="foreignKeys")
    engine: Optional[str] = None
    color: Optional[str] = None

    class Config:
        populate_by_name = True
        frozen = True

    @field_validator("foreign_keys", mode="before")
    @classmethod
    def _null_foreign_keys(cls, value: Any) -> Any:
        return [] if value is None else value

    def get_column(self, name: str) -> Optional[Column]:
        """Find a column by exact name."""
        for column in self.columns:
            if column.name == name:
                return column
        return None

    def primary_key_columns(self) -> List[Column]:
        """Get primary key columns in authoring order."""
        return [col for col in self.columns if col.primary_key]

    def referenced_tables(self) -> List[str]:
        """Get names of tables this table references, in declaration order."""
        names = []
        for fk in self.foreign_keys:
            if fk.references.table not in names:
                names.append(fk.references.table)
        return names


class SchemaData(BaseModel):
    """A designed database: tables in authoring order."""
    tables: List[Table] = Field(default_factory=list)

    class Config:
        frozen = True

    @field_validator("tables", mode="before")
    @classmethod
    def _null_tables(cls, value: Any) -> Any:
        return [] if value is None else value

    def get_table(self, name: str) -> Optional[Table]:
        """Find a table by exact name."""
        for table in self.tables:
            if table.name == name:
                return table
        return None

    def table_names(self) -> List[str]:
        return [table.name for table in self.tables]

    def column_count(self) -> int:
        return sum(len(table.columns) for table in self.tables)

    def foreign_key_count(self) -> int:
        return sum(len(table.foreign_keys) for table in self.tables)
