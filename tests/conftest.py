"""Shared pytest fixtures for schema-designer tests."""

import json

import pytest

from schema_designer.schema.models import SchemaData, Table, Column, ForeignKey, Reference
from schema_designer.logging.run_service import ExportRunLogger


@pytest.fixture
def blog_schema():
    """Posts referencing users, authored with the referencing table first."""
    return SchemaData(
        tables=[
            Table(
                name="posts",
                columns=[
                    Column(name="id", type="integer", primary_key=True, auto_increment=True),
                    Column(name="title", type="varchar(255)", not_null=True),
                    Column(name="author_id", type="integer"),
                ],
                foreign_keys=[
                    ForeignKey(
                        column="author_id",
                        references=Reference(table="users", column="id"),
                        on_delete="cascade",
                    ),
                ],
            ),
            Table(
                name="users",
                columns=[
                    Column(name="id", type="integer", primary_key=True, auto_increment=True),
                    Column(name="name", type="varchar(64)", not_null=True),
                ],
            ),
        ]
    )


@pytest.fixture
def color_schema():
    """Single table with an enum column."""
    return SchemaData(
        tables=[
            Table(
                name="paints",
                columns=[
                    Column(name="id", type="int", primary_key=True),
                    Column(name="color", type="enum", not_null=True, enum_values=["red", "green"]),
                ],
            ),
        ]
    )


@pytest.fixture
def tree_schema():
    """Self-referencing category tree."""
    return SchemaData(
        tables=[
            Table(
                name="categories",
                columns=[
                    Column(name="id", type="int", primary_key=True),
                    Column(name="parent_id", type="int"),
                ],
                foreign_keys=[
                    ForeignKey(column="parent_id", references=Reference(table="categories", column="id")),
                ],
            ),
        ]
    )


@pytest.fixture
def designer_document():
    """Schema data as sent by the designer front end (camelCase keys)."""
    return {
        "tables": [
            {
                "name": "users",
                "color": "#6366f1",
                "columns": [
                    {"name": "id", "type": "SERIAL", "primaryKey": True},
                    {"name": "email", "type": "VARCHAR(255)", "notNull": True, "unique": True},
                    {"name": "active", "type": "BOOLEAN", "default": True},
                    {"name": "role", "type": "ENUM", "enumValues": ["admin", "member"], "default": "member"},
                ],
            },
            {
                "name": "orders",
                "engine": "InnoDB",
                "columns": [
                    {"name": "id", "type": "INT", "primaryKey": True, "autoIncrement": True},
                    {"name": "user_id", "type": "INT", "notNull": True},
                    {"name": "total", "type": "DECIMAL(10,2)", "default": 0},
                ],
                "foreignKeys": [
                    {
                        "column": "user_id",
                        "references": {"table": "users", "column": "id"},
                        "relationType": "n:1",
                        "onDelete": "CASCADE",
                        "onUpdate": "NO ACTION",
                    }
                ],
            },
        ]
    }


@pytest.fixture
def schema_file(tmp_path, designer_document):
    """Designer document written to a JSON file."""
    path = tmp_path / "shop.json"
    path.write_text(json.dumps(designer_document), encoding="utf-8")
    return path


@pytest.fixture
def run_logger(tmp_path):
    """Run logger backed by a temporary SQLite file."""
    logger = ExportRunLogger(db_path=str(tmp_path / "runs.db"))
    yield logger
    if logger.db:
        logger.db.close()
