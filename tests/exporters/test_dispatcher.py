"""Tests for the export entry point."""

import pytest

from schema_designer.errors import UnsupportedFormatError, ValidationError, CycleError, UnknownTypeError
from schema_designer.exporters import export, export_result
from schema_designer.exporters.dispatcher import resolve_format
from schema_designer.models import ExportFormat
from schema_designer.schema.models import SchemaData, Table, Column, ForeignKey, Reference


def linked(name, target):
    return Table(
        name=name,
        columns=[Column(name="id", type="int", primary_key=True), Column(name="next_id", type="int")],
        foreign_keys=[ForeignKey(column="next_id", references=Reference(table=target, column="id"))],
    )


class TestFormatSelection:

    @pytest.mark.parametrize("identifier", ["oracle", "Postgres", "MYSQL", "mongodb", "sql"])
    def test_unsupported(self, blog_schema, identifier):
        with pytest.raises(UnsupportedFormatError) as exc_info:
            export(blog_schema, identifier)

        assert exc_info.value.format == identifier
        assert exc_info.value.code == "UNSUPPORTED_FORMAT"

    @pytest.mark.parametrize("identifier", [None, ""])
    def test_default(self, identifier):
        assert resolve_format(identifier) is ExportFormat.POSTGRES

    def test_enum_accepted(self):
        assert resolve_format(ExportFormat.MONGO) is ExportFormat.MONGO

    def test_format_checked_before_schema(self):
        """An unknown format is reported even for an invalid schema."""
        schema = SchemaData(tables=[linked("a", "b"), linked("b", "a")])
        with pytest.raises(UnsupportedFormatError):
            export(schema, "oracle")


class TestPipelineErrors:

    @pytest.mark.parametrize("fmt", ["postgres", "mysql", "mongo"])
    def test_cycle(self, fmt):
        schema = SchemaData(tables=[linked("a", "b"), linked("b", "c"), linked("c", "a")])
        with pytest.raises(CycleError) as exc_info:
            export(schema, fmt)
        assert exc_info.value.tables == ["a", "b", "c"]

    @pytest.mark.parametrize("fmt", ["postgres", "mysql", "mongo"])
    def test_duplicate_table(self, fmt):
        schema = SchemaData(tables=[
            Table(name="users", columns=[Column(name="id", type="int")]),
            Table(name="users", columns=[Column(name="id", type="int")]),
        ])
        with pytest.raises(ValidationError) as exc_info:
            export(schema, fmt)

        assert exc_info.value.kind == "duplicate_table"
        assert exc_info.value.table == "users"

    def test_validation_before_ordering(self):
        """A dangling reference is a validation error, not a cycle or lookup failure."""
        schema = SchemaData(tables=[linked("a", "missing")])
        with pytest.raises(ValidationError) as exc_info:
            export(schema)
        assert exc_info.value.kind == "dangling_reference"

    def test_unknown_type(self):
        schema = SchemaData(tables=[Table(name="places", columns=[Column(name="shape", type="geometry")])])
        with pytest.raises(UnknownTypeError) as exc_info:
            export(schema, "mysql")

        assert exc_info.value.token == "geometry"
        assert exc_info.value.table == "places"
        assert exc_info.value.column == "shape"

    def test_set_only_fails_in_postgres(self):
        schema = SchemaData(tables=[Table(name="posts", columns=[
            Column(name="tags", type="set", enum_values=["a", "b"]),
        ])])
        with pytest.raises(UnknownTypeError):
            export(schema, "postgres")

        assert "SET('a', 'b')" in export(schema, "mysql")


class TestResults:

    def test_export_result(self, blog_schema):
        result = export_result(blog_schema, "mysql")

        assert result.format == "mysql"
        assert result.sql == export(blog_schema, "mysql")

    def test_export_result_default(self, blog_schema):
        assert export_result(blog_schema).format == "postgres"

    @pytest.mark.parametrize("fmt", ["postgres", "mysql", "mongo"])
    def test_deterministic(self, designer_document, fmt):
        first = export(SchemaData.model_validate(designer_document), fmt)
        second = export(SchemaData.model_validate(designer_document), fmt)
        assert first == second

    def test_schema_not_modified(self, blog_schema):
        before = blog_schema.model_dump()
        for fmt in ("postgres", "mysql", "mongo"):
            export(blog_schema, fmt)

        assert blog_schema.model_dump() == before
        assert [t.name for t in blog_schema.tables] == ["posts", "users"]

    @pytest.mark.parametrize("fmt", ["postgres", "mysql", "mongo"])
    def test_empty_schema(self, fmt):
        assert export(SchemaData(), fmt) == ""
