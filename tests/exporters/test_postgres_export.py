"""Tests for PostgreSQL DDL generation."""

import pytest

from schema_designer.errors import UnknownTypeError
from schema_designer.exporters import export
from schema_designer.schema.models import SchemaData, Table, Column, ForeignKey, Reference


class TestBlogSchema:
    """End-to-end export of users and posts."""

    def test_full_script(self, blog_schema):
        expected = '''CREATE TABLE "users" (
  "id" SERIAL PRIMARY KEY,
  "name" VARCHAR(64) NOT NULL
);

CREATE TABLE "posts" (
  "id" SERIAL PRIMARY KEY,
  "title" VARCHAR(255) NOT NULL,
  "author_id" INTEGER,
  CONSTRAINT "fk_posts_author_id" FOREIGN KEY ("author_id") REFERENCES "users" ("id") ON DELETE CASCADE
);
'''
        assert export(blog_schema, "postgres") == expected

    def test_users_before_posts(self, blog_schema):
        script = export(blog_schema, "postgres")
        assert script.index('CREATE TABLE "users"') < script.index('CREATE TABLE "posts"')

    def test_default_format_is_postgres(self, blog_schema):
        assert export(blog_schema) == export(blog_schema, "postgres")

    def test_deterministic(self, blog_schema):
        assert export(blog_schema, "postgres") == export(blog_schema, "postgres")


class TestEnums:

    def test_enum_type_declared_before_table(self, color_schema):
        script = export(color_schema, "postgres")

        assert "CREATE TYPE \"paints_color_enum\" AS ENUM ('red', 'green');" in script
        assert '"color" "paints_color_enum" NOT NULL' in script
        assert script.index("CREATE TYPE") < script.index("CREATE TABLE")
        assert "'blue'" not in script


class TestColumns:

    def test_clause_order(self):
        schema = SchemaData(tables=[Table(name="accounts", columns=[
            Column(name="email", type="varchar(120)", not_null=True, unique=True, default="x", primary_key=True),
        ])])
        script = export(schema, "postgres")
        assert '"email" VARCHAR(120) NOT NULL UNIQUE DEFAULT \'x\' PRIMARY KEY' in script

    def test_composite_primary_key(self):
        schema = SchemaData(tables=[Table(name="memberships", columns=[
            Column(name="user_id", type="int", primary_key=True),
            Column(name="group_id", type="int", primary_key=True),
        ])])
        script = export(schema, "postgres")

        assert '"user_id" INTEGER,' in script
        assert 'PRIMARY KEY ("user_id", "group_id")' in script
        assert "INTEGER PRIMARY KEY" not in script

    def test_defaults(self):
        schema = SchemaData(tables=[Table(name="events", columns=[
            Column(name="label", type="text", default="it's"),
            Column(name="empty", type="text", default=""),
            Column(name="code", type="varchar(5)", default="42"),
            Column(name="count", type="int", default="0"),
            Column(name="ratio", type="real", default="-1.5"),
            Column(name="active", type="boolean", default="true"),
            Column(name="created", type="timestamp", default="now()"),
            Column(name="updated", type="timestamp", default="current_timestamp"),
            Column(name="note", type="text", default="NULL"),
            Column(name="day", type="date", default="2024-01-01"),
            Column(name="plain", type="int"),
        ])])
        script = export(schema, "postgres")

        assert "\"label\" TEXT DEFAULT 'it''s'" in script
        assert "\"empty\" TEXT DEFAULT ''" in script
        assert "\"code\" VARCHAR(5) DEFAULT '42'" in script
        assert '"count" INTEGER DEFAULT 0' in script
        assert '"ratio" REAL DEFAULT -1.5' in script
        assert '"active" BOOLEAN DEFAULT TRUE' in script
        assert '"created" TIMESTAMP DEFAULT now()' in script
        assert '"updated" TIMESTAMP DEFAULT CURRENT_TIMESTAMP' in script
        assert '"note" TEXT DEFAULT NULL' in script
        assert "\"day\" DATE DEFAULT '2024-01-01'" in script
        assert '"plain" INTEGER\n' in script or '"plain" INTEGER,' in script

    def test_identifiers_quoted(self):
        schema = SchemaData(tables=[Table(name="User", columns=[
            Column(name="order", type="int"),
            Column(name='odd"name', type="int"),
        ])])
        script = export(schema, "postgres")

        assert 'CREATE TABLE "User" (' in script
        assert '"order" INTEGER' in script
        assert '"odd""name" INTEGER' in script


class TestForeignKeys:

    def test_self_reference(self, tree_schema):
        script = export(tree_schema, "postgres")
        assert (
            'CONSTRAINT "fk_categories_parent_id" FOREIGN KEY ("parent_id") '
            'REFERENCES "categories" ("id")'
        ) in script

    def test_actions(self):
        schema = SchemaData(tables=[
            Table(name="users", columns=[Column(name="id", type="int", primary_key=True)]),
            Table(
                name="sessions",
                columns=[Column(name="user_id", type="int")],
                foreign_keys=[ForeignKey(
                    column="user_id",
                    references=Reference(table="users", column="id"),
                    on_delete="set-null",
                    on_update="cascade",
                )],
            ),
        ])
        script = export(schema, "postgres")
        assert 'REFERENCES "users" ("id") ON DELETE SET NULL ON UPDATE CASCADE' in script

    def test_absent_actions_omitted(self, tree_schema):
        script = export(tree_schema, "postgres")
        assert "ON DELETE" not in script
        assert "ON UPDATE" not in script


class TestIgnoredHints:

    def test_engine_ignored(self):
        schema = SchemaData(tables=[Table(name="t", engine="InnoDB", color="#fff", columns=[
            Column(name="id", type="int"),
        ])])
        script = export(schema, "postgres")

        assert "ENGINE" not in script
        assert script.endswith(");\n")

    def test_empty_schema(self):
        assert export(SchemaData(), "postgres") == ""


class TestDefaultsAreNotStatements:

    def test_statement_like_default_quoted(self):
        schema = SchemaData(tables=[Table(name="events", columns=[
            Column(name="ts", type="timestamp", default="now(); DROP TABLE users; SELECT now()"),
        ])])
        script = export(schema, "postgres")

        assert "\"ts\" TIMESTAMP DEFAULT 'now(); DROP TABLE users; SELECT now()'" in script

    def test_nested_call_quoted(self):
        schema = SchemaData(tables=[Table(name="events", columns=[
            Column(name="ts", type="timestamp", default="now() + (select 1)"),
        ])])
        assert "DEFAULT 'now() + (select 1)'" in export(schema, "postgres")

    def test_simple_calls_raw(self):
        schema = SchemaData(tables=[Table(name="events", columns=[
            Column(name="created", type="timestamptz", default="clock_timestamp()"),
            Column(name="amount", type="decimal(10,2)", default="round(1.5, 1)"),
        ])])
        script = export(schema, "postgres")

        assert '"created" TIMESTAMPTZ DEFAULT clock_timestamp()' in script
        assert '"amount" DECIMAL(10,2) DEFAULT round(1.5, 1)' in script


class TestTypeErrorsLocated:

    def test_malformed_type_on_plain_column(self):
        schema = SchemaData(tables=[Table(name="t", columns=[
            Column(name="id", type="int", primary_key=True),
            Column(name="note", type="varchar(255"),
        ])])
        with pytest.raises(UnknownTypeError) as exc_info:
            export(schema, "postgres")

        assert exc_info.value.table == "t"
        assert exc_info.value.column == "note"

    def test_empty_type_on_plain_column(self):
        schema = SchemaData(tables=[Table(name="t", columns=[Column(name="note", type="")])])
        with pytest.raises(UnknownTypeError) as exc_info:
            export(schema, "postgres")
        assert exc_info.value.column == "note"


class TestEnumTypeNames:

    def test_colliding_names_get_suffix(self):
        """order.status_kind and order_status.kind map to the same base name."""
        schema = SchemaData(tables=[
            Table(name="order", columns=[
                Column(name="status_kind", type="enum", enum_values=["a"]),
            ]),
            Table(name="order_status", columns=[
                Column(name="kind", type="enum", enum_values=["b"]),
            ]),
        ])
        script = export(schema, "postgres")

        assert "CREATE TYPE \"order_status_kind_enum\" AS ENUM ('a');" in script
        assert "CREATE TYPE \"order_status_kind_enum_2\" AS ENUM ('b');" in script
        assert '"status_kind" "order_status_kind_enum"' in script
        assert '"kind" "order_status_kind_enum_2"' in script

    def test_long_names_truncated(self):
        table_name = "t" * 40
        schema = SchemaData(tables=[Table(name=table_name, columns=[
            Column(name="c" * 40, type="enum", enum_values=["x"]),
            Column(name="c" * 40 + "d", type="enum", enum_values=["y"]),
        ])])
        script = export(schema, "postgres")

        type_names = [
            line.split('"')[1] for line in script.splitlines() if line.startswith("CREATE TYPE")
        ]
        assert len(type_names) == 2
        assert len(set(type_names)) == 2
        assert all(len(name.encode("utf-8")) <= 63 for name in type_names)


class TestForeignKeyNames:

    def test_colliding_constraint_names(self):
        """a_b.c and a.b_c both produce fk_a_b_c."""
        schema = SchemaData(tables=[
            Table(name="ref", columns=[Column(name="id", type="int", primary_key=True)]),
            Table(
                name="a_b",
                columns=[Column(name="c", type="int")],
                foreign_keys=[ForeignKey(column="c", references=Reference(table="ref", column="id"))],
            ),
            Table(
                name="a",
                columns=[Column(name="b_c", type="int")],
                foreign_keys=[ForeignKey(column="b_c", references=Reference(table="ref", column="id"))],
            ),
        ])
        script = export(schema, "postgres")

        assert 'CONSTRAINT "fk_a_b_c" FOREIGN KEY ("c")' in script
        assert 'CONSTRAINT "fk_a_b_c_2" FOREIGN KEY ("b_c")' in script
