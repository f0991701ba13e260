"""Tests for dependency ordering."""

import pytest

from schema_designer.errors import CycleError
from schema_designer.schema.models import Table, Column, ForeignKey, Reference
from schema_designer.schema.ordering import order_tables


def table(name, *targets):
    """Table with an id column and one foreign key per target table."""
    columns = [Column(name="id", type="int", primary_key=True)]
    foreign_keys = []
    for target in targets:
        columns.append(Column(name=f"{target}_id", type="int"))
        foreign_keys.append(ForeignKey(column=f"{target}_id", references=Reference(table=target, column="id")))
    return Table(name=name, columns=columns, foreign_keys=foreign_keys)


def names(tables):
    return [t.name for t in tables]


class TestOrder:

    def test_referenced_table_first(self, blog_schema):
        assert names(order_tables(blog_schema.tables)) == ["users", "posts"]

    def test_independent_tables_keep_authoring_order(self):
        tables = [table("c"), table("a"), table("b")]
        assert names(order_tables(tables)) == ["c", "a", "b"]

    def test_chain(self):
        tables = [table("a", "b"), table("b", "c"), table("c")]
        assert names(order_tables(tables)) == ["c", "b", "a"]

    def test_diamond(self):
        tables = [table("top", "left", "right"), table("left", "base"), table("right", "base"), table("base")]
        ordered = names(order_tables(tables))

        assert ordered == ["base", "left", "right", "top"]

    def test_self_reference_allowed(self, tree_schema):
        assert names(order_tables(tree_schema.tables)) == ["categories"]

    def test_input_not_modified(self, blog_schema):
        original = list(blog_schema.tables)
        order_tables(blog_schema.tables)
        assert blog_schema.tables == original

    def test_case_insensitive_lookup(self):
        tables = [table("posts", "Users"), table("users")]
        assert names(order_tables(tables, case_sensitive=False)) == ["users", "posts"]

    def test_long_chain(self):
        """Test chains longer than the recursion limit."""
        count = 3000
        tables = [table(f"t{i}", f"t{i + 1}") for i in range(count)] + [table(f"t{count}")]
        ordered = names(order_tables(tables))

        assert ordered[0] == f"t{count}"
        assert ordered[-1] == "t0"


class TestCycles:

    def test_three_cycle(self):
        tables = [table("a", "b"), table("b", "c"), table("c", "a")]
        with pytest.raises(CycleError) as exc_info:
            order_tables(tables)

        assert exc_info.value.tables == ["a", "b", "c"]
        assert exc_info.value.code == "CYCLE_ERROR"
        assert "a -> b -> c -> a" in exc_info.value.message

    def test_two_cycle(self):
        tables = [table("a", "b"), table("b", "a")]
        with pytest.raises(CycleError):
            order_tables(tables)

    def test_cycle_behind_acyclic_prefix(self):
        tables = [table("root", "x"), table("x", "y"), table("y", "x")]
        with pytest.raises(CycleError) as exc_info:
            order_tables(tables)
        assert exc_info.value.tables == ["x", "y"]
