"""Tests for HTTP delivery helpers."""

import pytest

from schema_designer.delivery import attachment_filename, build_payload, error_body, http_status_for
from schema_designer.errors import CycleError, UnsupportedFormatError, UnknownTypeError
from schema_designer.exporters import export_result


class TestPayload:

    def test_inline_payload(self, blog_schema):
        result = export_result(blog_schema, "mysql")
        payload = build_payload(result)

        assert payload == {"sql": result.sql, "format": "mysql"}

    def test_mongo_script_under_sql_key(self, blog_schema):
        payload = build_payload(export_result(blog_schema, "mongo"))
        assert payload["sql"].startswith("db.createCollection(")
        assert payload["format"] == "mongo"


class TestAttachmentFilename:

    @pytest.mark.parametrize("fmt,expected", [
        ("postgres", "shop_postgres.sql"),
        ("mysql", "shop_mysql.sql"),
        ("mongo", "shop_mongo.js"),
        (None, "shop_postgres.sql"),
    ])
    def test_extension(self, fmt, expected):
        assert attachment_filename("shop", fmt) == expected

    def test_unsafe_characters_replaced(self):
        assert attachment_filename('a/b:"c"', "mysql") == "a_b_c__mysql.sql"

    def test_blank_name(self):
        assert attachment_filename("  ", "postgres") == "schema_postgres.sql"

    def test_unsupported_format(self):
        with pytest.raises(UnsupportedFormatError):
            attachment_filename("shop", "oracle")


class TestErrors:

    @pytest.mark.parametrize("exc", [
        UnsupportedFormatError("oracle"),
        CycleError(["a", "b"]),
        UnknownTypeError("geometry", "places", "shape"),
    ])
    def test_client_errors(self, exc):
        assert http_status_for(exc) == 400
        body = error_body(exc)
        assert body["code"] == exc.code
        assert body["error"] == exc.message

    def test_unexpected_error(self):
        exc = RuntimeError("boom")
        assert http_status_for(exc) == 500
        assert "boom" not in error_body(exc)["error"]
