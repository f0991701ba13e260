"""Identifier and string literal quoting per SQL dialect."""

import re
from typing import Optional, Set

from .types import TypeSpec


_NUMBER = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
# A single call whose arguments are plain names or numbers, e.g. now()
_FUNCTION_CALL = re.compile(r"^[A-Za-z_][A-Za-z0-9_.]*\([A-Za-z0-9_.,+\- ]*\)$")
_KEYWORDS = {
    "NULL", "TRUE", "FALSE",
    "CURRENT_TIMESTAMP", "CURRENT_DATE", "CURRENT_TIME",
    "LOCALTIMESTAMP", "LOCALTIME",
}


POSTGRES_MAX_IDENTIFIER_BYTES = 63
MYSQL_MAX_IDENTIFIER_BYTES = 64


def truncate_identifier(name: str, max_bytes: int) -> str:
    """Cut a name to at most max_bytes of UTF-8 without splitting a character."""
    encoded = name.encode("utf-8")
    if len(encoded) <= max_bytes:
        return name
    return encoded[:max_bytes].decode("utf-8", errors="ignore")


def unique_identifier(base: str, taken: Set[str], max_bytes: int) -> str:
    """Derive a generated name not in taken, comparing case-insensitively.

    The base name is used when free; otherwise ``_2``, ``_3``, ... is
    appended, truncating the base so the result stays within max_bytes.
    """
    used = {name.lower() for name in taken}
    name = truncate_identifier(base, max_bytes)
    counter = 2
    while name.lower() in used:
        suffix = f"_{counter}"
        name = truncate_identifier(base, max_bytes - len(suffix)) + suffix
        counter += 1
    return name


def quote_postgres_identifier(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def quote_postgres_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def quote_mysql_identifier(name: str) -> str:
    return "`" + name.replace("`", "``") + "`"


def quote_mysql_literal(value: str) -> str:
    return "'" + value.replace("\\", "\\\\").replace("'", "''") + "'"


def is_raw_default(value: str) -> bool:
    """Check whether a default can be emitted without quoting.

    Numbers, NULL, boolean and current-time keywords and function calls
    like ``now()`` are SQL expressions rather than strings.
    """
    text = value.strip()
    if not text:
        return False
    return bool(
        _NUMBER.match(text)
        or text.upper() in _KEYWORDS
        or _FUNCTION_CALL.match(text)
    )


def render_default(value: str, spec: Optional[TypeSpec], quote_literal) -> str:
    """Render a column default for a SQL dialect.

    Textual and enumerated columns always get a string literal, except for
    NULL. Other columns keep expressions verbatim and quote the rest.

    Args:
        value: Default value text (may be empty)
        spec: Parsed column type, or None if unavailable
        quote_literal: Dialect literal quoting function
    """
    text = value.strip()
    if text.upper() == "NULL":
        return "NULL"
    if spec is not None and (spec.is_text or spec.is_enum):
        return quote_literal(value)
    if is_raw_default(value):
        return text.upper() if text.upper() in _KEYWORDS else text
    return quote_literal(value)
