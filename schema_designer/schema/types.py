"""Abstract column type tokens.

A type token is the dialect-neutral string a designer stores on a column,
e.g. ``integer``, ``VARCHAR(255)`` or ``double precision``. Tokens are
split into a lower-cased base name and the raw parameter text between the
parentheses. Parameters are not interpreted here; dialect mappers decide
whether to pass them through.
"""

import re
from dataclasses import dataclass
from typing import Optional

from ..errors import UnknownTypeError


INTEGER_TYPES = {"int", "integer", "tinyint", "smallint", "mediumint", "bigint"}
SERIAL_TYPES = {"serial", "smallserial", "bigserial"}
ENUM_TYPES = {"enum", "set"}
TEXT_TYPES = {
    "char", "varchar", "text", "tinytext", "mediumtext", "longtext", "uuid",
}

# Every base name some dialect knows about
KNOWN_TYPES = INTEGER_TYPES | SERIAL_TYPES | ENUM_TYPES | TEXT_TYPES | {
    "float", "real", "double", "double precision", "decimal", "numeric",
    "date", "datetime", "timestamp", "timestamptz", "time", "year", "interval",
    "binary", "varbinary", "bytea", "blob", "tinyblob", "mediumblob", "longblob",
    "boolean", "bool", "json", "jsonb",
}

_BASE_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_ ]*$")


@dataclass(frozen=True)
class TypeSpec:
    """Parsed type token."""
    token: str
    base: str
    params: Optional[str] = None

    @property
    def is_integer(self) -> bool:
        return self.base in INTEGER_TYPES

    @property
    def is_serial(self) -> bool:
        return self.base in SERIAL_TYPES

    @property
    def is_enum(self) -> bool:
        return self.base in ENUM_TYPES

    @property
    def is_text(self) -> bool:
        return self.base in TEXT_TYPES

    def single_int_param(self) -> Optional[int]:
        """Return the parameter as an int when it is a single integer."""
        if self.params is not None and self.params.strip().isdigit():
            return int(self.params.strip())
        return None


def parse_type_token(token: Optional[str]) -> TypeSpec:
    """Split a type token into base name and parameters.

    Args:
        token: Abstract type token, e.g. "varchar(255)"

    Returns:
        TypeSpec with a lower-cased, whitespace-collapsed base

    Raises:
        UnknownTypeError: If the token is empty or its parentheses are
            unbalanced
    """
    raw = (token or "").strip()
    if not raw:
        raise UnknownTypeError(token or "")

    open_at = raw.find("(")
    if open_at == -1:
        if ")" in raw:
            raise UnknownTypeError(raw)
        base, params = raw, None
    else:
        if not raw.endswith(")"):
            raise UnknownTypeError(raw)
        depth = 0
        for position, char in enumerate(raw[open_at:], start=open_at):
            if char == "(":
                depth += 1
            elif char == ")":
                depth -= 1
                if depth < 0 or (depth == 0 and position != len(raw) - 1):
                    raise UnknownTypeError(raw)
        if depth != 0:
            raise UnknownTypeError(raw)
        base = raw[:open_at]
        params = raw[open_at + 1:-1].strip()

    base = " ".join(base.split()).lower()
    if not _BASE_PATTERN.match(base):
        raise UnknownTypeError(raw)

    return TypeSpec(token=raw, base=base, params=params)


def try_parse_type_token(token: Optional[str]) -> Optional[TypeSpec]:
    """Parse a type token, returning None instead of raising."""
    try:
        return parse_type_token(token)
    except UnknownTypeError:
        return None
