"""MySQL DDL emitter."""

from ..schema.models import Table
from ..schema.quoting import MYSQL_MAX_IDENTIFIER_BYTES, quote_mysql_identifier, quote_mysql_literal
from .base import SQLEmitter, storage_engine


class MySQLEmitter(SQLEmitter):
    """Generates MySQL CREATE TABLE statements.

    Table engine hints naming a known storage engine become an ENGINE
    table option; any other hint is ignored.
    """

    MAX_IDENTIFIER_BYTES = MYSQL_MAX_IDENTIFIER_BYTES
    STORAGE_ENGINES = [
        "InnoDB", "MyISAM", "MEMORY", "CSV", "ARCHIVE", "BLACKHOLE",
        "MERGE", "FEDERATED", "NDB", "Aria", "ROCKSDB",
    ]

    def quote_identifier(self, name: str) -> str:
        return quote_mysql_identifier(name)

    def quote_literal(self, value: str) -> str:
        return quote_mysql_literal(value)

    def table_options(self, table: Table) -> str:
        engine = storage_engine(table.engine, self.STORAGE_ENGINES)
        return f" ENGINE={engine}" if engine else ""
