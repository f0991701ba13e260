"""Definition code generation for schema-designer.

This module turns a validated schema into PostgreSQL DDL, MySQL DDL or a
MongoDB collection script.
"""

from .base import Emitter, SQLEmitter
from .postgres import PostgresEmitter
from .mysql import MySQLEmitter
from .mongo import MongoEmitter
from .dispatcher import DIALECTS, Dialect, export, export_result, resolve_format

__all__ = [
    "Emitter",
    "SQLEmitter",
    "PostgresEmitter",
    "MySQLEmitter",
    "MongoEmitter",
    "Dialect",
    "DIALECTS",
    "export",
    "export_result",
    "resolve_format",
]
