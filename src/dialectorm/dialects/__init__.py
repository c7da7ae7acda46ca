"""
Dialect strategy registry.

Importing this package registers the built-in dialects.
"""

from .base import ColumnType, Connection, Dialect, DialectError, UnsupportedTypeError
from .common import CommonDialect
from .mysql import MySQLDialect
from .oracle import OracleDialect
from .postgres import PostgresDialect
from .registry import (
    FALLBACK_EVENT,
    DialectFallback,
    get_dialect,
    new_dialect,
    register_dialect,
    registered_dialects,
)
from .sqlite import SQLiteDialect

__all__ = [
    "ColumnType",
    "CommonDialect",
    "Connection",
    "Dialect",
    "DialectError",
    "DialectFallback",
    "FALLBACK_EVENT",
    "MySQLDialect",
    "OracleDialect",
    "PostgresDialect",
    "SQLiteDialect",
    "UnsupportedTypeError",
    "get_dialect",
    "new_dialect",
    "register_dialect",
    "registered_dialects",
]
