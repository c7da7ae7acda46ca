"""
SQLite dialect implementation.
"""

from __future__ import annotations

from typing import Any, Dict

from ..core.fields import FieldMetadata
from ..core.resolver import parse_field_for_dialect
from ..core.types import Kind, is_byte_sequence
from .base import ColumnType, UnsupportedTypeError
from .common import MAX_VARCHAR_SIZE, CommonDialect
from .registry import register_dialect


class SQLiteDialect(CommonDialect):
    """
    SQLite dialect using qmark placeholders and ``sqlite_master`` lookups.
    """

    name = "sqlite3"

    def quote(self, key: str) -> str:
        escaped = key.replace('"', '""')
        return f'"{escaped}"'

    def split_data_type_of(self, field: FieldMetadata) -> ColumnType:
        resolved = parse_field_for_dialect(field, self)
        sql_type = resolved.sql_type
        size = resolved.size
        derived: Dict[str, str] = {}

        if not sql_type:
            kind = resolved.kind
            if kind is Kind.BOOL:
                sql_type = "bool"
            elif kind in (Kind.INT, Kind.INT64):
                if self.field_can_auto_increment(field):
                    derived["AUTO_INCREMENT"] = "AUTO_INCREMENT"
                    sql_type = "integer primary key autoincrement"
                else:
                    sql_type = "integer" if kind is Kind.INT else "bigint"
            elif kind is Kind.FLOAT:
                sql_type = "real"
            elif kind is Kind.STRING:
                if 0 < size < MAX_VARCHAR_SIZE:
                    sql_type = f"varchar({size})"
                else:
                    sql_type = "text"
            elif kind is Kind.TIME:
                sql_type = "datetime"
            elif kind is Kind.BYTES and is_byte_sequence(resolved.example):
                sql_type = "blob"

        if not sql_type:
            raise UnsupportedTypeError(
                f"invalid sql type {type(resolved.example).__name__} ({resolved.kind}) for {self.name}"
            )
        return ColumnType(sql_type, resolved.additional_type, derived)

    def has_index(self, table_name: str, index_name: str) -> bool:
        count = self._count(
            "SELECT count(*) FROM sqlite_master WHERE type = 'index' AND tbl_name = ? AND name = ?",
            table_name,
            index_name,
        )
        return count > 0

    def has_table(self, table_name: str) -> bool:
        count = self._count(
            "SELECT count(*) FROM sqlite_master WHERE type = 'table' AND name = ?",
            table_name,
        )
        return count > 0

    def has_column(self, table_name: str, column_name: str) -> bool:
        count = self._count(
            "SELECT count(*) FROM pragma_table_info(?) WHERE name = ?",
            table_name,
            column_name,
        )
        return count > 0

    def current_database(self) -> str:
        row = self._query_row("SELECT name FROM pragma_database_list WHERE seq = 0")
        if not row:
            return ""
        return str(row[0])

    def limit_and_offset_sql(self, limit: Any = None, offset: Any = None) -> str:
        sql = super().limit_and_offset_sql(limit, None)
        offset_sql = super().limit_and_offset_sql(None, offset)
        if offset_sql and not sql:
            # SQLite only accepts OFFSET after a LIMIT
            sql = " LIMIT -1"
        return sql + offset_sql


register_dialect(SQLiteDialect.name, SQLiteDialect)
