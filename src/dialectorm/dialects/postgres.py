"""
PostgreSQL dialect implementation.
"""

from __future__ import annotations

from typing import Dict

from ..core.fields import FieldMetadata
from ..core.resolver import parse_field_for_dialect
from ..core.types import Kind, is_byte_sequence, is_json, is_uuid
from .base import ColumnType, UnsupportedTypeError
from .common import MAX_VARCHAR_SIZE, CommonDialect
from .registry import register_dialect


class PostgresDialect(CommonDialect):
    """
    PostgreSQL dialect.

    ``bind_var`` renders numbered ``$N`` placeholders for statements callers
    compose. Introspection queries run through the bound DB-API connection and
    use psycopg's ``%s`` paramstyle.
    """

    name = "postgres"

    def bind_var(self, position: int) -> str:
        return f"${position}"

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
                sql_type = "boolean"
            elif kind in (Kind.INT, Kind.INT64):
                if self.field_can_auto_increment(field):
                    derived["AUTO_INCREMENT"] = "AUTO_INCREMENT"
                    sql_type = "serial" if kind is Kind.INT else "bigserial"
                else:
                    sql_type = "integer" if kind is Kind.INT else "bigint"
            elif kind is Kind.FLOAT:
                sql_type = "numeric"
            elif kind is Kind.STRING:
                _, sized = self.get_tag_setting(field, "SIZE")
                # without an explicit SIZE, strings default to text
                if sized and 0 < size < MAX_VARCHAR_SIZE:
                    sql_type = f"varchar({size})"
                else:
                    sql_type = "text"
            elif kind is Kind.TIME:
                sql_type = "timestamp with time zone"
            elif kind is Kind.BYTES:
                if is_uuid(resolved.example):
                    sql_type = "uuid"
                elif is_json(resolved.example):
                    sql_type = "jsonb"
                elif is_byte_sequence(resolved.example):
                    sql_type = "bytea"

        if not sql_type:
            raise UnsupportedTypeError(
                f"invalid sql type {type(resolved.example).__name__} ({resolved.kind}) for {self.name}"
            )
        return ColumnType(sql_type, resolved.additional_type, derived)

    def has_index(self, table_name: str, index_name: str) -> bool:
        count = self._count(
            "SELECT count(*) FROM pg_indexes "
            "WHERE tablename = %s AND indexname = %s AND schemaname = CURRENT_SCHEMA()",
            table_name,
            index_name,
        )
        return count > 0

    def has_foreign_key(self, table_name: str, foreign_key_name: str) -> bool:
        count = self._count(
            "SELECT count(con.conname) FROM pg_constraint con "
            "WHERE %s::regclass::oid = con.conrelid AND con.conname = %s AND con.contype = 'f'",
            table_name,
            foreign_key_name,
        )
        return count > 0

    def has_table(self, table_name: str) -> bool:
        count = self._count(
            "SELECT count(*) FROM INFORMATION_SCHEMA.tables "
            "WHERE table_name = %s AND table_type = 'BASE TABLE' AND table_schema = CURRENT_SCHEMA()",
            table_name,
        )
        return count > 0

    def has_column(self, table_name: str, column_name: str) -> bool:
        count = self._count(
            "SELECT count(*) FROM INFORMATION_SCHEMA.columns "
            "WHERE table_name = %s AND column_name = %s AND table_schema = CURRENT_SCHEMA()",
            table_name,
            column_name,
        )
        return count > 0

    def current_database(self) -> str:
        row = self._query_row("SELECT CURRENT_DATABASE()")
        if not row or row[0] is None:
            return ""
        return str(row[0])

    def last_insert_id_returning_suffix(self, table_name: str, column_name: str) -> str:
        return f'RETURNING "{table_name}"."{column_name}"'


register_dialect(PostgresDialect.name, PostgresDialect)
