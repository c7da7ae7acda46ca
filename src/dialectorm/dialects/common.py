"""
Generic ANSI dialect, also used as the fallback for unknown backends.
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Any, Optional, Tuple

from ..core.fields import FieldMetadata
from ..core.resolver import parse_field_for_dialect
from ..core.types import Kind, is_byte_sequence
from ..utils.naming import build_key_name
from .base import ColumnType, Dialect, UnsupportedTypeError
from .registry import register_dialect

MAX_VARCHAR_SIZE = 65532

# a bare leading zero marks a C-style octal literal
_LEGACY_OCTAL_RE = re.compile(r"^[+-]?0[0-7]+$")


def parse_int(value: Any) -> Optional[int]:
    """
    Parse a limit/offset style value, returning ``None`` when it is absent or malformed.

    Accepts ints, whole-valued floats and decimals, and numeric strings with
    ``0x``/``0o``/``0b`` prefixes or a leading-zero octal form such as ``"010"``.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, (float, Decimal)):
        try:
            parsed = int(value)
        except (ValueError, OverflowError):
            return None
        return parsed if parsed == value else None
    text = str(value).strip()
    try:
        return int(text, 0)
    except ValueError:
        pass
    if _LEGACY_OCTAL_RE.match(text):
        return int(text, 8)
    return None


class CommonDialect(Dialect):
    """
    Dialect emitting ANSI SQL with ``?`` placeholders and INFORMATION_SCHEMA lookups.
    """

    name = "common"

    def bind_var(self, position: int) -> str:
        return "?"

    def quote(self, key: str) -> str:
        return f'"{key}"'

    def split_data_type_of(self, field: FieldMetadata) -> ColumnType:
        resolved = parse_field_for_dialect(field, self)
        sql_type = resolved.sql_type
        size = resolved.size

        if not sql_type:
            kind = resolved.kind
            if kind is Kind.BOOL:
                sql_type = "BOOLEAN"
            elif kind is Kind.INT:
                sql_type = "INTEGER AUTO_INCREMENT" if self.field_can_auto_increment(field) else "INTEGER"
            elif kind is Kind.INT64:
                sql_type = "BIGINT AUTO_INCREMENT" if self.field_can_auto_increment(field) else "BIGINT"
            elif kind is Kind.FLOAT:
                sql_type = "FLOAT"
            elif kind is Kind.STRING:
                if 0 < size < MAX_VARCHAR_SIZE:
                    sql_type = f"VARCHAR({size})"
                else:
                    sql_type = f"VARCHAR({MAX_VARCHAR_SIZE})"
            elif kind is Kind.TIME:
                sql_type = "TIMESTAMP"
            elif kind is Kind.BYTES and is_byte_sequence(resolved.example):
                if 0 < size < MAX_VARCHAR_SIZE:
                    sql_type = f"BINARY({size})"
                else:
                    sql_type = f"BINARY({MAX_VARCHAR_SIZE})"

        if not sql_type:
            raise UnsupportedTypeError(
                f"invalid sql type {type(resolved.example).__name__} ({resolved.kind}) for {self.name}"
            )
        return ColumnType(sql_type, resolved.additional_type)

    # Introspection -----------------------------------------------------------
    def _database_and_table(self, table_name: str) -> Tuple[str, str]:
        if "." in table_name:
            database, table = table_name.split(".", 1)
            return database, table
        return self.current_database(), table_name

    def has_index(self, table_name: str, index_name: str) -> bool:
        database, table = self._database_and_table(table_name)
        count = self._count(
            "SELECT count(*) FROM INFORMATION_SCHEMA.STATISTICS "
            "WHERE table_schema = ? AND table_name = ? AND index_name = ?",
            database,
            table,
            index_name,
        )
        return count > 0

    def has_foreign_key(self, table_name: str, foreign_key_name: str) -> bool:
        return False

    def has_table(self, table_name: str) -> bool:
        database, table = self._database_and_table(table_name)
        count = self._count(
            "SELECT count(*) FROM INFORMATION_SCHEMA.TABLES WHERE table_schema = ? AND table_name = ?",
            database,
            table,
        )
        return count > 0

    def has_column(self, table_name: str, column_name: str) -> bool:
        database, table = self._database_and_table(table_name)
        count = self._count(
            "SELECT count(*) FROM INFORMATION_SCHEMA.COLUMNS "
            "WHERE table_schema = ? AND table_name = ? AND column_name = ?",
            database,
            table,
            column_name,
        )
        return count > 0

    def current_database(self) -> str:
        row = self._query_row("SELECT DATABASE()")
        if not row or row[0] is None:
            return ""
        return str(row[0])

    # DDL ---------------------------------------------------------------------
    def remove_index(self, table_name: str, index_name: str) -> None:
        self._exec(f"DROP INDEX {index_name}")

    def remove_constraint(self, table_name: str, constraint_name: str) -> None:
        self._exec(f"ALTER TABLE {table_name} DROP CONSTRAINT {constraint_name}")

    def modify_column(self, table_name: str, column_name: str, typ: str) -> None:
        self._exec(f"ALTER TABLE {table_name} ALTER COLUMN {column_name} TYPE {typ}")

    # Clauses -----------------------------------------------------------------
    def limit_and_offset_sql(self, limit: Any = None, offset: Any = None) -> str:
        sql = ""
        parsed_limit = parse_int(limit)
        if parsed_limit is not None and parsed_limit >= 0:
            sql += f" LIMIT {parsed_limit}"
        parsed_offset = parse_int(offset)
        if parsed_offset is not None and parsed_offset >= 0:
            sql += f" OFFSET {parsed_offset}"
        return sql

    def select_from_dummy_table(self) -> str:
        return ""

    def last_insert_id_returning_suffix(self, table_name: str, column_name: str) -> str:
        return ""

    def default_value_str(self) -> str:
        return "DEFAULT VALUES"

    def build_key_name(self, kind: str, table_name: str, *fields: str) -> str:
        return build_key_name(kind, table_name, *fields)

    def normalize_index_and_column(self, index_name: str, column_name: str) -> Tuple[str, str]:
        return index_name, column_name

    def resolve_row_id(self, table_name: str, row_id: Any) -> Any:
        return row_id

    def client_statement_separator(self) -> str:
        return ";"

    def column_equality(self, field_db_name: str, column_name: str) -> bool:
        return field_db_name == column_name

    def get_byte_limit(self) -> int:
        return MAX_VARCHAR_SIZE


register_dialect(CommonDialect.name, CommonDialect)
