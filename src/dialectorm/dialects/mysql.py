"""
MySQL dialect implementation.
"""

from __future__ import annotations

import hashlib
import re
from typing import Any, Dict, Tuple

from ..core.fields import FieldMetadata
from ..core.resolver import parse_field_for_dialect
from ..core.types import Kind, is_byte_sequence
from ..utils.naming import sanitize_key_name
from .base import ColumnType, UnsupportedTypeError
from .common import MAX_VARCHAR_SIZE, CommonDialect, parse_int
from .registry import register_dialect

MAX_KEY_NAME_LENGTH = 64

_INDEX_PREFIX_RE = re.compile(r"^(.+)\((\d+)\)$")


class MySQLDialect(CommonDialect):
    """
    MySQL dialect using backtick quoting and qmark placeholders.
    """

    name = "mysql"

    def quote(self, key: str) -> str:
        escaped = key.replace("`", "``")
        return f"`{escaped}`"

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
                base_type = "int" if kind is Kind.INT else "bigint"
                if self.field_can_auto_increment(field):
                    derived["AUTO_INCREMENT"] = "AUTO_INCREMENT"
                    sql_type = f"{base_type} AUTO_INCREMENT"
                else:
                    sql_type = base_type
            elif kind is Kind.FLOAT:
                sql_type = "double"
            elif kind is Kind.STRING:
                if 0 < size < MAX_VARCHAR_SIZE:
                    sql_type = f"varchar({size})"
                else:
                    sql_type = "longtext"
            elif kind is Kind.TIME:
                precision, found = self.get_tag_setting(field, "PRECISION")
                precision = f"({precision})" if found else ""
                _, not_null = self.get_tag_setting(field, "NOT NULL")
                if not_null or field.is_primary_key:
                    sql_type = f"DATETIME{precision}"
                else:
                    sql_type = f"DATETIME{precision} NULL"
            elif kind is Kind.BYTES and is_byte_sequence(resolved.example):
                if 0 < size < MAX_VARCHAR_SIZE:
                    sql_type = f"varbinary({size})"
                else:
                    sql_type = "longblob"

        if not sql_type:
            raise UnsupportedTypeError(
                f"invalid sql type {type(resolved.example).__name__} ({resolved.kind}) for {self.name}"
            )
        return ColumnType(sql_type, resolved.additional_type, derived)

    def has_foreign_key(self, table_name: str, foreign_key_name: str) -> bool:
        database, table = self._database_and_table(table_name)
        count = self._count(
            "SELECT count(*) FROM INFORMATION_SCHEMA.TABLE_CONSTRAINTS "
            "WHERE CONSTRAINT_SCHEMA = ? AND TABLE_NAME = ? AND CONSTRAINT_NAME = ? "
            "AND CONSTRAINT_TYPE = 'FOREIGN KEY'",
            database,
            table,
            foreign_key_name,
        )
        return count > 0

    def remove_index(self, table_name: str, index_name: str) -> None:
        self._exec(f"DROP INDEX {index_name} ON {self.quote(table_name)}")

    def remove_constraint(self, table_name: str, constraint_name: str) -> None:
        self._exec(f"ALTER TABLE {table_name} DROP FOREIGN KEY {constraint_name}")

    def modify_column(self, table_name: str, column_name: str, typ: str) -> None:
        self._exec(f"ALTER TABLE {table_name} MODIFY COLUMN {column_name} {typ}")

    def limit_and_offset_sql(self, limit: Any = None, offset: Any = None) -> str:
        # MySQL has no bare OFFSET; it is only emitted alongside a LIMIT
        parsed_limit = parse_int(limit)
        if parsed_limit is None or parsed_limit < 0:
            return ""
        sql = f" LIMIT {parsed_limit}"
        parsed_offset = parse_int(offset)
        if parsed_offset is not None and parsed_offset >= 0:
            sql += f" OFFSET {parsed_offset}"
        return sql

    def select_from_dummy_table(self) -> str:
        return "FROM DUAL"

    def build_key_name(self, kind: str, table_name: str, *fields: str) -> str:
        key_name = super().build_key_name(kind, table_name, *fields)
        if len(key_name) <= MAX_KEY_NAME_LENGTH:
            return key_name
        digest = hashlib.sha1(key_name.encode("utf-8")).hexdigest()
        # 24 characters of the destination plus the 40 character digest
        prefix = sanitize_key_name(fields[0])[:24] if fields else ""
        return f"{prefix}{digest}"

    def normalize_index_and_column(self, index_name: str, column_name: str) -> Tuple[str, str]:
        match = _INDEX_PREFIX_RE.match(index_name)
        if not match:
            return index_name, column_name
        return match.group(1), f"{column_name}({match.group(2)})"


register_dialect(MySQLDialect.name, MySQLDialect)
