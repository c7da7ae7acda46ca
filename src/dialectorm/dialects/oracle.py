"""
Oracle dialect implementation.

Oracle limits identifiers to 30 characters, folds unquoted names to upper
case, paginates with ``OFFSET ... FETCH`` and reports inserted rows by ROWID
rather than by primary key.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict

from ..core.fields import FieldMetadata
from ..core.resolver import parse_field_for_dialect
from ..core.types import Kind, is_byte_sequence, is_json, is_uuid
from ..utils.naming import shorten_identifier
from .base import ColumnType, UnsupportedTypeError
from .common import CommonDialect, parse_int
from .registry import register_dialect

MAX_IDENTIFIER_LENGTH = 30
MAX_VARCHAR2_SIZE = 4000


def _to_int(value: Any) -> int:
    # NUMBER columns arrive as int, Decimal or float depending on driver settings
    if isinstance(value, (str, bytes)):
        value = Decimal(value.decode("ascii") if isinstance(value, bytes) else value.strip())
    return int(value)


class OracleDialect(CommonDialect):
    """
    Oracle dialect using numbered ``:N`` placeholders.
    """

    name = "oci8"

    def bind_var(self, position: int) -> str:
        return f":{position}"

    def quote(self, key: str) -> str:
        return f'"{shorten_identifier(key, MAX_IDENTIFIER_LENGTH).upper()}"'

    def split_data_type_of(self, field: FieldMetadata) -> ColumnType:
        resolved = parse_field_for_dialect(field, self)
        sql_type = resolved.sql_type
        size = resolved.size
        derived: Dict[str, str] = {}

        charset, _ = self.get_tag_setting(field, "CHARSET")
        string_type = "NVARCHAR2" if charset.lower() == "utf-8" else "VARCHAR2"

        if not sql_type:
            kind = resolved.kind
            if kind is Kind.BOOL:
                sql_type = "CHAR(1)"
            elif kind is Kind.INT:
                if self.field_can_auto_increment(field):
                    derived["AUTO_INCREMENT"] = "GENERATED ALWAYS"
                    sql_type = "NUMBER GENERATED ALWAYS AS IDENTITY"
                else:
                    sql_type = "NUMBER"
            elif kind is Kind.INT64:
                _, auto_increment = self.get_tag_setting(field, "AUTO_INCREMENT")
                if auto_increment or field.is_primary_key:
                    derived["SEQUENCE"] = "SEQUENCE"
                sql_type = "NUMBER"
            elif kind is Kind.FLOAT:
                sql_type = "FLOAT"
            elif kind is Kind.STRING:
                # VARCHAR2 tops out at 4000 bytes with MAX_STRING_SIZE = STANDARD
                if 0 < size < MAX_VARCHAR2_SIZE:
                    sql_type = f"{string_type}({size})"
                else:
                    sql_type = f"{string_type}(255)"
            elif kind is Kind.TIME:
                sql_type = "TIMESTAMP"
            elif kind is Kind.BYTES:
                if is_uuid(resolved.example):
                    sql_type = f"{string_type}(36)"
                elif is_json(resolved.example):
                    sql_type = f"CLOB CHECK ({field.db_name.lower()} IS JSON)"
                elif is_byte_sequence(resolved.example):
                    sql_type = "BLOB"
        elif is_uuid(resolved.example):
            sql_type = f"{string_type}(36)"

        if not sql_type:
            raise UnsupportedTypeError(
                f"invalid sql type {type(resolved.example).__name__} ({resolved.kind}) for {self.name}"
            )
        return ColumnType(sql_type, resolved.additional_type, derived)

    # Introspection -----------------------------------------------------------
    def has_index(self, table_name: str, index_name: str) -> bool:
        count = self._count(
            "SELECT COUNT(*) FROM USER_INDEXES WHERE TABLE_NAME = :1 AND INDEX_NAME = :2",
            table_name.upper(),
            index_name.upper(),
        )
        return count > 0

    def has_foreign_key(self, table_name: str, foreign_key_name: str) -> bool:
        count = self._count(
            "SELECT COUNT(*) FROM USER_CONSTRAINTS "
            "WHERE CONSTRAINT_TYPE = 'R' AND TABLE_NAME = :1 AND CONSTRAINT_NAME = :2",
            table_name.upper(),
            foreign_key_name.upper(),
        )
        return count > 0

    def has_table(self, table_name: str) -> bool:
        count = self._count(
            "SELECT COUNT(*) FROM USER_TABLES WHERE TABLE_NAME = :1",
            table_name.upper(),
        )
        return count > 0

    def has_column(self, table_name: str, column_name: str) -> bool:
        count = self._count(
            "SELECT COUNT(*) FROM USER_TAB_COLUMNS WHERE TABLE_NAME = :1 AND COLUMN_NAME = :2",
            table_name.upper(),
            column_name.upper(),
        )
        return count > 0

    def current_database(self) -> str:
        row = self._query_row("SELECT SYS_CONTEXT('USERENV', 'CURRENT_SCHEMA') FROM DUAL")
        if not row or row[0] is None:
            return ""
        return str(row[0])

    # DDL ---------------------------------------------------------------------
    def modify_column(self, table_name: str, column_name: str, typ: str) -> None:
        self._exec(f"ALTER TABLE {table_name} MODIFY {column_name} {typ}")

    def drop_nullable(self, table_name: str, column_name: str, typ: str) -> None:
        self._exec(f"ALTER TABLE {table_name} MODIFY {column_name} {typ} NULL")

    # Row ids -----------------------------------------------------------------
    def resolve_row_id(self, table_name: str, row_id: Any) -> Any:
        """
        Look up the ``id`` of the row addressed by ``row_id``.

        Returns ``row_id`` unchanged, after logging a warning, when the lookup fails.
        """
        locator = row_id.decode("ascii") if isinstance(row_id, bytes) else str(row_id)
        query = f"SELECT id FROM {self.quote(table_name)} WHERE rowid = :1"
        try:
            row = self._query_row(query, locator)
            if not row:
                raise LookupError(f"no row with rowid {locator}")
            return _to_int(row[0])
        except Exception as exc:
            self.logger.warning(
                "Unable to fetch ID for rowID %s: %s",
                locator,
                exc,
                extra={"table": table_name, "row_id": locator},
            )
        return row_id

    # Clauses -----------------------------------------------------------------
    def limit_and_offset_sql(self, limit: Any = None, offset: Any = None) -> str:
        if limit is None and offset is None:
            return ""

        parsed_limit = parse_int(limit)
        parsed_offset = parse_int(offset)

        sql = ""
        if parsed_offset is not None and parsed_offset >= 0:
            sql += f" OFFSET {parsed_offset}"
        elif parsed_limit is not None and parsed_limit >= 0:
            # a FETCH clause needs a preceding OFFSET
            sql += " OFFSET 0"

        if parsed_limit is not None and parsed_limit >= 0:
            sql += f" ROWS FETCH NEXT {parsed_limit} ROWS ONLY"
        return sql

    def select_from_dummy_table(self) -> str:
        return "FROM DUAL"

    def build_key_name(self, kind: str, table_name: str, *fields: str) -> str:
        key_name = super().build_key_name(kind, table_name, *fields)
        return shorten_identifier(key_name, MAX_IDENTIFIER_LENGTH)

    def client_statement_separator(self) -> str:
        return ""

    def column_equality(self, field_db_name: str, column_name: str) -> bool:
        return field_db_name.casefold() == column_name.casefold()

    def get_byte_limit(self) -> int:
        return 30000


register_dialect(OracleDialect.name, OracleDialect)
