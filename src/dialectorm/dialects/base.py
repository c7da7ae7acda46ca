"""
Dialect strategy interface describing backend-specific SQL behaviours.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Protocol, Sequence, Tuple

from ..core.fields import FieldMetadata
from ..utils import get_logger, resolve_slow_query_ms, time_call


class DialectError(RuntimeError):
    """Base error for dialect failures."""


class UnsupportedTypeError(DialectError):
    """Raised when a field cannot be mapped to a column type on a backend."""


class Connection(Protocol):
    """
    Connection handle a dialect is bound to.

    ``execute`` returns a DB-API cursor; database adapters satisfy this.
    """

    def execute(self, sql: str, params: Sequence[Any] | None = None) -> Any: ...


@dataclass(frozen=True)
class ColumnType:
    """
    Column type computed for a field.

    ``derived`` carries facts learned while mapping the type, such as an
    identity or sequence-backed key, for the caller to persist.
    """

    sql_type: str
    additional_type: str = ""
    derived: Mapping[str, str] = field(default_factory=dict)

    def render(self) -> str:
        if not self.additional_type.strip():
            return self.sql_type
        return f"{self.sql_type} {self.additional_type}"


class Dialect(abc.ABC):
    """
    Strategy interface consumed by query, schema and adapter layers.

    Instances are bound to a single connection and are not thread-safe.
    """

    name: str = ""

    def __init__(self, db: Optional[Connection] = None, *, slow_query_ms: int | None = None) -> None:
        self.db = db
        self.logger = get_logger(f"dialects.{self.name or 'base'}")
        self.slow_query_ms = resolve_slow_query_ms(default=100, override=slow_query_ms)

    def set_db(self, db: Connection) -> None:
        self.db = db

    # Configuration ----------------------------------------------------------
    def get_tag_setting(self, field: FieldMetadata, key: str) -> Tuple[str, bool]:
        """
        Read ``key`` from ``field``, preferring ``"<DIALECT> <KEY>"`` over ``key``.
        """
        return field.tag_settings_get_first(f"{self.name.upper()} {key}", key)

    def field_can_auto_increment(self, field: FieldMetadata) -> bool:
        value, found = self.get_tag_setting(field, "AUTO_INCREMENT")
        if found:
            return value.lower() != "false"
        return field.is_primary_key

    # Column types ------------------------------------------------------------
    def column_type(self, field: FieldMetadata) -> str:
        """
        Render the column type for ``field`` and record derived facts on it.
        """
        column = self.split_data_type_of(field)
        for key, value in column.derived.items():
            field.tag_settings_set(key, value)
        return column.render()

    def data_type_of(self, field: FieldMetadata) -> str:
        return self.column_type(field)

    @abc.abstractmethod
    def split_data_type_of(self, field: FieldMetadata) -> ColumnType: ...

    # Syntax ------------------------------------------------------------------
    @abc.abstractmethod
    def bind_var(self, position: int) -> str: ...

    @abc.abstractmethod
    def quote(self, key: str) -> str: ...

    @abc.abstractmethod
    def limit_and_offset_sql(self, limit: Any = None, offset: Any = None) -> str: ...

    @abc.abstractmethod
    def select_from_dummy_table(self) -> str: ...

    @abc.abstractmethod
    def last_insert_id_returning_suffix(self, table_name: str, column_name: str) -> str: ...

    @abc.abstractmethod
    def default_value_str(self) -> str: ...

    @abc.abstractmethod
    def build_key_name(self, kind: str, table_name: str, *fields: str) -> str: ...

    @abc.abstractmethod
    def normalize_index_and_column(self, index_name: str, column_name: str) -> Tuple[str, str]: ...

    @abc.abstractmethod
    def client_statement_separator(self) -> str: ...

    @abc.abstractmethod
    def column_equality(self, field_db_name: str, column_name: str) -> bool: ...

    @abc.abstractmethod
    def get_byte_limit(self) -> int: ...

    # Introspection and DDL ---------------------------------------------------
    @abc.abstractmethod
    def has_table(self, table_name: str) -> bool: ...

    @abc.abstractmethod
    def has_column(self, table_name: str, column_name: str) -> bool: ...

    @abc.abstractmethod
    def has_index(self, table_name: str, index_name: str) -> bool: ...

    @abc.abstractmethod
    def has_foreign_key(self, table_name: str, foreign_key_name: str) -> bool: ...

    @abc.abstractmethod
    def remove_index(self, table_name: str, index_name: str) -> None: ...

    @abc.abstractmethod
    def remove_constraint(self, table_name: str, constraint_name: str) -> None: ...

    @abc.abstractmethod
    def modify_column(self, table_name: str, column_name: str, typ: str) -> None: ...

    @abc.abstractmethod
    def current_database(self) -> str: ...

    @abc.abstractmethod
    def resolve_row_id(self, table_name: str, row_id: Any) -> Any: ...

    # Connection helpers ------------------------------------------------------
    def _require_db(self) -> Connection:
        if self.db is None:
            raise DialectError(f"Dialect '{self.name}' is not bound to a connection.")
        return self.db

    def _query_row(self, sql: str, *params: Any) -> Any:
        db = self._require_db()
        with time_call(
            f"{self.name}.query",
            self.logger,
            sql=sql,
            params=params,
            threshold_ms=self.slow_query_ms,
        ):
            cursor = db.execute(sql, params)
            return cursor.fetchone()

    def _count(self, sql: str, *params: Any) -> int:
        row = self._query_row(sql, *params)
        if not row:
            return 0
        return int(row[0])

    def _exec(self, sql: str) -> None:
        db = self._require_db()
        with time_call(
            f"{self.name}.exec",
            self.logger,
            sql=sql,
            threshold_ms=self.slow_query_ms,
        ):
            db.execute(sql)
