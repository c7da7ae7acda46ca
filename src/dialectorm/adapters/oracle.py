"""
Oracle database adapter implementation.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Sequence

from ..dialects.registry import new_dialect
from ..utils import get_logger, resolve_slow_query_ms, time_call
from .base import (
    AdapterConfigurationError,
    AdapterConnectionError,
    AdapterExecutionError,
    ConnectionConfig,
    DatabaseAdapter,
)

_BIND_RE = re.compile(r"(?<![:\w]):(\d+)\b")
_LITERAL_RE = re.compile(r"'(?:[^']|'')*'")


def _load_driver():
    try:
        import oracledb

        return oracledb
    except ImportError:
        return None


@dataclass
class OracleConnectionState:
    connection: Any
    config: ConnectionConfig
    driver: Any


class OracleAdapter(DatabaseAdapter):
    """
    Adapter wrapping the python-oracledb driver.
    """

    def __init__(self, slow_query_ms: int | None = None) -> None:
        self._state: OracleConnectionState | None = None
        self.logger = get_logger("adapters.oracle")
        self.slow_query_ms = resolve_slow_query_ms(default=100, override=slow_query_ms)
        self.dialect = new_dialect("oci8", self)

    def connect(self, config: ConnectionConfig) -> Any:
        driver = _load_driver()
        if driver is None:
            raise AdapterConfigurationError("oracledb is required to use OracleAdapter.")
        if not config.dsn:
            raise AdapterConfigurationError(
                "ConnectionConfig must be built from a DSN for Oracle connections."
            )

        dsn = config.dsn
        options = dict(config.options or {})
        if config.timeout and "tcp_connect_timeout" not in options:
            options["tcp_connect_timeout"] = config.timeout

        self.logger.info(
            "Connecting to Oracle %s (autocommit=%s)",
            config.descriptive_label(),
            config.autocommit,
        )

        service = dsn.database or ""
        address = f"{dsn.host or 'localhost'}:{dsn.port or 1521}/{service}"
        try:
            connection = driver.connect(
                user=dsn.username,
                password=dsn.password,
                dsn=address,
                **options,
            )
        except Exception as exc:
            raise AdapterConnectionError("Failed to connect to Oracle.") from exc
        connection.autocommit = bool(config.autocommit)

        if config.slow_query_ms is not None:
            self.slow_query_ms = config.slow_query_ms
        self._state = OracleConnectionState(connection, config, driver)
        return connection

    def close(self) -> None:
        if self._state:
            try:
                self._state.connection.close()
            finally:
                self._state = None

    def _ensure_connection(self):
        if not self._state:
            raise AdapterConnectionError("OracleAdapter is not connected.")
        return self._state.connection

    def execute(self, sql: str, params: Sequence[Any] | None = None):
        connection = self._ensure_connection()
        cursor = connection.cursor()
        params = list(params or ())
        self._validate_params(sql, params)
        with time_call(
            "oracle.execute",
            self.logger,
            sql=sql,
            params=params,
            threshold_ms=self.slow_query_ms,
        ):
            cursor.execute(sql, params)
        return cursor

    def begin(self) -> None:
        # Oracle opens a transaction implicitly with the first DML statement.
        self._ensure_connection()

    def commit(self) -> None:
        connection = self._ensure_connection()
        connection.commit()

    def rollback(self) -> None:
        connection = self._ensure_connection()
        connection.rollback()

    def last_insert_id(self, cursor: Any, table: str, pk_column: str) -> Any:
        row_id = getattr(cursor, "lastrowid", None)
        if row_id is None:
            raise AdapterExecutionError("No ROWID available for last insert id.")
        return self.dialect.resolve_row_id(table, row_id)

    @staticmethod
    def _count_placeholders(sql: str) -> int:
        stripped = _LITERAL_RE.sub("''", sql)
        return len(set(_BIND_RE.findall(stripped)))

    def _validate_params(self, sql: str, params: Sequence[Any]) -> None:
        placeholder_count = self._count_placeholders(sql)
        if placeholder_count == 0:
            if params:
                raise AdapterExecutionError(
                    "Parameters provided but SQL statement has no placeholders."
                )
            return
        if placeholder_count != len(params):
            raise AdapterExecutionError(
                f"Parameter count mismatch: expected {placeholder_count}, received {len(params)}."
            )
