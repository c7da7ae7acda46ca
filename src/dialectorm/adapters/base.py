"""
Adapter protocol and connection configuration for dialectorm.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Protocol, Sequence

from ..config import DSNConfig, dialect_name_for_scheme, parse_dsn
from ..dialects.base import Dialect


class AdapterError(RuntimeError):
    """Base error for adapter-related failures."""


class AdapterConfigurationError(AdapterError):
    """Raised when configuration or required dependencies are invalid."""


class AdapterConnectionError(AdapterError):
    """Raised when establishing or using a connection fails."""


class AdapterExecutionError(AdapterError):
    """Raised when SQL execution or parameter validation fails."""


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(value: str, *, key: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise AdapterConfigurationError(f"Invalid boolean value for '{key}': {value!r}")


def _parse_float(value: str, *, key: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise AdapterConfigurationError(f"Invalid float value for '{key}': {value!r}") from exc


def _parse_int(value: str, *, key: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise AdapterConfigurationError(f"Invalid integer value for '{key}': {value!r}") from exc


@dataclass
class ConnectionConfig:
    """
    Normalized connection configuration for adapters.
    """

    url: str
    autocommit: bool = False
    timeout: float | None = None
    slow_query_ms: int | None = None
    options: dict[str, Any] | None = None
    dsn: DSNConfig | None = None
    source: str | None = None

    @classmethod
    def from_dsn(cls, dsn: str, **kwargs: Any) -> "ConnectionConfig":
        """
        Build a connection config by parsing the DSN string.

        ``autocommit``, ``timeout`` and ``slow_query_ms`` query parameters are
        lifted into fields; the remaining ones become driver options. Keyword
        arguments win over values found in the DSN.
        """

        parsed = parse_dsn(dsn)
        query = dict(parsed.query)

        autocommit = None
        if "autocommit" in query:
            autocommit = _parse_bool(query.pop("autocommit"), key="autocommit")
        timeout = None
        if "timeout" in query:
            timeout = _parse_float(query.pop("timeout"), key="timeout")
        slow_query_ms = None
        if "slow_query_ms" in query:
            slow_query_ms = _parse_int(query.pop("slow_query_ms"), key="slow_query_ms")

        options = dict(query)
        options.update(kwargs.pop("options", None) or {})

        autocommit = kwargs.pop("autocommit", autocommit)
        return cls(
            url=dsn,
            dsn=parsed,
            autocommit=bool(autocommit),
            timeout=kwargs.pop("timeout", timeout),
            slow_query_ms=kwargs.pop("slow_query_ms", slow_query_ms),
            options=options or None,
            **kwargs,
        )

    @classmethod
    def from_env(cls, env_var: str, **kwargs: Any) -> "ConnectionConfig":
        """
        Build a config from an environment variable containing a DSN.
        """

        value = os.getenv(env_var)
        if not value:
            raise AdapterConfigurationError(f"Environment variable {env_var} is not set")
        return cls.from_dsn(value, source=env_var, **kwargs)

    @property
    def dialect_name(self) -> str:
        if self.dsn:
            return self.dsn.dialect_name
        scheme = self.url.split(":", 1)[0] if ":" in self.url else ""
        return dialect_name_for_scheme(scheme)

    def redacted_dsn(self) -> str:
        if self.dsn:
            return self.dsn.redacted()
        return self.url

    def descriptive_label(self) -> str:
        redacted = self.redacted_dsn()
        if self.source:
            return f"{self.source} ({redacted})"
        return redacted


class DatabaseAdapter(Protocol):
    """
    Adapter interface exposing the database operations dialects rely on.

    Adapters are the connection handle their dialect is bound to.
    """

    dialect: Dialect

    def connect(self, config: ConnectionConfig) -> Any:
        """
        Establish a connection handle using the supplied configuration.
        """

    def close(self) -> None:
        """
        Close underlying resources. Implementations should be idempotent.
        """

    def execute(self, sql: str, params: Sequence[Any] | None = None) -> Any:
        """
        Execute a single SQL statement returning a cursor-like object.
        """

    def begin(self) -> None:
        """
        Start a transaction.
        """

    def commit(self) -> None:
        """
        Commit the current transaction.
        """

    def rollback(self) -> None:
        """
        Roll back the current transaction.
        """

    def last_insert_id(self, cursor: Any, table: str, pk_column: str) -> Any:
        """
        Retrieve the primary key value generated by the previous insert.
        """
