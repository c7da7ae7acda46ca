"""DSN parsing and dialect name selection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qs, urlencode, urlparse

# DSN scheme -> registered dialect name
SCHEME_DIALECTS: dict[str, str] = {
    "oracle": "oci8",
    "oci8": "oci8",
    "sqlite": "sqlite3",
    "sqlite3": "sqlite3",
    "postgres": "postgres",
    "postgresql": "postgres",
    "mysql": "mysql",
}


@dataclass
class DSNConfig:
    driver: str
    username: Optional[str]
    password: Optional[str]
    host: Optional[str]
    port: Optional[int]
    database: Optional[str]
    path: str
    query: dict[str, str]

    @property
    def dialect_name(self) -> str:
        return dialect_name_for_scheme(self.driver)

    def redacted(self) -> str:
        """
        Return the DSN with the password masked.
        """

        netloc = ""
        if self.username:
            netloc += self.username
            if self.password:
                netloc += ":***"
            netloc += "@"
        if self.host:
            netloc += self.host
        if self.port:
            netloc += f":{self.port}"

        result = f"{self.driver}://{netloc}{self.path or ''}"
        if self.query:
            result += f"?{urlencode(self.query)}"
        return result


def dialect_name_for_scheme(scheme: str) -> str:
    """
    Map a DSN scheme such as ``postgresql+psycopg`` to a dialect name.

    Unknown schemes are returned as-is so the registry can fall back.
    """
    base = scheme.lower().split("+", 1)[0]
    return SCHEME_DIALECTS.get(base, base)


def parse_dsn(dsn: str) -> DSNConfig:
    parsed = urlparse(dsn)
    query = {k: v[0] for k, v in parse_qs(parsed.query).items()}
    return DSNConfig(
        driver=parsed.scheme,
        username=parsed.username,
        password=parsed.password,
        host=parsed.hostname,
        port=parsed.port,
        database=parsed.path.lstrip("/") or None,
        path=parsed.path or "",
        query=query,
    )
