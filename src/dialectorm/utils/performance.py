"""
Slow-query threshold resolution.
"""

from __future__ import annotations

import os

SLOW_QUERY_ENV = "DIALECTORM_SLOW_QUERY_MS"


def resolve_slow_query_ms(*, default: int = 100, override: int | None = None) -> int:
    """
    Pick the slow-query threshold: explicit override, then environment, then default.

    Malformed or negative environment values are ignored.
    """
    if override is not None:
        return override
    raw = os.getenv(SLOW_QUERY_ENV)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    if value < 0:
        return default
    return value
