"""
Process-wide registry mapping dialect names to implementations.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Type, Union

from ..hooks import HookEvent, hooks
from ..utils import get_logger
from .base import Connection, Dialect

FALLBACK_EVENT = HookEvent("dialect.fallback")

_lock = threading.RLock()
_dialects: Dict[str, Type[Dialect]] = {}

logger = get_logger("dialects.registry")


@dataclass(frozen=True)
class DialectFallback:
    """
    Payload fired when a dialect name is unknown and the generic dialect is used.
    """

    requested: str
    fallback: str


def register_dialect(name: str, dialect: Union[Type[Dialect], Dialect]) -> None:
    """
    Register ``dialect`` under ``name``. A later registration replaces an earlier one.
    """
    dialect_cls = dialect if isinstance(dialect, type) else type(dialect)
    with _lock:
        _dialects[name] = dialect_cls


def get_dialect(name: str) -> Tuple[Optional[Type[Dialect]], bool]:
    with _lock:
        dialect_cls = _dialects.get(name)
    return dialect_cls, dialect_cls is not None


def registered_dialects() -> list[str]:
    with _lock:
        return sorted(_dialects)


def new_dialect(name: str, db: Optional[Connection] = None) -> Dialect:
    """
    Build a fresh dialect bound to ``db``.

    Unknown names get the generic dialect, which works for ANSI-compatible
    backends; a warning is logged and ``dialect.fallback`` is fired. Errors
    raised by fallback handlers are logged and do not abort resolution.
    """
    dialect_cls, found = get_dialect(name)
    if found and dialect_cls is not None:
        return dialect_cls(db)

    from .common import CommonDialect

    logger.warning("`%s` is not officially supported, running under compatibility mode.", name)
    try:
        hooks.fire(
            FALLBACK_EVENT.name,
            DialectFallback(requested=name, fallback=CommonDialect.name),
            dialect=name,
        )
    except Exception:
        logger.exception("dialect.fallback handler failed for `%s`", name)
    return CommonDialect(db)
