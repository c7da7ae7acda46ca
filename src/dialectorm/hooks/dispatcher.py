"""
Hook dispatcher delivering diagnostic events to subscribers.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional


HookHandler = Callable[..., None]


@dataclass(frozen=True)
class HookEvent:
    name: str


class HookDispatcher:
    """
    Maintains global and per-dialect hook handlers.
    """

    def __init__(self) -> None:
        self._global_handlers: Dict[str, List[HookHandler]] = defaultdict(list)
        self._dialect_handlers: Dict[str, Dict[str, List[HookHandler]]] = defaultdict(
            lambda: defaultdict(list)
        )

    def register(self, event: str, handler: HookHandler, *, dialect: Optional[str] = None) -> None:
        if dialect:
            self._dialect_handlers[dialect][event].append(handler)
        else:
            self._global_handlers[event].append(handler)

    def unregister(self, event: str, handler: HookHandler, *, dialect: Optional[str] = None) -> None:
        handlers = (
            self._dialect_handlers.get(dialect, {}).get(event, [])
            if dialect
            else self._global_handlers.get(event, [])
        )
        if handler in handlers:
            handlers.remove(handler)

    def fire(
        self,
        event: str,
        payload: Any = None,
        *,
        dialect: Optional[str] = None,
        **context: Any,
    ) -> None:
        handlers = list(self._global_handlers.get(event, []))
        if dialect:
            handlers.extend(self._dialect_handlers.get(dialect, {}).get(event, []))
        for handler in handlers:
            handler(payload, **context)

    def clear(self) -> None:
        self._global_handlers.clear()
        self._dialect_handlers.clear()


hooks = HookDispatcher()
