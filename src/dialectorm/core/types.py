"""
Value kinds and opt-in capabilities consulted during column type resolution.
"""

from __future__ import annotations

import abc
import dataclasses
import enum
import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from .fields import FieldError

if TYPE_CHECKING:
    from ..dialects.base import Dialect


class Kind(enum.Enum):
    BOOL = "bool"
    INT = "int"
    INT64 = "int64"
    FLOAT = "float"
    STRING = "string"
    TIME = "time"
    BYTES = "bytes"
    STRUCT = "struct"


class BigInt(int):
    """
    Integer stored in a 64-bit column. Plain ``int`` maps to the default integer width.
    """


class JSON(bytes):
    """
    Raw, already-encoded JSON document.
    """


class SQLTypeProvider(abc.ABC):
    """
    Values that know their own column type for a given dialect.
    """

    @abc.abstractmethod
    def sql_type(self, dialect: "Dialect") -> str: ...


class Scanner(abc.ABC):
    """
    Values converted to and from driver representations.

    A dataclass implementing this interface wraps its first field; the
    resolver derives the column type from that field instead.
    """

    @abc.abstractmethod
    def scan(self, src: Any) -> None: ...

    @abc.abstractmethod
    def value(self) -> Any: ...


_KINDS: Dict[type, Kind] = {
    bool: Kind.BOOL,
    int: Kind.INT,
    BigInt: Kind.INT64,
    float: Kind.FLOAT,
    Decimal: Kind.FLOAT,
    str: Kind.STRING,
    date: Kind.TIME,
    datetime: Kind.TIME,
    bytes: Kind.BYTES,
    bytearray: Kind.BYTES,
    memoryview: Kind.BYTES,
    uuid.UUID: Kind.BYTES,
}

_ZERO_FACTORIES: Dict[type, Callable[[], Any]] = {
    datetime: lambda: datetime.min,
    date: lambda: date.min,
    uuid.UUID: lambda: uuid.UUID(int=0),
    memoryview: lambda: memoryview(b""),
}


def register_kind(value_type: type, kind: Kind) -> None:
    """
    Map ``value_type`` (and its subclasses) to ``kind``.
    """
    _KINDS[value_type] = kind


def register_zero_factory(value_type: type, factory: Callable[[], Any]) -> None:
    _ZERO_FACTORIES[value_type] = factory


def kind_of(value: Any) -> Optional[Kind]:
    value_type = value if isinstance(value, type) else type(value)
    for klass in value_type.__mro__:
        kind = _KINDS.get(klass)
        if kind is not None:
            return kind
    if dataclasses.is_dataclass(value_type):
        return Kind.STRUCT
    return None


def zero_value(value_type: type) -> Any:
    """
    Build the example value inspected by the resolver.
    """
    factory = _ZERO_FACTORIES.get(value_type)
    if factory is not None:
        return factory()
    try:
        return value_type()
    except TypeError as exc:
        raise FieldError(
            f"Cannot build an example value for {getattr(value_type, '__name__', value_type)!r}; "
            "register a zero factory for it"
        ) from exc


def is_uuid(value: Any) -> bool:
    return isinstance(value, uuid.UUID)


def is_json(value: Any) -> bool:
    return isinstance(value, JSON)


def is_byte_sequence(value: Any) -> bool:
    return isinstance(value, (bytes, bytearray, memoryview))
