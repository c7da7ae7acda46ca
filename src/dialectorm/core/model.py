"""
Primary key value wrapper and the base models shared by application models.
"""

from __future__ import annotations

import dataclasses
import math
import typing
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional

from .fields import FieldError, FieldMetadata
from .types import Scanner

_UINT64_MASK = (1 << 64) - 1


@dataclass
class PrimaryKey(Scanner):
    """
    Canonical unsigned identifier read back from heterogeneous drivers.

    Some drivers hand back a float or a signed integer for a numeric key;
    ``scan`` normalises those and ignores anything else, leaving the key at
    zero. Raising here breaks inserts on backends whose driver returns an
    unexpected shape.
    """

    id: int = 0

    def scan(self, src: Any) -> None:
        if isinstance(src, bool):
            return
        if isinstance(src, int):
            self.id = src & _UINT64_MASK
        elif isinstance(src, float) and math.isfinite(src):
            self.id = int(src) & _UINT64_MASK

    def value(self) -> int:
        return self.id


def _primary_key(**kwargs: Any) -> Any:
    return field(metadata={"primary_key": True}, **kwargs)


@dataclass
class Model:
    """
    Base model with an auto-incrementing ``id`` and audit timestamps.
    """

    id: int = _primary_key(default=0)
    created_at: datetime = datetime.min
    updated_at: datetime = datetime.min
    deleted_at: Optional[datetime] = field(default=None, metadata={"tags": {"INDEX": "INDEX"}})


@dataclass
class ORM:
    """
    Same columns as :class:`Model`, keyed by :class:`PrimaryKey`.

    Use it on backends whose driver reports generated keys as floats.
    """

    id: PrimaryKey = _primary_key(default_factory=PrimaryKey)
    created_at: datetime = datetime.min
    updated_at: datetime = datetime.min
    deleted_at: Optional[datetime] = field(default=None, metadata={"tags": {"INDEX": "INDEX"}})


def model_fields(model: type) -> List[FieldMetadata]:
    """
    Build fresh :class:`FieldMetadata` for every field of a dataclass model.

    Tag settings come from the ``"tags"`` entry of each field's metadata and
    ``primary_key`` marks the key column. A new list is returned on every
    call because dialects record derived facts on the metadata.
    """
    if not dataclasses.is_dataclass(model):
        raise FieldError(f"{model!r} is not a dataclass model")
    hints = typing.get_type_hints(model)
    result = []
    for member in dataclasses.fields(model):
        result.append(
            FieldMetadata(
                name=member.name,
                value_type=hints[member.name],
                tag_settings=dict(member.metadata.get("tags", {})),
                is_primary_key=bool(member.metadata.get("primary_key", False)),
            )
        )
    return result
