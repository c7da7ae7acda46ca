"""
Resolution of field metadata into the inputs every dialect's type mapping needs.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from ..utils import get_logger
from .fields import FieldMetadata
from .types import Kind, Scanner, SQLTypeProvider, kind_of, zero_value

if TYPE_CHECKING:
    from ..dialects.base import Dialect

DEFAULT_SIZE = 255

logger = get_logger("core.resolver")


@dataclass(frozen=True)
class ResolvedType:
    example: Any
    sql_type: str
    size: int
    additional_type: str
    kind: Optional[Kind]


def scanner_value(value: Any) -> Any:
    """
    Descend through scanning dataclasses to the value they store.
    """
    while isinstance(value, Scanner) and dataclasses.is_dataclass(value):
        members = dataclasses.fields(value)
        if not members:
            break
        value = getattr(value, members[0].name)
    return value


def parse_field_for_dialect(field: FieldMetadata, dialect: "Dialect") -> ResolvedType:
    """
    Resolve ``field`` against ``dialect``.

    An empty ``sql_type`` on the result means the dialect has to infer the
    column type from ``kind``.
    """
    example = zero_value(field.underlying_type)

    if isinstance(example, SQLTypeProvider):
        sql_type = example.sql_type(dialect)
    else:
        sql_type, _ = dialect.get_tag_setting(field, "TYPE")

    if not sql_type:
        example = scanner_value(example)

    size = DEFAULT_SIZE
    raw_size, found = dialect.get_tag_setting(field, "SIZE")
    if found:
        try:
            size = int(raw_size)
        except ValueError:
            logger.debug("Ignoring non-numeric SIZE %r on field %s", raw_size, field.name)

    not_null, _ = dialect.get_tag_setting(field, "NOT NULL")
    unique, _ = dialect.get_tag_setting(field, "UNIQUE")
    parts = [not_null, unique]
    default, found = dialect.get_tag_setting(field, "DEFAULT")
    if found:
        parts.append(f"DEFAULT {default}")
    comment, found = dialect.get_tag_setting(field, "COMMENT")
    if found:
        parts.append(f"COMMENT {comment}")
    additional_type = " ".join(part for part in parts if part).strip()

    kind = field.kind if field.kind is not None else kind_of(example)
    return ResolvedType(
        example=example,
        sql_type=sql_type,
        size=size,
        additional_type=additional_type,
        kind=kind,
    )
