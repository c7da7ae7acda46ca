"""
Core building blocks: field metadata, value kinds and type resolution.
"""

from .fields import FieldError, FieldMetadata, unwrap_optional
from .model import ORM, Model, PrimaryKey, model_fields
from .resolver import DEFAULT_SIZE, ResolvedType, parse_field_for_dialect
from .types import (
    JSON,
    BigInt,
    Kind,
    Scanner,
    SQLTypeProvider,
    is_byte_sequence,
    is_json,
    is_uuid,
    kind_of,
    register_kind,
    register_zero_factory,
    zero_value,
)

__all__ = [
    "BigInt",
    "DEFAULT_SIZE",
    "FieldError",
    "FieldMetadata",
    "JSON",
    "Kind",
    "Model",
    "ORM",
    "PrimaryKey",
    "ResolvedType",
    "Scanner",
    "SQLTypeProvider",
    "is_byte_sequence",
    "is_json",
    "is_uuid",
    "kind_of",
    "model_fields",
    "parse_field_for_dialect",
    "register_kind",
    "register_zero_factory",
    "unwrap_optional",
    "zero_value",
]
