"""
dialectorm public package initialization.

Exposes field metadata, type resolution and the dialect registry. Importing
the package registers the built-in dialects.
"""

from .core import (  # noqa: F401
    JSON,
    BigInt,
    FieldError,
    FieldMetadata,
    Kind,
    Model,
    ORM,
    PrimaryKey,
    Scanner,
    SQLTypeProvider,
    model_fields,
    parse_field_for_dialect,
)
from .dialects import (  # noqa: F401
    ColumnType,
    CommonDialect,
    Dialect,
    DialectError,
    MySQLDialect,
    OracleDialect,
    PostgresDialect,
    SQLiteDialect,
    UnsupportedTypeError,
    get_dialect,
    new_dialect,
    register_dialect,
)
from .hooks import hooks  # noqa: F401

__all__ = [
    "BigInt",
    "ColumnType",
    "CommonDialect",
    "Dialect",
    "DialectError",
    "FieldError",
    "FieldMetadata",
    "JSON",
    "Kind",
    "Model",
    "MySQLDialect",
    "ORM",
    "OracleDialect",
    "PostgresDialect",
    "PrimaryKey",
    "SQLiteDialect",
    "SQLTypeProvider",
    "Scanner",
    "UnsupportedTypeError",
    "get_dialect",
    "hooks",
    "model_fields",
    "new_dialect",
    "parse_field_for_dialect",
    "register_dialect",
]
