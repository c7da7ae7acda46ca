"""
Naming utilities for dialectorm.
"""

import hashlib
import re


_FIRST_CAP_RE = re.compile("(.)([A-Z][a-z]+)")
_ALL_CAP_RE = re.compile("([a-z0-9])([A-Z])")
_KEY_NAME_RE = re.compile("[^a-zA-Z0-9]+")


def camel_to_snake(name: str) -> str:
    """
    Convert ``CamelCase`` names to ``snake_case`` for column naming.
    """
    step1 = _FIRST_CAP_RE.sub(r"\1_\2", name)
    snake = _ALL_CAP_RE.sub(r"\1_\2", step1).lower()
    return snake


def shorten_identifier(value: str, limit: int = 30) -> str:
    """
    Bound ``value`` to ``limit`` characters.

    Identifiers that already fit are returned untouched. Longer ones are
    replaced by the hex SHA-1 digest of the original name, cut to
    ``limit - 1`` characters when the digest itself does not fit. The result
    only depends on ``value``, so repeated schema passes agree on the name.
    Distinct long names may collide.
    """
    if len(value) <= limit:
        return value
    digest = hashlib.sha1(value.encode("utf-8")).hexdigest()
    if len(digest) <= limit:
        return digest
    return digest[: limit - 1]


def sanitize_key_name(value: str) -> str:
    return _KEY_NAME_RE.sub("_", value)


def build_key_name(kind: str, table_name: str, *fields: str) -> str:
    """
    Build an index/foreign key name such as ``idx_users_email``.
    """
    key_name = f"{kind}_{table_name}_{'_'.join(fields)}"
    return sanitize_key_name(key_name)
