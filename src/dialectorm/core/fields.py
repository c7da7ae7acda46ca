"""
Field metadata consumed by dialects when rendering column definitions.

Metadata is produced by the model/tag parsing layer and handed to dialects
read-only, except for the derived facts a dialect records through
:meth:`FieldMetadata.tag_settings_set` while computing a column type.
"""

from __future__ import annotations

import types
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple, Union, get_args, get_origin

from ..utils.naming import camel_to_snake

if TYPE_CHECKING:
    from .types import Kind


class FieldError(Exception):
    """Raised when field metadata cannot be interpreted."""


_NONE_TYPE = type(None)


def unwrap_optional(value_type: Any) -> Tuple[Any, bool]:
    """
    Strip ``Optional[...]`` layers from ``value_type``.

    Returns the underlying type and whether any optional layer was removed.
    """
    optional = False
    while True:
        origin = get_origin(value_type)
        if origin is not Union and origin is not types.UnionType:
            return value_type, optional
        members = [arg for arg in get_args(value_type) if arg is not _NONE_TYPE]
        if len(members) != 1:
            raise FieldError(f"Cannot map union type {value_type!r} to a single column type")
        value_type = members[0]
        optional = True


@dataclass
class FieldMetadata:
    """
    Pre-parsed description of one model attribute.

    ``value_type`` is the declared Python class; wrapping it in ``Optional``
    marks the column as nullable. ``tag_settings`` keys are stored upper-case.
    """

    name: str
    value_type: Any
    db_name: str = ""
    tag_settings: Dict[str, str] = field(default_factory=dict)
    is_primary_key: bool = False
    kind: Optional["Kind"] = None

    def __post_init__(self) -> None:
        if not self.db_name:
            self.db_name = camel_to_snake(self.name)
        for key in list(self.tag_settings):
            normalized = key.upper()
            if normalized != key:
                self.tag_settings[normalized] = self.tag_settings.pop(key)

    @property
    def underlying_type(self) -> Any:
        value_type, _ = unwrap_optional(self.value_type)
        return value_type

    @property
    def nullable(self) -> bool:
        _, optional = unwrap_optional(self.value_type)
        return optional

    # Tag settings ---------------------------------------------------------
    def tag_settings_get(self, key: str) -> Tuple[str, bool]:
        if key in self.tag_settings:
            return self.tag_settings[key], True
        return "", False

    def tag_settings_get_first(self, *keys: str) -> Tuple[str, bool]:
        """
        Return the value of the first key present, in the order given.
        """
        for key in keys:
            value, found = self.tag_settings_get(key)
            if found:
                return value, True
        return "", False

    def tag_settings_set(self, key: str, value: str) -> None:
        self.tag_settings[key.upper()] = value

    def tag_settings_delete(self, key: str) -> None:
        self.tag_settings.pop(key.upper(), None)
