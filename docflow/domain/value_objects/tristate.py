"""Explicit tri-state for optional JSON-shaped attributes.

Some attributes (approval/permission config, field options, validation
rules, conditional display) distinguish "never set" from "explicitly
cleared". A value of type Tristate[T] is one of:

- UNSET: the caller did not supply the attribute; storage is not touched
  on update, and the create-time default applies.
- JSON_NULL: the attribute is explicitly absent; storage writes SQL NULL.
- a T: the attribute has a value.
"""

from enum import Enum
from typing import Any


class _Marker(Enum):
    UNSET = "unset"
    JSON_NULL = "null"

    def __repr__(self) -> str:
        return self.name

    def __bool__(self) -> bool:
        return False


UNSET = _Marker.UNSET
JSON_NULL = _Marker.JSON_NULL

type Tristate[T] = T | _Marker


def is_set(value: Any) -> bool:
    """Return True unless value is UNSET (JSON_NULL counts as set)."""
    return value is not UNSET


def or_null(value: Any) -> Any:
    """Map UNSET to JSON_NULL; used for create-time defaults."""
    return JSON_NULL if value is UNSET else value


def to_storage(value: Any) -> Any:
    """Map a set Tristate to the value written to a nullable JSON column.

    Raises:
        ValueError: If value is UNSET (callers must skip unset attributes).
    """
    if value is UNSET:
        raise ValueError("UNSET attributes must not be written")
    return None if value is JSON_NULL else value
