"""Tagged field values: the typed form of one entry of document data.

Header and line data arrive as JSON objects keyed by field key. Before any
rule is evaluated, each raw value is coerced according to its field's
declared type into a FieldValue, so the validation rules work on a known
kind (text, number, boolean, date, choices, reference, file) rather than
on an arbitrary JSON value.
"""

import math
import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any
from urllib.parse import urlsplit

from docflow.domain.enums import FieldType

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE_RE = re.compile(r"^\+?[\d\s\-()]{7,20}$")
_URL_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*$")
_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)


class FieldValueKind(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    CHOICES = "choices"
    REFERENCE = "reference"
    FILE = "file"


@dataclass(frozen=True)
class FieldValue:
    """A raw field value after coercion to its declared kind."""

    kind: FieldValueKind
    value: Any

    @property
    def text(self) -> str:
        """String form used by length and pattern rules."""
        if isinstance(self.value, bool):
            return "true" if self.value else "false"
        return str(self.value)


class FieldValueError(ValueError):
    """Raised when a raw value cannot be coerced to its field type.

    `reason` completes the sentence "<label> ..." (e.g. "must be a number").
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


def is_empty(raw: Any) -> bool:
    """Return True for values treated as missing (None or empty string)."""
    return raw is None or raw == ""


def _to_number(raw: Any) -> float | int:
    if isinstance(raw, bool):
        return int(raw)
    if isinstance(raw, (int, float)):
        if isinstance(raw, float) and math.isnan(raw):
            raise FieldValueError("must be a number")
        return raw
    if isinstance(raw, Decimal):
        return float(raw)
    if isinstance(raw, str):
        try:
            parsed = Decimal(raw.strip())
        except InvalidOperation:
            raise FieldValueError("must be a number") from None
        if parsed.is_nan():
            raise FieldValueError("must be a number")
        if not parsed.is_finite():
            return float(parsed)
        return int(parsed) if parsed == parsed.to_integral_value() else float(parsed)
    raise FieldValueError("must be a number")


def _to_datetime(raw: Any) -> datetime | date:
    if isinstance(raw, (datetime, date)):
        return raw
    text = str(raw).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise FieldValueError("must be a valid date") from None


def _is_valid_url(text: str) -> bool:
    scheme, sep, rest = text.partition(":")
    if not sep or not rest or not _URL_SCHEME_RE.match(scheme):
        return False
    try:
        urlsplit(text)
    except ValueError:
        return False
    return True


def _is_uuid(raw: Any) -> bool:
    return isinstance(raw, str) and bool(_UUID_RE.match(raw))


def coerce_field_value(field_type: str, raw: Any) -> FieldValue:
    """Coerce a non-empty raw value according to field_type.

    Unknown field types are treated as free text.

    Raises:
        FieldValueError: If raw does not fit the declared type.
    """
    try:
        ftype = FieldType(field_type)
    except ValueError:
        return FieldValue(FieldValueKind.TEXT, raw)

    if ftype in (FieldType.NUMBER, FieldType.CURRENCY):
        return FieldValue(FieldValueKind.NUMBER, _to_number(raw))

    if ftype in (FieldType.DATE, FieldType.DATETIME):
        return FieldValue(FieldValueKind.DATE, _to_datetime(raw))

    if ftype == FieldType.CHECKBOX:
        if not isinstance(raw, bool):
            raise FieldValueError("must be true or false")
        return FieldValue(FieldValueKind.BOOLEAN, raw)

    if ftype == FieldType.MULTISELECT:
        if not isinstance(raw, list):
            raise FieldValueError("must be an array")
        return FieldValue(FieldValueKind.CHOICES, tuple(raw))

    if ftype.is_lookup:
        if not _is_uuid(raw):
            raise FieldValueError("must be a valid reference ID")
        return FieldValue(FieldValueKind.REFERENCE, raw.lower())

    if ftype in (FieldType.FILE, FieldType.SIGNATURE):
        if not isinstance(raw, str) or not raw.strip():
            raise FieldValueError("is required")
        return FieldValue(FieldValueKind.FILE, raw)

    value = FieldValue(FieldValueKind.TEXT, raw)
    if ftype == FieldType.EMAIL and not _EMAIL_RE.match(value.text):
        raise FieldValueError("must be a valid email")
    if ftype == FieldType.PHONE and not _PHONE_RE.match(value.text):
        raise FieldValueError("must be a valid phone number")
    if ftype == FieldType.URL and not _is_valid_url(value.text):
        raise FieldValueError("must be a valid URL")
    return value
