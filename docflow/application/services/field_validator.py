"""Validates document header and line data against a type's field definitions.

Stateless: no persistence or network access. Errors are returned, never
raised; the lifecycle decides whether to raise DocumentValidationException.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Protocol

from docflow.domain.value_objects.field_value import (
    FieldValue,
    FieldValueError,
    FieldValueKind,
    coerce_field_value,
    is_empty,
)


class FieldSpec(Protocol):
    """Attributes of a field definition the validator reads."""

    field_key: str
    label: str
    field_type: str
    is_required: bool
    is_line_item: bool
    options: list[Any] | None
    validation_rules: dict[str, Any] | None


@dataclass(frozen=True)
class FieldError:
    """One failed rule: field path (e.g. 'qty' or 'lines[0].qty') and message."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class ValidationReport:
    """Header errors and line errors, each in field order."""

    header_errors: list[FieldError] = field(default_factory=list)
    line_errors: list[FieldError] = field(default_factory=list)

    @property
    def errors(self) -> list[FieldError]:
        """Header errors first, then line errors."""
        return [*self.header_errors, *self.line_errors]

    @property
    def is_valid(self) -> bool:
        return not self.header_errors and not self.line_errors


def _fmt(n: Any) -> str:
    """Render a rule bound the way it was configured (1, not 1.0)."""
    if isinstance(n, float) and n.is_integer():
        return str(int(n))
    return str(n)


def _option_values(options: list[Any] | None) -> list[Any] | None:
    if options is None:
        return None
    return [o.get("value") if isinstance(o, dict) else o for o in options]


def _check_rules(
    spec: FieldSpec, value: FieldValue, rules: dict[str, Any]
) -> list[FieldError]:
    key, label = spec.field_key, spec.label
    errors: list[FieldError] = []

    if value.kind == FieldValueKind.NUMBER:
        num = value.value
        if rules.get("min") is not None and num < rules["min"]:
            errors.append(FieldError(key, f"{label} must be at least {_fmt(rules['min'])}"))
        if rules.get("max") is not None and num > rules["max"]:
            errors.append(FieldError(key, f"{label} must be at most {_fmt(rules['max'])}"))
        return errors

    if value.kind == FieldValueKind.TEXT:
        text = value.text
        min_len = rules.get("minLength")
        max_len = rules.get("maxLength")
        if min_len is not None and len(text) < min_len:
            errors.append(FieldError(key, f"{label} must be at least {min_len} characters"))
        if max_len is not None and len(text) > max_len:
            errors.append(FieldError(key, f"{label} must be at most {max_len} characters"))
        pattern = rules.get("pattern")
        if pattern and not re.search(pattern, text):
            errors.append(FieldError(key, f"{label} format is invalid"))
    return errors


def _check_options(spec: FieldSpec, value: FieldValue) -> list[FieldError]:
    allowed = _option_values(spec.options)
    if allowed is None:
        return []
    key, label = spec.field_key, spec.label
    if value.kind == FieldValueKind.CHOICES:
        return [
            FieldError(key, f"{label} contains invalid value: {v}")
            for v in value.value
            if v not in allowed
        ]
    if spec.field_type == "select" and value.value not in allowed:
        return [FieldError(key, f"{label} has an invalid selection")]
    return []


def validate_field(spec: FieldSpec, raw: Any) -> list[FieldError]:
    """Validate one raw value against one field definition."""
    if is_empty(raw):
        if spec.is_required:
            return [FieldError(spec.field_key, f"{spec.label} is required")]
        return []
    try:
        value = coerce_field_value(spec.field_type, raw)
    except FieldValueError as e:
        return [FieldError(spec.field_key, f"{spec.label} {e.reason}")]
    return [*_check_options(spec, value), *_check_rules(spec, value, spec.validation_rules or {})]


def validate_data(
    fields: list[FieldSpec], data: dict[str, Any], *, line_items: bool = False
) -> list[FieldError]:
    """Validate a data mapping against the header fields (or the line fields)."""
    errors: list[FieldError] = []
    for spec in fields:
        if bool(spec.is_line_item) != line_items:
            continue
        errors.extend(validate_field(spec, (data or {}).get(spec.field_key)))
    return errors


def validate_lines(
    fields: list[FieldSpec], lines: list[dict[str, Any]]
) -> list[FieldError]:
    """Validate every line against the line fields; paths are lines[i].<key>."""
    errors: list[FieldError] = []
    for i, line in enumerate(lines):
        for err in validate_data(fields, line, line_items=True):
            errors.append(FieldError(f"lines[{i}].{err.field}", err.message))
    return errors


def validate_document(
    fields: list[FieldSpec],
    data: dict[str, Any] | None,
    lines: list[dict[str, Any]] | None = None,
) -> ValidationReport:
    """Validate header data and lines. Either argument may be None (not checked)."""
    header_errors = validate_data(fields, data) if data is not None else []
    line_errors = validate_lines(fields, lines) if lines else []
    return ValidationReport(header_errors=header_errors, line_errors=line_errors)
