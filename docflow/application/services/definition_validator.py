"""Validates administrator-authored document type configuration.

Checks the JSON shape of status flows, approval configs, field options and
validation rules with jsonschema, then builds the typed value objects whose
constructors enforce the graph invariants (initial status defined,
transition keys defined, levels strictly increasing).
"""

from __future__ import annotations

import re
from typing import Any

import jsonschema

from docflow.domain.enums import FieldType
from docflow.domain.exceptions import ValidationException
from docflow.domain.value_objects.core import ApprovalConfig, StatusFlow

_FIELD_KEY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

STATUS_FLOW_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["initialStatus", "statuses"],
    "properties": {
        "initialStatus": {"type": "string", "minLength": 1},
        "statuses": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "required": ["key"],
                "properties": {
                    "key": {"type": "string", "minLength": 1},
                    "label": {"type": "string"},
                    "color": {"type": "string"},
                },
            },
        },
        "transitions": {
            "type": "object",
            "additionalProperties": {"type": "array", "items": {"type": "string"}},
        },
    },
}

APPROVAL_CONFIG_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["levels"],
    "properties": {
        "levels": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["role", "level"],
                "properties": {
                    "role": {"type": "string", "minLength": 1},
                    "level": {"type": "integer", "minimum": 1},
                },
            },
        },
        "amountField": {"type": ["string", "null"]},
    },
}

VALIDATION_RULES_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "min": {"type": "number"},
        "max": {"type": "number"},
        "minLength": {"type": "integer", "minimum": 0},
        "maxLength": {"type": "integer", "minimum": 0},
        "pattern": {"type": "string"},
    },
}

OPTIONS_SCHEMA: dict[str, Any] = {
    "type": "array",
    "items": {
        "anyOf": [
            {"type": "object", "required": ["value"]},
            {"type": ["string", "number", "boolean"]},
        ]
    },
}


def _check_shape(instance: Any, schema: dict[str, Any], field: str) -> None:
    """Raise ValidationException naming field when instance does not match schema."""
    try:
        jsonschema.validate(instance=instance, schema=schema)
    except jsonschema.ValidationError as e:
        path = ".".join(str(p) for p in e.absolute_path)
        where = f"{field}.{path}" if path else field
        raise ValidationException(f"Invalid {where}: {e.message}", field=field) from e


class DocumentTypeDefinitionValidator:
    """Parses and validates status flows, approval configs and field settings."""

    def parse_status_flow(self, raw: dict[str, Any]) -> StatusFlow:
        """Validate raw status flow JSON and return the StatusFlow."""
        _check_shape(raw, STATUS_FLOW_SCHEMA, "statusFlow")
        try:
            return StatusFlow.from_dict(raw)
        except ValueError as e:
            raise ValidationException(str(e), field="statusFlow") from e

    def parse_approval_config(self, raw: dict[str, Any] | None) -> ApprovalConfig | None:
        """Validate raw approval config JSON. None or an empty level list means no approval."""
        if raw is None:
            return None
        _check_shape(raw, APPROVAL_CONFIG_SCHEMA, "approvalConfig")
        try:
            return ApprovalConfig.parse(raw)
        except ValueError as e:
            raise ValidationException(str(e), field="approvalConfig") from e

    def validate_field_key(self, field_key: str) -> None:
        if not _FIELD_KEY_RE.match(field_key or ""):
            raise ValidationException(
                f"Field key '{field_key}' must start with a letter or underscore "
                "and contain only letters, digits and underscores",
                field="fieldKey",
            )

    def validate_field_type(self, field_type: str) -> None:
        if field_type not in FieldType.values():
            raise ValidationException(
                f"Unknown field type '{field_type}'. Allowed: {', '.join(FieldType.values())}",
                field="fieldType",
            )

    def validate_options(self, options: list[Any] | None) -> None:
        if options is not None:
            _check_shape(options, OPTIONS_SCHEMA, "options")

    def validate_rules(self, rules: dict[str, Any] | None) -> None:
        """Check rule shapes and that pattern compiles."""
        if rules is None:
            return
        _check_shape(rules, VALIDATION_RULES_SCHEMA, "validationRules")
        pattern = rules.get("pattern")
        if pattern:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValidationException(
                    f"Invalid validationRules.pattern: {e}", field="validationRules"
                ) from e
