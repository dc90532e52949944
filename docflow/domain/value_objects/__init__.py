"""Domain value objects (immutable, self-validating)."""

from docflow.domain.value_objects.core import (
    ApprovalConfig,
    ApprovalLevel,
    StatusDefinition,
    StatusFlow,
)
from docflow.domain.value_objects.field_value import (
    FieldValue,
    FieldValueError,
    FieldValueKind,
    coerce_field_value,
)
from docflow.domain.value_objects.tristate import (
    JSON_NULL,
    UNSET,
    Tristate,
    is_set,
    or_null,
    to_storage,
)

__all__ = [
    "ApprovalConfig",
    "ApprovalLevel",
    "FieldValue",
    "FieldValueError",
    "FieldValueKind",
    "JSON_NULL",
    "StatusDefinition",
    "StatusFlow",
    "Tristate",
    "UNSET",
    "coerce_field_value",
    "is_set",
    "or_null",
    "to_storage",
]
