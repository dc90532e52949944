"""Map pydantic request bodies onto tri-state DTO attributes."""

from typing import Any

from pydantic import BaseModel

from docflow.domain.value_objects.tristate import JSON_NULL, UNSET


def tristate_field(body: BaseModel, name: str) -> Any:
    """UNSET when the client omitted name, JSON_NULL when it sent null, else the value."""
    if name not in body.model_fields_set:
        return UNSET
    value = getattr(body, name)
    return JSON_NULL if value is None else value


def tristate_fields(body: BaseModel) -> dict[str, Any]:
    """Tri-state mapping of every field the client sent."""
    return {name: tristate_field(body, name) for name in body.model_fields_set}
