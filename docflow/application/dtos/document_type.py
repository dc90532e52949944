"""DTOs for document type and field definition use cases (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from docflow.domain.value_objects.core import ApprovalConfig, StatusFlow
from docflow.domain.value_objects.tristate import UNSET, Tristate, is_set


@dataclass(frozen=True)
class FieldDefinitionResult:
    """Field definition read-model (one field of a document type)."""

    id: str
    document_type_id: str
    field_key: str
    label: str
    field_type: str
    options: list[Any] | None
    is_required: bool
    show_in_grid: bool
    show_in_form: bool
    section_name: str | None
    sort_order: int
    validation_rules: dict[str, Any] | None
    default_value: str | None
    col_span: int
    is_line_item: bool
    is_read_only: bool
    conditional_display: dict[str, Any] | None


@dataclass(frozen=True)
class DocumentTypeResult:
    """Document type read-model; fields are ordered by sort_order when loaded."""

    id: str
    code: str
    name: str
    description: str | None
    icon: str | None
    category: str
    is_active: bool
    version: int
    status_flow: StatusFlow
    approval_config: ApprovalConfig | None
    permission_config: dict[str, Any] | None
    settings: dict[str, Any]
    visible_to_roles: list[str]
    created_by: str | None
    created_at: datetime | None
    updated_at: datetime | None
    fields: tuple[FieldDefinitionResult, ...] = ()

    def is_visible_to(self, role: str) -> bool:
        """Return whether role (or everyone, via '*') may see this type."""
        return "*" in self.visible_to_roles or role in self.visible_to_roles

    @property
    def number_prefix(self) -> str:
        """settings.numberPrefix, else the upper-cased code."""
        prefix = self.settings.get("numberPrefix") if self.settings else None
        return str(prefix) if prefix else self.code.upper()


@dataclass(frozen=True)
class DocumentTypeListItem:
    """Document type in a list page, with lightweight counts."""

    document_type: DocumentTypeResult
    field_count: int
    document_count: int


@dataclass(frozen=True)
class DocumentTypeFilters:
    """Filters for listing document types. search matches name or code."""

    search: str | None = None
    category: str | None = None
    is_active: bool | None = None


@dataclass(frozen=True)
class DocumentTypeCreate:
    """Input for creating a document type. Omitted attributes get registry defaults."""

    code: str
    name: str
    description: str | None = None
    icon: str | None = None
    category: str | None = None
    is_active: bool = True
    status_flow: dict[str, Any] | None = None
    approval_config: Tristate[dict[str, Any]] = UNSET
    permission_config: Tristate[dict[str, Any]] = UNSET
    settings: dict[str, Any] | None = None
    visible_to_roles: list[str] | None = None


@dataclass(frozen=True)
class DocumentTypeUpdate:
    """Partial update for a document type. Only set attributes are written."""

    name: Tristate[str] = UNSET
    description: Tristate[str] = UNSET
    icon: Tristate[str] = UNSET
    category: Tristate[str] = UNSET
    is_active: Tristate[bool] = UNSET
    status_flow: Tristate[dict[str, Any]] = UNSET
    approval_config: Tristate[dict[str, Any]] = UNSET
    permission_config: Tristate[dict[str, Any]] = UNSET
    settings: Tristate[dict[str, Any]] = UNSET
    visible_to_roles: Tristate[list[str]] = UNSET

    def changes(self) -> dict[str, Any]:
        """Return {attribute: Tristate value} for every supplied attribute."""
        return {
            name: getattr(self, name)
            for name in self.__dataclass_fields__
            if is_set(getattr(self, name))
        }


@dataclass(frozen=True)
class FieldDefinitionCreate:
    """Input for adding a field. None booleans/ints take registry defaults."""

    field_key: str
    label: str
    field_type: str
    options: Tristate[list[Any]] = UNSET
    is_required: bool | None = None
    show_in_grid: bool | None = None
    show_in_form: bool | None = None
    section_name: str | None = None
    sort_order: int | None = None
    validation_rules: Tristate[dict[str, Any]] = UNSET
    default_value: str | None = None
    col_span: int | None = None
    is_line_item: bool | None = None
    is_read_only: bool | None = None
    conditional_display: Tristate[dict[str, Any]] = UNSET


@dataclass(frozen=True)
class FieldDefinitionUpdate:
    """Partial update for a field definition. Only set attributes are written."""

    label: Tristate[str] = UNSET
    field_type: Tristate[str] = UNSET
    options: Tristate[list[Any]] = UNSET
    is_required: Tristate[bool] = UNSET
    show_in_grid: Tristate[bool] = UNSET
    show_in_form: Tristate[bool] = UNSET
    section_name: Tristate[str] = UNSET
    sort_order: Tristate[int] = UNSET
    validation_rules: Tristate[dict[str, Any]] = UNSET
    default_value: Tristate[str] = UNSET
    col_span: Tristate[int] = UNSET
    is_line_item: Tristate[bool] = UNSET
    is_read_only: Tristate[bool] = UNSET
    conditional_display: Tristate[dict[str, Any]] = UNSET

    def changes(self) -> dict[str, Any]:
        """Return {attribute: Tristate value} for every supplied attribute."""
        return {
            name: getattr(self, name)
            for name in self.__dataclass_fields__
            if is_set(getattr(self, name))
        }


@dataclass(frozen=True)
class PageResult[T]:
    """One page of a listing plus the total number of matching rows."""

    items: list[T] = field(default_factory=list)
    total: int = 0
