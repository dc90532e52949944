"""Document type and field definition API schemas.

status_flow, approval_config and validation_rules keep their stored JSON
shape (camelCase keys such as initialStatus, amountField, minLength).
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from docflow.application.dtos.document_type import (
    DocumentTypeCreate,
    DocumentTypeListItem,
    DocumentTypeResult,
    DocumentTypeUpdate,
    FieldDefinitionCreate,
    FieldDefinitionUpdate,
)
from docflow.schemas._tristate import tristate_field, tristate_fields


class DocumentTypeCreateRequest(BaseModel):
    """Request body for creating a document type."""

    code: str = Field(..., min_length=1, max_length=100, pattern=r"^[A-Za-z0-9_-]+$")
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=2000)
    icon: str | None = Field(default=None, max_length=100)
    category: str | None = Field(default=None, max_length=100)
    is_active: bool = True
    status_flow: dict[str, Any] | None = None
    approval_config: dict[str, Any] | None = None
    permission_config: dict[str, Any] | None = None
    settings: dict[str, Any] | None = None
    visible_to_roles: list[str] | None = None

    def to_dto(self) -> DocumentTypeCreate:
        return DocumentTypeCreate(
            code=self.code,
            name=self.name,
            description=self.description,
            icon=self.icon,
            category=self.category,
            is_active=self.is_active,
            status_flow=self.status_flow,
            approval_config=tristate_field(self, "approval_config"),
            permission_config=tristate_field(self, "permission_config"),
            settings=self.settings,
            visible_to_roles=self.visible_to_roles,
        )


class DocumentTypeUpdateRequest(BaseModel):
    """Request body for PATCH. Omitted keys are untouched; null clears."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=2000)
    icon: str | None = Field(default=None, max_length=100)
    category: str | None = Field(default=None, max_length=100)
    is_active: bool | None = None
    status_flow: dict[str, Any] | None = None
    approval_config: dict[str, Any] | None = None
    permission_config: dict[str, Any] | None = None
    settings: dict[str, Any] | None = None
    visible_to_roles: list[str] | None = None

    def to_dto(self) -> DocumentTypeUpdate:
        return DocumentTypeUpdate(**tristate_fields(self))


class FieldDefinitionCreateRequest(BaseModel):
    """Request body for adding a field to a document type."""

    field_key: str = Field(..., min_length=1, max_length=100)
    label: str = Field(..., min_length=1, max_length=255)
    field_type: str = Field(..., min_length=1, max_length=50)
    options: list[Any] | None = None
    is_required: bool | None = None
    show_in_grid: bool | None = None
    show_in_form: bool | None = None
    section_name: str | None = Field(default=None, max_length=255)
    sort_order: int | None = Field(default=None, ge=0)
    validation_rules: dict[str, Any] | None = None
    default_value: str | None = None
    col_span: int | None = Field(default=None, ge=1, le=4)
    is_line_item: bool | None = None
    is_read_only: bool | None = None
    conditional_display: dict[str, Any] | None = None

    def to_dto(self) -> FieldDefinitionCreate:
        data = self.model_dump(
            exclude={"options", "validation_rules", "conditional_display"}
        )
        return FieldDefinitionCreate(
            **data,
            options=tristate_field(self, "options"),
            validation_rules=tristate_field(self, "validation_rules"),
            conditional_display=tristate_field(self, "conditional_display"),
        )


class FieldDefinitionUpdateRequest(BaseModel):
    """Request body for PATCH of one field. Omitted keys are untouched; null clears."""

    label: str | None = Field(default=None, min_length=1, max_length=255)
    field_type: str | None = Field(default=None, min_length=1, max_length=50)
    options: list[Any] | None = None
    is_required: bool | None = None
    show_in_grid: bool | None = None
    show_in_form: bool | None = None
    section_name: str | None = Field(default=None, max_length=255)
    sort_order: int | None = Field(default=None, ge=0)
    validation_rules: dict[str, Any] | None = None
    default_value: str | None = None
    col_span: int | None = Field(default=None, ge=1, le=4)
    is_line_item: bool | None = None
    is_read_only: bool | None = None
    conditional_display: dict[str, Any] | None = None

    def to_dto(self) -> FieldDefinitionUpdate:
        return FieldDefinitionUpdate(**tristate_fields(self))


class FieldReorderRequest(BaseModel):
    """Field ids in their new order (position becomes sort_order)."""

    field_ids: list[str]


class FieldDefinitionResponse(BaseModel):
    """Field definition response."""

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

    model_config = ConfigDict(from_attributes=True)


class DocumentTypeResponse(BaseModel):
    """Document type full response (fields ordered by sort_order)."""

    id: str
    code: str
    name: str
    description: str | None
    icon: str | None
    category: str
    is_active: bool
    version: int
    status_flow: dict[str, Any]
    approval_config: dict[str, Any] | None
    permission_config: dict[str, Any] | None
    settings: dict[str, Any]
    visible_to_roles: list[str]
    created_by: str | None
    created_at: datetime | None
    updated_at: datetime | None
    fields: list[FieldDefinitionResponse] = Field(default_factory=list)

    @classmethod
    def from_result(cls, t: DocumentTypeResult) -> "DocumentTypeResponse":
        return cls(
            id=t.id,
            code=t.code,
            name=t.name,
            description=t.description,
            icon=t.icon,
            category=t.category,
            is_active=t.is_active,
            version=t.version,
            status_flow=t.status_flow.to_dict(),
            approval_config=t.approval_config.to_dict() if t.approval_config else None,
            permission_config=t.permission_config,
            settings=t.settings,
            visible_to_roles=t.visible_to_roles,
            created_by=t.created_by,
            created_at=t.created_at,
            updated_at=t.updated_at,
            fields=[FieldDefinitionResponse.model_validate(f) for f in t.fields],
        )


class DocumentTypeListItemResponse(DocumentTypeResponse):
    """Document type in a list page, with counts."""

    field_count: int
    document_count: int

    @classmethod
    def from_item(cls, item: DocumentTypeListItem) -> "DocumentTypeListItemResponse":
        base = DocumentTypeResponse.from_result(item.document_type)
        return cls(
            **base.model_dump(),
            field_count=item.field_count,
            document_count=item.document_count,
        )


class DocumentTypeListResponse(BaseModel):
    """Page of document types."""

    items: list[DocumentTypeListItemResponse]
    total: int
