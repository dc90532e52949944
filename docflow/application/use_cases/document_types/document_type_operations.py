"""Document type registry and field schema store.

Administrators define document types at runtime: status flow, approval
chain, settings and an ordered list of field definitions. Every other
operation reads these definitions and interprets them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from docflow.application.dtos.document_type import (
    DocumentTypeCreate,
    DocumentTypeFilters,
    DocumentTypeListItem,
    DocumentTypeResult,
    DocumentTypeUpdate,
    FieldDefinitionCreate,
    FieldDefinitionResult,
    FieldDefinitionUpdate,
    PageResult,
)
from docflow.application.services.definition_validator import (
    DocumentTypeDefinitionValidator,
)
from docflow.domain.exceptions import (
    BusinessRuleException,
    ResourceNotFoundException,
    ValidationException,
)
from docflow.domain.value_objects.core import StatusFlow
from docflow.domain.value_objects.tristate import JSON_NULL, UNSET, or_null, to_storage
from docflow.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from docflow.application.interfaces.repositories import (
        IDocumentTypeRepository,
        IFieldDefinitionRepository,
    )

logger = get_logger(__name__)

DEFAULT_CATEGORY = "custom"
DEFAULT_VISIBLE_ROLES = ("admin",)

_REQUIRED_TYPE_ATTRS = frozenset({"name", "category", "is_active"})
_REQUIRED_FIELD_ATTRS = frozenset(
    {
        "label",
        "field_type",
        "is_required",
        "show_in_grid",
        "show_in_form",
        "sort_order",
        "col_span",
        "is_line_item",
        "is_read_only",
    }
)

_FIELD_DEFAULTS: dict[str, Any] = {
    "is_required": False,
    "show_in_grid": False,
    "show_in_form": True,
    "col_span": 2,
    "is_line_item": False,
    "is_read_only": False,
}


def _reject_nulls(changes: dict[str, Any], required: frozenset[str]) -> None:
    """Raise ValidationException if a non-nullable attribute is explicitly null."""
    for key, value in changes.items():
        if key in required and value is JSON_NULL:
            raise ValidationException(f"{key} cannot be null", field=key)


class DocumentTypeService:
    """Registry of document type definitions and their field schemas."""

    def __init__(
        self,
        type_repo: IDocumentTypeRepository,
        field_repo: IFieldDefinitionRepository,
        definition_validator: DocumentTypeDefinitionValidator | None = None,
        *,
        default_visible_roles: list[str] | None = None,
    ) -> None:
        self.type_repo = type_repo
        self.field_repo = field_repo
        self.validator = definition_validator or DocumentTypeDefinitionValidator()
        self.default_visible_roles = list(default_visible_roles or DEFAULT_VISIBLE_ROLES)

    # ---- Types ----

    async def list_types(
        self, filters: DocumentTypeFilters, skip: int = 0, limit: int = 100
    ) -> PageResult[DocumentTypeListItem]:
        """Page of types with field and document counts."""
        return await self.type_repo.list_types(filters, skip=skip, limit=limit)

    async def get_by_id(self, type_id: str) -> DocumentTypeResult:
        """Full definition with fields ordered by sort_order."""
        doc_type = await self.type_repo.get_by_id(type_id)
        if not doc_type:
            raise ResourceNotFoundException("document_type", type_id)
        return doc_type

    async def get_by_code(self, code: str) -> DocumentTypeResult:
        """Full definition by code; the code is reported when missing."""
        doc_type = await self.type_repo.get_by_code(code)
        if not doc_type:
            raise ResourceNotFoundException("document_type", code)
        return doc_type

    async def create_type(
        self, data: DocumentTypeCreate, actor_id: str | None
    ) -> DocumentTypeResult:
        """Create a type, applying defaults for every omitted attribute."""
        if await self.type_repo.get_by_code(data.code, include_fields=False):
            raise BusinessRuleException(
                f"Document type with code '{data.code}' already exists",
                "duplicate_code",
                code=data.code,
            )
        flow = (
            self.validator.parse_status_flow(data.status_flow)
            if data.status_flow is not None
            else StatusFlow.default()
        )
        approval = or_null(data.approval_config)
        if approval is not JSON_NULL:
            config = self.validator.parse_approval_config(approval)
            approval = config.to_dict() if config else JSON_NULL

        values: dict[str, Any] = {
            "code": data.code,
            "name": data.name,
            "description": data.description,
            "icon": data.icon,
            "category": data.category or DEFAULT_CATEGORY,
            "is_active": data.is_active,
            "status_flow": flow.to_dict(),
            "approval_config": to_storage(approval),
            "permission_config": to_storage(or_null(data.permission_config)),
            "settings": data.settings or {},
            "visible_to_roles": (
                list(data.visible_to_roles)
                if data.visible_to_roles is not None
                else list(self.default_visible_roles)
            ),
            "created_by": actor_id,
        }
        created = await self.type_repo.create_type(values)
        logger.info("Created document type %s (%s)", created.code, created.id)
        return created

    async def update_type(
        self, type_id: str, data: DocumentTypeUpdate
    ) -> tuple[DocumentTypeResult, DocumentTypeResult]:
        """Write supplied attributes only; version is always incremented.

        Returns:
            (existing, updated) so callers can diff for audit.
        """
        existing = await self.get_by_id(type_id)
        changes = data.changes()
        _reject_nulls(changes, _REQUIRED_TYPE_ATTRS)

        if "status_flow" in changes:
            raw_flow = changes["status_flow"]
            flow = (
                StatusFlow.default()
                if raw_flow is JSON_NULL
                else self.validator.parse_status_flow(raw_flow)
            )
            changes["status_flow"] = flow.to_dict()
        if "approval_config" in changes and changes["approval_config"] is not JSON_NULL:
            config = self.validator.parse_approval_config(changes["approval_config"])
            changes["approval_config"] = config.to_dict() if config else JSON_NULL
        for key in ("settings", "visible_to_roles"):
            if changes.get(key) is JSON_NULL:
                changes[key] = {} if key == "settings" else []

        updated = await self.type_repo.update_type(
            type_id, {k: to_storage(v) for k, v in changes.items()}
        )
        if not updated:
            raise ResourceNotFoundException("document_type", type_id)
        logger.info("Updated document type %s to version %d", updated.code, updated.version)
        return existing, updated

    async def delete_type(self, type_id: str) -> None:
        """Delete a type with no documents; otherwise it must be deactivated."""
        doc_type = await self.get_by_id(type_id)
        count = await self.type_repo.count_documents(type_id)
        if count > 0:
            raise BusinessRuleException(
                f"Cannot delete document type '{doc_type.code}': "
                f"{count} documents exist. Deactivate instead.",
                "type_in_use",
                code=doc_type.code,
                document_count=count,
            )
        await self.type_repo.delete_type(type_id)
        logger.info("Deleted document type %s", doc_type.code)

    async def get_active_types_for_role(self, role: str) -> list[DocumentTypeResult]:
        """Active types visible to role (or '*'), ordered by category then name."""
        return await self.type_repo.list_active_for_role(role)

    # ---- Fields ----

    async def list_fields(self, type_id: str) -> list[FieldDefinitionResult]:
        await self.get_by_id(type_id)
        return await self.field_repo.list_by_type(type_id)

    async def add_field(
        self, type_id: str, data: FieldDefinitionCreate
    ) -> FieldDefinitionResult:
        """Add a field; sort_order defaults to one past the current maximum."""
        doc_type = await self.get_by_id(type_id)
        self.validator.validate_field_key(data.field_key)
        if any(f.field_key == data.field_key for f in doc_type.fields):
            raise BusinessRuleException(
                f"Field '{data.field_key}' already exists on document type '{doc_type.code}'",
                "duplicate_field_key",
                code=doc_type.code,
                field_key=data.field_key,
            )
        self.validator.validate_field_type(data.field_type)
        options = or_null(data.options)
        rules = or_null(data.validation_rules)
        self.validator.validate_options(to_storage(options))
        self.validator.validate_rules(to_storage(rules))

        sort_order = data.sort_order
        if sort_order is None:
            current_max = await self.field_repo.max_sort_order(type_id)
            sort_order = (current_max if current_max is not None else -1) + 1

        values: dict[str, Any] = {
            "field_key": data.field_key,
            "label": data.label,
            "field_type": data.field_type,
            "options": to_storage(options),
            "section_name": data.section_name,
            "sort_order": sort_order,
            "validation_rules": to_storage(rules),
            "default_value": data.default_value,
            "conditional_display": to_storage(or_null(data.conditional_display)),
        }
        for key, default in _FIELD_DEFAULTS.items():
            supplied = getattr(data, key)
            values[key] = default if supplied is None else supplied
        return await self.field_repo.create_field(type_id, values)

    async def update_field(
        self, field_id: str, data: FieldDefinitionUpdate
    ) -> FieldDefinitionResult:
        """Partial update of one field."""
        changes = data.changes()
        _reject_nulls(changes, _REQUIRED_FIELD_ATTRS)
        if changes.get("field_type", UNSET) not in (UNSET, JSON_NULL):
            self.validator.validate_field_type(changes["field_type"])
        if "options" in changes:
            self.validator.validate_options(to_storage(changes["options"]))
        if "validation_rules" in changes:
            self.validator.validate_rules(to_storage(changes["validation_rules"]))
        updated = await self.field_repo.update_field(
            field_id, {k: to_storage(v) for k, v in changes.items()}
        )
        if not updated:
            raise ResourceNotFoundException("field_definition", field_id)
        return updated

    async def delete_field(self, field_id: str) -> None:
        if not await self.field_repo.delete_field(field_id):
            raise ResourceNotFoundException("field_definition", field_id)

    async def reorder_fields(self, type_id: str, ordered_field_ids: list[str]) -> None:
        """Set sort_order = position for each id, atomically. Empty input is a no-op."""
        if not ordered_field_ids:
            return
        await self.get_by_id(type_id)
        await self.field_repo.reorder(type_id, ordered_field_ids)
