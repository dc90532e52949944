"""Document type and field definition repositories. Return application DTOs."""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from docflow.application.dtos.document_type import (
    DocumentTypeFilters,
    DocumentTypeListItem,
    DocumentTypeResult,
    FieldDefinitionResult,
    PageResult,
)
from docflow.domain.value_objects.core import ApprovalConfig, StatusFlow
from docflow.infrastructure.persistence.models.document import Document
from docflow.infrastructure.persistence.models.document_type import (
    DocumentType,
    FieldDefinition,
)
from docflow.infrastructure.persistence.repositories.base import BaseRepository


def _field_to_result(f: FieldDefinition) -> FieldDefinitionResult:
    """Map ORM FieldDefinition to FieldDefinitionResult."""
    return FieldDefinitionResult(
        id=f.id,
        document_type_id=f.document_type_id,
        field_key=f.field_key,
        label=f.label,
        field_type=f.field_type,
        options=f.options,
        is_required=f.is_required,
        show_in_grid=f.show_in_grid,
        show_in_form=f.show_in_form,
        section_name=f.section_name,
        sort_order=f.sort_order,
        validation_rules=f.validation_rules,
        default_value=f.default_value,
        col_span=f.col_span,
        is_line_item=f.is_line_item,
        is_read_only=f.is_read_only,
        conditional_display=f.conditional_display,
    )


def _type_to_result(
    t: DocumentType, fields: list[FieldDefinition] | None = None
) -> DocumentTypeResult:
    """Map ORM DocumentType to DocumentTypeResult (stored JSON parsed to value objects)."""
    return DocumentTypeResult(
        id=t.id,
        code=t.code,
        name=t.name,
        description=t.description,
        icon=t.icon,
        category=t.category,
        is_active=t.is_active,
        version=t.version,
        status_flow=StatusFlow.from_dict(t.status_flow),
        approval_config=ApprovalConfig.parse(t.approval_config),
        permission_config=t.permission_config,
        settings=t.settings or {},
        visible_to_roles=list(t.visible_to_roles or []),
        created_by=t.created_by,
        created_at=t.created_at,
        updated_at=t.updated_at,
        fields=tuple(_field_to_result(f) for f in fields or ()),
    )


class DocumentTypeRepository(BaseRepository[DocumentType]):
    """Document type registry storage."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, DocumentType)

    async def _get_one(self, *criteria: Any, include_fields: bool) -> DocumentTypeResult | None:
        stmt = select(DocumentType).where(*criteria)
        if include_fields:
            stmt = stmt.options(selectinload(DocumentType.fields)).execution_options(
                populate_existing=True
            )
        result = await self.db.execute(stmt)
        row = result.scalar_one_or_none()
        if not row:
            return None
        return _type_to_result(row, list(row.fields) if include_fields else None)

    async def get_by_id(  # type: ignore[override]
        self, type_id: str, *, include_fields: bool = True
    ) -> DocumentTypeResult | None:
        return await self._get_one(DocumentType.id == type_id, include_fields=include_fields)

    async def get_by_code(
        self, code: str, *, include_fields: bool = True
    ) -> DocumentTypeResult | None:
        return await self._get_one(DocumentType.code == code, include_fields=include_fields)

    async def list_types(
        self, filters: DocumentTypeFilters, skip: int = 0, limit: int = 100
    ) -> PageResult[DocumentTypeListItem]:
        conditions: list[Any] = []
        if filters.search:
            term = f"%{filters.search}%"
            conditions.append(
                or_(DocumentType.name.ilike(term), DocumentType.code.ilike(term))
            )
        if filters.category:
            conditions.append(DocumentType.category == filters.category)
        if filters.is_active is not None:
            conditions.append(DocumentType.is_active.is_(filters.is_active))

        field_count = (
            select(func.count(FieldDefinition.id))
            .where(FieldDefinition.document_type_id == DocumentType.id)
            .scalar_subquery()
        )
        document_count = (
            select(func.count(Document.id))
            .where(Document.document_type_id == DocumentType.id)
            .scalar_subquery()
        )
        result = await self.db.execute(
            select(DocumentType, field_count, document_count)
            .where(*conditions)
            .order_by(DocumentType.category.asc(), DocumentType.name.asc())
            .offset(skip)
            .limit(limit)
        )
        items = [
            DocumentTypeListItem(
                document_type=_type_to_result(row),
                field_count=fields or 0,
                document_count=documents or 0,
            )
            for row, fields, documents in result.all()
        ]
        total = await self.db.scalar(
            select(func.count(DocumentType.id)).where(*conditions)
        )
        return PageResult(items=items, total=total or 0)

    async def list_active_for_role(self, role: str) -> list[DocumentTypeResult]:
        result = await self.db.execute(
            select(DocumentType)
            .where(DocumentType.is_active.is_(True))
            .order_by(DocumentType.category.asc(), DocumentType.name.asc())
        )
        types = [_type_to_result(t) for t in result.scalars().all()]
        return [t for t in types if t.is_visible_to(role)]

    async def create_type(self, values: dict[str, Any]) -> DocumentTypeResult:
        created = await self.create(DocumentType(**values))
        return _type_to_result(created)

    async def update_type(
        self, type_id: str, changes: dict[str, Any]
    ) -> DocumentTypeResult | None:
        entity = await super().get_by_id(type_id)
        if not entity:
            return None
        for key, value in changes.items():
            setattr(entity, key, value)
        entity.version = entity.version + 1
        await self.update(entity)
        return await self.get_by_id(type_id)

    async def delete_type(self, type_id: str) -> bool:
        entity = await super().get_by_id(type_id)
        if not entity:
            return False
        await self.delete(entity)
        return True

    async def count_documents(self, type_id: str) -> int:
        count = await self.db.scalar(
            select(func.count(Document.id)).where(Document.document_type_id == type_id)
        )
        return count or 0


class FieldDefinitionRepository(BaseRepository[FieldDefinition]):
    """Ordered field schema of each document type."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, FieldDefinition)

    async def get_by_id(self, field_id: str) -> FieldDefinitionResult | None:  # type: ignore[override]
        row = await super().get_by_id(field_id)
        return _field_to_result(row) if row else None

    async def list_by_type(self, type_id: str) -> list[FieldDefinitionResult]:
        result = await self.db.execute(
            select(FieldDefinition)
            .where(FieldDefinition.document_type_id == type_id)
            .order_by(FieldDefinition.sort_order.asc())
        )
        return [_field_to_result(f) for f in result.scalars().all()]

    async def max_sort_order(self, type_id: str) -> int | None:
        return await self.db.scalar(
            select(func.max(FieldDefinition.sort_order)).where(
                FieldDefinition.document_type_id == type_id
            )
        )

    async def create_field(
        self, type_id: str, values: dict[str, Any]
    ) -> FieldDefinitionResult:
        created = await self.create(FieldDefinition(document_type_id=type_id, **values))
        return _field_to_result(created)

    async def update_field(
        self, field_id: str, changes: dict[str, Any]
    ) -> FieldDefinitionResult | None:
        entity = await super().get_by_id(field_id)
        if not entity:
            return None
        for key, value in changes.items():
            setattr(entity, key, value)
        updated = await self.update(entity)
        return _field_to_result(updated)

    async def delete_field(self, field_id: str) -> bool:
        entity = await super().get_by_id(field_id)
        if not entity:
            return False
        await self.delete(entity)
        return True

    async def reorder(self, type_id: str, ordered_field_ids: list[str]) -> None:
        """Set sort_order = position; ids that belong to another type are ignored."""
        for position, field_id in enumerate(ordered_field_ids):
            await self.db.execute(
                update(FieldDefinition)
                .where(
                    FieldDefinition.id == field_id,
                    FieldDefinition.document_type_id == type_id,
                )
                .values(sort_order=position)
            )
        await self.db.flush()
