"""Document repository (header + lines). Returns application DTOs."""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from docflow.application.dtos.document import (
    DocumentFilters,
    DocumentLineResult,
    DocumentResult,
    DocumentToPersist,
)
from docflow.application.dtos.document_type import PageResult
from docflow.domain.exceptions import ResourceNotFoundException
from docflow.infrastructure.persistence.models.document import Document, DocumentLine
from docflow.infrastructure.persistence.repositories.base import BaseRepository


def _document_to_result(d: Document) -> DocumentResult:
    """Map ORM Document (lines loaded) to DocumentResult."""
    return DocumentResult(
        id=d.id,
        document_type_id=d.document_type_id,
        document_number=d.document_number,
        status=d.status,
        data=d.data or {},
        lines=tuple(
            DocumentLineResult(id=line.id, line_number=line.line_number, data=line.data or {})
            for line in d.lines
        ),
        project_id=d.project_id,
        warehouse_id=d.warehouse_id,
        created_by=d.created_by,
        updated_by=d.updated_by,
        version=d.version,
        created_at=d.created_at,
        updated_at=d.updated_at,
    )


def _new_lines(document_id: str, lines: list[dict[str, Any]]) -> list[DocumentLine]:
    return [
        DocumentLine(document_id=document_id, line_number=i + 1, data=data)
        for i, data in enumerate(lines)
    ]


class DocumentRepository(BaseRepository[Document]):
    """Document instances and their ordered lines."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Document)

    async def _load(self, document_id: str) -> Document | None:
        result = await self.db.execute(
            select(Document)
            .options(selectinload(Document.lines))
            .where(Document.id == document_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_by_id(self, document_id: str) -> DocumentResult | None:  # type: ignore[override]
        row = await self._load(document_id)
        return _document_to_result(row) if row else None

    async def list_by_type(
        self,
        type_id: str,
        filters: DocumentFilters,
        skip: int = 0,
        limit: int = 100,
    ) -> PageResult[DocumentResult]:
        conditions: list[Any] = [Document.document_type_id == type_id]
        if filters.status:
            conditions.append(Document.status == filters.status)
        if filters.project_id:
            conditions.append(Document.project_id == filters.project_id)
        if filters.warehouse_id:
            conditions.append(Document.warehouse_id == filters.warehouse_id)
        if filters.search:
            conditions.append(Document.document_number.ilike(f"%{filters.search}%"))

        result = await self.db.execute(
            select(Document)
            .options(selectinload(Document.lines))
            .where(*conditions)
            .order_by(Document.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        items = [_document_to_result(d) for d in result.scalars().all()]
        total = await self.db.scalar(select(func.count(Document.id)).where(*conditions))
        return PageResult(items=items, total=total or 0)

    async def create_document(self, data: DocumentToPersist) -> DocumentResult:
        entity = await self.create(
            Document(
                document_type_id=data.document_type_id,
                document_number=data.document_number,
                status=data.status,
                data=data.data,
                project_id=data.project_id,
                warehouse_id=data.warehouse_id,
                created_by=data.created_by,
                updated_by=data.created_by,
            )
        )
        if data.lines:
            self.db.add_all(_new_lines(entity.id, data.lines))
            await self.db.flush()
        loaded = await self._load(entity.id)
        assert loaded is not None
        return _document_to_result(loaded)

    async def update_document(
        self,
        document_id: str,
        *,
        updated_by: str,
        data: dict[str, Any] | None = None,
        lines: list[dict[str, Any]] | None = None,
        project_id: str | None = None,
        warehouse_id: str | None = None,
        status: str | None = None,
    ) -> DocumentResult:
        entity = await super().get_by_id(document_id)
        if not entity:
            raise ResourceNotFoundException("document", document_id)
        if data is not None:
            entity.data = data
        if project_id is not None:
            entity.project_id = project_id
        if warehouse_id is not None:
            entity.warehouse_id = warehouse_id
        if status is not None:
            entity.status = status
        entity.updated_by = updated_by
        entity.version = entity.version + 1
        await self.update(entity)

        if lines is not None:
            await self.db.execute(
                delete(DocumentLine).where(DocumentLine.document_id == document_id)
            )
            self.db.add_all(_new_lines(document_id, lines))
            await self.db.flush()

        loaded = await self._load(document_id)
        assert loaded is not None
        return _document_to_result(loaded)
