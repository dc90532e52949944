"""Document history repository. Append and read only."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from docflow.application.dtos.history import HistoryEntryCreate, HistoryEntryResult
from docflow.infrastructure.persistence.models.document_history import DocumentHistory
from docflow.infrastructure.persistence.repositories.base import BaseRepository
from docflow.shared.utils.datetime import ensure_utc, utc_now


def _history_to_result(h: DocumentHistory) -> HistoryEntryResult:
    """Map ORM DocumentHistory to HistoryEntryResult."""
    return HistoryEntryResult(
        id=h.id,
        document_id=h.document_id,
        from_status=h.from_status,
        to_status=h.to_status,
        performed_by_id=h.performed_by_id,
        comment=h.comment,
        performed_at=ensure_utc(h.performed_at),
    )


class DocumentHistoryRepository(BaseRepository[DocumentHistory]):
    """Append-only history of document changes."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, DocumentHistory)

    async def append(self, entry: HistoryEntryCreate) -> HistoryEntryResult:
        created = await self.create(
            DocumentHistory(
                document_id=entry.document_id,
                from_status=entry.from_status,
                to_status=entry.to_status,
                performed_by_id=entry.performed_by_id,
                comment=entry.comment,
                performed_at=utc_now(),
            )
        )
        return _history_to_result(created)

    async def list_by_document(self, document_id: str) -> list[HistoryEntryResult]:
        result = await self.db.execute(
            select(DocumentHistory)
            .where(DocumentHistory.document_id == document_id)
            .order_by(DocumentHistory.performed_at.desc(), DocumentHistory.id.desc())
        )
        return [_history_to_result(h) for h in result.scalars().all()]
