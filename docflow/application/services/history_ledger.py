"""Append-only history of document state changes and approval decisions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from docflow.application.dtos.history import HistoryEntryCreate, HistoryEntryResult
from docflow.domain.exceptions import ValidationException

if TYPE_CHECKING:
    from docflow.application.interfaces.repositories import IDocumentHistoryRepository


class HistoryLedger:
    """Writes and reads history entries. Entries are never modified."""

    def __init__(self, history_repo: IDocumentHistoryRepository) -> None:
        self._repo = history_repo

    async def append(self, entry: HistoryEntryCreate) -> HistoryEntryResult:
        """Append one entry; document_id and to_status are required."""
        if not entry.document_id:
            raise ValidationException("History entry requires a document id", field="documentId")
        if not entry.to_status:
            raise ValidationException("History entry requires a target status", field="toStatus")
        return await self._repo.append(entry)

    async def list(self, document_id: str) -> list[HistoryEntryResult]:
        """Return entries for the document, newest first (empty if none)."""
        return await self._repo.list_by_document(document_id)
