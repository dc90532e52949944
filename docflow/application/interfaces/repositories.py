"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from docflow.application.dtos.approval import ApprovalStepResult
    from docflow.application.dtos.document import (
        DocumentFilters,
        DocumentResult,
        DocumentToPersist,
    )
    from docflow.application.dtos.document_type import (
        DocumentTypeFilters,
        DocumentTypeListItem,
        DocumentTypeResult,
        FieldDefinitionResult,
        PageResult,
    )
    from docflow.application.dtos.history import HistoryEntryCreate, HistoryEntryResult


# Document type repository interface
class IDocumentTypeRepository(Protocol):
    """Protocol for document type definitions (registry storage)."""

    async def get_by_id(
        self, type_id: str, *, include_fields: bool = True
    ) -> DocumentTypeResult | None:
        """Return type by ID (fields ordered by sort_order when include_fields)."""

    async def get_by_code(
        self, code: str, *, include_fields: bool = True
    ) -> DocumentTypeResult | None:
        """Return type by unique code."""

    async def list_types(
        self, filters: DocumentTypeFilters, skip: int = 0, limit: int = 100
    ) -> PageResult[DocumentTypeListItem]:
        """Return a page of types with field and document counts."""

    async def list_active_for_role(self, role: str) -> list[DocumentTypeResult]:
        """Return active types visible to role or '*', ordered by category then name."""

    async def create_type(self, values: dict[str, Any]) -> DocumentTypeResult:
        """Insert a type from a column->value mapping; return it (no fields)."""

    async def update_type(
        self, type_id: str, changes: dict[str, Any]
    ) -> DocumentTypeResult | None:
        """Write only the given columns and increment version; None if missing."""

    async def delete_type(self, type_id: str) -> bool:
        """Delete type (fields cascade). Return False if it did not exist."""

    async def count_documents(self, type_id: str) -> int:
        """Return number of document instances referencing the type."""


# Field definition repository interface
class IFieldDefinitionRepository(Protocol):
    """Protocol for the ordered field schema of each document type."""

    async def get_by_id(self, field_id: str) -> FieldDefinitionResult | None:
        """Return field by ID."""

    async def list_by_type(self, type_id: str) -> list[FieldDefinitionResult]:
        """Return fields of a type ordered by sort_order ascending."""

    async def max_sort_order(self, type_id: str) -> int | None:
        """Return the highest sort_order of the type's fields, or None if none."""

    async def create_field(
        self, type_id: str, values: dict[str, Any]
    ) -> FieldDefinitionResult:
        """Insert a field from a column->value mapping."""

    async def update_field(
        self, field_id: str, changes: dict[str, Any]
    ) -> FieldDefinitionResult | None:
        """Write only the given columns; None if missing."""

    async def delete_field(self, field_id: str) -> bool:
        """Delete field. Return False if it did not exist."""

    async def reorder(self, type_id: str, ordered_field_ids: list[str]) -> None:
        """Set sort_order = index for each id, in one batch."""


# Document repository interface
class IDocumentRepository(Protocol):
    """Protocol for document instances and their lines."""

    async def get_by_id(self, document_id: str) -> DocumentResult | None:
        """Return document by ID with lines ordered by line_number."""

    async def list_by_type(
        self,
        type_id: str,
        filters: DocumentFilters,
        skip: int = 0,
        limit: int = 100,
    ) -> PageResult[DocumentResult]:
        """Return a page of documents of a type (newest first)."""

    async def create_document(self, data: DocumentToPersist) -> DocumentResult:
        """Insert document and its lines (line_number = index + 1)."""

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
        """Apply supplied changes, replace lines when given, increment version."""


# Approval step repository interface
class IApprovalStepRepository(Protocol):
    """Protocol for approval steps, shared by every subsystem through a tag."""

    async def create_steps(
        self, document_type_tag: str, document_id: str, levels: list[tuple[int, str]]
    ) -> list[ApprovalStepResult]:
        """Insert one pending step per (level, role)."""

    async def get_steps(
        self, document_type_tag: str, document_id: str
    ) -> list[ApprovalStepResult]:
        """Return all steps ordered by level."""

    async def get_pending_steps(
        self, document_type_tag: str, document_id: str
    ) -> list[ApprovalStepResult]:
        """Return pending steps ordered by level."""

    async def record_decision(
        self,
        step_id: str,
        status: str,
        approver_id: str,
        notes: str | None,
        decided_at: datetime,
    ) -> ApprovalStepResult:
        """Mark a pending step approved or rejected."""

    async def skip_pending_after(
        self, document_type_tag: str, document_id: str, level: int
    ) -> int:
        """Mark pending steps above level as skipped; return how many changed."""

    async def reopen_steps(self, document_type_tag: str, document_id: str) -> int:
        """Reset every step to pending with no decision recorded; return the count."""


# History repository interface
class IDocumentHistoryRepository(Protocol):
    """Protocol for the append-only document history."""

    async def append(self, entry: HistoryEntryCreate) -> HistoryEntryResult:
        """Insert an entry (performed_at = now)."""

    async def list_by_document(self, document_id: str) -> list[HistoryEntryResult]:
        """Return entries newest first."""
