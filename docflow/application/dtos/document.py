"""DTOs for document instance use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from docflow.application.dtos.approval import ApprovalStepResult
from docflow.application.dtos.document_type import DocumentTypeResult
from docflow.application.dtos.history import HistoryEntryResult


@dataclass(frozen=True)
class DocumentLineResult:
    """One line row of a document; line_number is the 1-based position."""

    id: str
    line_number: int
    data: dict[str, Any]


@dataclass(frozen=True)
class DocumentResult:
    """Document read-model (header, lines ordered by line_number)."""

    id: str
    document_type_id: str
    document_number: str
    status: str
    data: dict[str, Any]
    lines: tuple[DocumentLineResult, ...]
    project_id: str | None
    warehouse_id: str | None
    created_by: str | None
    updated_by: str | None
    version: int
    created_at: datetime | None
    updated_at: datetime | None


@dataclass(frozen=True)
class DocumentDetailResult:
    """Document with its type (fields included), history and approval steps."""

    document: DocumentResult
    document_type: DocumentTypeResult
    history: list[HistoryEntryResult]
    approval_steps: list[ApprovalStepResult]


@dataclass(frozen=True)
class DocumentCreate:
    """Input for creating a document of a given type."""

    data: dict[str, Any]
    lines: list[dict[str, Any]] | None = None
    project_id: str | None = None
    warehouse_id: str | None = None


@dataclass(frozen=True)
class DocumentToPersist:
    """Validated document ready for insert (number and status assigned)."""

    document_type_id: str
    document_number: str
    status: str
    data: dict[str, Any]
    lines: list[dict[str, Any]]
    project_id: str | None
    warehouse_id: str | None
    created_by: str


@dataclass(frozen=True)
class DocumentUpdate:
    """Partial update of a document. None means "not supplied"."""

    data: dict[str, Any] | None = None
    lines: list[dict[str, Any]] | None = None
    project_id: str | None = None
    warehouse_id: str | None = None


@dataclass(frozen=True)
class DocumentUpdateResult:
    """Pre-update and post-update state (callers diff these for audit)."""

    existing: DocumentResult
    updated: DocumentResult


@dataclass(frozen=True)
class DocumentFilters:
    """Filters for listing documents of one type. search matches document number."""

    status: str | None = None
    project_id: str | None = None
    warehouse_id: str | None = None
    search: str | None = None
