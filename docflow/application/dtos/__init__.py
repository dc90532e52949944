"""Application DTOs (no ORM dependency)."""

from docflow.application.dtos.approval import ApprovalDecisionResult, ApprovalStepResult
from docflow.application.dtos.document import (
    DocumentCreate,
    DocumentDetailResult,
    DocumentFilters,
    DocumentLineResult,
    DocumentResult,
    DocumentToPersist,
    DocumentUpdate,
    DocumentUpdateResult,
)
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
from docflow.application.dtos.history import HistoryEntryCreate, HistoryEntryResult

__all__ = [
    "ApprovalDecisionResult",
    "ApprovalStepResult",
    "DocumentCreate",
    "DocumentDetailResult",
    "DocumentFilters",
    "DocumentLineResult",
    "DocumentResult",
    "DocumentToPersist",
    "DocumentTypeCreate",
    "DocumentTypeFilters",
    "DocumentTypeListItem",
    "DocumentTypeResult",
    "DocumentTypeUpdate",
    "DocumentUpdate",
    "DocumentUpdateResult",
    "FieldDefinitionCreate",
    "FieldDefinitionResult",
    "FieldDefinitionUpdate",
    "HistoryEntryCreate",
    "HistoryEntryResult",
    "PageResult",
]
