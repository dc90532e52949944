"""Persistence repositories. Re-exports for dependency injection."""

from docflow.infrastructure.persistence.repositories.approval_step_repo import (
    ApprovalStepRepository,
)
from docflow.infrastructure.persistence.repositories.base import BaseRepository
from docflow.infrastructure.persistence.repositories.document_history_repo import (
    DocumentHistoryRepository,
)
from docflow.infrastructure.persistence.repositories.document_repo import DocumentRepository
from docflow.infrastructure.persistence.repositories.document_type_repo import (
    DocumentTypeRepository,
    FieldDefinitionRepository,
)

__all__ = [
    "ApprovalStepRepository",
    "BaseRepository",
    "DocumentHistoryRepository",
    "DocumentRepository",
    "DocumentTypeRepository",
    "FieldDefinitionRepository",
]
