"""Persistence models: ORM entities and mixins."""

from docflow.infrastructure.persistence.models.approval import (
    ApprovalDelegation,
    ApprovalStep,
    Approver,
)
from docflow.infrastructure.persistence.models.document import Document, DocumentLine
from docflow.infrastructure.persistence.models.document_history import DocumentHistory
from docflow.infrastructure.persistence.models.document_sequence import DocumentSequence
from docflow.infrastructure.persistence.models.document_type import (
    DocumentType,
    FieldDefinition,
)
from docflow.infrastructure.persistence.models.mixins import (
    CuidMixin,
    TimestampMixin,
    UserAuditMixin,
    VersionedMixin,
)

__all__ = [
    "ApprovalDelegation",
    "ApprovalStep",
    "Approver",
    "Document",
    "DocumentHistory",
    "DocumentLine",
    "DocumentSequence",
    "DocumentType",
    "FieldDefinition",
    "CuidMixin",
    "TimestampMixin",
    "UserAuditMixin",
    "VersionedMixin",
]
