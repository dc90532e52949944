"""Pydantic request/response schemas for the API."""

from docflow.schemas.document import (
    ApprovalDecisionResponse,
    DocumentDetailResponse,
    DocumentListResponse,
    DocumentResponse,
)
from docflow.schemas.document_type import (
    DocumentTypeListResponse,
    DocumentTypeResponse,
    FieldDefinitionResponse,
)
from docflow.schemas.health import HealthResponse

__all__ = [
    "ApprovalDecisionResponse",
    "DocumentDetailResponse",
    "DocumentListResponse",
    "DocumentResponse",
    "DocumentTypeListResponse",
    "DocumentTypeResponse",
    "FieldDefinitionResponse",
    "HealthResponse",
]
