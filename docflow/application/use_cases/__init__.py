"""Application use cases: one entry point per workflow."""

from docflow.application.use_cases.document_types import DocumentTypeService
from docflow.application.use_cases.documents import DocumentLifecycleService

__all__ = [
    "DocumentLifecycleService",
    "DocumentTypeService",
]
