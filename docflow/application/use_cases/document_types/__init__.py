"""Document type use cases: registry of types and their field schemas."""

from docflow.application.use_cases.document_types.document_type_operations import (
    DocumentTypeService,
)

__all__ = ["DocumentTypeService"]
