"""Document use cases: lifecycle of typed document instances."""

from docflow.application.use_cases.documents.document_operations import (
    DocumentLifecycleService,
)

__all__ = ["DocumentLifecycleService"]
