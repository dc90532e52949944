"""Application services: validation engine, definition validator, approvals, history."""

from docflow.application.services.approval_workflow import ApprovalWorkflowEngine
from docflow.application.services.definition_validator import (
    DocumentTypeDefinitionValidator,
)
from docflow.application.services.field_validator import (
    FieldError,
    ValidationReport,
    validate_document,
)
from docflow.application.services.history_ledger import HistoryLedger
from docflow.application.services.rejection_policy import NoOpRejectionPolicy

__all__ = [
    "ApprovalWorkflowEngine",
    "DocumentTypeDefinitionValidator",
    "FieldError",
    "HistoryLedger",
    "NoOpRejectionPolicy",
    "ValidationReport",
    "validate_document",
]
