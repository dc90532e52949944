"""Application ports: repository and collaborator protocols."""

from docflow.application.interfaces.repositories import (
    IApprovalStepRepository,
    IDocumentHistoryRepository,
    IDocumentRepository,
    IDocumentTypeRepository,
    IFieldDefinitionRepository,
)
from docflow.application.interfaces.services import (
    IApprovalAuthorizer,
    IRejectionPolicy,
    ISequenceGenerator,
)

__all__ = [
    "IApprovalAuthorizer",
    "IApprovalStepRepository",
    "IDocumentHistoryRepository",
    "IDocumentRepository",
    "IDocumentTypeRepository",
    "IFieldDefinitionRepository",
    "IRejectionPolicy",
    "ISequenceGenerator",
]
