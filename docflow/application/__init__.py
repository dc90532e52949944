"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repositories, sequences, authorizer).
"""

from docflow.application.interfaces import (
    IApprovalAuthorizer,
    IApprovalStepRepository,
    IDocumentHistoryRepository,
    IDocumentRepository,
    IDocumentTypeRepository,
    IFieldDefinitionRepository,
    IRejectionPolicy,
    ISequenceGenerator,
)
from docflow.application.services import (
    ApprovalWorkflowEngine,
    DocumentTypeDefinitionValidator,
    HistoryLedger,
    NoOpRejectionPolicy,
)
from docflow.application.use_cases import DocumentLifecycleService, DocumentTypeService

__all__ = [
    "ApprovalWorkflowEngine",
    "DocumentLifecycleService",
    "DocumentTypeDefinitionValidator",
    "DocumentTypeService",
    "HistoryLedger",
    "IApprovalAuthorizer",
    "IApprovalStepRepository",
    "IDocumentHistoryRepository",
    "IDocumentRepository",
    "IDocumentTypeRepository",
    "IFieldDefinitionRepository",
    "IRejectionPolicy",
    "ISequenceGenerator",
    "NoOpRejectionPolicy",
]
