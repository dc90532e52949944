"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from docflow.domain.entities import ApprovalChain, ApprovalStepEntity, DocumentEntity
from docflow.domain.enums import FieldType
from docflow.domain.exceptions import (
    BusinessRuleException,
    DocflowException,
    DocumentValidationException,
    DocumentVersionConflictException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    ValidationException,
)

__all__ = [
    "ApprovalChain",
    "ApprovalStepEntity",
    "BusinessRuleException",
    "DocflowException",
    "DocumentEntity",
    "DocumentValidationException",
    "DocumentVersionConflictException",
    "FieldType",
    "ResourceNotFoundException",
    "SqlNotConfiguredException",
    "ValidationException",
]
