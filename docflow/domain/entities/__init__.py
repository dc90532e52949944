"""Domain entities: document instances and their approval chains."""

from docflow.domain.entities.approval_chain import ApprovalChain, ApprovalStepEntity
from docflow.domain.entities.document import DocumentEntity

__all__ = ["ApprovalChain", "ApprovalStepEntity", "DocumentEntity"]
