"""Infrastructure implementations of application service interfaces."""

from docflow.infrastructure.services.approval_authorizer import RoleApprovalAuthorizer
from docflow.infrastructure.services.sequence_generator import (
    DatabaseSequenceGenerator,
    format_document_number,
)

__all__ = [
    "DatabaseSequenceGenerator",
    "RoleApprovalAuthorizer",
    "format_document_number",
]
