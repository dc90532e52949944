"""Service interfaces (ports) for the application layer.

Protocols define contracts for external collaborators and pluggable
policies (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from docflow.application.dtos.approval import ApprovalStepResult
    from docflow.application.dtos.document import DocumentResult
    from docflow.application.dtos.document_type import DocumentTypeResult


# Sequence generator interface
class ISequenceGenerator(Protocol):
    """Protocol for document number generation (unique per scope)."""

    async def generate(self, scope: str, prefix: str | None = None) -> str:
        """Return the next document number for scope.

        prefix overrides the rendered prefix (default: scope suffix, upper-cased).
        Failures propagate unchanged.
        """


# Approval authorizer interface
class IApprovalAuthorizer(Protocol):
    """Protocol for deciding whether an actor may act for an approver role."""

    async def is_authorized(
        self, actor_id: str, role: str, document_type_tag: str | None = None
    ) -> bool:
        """Return True if actor_id may approve or reject a step requiring role."""


# Rejection policy interface
class IRejectionPolicy(Protocol):
    """Protocol for reacting to a rejected approval step.

    Runs in the same unit of work as the rejection. Implementations may
    transition the document; the default does nothing.
    """

    async def on_rejected(
        self,
        document_type: DocumentTypeResult,
        document: DocumentResult,
        step: ApprovalStepResult,
        actor_id: str,
    ) -> None:
        """Apply the policy for a rejected step."""
