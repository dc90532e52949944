"""Document instance domain entity.

A document is an instance of a document type. Its status must always be
a key of the type's status flow and it moves only along the flow's
transitions. The entity holds the state-machine rules; persistence and
orchestration live in the application layer.
"""

from dataclasses import dataclass

from docflow.domain.exceptions import (
    BusinessRuleException,
    DocumentVersionConflictException,
)
from docflow.domain.value_objects.core import StatusFlow


@dataclass
class DocumentEntity:
    """Domain entity for a document instance (status + version)."""

    id: str
    document_type_id: str
    document_number: str
    status: str
    version: int

    def is_editable(self, flow: StatusFlow) -> bool:
        """Return whether header/lines may change in the current status."""
        return flow.is_editable(self.status)

    def ensure_editable(self, flow: StatusFlow) -> None:
        """Raise BusinessRuleException if the current status is terminal."""
        if not self.is_editable(flow):
            raise BusinessRuleException(
                f"Cannot edit document in '{self.status}' status",
                "not_editable",
                status=self.status,
                editable_statuses=flow.editable_statuses(),
            )

    def ensure_can_transition(self, flow: StatusFlow, to_status: str) -> None:
        """Raise BusinessRuleException unless to_status is an allowed target."""
        allowed = flow.allowed_from(self.status)
        if to_status in allowed:
            return
        allowed_str = ", ".join(allowed) if allowed else "none"
        raise BusinessRuleException(
            f"Invalid status transition: '{self.status}' → '{to_status}'. "
            f"Allowed: {allowed_str}",
            "invalid_transition",
            from_status=self.status,
            to_status=to_status,
            allowed=allowed,
        )

    def ensure_version(self, expected_version: int | None) -> None:
        """Raise DocumentVersionConflictException when a supplied version is stale."""
        if expected_version is not None and expected_version != self.version:
            raise DocumentVersionConflictException(
                self.id, expected_version, self.version
            )
