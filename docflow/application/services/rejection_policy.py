"""Default rejection policy: a rejected step leaves the document status unchanged."""

from __future__ import annotations

from typing import TYPE_CHECKING

from docflow.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from docflow.application.dtos.approval import ApprovalStepResult
    from docflow.application.dtos.document import DocumentResult
    from docflow.application.dtos.document_type import DocumentTypeResult

logger = get_logger(__name__)


class NoOpRejectionPolicy:
    """Implements IRejectionPolicy without touching the document."""

    async def on_rejected(
        self,
        document_type: DocumentTypeResult,
        document: DocumentResult,
        step: ApprovalStepResult,
        actor_id: str,
    ) -> None:
        logger.debug(
            "Level %d of %s rejected; status stays '%s'",
            step.level,
            document.document_number,
            document.status,
        )
