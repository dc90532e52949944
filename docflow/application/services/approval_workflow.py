"""Approval workflow engine: ordered, role-gated approval steps per document.

Steps are materialized together, all pending, when a document is created.
The current step is the lowest-level pending one. Rejecting it skips the
levels above and closes the chain; only sending the document back to its
initial status reopens it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from docflow.application.dtos.approval import ApprovalDecisionResult, ApprovalStepResult
from docflow.application.dtos.history import HistoryEntryCreate
from docflow.domain.entities.approval_chain import ApprovalChain, ApprovalStepEntity
from docflow.domain.exceptions import BusinessRuleException
from docflow.domain.value_objects.core import ApprovalConfig
from docflow.shared.enums import ApprovalStepStatus
from docflow.shared.telemetry.logging import get_logger
from docflow.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from docflow.application.interfaces.repositories import IApprovalStepRepository
    from docflow.application.interfaces.services import IApprovalAuthorizer
    from docflow.application.services.history_ledger import HistoryLedger

logger = get_logger(__name__)

DEFAULT_TAG_PREFIX = "dynamic_"


def _step_to_entity(s: ApprovalStepResult) -> ApprovalStepEntity:
    return ApprovalStepEntity(
        id=s.id,
        document_type_tag=s.document_type_tag,
        document_id=s.document_id,
        level=s.level,
        approver_role=s.approver_role,
        status=s.status,
        approver_id=s.approver_id,
        notes=s.notes,
        decided_at=s.decided_at,
    )


def _decision_comment(
    decision: ApprovalStepStatus, level: int, role: str, remaining: int
) -> str:
    if decision == ApprovalStepStatus.REJECTED:
        return f"Approval level {level} rejected by {role}"
    if remaining == 0:
        return f"All approval levels completed (level {level} approved)"
    return f"Approval level {level} approved by {role}"


class ApprovalWorkflowEngine:
    """Materializes, queries and decides approval steps for one tag namespace."""

    def __init__(
        self,
        step_repo: IApprovalStepRepository,
        authorizer: IApprovalAuthorizer,
        history: HistoryLedger,
        *,
        tag_prefix: str = DEFAULT_TAG_PREFIX,
    ) -> None:
        self._steps = step_repo
        self._authorizer = authorizer
        self._history = history
        self._tag_prefix = tag_prefix

    def tag_for(self, type_code: str) -> str:
        """Tag that scopes this engine's steps in the shared approval store."""
        return f"{self._tag_prefix}{type_code}"

    async def materialize(
        self, type_code: str, document_id: str, config: ApprovalConfig
    ) -> list[ApprovalStepResult]:
        """Create one pending step per configured level."""
        tag = self.tag_for(type_code)
        steps = await self._steps.create_steps(
            tag, document_id, [(lv.level, lv.role) for lv in config.levels]
        )
        logger.info(
            "Created %d approval steps for %s:%s", len(steps), tag, document_id
        )
        return steps

    async def get_steps(self, tag: str, document_id: str) -> list[ApprovalStepResult]:
        """All steps for (tag, document), ordered by level."""
        return await self._steps.get_steps(tag, document_id)

    async def get_chain(self, type_code: str, document_id: str) -> ApprovalChain:
        steps = await self._steps.get_steps(self.tag_for(type_code), document_id)
        return ApprovalChain([_step_to_entity(s) for s in steps])

    async def reopen(self, type_code: str, document_id: str) -> int:
        """Reset a rejected chain to all-pending; no-op for a chain without a rejection."""
        chain = await self.get_chain(type_code, document_id)
        if chain.rejected_step() is None:
            return 0
        tag = self.tag_for(type_code)
        count = await self._steps.reopen_steps(tag, document_id)
        logger.info("Reopened %d approval steps for %s:%s", count, tag, document_id)
        return count

    async def decide(
        self,
        type_code: str,
        document_id: str,
        document_status: str,
        actor_id: str,
        decision: ApprovalStepStatus,
        notes: str | None = None,
    ) -> ApprovalDecisionResult:
        """Approve or reject the current step and record it in the history.

        A rejection also skips every later pending level, so the chain
        stays closed until the document is sent back to its initial status.

        Raises:
            BusinessRuleException: The chain was already rejected, no step is
                pending, or the actor is not authorized for the step's role.
                Nothing is written then.
        """
        tag = self.tag_for(type_code)
        chain = await self.get_chain(type_code, document_id)
        chain.ensure_open()
        current = chain.current_step()
        if current is None:
            raise BusinessRuleException(
                "No pending approval steps for this document; it may already be fully approved",
                "no_pending_steps",
                document_id=document_id,
            )

        action = "approve" if decision == ApprovalStepStatus.APPROVED else "reject"
        if not await self._authorizer.is_authorized(actor_id, current.approver_role, tag):
            raise BusinessRuleException(
                f"User is not authorized to {action} at level {current.level}. "
                f"Required role: {current.approver_role}",
                "not_authorized",
                level=current.level,
                required_role=current.approver_role,
            )

        await self._steps.record_decision(
            current.id, decision.value, actor_id, notes, utc_now()
        )
        if decision == ApprovalStepStatus.REJECTED:
            await self._steps.skip_pending_after(tag, document_id, current.level)
        steps = await self._steps.get_steps(tag, document_id)
        remaining = sum(1 for s in steps if s.status == ApprovalStepStatus.PENDING.value)

        await self._history.append(
            HistoryEntryCreate(
                document_id=document_id,
                from_status=document_status,
                to_status=document_status,
                performed_by_id=actor_id,
                comment=_decision_comment(decision, current.level, current.approver_role, remaining),
            )
        )
        logger.info(
            "%s:%s approval level %d %s by user %s%s",
            tag,
            document_id,
            current.level,
            decision.value,
            actor_id,
            " (all levels complete)" if remaining == 0 and decision == ApprovalStepStatus.APPROVED else "",
        )
        return ApprovalDecisionResult(
            document_id=document_id,
            level=current.level,
            approver_role=current.approver_role,
            decision=decision,
            remaining_levels=remaining,
            steps=steps,
        )
