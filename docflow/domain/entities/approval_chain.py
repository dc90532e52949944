"""Approval chain for one document instance.

Steps are totally ordered by level. The current step is the lowest-level
step still pending. A rejected step closes the chain: nothing after it can
be decided and the document cannot move on until the chain is reopened.
"""

from dataclasses import dataclass
from datetime import datetime

from docflow.domain.exceptions import BusinessRuleException
from docflow.shared.enums import ApprovalStepStatus


@dataclass
class ApprovalStepEntity:
    """One role-gated checkpoint of a document's approval chain."""

    id: str
    document_type_tag: str
    document_id: str
    level: int
    approver_role: str
    status: str
    approver_id: str | None = None
    notes: str | None = None
    decided_at: datetime | None = None

    @property
    def is_pending(self) -> bool:
        return self.status == ApprovalStepStatus.PENDING.value

    @property
    def is_rejected(self) -> bool:
        return self.status == ApprovalStepStatus.REJECTED.value


@dataclass
class ApprovalChain:
    """Ordered view over a document's approval steps."""

    steps: list[ApprovalStepEntity]

    def __post_init__(self) -> None:
        self.steps = sorted(self.steps, key=lambda s: s.level)

    def pending(self) -> list[ApprovalStepEntity]:
        return [s for s in self.steps if s.is_pending]

    def pending_levels(self) -> list[int]:
        return [s.level for s in self.pending()]

    def rejected_step(self) -> ApprovalStepEntity | None:
        return next((s for s in self.steps if s.is_rejected), None)

    def current_step(self) -> ApprovalStepEntity | None:
        """Lowest-level pending step; None once all are decided or one was rejected."""
        if self.rejected_step() is not None:
            return None
        pending = self.pending()
        return pending[0] if pending else None

    def ensure_open(self) -> None:
        """Raise BusinessRuleException if a step was rejected."""
        rejected = self.rejected_step()
        if rejected is None:
            return
        raise BusinessRuleException(
            f"Approval chain was rejected at level {rejected.level} "
            f"by {rejected.approver_role}; return the document to its initial "
            "status to restart approval.",
            "chain_rejected",
            rejected_level=rejected.level,
        )

    def ensure_cleared(self) -> None:
        """Raise unless every step is approved: rejected first, then pending."""
        self.ensure_open()
        self.ensure_no_pending()

    def ensure_no_pending(self) -> None:
        """Raise BusinessRuleException if any step is still pending."""
        levels = self.pending_levels()
        if not levels:
            return
        raise BusinessRuleException(
            f"Cannot transition: document has {len(levels)} pending approval(s) "
            f"at level(s) {', '.join(str(lv) for lv in levels)}. "
            "All approval steps must be completed before status transition.",
            "pending_approvals",
            pending_count=len(levels),
            pending_levels=levels,
        )
