"""DTOs for approval steps and decisions."""

from dataclasses import dataclass
from datetime import datetime

from docflow.shared.enums import ApprovalStepStatus


@dataclass(frozen=True)
class ApprovalStepResult:
    """Approval step read-model. Identity is (document_type_tag, document_id, level)."""

    id: str
    document_type_tag: str
    document_id: str
    level: int
    approver_role: str
    status: str
    approver_id: str | None
    notes: str | None
    decided_at: datetime | None


@dataclass(frozen=True)
class ApprovalDecisionResult:
    """Outcome of approving or rejecting the current step."""

    document_id: str
    level: int
    approver_role: str
    decision: ApprovalStepStatus
    remaining_levels: int
    steps: list[ApprovalStepResult]

    @property
    def all_approved(self) -> bool:
        """True once no step is pending and none was rejected."""
        return self.remaining_levels == 0 and not any(
            s.status == ApprovalStepStatus.REJECTED.value for s in self.steps
        )

    @property
    def rejected(self) -> bool:
        return self.decision == ApprovalStepStatus.REJECTED
