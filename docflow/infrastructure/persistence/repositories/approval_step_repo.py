"""Approval step repository. Steps are keyed by (document_type_tag, document_id, level)."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from docflow.application.dtos.approval import ApprovalStepResult
from docflow.domain.exceptions import ResourceNotFoundException
from docflow.infrastructure.persistence.models.approval import ApprovalStep
from docflow.infrastructure.persistence.repositories.base import BaseRepository
from docflow.shared.enums import ApprovalStepStatus
from docflow.shared.utils.datetime import ensure_utc


def _step_to_result(s: ApprovalStep) -> ApprovalStepResult:
    """Map ORM ApprovalStep to ApprovalStepResult."""
    return ApprovalStepResult(
        id=s.id,
        document_type_tag=s.document_type_tag,
        document_id=s.document_id,
        level=s.level,
        approver_role=s.approver_role,
        status=s.status,
        approver_id=s.approver_id,
        notes=s.notes,
        decided_at=ensure_utc(s.decided_at),
    )


class ApprovalStepRepository(BaseRepository[ApprovalStep]):
    """Approval steps shared across subsystems through document_type_tag."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, ApprovalStep)

    async def create_steps(
        self, document_type_tag: str, document_id: str, levels: list[tuple[int, str]]
    ) -> list[ApprovalStepResult]:
        rows = [
            ApprovalStep(
                document_type_tag=document_type_tag,
                document_id=document_id,
                level=level,
                approver_role=role,
                status=ApprovalStepStatus.PENDING.value,
            )
            for level, role in levels
        ]
        self.db.add_all(rows)
        await self.db.flush()
        return [_step_to_result(r) for r in sorted(rows, key=lambda r: r.level)]

    async def _select(
        self, document_type_tag: str, document_id: str, *, pending_only: bool
    ) -> list[ApprovalStepResult]:
        stmt = select(ApprovalStep).where(
            ApprovalStep.document_type_tag == document_type_tag,
            ApprovalStep.document_id == document_id,
        )
        if pending_only:
            stmt = stmt.where(ApprovalStep.status == ApprovalStepStatus.PENDING.value)
        result = await self.db.execute(stmt.order_by(ApprovalStep.level.asc()))
        return [_step_to_result(s) for s in result.scalars().all()]

    async def get_steps(
        self, document_type_tag: str, document_id: str
    ) -> list[ApprovalStepResult]:
        return await self._select(document_type_tag, document_id, pending_only=False)

    async def get_pending_steps(
        self, document_type_tag: str, document_id: str
    ) -> list[ApprovalStepResult]:
        return await self._select(document_type_tag, document_id, pending_only=True)

    async def record_decision(
        self,
        step_id: str,
        status: str,
        approver_id: str,
        notes: str | None,
        decided_at: datetime,
    ) -> ApprovalStepResult:
        entity = await super().get_by_id(step_id)
        if not entity:
            raise ResourceNotFoundException("approval_step", step_id)
        entity.status = status
        entity.approver_id = approver_id
        entity.notes = notes
        entity.decided_at = decided_at
        updated = await self.update(entity)
        return _step_to_result(updated)

    async def skip_pending_after(
        self, document_type_tag: str, document_id: str, level: int
    ) -> int:
        result = await self.db.execute(
            update(ApprovalStep)
            .where(
                ApprovalStep.document_type_tag == document_type_tag,
                ApprovalStep.document_id == document_id,
                ApprovalStep.status == ApprovalStepStatus.PENDING.value,
                ApprovalStep.level > level,
            )
            .values(status=ApprovalStepStatus.SKIPPED.value)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    async def reopen_steps(self, document_type_tag: str, document_id: str) -> int:
        result = await self.db.execute(
            update(ApprovalStep)
            .where(
                ApprovalStep.document_type_tag == document_type_tag,
                ApprovalStep.document_id == document_id,
            )
            .values(
                status=ApprovalStepStatus.PENDING.value,
                approver_id=None,
                notes=None,
                decided_at=None,
            )
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount
