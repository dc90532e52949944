"""Role and delegation based approval authorizer (implements IApprovalAuthorizer)."""

from __future__ import annotations

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from docflow.infrastructure.persistence.models.approval import ApprovalDelegation, Approver
from docflow.shared.telemetry.logging import get_logger
from docflow.shared.utils.datetime import utc_now

logger = get_logger(__name__)

ADMIN_ROLE = "admin"
DELEGATION_SCOPE_ALL = "all"


class RoleApprovalAuthorizer:
    """Decides whether an actor may act for an approver role.

    An unknown or inactive approver is denied. The admin role may always
    approve; otherwise the actor's own role must match, or an active
    delegation from an active approver holding the role must cover today
    and the document type tag.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def is_authorized(
        self, actor_id: str, role: str, document_type_tag: str | None = None
    ) -> bool:
        approver = await self.db.scalar(select(Approver).where(Approver.actor_id == actor_id))
        if approver is None or not approver.is_active:
            return False
        if approver.system_role == ADMIN_ROLE or approver.system_role == role:
            return True

        today = utc_now().date()
        scopes = [DELEGATION_SCOPE_ALL]
        if document_type_tag:
            scopes.append(document_type_tag)
        delegation = await self.db.scalar(
            select(ApprovalDelegation)
            .join(Approver, Approver.actor_id == ApprovalDelegation.delegator_id)
            .where(
                ApprovalDelegation.delegate_id == actor_id,
                ApprovalDelegation.is_active.is_(True),
                ApprovalDelegation.start_date <= today,
                ApprovalDelegation.end_date >= today,
                or_(*(ApprovalDelegation.scope == s for s in scopes)),
                Approver.is_active.is_(True),
                Approver.system_role == role,
            )
            .limit(1)
        )
        if delegation is None:
            return False
        logger.info(
            "User %s acting for %s as %s via delegation %s",
            actor_id,
            delegation.delegator_id,
            role,
            delegation.id,
        )
        return True
