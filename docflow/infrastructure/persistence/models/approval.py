"""Approval ORM models: steps, approvers and delegations.

approval_step is shared by every subsystem that uses approvals; rows are
scoped by document_type_tag, so document_id carries no foreign key.
"""

from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from docflow.infrastructure.persistence.database import Base
from docflow.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class ApprovalStep(CuidMixin, TimestampMixin, Base):
    """One level of a document's approval chain. Unique (document_type_tag, document_id, level)."""

    __tablename__ = "approval_step"

    document_type_tag: Mapped[str] = mapped_column(String(150), nullable=False)
    document_id: Mapped[str] = mapped_column(String, nullable=False)
    level: Mapped[int] = mapped_column(Integer, nullable=False)
    approver_role: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    approver_id: Mapped[str | None] = mapped_column(String, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    decided_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        UniqueConstraint(
            "document_type_tag",
            "document_id",
            "level",
            name="uq_approval_step_tag_document_level",
        ),
        Index("ix_approval_step_tag_document_status", "document_type_tag", "document_id", "status"),
    )


class Approver(CuidMixin, TimestampMixin, Base):
    """Actor known to the approval authorizer. Table: approver. Unique actor_id."""

    __tablename__ = "approver"

    actor_id: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    system_role: Mapped[str] = mapped_column(String(100), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class ApprovalDelegation(CuidMixin, TimestampMixin, Base):
    """Delegator's approval authority lent to a delegate for a date window.

    scope is 'all' or a single document type tag.
    """

    __tablename__ = "approval_delegation"

    delegator_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    delegate_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    scope: Mapped[str] = mapped_column(String(150), nullable=False, default="all")
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
