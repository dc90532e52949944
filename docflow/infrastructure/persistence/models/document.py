"""Document and DocumentLine ORM models. Instances of a document type."""

from typing import Any

from sqlalchemy import JSON, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from docflow.infrastructure.persistence.database import Base
from docflow.infrastructure.persistence.models.mixins import (
    CuidMixin,
    TimestampMixin,
    UserAuditMixin,
    VersionedMixin,
)


class Document(CuidMixin, UserAuditMixin, VersionedMixin, Base):
    """Document instance. Table: document. Unique document_number."""

    __tablename__ = "document"

    document_type_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("document_type.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    document_number: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    status: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    project_id: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    warehouse_id: Mapped[str | None] = mapped_column(String, nullable=True, index=True)

    lines: Mapped[list["DocumentLine"]] = relationship(
        back_populates="document",
        order_by="DocumentLine.line_number",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise",
    )

    __table_args__ = (
        Index("ix_document_type_created", "document_type_id", "created_at"),
    )


class DocumentLine(CuidMixin, TimestampMixin, Base):
    """One line of a document. Table: document_line. Unique (document_id, line_number)."""

    __tablename__ = "document_line"

    document_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("document.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    line_number: Mapped[int] = mapped_column(Integer, nullable=False)
    data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    document: Mapped[Document] = relationship(back_populates="lines")

    __table_args__ = (
        UniqueConstraint("document_id", "line_number", name="uq_document_line_number"),
    )
