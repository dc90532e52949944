"""DocumentHistory ORM model. Append-only; rows are never updated."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from docflow.infrastructure.persistence.database import Base
from docflow.infrastructure.persistence.models.mixins import CuidMixin


class DocumentHistory(CuidMixin, Base):
    """History entry. Table: document_history. from_status is null only on creation."""

    __tablename__ = "document_history"

    document_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("document.id", ondelete="CASCADE"),
        nullable=False,
    )
    from_status: Mapped[str | None] = mapped_column(String(100), nullable=True)
    to_status: Mapped[str] = mapped_column(String(100), nullable=False)
    performed_by_id: Mapped[str | None] = mapped_column(String, nullable=True)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    performed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        Index("ix_document_history_document_performed", "document_id", "performed_at"),
    )
