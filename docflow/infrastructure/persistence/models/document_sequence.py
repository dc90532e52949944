"""DocumentSequence ORM model. One counter row per (scope, year)."""

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from docflow.infrastructure.persistence.database import Base
from docflow.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class DocumentSequence(CuidMixin, TimestampMixin, Base):
    """Last issued number for a scope in a year. Unique (scope, year)."""

    __tablename__ = "document_sequence"

    scope: Mapped[str] = mapped_column(String(150), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    last_value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint("scope", "year", name="uq_document_sequence_scope_year"),
    )
