"""Column mixins shared by the docflow tables.

Actor ids are opaque strings issued by the upstream identity provider, so
the audit columns carry no foreign key. Mixin columns without foreign keys
are copied onto each mapped subclass by SQLAlchemy.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from docflow.shared.utils.generators import generate_cuid


class CuidMixin:
    """String CUID2 primary key generated client-side."""

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_cuid)


class TimestampMixin:
    """created_at / updated_at maintained by the database clock."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class UserAuditMixin(TimestampMixin):
    """Timestamps plus the actor that created and last changed the row."""

    created_by: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    updated_by: Mapped[str | None] = mapped_column(String, nullable=True)


class VersionedMixin:
    """Write counter; repositories increment it on every update."""

    version: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
