"""DocumentType and FieldDefinition ORM models. Runtime-defined document schemas."""

from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from docflow.infrastructure.persistence.database import Base
from docflow.infrastructure.persistence.models.mixins import (
    CuidMixin,
    TimestampMixin,
    UserAuditMixin,
    VersionedMixin,
)

# None is written as SQL NULL (explicit absence), not JSON 'null'.
NullableJSON = JSON(none_as_null=True)


class DocumentType(CuidMixin, UserAuditMixin, VersionedMixin, Base):
    """Document type definition. Table: document_type. Unique code."""

    __tablename__ = "document_type"

    code: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    icon: Mapped[str | None] = mapped_column(String(100), nullable=True)
    category: Mapped[str] = mapped_column(
        String(100), nullable=False, default="custom", index=True
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    status_flow: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    approval_config: Mapped[dict[str, Any] | None] = mapped_column(
        NullableJSON, nullable=True
    )
    permission_config: Mapped[dict[str, Any] | None] = mapped_column(
        NullableJSON, nullable=True
    )
    settings: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    visible_to_roles: Mapped[list[str]] = mapped_column(
        JSON, nullable=False, default=list
    )

    fields: Mapped[list["FieldDefinition"]] = relationship(
        back_populates="document_type",
        order_by="FieldDefinition.sort_order",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise",
    )


class FieldDefinition(CuidMixin, TimestampMixin, Base):
    """One field of a document type. Table: field_definition. Unique (document_type_id, field_key)."""

    __tablename__ = "field_definition"

    document_type_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("document_type.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    field_key: Mapped[str] = mapped_column(String(100), nullable=False)
    label: Mapped[str] = mapped_column(String(255), nullable=False)
    field_type: Mapped[str] = mapped_column(String(50), nullable=False)
    options: Mapped[list[Any] | None] = mapped_column(NullableJSON, nullable=True)
    is_required: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    show_in_grid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    show_in_form: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    section_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    validation_rules: Mapped[dict[str, Any] | None] = mapped_column(
        NullableJSON, nullable=True
    )
    default_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    col_span: Mapped[int] = mapped_column(Integer, nullable=False, default=2)
    is_line_item: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_read_only: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    conditional_display: Mapped[dict[str, Any] | None] = mapped_column(
        NullableJSON, nullable=True
    )

    document_type: Mapped[DocumentType] = relationship(back_populates="fields")

    __table_args__ = (
        UniqueConstraint(
            "document_type_id", "field_key", name="uq_field_definition_type_key"
        ),
    )
