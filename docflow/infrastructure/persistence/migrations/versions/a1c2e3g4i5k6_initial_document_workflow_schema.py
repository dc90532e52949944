"""initial document workflow schema

Revision ID: a1c2e3g4i5k6
Revises:
Create Date: 2026-10-17

Document types with field definitions, documents with lines, history,
approval steps, approvers and delegations, and the per-scope number counter.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "a1c2e3g4i5k6"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "document_type",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("code", sa.String(length=100), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("icon", sa.String(length=100), nullable=True),
        sa.Column("category", sa.String(length=100), nullable=False, server_default="custom"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("status_flow", sa.JSON(), nullable=False),
        sa.Column("approval_config", sa.JSON(), nullable=True),
        sa.Column("permission_config", sa.JSON(), nullable=True),
        sa.Column("settings", sa.JSON(), nullable=False),
        sa.Column("visible_to_roles", sa.JSON(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("created_by", sa.String(), nullable=True),
        sa.Column("updated_by", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_document_type_code", "document_type", ["code"], unique=True)
    op.create_index("ix_document_type_category", "document_type", ["category"], unique=False)
    op.create_index("ix_document_type_created_by", "document_type", ["created_by"], unique=False)

    op.create_table(
        "field_definition",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("document_type_id", sa.String(), nullable=False),
        sa.Column("field_key", sa.String(length=100), nullable=False),
        sa.Column("label", sa.String(length=255), nullable=False),
        sa.Column("field_type", sa.String(length=50), nullable=False),
        sa.Column("options", sa.JSON(), nullable=True),
        sa.Column("is_required", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("show_in_grid", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("show_in_form", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("section_name", sa.String(length=255), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("validation_rules", sa.JSON(), nullable=True),
        sa.Column("default_value", sa.Text(), nullable=True),
        sa.Column("col_span", sa.Integer(), nullable=False, server_default="2"),
        sa.Column("is_line_item", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_read_only", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("conditional_display", sa.JSON(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["document_type_id"], ["document_type.id"], ondelete="CASCADE"
        ),
        sa.UniqueConstraint(
            "document_type_id", "field_key", name="uq_field_definition_type_key"
        ),
    )
    op.create_index(
        "ix_field_definition_document_type_id",
        "field_definition",
        ["document_type_id"],
        unique=False,
    )

    op.create_table(
        "document",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("document_type_id", sa.String(), nullable=False),
        sa.Column("document_number", sa.String(length=100), nullable=False),
        sa.Column("status", sa.String(length=100), nullable=False),
        sa.Column("data", sa.JSON(), nullable=False),
        sa.Column("project_id", sa.String(), nullable=True),
        sa.Column("warehouse_id", sa.String(), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("created_by", sa.String(), nullable=True),
        sa.Column("updated_by", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["document_type_id"], ["document_type.id"], ondelete="RESTRICT"
        ),
        sa.UniqueConstraint("document_number"),
    )
    op.create_index("ix_document_document_type_id", "document", ["document_type_id"], unique=False)
    op.create_index("ix_document_status", "document", ["status"], unique=False)
    op.create_index("ix_document_project_id", "document", ["project_id"], unique=False)
    op.create_index("ix_document_warehouse_id", "document", ["warehouse_id"], unique=False)
    op.create_index("ix_document_created_by", "document", ["created_by"], unique=False)
    op.create_index(
        "ix_document_type_created", "document", ["document_type_id", "created_at"], unique=False
    )

    op.create_table(
        "document_line",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("document_id", sa.String(), nullable=False),
        sa.Column("line_number", sa.Integer(), nullable=False),
        sa.Column("data", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["document_id"], ["document.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("document_id", "line_number", name="uq_document_line_number"),
    )
    op.create_index(
        "ix_document_line_document_id", "document_line", ["document_id"], unique=False
    )

    op.create_table(
        "document_history",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("document_id", sa.String(), nullable=False),
        sa.Column("from_status", sa.String(length=100), nullable=True),
        sa.Column("to_status", sa.String(length=100), nullable=False),
        sa.Column("performed_by_id", sa.String(), nullable=True),
        sa.Column("comment", sa.Text(), nullable=True),
        sa.Column(
            "performed_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["document_id"], ["document.id"], ondelete="CASCADE"),
    )
    op.create_index(
        "ix_document_history_document_performed",
        "document_history",
        ["document_id", "performed_at"],
        unique=False,
    )

    op.create_table(
        "approval_step",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("document_type_tag", sa.String(length=150), nullable=False),
        sa.Column("document_id", sa.String(), nullable=False),
        sa.Column("level", sa.Integer(), nullable=False),
        sa.Column("approver_role", sa.String(length=100), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("approver_id", sa.String(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("decided_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "document_type_tag",
            "document_id",
            "level",
            name="uq_approval_step_tag_document_level",
        ),
        sa.CheckConstraint(
            "status IN ('pending', 'approved', 'rejected', 'skipped')",
            name="ck_approval_step_status",
        ),
    )
    op.create_index(
        "ix_approval_step_tag_document_status",
        "approval_step",
        ["document_type_tag", "document_id", "status"],
        unique=False,
    )

    op.create_table(
        "approver",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("actor_id", sa.String(), nullable=False),
        sa.Column("system_role", sa.String(length=100), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("actor_id"),
    )

    op.create_table(
        "approval_delegation",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("delegator_id", sa.String(), nullable=False),
        sa.Column("delegate_id", sa.String(), nullable=False),
        sa.Column("scope", sa.String(length=150), nullable=False, server_default="all"),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_approval_delegation_delegator_id", "approval_delegation", ["delegator_id"], unique=False
    )
    op.create_index(
        "ix_approval_delegation_delegate_id", "approval_delegation", ["delegate_id"], unique=False
    )

    op.create_table(
        "document_sequence",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("scope", sa.String(length=150), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("last_value", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("scope", "year", name="uq_document_sequence_scope_year"),
    )


def downgrade() -> None:
    op.drop_table("document_sequence")
    op.drop_index("ix_approval_delegation_delegate_id", table_name="approval_delegation")
    op.drop_index("ix_approval_delegation_delegator_id", table_name="approval_delegation")
    op.drop_table("approval_delegation")
    op.drop_table("approver")
    op.drop_index("ix_approval_step_tag_document_status", table_name="approval_step")
    op.drop_table("approval_step")
    op.drop_index("ix_document_history_document_performed", table_name="document_history")
    op.drop_table("document_history")
    op.drop_index("ix_document_line_document_id", table_name="document_line")
    op.drop_table("document_line")
    op.drop_index("ix_document_type_created", table_name="document")
    op.drop_index("ix_document_created_by", table_name="document")
    op.drop_index("ix_document_warehouse_id", table_name="document")
    op.drop_index("ix_document_project_id", table_name="document")
    op.drop_index("ix_document_status", table_name="document")
    op.drop_index("ix_document_document_type_id", table_name="document")
    op.drop_table("document")
    op.drop_index("ix_field_definition_document_type_id", table_name="field_definition")
    op.drop_table("field_definition")
    op.drop_index("ix_document_type_created_by", table_name="document_type")
    op.drop_index("ix_document_type_category", table_name="document_type")
    op.drop_index("ix_document_type_code", table_name="document_type")
    op.drop_table("document_type")
