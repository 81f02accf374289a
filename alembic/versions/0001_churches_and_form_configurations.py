"""churches and per-church form configurations

Revision ID: 0001_form_configurations
Revises:
Create Date: 2026-10-17 09:00:00.000000
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = "0001_form_configurations"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "churches",
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("location", sa.String(length=200), nullable=True),
        sa.Column("logo_url", sa.String(length=500), nullable=True),
        sa.Column("public_token", sa.String(length=64), nullable=True),
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("responsible", sa.String(length=200), nullable=False, server_default="System administrator"),
    )
    op.create_index(op.f("ix_churches_public_token"), "churches", ["public_token"], unique=True)

    op.create_table(
        "form_configurations",
        sa.Column("church_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("form_type", sa.String(length=30), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=True),
        sa.Column("hero_title", sa.String(length=200), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("field_config", sa.JSON(), nullable=False),
        sa.Column("custom_fields", sa.JSON(), nullable=False),
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("responsible", sa.String(length=200), nullable=False, server_default="System administrator"),
        sa.UniqueConstraint("church_id", "form_type", name="uq_form_configurations_church_form_type"),
    )
    op.create_index(op.f("ix_form_configurations_church_id"), "form_configurations", ["church_id"], unique=False)

    op.alter_column("churches", "responsible", server_default=None)
    op.alter_column("form_configurations", "responsible", server_default=None)


def downgrade() -> None:
    op.drop_index(op.f("ix_form_configurations_church_id"), table_name="form_configurations")
    op.drop_table("form_configurations")

    op.drop_index(op.f("ix_churches_public_token"), table_name="churches")
    op.drop_table("churches")
