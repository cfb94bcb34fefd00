"""dashboard templates baseline

Revision ID: 001_dashboard_templates
Revises: None
Create Date: 2026-10-19

Creates user_identities and dashboard_templates.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_dashboard_templates"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "user_identities",
        sa.Column("id", sa.BigInteger(), primary_key=True),
        sa.Column("account_id", sa.String(255), nullable=False, unique=True),
        sa.Column("first_login", sa.Boolean(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    op.create_table(
        "dashboard_templates",
        sa.Column("id", sa.BigInteger(), primary_key=True),
        sa.Column("user_identity_id", sa.BigInteger(), sa.ForeignKey("user_identities.id"), nullable=False),
        sa.Column("default", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("dashboard_type", sa.String(50), nullable=False),
        sa.Column("display_name", sa.String(255), nullable=False),
        sa.Column("template_config", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    op.create_index(
        "ix_dashboard_templates_user_type",
        "dashboard_templates",
        ["user_identity_id", "dashboard_type"],
    )
    op.create_index(
        "uq_dashboard_templates_user_default",
        "dashboard_templates",
        ["user_identity_id", "dashboard_type"],
        unique=True,
        postgresql_where=sa.text('"default"'),
        sqlite_where=sa.text('"default"'),
    )


def downgrade() -> None:
    op.drop_index("uq_dashboard_templates_user_default", table_name="dashboard_templates")
    op.drop_index("ix_dashboard_templates_user_type", table_name="dashboard_templates")
    op.drop_table("dashboard_templates")
    op.drop_table("user_identities")
