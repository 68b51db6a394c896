"""create marketplace tables

Revision ID: 3f1c2a9e7b10
Revises:
Create Date: 2026-10-16 09:00:00

"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "3f1c2a9e7b10"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "marketplace_plan",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("github_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_marketplace_plan")),
        sa.UniqueConstraint("github_id", name=op.f("uq_marketplace_plan_github_id")),
    )
    op.create_table(
        "marketplace_account",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("github_id", sa.Integer(), nullable=False),
        sa.Column("github_login", sa.String(), nullable=False),
        sa.Column("marketplace_plan_id", sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(
            ["marketplace_plan_id"],
            ["marketplace_plan.id"],
            name=op.f("fk_marketplace_account_marketplace_plan_id_marketplace_plan"),
            ondelete="RESTRICT",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_marketplace_account")),
        sa.UniqueConstraint("github_id", name=op.f("uq_marketplace_account_github_id")),
    )
    op.create_index(
        op.f("ix_marketplace_account_github_login"),
        "marketplace_account",
        ["github_login"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_marketplace_account_github_login"), table_name="marketplace_account")
    op.drop_table("marketplace_account")
    op.drop_table("marketplace_plan")
