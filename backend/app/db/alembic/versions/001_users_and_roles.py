"""Users and organization roles

Revision ID: 001
Revises:
Create Date: 2026-10-17

Creates:
- users (one row per name/provider/scheme identity)
- user_roles (at most one role per user and organization)
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create users and user_roles tables."""
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("provider", sa.Text(), nullable=False, server_default=""),
        sa.Column("scheme", sa.Text(), nullable=False, server_default=""),
        sa.UniqueConstraint("name", "provider", "scheme", name="uq_users_identity"),
    )

    op.create_table(
        "user_roles",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("organization", sa.Text(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.UniqueConstraint("user_id", "organization", name="uq_user_roles_org"),
    )
    op.create_index("idx_user_roles_org", "user_roles", ["organization"])


def downgrade() -> None:
    """Drop users and user_roles tables."""
    op.drop_index("idx_user_roles_org", table_name="user_roles")
    op.drop_table("user_roles")
    op.drop_table("users")
