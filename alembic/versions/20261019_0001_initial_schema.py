"""
Initial schema: users and blogs.

Revision ID: 0001
Revises:
Create Date: 2026-10-19

- users: identity-provider users, unique by email
- blogs: rich-text posts owned by a user; views is an integer counter
"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

revision: str = "0001"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Apply schema changes for this revision."""
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=128), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "blogs",
        sa.Column("id", sa.String(length=128), nullable=False),
        sa.Column("author_id", sa.String(length=128), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("excerpt", sa.Text(), nullable=True),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("theme", sa.String(length=20), server_default="modern", nullable=False),
        sa.Column("tags", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("is_published", sa.Boolean(), server_default="false", nullable=False),
        sa.Column("views", sa.Integer(), server_default="0", nullable=False),
        sa.Column("media_urls", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_blogs_author_id", "blogs", ["author_id"], unique=False)
    op.create_index(
        "ix_blogs_published_created",
        "blogs",
        ["is_published", "created_at"],
        unique=False,
    )
    op.create_index("ix_blogs_author_updated", "blogs", ["author_id", "updated_at"], unique=False)


def downgrade() -> None:
    """Revert schema changes for this revision."""
    op.drop_index("ix_blogs_author_updated", table_name="blogs")
    op.drop_index("ix_blogs_published_created", table_name="blogs")
    op.drop_index("ix_blogs_author_id", table_name="blogs")
    op.drop_table("blogs")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
