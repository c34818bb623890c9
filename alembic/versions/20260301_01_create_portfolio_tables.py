"""Create admins, projects, blog_posts and contacts tables.

Revision ID: 20260301_01
Revises:
Create Date: 2026-03-01 00:00:00
"""

# pylint: disable=invalid-name,missing-module-docstring

from __future__ import annotations

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "20260301_01"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade():
    """Create the portfolio tables."""
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    if not inspector.has_table("admins"):
        op.create_table(
            "admins",
            sa.Column("id", sa.String(length=24), primary_key=True),
            sa.Column("username", sa.String(length=100), nullable=False),
            sa.Column("email", sa.String(length=254), nullable=False),
            sa.Column("password_hash", sa.String(length=255), nullable=False),
            sa.Column(
                "role", sa.String(length=20), nullable=False, server_default="admin"
            ),
            *_timestamps(),
        )
        op.create_index("ix_admins_username", "admins", ["username"], unique=True)
        op.create_index("ix_admins_email", "admins", ["email"], unique=True)

    if not inspector.has_table("projects"):
        op.create_table(
            "projects",
            sa.Column("id", sa.String(length=24), primary_key=True),
            sa.Column("title", sa.String(length=100), nullable=False),
            sa.Column("category", sa.String(length=50), nullable=False),
            sa.Column("image", sa.String(length=500), nullable=False),
            sa.Column(
                "description", sa.String(length=500), nullable=False, server_default=""
            ),
            sa.Column("technologies", sa.Text(), nullable=False, server_default="[]"),
            sa.Column("project_url", sa.String(length=500), nullable=True),
            sa.Column("github_url", sa.String(length=500), nullable=True),
            *_timestamps(),
        )
        op.create_index("ix_projects_category", "projects", ["category"])
        op.create_index("ix_projects_created_at", "projects", ["created_at"])

    if not inspector.has_table("blog_posts"):
        op.create_table(
            "blog_posts",
            sa.Column("id", sa.String(length=24), primary_key=True),
            sa.Column("title", sa.String(length=200), nullable=False),
            sa.Column("content", sa.Text(), nullable=False),
            sa.Column(
                "excerpt", sa.String(length=300), nullable=False, server_default=""
            ),
            sa.Column("tags", sa.Text(), nullable=False, server_default="[]"),
            sa.Column(
                "status",
                sa.String(length=20),
                nullable=False,
                server_default="published",
            ),
            sa.Column("author", sa.String(length=100), nullable=False),
            sa.Column("read_time", sa.Integer(), nullable=False, server_default="1"),
            sa.Column("views", sa.Integer(), nullable=False, server_default="0"),
            *_timestamps(),
            sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        )
        op.create_index("ix_blog_posts_status", "blog_posts", ["status"])
        op.create_index("ix_blog_posts_created_at", "blog_posts", ["created_at"])
        op.create_index("ix_blog_posts_published_at", "blog_posts", ["published_at"])

    if not inspector.has_table("contacts"):
        op.create_table(
            "contacts",
            sa.Column("id", sa.String(length=24), primary_key=True),
            sa.Column("name", sa.String(length=100), nullable=False),
            sa.Column("email", sa.String(length=254), nullable=False),
            sa.Column("phone", sa.String(length=50), nullable=True),
            sa.Column("subject", sa.String(length=200), nullable=True),
            sa.Column("message", sa.Text(), nullable=False),
            sa.Column(
                "status", sa.String(length=20), nullable=False, server_default="new"
            ),
            sa.Column(
                "priority",
                sa.String(length=20),
                nullable=False,
                server_default="normal",
            ),
            sa.Column(
                "source", sa.String(length=50), nullable=False, server_default="website"
            ),
            sa.Column("ip_address", sa.String(length=64), nullable=True),
            sa.Column("user_agent", sa.String(length=500), nullable=True),
            sa.Column("notes", sa.Text(), nullable=True),
            sa.Column("responded_at", sa.DateTime(timezone=True), nullable=True),
            sa.Column("responded_by", sa.String(length=100), nullable=True),
            *_timestamps(),
        )
        op.create_index("ix_contacts_email", "contacts", ["email"])
        op.create_index("ix_contacts_status", "contacts", ["status"])
        op.create_index("ix_contacts_created_at", "contacts", ["created_at"])


def downgrade():
    """Drop the portfolio tables."""
    for table in ("contacts", "blog_posts", "projects", "admins"):
        op.drop_table(table)
