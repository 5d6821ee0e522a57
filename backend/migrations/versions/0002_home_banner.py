"""Create home_banner table

Revision ID: 0002_home_banner
Revises: 0001_initial
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

revision = "0002_home_banner"
down_revision = "0001_initial"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "home_banner",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("banner_title", sa.String(255), nullable=False),
        sa.Column("priority", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column(
            "device_type",
            sa.Enum("mobile", "desktop", "tablet", "all", name="banner_device_type"),
            nullable=False,
            server_default="all",
        ),
        # stored file name only
        sa.Column("image", sa.String(255), nullable=True),
        sa.Column(
            "create_user_id",
            sa.String(36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
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
    )
    op.create_index("ix_home_banner_create_user_id", "home_banner", ["create_user_id"])


def downgrade() -> None:
    op.drop_index("ix_home_banner_create_user_id", table_name="home_banner")
    op.drop_table("home_banner")
