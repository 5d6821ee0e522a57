"""Initial schema – users and mata_data

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19

Creates the account table and the per-login session metadata table.
"""

from alembic import op
import sqlalchemy as sa

# Alembic revision identifiers
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
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


def upgrade() -> None:
    # -- users ----------------------------------------------------------
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column(
            "role",
            sa.Enum("admin", "sales", name="user_role"),
            nullable=False,
            server_default="sales",
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("1")),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"])

    # -- mata_data ------------------------------------------------------
    op.create_table(
        "mata_data",
        sa.Column("mata_id", sa.String(36), primary_key=True),
        sa.Column(
            "user_id",
            sa.String(36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("device_name", sa.String(255), nullable=True),
        sa.Column(
            "device_type",
            sa.Enum("mobile", "tablet", "desktop", name="device_type"),
            nullable=True,
        ),
        sa.Column("last_login_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("logout_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_logout", sa.Boolean(), nullable=False, server_default=sa.text("0")),
        *_timestamps(),
    )
    op.create_index("ix_mata_data_user_id", "mata_data", ["user_id"])
    op.create_index("ix_mata_data_last_login_time", "mata_data", ["last_login_time"])


def downgrade() -> None:
    op.drop_index("ix_mata_data_last_login_time", table_name="mata_data")
    op.drop_index("ix_mata_data_user_id", table_name="mata_data")
    op.drop_table("mata_data")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
