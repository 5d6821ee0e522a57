"""Create stone_groups table

Revision ID: 0004_stone_groups
Revises: 0003_events
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

revision = "0004_stone_groups"
down_revision = "0003_events"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "stone_groups",
        sa.Column("stonegroup_id", sa.String(36), primary_key=True),
        sa.Column("stonegroup_guid", sa.String(36), nullable=False, unique=True),
        sa.Column("stonegroup_name", sa.String(255), nullable=False),
        sa.Column("stonegroup_shortname", sa.String(100), nullable=True),
        sa.Column("is_disabled", sa.Boolean(), nullable=False, server_default=sa.text("0")),
        sa.Column(
            "user_id",
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
    op.create_index("ix_stone_groups_stonegroup_guid", "stone_groups", ["stonegroup_guid"])
    op.create_index("ix_stone_groups_stonegroup_name", "stone_groups", ["stonegroup_name"])
    op.create_index("ix_stone_groups_user_id", "stone_groups", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_stone_groups_user_id", table_name="stone_groups")
    op.drop_index("ix_stone_groups_stonegroup_name", table_name="stone_groups")
    op.drop_index("ix_stone_groups_stonegroup_guid", table_name="stone_groups")
    op.drop_table("stone_groups")
