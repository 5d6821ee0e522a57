"""Create events and event_videos tables

Revision ID: 0003_events
Revises: 0002_home_banner
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

revision = "0003_events"
down_revision = "0002_home_banner"
branch_labels = None
depends_on = None


def upgrade() -> None:
    # -- events ---------------------------------------------------------
    op.create_table(
        "events",
        sa.Column("event_id", sa.String(36), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("venue", sa.String(255), nullable=False),
        sa.Column(
            "status",
            sa.Enum("Active", "Inactive", "Cancelled", "Completed", name="event_status"),
            nullable=False,
            server_default="Active",
        ),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("show_video_details", sa.Boolean(), nullable=False, server_default=sa.text("0")),
        sa.Column("event_location", sa.String(255), nullable=True),
        sa.Column("main_image", sa.String(255), nullable=True),
        # JSON array of stored file names
        sa.Column("event_images", sa.JSON(), nullable=True),
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
    op.create_index("ix_events_start_time", "events", ["start_time"])
    op.create_index("ix_events_user_id", "events", ["user_id"])

    # -- event_videos ---------------------------------------------------
    op.create_table(
        "event_videos",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "event_id",
            sa.String(36),
            sa.ForeignKey("events.event_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("url", sa.String(2048), nullable=False),
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
    op.create_index("ix_event_videos_event_id", "event_videos", ["event_id"])


def downgrade() -> None:
    op.drop_index("ix_event_videos_event_id", table_name="event_videos")
    op.drop_table("event_videos")
    op.drop_index("ix_events_user_id", table_name="events")
    op.drop_index("ix_events_start_time", table_name="events")
    op.drop_table("events")
