"""initial schema

Revision ID: 3c1f0a9b7d21
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3c1f0a9b7d21"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(with_updated: bool = True) -> list[sa.Column]:
    columns = [sa.Column("created_at", sa.DateTime(timezone=True), nullable=False)]
    if with_updated:
        columns.append(sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True))
    return columns


def _user_fk(name: str = "user_id", nullable: bool = False) -> sa.Column:
    return sa.Column(
        name,
        sa.String(length=36),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=nullable,
    )


def _post_fk(nullable: bool = False) -> sa.Column:
    return sa.Column(
        "post_id",
        sa.Integer(),
        sa.ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=nullable,
    )


def upgrade() -> None:
    """Create every table of the initial schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("email", sa.String(length=320), nullable=False, unique=True),
        sa.Column("password_hash", sa.Text(), nullable=False),
        *_timestamps(with_updated=False),
    )
    op.create_table(
        "profiles",
        sa.Column(
            "id",
            sa.String(length=36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("username", sa.String(length=50), nullable=False, unique=True),
        sa.Column("first_name", sa.String(length=50), nullable=True),
        sa.Column("last_name", sa.String(length=50), nullable=True),
        sa.Column("school_name", sa.String(length=100), nullable=True),
        sa.Column("major", sa.String(length=100), nullable=True),
        sa.Column("double_major", sa.String(length=100), nullable=True),
        sa.Column("is_notify_comment", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_marketing_agreed", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_table(
        "posts",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _user_fk(),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("board", sa.String(length=50), nullable=False),
        sa.Column("tag", sa.String(length=50), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("is_solved", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_posts_board_created_at", "posts", ["board", "created_at"])
    op.create_index("ix_posts_user_id", "posts", ["user_id"])

    op.create_table(
        "hashtags",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=100), nullable=False, unique=True),
        sa.Column("count", sa.BigInteger(), nullable=False, server_default="0"),
    )
    op.create_table(
        "post_hashtags",
        sa.Column(
            "post_id",
            sa.Integer(),
            sa.ForeignKey("posts.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "hashtag_id",
            sa.Integer(),
            sa.ForeignKey("hashtags.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )
    op.create_table(
        "comments",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _post_fk(),
        _user_fk(),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("is_accepted", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_comments_post_id", "comments", ["post_id"])

    op.create_table(
        "reviews",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _user_fk(),
        _post_fk(),
        sa.Column("score", sa.SmallInteger(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "post_id", name="uq_reviews_user_post"),
        sa.CheckConstraint("score BETWEEN 1 AND 5", name="ck_reviews_score_range"),
    )
    op.create_index("ix_reviews_post_id", "reviews", ["post_id"])

    op.create_table(
        "reports",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _user_fk("reporter_id"),
        _post_fk(),
        sa.Column("reason", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(with_updated=False),
    )
    op.create_table(
        "notifications",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _user_fk(),
        sa.Column(
            "actor_id",
            sa.String(length=36),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("type", sa.String(length=30), nullable=False),
        _post_fk(nullable=True),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(with_updated=False),
    )
    op.create_index("ix_notifications_user_read", "notifications", ["user_id", "is_read"])

    op.create_table(
        "knowledge_cards",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "post_id",
            sa.Integer(),
            sa.ForeignKey("posts.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        _user_fk(),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("summary", sa.Text(), nullable=False),
        sa.Column("category", sa.String(length=50), nullable=True),
        sa.Column("keywords", sa.JSON(), nullable=False),
        *_timestamps(with_updated=False),
    )
    op.create_table(
        "schedules",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _user_fk(),
        sa.Column("title", sa.String(length=100), nullable=False),
        sa.Column("day_of_week", sa.String(length=1), nullable=False),
        sa.Column("start_time", sa.String(length=5), nullable=False),
        sa.Column("end_time", sa.String(length=5), nullable=False),
        sa.Column("location", sa.String(length=100), nullable=True),
        *_timestamps(with_updated=False),
        sa.CheckConstraint("start_time < end_time", name="ck_schedules_time_order"),
    )
    op.create_index("ix_schedules_user_id", "schedules", ["user_id"])

    op.create_table(
        "study_sessions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _user_fk(),
        sa.Column("status", sa.String(length=10), nullable=False),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("paused_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("ended_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("accumulated_seconds", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("study_subject", sa.String(length=100), nullable=True),
        sa.Column("active_guard", sa.String(length=36), nullable=True, unique=True),
        *_timestamps(with_updated=False),
    )
    op.create_index(
        "ix_study_sessions_user_status", "study_sessions", ["user_id", "status"]
    )

    op.create_table(
        "study_records",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _user_fk(),
        sa.Column("study_date", sa.Date(), nullable=False),
        sa.Column("total_seconds", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("session_count", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "study_date", name="uq_study_records_user_date"),
    )


def downgrade() -> None:
    """Drop every table in reverse dependency order."""
    for table in (
        "study_records",
        "study_sessions",
        "schedules",
        "knowledge_cards",
        "notifications",
        "reports",
        "reviews",
        "comments",
        "post_hashtags",
        "hashtags",
        "posts",
        "profiles",
        "users",
    ):
        op.drop_table(table)
