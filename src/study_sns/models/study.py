"""Models for study-timer sessions and per-day totals."""

from datetime import date, datetime

from sqlalchemy import (
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from study_sns.db.session import Base
from study_sns.db.time import utcnow

SESSION_STUDYING = "studying"
SESSION_PAUSED = "paused"
SESSION_ENDED = "ended"
OPEN_SESSION_STATES = (SESSION_STUDYING, SESSION_PAUSED)


class StudySession(Base):
    """A running, paused or finished study timer.

    ``paused_at`` holds the most recent pause *or resume* instant; while
    studying it marks the start of the current segment.
    """

    __tablename__ = "study_sessions"
    __table_args__ = (Index("ix_study_sessions_user_status", "user_id", "status"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(String(10), nullable=False, default=SESSION_STUDYING)
    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    paused_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    ended_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    accumulated_seconds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    study_subject: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Equals user_id while the session is open and NULL once ended. The unique
    # constraint allows one open session per user; NULLs never collide.
    active_guard: Mapped[str | None] = mapped_column(String(36), unique=True, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class StudyRecord(Base):
    """Daily study total, one row per user per date."""

    __tablename__ = "study_records"
    __table_args__ = (
        UniqueConstraint("user_id", "study_date", name="uq_study_records_user_date"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    study_date: Mapped[date] = mapped_column(Date, nullable=False)
    total_seconds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    session_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
