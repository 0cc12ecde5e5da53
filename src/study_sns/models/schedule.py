"""SQLAlchemy model for weekly class schedule entries."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from study_sns.db.session import Base
from study_sns.db.time import utcnow

# Monday first; the list index is the sort key for timetable views.
DAYS_OF_WEEK = ("월", "화", "수", "목", "금", "토", "일")


class Schedule(Base):
    """One weekly class slot."""

    __tablename__ = "schedules"
    __table_args__ = (
        CheckConstraint("start_time < end_time", name="ck_schedules_time_order"),
        Index("ix_schedules_user_id", "user_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    day_of_week: Mapped[str] = mapped_column(String(1), nullable=False)
    # Zero-padded HH:MM so lexical order matches time order.
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)
    location: Mapped[str | None] = mapped_column(String(100), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
