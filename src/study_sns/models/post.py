"""SQLAlchemy models for posts and hashtags."""

from datetime import datetime

from sqlalchemy import (
    BigInteger,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from study_sns.db.session import Base
from study_sns.db.time import utcnow


class Post(Base):
    """A study note, question or free-board entry."""

    __tablename__ = "posts"
    __table_args__ = (
        Index("ix_posts_board_created_at", "board", "created_at"),
        Index("ix_posts_user_id", "user_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    board: Mapped[str] = mapped_column(String(50), nullable=False)
    tag: Mapped[str | None] = mapped_column(String(50), nullable=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Set once the author adopts an answer in the comments.
    is_solved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class Hashtag(Base):
    """Hashtag with a running usage counter for the popular-topics filter."""

    __tablename__ = "hashtags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    count: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)


class PostHashtag(Base):
    """Join table linking posts to hashtags."""

    __tablename__ = "post_hashtags"

    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        primary_key=True,
    )
    hashtag_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("hashtags.id", ondelete="CASCADE"),
        primary_key=True,
    )
