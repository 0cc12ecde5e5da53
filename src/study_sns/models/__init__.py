"""SQLAlchemy models for the Study SNS application."""

from .comment import Comment
from .interaction import Report, Review
from .knowledge import KnowledgeCard
from .notification import Notification
from .post import Hashtag, Post, PostHashtag
from .schedule import Schedule
from .study import StudyRecord, StudySession
from .user import Profile, User

__all__ = [
    "Comment",
    "Report", "Review",
    "KnowledgeCard",
    "Notification",
    "Hashtag", "Post", "PostHashtag",
    "Schedule",
    "StudyRecord", "StudySession",
    "Profile", "User",
]
