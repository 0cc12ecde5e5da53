"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .comment import CommentCreate, CommentResponse, CommentUpdate
from .interaction import InteractionCreate, PostInteractionState, ReviewResult
from .knowledge import KnowledgeCardResponse, KnowledgeGenerateRequest
from .note import ImageAnalysisRequest, NoteAnalysisResponse, NoteData
from .notification import NotificationList, NotificationResponse
from .post import PostCreate, PostDetail, PostPage, PostResponse, PostUpdate
from .schedule import ScheduleCreate, ScheduleResponse, ScheduleUpdate
from .study import StudySessionResponse
from .user import LoginRequest, ProfileResponse, RegisterRequest

__all__ = [
    "CommentCreate", "CommentResponse", "CommentUpdate",
    "InteractionCreate", "PostInteractionState", "ReviewResult",
    "KnowledgeCardResponse", "KnowledgeGenerateRequest",
    "ImageAnalysisRequest", "NoteAnalysisResponse", "NoteData",
    "NotificationList", "NotificationResponse",
    "PostCreate", "PostDetail", "PostPage", "PostResponse", "PostUpdate",
    "ScheduleCreate", "ScheduleResponse", "ScheduleUpdate",
    "StudySessionResponse",
    "LoginRequest", "ProfileResponse", "RegisterRequest",
]
