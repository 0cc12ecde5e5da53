# src/study_sns/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .comments import router as comments_router
from .hashtags import router as hashtags_router
from .interactions import router as interactions_router
from .knowledge import router as knowledge_router
from .notes import router as notes_router
from .notifications import router as notifications_router
from .posts import router as posts_router
from .profiles import router as profiles_router
from .schedules import router as schedules_router
from .study import router as study_router
from .uploads import router as uploads_router

__all__ = [
    "auth_router",
    "comments_router",
    "hashtags_router",
    "interactions_router",
    "knowledge_router",
    "notes_router",
    "notifications_router",
    "posts_router",
    "profiles_router",
    "schedules_router",
    "study_router",
    "uploads_router",
]
