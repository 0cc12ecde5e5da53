# src/study_sns/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    auth_router,
    comments_router,
    hashtags_router,
    interactions_router,
    knowledge_router,
    notes_router,
    notifications_router,
    posts_router,
    profiles_router,
    schedules_router,
    study_router,
    uploads_router,
)

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
