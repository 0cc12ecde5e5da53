# src/study_sns/main.py
"""Main entry point for the Study SNS application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from study_sns.api.v1 import (
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
from study_sns.core.logging import configure_logging
from study_sns.core.settings import settings

logger = logging.getLogger(__name__)

DESCRIPTION = "Study-focused social network API"

# Initialize FastAPI app
app = FastAPI(
    title=f"{settings.app_name} API",
    description=DESCRIPTION,
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(auth_router, prefix="/api/v1")
app.include_router(profiles_router, prefix="/api/v1")
app.include_router(posts_router, prefix="/api/v1")
app.include_router(hashtags_router, prefix="/api/v1")
app.include_router(comments_router, prefix="/api/v1")
app.include_router(interactions_router, prefix="/api/v1")
app.include_router(knowledge_router, prefix="/api/v1")
app.include_router(notes_router, prefix="/api/v1")
app.include_router(schedules_router, prefix="/api/v1")
app.include_router(notifications_router, prefix="/api/v1")
app.include_router(study_router, prefix="/api/v1")
app.include_router(uploads_router, prefix="/api/v1")


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    if not settings.gemini_api_key:
        logger.warning("GEMINI_API_KEY is not set; AI endpoints will return 502")
    logger.info("%s %s started", settings.app_name, settings.app_version)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": f"{settings.app_name} API",
        "version": settings.app_version,
        "description": DESCRIPTION,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("study_sns.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
