# src/study_sns/api/v1/endpoints/auth.py
"""Authentication endpoints for the Study SNS API."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.exc import IntegrityError

from study_sns.api.v1.dependencies import SessionDep
from study_sns.core.security import create_access_token, hash_password, verify_password
from study_sns.models import Profile, User
from study_sns.schemas.user import LoginRequest, LoginResponse, ProfileResponse, RegisterRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/register", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, db: SessionDep) -> Profile:
    """Create an account and its public profile.

    Args:
        payload: Sign-up form
        db: Database session

    Returns:
        The new profile

    Raises:
        HTTPException: 409 if the email or username is already taken
    """
    email = payload.email.lower()
    if db.query(User).filter(User.email == email).first() is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email is already registered",
        )
    if db.query(Profile).filter(Profile.username == payload.username).first() is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Username is already taken",
        )

    user = User(email=email, password_hash=hash_password(payload.password))
    user.profile = Profile(
        username=payload.username,
        first_name=payload.first_name,
        last_name=payload.last_name,
        school_name=payload.school_name,
        major=payload.major,
        double_major=payload.double_major,
        is_marketing_agreed=payload.is_marketing_agreed,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email or username is already taken",
        ) from err

    db.refresh(user.profile)
    logger.info("Registered user %s", user.id)
    return user.profile


@router.post("/login", response_model=LoginResponse)
async def login(payload: LoginRequest, db: SessionDep) -> LoginResponse:
    """Exchange email and password for a bearer token.

    Raises:
        HTTPException: 401 on unknown email or wrong password
    """
    user = db.query(User).filter(User.email == payload.email.lower()).first()
    if user is None or not verify_password(payload.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    return LoginResponse(
        access_token=create_access_token(user.id),
        token_type="bearer",
        user_id=user.id,
    )
