# src/study_sns/api/v1/dependencies.py
"""Shared API dependencies for authentication and external clients."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from study_sns.core.settings import settings
from study_sns.db.session import get_db
from study_sns.models import User
from study_sns.services.ai import GeminiClient, get_ai_client
from study_sns.services.storage import S3ImageStorage, get_image_storage

# auto_error off: missing credentials are handled per dependency below.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def _credentials_error(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _user_from_token(token: str, db: Session) -> User:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as err:
        raise _credentials_error() from err

    subject = payload.get("sub")
    if not subject:
        raise _credentials_error()

    user = db.query(User).filter(User.id == subject).first()
    if user is None:
        raise _credentials_error("User not found")
    return user


def get_current_user(credentials: CredentialsDep, db: SessionDep) -> User:
    """Get the current authenticated user from the bearer token.

    Args:
        credentials: HTTP Bearer token credentials, if any were sent
        db: Database session

    Returns:
        User object for the authenticated user

    Raises:
        HTTPException: 401 if the token is missing, invalid or the user is gone
    """
    if credentials is None:
        raise _credentials_error("Not authenticated")
    return _user_from_token(credentials.credentials, db)


def get_optional_user(credentials: CredentialsDep, db: SessionDep) -> User | None:
    """Like get_current_user, but anonymous callers get None instead of 401."""
    if credentials is None:
        return None
    return _user_from_token(credentials.credentials, db)


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]
OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]

AIClientDep = Annotated[GeminiClient, Depends(get_ai_client)]
ImageStorageDep = Annotated[S3ImageStorage, Depends(get_image_storage)]
