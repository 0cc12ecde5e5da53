"""Account and profile Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from .post import PostResponse


class RegisterRequest(BaseModel):
    """Schema for email/password sign-up."""

    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    username: str = Field(..., min_length=2, max_length=50)
    first_name: str | None = Field(None, max_length=50)
    last_name: str | None = Field(None, max_length=50)
    school_name: str | None = Field(None, max_length=100)
    major: str | None = Field(None, max_length=100)
    double_major: str | None = Field(None, max_length=100)
    is_marketing_agreed: bool = False


class LoginRequest(BaseModel):
    """Schema for login submissions."""

    email: EmailStr
    password: str


class LoginResponse(BaseModel):
    """Response returned after successful login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(..., description="Token type (typically 'bearer')")
    user_id: str


class ProfileResponse(BaseModel):
    """Public profile information."""

    id: str
    username: str
    first_name: str | None = None
    last_name: str | None = None
    school_name: str | None = None
    major: str | None = None
    double_major: str | None = None
    is_notify_comment: bool
    is_marketing_agreed: bool
    created_at: datetime
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ProfileUpdateRequest(BaseModel):
    """Editable fields on the my-page form; omitted fields stay unchanged."""

    username: str | None = Field(None, min_length=2, max_length=50)
    school_name: str | None = Field(None, max_length=100)
    major: str | None = Field(None, max_length=100)
    double_major: str | None = Field(None, max_length=100)


class SettingsUpdateRequest(BaseModel):
    """Notification and marketing preferences."""

    is_notify_comment: bool | None = None
    is_marketing_agreed: bool | None = None


class ProfileOverview(BaseModel):
    """Profile page payload: profile, authored posts and the summed useful score."""

    profile: ProfileResponse
    posts: list[PostResponse]
    total_score: int = Field(..., serialization_alias="totalScore")
    post_count: int = Field(..., serialization_alias="postCount")
