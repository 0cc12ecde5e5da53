"""Application settings and configuration.

This module defines all configuration options for the Study SNS application.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Study SNS", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    debug: bool = Field(default=False, alias="DEBUG")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 7,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )
    password_hash_iterations: int = Field(default=260_000, alias="PASSWORD_HASH_ITERATIONS")

    # Database configuration
    database_url: str = Field(default="sqlite:///./study_sns.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Generative AI (Gemini)
    gemini_api_key: str | None = Field(default=None, alias="GEMINI_API_KEY")
    gemini_card_model: str = Field(default="gemini-2.5-flash", alias="GEMINI_CARD_MODEL")
    gemini_vision_model: str = Field(default="gemini-2.5-pro", alias="GEMINI_VISION_MODEL")
    gemini_refine_model: str = Field(default="gemini-2.5-flash", alias="GEMINI_REFINE_MODEL")
    note_refine_threshold: float = Field(default=0.7, alias="NOTE_REFINE_THRESHOLD")
    image_fetch_timeout_seconds: float = Field(default=10.0, alias="IMAGE_FETCH_TIMEOUT_SECONDS")

    # Image limits shared by AI analysis and uploads
    max_image_bytes: int = Field(default=10 * 1024 * 1024, alias="MAX_IMAGE_BYTES")
    allowed_image_types: list[str] = Field(
        default=["image/jpeg", "image/png", "image/webp", "image/gif"],
        alias="ALLOWED_IMAGE_TYPES",
    )

    # Blob storage for post images
    s3_bucket: str = Field(default="post-images", alias="S3_BUCKET")
    s3_region: str = Field(default="ap-northeast-2", alias="S3_REGION")
    s3_endpoint_url: str | None = Field(default=None, alias="S3_ENDPOINT_URL")
    s3_public_base_url: str | None = Field(default=None, alias="S3_PUBLIC_BASE_URL")

    # Listing defaults
    posts_page_size: int = Field(default=10, alias="POSTS_PAGE_SIZE")
    notifications_limit: int = Field(default=20, alias="NOTIFICATIONS_LIMIT")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling.

        Converts asyncpg URLs to psycopg for synchronous database operations
        like Alembic migrations.
        """
        url = self.effective_database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    @property
    def s3_public_base(self) -> str:
        """Return the base URL used to build public object links."""
        if self.s3_public_base_url:
            return self.s3_public_base_url.rstrip("/")
        return f"https://{self.s3_bucket}.s3.{self.s3_region}.amazonaws.com"


settings = Settings()  # type: ignore[call-arg]
