"""Application settings and configuration.

This module defines all configuration options for the MediaRoom application.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="MediaRoom", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./mediaroom.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # JWT settings for the identity boundary
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 7,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Feed pagination
    feed_default_limit: int = Field(default=10, alias="FEED_DEFAULT_LIMIT")
    feed_max_limit: int = Field(default=100, alias="FEED_MAX_LIMIT")
    # When disabled, popular/most_viewed pages fall back to the plain `id < cursor` predicate.
    feed_compound_cursor: bool = Field(default=True, alias="FEED_COMPOUND_CURSOR")

    # Content and interaction limits
    title_max_length: int = Field(default=255, alias="TITLE_MAX_LENGTH")
    comment_max_length: int = Field(default=1000, alias="COMMENT_MAX_LENGTH")
    search_limit: int = Field(default=20, alias="SEARCH_LIMIT")
    notification_list_limit: int = Field(default=50, alias="NOTIFICATION_LIST_LIMIT")

    # Blob store integration for media bytes
    blob_store_base_url: str | None = Field(default=None, alias="BLOB_STORE_BASE_URL")
    blob_store_shared_secret: str | None = Field(
        default=None,
        alias="BLOB_STORE_SHARED_SECRET",
    )
    blob_store_audience: str = Field(default="blob-store", alias="BLOB_STORE_AUDIENCE")
    blob_store_token_ttl_seconds: int = Field(
        default=300,
        alias="BLOB_STORE_TOKEN_TTL_SECONDS",
    )
    blob_store_http_timeout_seconds: float = Field(
        default=30.0,
        alias="BLOB_STORE_HTTP_TIMEOUT_SECONDS",
    )
    upload_max_photo_bytes: int = Field(default=5 * 1024 * 1024, alias="UPLOAD_MAX_PHOTO_BYTES")
    upload_max_video_bytes: int = Field(default=20 * 1024 * 1024, alias="UPLOAD_MAX_VIDEO_BYTES")
    video_placeholder_thumbnail: str = Field(
        default="/images/video-placeholder.svg",
        alias="VIDEO_PLACEHOLDER_THUMBNAIL",
    )

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
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
    def blob_store_enabled(self) -> bool:
        """Return True when a blob store endpoint is configured."""
        return bool(self.blob_store_base_url)


settings = Settings()  # type: ignore[call-arg]
