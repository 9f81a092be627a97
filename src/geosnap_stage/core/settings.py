"""Application settings and configuration.

This module defines all configuration options for the GeoSnap Stage service.
Settings are loaded from environment variables with sensible defaults.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="GeoSnap Stage", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./geosnap.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Redis is only consulted when the redis lock backend is selected
    redis_url: str = Field(default="redis://localhost:6379", alias="REDIS_URL")

    # Moderation policy
    auto_flag_report_threshold: int = Field(
        default=3,
        ge=1,
        alias="AUTO_FLAG_REPORT_THRESHOLD",
    )

    # Per-target serialization of vote/report read-modify-write sequences
    target_lock_backend: Literal["local", "redis"] = Field(
        default="local",
        alias="TARGET_LOCK_BACKEND",
    )
    target_lock_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        alias="TARGET_LOCK_TIMEOUT_SECONDS",
    )
    store_conflict_max_retries: int = Field(
        default=3,
        ge=1,
        alias="STORE_CONFLICT_MAX_RETRIES",
    )

    # Feed pagination bounds
    pictures_page_default: int = Field(default=20, alias="PICTURES_PAGE_DEFAULT")
    comments_page_default: int = Field(default=20, alias="COMMENTS_PAGE_DEFAULT")

    # CORS configuration for the web frontend
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PATCH", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling such as Alembic."""
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


settings = Settings()
