"""Application settings and configuration.

This module defines all configuration options for the linkhub application.
Settings are loaded from environment variables with sensible defaults.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

SEVEN_DAYS_SECONDS = 7 * 24 * 60 * 60


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="linkhub", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Server binding used when running the module directly
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8080, alias="PORT")

    # Security and session tokens
    secret_key: str = Field(alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    session_ttl_seconds: int = Field(
        default=SEVEN_DAYS_SECONDS,
        alias="SESSION_TTL_SECONDS",
    )

    # Relational store for users and sessions
    database_url: str = Field(default="sqlite:///./linkhub.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Storage backends
    post_backend: Literal["memory", "mongo"] = Field(default="memory", alias="POST_BACKEND")
    user_backend: Literal["memory", "sql"] = Field(default="sql", alias="USER_BACKEND")

    # Document store for posts
    mongo_url: str = Field(default="mongodb://localhost:27017", alias="MONGO_URL")
    mongo_database: str = Field(default="linkhub", alias="MONGO_DATABASE")
    mongo_collection: str = Field(default="posts", alias="MONGO_COLLECTION")
    mongo_timeout_ms: int = Field(default=2000, alias="MONGO_TIMEOUT_MS")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
    )


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()  # type: ignore[call-arg]
