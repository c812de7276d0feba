"""
Centralized configuration management for The Light content services.
Uses Pydantic Settings for validation and type safety.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppBaseSettings(BaseSettings):
    """Base settings with shared configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


class RedisSettings(AppBaseSettings):
    """Redis configuration settings."""

    redis_host: str = Field(
        default="localhost",
        validation_alias="REDIS_HOST",
    )
    redis_port: int = Field(
        default=6379,
        validation_alias="REDIS_PORT",
    )
    redis_db: int = Field(
        default=0,
        validation_alias="REDIS_DB",
    )
    redis_password: Optional[str] = Field(
        default=None,
        validation_alias="REDIS_PASSWORD",
    )
    redis_url: Optional[str] = Field(
        default=None,
        validation_alias="REDIS_URL",
    )

    @validator("redis_url", pre=True, always=True)
    def validate_redis_url(cls, v, values):
        """Build the Redis URL from its components when it is not given."""
        if not v:
            host = values.get("redis_host", "localhost")
            port = values.get("redis_port", 6379)
            db = values.get("redis_db", 0)
            password = values.get("redis_password")
            if password:
                return f"redis://:{password}@{host}:{port}/{db}"
            return f"redis://{host}:{port}/{db}"
        return v


class ContentSettings(AppBaseSettings):
    """Content store and editorial workflow settings."""

    key_prefix: str = Field(
        default="tl_",
        validation_alias="CONTENT_KEY_PREFIX",
    )
    access_log_limit: int = Field(
        default=200,
        ge=1,
        validation_alias="ACCESS_LOG_LIMIT",
    )
    editor_user_id: str = Field(
        default="2",
        validation_alias="EDITOR_USER_ID",
    )
    related_articles_limit: int = Field(
        default=4,
        ge=0,
        validation_alias="RELATED_ARTICLES_LIMIT",
    )
    default_image_url: str = Field(
        default="https://picsum.photos/800/600",
        validation_alias="DEFAULT_IMAGE_URL",
    )
    unique_reactions: bool = Field(
        default=True,
        validation_alias="UNIQUE_REACTIONS",
    )
    redis_timeout: float = Field(
        default=5.0,
        validation_alias="REDIS_TIMEOUT",
    )

    @validator("key_prefix")
    def validate_key_prefix(cls, v):
        """Key prefix must not contain whitespace."""
        if any(ch.isspace() for ch in v):
            raise ValueError("Storage key prefix must not contain whitespace")
        return v


class LoggingSettings(AppBaseSettings):
    """Logging configuration settings."""

    level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
    )
    include_correlation_id: bool = Field(
        default=True,
        validation_alias="LOG_INCLUDE_CORRELATION_ID",
    )
    json_logs: bool = Field(
        default=False,
        validation_alias="JSON_LOGS",
    )


class Settings(AppBaseSettings):
    """Main settings class that combines all configuration sections."""

    redis: RedisSettings = Field(default_factory=RedisSettings)
    content: ContentSettings = Field(default_factory=ContentSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    service_name: str = Field(
        default="thelight",
        validation_alias="SERVICE_NAME",
    )
    environment: str = Field(
        default="development",
        validation_alias="ENVIRONMENT",
    )
    version: str = Field(
        default="1.0.0",
        validation_alias="SERVICE_VERSION",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
