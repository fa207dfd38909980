"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./dems.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key for signing JWT tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 30,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    password_hash_rounds: int = Field(
        default=310_000,
        description="PBKDF2 rounds used when hashing passwords",
        gt=0,
    )
    client_origin: str = Field(
        default="http://localhost:5173",
        description="Origin allowed by CORS; '*' allows any origin",
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    feed_legacy_limit: int = Field(
        default=100,
        description="Maximum notifications returned when no pagination is requested",
        gt=0,
    )
    feed_default_page_size: int = Field(default=20, gt=0)
    feed_max_page_size: int = Field(default=100, gt=0)
    push_timeout_seconds: float = Field(
        default=5.0,
        description="Seconds allowed for a single realtime push before the connection is dropped",
        gt=0,
    )
    checkin_cooldown_minutes: int = Field(
        default=10,
        description="Minimum minutes between two scans of the same registration QR",
        ge=0,
    )

    @model_validator(mode="after")
    def _validate_page_sizes(self) -> "Settings":
        if self.feed_default_page_size > self.feed_max_page_size:
            raise ValueError(
                "FEED_DEFAULT_PAGE_SIZE cannot be greater than FEED_MAX_PAGE_SIZE"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
