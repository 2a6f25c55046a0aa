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
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key for signing JWT tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    password_hash_rounds: int = Field(
        default=310_000,
        description="PBKDF2 iterations used for modern password hashes",
        gt=0,
    )
    admin_email: str = Field(
        default="admin@demo.com",
        description="Identifier of the bootstrap administrator account",
        max_length=128,
    )
    admin_username: str = Field(
        default="admin",
        description="Display name of the bootstrap administrator account",
        min_length=3,
    )
    admin_password: str = Field(
        default="Admin@123",
        description="Password assigned to the bootstrap administrator when it is created",
        min_length=8,
    )
    default_page_size: int = Field(default=10, gt=0)
    max_page_size: int = Field(default=100, gt=0)
    log_level: str = Field(default="INFO", description="Root logging level")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:4200"],
        description="Origins allowed to call the API from a browser",
    )

    @model_validator(mode="after")
    def _validate_consistency(self) -> "Settings":
        if "@" not in self.admin_email:
            raise ValueError("ADMIN_EMAIL must be a valid email address")
        if self.default_page_size > self.max_page_size:
            raise ValueError("DEFAULT_PAGE_SIZE cannot be greater than MAX_PAGE_SIZE")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
