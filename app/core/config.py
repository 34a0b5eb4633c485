"""
Application settings, read from ``GUESTBOOK_*`` environment variables
(or a local ``.env`` file).
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Guestbook service configuration."""

    model_config = SettingsConfigDict(
        env_prefix="GUESTBOOK_",
        env_file=".env",
        extra="ignore",
    )

    app_title: str = "Guestbook"
    app_version: str = "0.1.0"
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
