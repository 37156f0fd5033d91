"""
Configuration and settings for the Screenhound backend.

Fields are read from the environment by name (case-insensitive), so
``PORT``, ``DATABASE_URL``, ``SUPABASE_URL`` and ``SUPABASE_KEY`` map
directly onto the attributes below.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    api_prefix: str = Field(default="/api")
    service_name: str = Field(default="screenhound-api")

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)
    log_level: str = Field(default="INFO")
    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Database (any SQLAlchemy URL, Postgres expected)
    database_url: Optional[str] = Field(default=None)

    # Hosted Supabase project
    supabase_url: Optional[str] = Field(default=None)
    supabase_key: Optional[str] = Field(default=None)

    # Development toggles
    use_in_memory_backends: bool = Field(default=False)

    # Display feed
    approved_photo_limit: int = Field(default=20, ge=1)
    approved_trivia_limit: int = Field(default=10, ge=1)

    # Moderators may flip an already approved/rejected submission.
    moderation_allow_override: bool = Field(default=True)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
