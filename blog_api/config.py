"""
Configuration and settings for the blog posts API.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    api_prefix: str = Field(default="")

    # Database (any SQLAlchemy URL)
    database_url: str = Field(default="sqlite+pysqlite:///./blog_posts.db")
    test_database_url: str = Field(default="sqlite+pysqlite:///:memory:")

    # Development toggles
    use_in_memory_backends: bool = Field(default=False)

    # Server
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8080)
    log_level: str = Field(default="info")

    # Number of synthetic posts written by the seeding helpers
    seed_count: int = Field(default=10, ge=0)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
