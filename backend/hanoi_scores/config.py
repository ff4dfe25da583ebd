"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - DATABASE_URL is required; Settings() raises ValidationError without it
    - get_settings() is cached (lru_cache), single instance per process
    - postgres:// and postgresql:// URLs are rewritten to the psycopg driver

Design Decisions:
    - .env file honoured for local development
    - Defaults provided for all non-secret settings
"""

import os
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_worker_pool_size() -> int:
    return (os.cpu_count() or 1) * 5


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Bare postgres URLs select the psycopg (v3) driver."""
        if isinstance(v, str):
            for prefix in ("postgresql://", "postgres://"):
                if v.startswith(prefix):
                    return v.replace(prefix, "postgresql+psycopg://", 1)
        return v

    database_pool_size: int = 10
    database_max_overflow: int = 0
    database_pool_timeout: int = 30
    database_create_tables: bool = True

    # Worker pool for blocking database calls
    worker_pool_size: int = Field(default_factory=_default_worker_pool_size)

    # HTTP
    host: str = "127.0.0.1"
    port: int = 7878

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
