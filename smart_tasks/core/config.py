"""
Smart Tasks Configuration

Centralized settings management using Pydantic BaseSettings.
All values are loaded from environment variables or .env file.

Backend credentials are optional at load time: the search endpoint reports
missing configuration per request, the edge function client fails at
construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from smart_tasks.core.errors import ConfigurationError


@dataclass(frozen=True)
class SupabaseCredentials:
    """Resolved backend endpoint and the key used to address it."""

    url: str
    key: str


class Settings(BaseSettings):
    """
    Application settings with environment variable binding.

    Backend env vars (validated where used):
        SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY, SUPABASE_ANON_KEY

    Indexer env vars (backfill job only):
        POSTGRES_USER, POSTGRES_PASSWORD, POSTGRES_HOST, POSTGRES_PORT,
        POSTGRES_DB

    Optional env vars:
        EMBEDDING_MODEL (thenlper/gte-small), PRELOAD_EMBEDDING_MODEL (False),
        HTTP_TIMEOUT (10.0), LOG_LEVEL (INFO), ENVIRONMENT (local)
    """

    PROJECT_NAME: str = "Smart Tasks"
    ENVIRONMENT: str = "local"

    # Managed backend
    SUPABASE_URL: str | None = None
    SUPABASE_SERVICE_ROLE_KEY: str | None = None
    SUPABASE_ANON_KEY: str | None = None
    HTTP_TIMEOUT: float = 10.0

    # Embeddings
    EMBEDDING_MODEL: str = "thenlper/gte-small"
    PRELOAD_EMBEDDING_MODEL: bool = False

    # Direct database access (embedding backfill)
    POSTGRES_USER: str | None = None
    POSTGRES_PASSWORD: str | None = None
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "postgres"

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",  # Silently ignore unknown env vars
    )

    def service_credentials(self) -> SupabaseCredentials:
        """
        Backend URL and service-role key for server-side calls.

        Raises:
            ConfigurationError: If either value is missing or empty.
        """
        if not self.SUPABASE_URL or not self.SUPABASE_SERVICE_ROLE_KEY:
            raise ConfigurationError()
        return SupabaseCredentials(
            url=self.SUPABASE_URL.rstrip("/"),
            key=self.SUPABASE_SERVICE_ROLE_KEY,
        )

    def client_credentials(self) -> SupabaseCredentials:
        """
        Backend URL and anonymous key for client-side calls.

        Raises:
            ConfigurationError: If either value is missing or empty.
        """
        if not self.SUPABASE_URL or not self.SUPABASE_ANON_KEY:
            raise ConfigurationError("Missing Supabase environment variables")
        return SupabaseCredentials(
            url=self.SUPABASE_URL.rstrip("/"),
            key=self.SUPABASE_ANON_KEY,
        )

    @property
    def DATABASE_URL(self) -> str:
        """Async PostgreSQL connection string using asyncpg driver."""
        if not self.POSTGRES_USER or not self.POSTGRES_PASSWORD:
            raise ConfigurationError("Database configuration missing")
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process (FastAPI dependency)."""
    return Settings()
