"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - Outlook credentials are optional: the CRM runs without the integration,
      Outlook routes answer 503 until a token source is configured
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "postgresql+asyncpg://crm:crm@db:5432/crm"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    # Create tables from the ORM at startup (local SQLite runs; PostgreSQL uses alembic)
    database_auto_create: bool = False

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    # Document uploads
    uploads_dir: str = "uploads"
    upload_max_bytes: int = 10 * 1024 * 1024
    upload_allowed_mime_types: list[str] = [
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "image/jpeg",
        "image/jpg",
        "image/png",
    ]

    # Dashboard
    local_timezone: str = "Europe/Paris"
    upcoming_deadline_days: int = 30
    upcoming_deadline_limit: int = 5

    # Outlook (Microsoft Graph)
    outlook_graph_base_url: str = "https://graph.microsoft.com/v1.0"
    outlook_access_token: str | None = None
    outlook_connector_hostname: str | None = None
    outlook_connector_identity: str | None = None
    outlook_timeout_seconds: int = 30
    outlook_max_retries: int = 3
    outlook_base_delay_ms: int = 500
    outlook_max_delay_ms: int = 8_000


@lru_cache
def get_settings() -> Settings:
    return Settings()
