"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    off_base_url: str = "https://world.openfoodfacts.org"
    search_page_size: int = 24
    recent_searches_limit: int = 10
    favorites_storage_key: str = "supplement-favorites"
    recent_searches_storage_key: str = "supplement-recent-searches"
    storage_backend: str = "file"
    storage_dir: str = ".supplement-finder"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_storage_table: str = "client_storage"
    http_timeout_seconds: float | None = None
    http_user_agent: str = "SupplementFinder/0.1"
    discard_stale_responses: bool = True
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_storage_backend(raw: str | None) -> str:
    """Normalize the configured storage backend name."""
    if raw is None:
        return "file"
    cleaned = raw.strip().lower()
    if cleaned in {"", "file", "files", "json"}:
        return "file"
    if cleaned in {"memory", "in-memory", "inmemory"}:
        return "memory"
    if cleaned == "supabase":
        return "supabase"
    raise ValueError(f"Unknown storage backend: {raw!r}")
