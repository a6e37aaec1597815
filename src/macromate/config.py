"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str | None = "low"
    openai_store: bool = False
    supabase_url: str
    supabase_key: str
    openfoodfacts_base_url: str = "https://world.openfoodfacts.org/api/v2"
    openfoodfacts_user_agent: str = "MacroMateApp/1.0"
    http_timeout_seconds: float = 30.0
    rate_limit_requests: int = 100
    rate_limit_window_seconds: int = 15 * 60
    cors_allowed_origins: str = "*"
    log_level: str = "INFO"
    port: int = 8080
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_allowed_origins(raw: str | None) -> list[str]:
    """Parse comma-separated CORS origins from env."""
    if raw is None:
        return []
    origins: list[str] = []
    for chunk in raw.split(","):
        value = chunk.strip()
        if value:
            origins.append(value)
    return origins
