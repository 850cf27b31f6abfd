"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    supabase_anon_key: str
    openai_api_key: str
    openai_model: str = "gpt-4o"
    openai_reasoning_effort: str | None = None
    openai_store: bool = False
    meal_images_bucket: str = "meal_images"
    blood_sugar_default: float = 95.0
    default_calorie_goal: int = 2000
    default_timezone: str = "UTC"
    cors_allowed_origins: str = "*"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_allowed_origins(raw: str | None) -> list[str]:
    """Parse CORS origins from env; empty or ``*`` allows any origin."""
    if raw is None:
        return ["*"]
    cleaned = raw.strip()
    if cleaned in {"", "*"}:
        return ["*"]
    origins = [chunk.strip().rstrip("/") for chunk in cleaned.split(",")]
    return [origin for origin in origins if origin] or ["*"]
