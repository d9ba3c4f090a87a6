"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEMO_MODE = "demo"
LIVE_MODE = "live"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str | None = None
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str = "medium"
    openai_store: bool = False
    fdc_api_key: str | None = None
    fdc_base_url: str = "https://api.nal.usda.gov/fdc/v1"
    fdc_page_size: int = 25
    fdc_data_types: str = "Foundation,SR Legacy"
    llm_mode: str = DEMO_MODE
    fdc_mode: str = DEMO_MODE
    admin_token: str | None = None
    auto_accept_threshold: float = 0.80
    auto_reject_floor: float = 0.30
    nutrition_deviation_threshold: float = 0.20
    generation_retry_attempts: int = 1
    lookup_retry_attempts: int = 1
    lookup_retry_delay_seconds: float = 0.3
    search_cache_ttl_seconds: int = 3600
    max_finished_jobs: int = 100
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_csv_list(raw: str | None) -> list[str]:
    """Parse a comma-separated env value into trimmed, non-empty items."""
    if raw is None:
        return []
    return [chunk.strip() for chunk in raw.split(",") if chunk.strip()]


def resolve_mode(mode: str, api_key: str | None) -> str:
    """Return the effective provider mode; live without a key runs as demo."""
    cleaned = mode.strip().lower()
    if cleaned != LIVE_MODE:
        return DEMO_MODE
    if not api_key or api_key == "DEMO_MODE":
        return DEMO_MODE
    return LIVE_MODE
