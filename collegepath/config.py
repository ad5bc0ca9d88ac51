"""
Application configuration using pydantic-settings.
"""
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "CollegePath"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite+aiosqlite:///./collegepath.db"

    # Language model (OpenAI-compatible chat completions endpoint)
    openai_api_key: Optional[str] = None
    openai_base_url: str = "https://api.openai.com/v1"
    feedback_model: str = "gpt-4o"
    feedback_max_tokens: int = 2048
    # The model call is the slowest operation in the system; never wait longer than this
    feedback_timeout_seconds: float = 60.0

    # Reference data importers
    college_scorecard_api_key: Optional[str] = None
    college_scorecard_base_url: str = "https://api.data.gov/ed/collegescorecard/v1/schools"
    importer_timeout_seconds: float = 30.0

    # Auth
    auth_cache_ttl_seconds: int = 300

    # CORS
    cors_origins: list[str] = ["http://localhost:5173", "http://127.0.0.1:5173", "http://localhost:3000"]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
