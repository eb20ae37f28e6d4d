"""Configuration for the data acquisition layer.

Settings are loaded from environment variables (and an optional .env file)
using pydantic-settings. The API credential is optional here so that the
remote client can raise a ConfigurationError with a clear message instead of
failing at import time.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings.

    Remote API:
    - BALLDONTLIE_API_KEY: API key sent in the Authorization header
    - BALLDONTLIE_BASE_URL: Provider base URL (default: https://api.balldontlie.io)
    - REQUEST_TIMEOUT: Per-request timeout in seconds (default: 10)
    - PAGE_SIZE: per_page value for paginated endpoints (default: 100)
    - MAX_PAGES: Hard cap on pages drained per query (default: 50)
    - MAX_ATTEMPTS: Attempts for transient network errors (default: 3)

    Cache:
    - CACHE_DIR: diskcache directory (default: .cache/nba_sgp)
    - CACHE_ENABLED: Serve fresh entries from cache (default: true)

    Other:
    - LOG_MODE: "development" (console) or "production" (JSON)
    - ANTHROPIC_API_KEY / ANTHROPIC_MODEL: text-generation collaborator
    """

    balldontlie_api_key: str = Field(default="", description="balldontlie API key")
    balldontlie_base_url: str = Field(default="https://api.balldontlie.io")
    request_timeout: float = Field(default=10.0, gt=0, le=120)
    page_size: int = Field(default=100, ge=1, le=100)
    max_pages: int = Field(default=50, ge=1, le=1000)
    max_attempts: int = Field(default=3, ge=1, le=10)

    cache_dir: str = Field(default=".cache/nba_sgp")
    cache_enabled: bool = Field(default=True)

    log_mode: str = Field(default="development")

    anthropic_api_key: str = Field(default="")
    anthropic_model: str = Field(default="claude-sonnet-4-20250514")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance (singleton).

    Returns:
        Settings instance with validated configuration
    """
    return Settings()
