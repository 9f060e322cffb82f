"""Application configuration."""

from functools import lru_cache
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Pulseboard"
    debug: bool = True
    log_level: str = "INFO"

    # Metricool analytics API (read-only)
    metricool_base_url: str = "https://app.metricool.com/api"
    metricool_token: str = ""  # Sent as X-Mc-Auth; required for every upstream call
    metricool_user_id: str = "4156115"
    metricool_master_blog_id: str = "5351634"
    metricool_timeout_seconds: float = 20.0
    metricool_window_days: int = 30

    # Content performance pipeline
    fetch_concurrency: int = 10
    content_display_size: int = 12
    content_refresh_minutes: int = 15

    # In-memory caches
    brands_cache_ttl_seconds: int = 900
    stats_cache_ttl_seconds: int = 900
    dashboard_timezone: str = "UTC"  # Day boundary for the "today" content cache

    # Display cycle (seconds each phase stays on screen)
    spotlight_dwell_seconds: float = 6.0
    grid_dwell_seconds: float = 8.0
    content_dwell_seconds: float = 8.0
    grid_page_size: int = 8
    spotlight_count: int = 3
    support_spotlight_count: int = 3

    # Dashboard login (single shared credential pair, not a user system)
    dashboard_username: str = "admin"
    dashboard_password: str = ""
    session_cookie_name: str = "qinary_session"
    session_max_age_seconds: int = 60 * 60 * 24 * 30

    # Background scheduler
    scheduler_enabled: bool = True

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: Any) -> list[str]:
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
