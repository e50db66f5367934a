"""
Trendkart - Application Configuration

Centralized configuration management using Pydantic Settings.
All environment variables are loaded and validated here.
"""

from functools import lru_cache
from typing import Optional

from pydantic import model_validator
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
    app_name: str = "Trendkart"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"

    # Security
    admin_api_key: str = "supersecret"
    api_key_header: str = "X-Admin-Key"

    # CORS - comma-separated list of allowed origins
    allowed_origins: str = "http://localhost:5173"

    # Trend Cycle
    scheduler_enabled: bool = True
    cycle_interval_seconds: int = 30
    history_window: int = 48
    seed_demo_products: bool = True

    # Featured set hysteresis (entry must stay above exit)
    feature_entry_threshold: float = 0.65
    feature_exit_threshold: float = 0.45

    # Momentum
    momentum_alpha: float = 0.5

    # Trend Score Weights
    weight_search: float = 0.25
    weight_social: float = 0.20
    weight_video: float = 0.25
    weight_marketplace: float = 0.25
    weight_buzz: float = 0.05

    # Raw signal ranges (min is always 0)
    search_interest_max: float = 100
    social_mentions_max: float = 8000
    video_shares_max: float = 800000
    rank_delta_max: float = 10000
    social_buzz_max: float = 1000

    # Simulated signal source
    signal_seed: Optional[int] = None

    # Alerting & Notifications
    discord_webhook_url: Optional[str] = None

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @model_validator(mode="after")
    def _check_hysteresis(self) -> "Settings":
        if self.feature_entry_threshold <= self.feature_exit_threshold:
            raise ValueError(
                "feature_entry_threshold must be greater than feature_exit_threshold"
            )
        return self

    @property
    def origins(self) -> list[str]:
        """Allowed CORS origins as a list."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


# Convenience export
settings = get_settings()
