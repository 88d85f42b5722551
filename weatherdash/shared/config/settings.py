"""Application settings and environment configuration.

Uses pydantic-settings to load and validate configuration from environment
variables with type safety and validation.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from weatherdash.shared.constants import (
    API_TIMEOUT_SECONDS,
    DEFAULT_CITY,
    DEFAULT_FAVORITES,
    FORECAST_DAY_SPAN,
    HISTORY_LIMIT,
    MAX_DAILY_SUMMARIES,
    WEATHER_API_BASE_URL,
)
from weatherdash.shared.models.weather import Units


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings are loaded from .env file or environment variables.
    Everything has a default so the library imports without configuration;
    requests to the provider fail with ProviderUnavailable when no API key
    is set.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment environment",
    )

    # weatherapi.com
    weather_api_key: str | None = Field(
        default=None,
        description="weatherapi.com API key",
    )
    weather_api_url: str = Field(
        default=WEATHER_API_BASE_URL,
        description="weatherapi.com base URL",
    )
    request_timeout_sec: float = Field(
        default=API_TIMEOUT_SECONDS,
        gt=0,
        le=120,
        description="Per-request timeout in seconds",
    )

    # Dashboard behaviour
    default_units: Units = Field(
        default=Units.METRIC,
        description="Unit system used when the caller does not choose one",
    )
    default_city: str = Field(
        default=DEFAULT_CITY,
        min_length=1,
        description="City shown when geolocation is denied",
    )
    forecast_days: int = Field(
        default=FORECAST_DAY_SPAN,
        ge=1,
        le=14,
        description="Days requested from the forecast endpoint",
    )
    max_daily_summaries: int = Field(
        default=MAX_DAILY_SUMMARIES,
        ge=1,
        le=14,
        description="Maximum number of daily summaries returned",
    )
    history_limit: int = Field(
        default=HISTORY_LIMIT,
        ge=1,
        le=50,
        description="Number of recent searches kept",
    )
    default_favorites: list[str] = Field(
        default_factory=lambda: list(DEFAULT_FAVORITES),
        description="Favorites used until the user saves their own",
    )
    preferences_path: str = Field(
        default="data/preferences.json",
        description="Path to the history/favorites JSON file",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: Literal["json", "console"] = Field(
        default="json",
        description="Log output format",
    )

    @field_validator("weather_api_url")
    @classmethod
    def validate_weather_api_url(cls, v: str) -> str:
        """Ensure the provider URL uses an http(s) scheme."""
        if not v.startswith(("https://", "http://")):
            raise ValueError("Weather API URL must use http:// or https:// scheme")
        return v.rstrip("/")


# Global settings instance, created on first use
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
