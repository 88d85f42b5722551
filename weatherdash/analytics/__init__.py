"""Analytics module for provider adaptation and daily forecast aggregation."""

from weatherdash.analytics.daily_forecast import aggregate_daily, calendar_date_key
from weatherdash.analytics.weather_adapter import (
    WeatherAdapter,
    adapt_air_quality,
    adapt_current,
    adapt_forecast,
)

__all__ = [
    # Provider adaptation
    "WeatherAdapter",
    "adapt_current",
    "adapt_forecast",
    "adapt_air_quality",
    # Daily aggregation
    "aggregate_daily",
    "calendar_date_key",
]
