"""Core constants for the weather dashboard.

This module defines provider endpoints, unit conversion factors, and the
defaults shared by the adapter, aggregator and dashboard service.
"""

from typing import Final

# weatherapi.com
WEATHER_API_BASE_URL: Final[str] = "https://api.weatherapi.com/v1"
CURRENT_ENDPOINT: Final[str] = "/current.json"
FORECAST_ENDPOINT: Final[str] = "/forecast.json"

# Provider error code for "No matching location found"
PROVIDER_NO_MATCH_CODE: Final[int] = 1006

# Unit conversions
KPH_PER_METER_PER_SECOND: Final[float] = 3.6
METERS_PER_KILOMETER: Final[int] = 1000

# Estimated spread around the current reading when no true min/max exists
METRIC_MIN_MAX_OFFSET: Final[float] = 2.0  # degrees Celsius
IMPERIAL_MIN_MAX_OFFSET: Final[float] = 4.0  # degrees Fahrenheit

# Air quality (internal 1-5 scale)
AQI_MIN_INDEX: Final[int] = 1
AQI_MAX_INDEX: Final[int] = 5
AQI_DEFAULT_INDEX: Final[int] = AQI_MIN_INDEX
AQI_LABELS: Final[dict[int, str]] = {
    1: "Good",
    2: "Fair",
    3: "Moderate",
    4: "Poor",
    5: "Very Poor",
}

# Forecast parameters
FORECAST_DAY_SPAN: Final[int] = 6  # today + 5 following days
MAX_DAILY_SUMMARIES: Final[int] = 5
DATE_KEY_FORMAT: Final[str] = "%Y-%m-%d"

# Dashboard state
HISTORY_LIMIT: Final[int] = 5
DEFAULT_CITY: Final[str] = "New Delhi"
DEFAULT_FAVORITES: Final[tuple[str, ...]] = ("New Delhi", "Mumbai", "London")

# Timeouts (seconds)
API_TIMEOUT_SECONDS: Final[int] = 10
