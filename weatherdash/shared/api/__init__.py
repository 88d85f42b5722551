"""API client for the weather provider."""

from weatherdash.shared.api.errors import (
    ErrorCode,
    GeolocationDenied,
    LocationNotFound,
    MalformedResponse,
    ProviderUnavailable,
    WeatherError,
    classify_error,
    is_retryable,
)
from weatherdash.shared.api.mock import MockWeatherClient
from weatherdash.shared.api.weatherapi import WeatherAPIClient

__all__ = [
    "WeatherAPIClient",
    "MockWeatherClient",
    "WeatherError",
    "ProviderUnavailable",
    "LocationNotFound",
    "MalformedResponse",
    "GeolocationDenied",
    "ErrorCode",
    "classify_error",
    "is_retryable",
]
