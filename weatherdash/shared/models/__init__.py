"""Normalized weather models for the dashboard."""

from weatherdash.shared.models.weather import (
    AirQuality,
    Coordinates,
    DailySummary,
    ForecastGranularity,
    ForecastPoint,
    Units,
    WeatherSnapshot,
)

__all__ = [
    "Units",
    "ForecastGranularity",
    "Coordinates",
    "WeatherSnapshot",
    "ForecastPoint",
    "AirQuality",
    "DailySummary",
]
