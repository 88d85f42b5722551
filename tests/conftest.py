"""Pytest configuration and shared fixtures."""

import os
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

# Fixed "now" for forecast tests: 2026-01-25 15:00 UTC
REFERENCE_NOW = datetime(2026, 1, 25, 15, 0, tzinfo=timezone.utc)

SETTINGS_ENV_PREFIXES = (
    "WEATHER_",
    "REQUEST_",
    "DEFAULT_",
    "FORECAST_",
    "MAX_DAILY_",
    "HISTORY_",
    "PREFERENCES_",
    "LOG_",
    "ENVIRONMENT",
)


def _epoch(moment: datetime) -> int:
    return int(moment.timestamp())


def build_current_payload(**current_overrides: Any) -> dict[str, Any]:
    """Paris current conditions as returned by current.json."""
    current = {
        "temp_c": 20,
        "temp_f": 68,
        "feelslike_c": 19,
        "feelslike_f": 66.2,
        "pressure_mb": 1012,
        "humidity": 60,
        "condition": {"text": "Sunny"},
        "wind_kph": 10.8,
        "vis_km": 10,
        "air_quality": {"us-epa-index": 2, "pm2_5": 8.1},
    }
    current.update(current_overrides)
    return {
        "location": {"name": "Paris", "country": "FR", "lat": 48.85, "lon": 2.35},
        "current": current,
    }


def build_forecast_payload(
    start: datetime = REFERENCE_NOW, days: int = 3, utc_offset_hours: int = 0
) -> dict[str, Any]:
    """forecast.json payload with ``days`` days starting at ``start``'s UTC date.

    Day ``i`` has avg 10+i, max 15+i, min 5+i (Celsius, Fahrenheit = C + 50
    to keep the numbers recognisable). Every day has 24 hourly entries with
    temperature 100+hour. ``date_epoch`` is always 00:00 UTC of the date,
    while hour ``h`` is local time, so ``utc_offset_hours=-5`` puts it at
    ``date_epoch + 5h + h`` like a New York forecast.
    """
    midnight = datetime.combine(start.date(), datetime.min.time(), tzinfo=timezone.utc)
    forecastday = []
    for i in range(days):
        day_start = midnight + timedelta(days=i)
        forecastday.append(
            {
                "date": day_start.date().isoformat(),
                "date_epoch": _epoch(day_start),
                "day": {
                    "avgtemp_c": 10 + i,
                    "avgtemp_f": 60 + i,
                    "maxtemp_c": 15 + i,
                    "maxtemp_f": 65 + i,
                    "mintemp_c": 5 + i,
                    "mintemp_f": 55 + i,
                    "condition": {"text": f"Day {i} condition"},
                },
                "hour": [
                    {
                        "time_epoch": _epoch(
                            day_start + timedelta(hours=h - utc_offset_hours)
                        ),
                        "temp_c": 100 + h,
                        "temp_f": 200 + h,
                        "condition": {"text": f"Hour {h}"},
                    }
                    for h in range(24)
                ],
            }
        )
    return {
        "location": {"name": "Paris", "country": "FR", "lat": 48.85, "lon": 2.35},
        "forecast": {"forecastday": forecastday},
    }


@pytest.fixture(autouse=True)
def reset_settings_env() -> None:
    """Reset environment variables before each test."""
    original_env = os.environ.copy()

    for key in list(os.environ.keys()):
        if key.upper().startswith(SETTINGS_ENV_PREFIXES):
            del os.environ[key]

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(autouse=True)
def reset_settings_singleton() -> None:
    """Reset the settings singleton between tests."""
    from weatherdash.shared.config import settings as settings_module

    settings_module._settings = None

    yield

    settings_module._settings = None


@pytest.fixture
def reference_now() -> datetime:
    """Fixed current time for forecast tests."""
    return REFERENCE_NOW


@pytest.fixture
def current_payload() -> dict[str, Any]:
    """Raw current.json payload for Paris."""
    return build_current_payload()


@pytest.fixture
def forecast_payload() -> dict[str, Any]:
    """Raw forecast.json payload: today plus two days."""
    return build_forecast_payload()


@pytest.fixture
def payload_builders() -> dict[str, Any]:
    """Payload builders for tests that need variants."""
    return {"current": build_current_payload, "forecast": build_forecast_payload}
