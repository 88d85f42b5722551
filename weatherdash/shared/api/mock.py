"""Offline stand-in for the weatherapi.com client.

Generates provider-shaped payloads from a seeded random generator, so the
same seed and location always give the same weather. Used for demos and
tests; payloads go through the regular adapter.
"""

import random
from datetime import datetime, time, timedelta, timezone
from typing import Any

from weatherdash.shared.api.errors import ErrorCode, LocationNotFound
from weatherdash.shared.config.logging import get_logger
from weatherdash.shared.constants import CURRENT_ENDPOINT

logger = get_logger(__name__)

# (condition text, temperature range in C, humidity range in %)
MOCK_CONDITIONS: list[tuple[str, tuple[int, int], tuple[int, int]]] = [
    ("Sunny", (20, 35), (30, 50)),
    ("Cloudy", (15, 25), (40, 70)),
    ("Moderate rain", (10, 20), (70, 90)),
    ("Light snow", (-5, 5), (60, 80)),
    ("Thundery outbreaks possible", (12, 22), (75, 95)),
]


def celsius_to_fahrenheit(celsius: float) -> float:
    """Convert Celsius to Fahrenheit, rounded like the provider (0.1)."""
    return round(celsius * 9.0 / 5.0 + 32.0, 1)


def _parse_coordinates(query: str) -> tuple[float, float] | None:
    """Read a "lat,lon" query, or None for a place name."""
    parts = query.split(",")
    if len(parts) != 2:
        return None
    try:
        return float(parts[0]), float(parts[1])
    except ValueError:
        return None


class MockWeatherClient:
    """Deterministic weather client with the WeatherAPIClient interface."""

    def __init__(self, seed: int = 0, now: datetime | None = None) -> None:
        """Initialize mock client.

        Args:
            seed: Base seed; combined with the location for each payload
            now: Fixed "current" time (defaults to the real clock per call)
        """
        self.seed = seed
        self.now = now
        logger.info("mock_weather_client_initialized", seed=seed)

    def _clock(self) -> datetime:
        return self.now or datetime.now(timezone.utc)

    def _rng(self, key: str) -> random.Random:
        return random.Random(f"{self.seed}:{key.strip().lower()}")

    def fetch_current_conditions(self, location_query: str) -> dict[str, Any]:
        """Generate a ``current.json`` payload (with air quality)."""
        query = location_query.strip()
        if not query:
            raise LocationNotFound(
                location_query,
                error_code=ErrorCode.LOCATION_EMPTY_QUERY,
                endpoint=CURRENT_ENDPOINT,
            )

        rng = self._rng(query)
        coordinates = _parse_coordinates(query)
        if coordinates is None:
            name = query.title()
            lat = round(rng.uniform(-60.0, 60.0), 2)
            lon = round(rng.uniform(-180.0, 180.0), 2)
        else:
            lat, lon = coordinates
            name = f"Mock {lat:.2f},{lon:.2f}"

        text, (temp_lo, temp_hi), (hum_lo, hum_hi) = rng.choice(MOCK_CONDITIONS)
        temp_c = float(rng.randint(temp_lo, temp_hi))
        feelslike_c = temp_c + rng.randint(-3, 3)

        return {
            "location": {
                "name": name,
                "country": "Mockland",
                "lat": lat,
                "lon": lon,
                "localtime_epoch": int(self._clock().timestamp()),
            },
            "current": {
                "temp_c": temp_c,
                "temp_f": celsius_to_fahrenheit(temp_c),
                "feelslike_c": feelslike_c,
                "feelslike_f": celsius_to_fahrenheit(feelslike_c),
                "condition": {"text": text},
                "wind_kph": float(rng.randint(5, 25)),
                "pressure_mb": float(rng.randint(1000, 1050)),
                "humidity": rng.randint(hum_lo, hum_hi),
                "vis_km": float(rng.randint(5, 15)),
                "air_quality": {"us-epa-index": rng.randint(1, 6)},
            },
        }

    def fetch_current_by_coords(self, lat: float, lon: float) -> dict[str, Any]:
        """Generate a ``current.json`` payload for a lat/lon point."""
        return self.fetch_current_conditions(f"{lat},{lon}")

    def fetch_forecast_raw(self, lat: float, lon: float, day_span: int) -> dict[str, Any]:
        """Generate a ``forecast.json`` payload starting today (UTC)."""
        rng = self._rng(f"forecast:{lat},{lon}")
        today = self._clock().astimezone(timezone.utc).date()

        days = []
        for offset in range(day_span):
            date = today + timedelta(days=offset)
            midnight = datetime.combine(date, time(0), tzinfo=timezone.utc)
            text, (temp_lo, temp_hi), _ = rng.choice(MOCK_CONDITIONS)
            low = float(rng.randint(temp_lo, temp_hi - 4))
            high = low + rng.randint(2, 8)
            avg = round((low + high) / 2, 1)

            hours = []
            for hour in range(24):
                temp_c = round(rng.uniform(low, high), 1)
                hours.append(
                    {
                        "time_epoch": int((midnight + timedelta(hours=hour)).timestamp()),
                        "temp_c": temp_c,
                        "temp_f": celsius_to_fahrenheit(temp_c),
                        "condition": {"text": text},
                    }
                )

            days.append(
                {
                    "date": date.isoformat(),
                    "date_epoch": int(midnight.timestamp()),
                    "day": {
                        "maxtemp_c": high,
                        "maxtemp_f": celsius_to_fahrenheit(high),
                        "mintemp_c": low,
                        "mintemp_f": celsius_to_fahrenheit(low),
                        "avgtemp_c": avg,
                        "avgtemp_f": celsius_to_fahrenheit(avg),
                        "condition": {"text": text},
                    },
                    "hour": hours,
                }
            )

        return {"forecast": {"forecastday": days}}

    def fetch_air_quality_raw(self, lat: float, lon: float) -> dict[str, Any]:
        """Generate a ``current.json`` payload with air quality."""
        return self.fetch_current_by_coords(lat, lon)
