"""Normalized weather value objects.

Provider-independent models produced by the weather adapter and consumed by
the daily aggregator and the dashboard. All models are immutable.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from weatherdash.shared.constants import (
    AQI_DEFAULT_INDEX,
    AQI_LABELS,
    AQI_MAX_INDEX,
    AQI_MIN_INDEX,
)


class Units(Enum):
    """Unit system for every temperature in a response.

    METRIC: Celsius
    IMPERIAL: Fahrenheit
    """

    METRIC = "metric"
    IMPERIAL = "imperial"


class ForecastGranularity(Enum):
    """Source granularity of a forecast point."""

    DAILY = "daily"
    HOURLY = "hourly"


class Coordinates(BaseModel):
    """Geographic position of a location."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90, description="Latitude")
    lon: float = Field(..., ge=-180, le=180, description="Longitude")


class WeatherSnapshot(BaseModel):
    """Current conditions for one location.

    All temperatures are in the unit family that was requested from the
    adapter. ``temperature_min``/``temperature_max`` are estimated from the
    current reading, so ``temperature_min <= temperature <= temperature_max``
    holds for adapter output but is not guaranteed for snapshots in general.
    """

    model_config = ConfigDict(frozen=True)

    location_name: str = Field(..., description="Location name")
    country_code: str = Field(..., description="Country as reported by the provider")
    coordinates: Coordinates = Field(..., description="Location coordinates")
    temperature: float = Field(..., description="Current temperature")
    feels_like: float = Field(..., description="Apparent temperature")
    temperature_min: float = Field(..., description="Estimated minimum temperature")
    temperature_max: float = Field(..., description="Estimated maximum temperature")
    pressure_hpa: float = Field(..., description="Pressure in hPa")
    humidity_percent: int = Field(..., ge=0, le=100, description="Relative humidity %")
    condition_main: str = Field(..., description="Coarse condition category")
    condition_description: str = Field(..., description="Human readable condition")
    wind_speed_meters_per_second: float = Field(..., ge=0, description="Wind speed in m/s")
    visibility_meters: float = Field(..., ge=0, description="Visibility in meters")


class ForecastPoint(BaseModel):
    """One timestamped forecast reading at hourly or daily granularity."""

    model_config = ConfigDict(frozen=True)

    timestamp_epoch_seconds: int = Field(..., description="Unix timestamp of the reading")
    temperature: float = Field(..., description="Temperature (average for daily points)")
    temperature_min: float | None = Field(None, description="Daily minimum, if known")
    temperature_max: float | None = Field(None, description="Daily maximum, if known")
    condition_main: str = Field(..., description="Coarse condition category")
    condition_description: str | None = Field(None, description="Human readable condition")
    granularity: ForecastGranularity = Field(
        default=ForecastGranularity.DAILY, description="Source granularity"
    )


class AirQuality(BaseModel):
    """Air quality on the internal 1-5 EPA-style scale.

    1=Good, 2=Fair, 3=Moderate, 4=Poor, 5=Very Poor.
    """

    model_config = ConfigDict(frozen=True)

    epa_index: int = Field(
        default=AQI_DEFAULT_INDEX,
        ge=AQI_MIN_INDEX,
        le=AQI_MAX_INDEX,
        description="EPA-style air quality index",
    )

    @property
    def label(self) -> str:
        """Category name for the index."""
        return AQI_LABELS[self.epa_index]


class DailySummary(BaseModel):
    """One representative forecast entry for a calendar day."""

    model_config = ConfigDict(frozen=True)

    date_key: str = Field(..., description="Calendar date as YYYY-MM-DD (UTC)")
    temperature_max: float = Field(..., description="Maximum temperature")
    temperature_min: float = Field(..., description="Minimum temperature")
    condition_main: str = Field(..., description="Coarse condition category")
    condition_description: str | None = Field(None, description="Human readable condition")
