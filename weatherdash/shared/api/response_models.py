"""Response models for the weatherapi.com client.

Pydantic models for parsing and validating responses from the
``current.json`` and ``forecast.json`` endpoints. Fields that only exist in
one unit family (``temp_c``/``temp_f``) are optional here; the adapter
decides which of them is required for the requested units.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProviderModel(BaseModel):
    """Base for provider models: unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore")


# ============================================================================
# Shared blocks
# ============================================================================


class Condition(ProviderModel):
    """Condition block; the provider has a single free-text label."""

    text: str = Field(..., min_length=1, description="Condition text (e.g. 'Sunny')")
    code: int | None = Field(None, description="Provider condition code")
    icon: str | None = Field(None, description="Provider icon URL")


class Location(ProviderModel):
    """Resolved location for a query."""

    name: str = Field(..., min_length=1, description="Location name")
    region: str | None = Field(None, description="Region or state")
    country: str = Field(..., description="Country name")
    lat: float = Field(..., ge=-90, le=90, description="Latitude")
    lon: float = Field(..., ge=-180, le=180, description="Longitude")
    localtime_epoch: int | None = Field(None, description="Local time as epoch seconds")


# ============================================================================
# current.json
# ============================================================================


class Current(ProviderModel):
    """Current conditions block."""

    last_updated_epoch: int | None = Field(None, description="Observation time")
    temp_c: float | None = Field(None, description="Temperature in Celsius")
    temp_f: float | None = Field(None, description="Temperature in Fahrenheit")
    feelslike_c: float | None = Field(None, description="Feels like in Celsius")
    feelslike_f: float | None = Field(None, description="Feels like in Fahrenheit")
    condition: Condition = Field(..., description="Current condition")
    wind_kph: float = Field(..., ge=0, description="Wind speed in km/h")
    pressure_mb: float = Field(..., description="Pressure in millibars (hPa)")
    humidity: int = Field(..., ge=0, le=100, description="Relative humidity %")
    vis_km: float = Field(..., ge=0, description="Visibility in km")
    air_quality: dict[str, Any] | None = Field(
        None, description="Air quality block, present when requested with aqi=yes"
    )


class CurrentResponse(ProviderModel):
    """``current.json`` response."""

    location: Location
    current: Current


# ============================================================================
# forecast.json
# ============================================================================


class Day(ProviderModel):
    """Day-level aggregate of a forecast day."""

    maxtemp_c: float | None = None
    maxtemp_f: float | None = None
    mintemp_c: float | None = None
    mintemp_f: float | None = None
    avgtemp_c: float | None = None
    avgtemp_f: float | None = None
    condition: Condition


class Hour(ProviderModel):
    """Hourly entry of a forecast day."""

    time_epoch: int = Field(..., description="Hour start as epoch seconds")
    temp_c: float | None = None
    temp_f: float | None = None
    condition: Condition


class ForecastDay(ProviderModel):
    """One day of the forecast."""

    date: str = Field(..., description="Local date as YYYY-MM-DD")
    date_epoch: int = Field(..., description="Date at 00:00 UTC as epoch seconds")
    day: Day
    hour: list[Hour] = Field(default_factory=list)


class ForecastBlock(ProviderModel):
    """``forecast`` wrapper object."""

    forecastday: list[ForecastDay]

    @field_validator("forecastday")
    @classmethod
    def require_days(cls, v: list[ForecastDay]) -> list[ForecastDay]:
        """A forecast without any day is unusable."""
        if not v:
            raise ValueError("forecast contains no days")
        return v


class ForecastResponse(ProviderModel):
    """``forecast.json`` response."""

    location: Location | None = None
    forecast: ForecastBlock
