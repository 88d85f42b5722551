"""Weather provider adapter.

Maps weatherapi.com payloads onto the normalized snapshot, forecast point
and air quality models. Pure transformation: no I/O, and the same raw payload
can be re-adapted for another unit system without fetching again.

Provider native units: wind in km/h, visibility in km, pressure in mb (hPa),
temperatures in both Celsius (``*_c``) and Fahrenheit (``*_f``).
"""

from typing import Any

from pydantic import BaseModel, ValidationError

from weatherdash.shared.api.errors import ErrorCode, MalformedResponse
from weatherdash.shared.api.response_models import CurrentResponse, ForecastResponse
from weatherdash.shared.config.logging import get_logger
from weatherdash.shared.constants import (
    AQI_DEFAULT_INDEX,
    AQI_MAX_INDEX,
    AQI_MIN_INDEX,
    IMPERIAL_MIN_MAX_OFFSET,
    KPH_PER_METER_PER_SECOND,
    METERS_PER_KILOMETER,
    METRIC_MIN_MAX_OFFSET,
)
from weatherdash.shared.models.weather import (
    AirQuality,
    Coordinates,
    ForecastGranularity,
    ForecastPoint,
    Units,
    WeatherSnapshot,
)

logger = get_logger(__name__)


def kph_to_meters_per_second(kph: float) -> float:
    """Convert km/h to m/s."""
    return kph / KPH_PER_METER_PER_SECOND


def km_to_meters(km: float) -> float:
    """Convert kilometers to meters."""
    return km * METERS_PER_KILOMETER


def min_max_offset(units: Units) -> float:
    """Spread used to estimate min/max around a single reading.

    The provider reports no daily range for current conditions, so
    min/max are the reading minus/plus this offset. Not measured data.
    """
    return METRIC_MIN_MAX_OFFSET if units is Units.METRIC else IMPERIAL_MIN_MAX_OFFSET


def to_epa_index(value: Any) -> int:
    """Map a provider air quality value onto the internal 1-5 scale.

    The US EPA index runs 1-6; 6 (Hazardous) folds into 5 (Very Poor).
    Missing or unreadable values give the default index (Good).

    Args:
        value: Raw ``us-epa-index`` value (int, numeric string, or None)

    Returns:
        Index between 1 and 5
    """
    if value is None or isinstance(value, bool):
        return AQI_DEFAULT_INDEX

    try:
        index = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return AQI_DEFAULT_INDEX

    if index < AQI_MIN_INDEX:
        return AQI_DEFAULT_INDEX
    return min(index, AQI_MAX_INDEX)


class WeatherAdapter:
    """Adapts weatherapi.com responses into normalized models.

    Every required field is checked while decoding; a missing one raises
    MalformedResponse with its dotted path instead of producing a
    partially populated model.
    """

    @staticmethod
    def _decode(model: type[BaseModel], raw_json: Any, endpoint: str) -> Any:
        """Validate raw JSON against a provider model.

        Args:
            model: Provider response model
            raw_json: Decoded JSON payload
            endpoint: Endpoint name for error context

        Returns:
            Validated model instance

        Raises:
            MalformedResponse: If validation fails (path of the first error)
        """
        if not isinstance(raw_json, dict):
            raise MalformedResponse(
                field_path="$",
                message="Response payload is not a JSON object",
                error_code=ErrorCode.DATA_INVALID_RESPONSE,
                endpoint=endpoint,
            )

        try:
            return model.model_validate(raw_json)
        except ValidationError as e:
            first = e.errors()[0]
            field_path = ".".join(str(part) for part in first["loc"]) or "$"
            raise MalformedResponse(
                field_path=field_path,
                message=f"Invalid field '{field_path}': {first['msg']}",
                endpoint=endpoint,
                details={"error_count": e.error_count()},
            ) from e

    @staticmethod
    def _select(block: BaseModel, field: str, units: Units, path: str) -> float:
        """Pick the Celsius or Fahrenheit variant of a field.

        Args:
            block: Provider model holding ``<field>_c`` and ``<field>_f``
            field: Field stem (e.g. "temp", "maxtemp")
            units: Requested unit system
            path: Dotted path of ``block`` for error reporting

        Returns:
            Value in the requested unit family

        Raises:
            MalformedResponse: If the requested variant is missing
        """
        name = f"{field}_c" if units is Units.METRIC else f"{field}_f"
        value = getattr(block, name)
        if value is None:
            raise MalformedResponse(field_path=f"{path}.{name}")
        return value

    def adapt_current(self, raw_json: Any, units: Units) -> WeatherSnapshot:
        """Adapt a ``current.json`` payload into a WeatherSnapshot.

        Args:
            raw_json: Raw provider payload
            units: Unit system for temperatures

        Returns:
            Normalized snapshot

        Raises:
            MalformedResponse: If a required field is missing or invalid

        Example:
            >>> adapter = WeatherAdapter()
            >>> snapshot = adapter.adapt_current(raw, Units.METRIC)
            >>> snapshot.wind_speed_meters_per_second
            3.0
        """
        response: CurrentResponse = self._decode(CurrentResponse, raw_json, "current")
        location = response.location
        current = response.current

        temperature = self._select(current, "temp", units, "current")
        feels_like = self._select(current, "feelslike", units, "current")
        offset = min_max_offset(units)
        condition = current.condition.text

        snapshot = WeatherSnapshot(
            location_name=location.name,
            country_code=location.country,
            coordinates=Coordinates(lat=location.lat, lon=location.lon),
            temperature=temperature,
            feels_like=feels_like,
            temperature_min=temperature - offset,
            temperature_max=temperature + offset,
            pressure_hpa=current.pressure_mb,
            humidity_percent=current.humidity,
            condition_main=condition,
            condition_description=condition,
            wind_speed_meters_per_second=kph_to_meters_per_second(current.wind_kph),
            visibility_meters=km_to_meters(current.vis_km),
        )

        logger.debug(
            "current_conditions_adapted",
            location=snapshot.location_name,
            units=units.value,
            temperature=snapshot.temperature,
        )

        return snapshot

    def adapt_forecast(self, raw_json: Any, units: Units) -> list[ForecastPoint]:
        """Adapt a ``forecast.json`` payload into forecast points.

        Emits one daily point per forecast day (average temperature with the
        day's true min/max) and, for the first forecast day only, one hourly
        point per hour for the hourly strip. Points keep provider order.

        Args:
            raw_json: Raw provider payload
            units: Unit system for temperatures

        Returns:
            Forecast points, daily and hourly interleaved

        Raises:
            MalformedResponse: If a required field is missing or invalid
        """
        response: ForecastResponse = self._decode(ForecastResponse, raw_json, "forecast")
        days = response.forecast.forecastday

        points: list[ForecastPoint] = []
        for i, forecast_day in enumerate(days):
            path = f"forecast.forecastday.{i}.day"
            day = forecast_day.day
            points.append(
                ForecastPoint(
                    timestamp_epoch_seconds=forecast_day.date_epoch,
                    temperature=self._select(day, "avgtemp", units, path),
                    temperature_max=self._select(day, "maxtemp", units, path),
                    temperature_min=self._select(day, "mintemp", units, path),
                    condition_main=day.condition.text,
                    condition_description=day.condition.text,
                    granularity=ForecastGranularity.DAILY,
                )
            )

            if forecast_day.date != days[0].date:
                continue

            for j, hour in enumerate(forecast_day.hour):
                points.append(
                    ForecastPoint(
                        timestamp_epoch_seconds=hour.time_epoch,
                        temperature=self._select(
                            hour, "temp", units, f"forecast.forecastday.{i}.hour.{j}"
                        ),
                        condition_main=hour.condition.text,
                        granularity=ForecastGranularity.HOURLY,
                    )
                )

        logger.debug(
            "forecast_adapted",
            units=units.value,
            num_days=len(days),
            num_points=len(points),
        )

        return points

    def adapt_air_quality(self, raw_json: Any) -> AirQuality:
        """Adapt the air quality block of a ``current.json`` payload.

        Never fails: an absent block or index yields the default (Good).

        Args:
            raw_json: Raw provider payload requested with ``aqi=yes``

        Returns:
            Air quality on the 1-5 scale
        """
        value = None
        current = raw_json.get("current") if isinstance(raw_json, dict) else None
        block = current.get("air_quality") if isinstance(current, dict) else None
        if isinstance(block, dict):
            value = block.get("us-epa-index")

        epa_index = to_epa_index(value)
        if value is None:
            logger.debug("air_quality_index_missing", default=epa_index)

        return AirQuality(epa_index=epa_index)


_default_adapter = WeatherAdapter()


def adapt_current(raw_json: Any, units: Units) -> WeatherSnapshot:
    """Adapt current conditions with the default adapter."""
    return _default_adapter.adapt_current(raw_json, units)


def adapt_forecast(raw_json: Any, units: Units) -> list[ForecastPoint]:
    """Adapt a forecast with the default adapter."""
    return _default_adapter.adapt_forecast(raw_json, units)


def adapt_air_quality(raw_json: Any) -> AirQuality:
    """Adapt air quality with the default adapter."""
    return _default_adapter.adapt_air_quality(raw_json)
