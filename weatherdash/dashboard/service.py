"""Weather service for the dashboard.

Composes the provider client, the adapter and the daily aggregator into the
calls the presentation layer makes, and is the boundary where weather errors
become a user message plus a machine-readable kind.
"""

import dataclasses
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from weatherdash.analytics.daily_forecast import aggregate_daily
from weatherdash.analytics.weather_adapter import WeatherAdapter
from weatherdash.dashboard import preferences
from weatherdash.dashboard.preferences import PreferencesStore
from weatherdash.shared.api.errors import (
    ErrorCode,
    GeolocationDenied,
    LocationNotFound,
    MalformedResponse,
    ProviderUnavailable,
    WeatherError,
)
from weatherdash.shared.api.weatherapi import WeatherAPIClient
from weatherdash.shared.config.logging import get_logger
from weatherdash.shared.config.settings import get_settings
from weatherdash.shared.models.weather import (
    AirQuality,
    Coordinates,
    DailySummary,
    ForecastGranularity,
    ForecastPoint,
    Units,
    WeatherSnapshot,
)

logger = get_logger(__name__)

USER_MESSAGES = {
    LocationNotFound.kind: "City not found",
    ProviderUnavailable.kind: "Weather service unavailable, please try again",
    MalformedResponse.kind: "Something went wrong while reading weather data",
    GeolocationDenied.kind: "Location access denied, showing default city",
}
EMPTY_QUERY_MESSAGE = "Please enter a city name"
GENERIC_MESSAGE = "Something went wrong, please try again"


@dataclass
class ErrorInfo:
    """User-facing error: a message plus a machine-readable kind."""

    kind: str
    message: str
    retryable: bool = False

    @classmethod
    def from_error(cls, error: WeatherError) -> "ErrorInfo":
        """Build the user-facing view of a weather error."""
        if error.error_code is ErrorCode.LOCATION_EMPTY_QUERY:
            message = EMPTY_QUERY_MESSAGE
        else:
            message = USER_MESSAGES.get(error.kind, GENERIC_MESSAGE)
        return cls(kind=error.kind, message=message, retryable=error.retryable)


@dataclass
class DashboardResult:
    """Everything the dashboard shows for one search.

    When ``error`` is set the data fields hold whatever was on screen
    before the failed search (possibly nothing).
    """

    query: str
    units: Units
    snapshot: WeatherSnapshot | None = None
    daily: list[DailySummary] = field(default_factory=list)
    hourly: list[ForecastPoint] = field(default_factory=list)
    air_quality: AirQuality | None = None
    error: ErrorInfo | None = None
    notice: ErrorInfo | None = None
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def success(self) -> bool:
        """Whether the search succeeded."""
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "query": self.query,
            "units": self.units.value,
            "snapshot": self.snapshot.model_dump(mode="json") if self.snapshot else None,
            "daily": [d.model_dump(mode="json") for d in self.daily],
            "hourly": [h.model_dump(mode="json") for h in self.hourly],
            "air_quality": (
                {"epa_index": self.air_quality.epa_index, "label": self.air_quality.label}
                if self.air_quality
                else None
            ),
            "error": dataclasses.asdict(self.error) if self.error else None,
            "notice": dataclasses.asdict(self.notice) if self.notice else None,
            "fetched_at": self.fetched_at.isoformat(),
        }


class WeatherService:
    """Fetch, adapt and aggregate weather for the dashboard.

    The ``get_*`` methods raise WeatherError subclasses; ``search`` catches
    them and reports them on the returned DashboardResult.
    """

    def __init__(
        self,
        client: WeatherAPIClient | None = None,
        adapter: WeatherAdapter | None = None,
        store: PreferencesStore | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize weather service.

        Args:
            client: Provider client (created from settings if not provided)
            adapter: Payload adapter
            store: History/favorites store
            clock: Returns the current time; decides which day is "today"
        """
        settings = get_settings()
        self.client = client or WeatherAPIClient()
        self.adapter = adapter or WeatherAdapter()
        self.store = store or PreferencesStore()
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.default_units = settings.default_units
        self.default_city = settings.default_city
        self.forecast_days = settings.forecast_days
        self.max_daily_summaries = settings.max_daily_summaries
        self.history_limit = settings.history_limit

        logger.info(
            "weather_service_initialized",
            default_city=self.default_city,
            forecast_days=self.forecast_days,
        )

    # ------------------------------------------------------------------
    # Weather
    # ------------------------------------------------------------------

    def get_snapshot(self, city: str, units: Units | None = None) -> WeatherSnapshot:
        """Get current conditions for a city."""
        units = units or self.default_units
        raw = self.client.fetch_current_conditions(city)
        return self.adapter.adapt_current(raw, units)

    def get_snapshot_by_coords(
        self, lat: float, lon: float, units: Units | None = None
    ) -> WeatherSnapshot:
        """Get current conditions for a lat/lon point."""
        units = units or self.default_units
        raw = self.client.fetch_current_by_coords(lat, lon)
        return self.adapter.adapt_current(raw, units)

    def _forecast_points(self, coordinates: Coordinates, units: Units) -> list[ForecastPoint]:
        """Fetch and adapt forecast points, ordered by timestamp."""
        raw = self.client.fetch_forecast_raw(
            coordinates.lat, coordinates.lon, self.forecast_days
        )
        points = self.adapter.adapt_forecast(raw, units)
        # Daily points go before hourly points with the same timestamp
        return sorted(
            points,
            key=lambda p: (
                p.timestamp_epoch_seconds,
                p.granularity is not ForecastGranularity.DAILY,
            ),
        )

    def _daily_summaries(
        self, points: list[ForecastPoint], max_days: int
    ) -> list[DailySummary]:
        """Aggregate the provider's daily entries into upcoming-day summaries.

        Hourly points are left out: west of UTC a late local hour shares its
        UTC date with the next day's daily entry.
        """
        daily_points = [p for p in points if p.granularity is ForecastGranularity.DAILY]
        return aggregate_daily(daily_points, self.clock(), max_days)

    def get_daily_forecast(
        self,
        location: str | Coordinates,
        units: Units | None = None,
        max_days: int | None = None,
    ) -> list[DailySummary]:
        """Get one summary per upcoming day.

        Args:
            location: City name (resolved through current conditions) or coordinates
            units: Unit system for temperatures
            max_days: Maximum number of days (defaults to settings)

        Returns:
            Daily summaries, oldest first, excluding today
        """
        units = units or self.default_units
        if max_days is None:
            max_days = self.max_daily_summaries

        if isinstance(location, Coordinates):
            coordinates = location
        else:
            coordinates = self.get_snapshot(location, units).coordinates

        points = self._forecast_points(coordinates, units)
        return self._daily_summaries(points, max_days)

    def get_hourly_forecast(
        self, lat: float, lon: float, units: Units | None = None
    ) -> list[ForecastPoint]:
        """Get today's hourly strip."""
        units = units or self.default_units
        points = self._forecast_points(Coordinates(lat=lat, lon=lon), units)
        return [p for p in points if p.granularity is ForecastGranularity.HOURLY]

    def get_air_quality(self, lat: float, lon: float) -> AirQuality:
        """Get the air quality index for a lat/lon point."""
        raw = self.client.fetch_air_quality_raw(lat, lon)
        return self.adapter.adapt_air_quality(raw)

    def search(
        self,
        query: str,
        units: Units | None = None,
        coordinates: Coordinates | None = None,
        geolocation_denied: bool = False,
        previous: DashboardResult | None = None,
    ) -> DashboardResult:
        """Load everything the dashboard shows for a city or position.

        Errors never propagate: the result carries an ErrorInfo and the
        data of ``previous`` so the screen keeps its last good state. A
        failure of the air quality call alone falls back to the default
        index.

        Args:
            query: City typed by the user (ignored when coordinates are given)
            units: Unit system for temperatures
            coordinates: Position from geolocation
            geolocation_denied: User refused geolocation; show the default city
            previous: Result currently on screen

        Returns:
            DashboardResult for the search
        """
        units = units or self.default_units
        notice = None

        if geolocation_denied:
            notice = ErrorInfo.from_error(GeolocationDenied(fallback_city=self.default_city))
            query = self.default_city
            coordinates = None

        logger.info(
            "dashboard_search",
            query=query,
            units=units.value,
            by_coordinates=coordinates is not None,
        )

        try:
            if coordinates is not None:
                snapshot = self.get_snapshot_by_coords(coordinates.lat, coordinates.lon, units)
            else:
                snapshot = self.get_snapshot(query, units)

            points = self._forecast_points(snapshot.coordinates, units)
            daily = self._daily_summaries(points, self.max_daily_summaries)
            hourly = [p for p in points if p.granularity is ForecastGranularity.HOURLY]
            air_quality = self._air_quality_or_default(snapshot.coordinates)

        except WeatherError as e:
            error = ErrorInfo.from_error(e)
            logger.warning("dashboard_search_failed", query=query, kind=error.kind)
            if previous is not None:
                return dataclasses.replace(previous, error=error, notice=notice)
            return DashboardResult(query=query, units=units, error=error, notice=notice)

        searched = query if coordinates is None else snapshot.location_name
        self.store.persist_history(
            preferences.record_search(self.store.load_history(), searched, self.history_limit)
        )

        return DashboardResult(
            query=searched,
            units=units,
            snapshot=snapshot,
            daily=daily,
            hourly=hourly,
            air_quality=air_quality,
            notice=notice,
        )

    def _air_quality_or_default(self, coordinates: Coordinates) -> AirQuality:
        """Air quality, or the default index if it cannot be fetched."""
        try:
            return self.get_air_quality(coordinates.lat, coordinates.lon)
        except WeatherError as e:
            logger.warning("air_quality_unavailable", kind=e.kind)
            return AirQuality()

    # ------------------------------------------------------------------
    # History and favorites
    # ------------------------------------------------------------------

    def history(self) -> list[str]:
        """Recent searches, most recent first."""
        return self.store.load_history()

    def favorites(self) -> list[str]:
        """Favorite cities."""
        return self.store.load_favorites()

    def add_favorite(self, city: str) -> list[str]:
        """Add a city to the favorites and return the new list."""
        favorites = preferences.add_favorite(self.store.load_favorites(), city)
        self.store.persist_favorites(favorites)
        return favorites

    def remove_favorite(self, city: str) -> list[str]:
        """Remove a city from the favorites and return the new list."""
        favorites = preferences.remove_favorite(self.store.load_favorites(), city)
        self.store.persist_favorites(favorites)
        return favorites
