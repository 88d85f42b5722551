"""Unit tests for the dashboard weather service."""

from datetime import datetime
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from weatherdash.dashboard.preferences import PreferencesStore
from weatherdash.dashboard.service import (
    DashboardResult,
    ErrorInfo,
    WeatherService,
)
from weatherdash.shared.api.errors import (
    LocationNotFound,
    MalformedResponse,
    ProviderUnavailable,
)
from weatherdash.shared.api.mock import MockWeatherClient
from weatherdash.shared.config import settings as settings_module
from weatherdash.shared.models.weather import AirQuality, Coordinates, Units


@pytest.fixture
def store(tmp_path: Path) -> PreferencesStore:
    """Preferences store in a temporary directory."""
    return PreferencesStore(tmp_path / "prefs.json", default_favorites=["Oslo"])


@pytest.fixture
def client(current_payload: dict[str, Any], forecast_payload: dict[str, Any]) -> MagicMock:
    """Provider client returning the Paris payloads."""
    mock = MagicMock()
    mock.fetch_current_conditions.return_value = current_payload
    mock.fetch_current_by_coords.return_value = current_payload
    mock.fetch_forecast_raw.return_value = forecast_payload
    mock.fetch_air_quality_raw.return_value = current_payload
    return mock


@pytest.fixture
def service(
    client: MagicMock, store: PreferencesStore, reference_now: datetime
) -> WeatherService:
    """Weather service with a fixed clock."""
    return WeatherService(client=client, store=store, clock=lambda: reference_now)


class TestSearch:
    """Test suite for WeatherService.search."""

    def test_search_success(self, service: WeatherService, client: MagicMock) -> None:
        """Test a successful search fills every section."""
        result = service.search("Paris")

        assert result.success
        assert result.query == "Paris"
        assert result.units == Units.METRIC
        assert result.snapshot is not None
        assert result.snapshot.location_name == "Paris"
        assert result.snapshot.temperature == 20
        assert [d.date_key for d in result.daily] == ["2026-01-26", "2026-01-27"]
        assert result.daily[0].temperature_max == 16
        assert result.daily[0].temperature_min == 6
        assert result.daily[0].condition_main == "Day 1 condition"
        assert len(result.hourly) == 24
        assert result.air_quality == AirQuality(epa_index=2)
        assert result.error is None
        assert result.notice is None

        client.fetch_forecast_raw.assert_called_once_with(48.85, 2.35, 6)
        client.fetch_air_quality_raw.assert_called_once_with(48.85, 2.35)

    def test_search_imperial(self, service: WeatherService) -> None:
        """Test imperial searches use Fahrenheit values."""
        result = service.search("Paris", units=Units.IMPERIAL)

        assert result.units == Units.IMPERIAL
        assert result.snapshot.temperature == 68
        assert result.snapshot.temperature_max == 72
        assert result.daily[0].temperature_max == 66

    def test_search_records_history(
        self, service: WeatherService, store: PreferencesStore
    ) -> None:
        """Test successful searches are added to the history."""
        service.search("Paris")
        service.search("London")
        service.search("Paris")

        assert store.load_history() == ["Paris", "London"]
        assert service.history() == ["Paris", "London"]

    def test_history_limit(self, service: WeatherService) -> None:
        """Test history keeps the five latest searches."""
        for city in ["A", "B", "C", "D", "E", "F"]:
            service.search(city)

        assert service.history() == ["F", "E", "D", "C", "B"]

    def test_city_not_found(
        self, service: WeatherService, client: MagicMock, store: PreferencesStore
    ) -> None:
        """Test unknown cities report "City not found"."""
        client.fetch_current_conditions.side_effect = LocationNotFound("Atlantis")

        result = service.search("Atlantis")

        assert not result.success
        assert result.error == ErrorInfo(
            kind="location_not_found", message="City not found", retryable=False
        )
        assert result.snapshot is None
        assert store.load_history() == []

    def test_empty_query(self, store: PreferencesStore, reference_now: datetime) -> None:
        """Test an empty query asks for a city name."""
        service = WeatherService(
            client=MockWeatherClient(now=reference_now),
            store=store,
            clock=lambda: reference_now,
        )

        result = service.search("   ")

        assert result.error.kind == "location_not_found"
        assert result.error.message == "Please enter a city name"

    def test_provider_unavailable(self, service: WeatherService, client: MagicMock) -> None:
        """Test provider failures report a retryable error."""
        client.fetch_forecast_raw.side_effect = ProviderUnavailable(status_code=503)

        result = service.search("Paris")

        assert result.error.kind == "provider_unavailable"
        assert result.error.message == "Weather service unavailable, please try again"
        assert result.error.retryable is True

    def test_malformed_payload(
        self, service: WeatherService, client: MagicMock, current_payload: dict[str, Any]
    ) -> None:
        """Test malformed payloads report a generic data error."""
        del current_payload["current"]["temp_c"]

        result = service.search("Paris")

        assert result.error.kind == "malformed_response"
        assert result.error.message == "Something went wrong while reading weather data"

    def test_out_of_range_coordinates_reported(
        self, service: WeatherService, current_payload: dict[str, Any]
    ) -> None:
        """Test impossible provider coordinates are reported, not raised."""
        current_payload["location"]["lat"] = 95.0

        result = service.search("Paris")

        assert result.error.kind == "malformed_response"

    def test_failure_keeps_previous_data(
        self, service: WeatherService, client: MagicMock
    ) -> None:
        """Test a failed search keeps what was on screen."""
        previous = service.search("Paris")
        client.fetch_current_conditions.side_effect = LocationNotFound("Atlantis")

        result = service.search("Atlantis", previous=previous)

        assert result.error.message == "City not found"
        assert result.query == "Paris"
        assert result.snapshot == previous.snapshot
        assert result.daily == previous.daily
        assert previous.error is None

    def test_air_quality_failure_uses_default(
        self, service: WeatherService, client: MagicMock
    ) -> None:
        """Test an air quality failure alone does not fail the search."""
        client.fetch_air_quality_raw.side_effect = ProviderUnavailable()

        result = service.search("Paris")

        assert result.success
        assert result.air_quality == AirQuality(epa_index=1)

    def test_air_quality_missing_uses_default(
        self, service: WeatherService, client: MagicMock, payload_builders: dict[str, Any]
    ) -> None:
        """Test a payload without air quality yields index 1."""
        payload = payload_builders["current"]()
        del payload["current"]["air_quality"]
        client.fetch_air_quality_raw.return_value = payload

        result = service.search("Paris")

        assert result.air_quality.epa_index == 1
        assert result.air_quality.label == "Good"

    def test_geolocation_denied(self, service: WeatherService, client: MagicMock) -> None:
        """Test denied geolocation falls back to the default city."""
        result = service.search(
            "", coordinates=Coordinates(lat=1.0, lon=2.0), geolocation_denied=True
        )

        client.fetch_current_conditions.assert_called_once_with("New Delhi")
        client.fetch_current_by_coords.assert_not_called()
        assert result.success
        assert result.notice.kind == "geolocation_denied"
        assert result.notice.message == "Location access denied, showing default city"

    def test_search_by_coordinates(
        self, service: WeatherService, client: MagicMock, store: PreferencesStore
    ) -> None:
        """Test position searches record the resolved city name."""
        result = service.search("", coordinates=Coordinates(lat=48.85, lon=2.35))

        client.fetch_current_by_coords.assert_called_once_with(48.85, 2.35)
        assert result.query == "Paris"
        assert store.load_history() == ["Paris"]

    def test_units_default_from_settings(
        self,
        monkeypatch: pytest.MonkeyPatch,
        client: MagicMock,
        store: PreferencesStore,
        reference_now: datetime,
    ) -> None:
        """Test the unit system defaults to settings.default_units."""
        monkeypatch.setenv("DEFAULT_UNITS", "imperial")
        monkeypatch.setattr(settings_module, "_settings", None)
        service = WeatherService(client=client, store=store, clock=lambda: reference_now)

        assert service.search("Paris").units == Units.IMPERIAL

    def test_mock_client_is_deterministic(
        self, store: PreferencesStore, reference_now: datetime
    ) -> None:
        """Test searches against the mock client repeat exactly."""

        def run() -> DashboardResult:
            service = WeatherService(
                client=MockWeatherClient(seed=11, now=reference_now),
                store=store,
                clock=lambda: reference_now,
            )
            return service.search("Reykjavik")

        first, second = run(), run()

        assert first.success
        assert first.snapshot == second.snapshot
        assert first.daily == second.daily
        assert len(first.daily) == 5


class TestGetters:
    """Test suite for the individual WeatherService calls."""

    def test_get_daily_forecast_by_city(self, service: WeatherService) -> None:
        """Test daily forecast for a city name."""
        daily = service.get_daily_forecast("Paris")

        assert [d.date_key for d in daily] == ["2026-01-26", "2026-01-27"]

    def test_get_daily_forecast_by_coordinates(
        self, service: WeatherService, client: MagicMock
    ) -> None:
        """Test daily forecast for coordinates skips the current lookup."""
        daily = service.get_daily_forecast(Coordinates(lat=1.0, lon=2.0), max_days=1)

        assert len(daily) == 1
        client.fetch_current_conditions.assert_not_called()
        client.fetch_forecast_raw.assert_called_once_with(1.0, 2.0, 6)

    def test_get_daily_forecast_sorts_points(
        self, service: WeatherService, client: MagicMock, forecast_payload: dict[str, Any]
    ) -> None:
        """Test provider days out of order still give chronological summaries."""
        forecast_payload["forecast"]["forecastday"].reverse()

        daily = service.get_daily_forecast(Coordinates(lat=1.0, lon=2.0))

        assert [d.date_key for d in daily] == ["2026-01-26", "2026-01-27"]

    def test_get_daily_forecast_west_of_utc(
        self, service: WeatherService, client: MagicMock, payload_builders: dict[str, Any]
    ) -> None:
        """Test late local hours do not replace the next day's daily entry.

        In New York (UTC-5) today's 19:00 hour has the same timestamp as
        tomorrow's daily entry at 00:00 UTC.
        """
        client.fetch_forecast_raw.return_value = payload_builders["forecast"](
            utc_offset_hours=-5
        )

        daily = service.get_daily_forecast(Coordinates(lat=40.7, lon=-74.0))

        assert [d.date_key for d in daily] == ["2026-01-26", "2026-01-27"]
        assert daily[0].condition_main == "Day 1 condition"
        assert daily[0].condition_description == "Day 1 condition"
        assert daily[0].temperature_max == 16
        assert daily[0].temperature_min == 6

    def test_search_west_of_utc(
        self, service: WeatherService, client: MagicMock, payload_builders: dict[str, Any]
    ) -> None:
        """Test search reports daily ranges and today's full hourly strip."""
        client.fetch_forecast_raw.return_value = payload_builders["forecast"](
            utc_offset_hours=-5
        )

        result = service.search("New York")

        assert [d.condition_main for d in result.daily] == [
            "Day 1 condition",
            "Day 2 condition",
        ]
        assert len(result.hourly) == 24
        assert result.hourly[0].condition_main == "Hour 0"
        assert result.hourly[-1].condition_main == "Hour 23"

    def test_get_daily_forecast_raises(
        self, service: WeatherService, client: MagicMock
    ) -> None:
        """Test getters raise weather errors instead of reporting them."""
        client.fetch_forecast_raw.side_effect = ProviderUnavailable()

        with pytest.raises(ProviderUnavailable):
            service.get_daily_forecast(Coordinates(lat=1.0, lon=2.0))

    def test_get_hourly_forecast(self, service: WeatherService) -> None:
        """Test hourly points are today's, in time order."""
        hourly = service.get_hourly_forecast(48.85, 2.35)

        assert len(hourly) == 24
        assert hourly[0].temperature == 100
        stamps = [p.timestamp_epoch_seconds for p in hourly]
        assert stamps == sorted(stamps)

    def test_get_air_quality(self, service: WeatherService) -> None:
        """Test air quality index from the provider."""
        assert service.get_air_quality(48.85, 2.35).epa_index == 2

    def test_get_snapshot_malformed(
        self, service: WeatherService, client: MagicMock
    ) -> None:
        """Test getters propagate MalformedResponse."""
        client.fetch_current_conditions.return_value = {"location": {}}

        with pytest.raises(MalformedResponse):
            service.get_snapshot("Paris")


class TestFavorites:
    """Test suite for favorites handling."""

    def test_default_favorites(self, service: WeatherService) -> None:
        """Test favorites start from the defaults."""
        assert service.favorites() == ["Oslo"]

    def test_add_and_remove(self, service: WeatherService, store: PreferencesStore) -> None:
        """Test favorites are changed and persisted."""
        assert service.add_favorite("Paris") == ["Oslo", "Paris"]
        assert service.add_favorite("Paris") == ["Oslo", "Paris"]
        assert service.remove_favorite("Oslo") == ["Paris"]
        assert store.load_favorites() == ["Paris"]


class TestDashboardResult:
    """Test suite for DashboardResult serialization."""

    def test_to_dict(self, service: WeatherService) -> None:
        """Test results serialize to plain data."""
        data = service.search("Paris").to_dict()

        assert data["query"] == "Paris"
        assert data["units"] == "metric"
        assert data["snapshot"]["location_name"] == "Paris"
        assert data["air_quality"] == {"epa_index": 2, "label": "Fair"}
        assert data["daily"][0]["date_key"] == "2026-01-26"
        assert data["error"] is None

    def test_to_dict_with_error(self) -> None:
        """Test error results serialize their error."""
        result = DashboardResult(
            query="Atlantis",
            units=Units.METRIC,
            error=ErrorInfo(kind="location_not_found", message="City not found"),
        )

        data = result.to_dict()

        assert data["error"] == {
            "kind": "location_not_found",
            "message": "City not found",
            "retryable": False,
        }
        assert data["snapshot"] is None
