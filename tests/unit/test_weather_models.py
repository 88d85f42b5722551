"""Unit tests for the normalized weather models."""

import pytest
from pydantic import ValidationError

from weatherdash.shared.models.weather import (
    AirQuality,
    Coordinates,
    DailySummary,
    ForecastGranularity,
    ForecastPoint,
    Units,
)


class TestAirQuality:
    """Test suite for AirQuality."""

    def test_default_is_good(self) -> None:
        """Test the default index is 1 (Good)."""
        air_quality = AirQuality()

        assert air_quality.epa_index == 1
        assert air_quality.label == "Good"

    @pytest.mark.parametrize(
        ("index", "label"),
        [(1, "Good"), (2, "Fair"), (3, "Moderate"), (4, "Poor"), (5, "Very Poor")],
    )
    def test_labels(self, index: int, label: str) -> None:
        """Test every index has its category name."""
        assert AirQuality(epa_index=index).label == label

    @pytest.mark.parametrize("index", [0, 6, -1])
    def test_out_of_range(self, index: int) -> None:
        """Test indices outside 1-5 are rejected."""
        with pytest.raises(ValidationError):
            AirQuality(epa_index=index)


class TestCoordinates:
    """Test suite for Coordinates."""

    @pytest.mark.parametrize(("lat", "lon"), [(91, 0), (-91, 0), (0, 181), (0, -181)])
    def test_out_of_range(self, lat: float, lon: float) -> None:
        """Test impossible positions are rejected."""
        with pytest.raises(ValidationError):
            Coordinates(lat=lat, lon=lon)


class TestFrozenModels:
    """Test suite for model immutability."""

    def test_forecast_point_is_frozen(self) -> None:
        """Test forecast points cannot be changed."""
        point = ForecastPoint(timestamp_epoch_seconds=0, temperature=1.0, condition_main="Clear")

        assert point.granularity is ForecastGranularity.DAILY
        with pytest.raises(ValidationError):
            point.temperature = 2.0

    def test_daily_summary_is_frozen(self) -> None:
        """Test summaries cannot be changed."""
        summary = DailySummary(
            date_key="2026-01-26",
            temperature_max=5.0,
            temperature_min=1.0,
            condition_main="Rain",
        )

        with pytest.raises(ValidationError):
            summary.condition_main = "Snow"


def test_units_values() -> None:
    """Test unit systems parse from their names."""
    assert Units("metric") is Units.METRIC
    assert Units("imperial") is Units.IMPERIAL
