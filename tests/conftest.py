import os
import sys
from datetime import datetime, timezone

import pytest

# Project root, so core/, tools/ and agent/ import without installation
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from core.models import Coordinate, DateRange, ForecastPoint, ForecastSeries  # noqa: E402

TRIP_START = datetime(2026, 10, 20, 0, 0, tzinfo=timezone.utc)
TRIP_END = datetime(2026, 10, 22, 23, 59, tzinfo=timezone.utc)


@pytest.fixture
def mock_weather_env(monkeypatch):
    """Force the deterministic mock provider."""
    monkeypatch.setenv("USE_LIVE_WEATHER", "false")
    monkeypatch.delenv("OPENWEATHER_API_KEY", raising=False)


@pytest.fixture
def trip_range():
    return DateRange(start=TRIP_START, end=TRIP_END)


@pytest.fixture
def make_point():
    """Build a ForecastPoint inside the trip range with benign defaults."""

    def _make(
        temperature_c=22.0,
        humidity_pct=50.0,
        wind_speed_ms=3.0,
        condition="Clear",
        rain_1h_mm=None,
        timestamp=None,
    ):
        return ForecastPoint(
            timestamp=timestamp or datetime(2026, 10, 21, 12, 0, tzinfo=timezone.utc),
            temperature_c=temperature_c,
            humidity_pct=humidity_pct,
            wind_speed_ms=wind_speed_ms,
            condition=condition,
            rain_1h_mm=rain_1h_mm,
        )

    return _make


@pytest.fixture
def make_series():
    def _make(points, latitude=25.3109, longitude=83.0107):
        return ForecastSeries(coordinate=Coordinate(latitude, longitude), points=list(points))

    return _make
