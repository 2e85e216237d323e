# =============================================================================
# core/weather.py  -  Forecast Retrieval (mock or live) and Fan-out
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Produces a ForecastSeries per coordinate, either from MOCK data or from
#   the LIVE OpenWeatherMap 5-day / 3-hour forecast, and runs the
#   advisability analyzer over every stop of a trip.
#
# DATA SOURCE TOGGLE:
#   USE_LIVE_WEATHER=true   -> OpenWeatherMap (needs OPENWEATHER_API_KEY)
#   USE_LIVE_WEATHER unset  -> deterministic mock data, no network
#
#   Both providers return the SAME ForecastSeries dataclass, so
#   core/advisability.py never knows which one was used.
#
# FAN-OUT / FAN-IN:
#   analyze_weather_advisability() needs every location's series before it
#   can score anything.  fetch_forecasts() starts all retrievals at once
#   (one worker thread each via asyncio.to_thread) and joins them with
#   asyncio.gather.
#
#   Partial failure policy: FAIL FAST.  If any one location cannot be
#   retrieved the whole call raises; a verdict is never computed from a
#   subset of the trip's stops.  No retries, no caching.
# =============================================================================

import asyncio
import json
import logging
import os
import random
import urllib.error
import urllib.parse
import urllib.request
from collections.abc import Sequence
from datetime import datetime, timedelta, timezone
from typing import Optional

from core.advisability import calculate_advisability
from core.errors import MissingConfigurationError, RetrievalError
from core.models import (
    Coordinate,
    DateRange,
    ForecastPoint,
    ForecastSeries,
    WeatherAdvisability,
)

logger = logging.getLogger(__name__)

OPENWEATHER_FORECAST_URL = "https://api.openweathermap.org/data/2.5/forecast"
REQUEST_TIMEOUT_SECONDS = 10

DEFAULT_FORECAST_DAYS = 5
SAMPLES_PER_DAY = 8                    # 3-hour intervals
SAMPLE_INTERVAL = timedelta(hours=3)


def use_live_weather() -> bool:
    return os.environ.get("USE_LIVE_WEATHER", "false").lower() == "true"


# =============================================================================
# PUBLIC API: get_forecast (dispatcher)
# =============================================================================
def get_forecast(coordinate: Coordinate, days: int = DEFAULT_FORECAST_DAYS) -> ForecastSeries:
    """Get a forecast series for one coordinate, mock or live per env var.

    Raises:
        MissingConfigurationError: live mode without OPENWEATHER_API_KEY.
        RetrievalError: the live request or its decoding failed.
    """
    if use_live_weather():
        return get_forecast_live(coordinate, days)
    return get_forecast_mock(coordinate, days)


# =============================================================================
# LIVE PROVIDER: OpenWeatherMap
# =============================================================================
def get_forecast_live(coordinate: Coordinate, days: int = DEFAULT_FORECAST_DAYS) -> ForecastSeries:
    """Fetch the 3-hourly forecast for a coordinate from OpenWeatherMap.

    The free endpoint covers 5 days, so ``days`` above 5 just returns what
    the provider has.
    """
    api_key = os.environ.get("OPENWEATHER_API_KEY")
    if not api_key:
        raise MissingConfigurationError("OPENWEATHER_API_KEY")

    query = urllib.parse.urlencode({
        "lat": coordinate.latitude,
        "lon": coordinate.longitude,
        "appid": api_key,
        "units": "metric",
        "cnt": days * SAMPLES_PER_DAY,
    })
    url = f"{OPENWEATHER_FORECAST_URL}?{query}"

    logger.info("Requesting OpenWeatherMap forecast for %s", coordinate)
    try:
        req = urllib.request.Request(url, headers={"Accept": "application/json"})
        with urllib.request.urlopen(req, timeout=REQUEST_TIMEOUT_SECONDS) as response:
            payload = json.loads(response.read().decode())
    except urllib.error.HTTPError as e:
        raise RetrievalError(
            f"Forecast request for {coordinate} failed with HTTP {e.code}"
        ) from e
    except (urllib.error.URLError, TimeoutError) as e:
        raise RetrievalError(f"Forecast request for {coordinate} failed: {e}") from e
    except json.JSONDecodeError as e:
        raise RetrievalError(f"Forecast for {coordinate} is not valid JSON") from e

    return parse_forecast_response(payload, coordinate)


def _optional_float(value, default):
    """A reported number, or ``default`` when the value is absent or unusable."""
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _primary_condition(weather) -> str:
    if not isinstance(weather, list) or not weather or not isinstance(weather[0], dict):
        return ""
    condition = weather[0].get("main")
    return condition if isinstance(condition, str) else ""


def parse_forecast_response(payload: dict, coordinate: Coordinate) -> ForecastSeries:
    """Map an OpenWeatherMap /forecast payload onto a ForecastSeries.

    Optional fields degrade to "absent" instead of failing, whether they are
    missing or hold something unusable (``"wind": 5``, ``"1h": "n/a"``):
      - no usable ``wind.speed``     -> wind speed 0
      - no usable ``weather[0].main`` -> condition ""
      - no usable ``rain["1h"]``     -> rain_1h_mm None

    Only the first ``weather`` entry is used; it is the provider's primary
    condition for that timestamp.

    Raises:
        RetrievalError: ``list``, ``dt`` or ``main`` is missing or malformed.
    """
    try:
        items = payload["list"]
    except (KeyError, TypeError) as e:
        raise RetrievalError(f"Forecast for {coordinate} has no 'list' field") from e
    if not isinstance(items, list):
        raise RetrievalError(f"Forecast for {coordinate} has no 'list' field")

    points = []
    for item in items:
        try:
            timestamp = datetime.fromtimestamp(int(item["dt"]), tz=timezone.utc)
            main = item["main"]
            temperature = float(main["temp"])
            humidity = float(main["humidity"])
        except (KeyError, TypeError, ValueError, OverflowError, OSError) as e:
            raise RetrievalError(
                f"Forecast for {coordinate} has a malformed sample: {e!r}"
            ) from e

        wind = item.get("wind")
        rain = item.get("rain")

        points.append(ForecastPoint(
            timestamp=timestamp,
            temperature_c=temperature,
            humidity_pct=humidity,
            wind_speed_ms=_optional_float(wind.get("speed") if isinstance(wind, dict) else None, 0.0),
            condition=_primary_condition(item.get("weather")),
            rain_1h_mm=_optional_float(rain.get("1h") if isinstance(rain, dict) else None, None),
        ))

    return ForecastSeries(coordinate=coordinate, points=points)


# =============================================================================
# MOCK PROVIDER: Deterministic fake data
# =============================================================================
def _floor_to_interval(moment: datetime) -> datetime:
    moment = moment.astimezone(timezone.utc).replace(minute=0, second=0, microsecond=0)
    return moment.replace(hour=moment.hour - moment.hour % 3)


def get_forecast_mock(
    coordinate: Coordinate,
    days: int = DEFAULT_FORECAST_DAYS,
    start: Optional[datetime] = None,
) -> ForecastSeries:
    """Generate a mock 3-hourly forecast for a coordinate.

    The series follows a fixed pattern so trips land in different verdicts
    depending on when they start:
      - Day 1:      Clear and mild
      - Days 2-3:   Pre-monsoon heat and humid haze
      - Day 4:      Thunderstorms and heavy rain, gusty wind
      - Day 5 on:   Clearing, scattered clouds

    The random generator is seeded from the coordinate, so the same place
    always gets the same numbers.

    Args:
        coordinate: Where to "forecast".
        days: Number of days (8 samples per day).
        start: First sample time; defaults to now (UTC) floored to 3 hours.
    """
    rng = random.Random(str(coordinate))
    first = _floor_to_interval(start or datetime.now(timezone.utc))

    points = []
    for i in range(days * SAMPLES_PER_DAY):
        day = i // SAMPLES_PER_DAY
        rain_1h = None

        if day == 0:
            temperature = rng.uniform(18, 28)
            humidity = rng.uniform(40, 60)
            wind = rng.uniform(1, 5)
            condition = rng.choice(["Clear", "Clear", "Clouds"])
        elif day < 3:
            temperature = rng.uniform(30, 38)
            humidity = rng.uniform(60, 90)
            wind = rng.uniform(3, 9)
            condition = rng.choice(["Clear", "Haze", "Mist"])
        elif day == 3:
            temperature = rng.uniform(24, 30)
            humidity = rng.uniform(85, 98)
            wind = rng.uniform(9, 18)
            condition = rng.choice(["Thunderstorm", "Rain", "Rain"])
            if condition == "Rain":
                rain_1h = round(rng.uniform(2, 18), 1)
        else:
            temperature = rng.uniform(20, 29)
            humidity = rng.uniform(45, 70)
            wind = rng.uniform(2, 7)
            condition = rng.choice(["Clear", "Clouds", "Clouds"])

        points.append(ForecastPoint(
            timestamp=first + i * SAMPLE_INTERVAL,
            temperature_c=round(temperature, 1),
            humidity_pct=round(humidity),
            wind_speed_ms=round(wind, 1),
            condition=condition,
            rain_1h_mm=rain_1h,
        ))

    return ForecastSeries(coordinate=coordinate, points=points)


# =============================================================================
# FAN-OUT / FAN-IN
# =============================================================================
async def fetch_forecasts(
    coordinates: Sequence[Coordinate],
    days: int = DEFAULT_FORECAST_DAYS,
) -> list[ForecastSeries]:
    """Retrieve every coordinate's forecast concurrently.

    Results come back in the same order as ``coordinates``.  The first
    failure propagates (fail fast); results of the other calls are dropped.
    """
    logger.info("Fetching forecasts for %d location(s)", len(coordinates))
    return list(await asyncio.gather(*(
        asyncio.to_thread(get_forecast, coordinate, days)
        for coordinate in coordinates
    )))


async def analyze_weather_advisability(
    coordinates: Sequence[Coordinate],
    date_range: DateRange,
) -> WeatherAdvisability:
    """Retrieve forecasts for every stop, then score the whole trip.

    An empty coordinate list is UNKNOWN without touching any provider.

    Raises:
        MissingConfigurationError, RetrievalError: from any single retrieval.
    """
    if not coordinates:
        return WeatherAdvisability.UNKNOWN

    forecasts = await fetch_forecasts(coordinates)
    verdict = calculate_advisability(forecasts, date_range)
    logger.info(
        "Weather advisability for %d location(s) over %s: %s",
        len(coordinates), date_range, verdict.value,
    )
    return verdict
