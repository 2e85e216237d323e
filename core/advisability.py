# =============================================================================
# core/advisability.py  -  Weather Advisability Analyzer
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns forecast series for every stop of a trip into ONE verdict:
#   RECOMMENDED, CAUTION, NOT_ADVISABLE, or UNKNOWN.
#
# HOW THE SCORE IS BUILT:
#   1. Keep only samples whose timestamp lies inside the trip's DateRange
#      (closed at both ends), across every location.
#   2. No samples left  ->  UNKNOWN.  Nothing else is evaluated.
#   3. Every kept sample gets a non-negative integer risk, the sum of four
#      independent component scores:
#
#        temperature   >40 or <5 C: +3   else >35 or <10 C: +1
#        condition     thunderstorm/tornado +5, snow +4,
#                      rain/drizzle +3 if >10 mm in the last hour else +1,
#                      mist/fog +1, anything else 0
#        wind          >15 m/s: +2   else >10 m/s: +1
#        humidity      >85 %: +1
#
#   4. Average the per-sample risks.
#   5. Classify:   [0, 1] RECOMMENDED    (1, 3] CAUTION    >3 NOT_ADVISABLE
#
#   The bands are discontinuous on purpose, so each dimension is its own
#   ordered chain of threshold checks rather than a formula.
#
# PURITY:
#   No I/O, no clock, no globals.  Same inputs, same verdict.  Missing
#   upstream fields (empty condition, no rain reading) just score as absent;
#   this function never raises because of bad data.
# =============================================================================

import logging
from collections.abc import Iterable

from core.models import DateRange, ForecastPoint, ForecastSeries, WeatherAdvisability

logger = logging.getLogger(__name__)

# Verdict thresholds on the average per-sample risk
RECOMMENDED_MAX_RISK = 1.0
CAUTION_MAX_RISK = 3.0

# Condition buckets, matched case-insensitively against the primary condition
_SEVERE_STORM_CONDITIONS = {"thunderstorm", "tornado"}
_RAIN_CONDITIONS = {"rain", "drizzle"}
_SNOW_CONDITIONS = {"snow"}
_LOW_VISIBILITY_CONDITIONS = {"mist", "fog"}

HEAVY_RAIN_MM_PER_HOUR = 10.0


def _temperature_risk(temperature_c: float) -> int:
    # The extreme band wins outright; 42 C is 3, never 3 + 1.
    if temperature_c > 40 or temperature_c < 5:
        return 3
    if temperature_c > 35 or temperature_c < 10:
        return 1
    return 0


def _condition_risk(condition: str, rain_1h_mm: float | None) -> int:
    key = condition.strip().lower() if isinstance(condition, str) else ""

    if key in _SEVERE_STORM_CONDITIONS:
        return 5
    if key in _RAIN_CONDITIONS:
        if isinstance(rain_1h_mm, (int, float)) and rain_1h_mm > HEAVY_RAIN_MM_PER_HOUR:
            return 3
        return 1
    if key in _SNOW_CONDITIONS:
        return 4
    if key in _LOW_VISIBILITY_CONDITIONS:
        return 1
    return 0


def _wind_risk(wind_speed_ms: float) -> int:
    if wind_speed_ms > 15:
        return 2
    if wind_speed_ms > 10:
        return 1
    return 0


def _humidity_risk(humidity_pct: float) -> int:
    return 1 if humidity_pct > 85 else 0


def score_forecast_point(point: ForecastPoint) -> int:
    """Risk contribution of a single sample (sum of all four components)."""
    return (
        _temperature_risk(point.temperature_c)
        + _condition_risk(point.condition, point.rain_1h_mm)
        + _wind_risk(point.wind_speed_ms)
        + _humidity_risk(point.humidity_pct)
    )


def classify_average_risk(average_risk: float) -> WeatherAdvisability:
    """Map an average risk onto a verdict.

    Exactly 1.0 is still RECOMMENDED and exactly 3.0 is still CAUTION.
    """
    if average_risk <= RECOMMENDED_MAX_RISK:
        return WeatherAdvisability.RECOMMENDED
    if average_risk <= CAUTION_MAX_RISK:
        return WeatherAdvisability.CAUTION
    return WeatherAdvisability.NOT_ADVISABLE


def points_in_range(
    forecasts: Iterable[ForecastSeries], date_range: DateRange
) -> list[ForecastPoint]:
    """Every sample, across all series, that falls inside the trip dates."""
    return [
        point
        for series in forecasts
        for point in series.points
        if date_range.contains(point.timestamp)
    ]


def calculate_advisability(
    forecasts: Iterable[ForecastSeries],
    date_range: DateRange,
) -> WeatherAdvisability:
    """Aggregate forecast risk across all locations into one verdict.

    Args:
        forecasts: One series per location.  Lengths and cadences may differ.
        date_range: The trip's start/end instants (inclusive).

    Returns:
        UNKNOWN when no sample falls inside ``date_range`` (including when
        ``forecasts`` is empty), otherwise the verdict for the average risk.
    """
    samples = points_in_range(forecasts, date_range)
    if not samples:
        logger.debug("No forecast samples inside %s", date_range)
        return WeatherAdvisability.UNKNOWN

    total_risk = sum(score_forecast_point(point) for point in samples)
    average_risk = total_risk / len(samples)
    verdict = classify_average_risk(average_risk)

    logger.debug(
        "Scored %d samples in %s: total=%d average=%.2f verdict=%s",
        len(samples), date_range, total_risk, average_risk, verdict.value,
    )
    return verdict
