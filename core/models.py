# =============================================================================
# core/models.py  -  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the *shape* of every piece of information that flows
# through the system.  Apart from small helpers (DateRange.contains, the
# display properties on the enums) they carry no behavior.
#
# Two groups live here:
#   1. Weather:  ForecastPoint, ForecastSeries, DateRange, WeatherAdvisability
#   2. Trips:    Location, Destination, HolySite, TripRequest, DayPlan,
#                CostBreakdown, Itinerary, TripPlan
#
# Nothing here is persisted.  Every object is built for one request and
# thrown away once the verdict or plan has been returned.
# =============================================================================

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Optional


# -----------------------------------------------------------------------------
# Coordinate - a point on the map (decimal degrees)
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float

    def __str__(self) -> str:
        return f"{self.latitude:.4f},{self.longitude:.4f}"


def _as_utc(moment: datetime) -> datetime:
    """Naive datetimes are read as UTC so every instant compares cleanly."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


# -----------------------------------------------------------------------------
# ForecastPoint - one timestamped weather sample for one location
# -----------------------------------------------------------------------------
# Frozen: once the data source has produced a sample nobody edits it.
# Units are metric, exactly as the provider sends them with units=metric.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ForecastPoint:
    """A single forecast sample."""

    timestamp: datetime                # Timezone-aware, UTC
    temperature_c: float               # Air temperature (Celsius)
    humidity_pct: float                # Relative humidity (0-100)
    wind_speed_ms: float = 0.0         # Wind speed (m/s); 0 when not reported
    condition: str = ""                # Primary condition: "Rain", "Clear", ...
    rain_1h_mm: Optional[float] = None  # Last-hour precipitation, None if absent

    def __post_init__(self):
        object.__setattr__(self, "timestamp", _as_utc(self.timestamp))


# -----------------------------------------------------------------------------
# ForecastSeries - ordered samples for one location
# -----------------------------------------------------------------------------
# The live provider returns 5 days at 3-hour granularity (40 points).  Nothing
# downstream depends on that length or cadence.
# -----------------------------------------------------------------------------
@dataclass
class ForecastSeries:
    """Forecast samples for a single coordinate, oldest first."""

    coordinate: Coordinate
    points: list[ForecastPoint] = field(default_factory=list)


# -----------------------------------------------------------------------------
# DateRange - the trip's duration, inclusive at both ends
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class DateRange:
    """Closed interval [start, end] of absolute instants."""

    start: datetime
    end: datetime

    def __post_init__(self):
        object.__setattr__(self, "start", _as_utc(self.start))
        object.__setattr__(self, "end", _as_utc(self.end))
        if self.start > self.end:
            raise ValueError(
                f"DateRange start ({self.start.isoformat()}) is after "
                f"end ({self.end.isoformat()})"
            )

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end

    @classmethod
    def from_dates(cls, start: date, end: date) -> "DateRange":
        """Cover every instant of the calendar days start..end (UTC)."""
        return cls(
            start=datetime.combine(start, time.min, tzinfo=timezone.utc),
            end=datetime.combine(end, time.max, tzinfo=timezone.utc),
        )

    @classmethod
    def from_iso_dates(cls, start: str, end: str) -> "DateRange":
        """Build a range from two "YYYY-MM-DD" strings."""
        return cls.from_dates(date.fromisoformat(start), date.fromisoformat(end))

    def __str__(self) -> str:
        return f"{self.start.date().isoformat()} to {self.end.date().isoformat()}"


# -----------------------------------------------------------------------------
# WeatherAdvisability - the analyzer's one and only output
# -----------------------------------------------------------------------------
# Downstream code only branches on the four members.  UNKNOWN means "no
# forecast covered the trip", which is not the same as "no risk", so it gets
# a neutral gray instead of green.
# -----------------------------------------------------------------------------
class WeatherAdvisability(Enum):
    RECOMMENDED = "recommended"
    CAUTION = "caution"
    NOT_ADVISABLE = "not_advisable"
    UNKNOWN = "unknown"

    @property
    def display_name(self) -> str:
        return _ADVISABILITY_LABELS[self]

    @property
    def color(self) -> str:
        return _ADVISABILITY_COLORS[self]


_ADVISABILITY_LABELS = {
    WeatherAdvisability.RECOMMENDED: "Recommended to go",
    WeatherAdvisability.CAUTION: "Proceed with caution",
    WeatherAdvisability.NOT_ADVISABLE: "Not advisable",
    WeatherAdvisability.UNKNOWN: "Weather data unavailable",
}

_ADVISABILITY_COLORS = {
    WeatherAdvisability.RECOMMENDED: "green",
    WeatherAdvisability.CAUTION: "yellow",
    WeatherAdvisability.NOT_ADVISABLE: "red",
    WeatherAdvisability.UNKNOWN: "gray",
}


# =============================================================================
# Trip planning models
# =============================================================================

class TravelMode(Enum):
    TRAIN = "train"
    BUS = "bus"
    CAR = "car"
    FLIGHT = "flight"
    MIXED = "mixed"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class AccommodationType(Enum):
    BUDGET = "budget"
    DHARAMSHALA = "dharamshala"
    MID_RANGE = "mid_range"
    LUXURY = "luxury"

    @property
    def display_name(self) -> str:
        return {
            AccommodationType.BUDGET: "Budget Hotel",
            AccommodationType.DHARAMSHALA: "Dharamshala",
            AccommodationType.MID_RANGE: "Mid-range Hotel",
            AccommodationType.LUXURY: "Luxury Hotel",
        }[self]


class Religion(Enum):
    HINDUISM = "hinduism"
    ISLAM = "islam"
    SIKHISM = "sikhism"
    BUDDHISM = "buddhism"
    JAINISM = "jainism"
    CHRISTIANITY = "christianity"
    OTHER = "other"


@dataclass
class Location:
    """A named place the traveler starts from or visits."""

    name: str
    coordinate: Coordinate
    address: Optional[str] = None


# -----------------------------------------------------------------------------
# HolySite - one entry in the pilgrimage catalog (core/sites.py)
# -----------------------------------------------------------------------------
@dataclass
class HolySite:
    """A pilgrimage site with enough context for the agent to talk about it."""

    site_id: str                       # "kashi-vishwanath"
    name: str                          # "Kashi Vishwanath Temple"
    city: str                          # "Varanasi"
    religion: Religion
    coordinate: Coordinate
    significance: str = ""
    best_months: list[str] = field(default_factory=list)  # ["Oct", "Nov", ...]

    def to_location(self) -> Location:
        return Location(
            name=self.name,
            coordinate=self.coordinate,
            address=self.city,
        )


@dataclass
class Destination:
    """A stop on the trip, in visiting order."""

    location: Location
    site_id: Optional[str] = None
    planned_duration_hours: int = 24
    visiting_order: int = 0


@dataclass
class TripRequest:
    """Everything the traveler tells us before a plan is built."""

    budget: float                      # Whole-trip budget for the group
    travelers: int
    start_date: date
    end_date: date
    start_location: Location
    destinations: list[Destination] = field(default_factory=list)
    travel_mode: TravelMode = TravelMode.TRAIN
    accommodation_type: AccommodationType = AccommodationType.BUDGET


@dataclass
class CostBreakdown:
    """Budget split by category."""

    travel: float
    accommodation: float
    food: float
    activities: float
    miscellaneous: float

    @property
    def total(self) -> float:
        return (
            self.travel + self.accommodation + self.food
            + self.activities + self.miscellaneous
        )

    def percentages(self) -> dict[str, float]:
        """Share of the total per category, 0-100.  All zero for a zero total."""
        total = self.total
        categories = {
            "travel": self.travel,
            "accommodation": self.accommodation,
            "food": self.food,
            "activities": self.activities,
            "miscellaneous": self.miscellaneous,
        }
        return {
            name: (amount / total) * 100 if total > 0 else 0.0
            for name, amount in categories.items()
        }


@dataclass
class DayPlan:
    day_number: int                    # 1-based
    date: date
    total_cost: float
    notes: Optional[str] = None


@dataclass
class Itinerary:
    days: list[DayPlan]
    cost_breakdown: CostBreakdown

    @property
    def number_of_days(self) -> int:
        return len(self.days)


# -----------------------------------------------------------------------------
# TripPlan - the planner's final output
# -----------------------------------------------------------------------------
@dataclass
class TripPlan:
    name: str                          # "Pilgrimage to Kashi Vishwanath Temple"
    request: TripRequest
    itinerary: Itinerary
    total_cost: float
    weather_advisability: WeatherAdvisability = WeatherAdvisability.UNKNOWN
