# =============================================================================
# core/itinerary.py  -  Trip Validation, Budget Split & Day Plans
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Takes a TripRequest (budget, travelers, dates, stops) and the weather
#   verdict, and produces a TripPlan: a name, a day-by-day plan and a cost
#   breakdown.
#
# THE RULES ARE FIXED ALLOCATIONS:
#   - The budget is split 40 / 30 / 20 / 5 / 5 across travel,
#     accommodation, food, activities and miscellaneous.
#   - Every day gets an equal share of the budget.
#   Neither rule looks at the destinations or the weather; the verdict is
#   recorded on the plan as-is.
#
# The weather verdict is computed by the caller (tools/ runs the async
# fan-out in core/weather.py) and passed in, which keeps this module free
# of I/O.
# =============================================================================

from datetime import timedelta

from core.errors import InvalidTripError
from core.models import (
    Coordinate,
    CostBreakdown,
    DayPlan,
    Destination,
    Itinerary,
    TripPlan,
    TripRequest,
    WeatherAdvisability,
)

# Share of the budget per category; sums to 1.0
BUDGET_SPLIT: dict[str, float] = {
    "travel": 0.40,
    "accommodation": 0.30,
    "food": 0.20,
    "activities": 0.05,
    "miscellaneous": 0.05,
}

DEFAULT_TRIP_NAME_TARGET = "Sacred Places"


def validate_trip_request(request: TripRequest) -> list[str]:
    """Return every problem with the request; an empty list means valid."""
    problems = []
    if request.budget <= 0:
        problems.append("Budget must be greater than zero.")
    if request.travelers <= 0:
        problems.append("There must be at least one traveler.")
    if not request.destinations:
        problems.append("Add at least one destination.")
    if request.start_date > request.end_date:
        problems.append("Start date must be on or before the end date.")
    return problems


def renumber_destinations(destinations: list[Destination]) -> list[Destination]:
    """Reassign visiting_order 0..n-1 in list order (after adds/removes)."""
    for order, destination in enumerate(destinations):
        destination.visiting_order = order
    return destinations


def trip_name(destinations: list[Destination]) -> str:
    if destinations:
        return f"Pilgrimage to {destinations[0].location.name}"
    return f"Pilgrimage to {DEFAULT_TRIP_NAME_TARGET}"


def trip_coordinates(request: TripRequest) -> list[Coordinate]:
    """Start location first, then every destination in visiting order.

    This is the coordinate set the weather analysis runs over.
    """
    ordered = sorted(request.destinations, key=lambda d: d.visiting_order)
    return [request.start_location.coordinate] + [
        d.location.coordinate for d in ordered
    ]


def build_cost_breakdown(budget: float) -> CostBreakdown:
    return CostBreakdown(**{
        category: budget * share for category, share in BUDGET_SPLIT.items()
    })


def trip_length_days(request: TripRequest) -> int:
    """Whole days between start and end; a same-day trip counts as one."""
    return max(1, (request.end_date - request.start_date).days)


def generate_day_plans(request: TripRequest) -> list[DayPlan]:
    """One plan per day, each with an equal share of the budget."""
    num_days = trip_length_days(request)
    daily_cost = request.budget / num_days
    return [
        DayPlan(
            day_number=day + 1,
            date=request.start_date + timedelta(days=day),
            total_cost=daily_cost,
        )
        for day in range(num_days)
    ]


def plan_trip(
    request: TripRequest,
    advisability: WeatherAdvisability = WeatherAdvisability.UNKNOWN,
) -> TripPlan:
    """Validate the request and build the full plan.

    Raises:
        InvalidTripError: the request fails validate_trip_request().
    """
    problems = validate_trip_request(request)
    if problems:
        raise InvalidTripError(problems)

    renumber_destinations(request.destinations)
    breakdown = build_cost_breakdown(request.budget)
    itinerary = Itinerary(
        days=generate_day_plans(request),
        cost_breakdown=breakdown,
    )

    if advisability is WeatherAdvisability.NOT_ADVISABLE:
        itinerary.days[0].notes = "Weather is not advisable for these dates; consider rescheduling."
    elif advisability is WeatherAdvisability.CAUTION:
        itinerary.days[0].notes = "Check the forecast again before departure."

    return TripPlan(
        name=trip_name(request.destinations),
        request=request,
        itinerary=itinerary,
        total_cost=breakdown.total,
        weather_advisability=advisability,
    )
