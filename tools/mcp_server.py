# =============================================================================
# tools/mcp_server.py  -  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines every MCP tool the agent can call.  Each tool is a thin wrapper
#   around core/: it resolves names, parses dates, calls core/, and returns
#   a plain dict.
#
# HOW IT WORKS (the flow):
#   1. The Google ADK agent decides it needs information (e.g., weather)
#   2. It calls a tool by name via MCP (e.g., "get_weather_advisability")
#   3. FastMCP routes the call to the decorated function below
#   4. The function calls core/ logic, formats the result, and returns it
#
# TOOL NAMING CONVENTIONS:
#   - list_*  -> catalog reads
#   - get_*   -> read-only analysis (idempotent, safe to retry)
#   - plan_*  -> builds a plan; nothing is stored, so also safe to retry
#
# ERRORS:
#   core/ raises AdvisorError subclasses.  Tools never let them escape: they
#   come back as {"error": "..."} so the agent can explain the problem.
#
# RUNNING THIS SERVER:
#   a) Standalone:  python -m tools.mcp_server
#   b) Spawned by the ADK agent over stdio (agent/pilgrimage_agent.py)
# =============================================================================

import json
import logging
import sys
from dataclasses import asdict
from datetime import date
from enum import Enum
from typing import Optional

from fastmcp import FastMCP

from core.errors import AdvisorError
from core.itinerary import (
    plan_trip,
    renumber_destinations,
    trip_coordinates,
    validate_trip_request,
)
from core.models import (
    AccommodationType,
    DateRange,
    Destination,
    Religion,
    TravelMode,
    TripRequest,
    WeatherAdvisability,
)
from core.sites import get_site, list_available_sites, resolve_location
from core.weather import analyze_weather_advisability, use_live_weather

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR: the MCP server talks to the agent over STDOUT, and any
# stray text there would corrupt the protocol stream.
#
# Colors:  CYAN requests,  YELLOW progress,  GREEN responses.
# =============================================================================

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: dict) -> dict:
    """Log the tool response as compact JSON in GREEN, then return it."""
    logging.info(f"{_GREEN}  ← {tool_name} response: {json.dumps(result, separators=(',', ':'))}{_RESET}")
    return result


def _jsonable(value):
    """asdict() output still holds enums and dates; flatten them for JSON."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def _verdict_dict(verdict: WeatherAdvisability) -> dict:
    return {
        "verdict": verdict.value,
        "display_name": verdict.display_name,
        "color": verdict.color,
    }


def _resolve_stops(names: list[str]) -> tuple[list[Destination], list[str]]:
    """Resolve destination names; return (destinations, unknown_names)."""
    destinations, unknown = [], []
    for name in names:
        location = resolve_location(name)
        if location is None:
            unknown.append(name)
            continue
        site = get_site(name)
        destinations.append(Destination(
            location=location,
            site_id=site.site_id if site else None,
        ))
    return renumber_destinations(destinations), unknown


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
mcp = FastMCP("sacred-path-advisor")


# =============================================================================
# TOOL 1: list_holy_sites
# =============================================================================
@mcp.tool()
def list_holy_sites(religion: Optional[str] = None) -> dict:
    """List the pilgrimage sites this advisor knows about.

    WHEN TO CALL THIS: When the traveler names a place you are unsure about,
    or asks for suggestions.  Use the returned names or ids in the other
    tools.

    Args:
        religion: Optional filter, one of "hinduism", "islam", "sikhism",
                  "buddhism", "jainism", "christianity", "other".

    Returns:
        A dict with "sites": each has site_id, name, city, religion,
        significance and best_months.
    """
    _log_request("list_holy_sites", religion=religion)

    religion_filter = None
    if religion:
        try:
            religion_filter = Religion(religion.strip().lower())
        except ValueError:
            return _log_response("list_holy_sites", {
                "error": f"Unknown religion '{religion}'.",
                "valid_religions": [r.value for r in Religion],
            })

    sites = list_available_sites(religion_filter)
    _log_status(f"{len(sites)} site(s) match")
    return _log_response("list_holy_sites", {
        "sites": [
            {
                "site_id": s.site_id,
                "name": s.name,
                "city": s.city,
                "religion": s.religion.value,
                "significance": s.significance,
                "best_months": s.best_months,
            }
            for s in sites
        ],
    })


# =============================================================================
# TOOL 2: get_weather_advisability
# =============================================================================
# Resolves every stop, fetches all forecasts concurrently, and returns one
# verdict for the whole trip.  The raw 3-hourly samples never leave core/.
# =============================================================================
@mcp.tool()
async def get_weather_advisability(
    destinations: list[str],
    start_date: str,
    end_date: str,
    start_location: Optional[str] = None,
) -> dict:
    """Assess weather risk for a pilgrimage across all of its stops.

    WHEN TO CALL THIS: Once you know where the traveler is going and when.
    Forecasts only reach about 5 days ahead; trips further out come back
    as "unknown", which means NO DATA, not "no risk".

    Args:
        destinations: Site or city names (e.g., ["Kedarnath", "Golden Temple"]).
        start_date: First day of the trip, ISO format ("2026-10-20").
        end_date: Last day of the trip, ISO format (inclusive).
        start_location: Optional starting city; included in the assessment.

    Returns:
        A dict with:
          - verdict: "recommended", "caution", "not_advisable" or "unknown"
          - display_name, color: how to present the verdict
          - locations: the resolved stop names that were assessed
          - period: the assessed date range
          - data_source: "live" or "mock"
    """
    _log_request("get_weather_advisability",
                 destinations=destinations, start_date=start_date,
                 end_date=end_date, start_location=start_location)

    try:
        date_range = DateRange.from_iso_dates(start_date, end_date)
    except ValueError as e:
        return _log_response("get_weather_advisability", {"error": f"Invalid dates: {e}"})

    names = ([start_location] if start_location else []) + list(destinations)
    stops, unknown = _resolve_stops(names)
    if unknown:
        _log_status(f"Unresolved names: {unknown}")
        return _log_response("get_weather_advisability", {
            "error": f"Unknown location(s): {', '.join(unknown)}.",
            "hint": "Call list_holy_sites to see known names.",
        })

    _log_status(f"Assessing {len(stops)} location(s) over {date_range}")
    try:
        verdict = await analyze_weather_advisability(
            [s.location.coordinate for s in stops], date_range,
        )
    except AdvisorError as e:
        _log_status(f"Weather retrieval failed: {e}")
        return _log_response("get_weather_advisability", {"error": str(e)})

    return _log_response("get_weather_advisability", {
        **_verdict_dict(verdict),
        "locations": [s.location.name for s in stops],
        "period": str(date_range),
        "data_source": "live" if use_live_weather() else "mock",
    })


# =============================================================================
# TOOL 3: plan_pilgrimage
# =============================================================================
# Builds the whole plan.  A weather outage does not block planning: the
# verdict falls back to "unknown" and the reason is returned alongside.
# =============================================================================
@mcp.tool()
async def plan_pilgrimage(
    budget: float,
    travelers: int,
    start_date: str,
    end_date: str,
    start_location: str,
    destinations: list[str],
    travel_mode: str = "train",
    accommodation_type: str = "budget",
) -> dict:
    """Plan a pilgrimage: weather verdict, day-by-day plan and budget split.

    WHEN TO CALL THIS: After the traveler has given a budget, group size,
    dates, a starting point and at least one destination.

    Args:
        budget: Total budget for the whole group (INR).
        travelers: Number of travelers (at least 1).
        start_date: ISO date the trip starts.
        end_date: ISO date the trip ends.
        start_location: Starting city or site (e.g., "Delhi").
        destinations: Site or city names in visiting order.
        travel_mode: "train", "bus", "car", "flight" or "mixed".
        accommodation_type: "budget", "dharamshala", "mid_range" or "luxury".

    Returns:
        A dict with name, weather (verdict/display_name/color), days
        (day_number, date, total_cost, notes), cost_breakdown (amounts and
        percentages), total_cost, per_person_cost.  "weather_error" is set
        when the forecast could not be retrieved.
    """
    _log_request("plan_pilgrimage",
                 budget=budget, travelers=travelers, start_date=start_date,
                 end_date=end_date, start_location=start_location,
                 destinations=destinations, travel_mode=travel_mode,
                 accommodation_type=accommodation_type)

    try:
        start = date.fromisoformat(start_date)
        end = date.fromisoformat(end_date)
        mode = TravelMode(travel_mode.lower())
        lodging = AccommodationType(accommodation_type.lower())
    except ValueError as e:
        return _log_response("plan_pilgrimage", {"error": f"Invalid input: {e}"})

    origin = resolve_location(start_location)
    stops, unknown = _resolve_stops(list(destinations))
    if origin is None:
        unknown.insert(0, start_location)
    if unknown:
        return _log_response("plan_pilgrimage", {
            "error": f"Unknown location(s): {', '.join(unknown)}.",
            "hint": "Call list_holy_sites to see known names.",
        })

    request = TripRequest(
        budget=budget,
        travelers=travelers,
        start_date=start,
        end_date=end,
        start_location=origin,
        destinations=stops,
        travel_mode=mode,
        accommodation_type=lodging,
    )

    problems = validate_trip_request(request)
    if problems:
        _log_status(f"Rejected before any forecast request: {problems}")
        return _log_response("plan_pilgrimage", {
            "error": "The trip request is incomplete.",
            "problems": problems,
        })

    verdict = WeatherAdvisability.UNKNOWN
    weather_error = None
    try:
        verdict = await analyze_weather_advisability(
            trip_coordinates(request), DateRange.from_dates(start, end),
        )
    except AdvisorError as e:
        weather_error = str(e)
        _log_status(f"Weather unavailable, planning without it: {e}")

    plan = plan_trip(request, verdict)
    _log_status(f"Planned '{plan.name}': {plan.itinerary.number_of_days} day(s), "
                f"weather={verdict.value}")

    breakdown = plan.itinerary.cost_breakdown
    result = {
        "name": plan.name,
        "travel_mode": mode.display_name,
        "accommodation": lodging.display_name,
        "weather": _verdict_dict(verdict),
        "days": _jsonable([asdict(day) for day in plan.itinerary.days]),
        "cost_breakdown": {
            "amounts": asdict(breakdown),
            "percentages": breakdown.percentages(),
        },
        "total_cost": plan.total_cost,
        "per_person_cost": plan.total_cost / travelers,
    }
    if weather_error:
        result["weather_error"] = weather_error
    return _log_response("plan_pilgrimage", result)


# =============================================================================
# Server entry point
# =============================================================================
if __name__ == "__main__":
    mcp.run()
