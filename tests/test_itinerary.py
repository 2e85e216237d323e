from datetime import date

import pytest

from core.errors import InvalidTripError
from core.itinerary import (
    build_cost_breakdown,
    generate_day_plans,
    plan_trip,
    renumber_destinations,
    trip_coordinates,
    trip_name,
    validate_trip_request,
)
from core.models import (
    AccommodationType,
    Coordinate,
    Destination,
    Location,
    TravelMode,
    TripRequest,
    WeatherAdvisability,
)

DELHI = Location(name="Delhi", coordinate=Coordinate(28.6139, 77.2090))
KEDARNATH = Location(name="Kedarnath Temple", coordinate=Coordinate(30.7352, 79.0669))
VAISHNO_DEVI = Location(name="Vaishno Devi Temple", coordinate=Coordinate(33.0308, 74.9490))


@pytest.fixture
def request_factory():
    def _make(**overrides):
        fields = dict(
            budget=40000.0,
            travelers=4,
            start_date=date(2026, 10, 20),
            end_date=date(2026, 10, 23),
            start_location=DELHI,
            destinations=[Destination(location=KEDARNATH), Destination(location=VAISHNO_DEVI)],
        )
        fields.update(overrides)
        return TripRequest(**fields)

    return _make


class TestValidation:
    def test_valid_request(self, request_factory):
        assert validate_trip_request(request_factory()) == []

    def test_collects_every_problem(self, request_factory):
        request = request_factory(
            budget=0,
            travelers=0,
            destinations=[],
            start_date=date(2026, 10, 25),
            end_date=date(2026, 10, 20),
        )
        assert len(validate_trip_request(request)) == 4

    def test_same_day_trip_is_valid(self, request_factory):
        request = request_factory(start_date=date(2026, 10, 20), end_date=date(2026, 10, 20))
        assert validate_trip_request(request) == []

    def test_defaults(self, request_factory):
        request = request_factory()
        assert request.travel_mode is TravelMode.TRAIN
        assert request.accommodation_type is AccommodationType.BUDGET


class TestCostBreakdown:
    def test_fixed_split(self):
        breakdown = build_cost_breakdown(10000)
        assert breakdown.travel == pytest.approx(4000)
        assert breakdown.accommodation == pytest.approx(3000)
        assert breakdown.food == pytest.approx(2000)
        assert breakdown.activities == pytest.approx(500)
        assert breakdown.miscellaneous == pytest.approx(500)
        assert breakdown.total == pytest.approx(10000)

    def test_percentages(self):
        percentages = build_cost_breakdown(25000).percentages()
        assert percentages["travel"] == pytest.approx(40)
        assert percentages["miscellaneous"] == pytest.approx(5)
        assert sum(percentages.values()) == pytest.approx(100)

    def test_zero_budget_percentages(self):
        assert set(build_cost_breakdown(0).percentages().values()) == {0.0}


class TestDayPlans:
    def test_one_plan_per_day(self, request_factory):
        days = generate_day_plans(request_factory())

        assert [d.day_number for d in days] == [1, 2, 3]
        assert [d.date for d in days] == [date(2026, 10, 20), date(2026, 10, 21), date(2026, 10, 22)]
        assert all(d.total_cost == pytest.approx(40000 / 3) for d in days)

    def test_same_day_trip_has_one_day(self, request_factory):
        days = generate_day_plans(request_factory(end_date=date(2026, 10, 20)))
        assert len(days) == 1
        assert days[0].total_cost == pytest.approx(40000)


class TestNamingAndOrder:
    def test_named_after_first_destination(self):
        assert trip_name([Destination(location=KEDARNATH)]) == "Pilgrimage to Kedarnath Temple"

    def test_default_name(self):
        assert trip_name([]) == "Pilgrimage to Sacred Places"

    def test_renumber(self):
        destinations = [
            Destination(location=KEDARNATH, visiting_order=5),
            Destination(location=VAISHNO_DEVI, visiting_order=2),
        ]
        renumber_destinations(destinations)
        assert [d.visiting_order for d in destinations] == [0, 1]

    def test_coordinates_start_first_then_visiting_order(self, request_factory):
        request = request_factory(destinations=[
            Destination(location=VAISHNO_DEVI, visiting_order=1),
            Destination(location=KEDARNATH, visiting_order=0),
        ])
        assert trip_coordinates(request) == [
            DELHI.coordinate, KEDARNATH.coordinate, VAISHNO_DEVI.coordinate,
        ]


class TestPlanTrip:
    def test_builds_plan(self, request_factory):
        plan = plan_trip(request_factory(), WeatherAdvisability.RECOMMENDED)

        assert plan.name == "Pilgrimage to Kedarnath Temple"
        assert plan.itinerary.number_of_days == 3
        assert plan.total_cost == pytest.approx(40000)
        assert plan.weather_advisability is WeatherAdvisability.RECOMMENDED
        assert plan.itinerary.days[0].notes is None

    def test_defaults_to_unknown_weather(self, request_factory):
        assert plan_trip(request_factory()).weather_advisability is WeatherAdvisability.UNKNOWN

    def test_bad_weather_is_noted(self, request_factory):
        plan = plan_trip(request_factory(), WeatherAdvisability.NOT_ADVISABLE)
        assert "not advisable" in plan.itinerary.days[0].notes

    def test_invalid_request_raises(self, request_factory):
        with pytest.raises(InvalidTripError) as excinfo:
            plan_trip(request_factory(budget=-1, destinations=[]))
        assert len(excinfo.value.problems) == 2
