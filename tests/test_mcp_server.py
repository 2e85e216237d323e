import asyncio
import json
from datetime import date, timedelta
from unittest.mock import MagicMock, patch

import pytest

from core.errors import RetrievalError
from tools import mcp_server


def _call(tool, **kwargs):
    """Invoke a tool's underlying function, awaiting it when async."""
    fn = getattr(tool, "fn", tool)
    result = fn(**kwargs)
    if asyncio.iscoroutine(result):
        result = asyncio.run(result)
    return result


@pytest.fixture(autouse=True)
def _mock_weather(mock_weather_env):
    yield


class TestListHolySites:
    def test_lists_everything(self):
        result = _call(mcp_server.list_holy_sites)
        assert {"site_id", "name", "city", "religion"} <= set(result["sites"][0])

    def test_religion_filter(self):
        result = _call(mcp_server.list_holy_sites, religion="Buddhism")
        assert [s["site_id"] for s in result["sites"]] == ["mahabodhi"]

    def test_unknown_religion(self):
        result = _call(mcp_server.list_holy_sites, religion="pastafarian")
        assert "error" in result
        assert "hinduism" in result["valid_religions"]


class TestGetWeatherAdvisability:
    def test_current_trip_gets_a_verdict(self):
        today = date.today()
        result = _call(
            mcp_server.get_weather_advisability,
            destinations=["Kedarnath", "Golden Temple"],
            start_date=today.isoformat(),
            end_date=(today + timedelta(days=2)).isoformat(),
            start_location="Delhi",
        )
        assert result["verdict"] in {"recommended", "caution", "not_advisable"}
        assert result["locations"] == ["Delhi", "Kedarnath Temple", "Golden Temple"]
        assert result["data_source"] == "mock"

    def test_far_future_trip_is_unknown(self):
        result = _call(
            mcp_server.get_weather_advisability,
            destinations=["Varanasi"],
            start_date="2099-03-01",
            end_date="2099-03-04",
        )
        assert result["verdict"] == "unknown"
        assert result["color"] == "gray"

    def test_unknown_destination(self):
        result = _call(
            mcp_server.get_weather_advisability,
            destinations=["Atlantis"],
            start_date="2026-10-20",
            end_date="2026-10-21",
        )
        assert "Atlantis" in result["error"]

    def test_reversed_dates(self):
        result = _call(
            mcp_server.get_weather_advisability,
            destinations=["Varanasi"],
            start_date="2026-10-25",
            end_date="2026-10-20",
        )
        assert result["error"].startswith("Invalid dates")

    def test_retrieval_failure_is_reported(self):
        with patch("core.weather.get_forecast", side_effect=RetrievalError("provider down")):
            result = _call(
                mcp_server.get_weather_advisability,
                destinations=["Varanasi"],
                start_date="2026-10-20",
                end_date="2026-10-21",
            )
        assert result == {"error": "provider down"}

    @pytest.mark.parametrize("extra", [
        {"rain": {"1h": "n/a"}},
        {"wind": 5},
        {"wind": {"speed": "calm"}},
        {"weather": [{"main": 800}]},
    ])
    def test_unusable_optional_fields_still_give_a_verdict(self, monkeypatch, extra):
        monkeypatch.setenv("USE_LIVE_WEATHER", "true")
        monkeypatch.setenv("OPENWEATHER_API_KEY", "test-key")
        # 2026-10-20 12:00 UTC, inside the requested day
        item = {"dt": 1792497600, "main": {"temp": 24.0, "humidity": 50}, **extra}
        response = MagicMock()
        response.read.return_value = json.dumps({"list": [item]}).encode()
        response.__enter__.return_value = response

        with patch("core.weather.urllib.request.urlopen", return_value=response):
            result = _call(
                mcp_server.get_weather_advisability,
                destinations=["Varanasi"],
                start_date="2026-10-20",
                end_date="2026-10-20",
            )

        assert "error" not in result
        assert result["verdict"] == "recommended"
        assert result["data_source"] == "live"

    def test_missing_api_key_is_reported(self, monkeypatch):
        monkeypatch.setenv("USE_LIVE_WEATHER", "true")
        result = _call(
            mcp_server.get_weather_advisability,
            destinations=["Varanasi"],
            start_date="2026-10-20",
            end_date="2026-10-21",
        )
        assert "OPENWEATHER_API_KEY" in result["error"]


class TestPlanPilgrimage:
    def _plan(self, **overrides):
        kwargs = dict(
            budget=40000,
            travelers=4,
            start_date="2099-03-01",
            end_date="2099-03-05",
            start_location="Delhi",
            destinations=["Kedarnath", "Vaishno Devi"],
        )
        kwargs.update(overrides)
        return _call(mcp_server.plan_pilgrimage, **kwargs)

    def test_full_plan(self):
        result = self._plan()

        assert result["name"] == "Pilgrimage to Kedarnath Temple"
        assert result["travel_mode"] == "Train"
        assert result["accommodation"] == "Budget Hotel"
        assert result["weather"]["verdict"] == "unknown"
        assert [d["day_number"] for d in result["days"]] == [1, 2, 3, 4]
        assert result["days"][0]["date"] == "2099-03-01"
        assert result["cost_breakdown"]["amounts"]["travel"] == pytest.approx(16000)
        assert result["cost_breakdown"]["percentages"]["food"] == pytest.approx(20)
        assert result["total_cost"] == pytest.approx(40000)
        assert result["per_person_cost"] == pytest.approx(10000)
        assert "weather_error" not in result

    def test_weather_outage_does_not_block_planning(self):
        with patch("core.weather.get_forecast", side_effect=RetrievalError("provider down")):
            result = self._plan()
        assert result["weather"]["verdict"] == "unknown"
        assert result["weather_error"] == "provider down"
        assert len(result["days"]) == 4

    def test_invalid_request(self):
        result = self._plan(budget=0)
        assert result["problems"] == ["Budget must be greater than zero."]

    @pytest.mark.parametrize("overrides", [
        {"budget": 0},
        {"travelers": 0},
        {"destinations": []},
        {"start_date": "2099-03-05", "end_date": "2099-03-01"},
    ])
    def test_invalid_request_fetches_no_forecasts(self, overrides):
        with patch("core.weather.get_forecast") as get_forecast:
            result = self._plan(**overrides)
        get_forecast.assert_not_called()
        assert result["error"] == "The trip request is incomplete."
        assert result["problems"]

    def test_reversed_dates_skip_weather_and_fail_validation(self):
        result = self._plan(start_date="2099-03-05", end_date="2099-03-01")
        assert "Start date must be on or before the end date." in result["problems"]

    def test_unknown_travel_mode(self):
        result = self._plan(travel_mode="teleport")
        assert result["error"].startswith("Invalid input")

    def test_unknown_start_location(self):
        result = self._plan(start_location="Gotham")
        assert "Gotham" in result["error"]
