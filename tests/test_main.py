import json

import pytest

main = pytest.importorskip("main")


class TestWeatherVerdictLine:
    def test_weather_tool_result(self):
        response = {
            "verdict": "caution",
            "display_name": "Proceed with caution",
            "color": "yellow",
        }
        assert main.weather_verdict_line(response) == "🟡 Weather: Proceed with caution"

    def test_plan_result_with_weather_error(self):
        response = {
            "name": "Pilgrimage to Kedarnath Temple",
            "weather": {"verdict": "unknown", "display_name": "Weather data unavailable"},
            "weather_error": "provider down",
        }
        assert main.weather_verdict_line(response) == (
            "⚪ Weather: Weather data unavailable (provider down)"
        )

    def test_mcp_text_content(self):
        payload = {"verdict": "not_advisable", "display_name": "Not advisable"}
        response = {"content": [{"type": "text", "text": json.dumps(payload)}]}
        assert main.weather_verdict_line(response) == "🔴 Weather: Not advisable"

    def test_mcp_structured_content(self):
        response = {"structuredContent": {"verdict": "recommended", "display_name": "Recommended to go"}}
        assert main.weather_verdict_line(response) == "🟢 Weather: Recommended to go"

    @pytest.mark.parametrize("response", [
        None,
        {"sites": []},
        {"error": "Unknown location(s): Atlantis."},
        {"content": [{"type": "text", "text": "not json"}]},
    ])
    def test_results_without_a_verdict(self, response):
        assert main.weather_verdict_line(response) is None
