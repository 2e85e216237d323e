# =============================================================================
# main.py  -  Entry Point for the Pilgrimage Advisor Agent
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py
#
# Loads .env, creates the ADK agent (agent/pilgrimage_agent.py) and reads
# questions from the terminal.  Tool calls are echoed as they happen, and
# whenever a tool result carries a weather verdict its label is printed
# before the agent's own answer, so the traveler sees the raw verdict even
# if the model paraphrases it.
#
# A typical conversation:
#   "We are 4 people from Delhi, 40000 rupees, Kedarnath and Vaishno Devi
#    next weekend."
#     -> get_weather_advisability  (verdict for every stop)
#     -> plan_pilgrimage           (day plan + budget split)
# =============================================================================

import asyncio
import json
from typing import Optional

from dotenv import load_dotenv

# Must run before the agent is created: LiteLlm and core/weather.py read
# their keys and toggles from the environment.
load_dotenv()

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.pilgrimage_agent import create_agent

APP_NAME = "pilgrimage_advisor"
USER_ID = "pilgrim"

_VERDICT_MARKERS = {
    "recommended": "🟢",
    "caution": "🟡",
    "not_advisable": "🔴",
    "unknown": "⚪",
}


def weather_verdict_line(response) -> Optional[str]:
    """Describe the weather verdict inside a tool result, if there is one.

    Our tools return the verdict either at the top level
    (get_weather_advisability) or under "weather" (plan_pilgrimage).  Over
    MCP the dict may arrive as structuredContent or as JSON text content.
    """
    if not isinstance(response, dict):
        return None

    for key in ("structuredContent", "result"):
        if isinstance(response.get(key), dict):
            return weather_verdict_line(response[key])

    for item in response.get("content") or []:
        if isinstance(item, dict) and isinstance(item.get("text"), str):
            try:
                line = weather_verdict_line(json.loads(item["text"]))
            except json.JSONDecodeError:
                continue
            if line:
                return line

    verdict = response.get("weather") if isinstance(response.get("weather"), dict) else response
    if "verdict" not in verdict:
        return None
    marker = _VERDICT_MARKERS.get(verdict["verdict"], "•")
    line = f"{marker} Weather: {verdict.get('display_name', verdict['verdict'])}"
    if response.get("weather_error"):
        line += f" ({response['weather_error']})"
    return line


async def run_agent():
    """Run the pilgrimage advisor interactively until the user quits."""

    print("Sacred Path pilgrimage advisor (type 'quit' to exit)")
    agent = create_agent()

    session_service = InMemorySessionService()
    runner = Runner(
        agent=agent,
        app_name=APP_NAME,
        session_service=session_service,
    )
    session = await session_service.create_session(
        app_name=APP_NAME,
        user_id=USER_ID,
    )

    while True:
        try:
            user_input = input("\n🧑 You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if user_input.lower() in ("quit", "exit", "q"):
            break

        if not user_input:
            continue

        user_message = types.Content(
            role="user",
            parts=[types.Part(text=user_input)],
        )

        final_response = ""
        verdict_line = None

        async for event in runner.run_async(
            user_id=USER_ID,
            session_id=session.id,
            new_message=user_message,
        ):
            if not (event.content and event.content.parts):
                continue
            for part in event.content.parts:
                if getattr(part, "text", None):
                    final_response = part.text
                if getattr(part, "function_call", None):
                    print(f"  🔧 {part.function_call.name}")
                if getattr(part, "function_response", None):
                    verdict_line = weather_verdict_line(part.function_response.response) or verdict_line

        if verdict_line:
            print(f"\n{verdict_line}")
        if final_response:
            print(f"\n🤖 Advisor:\n\n{final_response}")
        else:
            print("\n⚠️  No response generated. The agent may have encountered an error.")


if __name__ == "__main__":
    asyncio.run(run_agent())
