# =============================================================================
# agent/pilgrimage_agent.py  -  Google ADK Agent Configuration
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Creates the Google ADK agent: a LiteLlm-backed model, the system prompt
#   from agent/prompt.py, and an MCP toolset that spawns tools/mcp_server.py
#   as a subprocess over stdio.
#
#   ┌──────────────────────────────┐        ┌────────────────────────────┐
#   │  Google ADK Agent            │  MCP   │  FastMCP server            │
#   │  prompt + LiteLlm model      │──────▶│  list_holy_sites           │
#   │                              │ stdio  │  get_weather_advisability  │
#   └──────────────────────────────┘        │  plan_pilgrimage           │
#                                           └────────────┬───────────────┘
#                                                        ▼
#                                           ┌────────────────────────────┐
#                                           │  core/ (pure Python)       │
#                                           └────────────────────────────┘
#
# MODEL:
#   ADVISOR_MODEL selects the LiteLlm model string (default
#   "openrouter/openai/gpt-4o").  LiteLlm reads the provider key
#   (e.g., OPENROUTER_API_KEY) from the environment.
# =============================================================================

import os

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from mcp import StdioServerParameters

from agent.prompt import get_pilgrimage_advisor_prompt

DEFAULT_MODEL = "openrouter/openai/gpt-4o"


def create_agent() -> Agent:
    """Create and configure the pilgrimage advisor agent.

    The agent has no business logic of its own:
      - instruction: the system prompt from agent/prompt.py
      - tools: the FastMCP server in tools/mcp_server.py
      - model: any LiteLlm model string
    """

    # -------------------------------------------------------------------------
    # MCP tool connection
    # -------------------------------------------------------------------------
    # The server is started with "uv run" from the project root so the
    # subprocess uses the project's .venv and can import core/.
    # -------------------------------------------------------------------------
    project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

    mcp_tools = MCPToolset(
        connection_params=StdioServerParameters(
            command="uv",
            args=["run", "--directory", project_root, "python", "-m", "tools.mcp_server"],
            env={**os.environ},
        ),
    )

    model_name = os.environ.get("ADVISOR_MODEL", DEFAULT_MODEL)

    agent = Agent(
        name="pilgrimage_advisor",
        model=LiteLlm(model=model_name),
        instruction=get_pilgrimage_advisor_prompt(),
        tools=[mcp_tools],
    )

    return agent
