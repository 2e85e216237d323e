# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool wrappers.
#
# ARCHITECTURAL ROLE:
#   tools/ is the translation layer between the agent framework and core/.
#   Each tool:
#     1. Parses the agent's strings (names, ISO dates, enum values)
#     2. Calls pure functions from core/ (and awaits the weather fan-out)
#     3. Converts dataclasses and enums into plain dicts for JSON
#     4. Turns core/ exceptions into {"error": ...} responses
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT score weather or split budgets (that's core/)
#   - They do NOT decide what to ask the traveler (that's the agent)
# =============================================================================
