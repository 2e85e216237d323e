# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL business logic for the pilgrimage advisor.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports Google ADK, FastMCP, or any orchestration
#   framework. Every module here is plain Python and imports cleanly in a
#   bare REPL with no internet access.
#
#   The only module that touches the network is core/weather.py, and only
#   when USE_LIVE_WEATHER=true.  The advisability analyzer itself
#   (core/advisability.py) is a pure function of already-retrieved data.
# =============================================================================
