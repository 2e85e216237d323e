# =============================================================================
# agent/__init__.py
# =============================================================================
# This package contains the Google ADK agent configuration.
#
# ARCHITECTURAL ROLE:
#   The agent receives the traveler's message, works out which trip details
#   are still missing, calls the MCP tools in tools/, and explains the
#   results.  It holds no scoring or budgeting logic; that lives in core/.
# =============================================================================
