# =============================================================================
# core/errors.py  -  Exception taxonomy
# =============================================================================
#
# Three things can go wrong around a weather verdict:
#
#   MissingConfigurationError  the live provider is selected but no API key
#                              is configured.
#   RetrievalError             a forecast call failed (network, HTTP status,
#                              or a response that cannot be decoded).
#   "data unavailable"         NOT an exception.  When no forecast sample
#                              falls inside the trip dates the analyzer
#                              returns WeatherAdvisability.UNKNOWN.
#
# The tools/ layer catches AdvisorError and turns it into an {"error": ...}
# dict, so these never leak across the MCP boundary as tracebacks.
# =============================================================================


class AdvisorError(Exception):
    """Base class for every error raised by core/."""


class MissingConfigurationError(AdvisorError):
    """A required setting (usually an API key) is not configured."""

    def __init__(self, setting: str):
        self.setting = setting
        super().__init__(f"{setting} is not configured")


class RetrievalError(AdvisorError):
    """A forecast retrieval failed or returned an undecodable payload."""


class InvalidTripError(AdvisorError):
    """A trip request failed validation.

    ``problems`` holds one human-readable line per failed rule.
    """

    def __init__(self, problems: list[str]):
        self.problems = problems
        super().__init__("; ".join(problems))
