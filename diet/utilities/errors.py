"""Errors surfaced by diet plan generation.

Malformed model output is not an error here: the response parser recovers
from it with the fallback plan.
"""


class DietPlannerError(Exception):
    """Base class for errors reported to the caller."""


class ConfigurationError(DietPlannerError):
    """The generation provider has no credential configured."""


# Name used by callers that think in terms of provider availability
ProviderUnavailable = ConfigurationError


class ProviderError(DietPlannerError):
    """The provider call failed or returned an envelope we do not recognise."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
