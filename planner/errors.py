"""Exception hierarchy shared by clients, router and HTTP layer."""


class PlannerError(Exception):
    """Base class for planner errors."""


class ValidationError(PlannerError):
    """Malformed location or date. Raised before any network call."""


class ProviderError(PlannerError):
    """Raised when a weather data provider fails or is misconfigured."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class GeocodingError(ProviderError):
    """Location name could not be resolved to coordinates."""


class AIServiceError(PlannerError):
    """Generative text call failed."""


class StorageError(PlannerError):
    """Local database cannot be used by this version of the planner."""
