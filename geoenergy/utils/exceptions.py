"""Custom exception hierarchy for the geo-energy estimator."""

from typing import Any


class EnergyEstimatorError(Exception):
    """Base exception for all energy estimation errors.

    Attributes:
        message: Human-readable error message.
        context: Optional dictionary with additional error context.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Format error message with context."""
        if not self.context:
            return self.message

        context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{self.message} | Context: {context_str}"


class CoordinateValidationError(EnergyEstimatorError):
    """Raised when a coordinate is malformed, out of range, or missing.

    The message is shown to API callers verbatim, so it must stay free of
    internal detail.

    Example context:
        - latitude: raw latitude input
        - longitude: raw longitude input
    """


class ConfigValidationError(EnergyEstimatorError):
    """Raised when a locations CSV fails validation.

    Example context:
        - row_number: CSV row that failed
        - path: CSV file path
        - error: Underlying validation error message
    """


class UpstreamFetchError(EnergyEstimatorError):
    """Raised when the NASA POWER API is unreachable or returns bad data.

    Example context:
        - location: (latitude, longitude) tuple
        - api: API being called ("NASA POWER")
        - status_code: HTTP status code if applicable
        - response: truncated API response body
    """


class CacheReadError(EnergyEstimatorError):
    """Describes an unreadable or corrupt cache store.

    Never raised to callers: reads fail open to an empty store and this
    error is only logged.
    """


class CacheWriteError(EnergyEstimatorError):
    """Raised when the cache store cannot be written.

    Example context:
        - path: store file path
        - error: underlying OS error
    """
