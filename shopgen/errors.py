"""Exception hierarchy for shopgen.

Everything raised on purpose by the package derives from ``ScaffoldError`` so
that the generation service can turn any of them into a failure result
without catching unrelated bugs.
"""

from __future__ import annotations


class ScaffoldError(Exception):
    """Base class for all expected shopgen failures."""

    @property
    def kind(self) -> str:
        """Short machine-readable name of the failure (the class name)."""
        return type(self).__name__


class ConfigurationValidationError(ScaffoldError):
    """Raised when a generation payload is missing or has an invalid field."""


class UnknownProviderError(ScaffoldError):
    """Raised when a provider id is not present in the registry."""

    def __init__(self, provider_id: str) -> None:
        self.provider_id = provider_id
        super().__init__(f"Unsupported LLM provider: {provider_id}")


class BackendUnavailableError(ScaffoldError):
    """Raised when a remote backend is not configured or cannot be reached."""

    def __init__(self, backend: str, message: str) -> None:
        self.backend = backend
        super().__init__(message)


class BackendHTTPError(ScaffoldError):
    """Raised when a remote backend answers with a non-success status code."""

    def __init__(self, backend: str, status_code: int, reason: str) -> None:
        self.backend = backend
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"{backend} API error: {reason or status_code}")


class MalformedResponseError(ScaffoldError):
    """Raised when backend output holds no parseable ``files`` object."""

    def __init__(self, message: str = "Failed to parse LLM response. Please try again.") -> None:
        super().__init__(message)
