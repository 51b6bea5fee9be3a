"""Custom exception hierarchy for ensresolver."""

from typing import Any


class ENSResolverError(Exception):
    """Base exception for all ensresolver errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(ENSResolverError):
    """Input validation failed."""

    pass


class ConfigurationError(ENSResolverError):
    """Resolver components are missing or wired incorrectly."""

    pass


class ResolutionError(ENSResolverError):
    """Failed to resolve a name."""

    pass


class UpstreamServiceError(ResolutionError):
    """An external HTTP service failed or returned an error payload."""

    def __init__(
        self,
        message: str,
        source: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.source = source
        self.status_code = status_code


class RateLimitError(UpstreamServiceError):
    """An upstream kept answering 429 after all retries."""

    def __init__(
        self,
        message: str,
        source: str,
        retry_after: float | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, source, status_code=429, details=details)
        self.retry_after = retry_after


class ChainReadError(ResolutionError):
    """A blockchain node read failed."""

    def __init__(
        self,
        message: str,
        method: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.method = method
