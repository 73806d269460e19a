"""Custom exceptions for the sportsdb-metadata library."""

from __future__ import annotations


class MetadataError(Exception):
    """Base exception for all metadata-related errors."""

    def __init__(self, message: str, provider: str | None = None) -> None:
        self.provider = provider
        super().__init__(message)


class ProviderConnectionError(MetadataError):
    """Raised when a provider stays unreachable after every retry attempt."""

    def __init__(
        self, provider: str, details: str | None = None, attempts: int = 0
    ) -> None:
        self.attempts = attempts
        message = f"Connection failed for provider '{provider}'"
        if attempts:
            message += f" after {attempts} attempts"
        if details:
            message += f": {details}"
        super().__init__(message, provider)


class ProviderRateLimitError(MetadataError):
    """Raised when a provider answers with HTTP 429.

    The API client handles this internally by cooling down and retrying,
    so callers of the client never see it.
    """

    def __init__(
        self, provider: str, retry_after: int | None = None, details: str | None = None
    ) -> None:
        self.retry_after = retry_after
        message = f"Rate limit exceeded for provider '{provider}'"
        if retry_after:
            message += f" (retry after {retry_after}s)"
        if details:
            message += f": {details}"
        super().__init__(message, provider)


class ProviderResponseError(MetadataError):
    """Raised when a provider answers with a non-retryable error status."""

    def __init__(self, provider: str, status_code: int, details: str | None = None) -> None:
        self.status_code = status_code
        message = f"Provider '{provider}' returned HTTP {status_code}"
        if details:
            message += f": {details}"
        super().__init__(message, provider)


class ResponseParseError(MetadataError):
    """Raised when a provider response cannot be decoded."""

    def __init__(self, provider: str, details: str | None = None) -> None:
        message = f"Malformed response from provider '{provider}'"
        if details:
            message += f": {details}"
        super().__init__(message, provider)


class InvalidConfigurationError(MetadataError):
    """Raised when configuration is invalid."""

    def __init__(self, details: str) -> None:
        super().__init__(f"Invalid configuration: {details}")
