"""Project-native typed exceptions for portal REST adapter failures."""

from __future__ import annotations


class RestAdapterError(Exception):
    """Base exception for adapter-level portal failures.

    Attributes:
        error_code: Optional upstream portal error code.
    """

    def __init__(self, message: str, error_code: str | None = None):
        super().__init__(message)
        self.error_code = error_code


class RestTransportError(RestAdapterError, ConnectionError):
    """Network failure or non-success HTTP status during portal communication.

    Attributes:
        status_code: HTTP status code when a response was received.
    """

    def __init__(self, message: str, error_code: str | None = None, status_code: int | None = None):
        super().__init__(message=message, error_code=error_code)
        self.status_code = status_code


class RestRemoteError(RestAdapterError, RuntimeError):
    """Application error reported by the portal inside a successful response."""


class RestQuotaExceededError(RestRemoteError):
    """Quota-exceeded condition that persisted through every allowed retry."""
