"""Canonical portal REST error-code semantics for adapter-layer routing."""

from __future__ import annotations

from enum import Enum
from typing import Final


class PortalErrorCode(str, Enum):
    """Known portal REST error codes used by adapter routing logic."""

    QUERY_LIMIT_EXCEEDED = "QUERY_LIMIT_EXCEEDED"
    OPERATION_TIME_LIMIT = "OPERATION_TIME_LIMIT"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    ERROR_METHOD_NOT_FOUND = "ERROR_METHOD_NOT_FOUND"
    INVALID_REQUEST = "INVALID_REQUEST"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    NO_AUTH_FOUND = "NO_AUTH_FOUND"
    ACCESS_DENIED = "ACCESS_DENIED"
    INSUFFICIENT_SCOPE = "insufficient_scope"


PORTAL_ERROR_DEFAULT_MESSAGES: Final[dict[str, str]] = {
    PortalErrorCode.QUERY_LIMIT_EXCEEDED.value: "Too many requests. Please try again shortly.",
    PortalErrorCode.OPERATION_TIME_LIMIT.value: "Method execution time limit exceeded.",
    PortalErrorCode.INTERNAL_SERVER_ERROR.value: "Internal server error.",
    PortalErrorCode.ERROR_METHOD_NOT_FOUND.value: "Method not found.",
    PortalErrorCode.INVALID_REQUEST.value: "Invalid request.",
    PortalErrorCode.INVALID_CREDENTIALS.value: "Invalid webhook credentials.",
    PortalErrorCode.NO_AUTH_FOUND.value: "Access path is invalid.",
    PortalErrorCode.ACCESS_DENIED.value: "Access denied.",
    PortalErrorCode.INSUFFICIENT_SCOPE.value: "Webhook scope does not allow this method.",
}


def portal_error_default_message(error_code: str, fallback_message: str) -> str:
    """Return canonical default message for an error code.

    Args:
        error_code: Upstream portal error code.
        fallback_message: Fallback message when code is unknown.

    Returns:
        str: Canonical message for known code, else provided fallback message.
    """

    return PORTAL_ERROR_DEFAULT_MESSAGES.get(error_code, fallback_message)


def portal_error_is_quota_exceeded(error_code: str | None, message: str = "") -> bool:
    """Return whether an error code or message indicates a query-rate violation.

    Args:
        error_code: Upstream portal error code, when known.
        message: Error message text.

    Returns:
        bool: True when the failure is a quota-exceeded condition.
    """

    marker = PortalErrorCode.QUERY_LIMIT_EXCEEDED.value
    return error_code == marker or marker in (message or "")
