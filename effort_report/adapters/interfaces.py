"""Typed interfaces for adapter-layer responsibilities."""

from typing import Any, Protocol

from .parameters import RestCallParameters


class PortalRestPort(Protocol):
    """Port definition for calling portal REST methods."""

    def rest_source_name(self) -> str:
        """Return adapter source identifier for diagnostics.

        Returns:
            str: Human-readable upstream source identifier.
        """

    async def rest_call(self, method: str, parameters: RestCallParameters | None = None) -> Any:
        """Call one portal method and return its unwrapped result payload.

        Args:
            method: Portal method name such as `user.get`.
            parameters: Tagged call parameters.

        Returns:
            Any: Unwrapped `result` payload, or the raw body when no envelope is present.

        Raises:
            RestTransportError: Raised for network failures and non-success HTTP status.
            RestRemoteError: Raised when the portal reports an application error.
        """

    def rest_cache_clear(self) -> None:
        """Drop every cached response."""
