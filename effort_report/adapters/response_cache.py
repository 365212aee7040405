"""In-memory TTL cache for portal method responses."""

from __future__ import annotations

from dataclasses import dataclass
import time
from typing import Any, Callable

from .parameters import RestCallParameters

CacheKey = tuple[str, str]


@dataclass(frozen=True)
class CacheEntry:
    """One cached portal response.

    Attributes:
        payload: Unwrapped response payload.
        stored_at: Clock reading at insertion time.
    """

    payload: Any
    stored_at: float


class ResponseCache:
    """Response cache keyed by method name and canonical parameter serialization.

    Entries expire lazily: an expired entry is dropped only when it is looked up.
    """

    def __init__(self, ttl_seconds: float = 300.0, clock: Callable[[], float] | None = None):
        """Initialize cache.

        Args:
            ttl_seconds: Entry lifetime in seconds.
            clock: Optional monotonic clock provider.

        Raises:
            ValueError: Raised when ttl is negative.
        """

        if ttl_seconds < 0:
            raise ValueError("ttl_seconds must be >= 0")

        self._ttl_seconds = float(ttl_seconds)
        self._clock = clock or time.monotonic
        self._entries: dict[CacheKey, CacheEntry] = {}

    @staticmethod
    def cache_build_key(method: str, parameters: RestCallParameters) -> CacheKey:
        """Build deterministic cache key for one call.

        Args:
            method: Portal method name.
            parameters: Tagged call parameters.

        Returns:
            CacheKey: Method name and canonical parameter text.
        """

        return (method, parameters.params_cache_fragment())

    def cache_get(self, key: CacheKey) -> CacheEntry | None:
        """Return a live entry or None when missing or expired.

        Args:
            key: Cache key.

        Returns:
            CacheEntry | None: Live entry when present.
        """

        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.stored_at >= self._ttl_seconds:
            del self._entries[key]
            return None
        return entry

    def cache_put(self, key: CacheKey, payload: Any, stored_at: float | None = None) -> None:
        """Store payload under key.

        Args:
            key: Cache key.
            payload: Response payload.
            stored_at: Optional insertion timestamp; defaults to the current clock reading.
        """

        self._entries[key] = CacheEntry(payload=payload, stored_at=self._clock() if stored_at is None else stored_at)

    def cache_clear(self) -> None:
        """Drop every entry."""

        self._entries.clear()

    def cache_size(self) -> int:
        """Return number of stored entries, including not-yet-evicted expired ones."""

        return len(self._entries)
