"""Portal REST adapter with response caching, rate limiting and quota retry."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Final

import httpx

from .interfaces import PortalRestPort
from .parameters import RestCallParameters
from .rate_limiter import MinimumIntervalRateLimiter
from .response_cache import CacheKey, ResponseCache
from .rest_error_codes import portal_error_default_message, portal_error_is_quota_exceeded
from .rest_errors import RestAdapterError, RestQuotaExceededError, RestRemoteError, RestTransportError

logger = logging.getLogger(__name__)


class PortalRestClient(PortalRestPort):
    """Adapter implementation for portal REST method calls.

    One instance owns the response cache, the last-call timestamp and the HTTP
    client; construct it once per logical session and pass it to consumers.
    """

    _USER_AGENT: Final[str] = "effort-report/1.0 (Python/httpx)"
    _RESULT_FIELD: Final[str] = "result"
    _ERROR_FIELD: Final[str] = "error"
    _ERROR_DESCRIPTION_FIELD: Final[str] = "error_description"

    def __init__(
        self,
        base_url: str,
        request_timeout_seconds: float = 30.0,
        min_interval_seconds: float = 1.0,
        cache_ttl_seconds: float = 300.0,
        quota_retry_delay_seconds: float = 2.0,
        quota_retry_max_attempts: int | None = 5,
        http_client: httpx.AsyncClient | None = None,
        clock: Callable[[], float] | None = None,
        sleep: Callable[[float], Awaitable[None]] | None = None,
    ):
        """Initialize portal REST adapter.

        Args:
            base_url: REST root including the static webhook access path.
            request_timeout_seconds: HTTP request timeout in seconds.
            min_interval_seconds: Minimum gap between successful network calls.
            cache_ttl_seconds: Cached response lifetime.
            quota_retry_delay_seconds: Delay before retrying a quota-exceeded call.
            quota_retry_max_attempts: Retry cap for quota-exceeded calls; `None` retries without limit.
            http_client: Optional preconfigured async HTTP client.
            clock: Optional monotonic clock provider shared by cache and limiter.
            sleep: Optional coroutine used for every suspension.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when required config values are invalid.
        """

        normalized_base_url = base_url.strip()
        if not normalized_base_url:
            raise ValueError("base_url must not be blank")
        if request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be > 0")
        if quota_retry_delay_seconds < 0:
            raise ValueError("quota_retry_delay_seconds must be >= 0")
        if quota_retry_max_attempts is not None and quota_retry_max_attempts < 0:
            raise ValueError("quota_retry_max_attempts must be >= 0")

        self._base_url = normalized_base_url.rstrip("/")
        self._quota_retry_delay_seconds = float(quota_retry_delay_seconds)
        self._quota_retry_max_attempts = quota_retry_max_attempts
        self._clock = clock or time.monotonic
        self._sleep = sleep or asyncio.sleep
        self._cache = ResponseCache(ttl_seconds=cache_ttl_seconds, clock=self._clock)
        self._rate_limiter = MinimumIntervalRateLimiter(
            min_interval_seconds=min_interval_seconds,
            clock=self._clock,
            sleep=self._sleep,
        )
        self._dispatch_lock = asyncio.Lock()
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(
            timeout=request_timeout_seconds,
            headers={"Accept": "application/json", "User-Agent": self._USER_AGENT},
        )

    async def __aenter__(self) -> "PortalRestClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.rest_close()

    def rest_source_name(self) -> str:
        """Return stable adapter source label.

        Returns:
            str: Source identifier.
        """

        return "portal_rest"

    async def rest_call(self, method: str, parameters: RestCallParameters | None = None) -> Any:
        """Call one portal method with cache, rate limiting and quota retry.

        Args:
            method: Portal method name.
            parameters: Tagged call parameters.

        Returns:
            Any: Unwrapped result payload.

        Raises:
            ValueError: Raised when method is blank.
            RestTransportError: Raised for network failures and non-success HTTP status.
            RestRemoteError: Raised when the portal reports an application error.
            RestQuotaExceededError: Raised when quota retries are exhausted.
        """

        normalized_method = method.strip()
        if not normalized_method:
            raise ValueError("method must not be blank")

        call_parameters = parameters or RestCallParameters()
        cache_key = ResponseCache.cache_build_key(normalized_method, call_parameters)
        retry_count = 0

        while True:
            try:
                return await self._rest_call_once(
                    method=normalized_method,
                    parameters=call_parameters,
                    cache_key=cache_key,
                )
            except RestAdapterError as error:
                if not portal_error_is_quota_exceeded(error.error_code, str(error)):
                    raise
                if self._quota_retry_max_attempts is not None and retry_count >= self._quota_retry_max_attempts:
                    raise RestQuotaExceededError(
                        f"Portal quota exceeded after {retry_count} retries: method={normalized_method}",
                        error_code=error.error_code,
                    ) from error

                retry_count += 1
                logger.warning(
                    "Portal quota exceeded for method=%s, retry %d in %.1fs",
                    normalized_method,
                    retry_count,
                    self._quota_retry_delay_seconds,
                )
                await self._sleep(self._quota_retry_delay_seconds)

    def rest_cache_clear(self) -> None:
        """Drop every cached response."""

        self._cache.cache_clear()
        logger.info("Portal response cache cleared")

    async def rest_close(self) -> None:
        """Close the HTTP client when this adapter created it."""

        if self._owns_http_client:
            await self._http_client.aclose()

    async def _rest_call_once(self, method: str, parameters: RestCallParameters, cache_key: CacheKey) -> Any:
        """Serve one call from cache or perform one rate-limited network round trip.

        Args:
            method: Normalized portal method name.
            parameters: Tagged call parameters.
            cache_key: Precomputed cache key.

        Returns:
            Any: Unwrapped result payload.

        Raises:
            RestTransportError: Raised for network failures and non-success HTTP status.
            RestRemoteError: Raised when the portal reports an application error.
        """

        cached_entry = self._cache.cache_get(cache_key)
        if cached_entry is not None:
            logger.debug("Portal cache hit: method=%s", method)
            return cached_entry.payload

        async with self._dispatch_lock:
            cached_entry = self._cache.cache_get(cache_key)
            if cached_entry is not None:
                logger.debug("Portal cache hit after wait: method=%s", method)
                return cached_entry.payload

            await self._rate_limiter.limiter_wait()
            query_pairs = parameters.params_encode()
            logger.debug("Portal request: method=%s params=%s", method, query_pairs)
            body = await self._rest_http_get(url=f"{self._base_url}/{method}", query_pairs=query_pairs)
            self._rate_limiter.limiter_record_call()

            result = self._rest_unwrap_result(body)
            self._cache.cache_put(cache_key, result)
            return result

    async def _rest_http_get(self, url: str, query_pairs: list[tuple[str, str]]) -> Any:
        """Execute one HTTP GET and return the validated JSON body.

        Args:
            url: Method endpoint URL.
            query_pairs: Encoded query parameters.

        Returns:
            Any: Decoded JSON body without an error field.

        Raises:
            RestTransportError: Raised for network failures, non-success HTTP status or non-JSON body.
            RestRemoteError: Raised when the body carries an `error` field.
        """

        try:
            response = await self._http_client.get(url, params=query_pairs)
        except httpx.TimeoutException as error:
            raise RestTransportError("Portal transport request timed out") from error
        except httpx.HTTPError as error:
            raise RestTransportError("Portal transport request failed") from error

        body = self._rest_try_decode_json(response)
        if not response.is_success:
            error_code = self._rest_extract_error_code(body)
            message = f"Portal returned HTTP {response.status_code}"
            if error_code:
                message = f"{message}: {error_code}"
            raise RestTransportError(message, error_code=error_code, status_code=response.status_code)

        if body is None:
            raise RestTransportError(
                "Portal response body is not valid JSON",
                status_code=response.status_code,
            )

        error_code = self._rest_extract_error_code(body)
        if error_code:
            description = str(body.get(self._ERROR_DESCRIPTION_FIELD) or "").strip()
            raise RestRemoteError(
                description or portal_error_default_message(error_code, error_code),
                error_code=error_code,
            )

        return body

    def _rest_unwrap_result(self, body: Any) -> Any:
        """Return the envelope `result` field, or the raw body when absent."""

        if isinstance(body, dict) and body.get(self._RESULT_FIELD) is not None:
            return body[self._RESULT_FIELD]
        return body

    def _rest_extract_error_code(self, body: Any) -> str | None:
        """Return the envelope error code when the body carries one."""

        if not isinstance(body, dict):
            return None
        error_value = body.get(self._ERROR_FIELD)
        if error_value in (None, "", False):
            return None
        return str(error_value)

    def _rest_try_decode_json(self, response: httpx.Response) -> Any:
        """Best-effort JSON decode; returns None for empty or non-JSON bodies."""

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None
