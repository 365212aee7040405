"""Adapter layer package for portal REST integration boundaries."""

from .interfaces import PortalRestPort
from .parameters import RestCallParameters
from .rate_limiter import MinimumIntervalRateLimiter
from .response_cache import CacheEntry, ResponseCache
from .rest_client import PortalRestClient
from .rest_error_codes import PortalErrorCode, portal_error_default_message, portal_error_is_quota_exceeded
from .rest_errors import RestAdapterError, RestQuotaExceededError, RestRemoteError, RestTransportError

__all__ = [
	"CacheEntry",
	"MinimumIntervalRateLimiter",
	"PortalErrorCode",
	"PortalRestClient",
	"PortalRestPort",
	"ResponseCache",
	"RestAdapterError",
	"RestCallParameters",
	"RestQuotaExceededError",
	"RestRemoteError",
	"RestTransportError",
	"portal_error_default_message",
	"portal_error_is_quota_exceeded",
]
