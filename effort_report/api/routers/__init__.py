"""API router package for endpoint composition."""

from .cache import api_create_cache_router
from .catalog import api_catalog_option, api_create_catalog_router
from .health import api_create_health_router
from .reports import api_create_reports_router
from .responses import api_error_response, api_serialize_report_row

__all__ = [
	"api_catalog_option",
	"api_create_cache_router",
	"api_create_catalog_router",
	"api_create_health_router",
	"api_create_reports_router",
	"api_error_response",
	"api_serialize_report_row",
]
