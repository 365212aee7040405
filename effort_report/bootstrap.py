"""Application bootstrap wiring for startup validation and dependency assembly."""

from dataclasses import dataclass

from fastapi import FastAPI

from effort_report.adapters import PortalRestClient
from effort_report.api import create_api_application
from effort_report.config import AppSettings, config_configure_logging, config_load_settings
from effort_report.queries import PortalQueryService
from effort_report.reports import ReportService


@dataclass(frozen=True)
class RuntimeServices:
    """Wired runtime dependencies shared by HTTP and command-line surfaces.

    Attributes:
        settings: Validated application settings.
        rest_client: Portal REST adapter owning the cache and rate limiter.
        query_service: Typed portal query service.
        report_service: Report orchestration service.
    """

    settings: AppSettings
    rest_client: PortalRestClient
    query_service: PortalQueryService
    report_service: ReportService


def bootstrap_create_services(settings: AppSettings | None = None) -> RuntimeServices:
    """Validate configuration, configure logging and wire runtime dependencies.

    Args:
        settings: Optional pre-loaded settings; loaded from the environment when omitted.

    Returns:
        RuntimeServices: Fully wired dependency set.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    config_configure_logging(level=resolved_settings.log_level)
    rest_client = PortalRestClient(
        base_url=resolved_settings.portal_rest_url,
        request_timeout_seconds=resolved_settings.rest_request_timeout_seconds,
        min_interval_seconds=resolved_settings.rest_min_interval_seconds,
        cache_ttl_seconds=resolved_settings.rest_cache_ttl_seconds,
        quota_retry_delay_seconds=resolved_settings.rest_quota_retry_delay_seconds,
        quota_retry_max_attempts=resolved_settings.rest_quota_retry_max_attempts,
    )
    query_service = PortalQueryService(
        rest_client=rest_client,
        task_page_size=resolved_settings.task_page_size,
        task_fetch_ceiling=resolved_settings.task_fetch_ceiling,
    )
    report_service = ReportService(
        query_service=query_service,
        completed_status_code=resolved_settings.report_completed_status_code,
        closed_date_field=resolved_settings.report_closed_date_field,
    )
    return RuntimeServices(
        settings=resolved_settings,
        rest_client=rest_client,
        query_service=query_service,
        report_service=report_service,
    )


def bootstrap_create_application(settings: AppSettings | None = None) -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Args:
        settings: Optional pre-loaded settings; loaded from the environment when omitted.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    services = bootstrap_create_services(settings=settings)
    return create_api_application(
        settings=services.settings,
        rest_client=services.rest_client,
        query_service=services.query_service,
        report_service=services.report_service,
    )
