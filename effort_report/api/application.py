"""FastAPI application factory for the report service.

This module defines API application composition used by the runtime.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from effort_report.adapters import PortalRestPort
from effort_report.config import AppSettings
from effort_report.queries import PortalQueryPort
from effort_report.reports import ReportPort

from .routers import (
    api_create_cache_router,
    api_create_catalog_router,
    api_create_health_router,
    api_create_reports_router,
)


def create_api_application(
    settings: AppSettings,
    rest_client: PortalRestPort,
    query_service: PortalQueryPort,
    report_service: ReportPort,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings used for runtime metadata and defaults.
        rest_client: Portal REST adapter; closed on application shutdown when it supports it.
        query_service: Typed portal query service for health and catalog endpoints.
        report_service: Report orchestration service.

    Returns:
        FastAPI: Framework application instance with every router mounted.
    """

    @asynccontextmanager
    async def api_lifespan(_: FastAPI) -> AsyncIterator[None]:
        yield
        rest_close = getattr(rest_client, "rest_close", None)
        if rest_close is not None:
            await rest_close()

    application = FastAPI(title="Effort Report", lifespan=api_lifespan)

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return a minimal foundation response for bootstrap verification.

        Returns:
            dict[str, str]: Service name, readiness and environment label.
        """

        return {
            "service": "effort-report",
            "status": "foundation-ready",
            "environment": settings.environment_name,
        }

    application.include_router(api_create_health_router(rest_client=rest_client, query_service=query_service))
    application.include_router(api_create_catalog_router(query_service=query_service))
    application.include_router(api_create_cache_router(rest_client=rest_client))
    application.include_router(api_create_reports_router(settings=settings, report_service=report_service))

    return application
