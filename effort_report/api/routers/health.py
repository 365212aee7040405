"""Health endpoint router composition for app and portal checks."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from effort_report.adapters import PortalRestPort, RestAdapterError
from effort_report.domain import HealthStatus
from effort_report.queries import PortalQueryPort


def api_create_health_router(rest_client: PortalRestPort, query_service: PortalQueryPort) -> APIRouter:
    """Create health-check router with app and portal connectivity status.

    Args:
        rest_client: Portal REST adapter, used for the target label.
        query_service: Query service issuing the connectivity probe.

    Returns:
        APIRouter: Router exposing `/health` endpoint.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if rest_client is None:
        raise ValueError("rest_client must not be None")
    if query_service is None:
        raise ValueError("query_service must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    async def api_health_status() -> JSONResponse:
        """Return application and portal health state.

        Returns:
            JSONResponse: `200 ok` when the probe succeeds, `503 degraded` otherwise.
        """

        try:
            probe_count = await query_service.queries_check_connectivity()
            portal_health = HealthStatus(status="up", detail=f"probe returned {probe_count} user(s)")
            payload = {
                "status": "ok",
                "app": "up",
                "portal": portal_health.status,
                "detail": portal_health.detail,
                "target": rest_client.rest_source_name(),
            }
            return JSONResponse(content=payload, status_code=status.HTTP_200_OK)
        except RestAdapterError as error:
            payload = {
                "status": "degraded",
                "app": "up",
                "portal": "down",
                "detail": str(error),
                "code": error.error_code,
                "target": rest_client.rest_source_name(),
            }
            return JSONResponse(content=payload, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

    return router
