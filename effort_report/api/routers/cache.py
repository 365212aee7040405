"""Cache API router exposing the refresh action."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from effort_report.adapters import PortalRestPort


def api_create_cache_router(rest_client: PortalRestPort) -> APIRouter:
    """Create cache router.

    Args:
        rest_client: Portal REST adapter owning the response cache.

    Returns:
        APIRouter: Router exposing `POST /cache/clear`.

    Raises:
        ValueError: Raised when rest_client is invalid.
    """

    if rest_client is None:
        raise ValueError("rest_client must not be None")

    router = APIRouter(prefix="/cache", tags=["cache"])

    @router.post("/clear")
    def api_cache_clear() -> JSONResponse:
        """Drop every cached portal response so the next report refetches."""

        rest_client.rest_cache_clear()
        return JSONResponse(content={"status": "ok", "cache": "cleared"}, status_code=status.HTTP_200_OK)

    return router
