"""Catalog API router exposing report filter options."""

from __future__ import annotations

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from effort_report.adapters import RestAdapterError
from effort_report.queries import PortalQueryPort

from .responses import api_error_response


def api_create_catalog_router(query_service: PortalQueryPort) -> APIRouter:
    """Create catalog router listing project and department filter options.

    Args:
        query_service: Query service fetching the filter catalog.

    Returns:
        APIRouter: Router exposing `/catalog/filters`.

    Raises:
        ValueError: Raised when query_service is invalid.
    """

    if query_service is None:
        raise ValueError("query_service must not be None")

    router = APIRouter(prefix="/catalog", tags=["catalog"])

    @router.get("/filters")
    async def api_catalog_filters() -> JSONResponse:
        """Return project and department options as value/label pairs.

        Returns:
            JSONResponse: Options payload, or a `502` error envelope when the portal fails.
        """

        try:
            catalog = await query_service.queries_fetch_filter_catalog()
        except RestAdapterError as error:
            return api_error_response(
                code=error.error_code or "PORTAL_ERROR",
                message=str(error),
                status_code=status.HTTP_502_BAD_GATEWAY,
            )

        payload = {
            "projects": [
                api_catalog_option(project.project_id, project.name) for project in catalog.projects
            ],
            "departments": [
                api_catalog_option(department.department_id, department.name) for department in catalog.departments
            ],
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router


def api_catalog_option(item_id: int, name: str) -> dict[str, object]:
    """Build one select option, labelling unnamed items by id."""

    return {"value": item_id, "label": name or f"Item {item_id}"}


__all__ = ["api_catalog_option", "api_create_catalog_router"]
