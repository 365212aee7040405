"""Report API router composition for plan-vs-fact and project resource reads."""

from __future__ import annotations

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from effort_report.adapters import RestAdapterError
from effort_report.config import AppSettings
from effort_report.reports import PlanFactFilters, ReportPort

from .responses import api_error_response, api_serialize_report_row


def api_create_reports_router(settings: AppSettings, report_service: ReportPort) -> APIRouter:
    """Create report router exposing both report shapes.

    Args:
        settings: Runtime settings used for filter defaults.
        report_service: Report orchestration service.

    Returns:
        APIRouter: Router exposing report endpoints.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")
    if report_service is None:
        raise ValueError("report_service must not be None")

    router = APIRouter(prefix="/reports", tags=["reports"])

    @router.get("/plan-fact")
    async def api_report_plan_fact(
        period: str = Query(default=settings.report_default_period),
        date_from: str | None = Query(default=None),
        date_to: str | None = Query(default=None),
        project_id: int | None = Query(default=None),
        department_id: int | None = Query(default=None),
        status_code: int | None = Query(default=None),
        date_field: str | None = Query(default=None),
    ) -> JSONResponse:
        """Return plan-vs-fact rows for the selected filters.

        Args:
            period: `week`, `month`, `quarter`, `year`, `custom` or `all`.
            date_from: Custom lower bound in ISO date form.
            date_to: Custom upper bound in ISO date form.
            project_id: Optional project restriction.
            department_id: Optional department restriction.
            status_code: Optional completed status override.
            date_field: Optional windowed date field override.

        Returns:
            JSONResponse: Rows envelope, `400` for invalid dates, `502` for portal failures.
        """

        filters = PlanFactFilters(
            period=period,
            date_from=date_from,
            date_to=date_to,
            project_id=project_id,
            department_id=department_id,
            status_code=status_code,
            date_field=date_field,
        )
        try:
            report = await report_service.report_plan_fact(filters)
        except ValueError as error:
            return api_error_response(code="INVALID_FILTER", message=str(error), status_code=status.HTTP_400_BAD_REQUEST)
        except RestAdapterError as error:
            return api_error_response(
                code=error.error_code or "PORTAL_ERROR",
                message=str(error),
                status_code=status.HTTP_502_BAD_GATEWAY,
            )

        applied_range = None
        if report.date_range is not None:
            applied_from, applied_to = report.date_range.date_range_iso()
            applied_range = {"date_from": applied_from, "date_to": applied_to}

        payload = {
            "items": [api_serialize_report_row(report_row) for report_row in report.rows],
            "returned": len(report.rows),
            "filters": {
                "period": period,
                "project_id": project_id,
                "department_id": department_id,
                "status_code": status_code,
                "date_field": date_field,
            },
            "date_range": applied_range,
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.get("/project-resources")
    async def api_report_project_resources(
        project_id: int | None = Query(default=None),
        detail_level: int = Query(default=settings.report_default_detail_level, ge=0),
    ) -> JSONResponse:
        """Return the hierarchical resource rows of one project.

        Args:
            project_id: Required project identifier.
            detail_level: Deepest hierarchy level emitted.

        Returns:
            JSONResponse: Rows envelope, `400` without a project, `502` for portal failures.
        """

        if project_id is None:
            return api_error_response(
                code="PROJECT_REQUIRED",
                message="project_id is required for the project resource report",
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        try:
            report = await report_service.report_project_resources(project_id=project_id, detail_level=detail_level)
        except ValueError as error:
            return api_error_response(code="INVALID_FILTER", message=str(error), status_code=status.HTTP_400_BAD_REQUEST)
        except RestAdapterError as error:
            return api_error_response(
                code=error.error_code or "PORTAL_ERROR",
                message=str(error),
                status_code=status.HTTP_502_BAD_GATEWAY,
            )

        payload = {
            "items": [api_serialize_report_row(report_row) for report_row in report.rows],
            "returned": len(report.rows),
            "project": {
                "project_id": report.project.project_id,
                "name": report.project.name,
            },
            "detail_level": report.detail_level,
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.get("/{report_name}/export")
    def api_report_export(report_name: str) -> JSONResponse:
        """Reject spreadsheet export requests; rows are served as JSON only."""

        return api_error_response(
            code="EXPORT_NOT_IMPLEMENTED",
            message=f"export is not available for report={report_name}",
            status_code=status.HTTP_501_NOT_IMPLEMENTED,
        )

    return router


__all__ = ["api_create_reports_router"]
