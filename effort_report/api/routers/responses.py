"""Shared JSON response builders for API routers."""

from fastapi.responses import JSONResponse

from effort_report.reports import ReportRow


def api_error_response(code: str, message: str, status_code: int) -> JSONResponse:
    """Build the uniform error envelope.

    Args:
        code: Stable machine-readable error code.
        message: Human-readable error description.
        status_code: HTTP status code.

    Returns:
        JSONResponse: Error envelope payload.
    """

    payload = {
        "status": "error",
        "code": code,
        "message": message,
    }
    return JSONResponse(content=payload, status_code=status_code)


def api_serialize_report_row(report_row: ReportRow) -> dict[str, object]:
    """Serialize one typed report row to JSON payload.

    Args:
        report_row: Typed report row.

    Returns:
        dict[str, object]: JSON-serializable row payload.
    """

    return {
        "project_name": report_row.project_name,
        "user_name": report_row.user_name,
        "task_title": report_row.task_title,
        "subtask_title": report_row.subtask_title,
        "actual_hours": report_row.actual_hours,
        "planned_hours": report_row.planned_hours,
        "row_kind": report_row.row_kind.value,
        "is_summary": report_row.is_summary,
        "is_project_total": report_row.is_project_total,
        "project_id": report_row.project_id,
        "user_id": report_row.user_id,
        "task_id": report_row.task_id,
        "level": report_row.level,
    }


__all__ = ["api_error_response", "api_serialize_report_row"]
