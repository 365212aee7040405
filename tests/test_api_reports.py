"""Regression tests for report and catalog API endpoints."""

from __future__ import annotations

from datetime import date

from fastapi.testclient import TestClient

from effort_report.adapters import RestQuotaExceededError, RestRemoteError
from effort_report.api.application import create_api_application
from effort_report.config import AppSettings
from effort_report.domain import DepartmentRecord, ProjectRecord
from effort_report.queries import FilterCatalog
from effort_report.reports import (
    DateRange,
    PlanFactFilters,
    PlanFactReport,
    ProjectResourceReport,
    ReportRow,
    ReportRowKind,
)


class _RestClientStub:
    """REST port stub for app factory dependencies."""

    def rest_source_name(self) -> str:
        return "portal_rest"

    async def rest_call(self, method, parameters=None):
        raise AssertionError(f"unexpected rest_call for {method}")

    def rest_cache_clear(self) -> None:
        return None


class _CatalogQueryService:
    """Query stub returning a fixed filter catalog."""

    def __init__(self, failure: Exception | None = None) -> None:
        self._failure = failure

    async def queries_check_connectivity(self) -> int:
        return 1

    async def queries_fetch_filter_catalog(self) -> FilterCatalog:
        if self._failure is not None:
            raise self._failure
        return FilterCatalog(
            projects=(ProjectRecord(project_id=10, name="Proj"), ProjectRecord(project_id=11, name="")),
            departments=(DepartmentRecord(department_id=3, name="Sales"),),
        )


class _ReportServiceStub:
    """Report stub recording requests and returning fixed rows."""

    def __init__(self, failure: Exception | None = None) -> None:
        self._failure = failure
        self.plan_fact_filters: list[PlanFactFilters] = []
        self.resource_calls: list[tuple[int, int]] = []

    async def report_plan_fact(self, filters: PlanFactFilters) -> PlanFactReport:
        self.plan_fact_filters.append(filters)
        if self._failure is not None:
            raise self._failure
        rows = (
            ReportRow(
                project_name="Proj",
                user_name="Ann K",
                task_title="A",
                actual_hours=2.0,
                planned_hours=1.0,
                project_id=10,
                user_id=5,
                task_id=1,
            ),
            ReportRow(
                project_name="Proj",
                user_name="Ann K",
                task_title="Total across all tasks",
                actual_hours=2.0,
                planned_hours=1.0,
                row_kind=ReportRowKind.USER_SUMMARY,
                project_id=10,
                user_id=5,
            ),
        )
        return PlanFactReport(rows=rows, date_range=DateRange(date(2024, 5, 1), date(2024, 5, 31)))

    async def report_project_resources(self, project_id: int, detail_level: int) -> ProjectResourceReport:
        self.resource_calls.append((project_id, detail_level))
        if detail_level > 5:
            raise ValueError("detail_level too deep for stub")
        total_row = ReportRow(
            project_name="Proj",
            user_name="",
            task_title="Project total",
            actual_hours=0.0,
            planned_hours=0.0,
            row_kind=ReportRowKind.PROJECT_TOTAL,
            project_id=project_id,
            level=999,
        )
        return ProjectResourceReport(
            rows=(total_row,),
            project=ProjectRecord(project_id=project_id, name="Proj"),
            detail_level=detail_level,
        )


def _build_client(
    report_service: _ReportServiceStub,
    query_service: _CatalogQueryService | None = None,
) -> TestClient:
    settings = AppSettings(portal_rest_url="https://portal.test/rest/1/hook-token")
    application = create_api_application(
        settings=settings,
        rest_client=_RestClientStub(),
        query_service=query_service or _CatalogQueryService(),
        report_service=report_service,
    )
    return TestClient(application)


def test_api_plan_fact_returns_serialized_rows_and_window() -> None:
    """Serialize plan-vs-fact rows and the applied date window.

    Returns:
        None: Assertions validate payload envelope and forwarded filters.

    Raises:
        AssertionError: Raised when payload or filter forwarding is incorrect.
    """

    report_service = _ReportServiceStub()

    response = _build_client(report_service).get(
        "/reports/plan-fact",
        params={"period": "custom", "date_from": "2024-05-01", "date_to": "2024-05-31", "project_id": 10},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["returned"] == 2
    assert payload["date_range"] == {"date_from": "2024-05-01", "date_to": "2024-05-31"}
    assert payload["items"][0]["actual_hours"] == 2.0
    assert payload["items"][0]["row_kind"] == "detail"
    assert payload["items"][1]["is_summary"] is True
    forwarded_filters = report_service.plan_fact_filters[0]
    assert forwarded_filters.period == "custom"
    assert forwarded_filters.project_id == 10
    assert forwarded_filters.department_id is None


def test_api_plan_fact_defaults_period_from_settings() -> None:
    """Forward the configured default period when none is given."""

    report_service = _ReportServiceStub()

    response = _build_client(report_service).get("/reports/plan-fact")

    assert response.status_code == 200
    assert report_service.plan_fact_filters[0].period == "month"


def test_api_plan_fact_maps_portal_errors_to_bad_gateway() -> None:
    """Return 502 with the portal error code when the report fetch fails."""

    report_service = _ReportServiceStub(failure=RestQuotaExceededError("quota", error_code="QUERY_LIMIT_EXCEEDED"))

    response = _build_client(report_service).get("/reports/plan-fact")

    assert response.status_code == 502
    assert response.json() == {"status": "error", "code": "QUERY_LIMIT_EXCEEDED", "message": "quota"}


def test_api_plan_fact_maps_invalid_dates_to_bad_request() -> None:
    """Return 400 when the report rejects a filter value."""

    report_service = _ReportServiceStub(failure=ValueError("invalid custom date bound=31/05/2024"))

    response = _build_client(report_service).get("/reports/plan-fact", params={"period": "custom"})

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_FILTER"


def test_api_project_resources_requires_project_id() -> None:
    """Return 400 PROJECT_REQUIRED without calling the report service."""

    report_service = _ReportServiceStub()

    response = _build_client(report_service).get("/reports/project-resources")

    assert response.status_code == 400
    assert response.json()["code"] == "PROJECT_REQUIRED"
    assert report_service.resource_calls == []


def test_api_project_resources_uses_default_detail_level() -> None:
    """Apply the configured depth and return the total row."""

    report_service = _ReportServiceStub()

    response = _build_client(report_service).get("/reports/project-resources", params={"project_id": 10})

    assert response.status_code == 200
    payload = response.json()
    assert report_service.resource_calls == [(10, 2)]
    assert payload["project"] == {"project_id": 10, "name": "Proj"}
    assert payload["items"][-1]["is_project_total"] is True
    assert payload["items"][-1]["level"] == 999


def test_api_project_resources_rejects_negative_detail_level() -> None:
    """Reject negative depth at query validation."""

    response = _build_client(_ReportServiceStub()).get(
        "/reports/project-resources",
        params={"project_id": 10, "detail_level": -1},
    )

    assert response.status_code == 422


def test_api_report_export_is_not_implemented() -> None:
    """Answer export requests with 501."""

    response = _build_client(_ReportServiceStub()).get("/reports/plan-fact/export")

    assert response.status_code == 501
    assert response.json()["code"] == "EXPORT_NOT_IMPLEMENTED"


def test_api_catalog_filters_returns_value_label_options() -> None:
    """List project and department options, labelling unnamed items by id."""

    response = _build_client(_ReportServiceStub()).get("/catalog/filters")

    assert response.status_code == 200
    assert response.json() == {
        "projects": [{"value": 10, "label": "Proj"}, {"value": 11, "label": "Item 11"}],
        "departments": [{"value": 3, "label": "Sales"}],
    }


def test_api_catalog_filters_maps_portal_errors_to_bad_gateway() -> None:
    """Return 502 when the catalog fetch fails."""

    query_service = _CatalogQueryService(failure=RestRemoteError("Access denied.", error_code="ACCESS_DENIED"))

    response = _build_client(_ReportServiceStub(), query_service=query_service).get("/catalog/filters")

    assert response.status_code == 502
    assert response.json()["code"] == "ACCESS_DENIED"
