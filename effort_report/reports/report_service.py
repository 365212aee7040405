"""Report orchestration: portal fetches feeding the pure aggregators."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import date
import logging
from typing import Final

from effort_report.domain import ProjectRecord
from effort_report.queries import FilterMapping, PortalQueryPort

from .date_ranges import DateRange, reports_resolve_date_range
from .interfaces import PlanFactFilters, PlanFactReport, ProjectResourceReport, ReportPort
from .labels import reports_project_name
from .plan_fact import reports_build_plan_fact_rows
from .resource_tree import reports_build_project_resource_rows

logger = logging.getLogger(__name__)

PLAN_FACT_TASK_SELECT: Final[tuple[str, ...]] = (
    "ID",
    "TITLE",
    "GROUP_ID",
    "RESPONSIBLE_ID",
    "TIME_ESTIMATE",
    "TIME_SPENT_IN_LOGS",
    "CLOSED_DATE",
    "STATUS",
)
PLAN_FACT_USER_SELECT: Final[tuple[str, ...]] = ("ID", "NAME", "LAST_NAME", "UF_DEPARTMENT")
UNBOUNDED_PERIODS: Final[frozenset[str]] = frozenset({"", "all"})


class ReportService(ReportPort):
    """Fetch portal entities and build both report shapes."""

    def __init__(
        self,
        query_service: PortalQueryPort,
        completed_status_code: int = 5,
        closed_date_field: str = "CLOSED_DATE",
        today_provider: Callable[[], date] | None = None,
    ):
        """Initialize report service dependencies.

        Args:
            query_service: Typed portal query service.
            completed_status_code: Default task status treated as completed.
            closed_date_field: Default task date field windowed by the period filter.
            today_provider: Optional reference-date source; defaults to `date.today`.

        Raises:
            ValueError: Raised when dependencies are invalid.
        """

        if query_service is None:
            raise ValueError("query_service must not be None")
        if not closed_date_field.strip():
            raise ValueError("closed_date_field must not be blank")

        self._query_service = query_service
        self._completed_status_code = completed_status_code
        self._closed_date_field = closed_date_field.strip()
        self._today_provider = today_provider or date.today

    async def report_plan_fact(self, filters: PlanFactFilters) -> PlanFactReport:
        """Fetch completed tasks in the period and aggregate plan-vs-fact rows.

        Args:
            filters: Period, project, department and status selection.

        Returns:
            PlanFactReport: Ordered rows plus the applied date window.

        Raises:
            ValueError: Raised when a custom date bound is invalid.
            RestAdapterError: Raised when a portal call fails.
        """

        date_range = self._report_resolve_window(filters)
        task_filter = self._report_build_task_filter(filters, date_range)

        user_filter: dict[str, int] = {}
        if filters.department_id is not None:
            user_filter["UF_DEPARTMENT"] = filters.department_id

        try:
            tasks = await self._query_service.queries_fetch_tasks(
                filter_fields=task_filter,
                select_fields=PLAN_FACT_TASK_SELECT,
            )
            project_ids = sorted({task.group_id for task in tasks if task.group_id is not None})
            users, *projects = await asyncio.gather(
                self._query_service.queries_fetch_users(
                    filter_fields=user_filter,
                    select_fields=PLAN_FACT_USER_SELECT,
                ),
                *(self._report_fetch_project(project_id) for project_id in project_ids),
            )
        except Exception:
            logger.exception("Plan-vs-fact report fetch failed")
            raise

        projects_by_id = {
            project_id: project for project_id, project in zip(project_ids, projects) if project is not None
        }
        rows = reports_build_plan_fact_rows(
            tasks=tasks,
            users=users,
            projects_by_id=projects_by_id,
        )
        logger.info("Plan-vs-fact report built with %d rows from %d tasks", len(rows), len(tasks))
        return PlanFactReport(rows=tuple(rows), date_range=date_range)

    async def report_project_resources(self, project_id: int, detail_level: int) -> ProjectResourceReport:
        """Fetch every task of one project and flatten its hierarchy.

        Args:
            project_id: Project identifier.
            detail_level: Deepest hierarchy level emitted.

        Returns:
            ProjectResourceReport: Tree rows ending with the project total.

        Raises:
            ValueError: Raised when detail_level is negative.
            RestAdapterError: Raised when a portal call fails.
        """

        if detail_level < 0:
            raise ValueError("detail_level must be >= 0")

        try:
            tasks, project, users = await asyncio.gather(
                self._query_service.queries_fetch_tasks(filter_fields={"GROUP_ID": project_id}),
                self._report_fetch_project(project_id),
                self._query_service.queries_fetch_users(),
            )
        except Exception:
            logger.exception("Project resource report fetch failed for project_id=%s", project_id)
            raise

        resolved_project = project or ProjectRecord(
            project_id=project_id,
            name=reports_project_name(None, project_id),
        )
        rows = reports_build_project_resource_rows(
            tasks=tasks,
            users=users,
            project=resolved_project,
            detail_level=detail_level,
        )
        return ProjectResourceReport(rows=tuple(rows), project=resolved_project, detail_level=detail_level)

    def _report_resolve_window(self, filters: PlanFactFilters) -> DateRange | None:
        normalized_period = (filters.period or "").strip().lower()
        if normalized_period in UNBOUNDED_PERIODS:
            return None
        return reports_resolve_date_range(
            period=normalized_period,
            custom_from=filters.date_from,
            custom_to=filters.date_to,
            today=self._today_provider(),
        )

    def _report_build_task_filter(self, filters: PlanFactFilters, date_range: DateRange | None) -> FilterMapping:
        status_code = self._completed_status_code if filters.status_code is None else filters.status_code
        date_field = (filters.date_field or "").strip() or self._closed_date_field

        task_filter: dict[str, str | int] = {"STATUS": status_code}
        if filters.project_id is not None:
            task_filter["GROUP_ID"] = filters.project_id
        if date_range is not None:
            iso_from, iso_to = date_range.date_range_iso()
            task_filter[f">{date_field}"] = f"{iso_from} 00:00:00"
            task_filter[f"<{date_field}"] = f"{iso_to} 23:59:59"
        return task_filter

    async def _report_fetch_project(self, project_id: int) -> ProjectRecord | None:
        projects = await self._query_service.queries_fetch_projects(filter_fields={"ID": project_id})
        return projects[0] if projects else None


__all__ = ["PLAN_FACT_TASK_SELECT", "PLAN_FACT_USER_SELECT", "ReportService"]
