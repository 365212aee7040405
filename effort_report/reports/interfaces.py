"""Typed interfaces for report aggregation and orchestration."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Protocol

from effort_report.domain import ProjectRecord

from .date_ranges import DateRange


class ReportRowKind(str, Enum):
    """Discriminator for report row variants."""

    DETAIL = "detail"
    USER_SUMMARY = "user_summary"
    PROJECT_TOTAL = "project_total"


@dataclass(frozen=True)
class ReportRow:
    """One normalized report row handed to presentation layers.

    Attributes:
        project_name: Project display name.
        user_name: Responsible user display name; blank on project totals.
        task_title: Task title or fixed summary label.
        actual_hours: Logged effort in hours.
        planned_hours: Estimated effort in hours.
        row_kind: Row variant discriminator.
        project_id: Project identifier when known.
        user_id: Responsible user identifier when known.
        task_id: Task identifier on detail rows.
        level: Nesting depth in the hierarchical view; `PROJECT_TOTAL_LEVEL` on totals.
        subtask_title: Level label in the hierarchical view.
    """

    project_name: str
    user_name: str
    task_title: str
    actual_hours: float
    planned_hours: float
    row_kind: ReportRowKind = ReportRowKind.DETAIL
    project_id: int | None = None
    user_id: int | None = None
    task_id: int | None = None
    level: int | None = None
    subtask_title: str = ""

    @property
    def is_summary(self) -> bool:
        return self.row_kind is ReportRowKind.USER_SUMMARY

    @property
    def is_project_total(self) -> bool:
        return self.row_kind is ReportRowKind.PROJECT_TOTAL


@dataclass(frozen=True)
class PlanFactFilters:
    """Caller-supplied filter set for the plan-vs-fact report.

    Attributes:
        period: Named period; `all` or blank disables date windowing.
        date_from: Custom lower bound used with period `custom`.
        date_to: Custom upper bound used with period `custom`.
        project_id: Optional project restriction.
        department_id: Optional department restriction for responsible users.
        status_code: Completed status code override.
        date_field: Task date field override used for the period window.
    """

    period: str | None = "month"
    date_from: date | str | None = None
    date_to: date | str | None = None
    project_id: int | None = None
    department_id: int | None = None
    status_code: int | None = None
    date_field: str | None = None


@dataclass(frozen=True)
class PlanFactReport:
    """Plan-vs-fact rows with the date window that was applied.

    Attributes:
        rows: Ordered report rows.
        date_range: Applied window, None when the period was `all`.
    """

    rows: tuple[ReportRow, ...]
    date_range: DateRange | None


@dataclass(frozen=True)
class ProjectResourceReport:
    """Project resource-tree rows with their resolved project.

    Attributes:
        rows: Ordered report rows ending with the project total.
        project: Resolved or synthesized project record.
        detail_level: Applied hierarchy depth.
    """

    rows: tuple[ReportRow, ...]
    project: ProjectRecord
    detail_level: int


class ReportPort(Protocol):
    """Port definition for report orchestration."""

    async def report_plan_fact(self, filters: PlanFactFilters) -> PlanFactReport:
        """Fetch and aggregate the plan-vs-fact report.

        Raises:
            RestAdapterError: Raised when a portal call fails.
        """

    async def report_project_resources(self, project_id: int, detail_level: int) -> ProjectResourceReport:
        """Fetch and aggregate the resource tree of one project.

        Raises:
            ValueError: Raised when detail_level is negative.
            RestAdapterError: Raised when a portal call fails.
        """
