"""Plan-vs-fact ledger aggregation grouped by project, user and task."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
import logging

from effort_report.domain import ProjectRecord, TaskRecord, UserRecord

from .interfaces import ReportRow, ReportRowKind
from .labels import (
    LABEL_UNTITLED,
    LABEL_USER_TOTAL,
    reports_collation_key,
    reports_hours,
    reports_project_name,
    reports_user_name,
)

logger = logging.getLogger(__name__)


@dataclass
class _TaskEffort:
    """Mutable per-task effort accumulator."""

    title: str
    logged_seconds: int = 0
    estimated_seconds: int = 0


@dataclass
class _UserGroup:
    """Mutable (project, user) group accumulator."""

    project_id: int
    project_name: str
    user_id: int
    user_name: str
    tasks: dict[int, _TaskEffort] = field(default_factory=dict)
    total_logged_seconds: int = 0
    total_estimated_seconds: int = 0


def reports_build_plan_fact_rows(
    tasks: Iterable[TaskRecord],
    users: Iterable[UserRecord],
    projects_by_id: Mapping[int, ProjectRecord],
) -> list[ReportRow]:
    """Aggregate completed tasks into detail and per-user summary rows.

    Tasks without a project or a responsible user are skipped. Each (project,
    user) group yields one detail row per distinct task followed by one summary
    row carrying the group totals.

    Args:
        tasks: Task records, already filtered to the completed status and window.
        users: User records used for name resolution.
        projects_by_id: Project lookup by id.

    Returns:
        list[ReportRow]: Rows ordered by project, user, summary-last and task
        title; an empty list when aggregation fails on malformed input.
    """

    try:
        return _plan_fact_aggregate(
            tasks=tasks,
            users=users,
            projects_by_id=projects_by_id,
        )
    except (AttributeError, KeyError, TypeError, ValueError):
        logger.exception("Plan-vs-fact aggregation failed; returning no rows")
        return []


def _plan_fact_aggregate(
    tasks: Iterable[TaskRecord],
    users: Iterable[UserRecord],
    projects_by_id: Mapping[int, ProjectRecord],
) -> list[ReportRow]:
    users_by_id = {user.user_id: user for user in users}
    groups: dict[tuple[int, int], _UserGroup] = {}

    for task in tasks:
        if task.group_id is None or task.responsible_id is None:
            continue

        user = users_by_id.get(task.responsible_id)
        group_key = (task.group_id, task.responsible_id)
        group = groups.get(group_key)
        if group is None:
            group = _UserGroup(
                project_id=task.group_id,
                project_name=reports_project_name(projects_by_id.get(task.group_id), task.group_id),
                user_id=task.responsible_id,
                user_name=reports_user_name(user),
            )
            groups[group_key] = group

        task_effort = group.tasks.get(task.task_id)
        if task_effort is None:
            task_effort = _TaskEffort(title=task.title or LABEL_UNTITLED)
            group.tasks[task.task_id] = task_effort

        task_effort.logged_seconds += task.logged_seconds
        task_effort.estimated_seconds += task.estimated_seconds
        group.total_logged_seconds += task.logged_seconds
        group.total_estimated_seconds += task.estimated_seconds

    rows: list[ReportRow] = []
    for group in groups.values():
        for task_id, task_effort in group.tasks.items():
            rows.append(
                ReportRow(
                    project_name=group.project_name,
                    user_name=group.user_name,
                    task_title=task_effort.title,
                    actual_hours=reports_hours(task_effort.logged_seconds),
                    planned_hours=reports_hours(task_effort.estimated_seconds),
                    row_kind=ReportRowKind.DETAIL,
                    project_id=group.project_id,
                    user_id=group.user_id,
                    task_id=task_id,
                )
            )
        rows.append(
            ReportRow(
                project_name=group.project_name,
                user_name=group.user_name,
                task_title=LABEL_USER_TOTAL,
                actual_hours=reports_hours(group.total_logged_seconds),
                planned_hours=reports_hours(group.total_estimated_seconds),
                row_kind=ReportRowKind.USER_SUMMARY,
                project_id=group.project_id,
                user_id=group.user_id,
            )
        )

    rows.sort(key=_plan_fact_sort_key)
    return rows


def _plan_fact_sort_key(row: ReportRow) -> tuple[object, ...]:
    # Ids follow names so equally named projects or users never interleave.
    return (
        reports_collation_key(row.project_name),
        row.project_id or 0,
        reports_collation_key(row.user_name),
        row.user_id or 0,
        row.is_summary,
        reports_collation_key(row.task_title),
        row.task_id or 0,
    )
