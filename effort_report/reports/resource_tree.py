"""Depth-bounded project task hierarchy with project-wide rollup."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
import logging

from effort_report.domain import ProjectRecord, TaskRecord, UserRecord

from .interfaces import ReportRow, ReportRowKind
from .labels import (
    LABEL_PROJECT_TOTAL,
    LABEL_UNTITLED,
    PROJECT_TOTAL_LEVEL,
    reports_hours,
    reports_level_label,
    reports_user_name,
)

logger = logging.getLogger(__name__)


@dataclass
class _TaskNode:
    """Task plus its attached children in the project forest."""

    task: TaskRecord
    children: list["_TaskNode"] = field(default_factory=list)


def reports_build_project_resource_rows(
    tasks: Iterable[TaskRecord],
    users: Iterable[UserRecord],
    project: ProjectRecord,
    detail_level: int,
) -> list[ReportRow]:
    """Flatten a project's task forest down to `detail_level` and append the project total.

    Args:
        tasks: Every task of the project, any status.
        users: User records used for name resolution.
        project: Resolved project record.
        detail_level: Deepest hierarchy level emitted; 0 emits roots only.

    Returns:
        list[ReportRow]: Pre-order rows followed by exactly one project-total row;
        an empty list when aggregation fails on malformed input.

    Raises:
        ValueError: Raised when detail_level is negative.
    """

    if detail_level < 0:
        raise ValueError("detail_level must be >= 0")

    try:
        return _resource_tree_aggregate(
            tasks=list(tasks),
            users_by_id={user.user_id: user for user in users},
            project=project,
            detail_level=detail_level,
        )
    except (AttributeError, KeyError, TypeError, ValueError):
        logger.exception("Project resource aggregation failed; returning no rows")
        return []


def _resource_tree_aggregate(
    tasks: list[TaskRecord],
    users_by_id: Mapping[int, UserRecord],
    project: ProjectRecord,
    detail_level: int,
) -> list[ReportRow]:
    nodes: dict[int, _TaskNode] = {}
    for task in tasks:
        if task.task_id not in nodes:
            nodes[task.task_id] = _TaskNode(task=task)

    roots: list[_TaskNode] = []
    for node in nodes.values():
        parent_id = node.task.parent_id
        if parent_id is None or parent_id == node.task.task_id or parent_id not in nodes:
            roots.append(node)
        else:
            nodes[parent_id].children.append(node)

    total_logged_seconds = sum(node.task.logged_seconds for node in nodes.values())
    total_estimated_seconds = sum(node.task.estimated_seconds for node in nodes.values())

    rows: list[ReportRow] = []

    def _flatten(level_nodes: list[_TaskNode], level: int) -> None:
        for node in level_nodes:
            if level <= detail_level:
                rows.append(_resource_tree_build_row(node.task, level, users_by_id, project))
            # Expansion stops one level before emission does.
            if node.children and level < detail_level:
                _flatten(node.children, level + 1)

    _flatten(roots, 0)

    rows.append(
        ReportRow(
            project_name=project.name,
            user_name="",
            task_title=LABEL_PROJECT_TOTAL,
            actual_hours=reports_hours(total_logged_seconds),
            planned_hours=reports_hours(total_estimated_seconds),
            row_kind=ReportRowKind.PROJECT_TOTAL,
            project_id=project.project_id,
            level=PROJECT_TOTAL_LEVEL,
        )
    )

    return sorted(rows, key=lambda row: row.is_project_total)


def _resource_tree_build_row(
    task: TaskRecord,
    level: int,
    users_by_id: Mapping[int, UserRecord],
    project: ProjectRecord,
) -> ReportRow:
    user = users_by_id.get(task.responsible_id) if task.responsible_id is not None else None
    return ReportRow(
        project_name=_resource_tree_project_name(task, project),
        user_name=reports_user_name(user),
        task_title=task.title or LABEL_UNTITLED,
        actual_hours=reports_hours(task.logged_seconds),
        planned_hours=reports_hours(task.estimated_seconds),
        row_kind=ReportRowKind.DETAIL,
        project_id=task.group_id,
        user_id=task.responsible_id,
        task_id=task.task_id,
        level=level,
        subtask_title=reports_level_label(level),
    )


def _resource_tree_project_name(task: TaskRecord, project: ProjectRecord) -> str:
    if task.group_name:
        return task.group_name
    if task.group_id is None or task.group_id == project.project_id:
        return project.name
    return f"Project {task.group_id}"
