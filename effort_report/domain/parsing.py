"""Lenient conversion of raw portal payloads into typed domain records.

Malformed or missing fields never raise: numbers fall back to zero or None and
text falls back to an empty string, so a partially broken payload still
produces a report.
"""

from __future__ import annotations

from collections.abc import Mapping
import math
import re
from typing import Any

from .models import DepartmentRecord, ProjectRecord, TaskRecord, UserRecord

_LEADING_INTEGER_PATTERN = re.compile(r"^\s*([+-]?\d+)")
_TRUE_FLAGS = frozenset({"y", "yes", "true", "1"})
_FALSE_FLAGS = frozenset({"n", "no", "false", "0"})


def domain_parse_int_lenient(value: Any) -> int | None:
    """Parse the leading integer of a value.

    Strings are read up to the first non-digit (`"3600.5"` -> 3600,
    `"12abc"` -> 12); floats are truncated.

    Args:
        value: Raw value from a portal payload.

    Returns:
        int | None: Parsed integer, or None when no integer can be read.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(value)
    if isinstance(value, str):
        match = _LEADING_INTEGER_PATTERN.match(value)
        if match is None:
            return None
        return int(match.group(1))
    return None


def domain_parse_seconds(value: Any) -> int:
    """Parse an effort value in seconds, treating unparseable input as zero."""

    parsed_value = domain_parse_int_lenient(value)
    return parsed_value if parsed_value is not None else 0


def domain_parse_identifier(value: Any) -> int | None:
    """Parse an identifier; zero and negative values mean "no reference"."""

    parsed_value = domain_parse_int_lenient(value)
    if parsed_value is None or parsed_value <= 0:
        return None
    return parsed_value


def domain_parse_task(raw_task: Mapping[str, Any]) -> TaskRecord | None:
    """Convert one `tasks.task.list` entry into a task record.

    Both camelCase (`groupId`) and upper-snake (`GROUP_ID`) keys are accepted.

    Args:
        raw_task: Raw task mapping.

    Returns:
        TaskRecord | None: Parsed record, or None when the entry has no usable id.
    """

    if not isinstance(raw_task, Mapping):
        return None

    task_id = domain_parse_identifier(_domain_pick(raw_task, "id", "ID"))
    if task_id is None:
        return None

    group_name = None
    embedded_group = raw_task.get("group")
    if isinstance(embedded_group, Mapping):
        group_name = _domain_text_or_none(embedded_group.get("name"))

    return TaskRecord(
        task_id=task_id,
        title=_domain_text(_domain_pick(raw_task, "title", "TITLE")),
        group_id=domain_parse_identifier(_domain_pick(raw_task, "groupId", "GROUP_ID")),
        group_name=group_name,
        parent_id=domain_parse_identifier(_domain_pick(raw_task, "parentId", "PARENT_ID")),
        responsible_id=domain_parse_identifier(_domain_pick(raw_task, "responsibleId", "RESPONSIBLE_ID")),
        estimated_seconds=domain_parse_seconds(_domain_pick(raw_task, "timeEstimate", "TIME_ESTIMATE")),
        logged_seconds=domain_parse_seconds(_domain_pick(raw_task, "timeSpentInLogs", "TIME_SPENT_IN_LOGS")),
        status=domain_parse_int_lenient(_domain_pick(raw_task, "status", "STATUS")),
        created_date=_domain_text_or_none(_domain_pick(raw_task, "createdDate", "CREATED_DATE")),
        closed_date=_domain_text_or_none(_domain_pick(raw_task, "closedDate", "CLOSED_DATE")),
        deadline=_domain_text_or_none(_domain_pick(raw_task, "deadline", "DEADLINE")),
    )


def domain_parse_user(raw_user: Mapping[str, Any]) -> UserRecord | None:
    """Convert one `user.get` entry into a user record.

    Args:
        raw_user: Raw user mapping.

    Returns:
        UserRecord | None: Parsed record, or None when the entry has no usable id.
    """

    if not isinstance(raw_user, Mapping):
        return None

    user_id = domain_parse_identifier(raw_user.get("ID"))
    if user_id is None:
        return None

    raw_departments = raw_user.get("UF_DEPARTMENT")
    if not isinstance(raw_departments, (list, tuple)):
        raw_departments = [raw_departments]
    department_ids = tuple(
        department_id
        for department_id in (domain_parse_identifier(value) for value in raw_departments)
        if department_id is not None
    )

    return UserRecord(
        user_id=user_id,
        first_name=_domain_text(raw_user.get("NAME")),
        last_name=_domain_text(raw_user.get("LAST_NAME")),
        department_ids=department_ids,
        active=_domain_parse_flag(raw_user.get("ACTIVE")),
        email=_domain_text_or_none(raw_user.get("EMAIL")),
    )


def domain_parse_project(raw_project: Mapping[str, Any]) -> ProjectRecord | None:
    """Convert one `sonet_group.get` entry into a project record."""

    if not isinstance(raw_project, Mapping):
        return None

    project_id = domain_parse_identifier(raw_project.get("ID"))
    if project_id is None:
        return None

    return ProjectRecord(
        project_id=project_id,
        name=_domain_text(raw_project.get("NAME")),
        description=_domain_text(raw_project.get("DESCRIPTION")),
        date_created=_domain_text_or_none(raw_project.get("DATE_CREATE")),
    )


def domain_parse_department(raw_department: Mapping[str, Any]) -> DepartmentRecord | None:
    """Convert one `department.get` entry into a department record."""

    if not isinstance(raw_department, Mapping):
        return None

    department_id = domain_parse_identifier(raw_department.get("ID"))
    if department_id is None:
        return None

    return DepartmentRecord(
        department_id=department_id,
        name=_domain_text(raw_department.get("NAME")),
        parent_id=domain_parse_identifier(raw_department.get("PARENT")),
    )


def _domain_pick(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in raw and raw[key] is not None:
            return raw[key]
    return None


def _domain_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _domain_text_or_none(value: Any) -> str | None:
    text = _domain_text(value)
    return text or None


def _domain_parse_flag(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    normalized_value = _domain_text(value).lower()
    if normalized_value in _TRUE_FLAGS:
        return True
    if normalized_value in _FALSE_FLAGS:
        return False
    return None
