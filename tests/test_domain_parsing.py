"""Tests for lenient portal payload parsing into typed domain records."""

import pytest

from effort_report.domain import (
    domain_parse_department,
    domain_parse_int_lenient,
    domain_parse_project,
    domain_parse_seconds,
    domain_parse_task,
    domain_parse_user,
)


@pytest.mark.parametrize(
    ("raw_value", "expected"),
    [
        ("3600", 3600),
        ("3600.5", 3600),
        ("12abc", 12),
        (" 42", 42),
        (7200, 7200),
        (1.9, 1),
        ("", None),
        ("abc", None),
        (None, None),
        (True, None),
    ],
)
def test_domain_parse_int_lenient_reads_leading_integer(raw_value: object, expected: int | None) -> None:
    """Read the leading integer the way the portal's numeric strings require.

    Args:
        raw_value: Raw payload value.
        expected: Expected parse result.

    Returns:
        None: Assertions validate lenient parsing.

    Raises:
        AssertionError: Raised when parsing deviates.
    """

    assert domain_parse_int_lenient(raw_value) == expected


def test_domain_parse_seconds_defaults_unparseable_to_zero() -> None:
    """Treat missing or malformed effort values as zero seconds."""

    assert domain_parse_seconds("") == 0
    assert domain_parse_seconds(None) == 0
    assert domain_parse_seconds("n/a") == 0


def test_domain_parse_task_accepts_camel_case_payload() -> None:
    """Parse a camelCase `tasks.task.list` entry with embedded group name."""

    task = domain_parse_task(
        {
            "id": "11",
            "title": " Design ",
            "groupId": "10",
            "parentId": "0",
            "responsibleId": "1",
            "timeEstimate": "3600",
            "timeSpentInLogs": "7200",
            "status": "5",
            "closedDate": "2024-05-10T12:00:00+03:00",
            "group": {"id": "10", "name": "Proj"},
        }
    )

    assert task is not None
    assert task.task_id == 11
    assert task.title == "Design"
    assert task.group_id == 10
    assert task.group_name == "Proj"
    assert task.parent_id is None
    assert task.responsible_id == 1
    assert task.estimated_seconds == 3600
    assert task.logged_seconds == 7200
    assert task.status == 5
    assert task.closed_date == "2024-05-10T12:00:00+03:00"


def test_domain_parse_task_accepts_upper_snake_payload_and_empty_effort() -> None:
    """Parse upper-snake keys and map an empty estimate to zero."""

    task = domain_parse_task(
        {"ID": "12", "TITLE": "Build", "GROUP_ID": "10", "RESPONSIBLE_ID": "2", "TIME_ESTIMATE": ""}
    )

    assert task is not None
    assert task.group_id == 10
    assert task.responsible_id == 2
    assert task.estimated_seconds == 0
    assert task.logged_seconds == 0


def test_domain_parse_task_without_id_returns_none() -> None:
    """Skip entries that carry no usable task id."""

    assert domain_parse_task({"title": "orphan"}) is None
    assert domain_parse_task("not-a-mapping") is None


def test_domain_parse_user_reads_departments_and_flags() -> None:
    """Parse user names, department list and active flag."""

    user = domain_parse_user(
        {"ID": "1", "NAME": "Ann", "LAST_NAME": "K", "UF_DEPARTMENT": [3, "7"], "ACTIVE": "Y", "EMAIL": ""}
    )

    assert user is not None
    assert user.display_name == "Ann K"
    assert user.department_ids == (3, 7)
    assert user.active is True
    assert user.email is None


def test_domain_parse_user_display_name_trims_missing_last_name() -> None:
    """Trim the display name when the last name is absent."""

    user = domain_parse_user({"ID": "2", "NAME": "Bob"})

    assert user is not None
    assert user.display_name == "Bob"
    assert user.department_ids == ()


def test_domain_parse_project_and_department() -> None:
    """Parse workgroup and department entries."""

    project = domain_parse_project({"ID": "10", "NAME": "Proj", "DESCRIPTION": "Main"})
    department = domain_parse_department({"ID": "3", "NAME": "Sales", "PARENT": "1"})

    assert project is not None
    assert project.project_id == 10
    assert project.name == "Proj"
    assert department is not None
    assert department.parent_id == 1
    assert domain_parse_project({"NAME": "no id"}) is None
