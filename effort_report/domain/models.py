"""Typed domain records shared across runtime layers.

Every record is an immutable snapshot of one portal entity fetched for a single
report request.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class HealthStatus:
    """Health response contract used by health-check surfaces.

    Attributes:
        status: Overall status text for service health.
        detail: Additional message suitable for operational diagnostics.
    """

    status: str
    detail: str


@dataclass(frozen=True)
class TaskRecord:
    """Task snapshot with effort values normalized to whole seconds.

    Attributes:
        task_id: Portal task identifier.
        title: Task title, possibly blank.
        group_id: Project (workgroup) identifier, None when the task has no project.
        group_name: Project name embedded in the task payload, when present.
        parent_id: Parent task identifier, None for top-level tasks.
        responsible_id: Responsible user identifier.
        estimated_seconds: Planned effort in seconds; 0 when missing or unparseable.
        logged_seconds: Logged effort in seconds; 0 when missing or unparseable.
        status: Portal status code.
        created_date: Creation timestamp text as returned by the portal.
        closed_date: Closing timestamp text as returned by the portal.
        deadline: Deadline timestamp text as returned by the portal.
    """

    task_id: int
    title: str
    group_id: int | None
    parent_id: int | None
    responsible_id: int | None
    estimated_seconds: int
    logged_seconds: int
    status: int | None = None
    group_name: str | None = None
    created_date: str | None = None
    closed_date: str | None = None
    deadline: str | None = None


@dataclass(frozen=True)
class UserRecord:
    """Portal user snapshot.

    Attributes:
        user_id: Portal user identifier.
        first_name: First name, possibly blank.
        last_name: Last name, possibly blank.
        department_ids: Department identifiers the user belongs to.
        active: Active flag when the portal returned one.
        email: Email address when selected.
    """

    user_id: int
    first_name: str
    last_name: str
    department_ids: tuple[int, ...] = ()
    active: bool | None = None
    email: str | None = None

    @property
    def display_name(self) -> str:
        """Return trimmed `first last` display name."""

        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class ProjectRecord:
    """Project (workgroup) snapshot.

    Attributes:
        project_id: Portal workgroup identifier.
        name: Project name.
        description: Project description.
        date_created: Creation date text as returned by the portal.
    """

    project_id: int
    name: str
    description: str = ""
    date_created: str | None = None


@dataclass(frozen=True)
class DepartmentRecord:
    """Department snapshot.

    Attributes:
        department_id: Portal department identifier.
        name: Department name.
        parent_id: Parent department identifier.
    """

    department_id: int
    name: str
    parent_id: int | None = None
