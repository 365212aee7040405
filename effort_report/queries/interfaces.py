"""Typed interfaces for portal domain queries."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Protocol

from effort_report.domain import DepartmentRecord, ProjectRecord, TaskRecord, UserRecord

FilterMapping = Mapping[str, str | int | float | bool | None]


@dataclass(frozen=True)
class FilterCatalog:
    """Options used to populate report filter inputs.

    Attributes:
        projects: Active projects.
        departments: All departments.
    """

    projects: tuple[ProjectRecord, ...]
    departments: tuple[DepartmentRecord, ...]


class PortalQueryPort(Protocol):
    """Port definition for typed portal entity queries."""

    async def queries_fetch_users(
        self,
        filter_fields: FilterMapping | None = None,
        select_fields: Sequence[str] | None = None,
        extra_fields: FilterMapping | None = None,
    ) -> list[UserRecord]:
        """Fetch users matching filter.

        Raises:
            RestAdapterError: Raised when the portal call fails.
        """

    async def queries_fetch_tasks(
        self,
        filter_fields: FilterMapping | None = None,
        select_fields: Sequence[str] | None = None,
        extra_fields: FilterMapping | None = None,
    ) -> list[TaskRecord]:
        """Fetch every page of tasks matching filter up to the configured ceiling.

        Raises:
            RestAdapterError: Raised when any page call fails.
        """

    async def queries_fetch_projects(
        self,
        filter_fields: FilterMapping | None = None,
        select_fields: Sequence[str] | None = None,
        extra_fields: FilterMapping | None = None,
    ) -> list[ProjectRecord]:
        """Fetch projects matching filter.

        Raises:
            RestAdapterError: Raised when the portal call fails.
        """

    async def queries_fetch_departments(
        self,
        filter_fields: FilterMapping | None = None,
        select_fields: Sequence[str] | None = None,
        extra_fields: FilterMapping | None = None,
    ) -> list[DepartmentRecord]:
        """Fetch departments matching filter.

        Raises:
            RestAdapterError: Raised when the portal call fails.
        """

    async def queries_check_connectivity(self) -> int:
        """Issue one lightweight call proving the portal is reachable.

        Raises:
            RestAdapterError: Raised when the portal call fails.
        """

    async def queries_fetch_filter_catalog(self) -> FilterCatalog:
        """Fetch active projects and departments concurrently.

        Raises:
            RestAdapterError: Raised when either call fails.
        """


__all__ = ["FilterCatalog", "FilterMapping", "PortalQueryPort"]
