"""Typed portal entity queries built on the REST adapter."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping, Sequence
import logging
from typing import Any, Final, TypeVar

from effort_report.adapters import PortalRestPort, RestCallParameters
from effort_report.domain import (
    DepartmentRecord,
    ProjectRecord,
    TaskRecord,
    UserRecord,
    domain_parse_department,
    domain_parse_project,
    domain_parse_task,
    domain_parse_user,
)

from .interfaces import FilterCatalog, FilterMapping, PortalQueryPort

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")


class PortalQueryService(PortalQueryPort):
    """Concrete query service fixing method names, default selections and filters."""

    USERS_METHOD: Final[str] = "user.get"
    TASKS_METHOD: Final[str] = "tasks.task.list"
    PROJECTS_METHOD: Final[str] = "sonet_group.get"
    DEPARTMENTS_METHOD: Final[str] = "department.get"

    DEFAULT_USER_SELECT: Final[tuple[str, ...]] = ("ID", "NAME", "LAST_NAME", "EMAIL", "UF_DEPARTMENT", "ACTIVE")
    DEFAULT_TASK_SELECT: Final[tuple[str, ...]] = (
        "ID",
        "TITLE",
        "GROUP_ID",
        "PARENT_ID",
        "RESPONSIBLE_ID",
        "TIME_ESTIMATE",
        "CREATED_DATE",
        "TIME_SPENT_IN_LOGS",
        "STATUS",
        "CLOSED_DATE",
        "DEADLINE",
    )
    DEFAULT_PROJECT_SELECT: Final[tuple[str, ...]] = ("ID", "NAME", "DESCRIPTION", "DATE_CREATE")
    DEFAULT_DEPARTMENT_SELECT: Final[tuple[str, ...]] = ("ID", "NAME", "PARENT")
    TASK_ORDER: Final[dict[str, str]] = {"ID": "ASC"}

    def __init__(self, rest_client: PortalRestPort, task_page_size: int = 50, task_fetch_ceiling: int = 1000):
        """Initialize query service.

        Args:
            rest_client: Portal REST adapter.
            task_page_size: Records per task listing page.
            task_fetch_ceiling: Hard bound on records returned by one task listing.

        Raises:
            ValueError: Raised when dependencies or limits are invalid.
        """

        if rest_client is None:
            raise ValueError("rest_client must not be None")
        if task_page_size < 1:
            raise ValueError("task_page_size must be >= 1")
        if task_fetch_ceiling < task_page_size:
            raise ValueError("task_fetch_ceiling must be >= task_page_size")

        self._rest_client = rest_client
        self._task_page_size = task_page_size
        self._task_fetch_ceiling = task_fetch_ceiling

    async def queries_fetch_users(
        self,
        filter_fields: FilterMapping | None = None,
        select_fields: Sequence[str] | None = None,
        extra_fields: FilterMapping | None = None,
    ) -> list[UserRecord]:
        """Fetch users matching filter.

        Args:
            filter_fields: Optional filter map, e.g. `{"UF_DEPARTMENT": 7}`.
            select_fields: Optional field selection; defaults to `DEFAULT_USER_SELECT`.
            extra_fields: Optional plain query fields.

        Returns:
            list[UserRecord]: Parsed users in portal order.

        Raises:
            RestAdapterError: Raised when the portal call fails.
        """

        parameters = RestCallParameters.params_build(
            filter_fields=filter_fields or {},
            select_fields=select_fields or self.DEFAULT_USER_SELECT,
            scalar_fields=extra_fields,
        )
        result = await self._rest_client.rest_call(self.USERS_METHOD, parameters)
        return _queries_parse_all(_queries_as_list(result), domain_parse_user)

    async def queries_fetch_tasks(
        self,
        filter_fields: FilterMapping | None = None,
        select_fields: Sequence[str] | None = None,
        extra_fields: FilterMapping | None = None,
    ) -> list[TaskRecord]:
        """Fetch tasks page by page in ascending id order.

        Pages are requested sequentially with an increasing `start` offset until a
        page comes back shorter than the page size or the fetch ceiling is reached.

        Args:
            filter_fields: Optional filter map, e.g. `{"GROUP_ID": 10, "STATUS": 5}`.
            select_fields: Optional field selection; defaults to `DEFAULT_TASK_SELECT`.
            extra_fields: Optional plain query fields.

        Returns:
            list[TaskRecord]: Parsed tasks without duplicate ids, at most `task_fetch_ceiling` long.

        Raises:
            RestAdapterError: Raised when any page call fails.
        """

        base_parameters = RestCallParameters.params_build(
            filter_fields=filter_fields or {},
            select_fields=select_fields or self.DEFAULT_TASK_SELECT,
            order_fields=self.TASK_ORDER,
            scalar_fields=extra_fields,
        )

        raw_tasks: list[Any] = []
        start = 0
        while True:
            page_parameters = base_parameters.params_with_scalar("start", start)
            result = await self._rest_client.rest_call(self.TASKS_METHOD, page_parameters)
            page = result.get("tasks") if isinstance(result, Mapping) else None
            if not isinstance(page, list):
                break

            raw_tasks.extend(page)
            if len(page) < self._task_page_size:
                break

            start += self._task_page_size
            if start >= self._task_fetch_ceiling:
                logger.warning(
                    "Task listing reached fetch ceiling of %d records; results may have been truncated",
                    self._task_fetch_ceiling,
                )
                break

        tasks = _queries_parse_all(raw_tasks[: self._task_fetch_ceiling], domain_parse_task)
        unique_tasks = _queries_unique(tasks, key=lambda task: task.task_id)
        logger.debug("Loaded %d tasks in total", len(unique_tasks))
        return unique_tasks

    async def queries_fetch_projects(
        self,
        filter_fields: FilterMapping | None = None,
        select_fields: Sequence[str] | None = None,
        extra_fields: FilterMapping | None = None,
    ) -> list[ProjectRecord]:
        """Fetch projects matching filter.

        Args:
            filter_fields: Optional filter map, e.g. `{"ID": 10}`.
            select_fields: Optional field selection; defaults to `DEFAULT_PROJECT_SELECT`.
            extra_fields: Optional plain query fields.

        Returns:
            list[ProjectRecord]: Parsed projects.

        Raises:
            RestAdapterError: Raised when the portal call fails.
        """

        parameters = RestCallParameters.params_build(
            filter_fields=filter_fields or {},
            select_fields=select_fields or self.DEFAULT_PROJECT_SELECT,
            scalar_fields=extra_fields,
        )
        result = await self._rest_client.rest_call(self.PROJECTS_METHOD, parameters)
        return _queries_parse_all(_queries_as_list(result), domain_parse_project)

    async def queries_fetch_departments(
        self,
        filter_fields: FilterMapping | None = None,
        select_fields: Sequence[str] | None = None,
        extra_fields: FilterMapping | None = None,
    ) -> list[DepartmentRecord]:
        """Fetch departments matching filter.

        Args:
            filter_fields: Optional filter map.
            select_fields: Optional field selection; defaults to `DEFAULT_DEPARTMENT_SELECT`.
            extra_fields: Optional plain query fields.

        Returns:
            list[DepartmentRecord]: Parsed departments.

        Raises:
            RestAdapterError: Raised when the portal call fails.
        """

        parameters = RestCallParameters.params_build(
            filter_fields=filter_fields or {},
            select_fields=select_fields or self.DEFAULT_DEPARTMENT_SELECT,
            scalar_fields=extra_fields,
        )
        result = await self._rest_client.rest_call(self.DEPARTMENTS_METHOD, parameters)
        return _queries_parse_all(_queries_as_list(result), domain_parse_department)

    async def queries_check_connectivity(self) -> int:
        """Fetch one active user with a minimal selection.

        Returns:
            int: Number of users returned by the probe.

        Raises:
            RestAdapterError: Raised when the portal call fails.
        """

        users = await self.queries_fetch_users(
            filter_fields={"ACTIVE": True},
            select_fields=("ID", "NAME"),
            extra_fields={"limit": 1},
        )
        return len(users)

    async def queries_fetch_filter_catalog(self) -> FilterCatalog:
        """Fetch active projects and all departments concurrently.

        Returns:
            FilterCatalog: Project and department options.

        Raises:
            RestAdapterError: Raised when either call fails.
        """

        projects, departments = await asyncio.gather(
            self.queries_fetch_projects(filter_fields={"ACTIVE": "Y"}, extra_fields={"limit": 50}),
            self.queries_fetch_departments(),
        )
        return FilterCatalog(projects=tuple(projects), departments=tuple(departments))


def _queries_as_list(result: Any) -> list[Any]:
    """Return list payloads as-is; anything else yields an empty list."""

    return list(result) if isinstance(result, list) else []


def _queries_parse_all(raw_items: list[Any], parser: Callable[[Any], RecordT | None]) -> list[RecordT]:
    return [record for record in (parser(raw_item) for raw_item in raw_items) if record is not None]


def _queries_unique(records: list[RecordT], key: Callable[[RecordT], object]) -> list[RecordT]:
    seen_keys: set[object] = set()
    unique_records: list[RecordT] = []
    for record in records:
        record_key = key(record)
        if record_key in seen_keys:
            continue
        seen_keys.add(record_key)
        unique_records.append(record)
    return unique_records
