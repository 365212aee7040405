"""Main module entrypoint for local runtime execution.

This module validates startup configuration and either launches the FastAPI
service or builds one report and prints its rows as JSON.
"""

import argparse
import asyncio
import json

import uvicorn

from effort_report.api.routers import api_serialize_report_row
from effort_report.bootstrap import RuntimeServices, bootstrap_create_application, bootstrap_create_services
from effort_report.config import config_load_settings
from effort_report.reports import PlanFactFilters, ReportRow


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
    """

    argument_parser = argparse.ArgumentParser(description="Project effort report runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "plan-fact", "project-resources"),
        help="Runtime command: `api` starts server, `plan-fact` prints the plan-vs-fact report, "
        "`project-resources` prints one project's resource tree",
        type=str,
    )
    argument_parser.add_argument("--period", dest="period", type=str, help="Named period for `plan-fact`")
    argument_parser.add_argument("--date-from", dest="date_from", type=str, help="Custom lower bound (YYYY-MM-DD)")
    argument_parser.add_argument("--date-to", dest="date_to", type=str, help="Custom upper bound (YYYY-MM-DD)")
    argument_parser.add_argument("--project-id", dest="project_id", type=int, help="Project identifier")
    argument_parser.add_argument("--department-id", dest="department_id", type=int, help="Department identifier")
    argument_parser.add_argument(
        "--detail-level",
        dest="detail_level",
        type=int,
        help="Hierarchy depth for `project-resources`",
    )
    parsed_arguments = argument_parser.parse_args()

    if parsed_arguments.command == "plan-fact":
        services = bootstrap_create_services()
        filters = PlanFactFilters(
            period=parsed_arguments.period or services.settings.report_default_period,
            date_from=parsed_arguments.date_from,
            date_to=parsed_arguments.date_to,
            project_id=parsed_arguments.project_id,
            department_id=parsed_arguments.department_id,
        )
        rows = asyncio.run(main_run_plan_fact(services, filters))
        main_print_rows(rows)
        return

    if parsed_arguments.command == "project-resources":
        if parsed_arguments.project_id is None:
            argument_parser.error("--project-id is required for `project-resources`")
        services = bootstrap_create_services()
        detail_level = parsed_arguments.detail_level
        if detail_level is None:
            detail_level = services.settings.report_default_detail_level
        rows = asyncio.run(main_run_project_resources(services, parsed_arguments.project_id, detail_level))
        main_print_rows(rows)
        return

    settings = config_load_settings()
    application = bootstrap_create_application(settings=settings)
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
    )


async def main_run_plan_fact(services: RuntimeServices, filters: PlanFactFilters) -> tuple[ReportRow, ...]:
    """Build the plan-vs-fact report and release the HTTP client."""

    async with services.rest_client:
        report = await services.report_service.report_plan_fact(filters)
    return report.rows


async def main_run_project_resources(
    services: RuntimeServices,
    project_id: int,
    detail_level: int,
) -> tuple[ReportRow, ...]:
    """Build one project's resource tree and release the HTTP client."""

    async with services.rest_client:
        report = await services.report_service.report_project_resources(
            project_id=project_id,
            detail_level=detail_level,
        )
    return report.rows


def main_print_rows(rows: tuple[ReportRow, ...]) -> None:
    """Print report rows to stdout as a JSON array.

    Args:
        rows: Typed report rows.
    """

    print(json.dumps([api_serialize_report_row(report_row) for report_row in rows], ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
