"""Report aggregation and orchestration package."""

from .date_ranges import REPORT_PERIODS, DateRange, reports_resolve_date_range
from .interfaces import (
	PlanFactFilters,
	PlanFactReport,
	ProjectResourceReport,
	ReportPort,
	ReportRow,
	ReportRowKind,
)
from .labels import (
	LABEL_PROJECT_TOTAL,
	LABEL_UNASSIGNED,
	LABEL_UNTITLED,
	LABEL_USER_TOTAL,
	PROJECT_TOTAL_LEVEL,
	reports_collation_key,
)
from .plan_fact import reports_build_plan_fact_rows
from .report_service import ReportService
from .resource_tree import reports_build_project_resource_rows

__all__ = [
	"DateRange",
	"LABEL_PROJECT_TOTAL",
	"LABEL_UNASSIGNED",
	"LABEL_UNTITLED",
	"LABEL_USER_TOTAL",
	"PROJECT_TOTAL_LEVEL",
	"PlanFactFilters",
	"PlanFactReport",
	"ProjectResourceReport",
	"REPORT_PERIODS",
	"ReportPort",
	"ReportRow",
	"ReportRowKind",
	"ReportService",
	"reports_build_plan_fact_rows",
	"reports_build_project_resource_rows",
	"reports_collation_key",
	"reports_resolve_date_range",
]
