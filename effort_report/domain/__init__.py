"""Domain records and payload parsing used across application layer boundaries."""

from .models import DepartmentRecord, HealthStatus, ProjectRecord, TaskRecord, UserRecord
from .parsing import (
	domain_parse_department,
	domain_parse_identifier,
	domain_parse_int_lenient,
	domain_parse_project,
	domain_parse_seconds,
	domain_parse_task,
	domain_parse_user,
)

__all__ = [
	"DepartmentRecord",
	"HealthStatus",
	"ProjectRecord",
	"TaskRecord",
	"UserRecord",
	"domain_parse_department",
	"domain_parse_identifier",
	"domain_parse_int_lenient",
	"domain_parse_project",
	"domain_parse_seconds",
	"domain_parse_task",
	"domain_parse_user",
]
