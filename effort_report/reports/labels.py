"""Fixed row labels and name fallbacks used by report aggregation."""

from __future__ import annotations

from typing import Final
import unicodedata

from effort_report.domain import ProjectRecord, UserRecord

LABEL_UNASSIGNED: Final[str] = "Unassigned"
LABEL_UNTITLED: Final[str] = "Untitled"
LABEL_USER_TOTAL: Final[str] = "Total across all tasks"
LABEL_PROJECT_TOTAL: Final[str] = "Project total"

PROJECT_TOTAL_LEVEL: Final[int] = 999
SECONDS_PER_HOUR: Final[int] = 3600


def reports_project_name(project: ProjectRecord | None, project_id: int | None) -> str:
    """Return project name, synthesizing one from the id when the lookup missed."""

    if project is not None and project.name:
        return project.name
    return f"Project {project_id}"


def reports_user_name(user: UserRecord | None) -> str:
    """Return user display name, or the unassigned label when the lookup missed."""

    if user is None:
        return LABEL_UNASSIGNED
    return user.display_name


def reports_level_label(level: int) -> str:
    """Return the sub-task label for a hierarchy level; blank for roots."""

    return f"Level {level}" if level > 0 else ""


def reports_hours(seconds: int) -> float:
    """Convert effort seconds to hours."""

    return seconds / SECONDS_PER_HOUR


def reports_collation_key(text: str) -> tuple[str, str]:
    """Return a locale-tolerant sort key: accent- and case-insensitive, exact text as tie-break."""

    decomposed_text = unicodedata.normalize("NFKD", text)
    base_text = "".join(character for character in decomposed_text if not unicodedata.combining(character))
    return (base_text.casefold(), text)
