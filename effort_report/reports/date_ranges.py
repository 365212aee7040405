"""Calendar date windows for named report periods."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Final

REPORT_PERIODS: Final[tuple[str, ...]] = ("week", "month", "quarter", "year", "custom")
_FALLBACK_WINDOW_DAYS: Final[int] = 30


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar date window.

    Attributes:
        date_from: First day of the window.
        date_to: Last day of the window.
    """

    date_from: date
    date_to: date

    def date_range_iso(self) -> tuple[str, str]:
        """Return both bounds in ISO 8601 date-only form."""

        return self.date_from.isoformat(), self.date_to.isoformat()


def reports_resolve_date_range(
    period: str | None = "month",
    custom_from: date | str | None = None,
    custom_to: date | str | None = None,
    today: date | None = None,
) -> DateRange:
    """Resolve a named period into a concrete date window.

    Dates follow the host's local calendar; no timezone normalization is applied.

    Args:
        period: `week`, `month`, `quarter`, `year` or `custom`; anything else
            yields a trailing 30-day window. None means `month`.
        custom_from: Lower bound for `custom`; defaults to today.
        custom_to: Upper bound for `custom`; defaults to today.
        today: Optional reference date; defaults to `date.today()`.

    Returns:
        DateRange: Resolved inclusive window.

    Raises:
        ValueError: Raised when a custom bound is not a valid ISO date.
    """

    reference_date = today or date.today()
    normalized_period = "month" if period is None else period.strip().lower()

    if normalized_period == "week":
        return DateRange(date_from=reference_date - timedelta(days=7), date_to=reference_date)

    if normalized_period == "month":
        return DateRange(
            date_from=reference_date.replace(day=1),
            date_to=_reports_month_end(reference_date.year, reference_date.month),
        )

    if normalized_period == "quarter":
        quarter_index = (reference_date.month - 1) // 3
        first_month = quarter_index * 3 + 1
        return DateRange(
            date_from=date(reference_date.year, first_month, 1),
            date_to=_reports_month_end(reference_date.year, first_month + 2),
        )

    if normalized_period == "year":
        return DateRange(date_from=date(reference_date.year, 1, 1), date_to=date(reference_date.year, 12, 31))

    if normalized_period == "custom":
        return DateRange(
            date_from=_reports_parse_bound(custom_from, reference_date),
            date_to=_reports_parse_bound(custom_to, reference_date),
        )

    return DateRange(date_from=reference_date - timedelta(days=_FALLBACK_WINDOW_DAYS), date_to=reference_date)


def _reports_month_end(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def _reports_parse_bound(value: date | str | None, default: date) -> date:
    if value is None:
        return default
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    normalized_value = value.strip()
    if not normalized_value:
        return default
    try:
        return date.fromisoformat(normalized_value[:10])
    except ValueError as error:
        raise ValueError(f"invalid custom date bound={value}") from error


__all__ = ["DateRange", "REPORT_PERIODS", "reports_resolve_date_range"]
