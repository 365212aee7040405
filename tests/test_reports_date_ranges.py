"""Tests for named report period resolution."""

from datetime import date, datetime

import pytest

from effort_report.reports import DateRange, reports_resolve_date_range


@pytest.mark.parametrize(
    ("period", "today", "expected"),
    [
        ("week", date(2024, 3, 10), DateRange(date(2024, 3, 3), date(2024, 3, 10))),
        ("month", date(2024, 1, 15), DateRange(date(2024, 1, 1), date(2024, 1, 31))),
        ("month", date(2024, 2, 10), DateRange(date(2024, 2, 1), date(2024, 2, 29))),
        ("quarter", date(2024, 5, 20), DateRange(date(2024, 4, 1), date(2024, 6, 30))),
        ("quarter", date(2024, 12, 31), DateRange(date(2024, 10, 1), date(2024, 12, 31))),
        ("year", date(2024, 7, 4), DateRange(date(2024, 1, 1), date(2024, 12, 31))),
        ("fortnight", date(2024, 3, 31), DateRange(date(2024, 3, 1), date(2024, 3, 31))),
        (None, date(2023, 4, 5), DateRange(date(2023, 4, 1), date(2023, 4, 30))),
    ],
)
def test_reports_resolve_date_range_named_periods(period: str | None, today: date, expected: DateRange) -> None:
    """Resolve each named period against a fixed reference date.

    Args:
        period: Named period.
        today: Reference date.
        expected: Expected window.

    Returns:
        None: Assertions validate resolved bounds.

    Raises:
        AssertionError: Raised when resolution deviates.
    """

    assert reports_resolve_date_range(period=period, today=today) == expected


def test_reports_resolve_date_range_custom_bounds() -> None:
    """Parse ISO strings, accept datetimes and default missing bounds to today."""

    today = date(2024, 6, 15)

    explicit = reports_resolve_date_range("custom", "2024-05-01", datetime(2024, 5, 31, 18, 0), today=today)
    defaulted = reports_resolve_date_range("custom", "", None, today=today)

    assert explicit.date_range_iso() == ("2024-05-01", "2024-05-31")
    assert defaulted == DateRange(today, today)


def test_reports_resolve_date_range_rejects_invalid_custom_bound() -> None:
    """Raise ValueError for a custom bound that is not an ISO date."""

    with pytest.raises(ValueError, match="invalid custom date"):
        reports_resolve_date_range("custom", "31/05/2024", today=date(2024, 6, 15))
