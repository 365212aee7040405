"""Tests for runtime settings loading and validation."""

import logging

import pytest

from effort_report.config import AppSettings, SettingsLoadError, config_configure_logging, config_load_settings


def test_config_load_settings_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Load portal URL and overrides from environment variables.

    Args:
        monkeypatch: Pytest monkeypatch fixture.

    Returns:
        None: Assertions validate loaded values and defaults.

    Raises:
        AssertionError: Raised when settings mapping is incorrect.
    """

    monkeypatch.setenv("PORTAL_REST_URL", " https://portal.test/rest/1/hook-token ")
    monkeypatch.setenv("TASK_FETCH_CEILING", "500")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = config_load_settings()

    assert settings.portal_rest_url == "https://portal.test/rest/1/hook-token"
    assert settings.task_fetch_ceiling == 500
    assert settings.log_level == "DEBUG"
    assert settings.report_completed_status_code == 5
    assert settings.report_closed_date_field == "CLOSED_DATE"
    assert settings.rest_min_interval_seconds == 1.0


def test_config_load_settings_wraps_validation_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    """Raise SettingsLoadError when the portal URL is blank."""

    monkeypatch.setenv("PORTAL_REST_URL", "   ")

    with pytest.raises(SettingsLoadError, match="Startup configuration validation failed"):
        config_load_settings()


def test_config_settings_reject_ceiling_below_page_size() -> None:
    """Reject a task fetch ceiling smaller than the page size."""

    with pytest.raises(ValueError, match="task_fetch_ceiling"):
        AppSettings(portal_rest_url="https://portal.test", task_page_size=100, task_fetch_ceiling=50)


def test_config_load_settings_accepts_unbounded_quota_retries(monkeypatch: pytest.MonkeyPatch) -> None:
    """Map the `none` env value to an unbounded quota retry cap."""

    monkeypatch.setenv("PORTAL_REST_URL", "https://portal.test/rest/1/hook-token")
    monkeypatch.setenv("REST_QUOTA_RETRY_MAX_ATTEMPTS", "none")

    settings = config_load_settings()

    assert settings.rest_quota_retry_max_attempts is None


def test_config_settings_reject_negative_quota_retries() -> None:
    """Reject a negative quota retry cap while still allowing `None`."""

    settings = AppSettings(portal_rest_url="https://portal.test", rest_quota_retry_max_attempts=None)

    assert settings.rest_quota_retry_max_attempts is None
    with pytest.raises(ValueError, match="rest_quota_retry_max_attempts"):
        AppSettings(portal_rest_url="https://portal.test", rest_quota_retry_max_attempts=-1)


def test_config_configure_logging_sets_root_level() -> None:
    """Apply the requested level to the root logger."""

    root_logger = logging.getLogger()
    previous_level = root_logger.level
    try:
        config_configure_logging(level="WARNING")
        assert root_logger.level == logging.WARNING
    finally:
        root_logger.setLevel(previous_level)
