"""Typed runtime settings with dotenv support and startup validation."""

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class AppSettings(BaseSettings):
    """Application settings for API runtime, portal access and report defaults.

    Environment variable names map directly to field names in uppercase.
    Example: `portal_rest_url` reads from `PORTAL_REST_URL`.

    Attributes:
        environment_name: Runtime environment label.
        application_host: Host interface for web server binding.
        application_port: Web server port.
        portal_rest_url: Portal REST root including the static webhook access path.
        rest_request_timeout_seconds: Transport timeout for one portal request.
        rest_min_interval_seconds: Minimum interval between two portal network calls.
        rest_cache_ttl_seconds: Lifetime of one cached portal response.
        rest_quota_retry_delay_seconds: Delay before retrying a quota-exceeded call.
        rest_quota_retry_max_attempts: Maximum quota retries for one call before failing;
            `None` (env value `none`) retries without limit.
        task_page_size: Page size used by the paginated task listing.
        task_fetch_ceiling: Hard ceiling on task records fetched by one listing.
        report_completed_status_code: Task status code treated as completed by plan-vs-fact.
        report_closed_date_field: Task date field used for plan-vs-fact period windows.
        report_default_period: Period used when a caller does not supply one.
        report_default_detail_level: Hierarchy depth used when a caller does not supply one.
        log_level: Root logging level name.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        env_parse_none_str="none",
    )

    environment_name: str = Field(default="development")
    application_host: str = Field(default="0.0.0.0")
    application_port: int = Field(default=8000, ge=1, le=65535)
    portal_rest_url: str = Field(min_length=1)
    rest_request_timeout_seconds: float = Field(default=30.0, gt=0)
    rest_min_interval_seconds: float = Field(default=1.0, ge=0)
    rest_cache_ttl_seconds: float = Field(default=300.0, ge=0)
    rest_quota_retry_delay_seconds: float = Field(default=2.0, ge=0)
    rest_quota_retry_max_attempts: int | None = Field(default=5, ge=0)
    task_page_size: int = Field(default=50, ge=1)
    task_fetch_ceiling: int = Field(default=1000, ge=1)
    report_completed_status_code: int = Field(default=5)
    report_closed_date_field: str = Field(default="CLOSED_DATE", min_length=1)
    report_default_period: str = Field(default="month", min_length=1)
    report_default_detail_level: int = Field(default=2, ge=0)
    log_level: str = Field(default="INFO")

    @field_validator("portal_rest_url", "report_closed_date_field", "report_default_period")
    @classmethod
    def _validate_non_empty_string(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value

    @field_validator("task_fetch_ceiling")
    @classmethod
    def _validate_ceiling_bounds(cls, value: int, info) -> int:
        page_size = int(info.data.get("task_page_size", 50))
        if value < page_size:
            raise ValueError("task_fetch_ceiling must be greater than or equal to task_page_size")
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized_value = value.strip().upper()
        if normalized_value not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"unsupported log_level={value}")
        return normalized_value


def config_load_settings() -> AppSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        AppSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when required settings are missing or invalid.
    """

    try:
        return AppSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
