"""Tests for API foundation, health and cache endpoints.

These tests validate deterministic response behavior for reachable and
unreachable portal states.
"""

from fastapi.testclient import TestClient

from effort_report.adapters import RestTransportError
from effort_report.api.application import create_api_application
from effort_report.config import AppSettings


class _RestClientStub:
    """REST port stub tracking cache clears."""

    def __init__(self) -> None:
        self.cache_clear_count = 0

    def rest_source_name(self) -> str:
        """Return deterministic source label.

        Returns:
            str: Source label.
        """

        return "portal_rest"

    async def rest_call(self, method, parameters=None):
        """Reject calls; health tests go through the query stub."""

        raise AssertionError(f"unexpected rest_call for {method}")

    def rest_cache_clear(self) -> None:
        """Count cache clears."""

        self.cache_clear_count += 1


class _ReachableQueryService:
    """Query stub whose connectivity probe succeeds."""

    async def queries_check_connectivity(self) -> int:
        """Return one probed user.

        Returns:
            int: Probe result count.
        """

        return 1


class _UnreachableQueryService:
    """Query stub whose connectivity probe fails at transport level."""

    async def queries_check_connectivity(self) -> int:
        """Raise deterministic transport error.

        Raises:
            RestTransportError: Always raised by this test double.
        """

        raise RestTransportError("Portal transport request failed")


class _ReportServiceStub:
    """Report port stub; health tests never build reports."""


def _build_client(query_service: object, rest_client: _RestClientStub | None = None) -> TestClient:
    settings = AppSettings(portal_rest_url="https://portal.test/rest/1/hook-token", environment_name="test")
    application = create_api_application(
        settings=settings,
        rest_client=rest_client or _RestClientStub(),
        query_service=query_service,
        report_service=_ReportServiceStub(),
    )
    return TestClient(application)


def test_api_foundation_index_reports_environment() -> None:
    """Return service metadata from the root endpoint.

    Returns:
        None: Assertions validate foundation payload.

    Raises:
        AssertionError: Raised when payload is incorrect.
    """

    response = _build_client(_ReachableQueryService()).get("/")

    assert response.status_code == 200
    assert response.json() == {"service": "effort-report", "status": "foundation-ready", "environment": "test"}


def test_api_health_returns_ok_when_portal_reachable() -> None:
    """Return HTTP 200 with portal up when the probe succeeds."""

    response = _build_client(_ReachableQueryService()).get("/health")

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["portal"] == "up"
    assert payload["target"] == "portal_rest"


def test_api_health_returns_degraded_when_portal_unreachable() -> None:
    """Return HTTP 503 with portal down when the probe fails."""

    response = _build_client(_UnreachableQueryService()).get("/health")

    assert response.status_code == 503
    payload = response.json()
    assert payload["status"] == "degraded"
    assert payload["portal"] == "down"
    assert "transport request failed" in payload["detail"]


def test_api_cache_clear_drops_cached_responses() -> None:
    """Clear the adapter cache through the refresh endpoint."""

    rest_client = _RestClientStub()

    response = _build_client(_ReachableQueryService(), rest_client=rest_client).post("/cache/clear")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "cache": "cleared"}
    assert rest_client.cache_clear_count == 1
