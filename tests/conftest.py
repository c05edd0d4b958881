"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import pytest

from http_failover.config import Settings
from http_failover.models.hosts import HttpHost
from http_failover.models.request import FailoverRequest


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.FAILOVER_RETRY_COUNT = 2
    """
    return Settings(
        # === Application ===
        APP_NAME="HTTP Failover Client (Test)",
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",

        # === Failover ===
        FAILOVER_RETRY_COUNT=1,
        FAILOVER_MAX_FAILURES=None,
        FAILOVER_TARGETS=[],

        # === HTTP ===
        HTTP_TIMEOUT=5.0,
        HTTP_MAX_CONNECTIONS=10,
        HTTP_MAX_KEEPALIVE_CONNECTIONS=5,

        # === Monitoring ===
        PROMETHEUS_ENABLED=False,  # Keep the global registry untouched unless a test needs it
    )


@pytest.fixture
def hosts() -> list[HttpHost]:
    """Three replicas in priority order."""
    return [
        HttpHost(hostname="replica-a", port=9090),
        HttpHost(hostname="replica-b", port=9191),
        HttpHost(hostname="replica-c", port=9292),
    ]


@pytest.fixture
def sample_request() -> FailoverRequest:
    """Simple GET of a file, as replayed against every host."""
    return FailoverRequest(method="GET", path="/file.txt", headers={"Accept": "text/plain"})


@pytest.fixture
def create_test_hosts():
    """Factory fixture to create N hosts.

    Usage:
        def test_something(create_test_hosts):
            hosts = create_test_hosts(5)
    """
    def _create(count: int, scheme: str = "http") -> list[HttpHost]:
        return [
            HttpHost(hostname=f"replica-{index}", port=8000 + index, scheme=scheme)
            for index in range(count)
        ]

    return _create
