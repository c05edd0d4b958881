"""Integration test fixtures.

Replicas are simulated in-process with httpx.MockTransport, so these tests
need no running services.
"""

import pytest


@pytest.fixture
def targets() -> list[str]:
    """Three replica URLs in priority order."""
    return ["http://replica-a:9090", "http://replica-b:9191", "http://replica-c:9292"]
