"""Unit test fixtures (fakes and stubs).

Provides scripted host clients for testing the failover loops without a
network. The fakes themselves live in tests/fixtures/fakes.py.
"""

import pytest

from fixtures.fakes import AsyncScriptedHostClient, ScriptedHostClient


@pytest.fixture
def make_scripted_client():
    """Factory fixture for ScriptedHostClient.

    Usage:
        def test_something(make_scripted_client, hosts):
            host_client = make_scripted_client({hosts[0]: [io_error(hosts[0])]})
    """
    return ScriptedHostClient


@pytest.fixture
def make_async_scripted_client():
    """Factory fixture for AsyncScriptedHostClient."""
    return AsyncScriptedHostClient
