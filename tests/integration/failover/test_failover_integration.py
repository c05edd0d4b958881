"""Integration tests: FailoverClient over the real httpx host client.

Each replica is simulated by httpx.MockTransport, so the whole stack
(failover loops, httpx client, error mapping, body cleanup) runs without
sockets.
"""

import httpx
import pytest

from http_failover.failover.client import AsyncFailoverClient, FailoverClient
from http_failover.failover.context import ExecutionContext
from http_failover.failover.policies import ConfigurableFailoverRetryPolicy
from http_failover.transport.exceptions import HostConnectionError, HostTimeoutError
from http_failover.transport.httpx_client import AsyncHttpxHostClient, HttpxHostClient


class Replicas:
    """Routes requests by host name; hosts listed in ``down`` refuse connections."""

    def __init__(self, down: set[str], slow: set[str] = frozenset()):
        self.down = set(down)
        self.slow = set(slow)
        self.hits: list[str] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        host = request.url.host
        self.hits.append(host)
        if host in self.down:
            raise httpx.ConnectError("Connection refused", request=request)
        if host in self.slow:
            raise httpx.ReadTimeout("Read timed out", request=request)
        return httpx.Response(200, text=f"served by {host} at {request.url.path}")


def make_failover_client(replicas: Replicas, settings, **kwargs) -> FailoverClient:
    http_client = httpx.Client(transport=httpx.MockTransport(replicas))
    return FailoverClient(host_client=HttpxHostClient(client=http_client), settings=settings, **kwargs)


def test_fails_over_to_first_live_replica(targets, sample_request, test_settings):
    """Replica A refuses connections; B serves the file."""
    replicas = Replicas(down={"replica-a"})
    client = make_failover_client(replicas, test_settings)

    text = client.execute_with_handler(targets, sample_request, lambda r: r.read().decode())

    assert text == "served by replica-b at /file.txt"
    assert replicas.hits == ["replica-a", "replica-b"]


def test_all_replicas_down_surfaces_last_error(targets, sample_request, test_settings):
    """Every replica down: the error names the last host tried."""
    replicas = Replicas(down={"replica-a", "replica-b", "replica-c"})
    client = make_failover_client(replicas, test_settings)

    with pytest.raises(HostConnectionError) as exc_info:
        client.execute(targets, sample_request)

    assert exc_info.value.host.hostname == "replica-c"
    assert replicas.hits == ["replica-a", "replica-b", "replica-c"]


def test_timeout_abort_policy_skips_remaining_replicas(targets, sample_request, test_settings):
    """Abandon failover on timeouts: a slow A stops the call."""
    replicas = Replicas(down=set(), slow={"replica-a"})
    client = make_failover_client(
        replicas,
        test_settings,
        retry_policy=ConfigurableFailoverRetryPolicy(abort_on=(HostTimeoutError,)),
    )

    with pytest.raises(HostTimeoutError):
        client.execute(targets, sample_request)

    assert replicas.hits == ["replica-a"]


def test_context_history_across_passes(targets, sample_request, test_settings):
    """Two passes over dead replicas are visible in the context."""
    replicas = Replicas(down={"replica-a", "replica-b", "replica-c"})
    client = make_failover_client(
        replicas, test_settings, retry_policy=ConfigurableFailoverRetryPolicy(retry_count=2)
    )
    context = ExecutionContext()

    with pytest.raises(HostConnectionError):
        client.execute(targets, sample_request, context)

    assert [a.pass_number for a in context.attempts] == [1, 1, 1, 2, 2, 2]
    assert all(a.error_type == "HostConnectionError" for a in context.attempts)


@pytest.mark.asyncio
async def test_async_stack_fails_over(targets, sample_request, test_settings):
    """Async client over httpx.AsyncClient behaves the same way."""
    replicas = Replicas(down={"replica-a", "replica-b"})
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(replicas))
    client = AsyncFailoverClient(host_client=AsyncHttpxHostClient(client=http_client), settings=test_settings)

    async def read_text(response: httpx.Response) -> str:
        return (await response.aread()).decode()

    text = await client.execute_with_handler(targets, sample_request, read_text)

    assert text == "served by replica-c at /file.txt"
    await http_client.aclose()
