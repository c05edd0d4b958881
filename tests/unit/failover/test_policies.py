"""
Unit tests for failover retry policies.
"""

import pytest

from fixtures.fakes import io_error
from http_failover.failover.context import ExecutionContext
from http_failover.failover.policies import (
    ConfigurableFailoverRetryPolicy,
    DefaultFailoverRetryPolicy,
    FailoverRetryPolicy,
)
from http_failover.models.hosts import HttpHost
from http_failover.transport.exceptions import HostConnectionError, HostTimeoutError


HOST = HttpHost(hostname="replica-a", port=9090)


def context_with_failures(count: int) -> ExecutionContext:
    """Context that has already recorded ``count`` failures."""
    context = ExecutionContext(pass_number=1)
    for _ in range(count):
        context.record_failure(HOST, io_error(HOST))
    return context


def test_default_policy_single_pass_always_hops():
    """Default: one pass, hop on every failure."""
    policy = DefaultFailoverRetryPolicy()

    assert policy.retry_count == 1
    assert policy.should_try_next_host(io_error(HOST), ExecutionContext()) is True
    assert policy.should_try_next_host(HostTimeoutError("slow"), context_with_failures(50)) is True


def test_policies_satisfy_protocol():
    """Both shipped policies are FailoverRetryPolicy instances."""
    assert isinstance(DefaultFailoverRetryPolicy(), FailoverRetryPolicy)
    assert isinstance(ConfigurableFailoverRetryPolicy(), FailoverRetryPolicy)


def test_default_policy_does_not_touch_context():
    """The default policy leaves the context untouched."""
    context = ExecutionContext()
    DefaultFailoverRetryPolicy().should_try_next_host(io_error(HOST), context)

    assert context.attributes == {}
    assert context.attempts == []


def test_configurable_policy_retry_count():
    """retry_count is exposed as configured."""
    assert ConfigurableFailoverRetryPolicy(retry_count=3).retry_count == 3


@pytest.mark.parametrize("kwargs", [{"retry_count": 0}, {"max_failures": 0}])
def test_configurable_policy_rejects_invalid_values(kwargs):
    """Zero passes or a zero failure budget make no sense."""
    with pytest.raises(ValueError):
        ConfigurableFailoverRetryPolicy(**kwargs)


def test_abort_on_vetoes_matching_failure_class():
    """Timeouts abandon failover; connection errors still hop."""
    policy = ConfigurableFailoverRetryPolicy(abort_on=(HostTimeoutError,))
    context = ExecutionContext()

    assert policy.should_try_next_host(HostTimeoutError("slow", host=HOST), context) is False
    assert policy.should_try_next_host(HostConnectionError("refused", host=HOST), context) is True


def test_max_failures_budget():
    """Hops allowed while the call is under its failure budget."""
    policy = ConfigurableFailoverRetryPolicy(max_failures=2)

    assert policy.should_try_next_host(io_error(HOST), context_with_failures(1)) is True
    assert policy.should_try_next_host(io_error(HOST), context_with_failures(2)) is False


def test_from_settings(test_settings):
    """Pass count and failure budget come from settings."""
    test_settings.FAILOVER_RETRY_COUNT = 4
    test_settings.FAILOVER_MAX_FAILURES = 6

    policy = ConfigurableFailoverRetryPolicy.from_settings(test_settings)

    assert policy.retry_count == 4
    assert policy.max_failures == 6
    assert policy.abort_on == ()
