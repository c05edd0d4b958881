"""
Host failover for HTTP requests.

This module executes one logical request against an ordered list of
interchangeable hosts, hopping to the next host on I/O failure:

1. **Inner loop**: try hosts in list order, consult the policy after each failure
2. **Outer loop**: restart the whole pass up to ``policy.retry_count`` times
3. **Exhaustion**: re-raise the last HostIOError unchanged

Main Components:
    - FailoverClient / AsyncFailoverClient: execute with failover
    - FailoverRetryPolicy: Protocol deciding pass count and hop permission
    - ExecutionContext: per-call state shared by all attempts
    - consume / consume_quietly: response body cleanup

Usage:
    >>> from http_failover.failover import FailoverClient
    >>> client = FailoverClient()
    >>> response = client.execute(["http://localhost:9090", "http://localhost:9191"],
    ...                           FailoverRequest(path="/file.txt"))
"""

from http_failover.failover.client import (
    AsyncFailoverClient,
    FailoverClient,
    PolicyHolder,
    normalize_targets,
)
from http_failover.failover.context import AttemptRecord, ExecutionContext
from http_failover.failover.entity import aconsume, aconsume_quietly, consume, consume_quietly
from http_failover.failover.exceptions import InvalidTargetsError
from http_failover.failover.policies import (
    ConfigurableFailoverRetryPolicy,
    DefaultFailoverRetryPolicy,
    FailoverRetryPolicy,
)

__all__ = [
    "FailoverClient",
    "AsyncFailoverClient",
    "PolicyHolder",
    "normalize_targets",
    "ExecutionContext",
    "AttemptRecord",
    "InvalidTargetsError",
    "FailoverRetryPolicy",
    "DefaultFailoverRetryPolicy",
    "ConfigurableFailoverRetryPolicy",
    "consume",
    "consume_quietly",
    "aconsume",
    "aconsume_quietly",
]
