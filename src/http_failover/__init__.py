"""
HTTP failover client.

Executes one logical HTTP request against an ordered list of
interchangeable hosts (replicas, mirrors), moving on to the next host when
a host-level I/O failure occurs:
- Pluggable retry policy (passes over the list, hop permission)
- Per-call execution context visible to the policy
- Guaranteed response body cleanup around response handlers

Architecture: FailoverClient -> single-host client (httpx) per attempt
"""

__version__ = "0.1.0"

from http_failover.failover import (
    AsyncFailoverClient,
    ConfigurableFailoverRetryPolicy,
    DefaultFailoverRetryPolicy,
    ExecutionContext,
    FailoverClient,
    FailoverRetryPolicy,
    InvalidTargetsError,
)
from http_failover.models import FailoverRequest, HttpHost
from http_failover.transport import (
    FailoverError,
    HostConnectionError,
    HostIOError,
    HostTimeoutError,
)

__all__ = [
    "FailoverClient",
    "AsyncFailoverClient",
    "FailoverRetryPolicy",
    "DefaultFailoverRetryPolicy",
    "ConfigurableFailoverRetryPolicy",
    "ExecutionContext",
    "HttpHost",
    "FailoverRequest",
    "FailoverError",
    "InvalidTargetsError",
    "HostIOError",
    "HostConnectionError",
    "HostTimeoutError",
]
