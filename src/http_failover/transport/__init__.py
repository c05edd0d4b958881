"""
Single-host transport abstraction and httpx implementations.

Components:
- BaseHostClient / AsyncBaseHostClient: one request against one host
- HttpxHostClient / AsyncHttpxHostClient: httpx-backed implementations
- exceptions: HostIOError family (the only failures subject to failover)
"""

from http_failover.transport.base_client import AsyncBaseHostClient, BaseHostClient
from http_failover.transport.exceptions import (
    FailoverError,
    HostConnectionError,
    HostIOError,
    HostTimeoutError,
)
from http_failover.transport.httpx_client import AsyncHttpxHostClient, HttpxHostClient

__all__ = [
    "BaseHostClient",
    "AsyncBaseHostClient",
    "HttpxHostClient",
    "AsyncHttpxHostClient",
    "FailoverError",
    "HostIOError",
    "HostConnectionError",
    "HostTimeoutError",
]
