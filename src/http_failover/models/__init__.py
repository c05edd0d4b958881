"""
Pydantic data models for the failover client.

Includes:
- HttpHost: target host descriptor (scheme, hostname, port)
- FailoverRequest: host-independent, replayable request description
"""

from http_failover.models.hosts import HttpHost
from http_failover.models.request import FailoverRequest

__all__ = [
    "HttpHost",
    "FailoverRequest",
]
