"""Monitoring and metrics instrumentation for the failover client.

Exports Prometheus counters for failover decisions.
"""

from http_failover.monitoring.metrics import (
    exhausted_total,
    hops_total,
    host_attempts_total,
    pass_restarts_total,
)

__all__ = [
    "host_attempts_total",
    "hops_total",
    "pass_restarts_total",
    "exhausted_total",
]
