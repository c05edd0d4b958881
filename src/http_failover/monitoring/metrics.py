"""Prometheus metrics for the failover client.

Scraped from whatever /metrics endpoint the embedding application exposes.
Useful alert signals:
- failover_hops_total (a primary host is flapping or down)
- failover_exhausted_total (every candidate host failed for a request)
"""

from prometheus_client import Counter

# === Attempt Metrics ===

host_attempts_total = Counter(
    "failover_host_attempts_total",
    "Total single-host attempts by outcome",
    ["outcome"],
)
"""
Single-host attempts counter.

Labels:
- outcome: success (host returned a response), io_error (HostIOError raised)
"""

# === Failover Decision Metrics ===

hops_total = Counter(
    "failover_hops_total",
    "Total hops from a failed host to the next host in the list",
)

pass_restarts_total = Counter(
    "failover_pass_restarts_total",
    "Total restarts of a full pass over the target list",
)

exhausted_total = Counter(
    "failover_exhausted_total",
    "Total requests that failed on every permitted host and pass",
)
"""
Exhausted requests counter.

Alert thresholds:
- WARN: any increase (all replicas unreachable for some request)
"""
