"""
Unit tests for the HTTP failover client.

Test individual components in isolation:
- Models (host parsing, request validation)
- Failover loops (hops, pass restarts, vetoes, exhaustion)
- Retry policies
- Response cleanup around handlers
- httpx host client (error mapping via MockTransport)
"""
