"""
Integration tests for the HTTP failover client.

Test the full stack with in-process replicas:
- FailoverClient + HttpxHostClient over httpx.MockTransport
- AsyncFailoverClient + AsyncHttpxHostClient
"""
