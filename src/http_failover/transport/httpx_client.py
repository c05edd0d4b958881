"""
httpx-backed single-host clients.

Communicates with one target host per call using a persistent httpx client
(connection pooling, keep-alive, TLS, redirects). Responses are returned
with their body unread (``stream=True``); the failover layer guarantees the
body is drained or closed afterwards.

Error mapping:
- httpx.TimeoutException -> HostTimeoutError
- httpx.TransportError   -> HostConnectionError
- anything else          -> propagates unchanged (programming error)
"""

from typing import TYPE_CHECKING, Optional

import httpx
import structlog

from http_failover import config
from http_failover.config import Settings
from http_failover.models.hosts import HttpHost
from http_failover.models.request import FailoverRequest
from http_failover.transport.base_client import AsyncBaseHostClient, BaseHostClient
from http_failover.transport.exceptions import (
    HostConnectionError,
    HostIOError,
    HostTimeoutError,
)

if TYPE_CHECKING:
    from http_failover.failover.context import ExecutionContext


logger = structlog.get_logger(__name__)


def build_limits(settings: Settings) -> httpx.Limits:
    """Connection pool limits from settings."""
    return httpx.Limits(
        max_connections=settings.HTTP_MAX_CONNECTIONS,
        max_keepalive_connections=settings.HTTP_MAX_KEEPALIVE_CONNECTIONS,
        keepalive_expiry=settings.HTTP_KEEPALIVE_EXPIRY,
    )


def request_url(host: HttpHost, request: FailoverRequest) -> str:
    """Absolute URL for ``request`` on ``host``."""
    return host.base_url + request.path


def translate_transport_error(exc: httpx.TransportError, host: HttpHost) -> HostIOError:
    """Map an httpx transport failure onto the HostIOError family."""
    details = {"error_type": type(exc).__name__, "host": host.base_url}
    if isinstance(exc, httpx.TimeoutException):
        return HostTimeoutError(f"Request to {host} timed out: {exc}", host=host, details=details)
    return HostConnectionError(f"I/O error talking to {host}: {exc}", host=host, details=details)


class HttpxHostClient(BaseHostClient):
    """
    Synchronous host client using a persistent ``httpx.Client``.

    A caller-built client can be injected (custom auth, transport, proxies);
    it is then left open on close(). Otherwise one is created from Settings
    and owned by this object.
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or config.settings
        self._owns_client = client is None
        if client is None:
            client = httpx.Client(
                timeout=httpx.Timeout(self.settings.HTTP_TIMEOUT),
                limits=build_limits(self.settings),
                follow_redirects=self.settings.HTTP_FOLLOW_REDIRECTS,
            )
        self._client = client

        logger.debug(
            "Host client initialized",
            client_class=self.__class__.__name__,
            owns_client=self._owns_client,
        )

    @property
    def client(self) -> httpx.Client:
        """The wrapped httpx client."""
        return self._client

    def execute_on_host(
        self,
        host: HttpHost,
        request: FailoverRequest,
        context: Optional["ExecutionContext"] = None,
    ) -> httpx.Response:
        http_request = self._client.build_request(
            request.method,
            request_url(host, request),
            params=request.params or None,
            headers=request.headers or None,
            content=request.content,
        )
        logger.debug("Sending request to host", method=request.method, path=request.path, host=str(host))
        try:
            return self._client.send(http_request, stream=True)
        except httpx.TransportError as e:
            raise translate_transport_error(e, host) from e

    def close(self) -> None:
        if self._owns_client and not self._client.is_closed:
            self._client.close()
            logger.debug("Closed owned httpx client")


class AsyncHttpxHostClient(AsyncBaseHostClient):
    """Asynchronous host client using a persistent ``httpx.AsyncClient``."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or config.settings
        self._owns_client = client is None
        if client is None:
            client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.settings.HTTP_TIMEOUT),
                limits=build_limits(self.settings),
                follow_redirects=self.settings.HTTP_FOLLOW_REDIRECTS,
            )
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        """The wrapped httpx async client."""
        return self._client

    async def execute_on_host(
        self,
        host: HttpHost,
        request: FailoverRequest,
        context: Optional["ExecutionContext"] = None,
    ) -> httpx.Response:
        http_request = self._client.build_request(
            request.method,
            request_url(host, request),
            params=request.params or None,
            headers=request.headers or None,
            content=request.content,
        )
        logger.debug("Sending request to host", method=request.method, path=request.path, host=str(host))
        try:
            return await self._client.send(http_request, stream=True)
        except httpx.TransportError as e:
            raise translate_transport_error(e, host) from e

    async def aclose(self) -> None:
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed owned httpx async client")
