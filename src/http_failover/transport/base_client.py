"""
Abstract single-host clients.

A host client performs exactly one request against exactly one host. The
failover client drives it once per attempt, always with the same
FailoverRequest, and relies on it to translate transport problems into
HostIOError. Connection pooling, TLS and redirects are its business.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

import httpx
import structlog

from http_failover.models.hosts import HttpHost
from http_failover.models.request import FailoverRequest

if TYPE_CHECKING:
    from http_failover.failover.context import ExecutionContext


logger = structlog.get_logger(__name__)


class BaseHostClient(ABC):
    """
    Abstract base class for synchronous single-host clients.

    Responsibilities:
    - Turn a FailoverRequest + HttpHost into a real HTTP exchange
    - Raise HostIOError (or a subclass) for connectivity/protocol failures
    - Return the response with its body unread, so the caller decides
      whether to read, stream or discard it

    Does NOT handle:
    - Choosing hosts or hopping between them (that's FailoverClient's job)
    - Interpreting status codes: a 503 is a response, not a failure
    """

    @abstractmethod
    def execute_on_host(
        self,
        host: HttpHost,
        request: FailoverRequest,
        context: Optional["ExecutionContext"] = None,
    ) -> httpx.Response:
        """
        Execute the request against a single host.

        Must support being called repeatedly with the same request object
        for different hosts.

        Raises:
            HostIOError: Connectivity, protocol or timeout failure
        """
        pass

    def close(self) -> None:
        """Release pooled connections. Default implementation does nothing."""
        logger.debug("Closing host client", client_class=self.__class__.__name__)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class AsyncBaseHostClient(ABC):
    """Asynchronous counterpart of BaseHostClient, same contract."""

    @abstractmethod
    async def execute_on_host(
        self,
        host: HttpHost,
        request: FailoverRequest,
        context: Optional["ExecutionContext"] = None,
    ) -> httpx.Response:
        """
        Execute the request against a single host.

        Raises:
            HostIOError: Connectivity, protocol or timeout failure
        """
        pass

    async def aclose(self) -> None:
        """Release pooled connections. Default implementation does nothing."""
        logger.debug("Closing async host client", client_class=self.__class__.__name__)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
