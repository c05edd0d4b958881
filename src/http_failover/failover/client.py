"""
Failover client: one logical request, several interchangeable hosts.

The client walks an ordered list of target hosts and sends the same
request to each in turn until one answers. Only HostIOError triggers
failover; any other exception propagates immediately.

Two loops, both driven by the installed FailoverRetryPolicy:

1. Inner loop (one pass): try hosts in list order. After a failure, hop to
   the next host unless it was the last one or the policy vetoes the hop.
2. Outer loop: if a pass fails, restart from the first host until
   ``policy.retry_count`` passes have been made, then re-raise the last
   failure unchanged.

Usage:
    >>> client = FailoverClient()
    >>> hosts = [HttpHost(hostname="replica-a", port=9090),
    ...          HttpHost(hostname="replica-b", port=9191)]
    >>> text = client.execute_with_handler(hosts, FailoverRequest(path="/file.txt"),
    ...                                    lambda r: r.read().decode())
"""

import inspect
import threading
from typing import Awaitable, Callable, Iterable, Optional, TypeVar, Union

import httpx
import structlog

from http_failover import config
from http_failover.config import Settings
from http_failover.failover.context import ExecutionContext
from http_failover.failover.entity import aconsume_quietly, consume_quietly
from http_failover.failover.exceptions import InvalidTargetsError
from http_failover.failover.policies import DefaultFailoverRetryPolicy, FailoverRetryPolicy
from http_failover.models.hosts import HttpHost
from http_failover.models.request import FailoverRequest
from http_failover.monitoring.metrics import (
    exhausted_total,
    hops_total,
    host_attempts_total,
    pass_restarts_total,
)
from http_failover.transport.base_client import AsyncBaseHostClient, BaseHostClient
from http_failover.transport.exceptions import HostIOError
from http_failover.transport.httpx_client import AsyncHttpxHostClient, HttpxHostClient

logger = structlog.get_logger(__name__)

T = TypeVar("T")

Target = Union[HttpHost, str]


class PolicyHolder:
    """
    The currently installed retry policy, swapped under a lock.

    The policy object itself is invoked outside the lock; it is expected to
    be stateless.
    """

    def __init__(self, policy: Optional[FailoverRetryPolicy] = None):
        self._lock = threading.Lock()
        self._policy = policy

    def get(self) -> FailoverRetryPolicy:
        """Return the installed policy, installing the default on first use."""
        with self._lock:
            if self._policy is None:
                self._policy = DefaultFailoverRetryPolicy()
            return self._policy

    def set(self, policy: Optional[FailoverRetryPolicy]) -> None:
        """Install ``policy``; None reverts to the lazily created default."""
        with self._lock:
            self._policy = policy


def normalize_targets(targets: Optional[Iterable[Target]]) -> tuple[HttpHost, ...]:
    """
    Validate and freeze the target list.

    Strings are parsed as URLs. The result is a tuple so the order cannot
    change during the call.

    Raises:
        InvalidTargetsError: targets is None or empty
    """
    if targets is None:
        raise InvalidTargetsError()
    hosts = tuple(t if isinstance(t, HttpHost) else HttpHost.from_url(t) for t in targets)
    if not hosts:
        raise InvalidTargetsError()
    return hosts


class _FailoverDecisions:
    """Policy handling, bookkeeping and logging shared by the sync and async clients."""

    def __init__(
        self,
        retry_policy: Optional[FailoverRetryPolicy] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or config.settings
        self._policy_holder = PolicyHolder(retry_policy)

    @property
    def retry_policy(self) -> FailoverRetryPolicy:
        """Installed retry policy (DefaultFailoverRetryPolicy unless set)."""
        return self._policy_holder.get()

    @retry_policy.setter
    def retry_policy(self, policy: Optional[FailoverRetryPolicy]) -> None:
        self._policy_holder.set(policy)
        logger.info("Failover retry policy installed", policy=repr(policy))

    def _on_host_success(self, host: HttpHost, context: ExecutionContext) -> None:
        context.record_success(host)
        if self.settings.PROMETHEUS_ENABLED:
            host_attempts_total.labels(outcome="success").inc()
        logger.debug("Host answered", host=str(host), pass_number=context.pass_number)

    def _should_hop(
        self,
        error: HostIOError,
        host: HttpHost,
        is_last: bool,
        context: ExecutionContext,
    ) -> bool:
        """Record a host failure and decide whether to try the next host."""
        context.record_failure(host, error)
        if self.settings.PROMETHEUS_ENABLED:
            host_attempts_total.labels(outcome="io_error").inc()

        # the last host never hops; the policy is not consulted
        if is_last or not self.retry_policy.should_try_next_host(error, context):
            return False

        if self.settings.PROMETHEUS_ENABLED:
            hops_total.inc()
        self._log_retry(error, host, context, "Trying request on next target")
        return True

    def _should_restart_pass(self, error: HostIOError, context: ExecutionContext) -> bool:
        """Decide whether a failed pass is followed by another full pass."""
        retry_count = self.retry_policy.retry_count
        if context.pass_number >= retry_count:
            if self.settings.PROMETHEUS_ENABLED:
                exhausted_total.inc()
            logger.error(
                "All failover targets exhausted",
                passes=context.pass_number,
                retry_count=retry_count,
                attempts=len(context.attempts),
                error_type=type(error).__name__,
                error=str(error),
            )
            return False

        if self.settings.PROMETHEUS_ENABLED:
            pass_restarts_total.inc()
        self._log_retry(error, context.current_target, context, "Restarting pass over targets")
        return True

    def _log_retry(
        self,
        error: HostIOError,
        host: Optional[HttpHost],
        context: ExecutionContext,
        note: str,
    ) -> None:
        logger.warning(
            f"I/O exception ({type(error).__name__}) caught when processing request: {error}",
            error_type=type(error).__name__,
            error=str(error),
            host=str(host) if host else None,
            pass_number=context.pass_number,
        )
        logger.debug(str(error), exc_info=error)
        logger.info(note, pass_number=context.pass_number)


class FailoverClient(_FailoverDecisions):
    """
    Synchronous failover client.

    Wraps a single-host client (HttpxHostClient unless one is supplied) and
    adds execute methods that retry the same request on multiple hosts.

    Concurrent execute() calls on one instance are safe as long as each
    call has its own ExecutionContext, which is the default.

    Attributes:
        host_client: Single-host client performing each attempt
        settings: Settings used for the default host client and metrics
    """

    def __init__(
        self,
        host_client: Optional[BaseHostClient] = None,
        retry_policy: Optional[FailoverRetryPolicy] = None,
        settings: Optional[Settings] = None,
    ):
        super().__init__(retry_policy, settings)
        self._owns_host_client = host_client is None
        self.host_client = host_client or HttpxHostClient(settings=self.settings)

        logger.info(
            "FailoverClient initialized",
            host_client=self.host_client.__class__.__name__,
            retry_policy=repr(retry_policy) if retry_policy else "default",
        )

    def execute(
        self,
        targets: Optional[Iterable[Target]],
        request: FailoverRequest,
        context: Optional[ExecutionContext] = None,
    ) -> httpx.Response:
        """
        Execute ``request`` on the targets until one host answers.

        Args:
            targets: Candidate hosts in priority order
            request: Request replayed verbatim on each host
            context: Execution context, or None for a fresh one

        Returns:
            The first response obtained; its body is unread and the caller
            must read or close it

        Raises:
            InvalidTargetsError: targets is None or empty (nothing is sent)
            HostIOError: the last failure once hosts and passes are exhausted
        """
        hosts = normalize_targets(targets)
        if context is None:
            context = ExecutionContext()

        context.pass_number = 1
        while True:
            try:
                return self._execute_pass(hosts, request, context)
            except HostIOError as e:
                if not self._should_restart_pass(e, context):
                    raise
            context.pass_number += 1

    def _execute_pass(
        self,
        hosts: tuple[HttpHost, ...],
        request: FailoverRequest,
        context: ExecutionContext,
    ) -> httpx.Response:
        last_index = len(hosts) - 1
        for index, host in enumerate(hosts):
            context.current_target = host
            try:
                response = self.host_client.execute_on_host(host, request, context)
            except HostIOError as e:
                if not self._should_hop(e, host, index == last_index, context):
                    raise
                continue
            self._on_host_success(host, context)
            return response
        raise AssertionError("unreachable: the last host either returns or raises")

    def execute_with_handler(
        self,
        targets: Optional[Iterable[Target]],
        request: FailoverRequest,
        handler: Callable[[httpx.Response], T],
        context: Optional[ExecutionContext] = None,
    ) -> T:
        """
        Execute ``request`` and process the response with ``handler``.

        The response body is drained and the response closed on every exit,
        whether or not the handler read it. If the handler raises, its
        exception propagates unchanged; a failure while draining is only
        logged.

        Returns:
            Whatever ``handler`` returns
        """
        response = self.execute(targets, request, context)
        try:
            return handler(response)
        finally:
            consume_quietly(response)

    def execute_on_host(
        self,
        host: HttpHost,
        request: FailoverRequest,
        context: Optional[ExecutionContext] = None,
    ) -> httpx.Response:
        """Execute ``request`` on one host, without failover."""
        return self.host_client.execute_on_host(host, request, context)

    def close(self) -> None:
        """Close the host client if this instance created it."""
        if self._owns_host_client:
            self.host_client.close()

    def __enter__(self) -> "FailoverClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class AsyncFailoverClient(_FailoverDecisions):
    """
    Asynchronous failover client.

    Same algorithm and guarantees as FailoverClient; attempts are still
    strictly sequential, never concurrent.
    """

    def __init__(
        self,
        host_client: Optional[AsyncBaseHostClient] = None,
        retry_policy: Optional[FailoverRetryPolicy] = None,
        settings: Optional[Settings] = None,
    ):
        super().__init__(retry_policy, settings)
        self._owns_host_client = host_client is None
        self.host_client = host_client or AsyncHttpxHostClient(settings=self.settings)

        logger.info(
            "AsyncFailoverClient initialized",
            host_client=self.host_client.__class__.__name__,
            retry_policy=repr(retry_policy) if retry_policy else "default",
        )

    async def execute(
        self,
        targets: Optional[Iterable[Target]],
        request: FailoverRequest,
        context: Optional[ExecutionContext] = None,
    ) -> httpx.Response:
        """
        Execute ``request`` on the targets until one host answers.

        Raises:
            InvalidTargetsError: targets is None or empty (nothing is sent)
            HostIOError: the last failure once hosts and passes are exhausted
        """
        hosts = normalize_targets(targets)
        if context is None:
            context = ExecutionContext()

        context.pass_number = 1
        while True:
            try:
                return await self._execute_pass(hosts, request, context)
            except HostIOError as e:
                if not self._should_restart_pass(e, context):
                    raise
            context.pass_number += 1

    async def _execute_pass(
        self,
        hosts: tuple[HttpHost, ...],
        request: FailoverRequest,
        context: ExecutionContext,
    ) -> httpx.Response:
        last_index = len(hosts) - 1
        for index, host in enumerate(hosts):
            context.current_target = host
            try:
                response = await self.host_client.execute_on_host(host, request, context)
            except HostIOError as e:
                if not self._should_hop(e, host, index == last_index, context):
                    raise
                continue
            self._on_host_success(host, context)
            return response
        raise AssertionError("unreachable: the last host either returns or raises")

    async def execute_with_handler(
        self,
        targets: Optional[Iterable[Target]],
        request: FailoverRequest,
        handler: Callable[[httpx.Response], Union[T, Awaitable[T]]],
        context: Optional[ExecutionContext] = None,
    ) -> T:
        """
        Execute ``request`` and process the response with ``handler``.

        ``handler`` may be a plain function or a coroutine function. Cleanup
        guarantees are the same as FailoverClient.execute_with_handler.
        """
        response = await self.execute(targets, request, context)
        try:
            result = handler(response)
            if inspect.isawaitable(result):
                result = await result
            return result
        finally:
            await aconsume_quietly(response)

    async def execute_on_host(
        self,
        host: HttpHost,
        request: FailoverRequest,
        context: Optional[ExecutionContext] = None,
    ) -> httpx.Response:
        """Execute ``request`` on one host, without failover."""
        return await self.host_client.execute_on_host(host, request, context)

    async def aclose(self) -> None:
        """Close the host client if this instance created it."""
        if self._owns_host_client:
            await self.host_client.aclose()

    async def __aenter__(self) -> "AsyncFailoverClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
