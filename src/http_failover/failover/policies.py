"""
Failover retry policies.

A policy answers two questions for the failover client:

1. ``retry_count``: how many full passes over the target list to make
   before giving up (1 = walk the list once, never restart).
2. ``should_try_next_host(error, context)``: after a host failed with a
   HostIOError, hop to the next host or stop right here?

Policies are stateless and may be shared by concurrent calls. Anything
they need to remember between attempts belongs in the ExecutionContext.
"""

from typing import Optional, Protocol, runtime_checkable

import structlog

from http_failover.config import Settings
from http_failover.failover.context import ExecutionContext
from http_failover.transport.exceptions import HostIOError

logger = structlog.get_logger(__name__)


@runtime_checkable
class FailoverRetryPolicy(Protocol):
    """
    Protocol for failover retry policies.

    ``should_try_next_host`` may read and write the context but must not
    keep a reference to ``error`` beyond the call.
    """

    @property
    def retry_count(self) -> int:
        """Number of full passes over the target list (>= 1)."""
        ...

    def should_try_next_host(self, error: HostIOError, context: ExecutionContext) -> bool:
        """
        Decide whether to hop to the next host after ``error``.

        Args:
            error: Failure raised by the host that was just attempted
            context: Execution context shared by all attempts of this call

        Returns:
            True to try the next host, False to stop and raise ``error``
        """
        ...


class DefaultFailoverRetryPolicy:
    """
    Try every host once.

    Always hops on an I/O failure and never restarts the pass. This is the
    policy installed when none is configured.
    """

    @property
    def retry_count(self) -> int:
        return 1

    def should_try_next_host(self, error: HostIOError, context: ExecutionContext) -> bool:
        return True

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class ConfigurableFailoverRetryPolicy:
    """
    Policy with multiple passes, failure-class vetoes and a failure budget.

    Note that a restarted pass begins again at the first host, including
    hosts that already failed earlier in the call.

    Attributes:
        retry_count: Full passes over the target list
        abort_on: Failure classes for which failover is abandoned at once
        max_failures: Stop hopping once this call has seen this many host
            failures (None = unlimited)
    """

    def __init__(
        self,
        retry_count: int = 1,
        abort_on: tuple[type[HostIOError], ...] = (),
        max_failures: Optional[int] = None,
    ):
        if retry_count < 1:
            raise ValueError("retry_count must be >= 1")
        if max_failures is not None and max_failures < 1:
            raise ValueError("max_failures must be >= 1")
        self._retry_count = retry_count
        self.abort_on = tuple(abort_on)
        self.max_failures = max_failures

    @classmethod
    def from_settings(cls, settings: Settings) -> "ConfigurableFailoverRetryPolicy":
        """Build from FAILOVER_RETRY_COUNT and FAILOVER_MAX_FAILURES."""
        return cls(
            retry_count=settings.FAILOVER_RETRY_COUNT,
            max_failures=settings.FAILOVER_MAX_FAILURES,
        )

    @property
    def retry_count(self) -> int:
        return self._retry_count

    def should_try_next_host(self, error: HostIOError, context: ExecutionContext) -> bool:
        if self.abort_on and isinstance(error, self.abort_on):
            logger.info(
                "Failover abandoned for failure class",
                error_type=type(error).__name__,
            )
            return False

        if self.max_failures is not None and context.failure_count >= self.max_failures:
            logger.info(
                "Failover abandoned, failure budget spent",
                failure_count=context.failure_count,
                max_failures=self.max_failures,
            )
            return False

        return True

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"retry_count={self._retry_count}, "
            f"abort_on={[cls.__name__ for cls in self.abort_on]}, "
            f"max_failures={self.max_failures})"
        )
