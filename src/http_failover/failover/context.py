"""
Per-call execution context.

One ExecutionContext is shared by every attempt of a single execute() call:
all hosts, all passes. It is the only place cross-attempt state may live,
which keeps concurrent calls on the same client from interfering.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from http_failover.models.hosts import HttpHost


@dataclass(frozen=True)
class AttemptRecord:
    """
    Outcome of one single-host attempt.

    Only the failure's class name and message are kept, never the
    exception object itself.

    Attributes:
        host: Host the attempt was made against
        pass_number: 1-indexed pass over the target list
        succeeded: True if the host returned a response
        error_type: Failure class name (None on success)
        error_message: Failure message (None on success)
    """

    host: HttpHost
    pass_number: int
    succeeded: bool
    error_type: Optional[str] = None
    error_message: Optional[str] = None


@dataclass
class ExecutionContext:
    """
    Mutable, call-scoped bag of state visible to the retry policy.

    The failover client updates ``pass_number``, ``current_target`` and
    ``attempts`` as it goes; policies and host clients may keep their own
    bookkeeping in ``attributes``. Never share one instance between
    concurrent calls.
    """

    attributes: dict[str, Any] = field(default_factory=dict)
    attempts: list[AttemptRecord] = field(default_factory=list)
    pass_number: int = 0
    current_target: Optional[HttpHost] = None

    def get_attribute(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)

    def set_attribute(self, name: str, value: Any) -> None:
        self.attributes[name] = value

    def record_success(self, host: HttpHost) -> None:
        self.attempts.append(AttemptRecord(host=host, pass_number=self.pass_number, succeeded=True))

    def record_failure(self, host: HttpHost, error: BaseException) -> None:
        self.attempts.append(
            AttemptRecord(
                host=host,
                pass_number=self.pass_number,
                succeeded=False,
                error_type=type(error).__name__,
                error_message=str(error),
            )
        )

    @property
    def failure_count(self) -> int:
        """Failed attempts so far in this call, across all passes."""
        return sum(1 for attempt in self.attempts if not attempt.succeeded)

    def failures_for(self, host: HttpHost) -> int:
        """Failed attempts against ``host`` so far in this call."""
        return sum(1 for attempt in self.attempts if not attempt.succeeded and attempt.host == host)

    @property
    def hosts_tried(self) -> list[HttpHost]:
        """Hosts in the order they were attempted (repeats across passes kept)."""
        return [attempt.host for attempt in self.attempts]
