"""
Exceptions for the single-host transport layer.

HostIOError and its subclasses are the only failures the failover client
treats as host-level I/O problems: catching one triggers the retry policy's
hop decision. Anything else raised by a host client is considered a
programming error and propagates immediately.
"""

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from http_failover.models.hosts import HttpHost


class FailoverError(Exception):
    """
    Base exception for all failover client errors.

    All package-specific exceptions inherit from this to allow catching
    any failover-related error with a single except clause.
    """


class HostIOError(FailoverError):
    """
    Raised when a request against a single host fails at the I/O level.

    Includes connection refused, DNS failures, resets, protocol errors and
    timeouts. This error type is subject to the failover retry policy.

    Attributes:
        message: Human-readable description
        host: Host the attempt was made against (None if unknown)
        details: Extra diagnostic data (error type, attempt, ...)
    """

    def __init__(
        self,
        message: str,
        host: Optional["HttpHost"] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.host = host
        self.details = details or {}


class HostConnectionError(HostIOError):
    """
    Raised when the host cannot be reached or the exchange breaks mid-flight.

    Wraps httpx transport errors (ConnectError, ReadError, RemoteProtocolError, ...).
    """
    pass


class HostTimeoutError(HostConnectionError):
    """
    Raised when the host does not answer within the configured timeout.

    A connection error too, but separate so policies can treat slow
    hosts differently from unreachable ones.
    """
    pass
