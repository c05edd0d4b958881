"""
Failover client exceptions.

Host-level I/O failures live in the transport layer (HostIOError); this
module adds the caller errors detected before any network activity.
"""

from http_failover.transport.exceptions import FailoverError


class InvalidTargetsError(FailoverError, ValueError):
    """
    Raised when the target host list is None or empty.

    This is a caller error, never a failover condition: it is raised
    synchronously before any host is contacted and is never retried.
    """

    def __init__(self, message: str = "targets parameter may not be None or empty"):
        super().__init__(message)
        self.message = message
