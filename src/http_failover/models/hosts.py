"""
Target host descriptors.

An HttpHost identifies one interchangeable backend (replica, mirror) by
scheme, hostname and port. A list of them, in priority order, is what the
failover client walks when executing a request.
"""

from typing import Literal, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator


class HttpHost(BaseModel):
    """
    Immutable host identity (scheme + hostname + port).

    Frozen so it is hashable and can key per-call bookkeeping in the
    execution context.
    """
    model_config = ConfigDict(frozen=True)

    hostname: str = Field(..., min_length=1, description="DNS name or IP address")
    port: Optional[int] = Field(default=None, ge=1, le=65535, description="TCP port (None = scheme default)")
    scheme: Literal["http", "https"] = Field(default="http", description="URL scheme")

    @field_validator("hostname")
    @classmethod
    def _strip_hostname(cls, value: str) -> str:
        value = value.strip()
        if not value or "/" in value:
            raise ValueError(f"invalid hostname: {value!r}")
        return value

    @classmethod
    def from_url(cls, url: str) -> "HttpHost":
        """Build a host from a URL such as ``https://replica-b:8443``. Path and query are ignored."""
        parsed = httpx.URL(url)
        if not parsed.host:
            raise ValueError(f"URL has no host: {url!r}")
        return cls(hostname=parsed.host, port=parsed.port, scheme=parsed.scheme or "http")

    @property
    def base_url(self) -> str:
        """Render ``scheme://hostname[:port]`` (IPv6 literals are bracketed)."""
        host = f"[{self.hostname}]" if ":" in self.hostname else self.hostname
        if self.port is None:
            return f"{self.scheme}://{host}"
        return f"{self.scheme}://{host}:{self.port}"

    def __str__(self) -> str:
        return self.base_url
