"""
Host-independent request description.

A FailoverRequest carries everything needed to issue one HTTP request
except the target host. The same instance is replayed verbatim against
each candidate host, so the body is held as bytes rather than a stream.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FailoverRequest(BaseModel):
    """Replayable HTTP request (method, path, params, headers, body)."""
    model_config = ConfigDict(frozen=True)

    method: str = Field(default="GET", description="HTTP method")
    path: str = Field(default="/", description="Absolute path on the target host, e.g. '/file.txt'")
    params: dict[str, str] = Field(default_factory=dict, description="Query parameters")
    headers: dict[str, str] = Field(default_factory=dict, description="Request headers")
    content: Optional[bytes] = Field(default=None, description="Request body (replayable bytes)")

    @field_validator("method")
    @classmethod
    def _upper_method(cls, value: str) -> str:
        value = value.strip().upper()
        if not value:
            raise ValueError("method must not be empty")
        return value

    @field_validator("path")
    @classmethod
    def _absolute_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError(f"path must start with '/': {value!r}")
        return value
