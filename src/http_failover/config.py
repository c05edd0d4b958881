"""
Configuration settings for the HTTP failover client.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from http_failover.models.hosts import HttpHost


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "HTTP Failover Client"
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    # === Failover Policy ===
    FAILOVER_RETRY_COUNT: int = Field(default=1, ge=1)  # Full passes over the target list
    FAILOVER_MAX_FAILURES: Optional[int] = Field(default=None, ge=1)  # Per-call failure budget
    FAILOVER_TARGETS: list[str] = []  # e.g., ["http://replica-a:8080", "http://replica-b:8080"]

    # === Single-host HTTP transport (httpx) ===
    HTTP_TIMEOUT: float = 30.0  # seconds
    HTTP_MAX_CONNECTIONS: int = 100
    HTTP_MAX_KEEPALIVE_CONNECTIONS: int = 20
    HTTP_KEEPALIVE_EXPIRY: float = 30.0
    HTTP_FOLLOW_REDIRECTS: bool = True

    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True

    def target_hosts(self) -> list[HttpHost]:
        """Parse FAILOVER_TARGETS into ordered HttpHost descriptors."""
        return [HttpHost.from_url(url) for url in self.FAILOVER_TARGETS]


# Global settings instance
settings = Settings()
