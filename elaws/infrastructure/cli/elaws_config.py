"""
e-Gov Law API client configuration.

Centralizes configuration for the client and CLI,
including default values and environment variables.
"""
from dataclasses import dataclass
from typing import Dict, Any
import os


@dataclass(frozen=True)
class ElawsConfig:
    """Configuration for e-Gov Law API access."""

    # Endpoint
    base_url: str = "https://elaws.e-gov.go.jp/api"
    api_version: int = 1

    # HTTP
    timeout: float = 30.0  # Seconds
    user_agent: str = "elaws-client/0.1"

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False

    @property
    def api_root(self) -> str:
        """Base URL including the API version, e.g. https://elaws.e-gov.go.jp/api/1."""
        return f"{self.base_url.rstrip('/')}/{self.api_version}"

    @classmethod
    def from_env(cls) -> 'ElawsConfig':
        """Create config from environment variables."""
        return cls(
            base_url=os.getenv("ELAWS_BASE_URL", "https://elaws.e-gov.go.jp/api"),
            api_version=int(os.getenv("ELAWS_API_VERSION", "1")),
            timeout=float(os.getenv("ELAWS_TIMEOUT", "30.0")),
            user_agent=os.getenv("ELAWS_USER_AGENT", "elaws-client/0.1"),
            log_level=os.getenv("ELAWS_LOG_LEVEL", "INFO").upper(),
            json_logs=os.getenv("ELAWS_JSON_LOGS", "false").lower() == "true",
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "base_url": self.base_url,
            "api_version": self.api_version,
            "api_root": self.api_root,
            "timeout": self.timeout,
            "user_agent": self.user_agent,
            "log_level": self.log_level,
            "json_logs": self.json_logs,
        }
