"""Connection configuration for portnox-macauth."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any

from portnox_macauth.vendor.portnox.endpoints import DEFAULT_BASE_URL

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ProviderConfig:
    """Read-only settings for one configured client.

    Attributes:
        api_key: Bearer token (required).
        base_url: API base URL.
        retries: Maximum attempts per API call.
        retry_interval: Base backoff interval in seconds.
        timeout_s: Per-request timeout in seconds.
        verify_tls: Verify TLS certificates.
        retry_transport_errors: Retry timeouts and connection errors as well
            as HTTP 429.
    """

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    retries: int = 3
    retry_interval: float = 1.0
    timeout_s: float = 60.0
    verify_tls: bool = True
    retry_transport_errors: bool = False

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ValueError(
                "API key must be provided either explicitly or via the "
                "PORTNOX_API_KEY environment variable"
            )
        if self.retries < 1:
            raise ValueError(f"retries must be at least 1, got {self.retries}")
        if self.retry_interval < 0:
            raise ValueError(f"retry_interval must not be negative, got {self.retry_interval}")

    def __repr__(self) -> str:
        return (
            f"ProviderConfig(base_url={self.base_url!r}, retries={self.retries}, "
            f"retry_interval={self.retry_interval}, timeout_s={self.timeout_s}, "
            f"verify_tls={self.verify_tls})"
        )

    @classmethod
    def from_env(cls, **overrides: Any) -> ProviderConfig:
        """Build a config from ``PORTNOX_*`` environment variables.

        Keyword *overrides* that are not ``None`` win over the environment.

        Environment variables:
            PORTNOX_API_KEY (or TF_VAR_PORTNOX_API_KEY), PORTNOX_BASE_URL,
            PORTNOX_RETRIES, PORTNOX_RETRY_INTERVAL, PORTNOX_TIMEOUT,
            PORTNOX_VERIFY_TLS.

        Raises:
            ValueError: If no API key is available or a number is malformed.
        """
        env = os.environ
        values: dict[str, Any] = {
            "api_key": env.get("PORTNOX_API_KEY") or env.get("TF_VAR_PORTNOX_API_KEY", ""),
            "base_url": env.get("PORTNOX_BASE_URL", DEFAULT_BASE_URL),
            "retries": int(env.get("PORTNOX_RETRIES", "3")),
            "retry_interval": float(env.get("PORTNOX_RETRY_INTERVAL", "1")),
            "timeout_s": float(env.get("PORTNOX_TIMEOUT", "60")),
            "verify_tls": env.get("PORTNOX_VERIFY_TLS", "true").lower() in _TRUE_VALUES,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        logger.debug("Loaded configuration for %s", values["base_url"])
        return cls(**values)
