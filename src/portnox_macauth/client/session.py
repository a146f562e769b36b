"""Retrying API session for the Portnox JSON API."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any

from tenacity import Retrying, before_sleep_log, retry_if_exception, stop_after_attempt

from portnox_macauth.client.errors import PortnoxError
from portnox_macauth.client.http import PortnoxHTTP, mask_secret
from portnox_macauth.client.retry import RetryPolicy

logger = logging.getLogger(__name__)


def _sleep(seconds: float) -> None:
    time.sleep(seconds)


@dataclass(frozen=True)
class PortnoxCredentials:
    """Immutable API credential.

    Args:
        api_key: Bearer token issued by the Portnox portal.
    """

    api_key: str

    def __repr__(self) -> str:
        return f"PortnoxCredentials(api_key={mask_secret(self.api_key)!r})"


class PortnoxSession:
    """Issues Portnox API calls with bounded retry on rate limiting.

    Wraps :class:`.PortnoxHTTP` and adds:
    - Up to :attr:`RetryPolicy.max_attempts` attempts per call.
    - Exponential backoff with up to one second of random jitter between
      attempts on HTTP 429 (and, when enabled, on transport errors).
    - Immediate propagation of every other error.

    Args:
        base_url: API base URL.
        credentials: API key holder.
        retry_policy: Attempt count and backoff interval (default 3 x 1s).
        timeout_s: Request timeout in seconds (default 60).
        verify_tls: Whether to verify TLS certificates (default True).
    """

    def __init__(
        self,
        base_url: str,
        credentials: PortnoxCredentials,
        retry_policy: RetryPolicy | None = None,
        timeout_s: float = 60.0,
        verify_tls: bool = True,
    ) -> None:
        self._http: PortnoxHTTP = PortnoxHTTP(
            base_url=base_url,
            api_key=credentials.api_key,
            timeout_s=timeout_s,
            verify_tls=verify_tls,
        )
        self._credentials: PortnoxCredentials = credentials
        self.retry_policy: RetryPolicy = retry_policy or RetryPolicy()

    # ------------------------------------------------------------------
    # Public request methods
    # ------------------------------------------------------------------

    def request(
        self,
        method: str,
        path: str,
        payload: Any = None,
    ) -> bytes:
        """Perform an API call, retrying on rate limiting.

        Args:
            method: HTTP verb.
            path: API path relative to the base URL.
            payload: JSON-serialisable body, or ``None``.

        Returns:
            Raw response body of the first successful attempt.

        Raises:
            PortnoxRateLimitError: If every attempt was rate limited (the
                last error is raised).
            PortnoxError: Any non-retryable error, raised on first occurrence.
        """
        policy = self.retry_policy
        logger.debug(
            "Starting %s %s with max_attempts=%d retry_interval=%s",
            method, path, policy.max_attempts, policy.retry_interval,
        )
        retrying = Retrying(
            stop=stop_after_attempt(policy.max_attempts),
            wait=policy.wait_strategy(),
            retry=retry_if_exception(policy.is_retryable),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            sleep=_sleep,
            reraise=True,
        )
        try:
            return retrying(self._http.request, method, path, payload)
        except PortnoxError as exc:
            logger.error("%s %s failed: %s", method, path, exc)
            raise

    def get(self, path: str) -> bytes:
        return self.request("GET", path)

    def post(self, path: str, payload: Any = None) -> bytes:
        return self.request("POST", path, payload)

    def delete(self, path: str, payload: Any = None) -> bytes:
        return self.request("DELETE", path, payload)

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._http.close()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def base_url(self) -> str:
        return self._http.base_url
