"""Retry policy and backoff schedule for Portnox API calls."""

from __future__ import annotations

from dataclasses import dataclass

from tenacity import wait_exponential, wait_random
from tenacity.wait import wait_base

from portnox_macauth.client.errors import PortnoxRateLimitError, PortnoxTransportError


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retry settings shared by every request of a session.

    Args:
        retries: Maximum number of attempts per call (values below 1 still
            make a single attempt).
        retry_interval: Base backoff interval in seconds; attempt *n* waits
            ``retry_interval * 2 ** (n - 1)`` plus the jitter.
        retry_transport_errors: Also retry :class:`PortnoxTransportError`
            (timeouts, connection resets).  Off by default: only HTTP 429 is
            retried unless this is set.
        jitter: Upper bound in seconds of the random delay added to every
            backoff.
    """

    retries: int = 3
    retry_interval: float = 1.0
    retry_transport_errors: bool = False
    jitter: float = 1.0

    @property
    def max_attempts(self) -> int:
        return max(1, self.retries)

    def is_retryable(self, exc: BaseException) -> bool:
        """Return ``True`` if *exc* should trigger another attempt."""
        if isinstance(exc, PortnoxRateLimitError):
            return True
        return self.retry_transport_errors and isinstance(exc, PortnoxTransportError)

    def wait_strategy(self) -> wait_base:
        """Return the tenacity wait: exponential backoff plus random jitter."""
        return wait_exponential(multiplier=self.retry_interval) + wait_random(0, self.jitter)
