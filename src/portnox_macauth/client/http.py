"""Low-level HTTP client wrapper for the Portnox JSON API."""

from __future__ import annotations

import importlib.metadata
import json
import logging
from typing import Any

import requests

from portnox_macauth.client.errors import (
    HTTP_TOO_MANY_REQUESTS,
    PortnoxRateLimitError,
    PortnoxRequestError,
    PortnoxTransportError,
)

logger = logging.getLogger(__name__)

try:
    _VERSION: str = importlib.metadata.version("portnox-macauth")
except importlib.metadata.PackageNotFoundError:
    _VERSION = "0.0.0"

_USER_AGENT: str = f"portnox-macauth/{_VERSION}"

_MASK: str = "*" * 25


def _normalise_base_url(url: str) -> str:
    """Ensure the URL has a scheme and no trailing slash."""
    url = url.rstrip("/")
    if not url.startswith(("http://", "https://")):
        url = "https://" + url
    return url


def mask_secret(secret: str) -> str:
    """Return *secret* with everything but its first and last character masked."""
    if len(secret) < 2:
        return _MASK
    return secret[:1] + _MASK + secret[-1:]


class PortnoxHTTP:
    """Low-level HTTP wrapper around :class:`requests.Session`.

    Sends one bearer-authenticated JSON request per call and maps
    transport/HTTP failures to :mod:`.errors` types.  Every exchange is
    dumped to the DEBUG log with the API key masked.

    Args:
        base_url: API base URL, e.g.
            ``https://clear.portnox.com:8081/CloudPortalBackEnd``.
        api_key: Bearer token sent on every request.
        timeout_s: Request timeout in seconds (default 60).
        verify_tls: Whether to verify TLS certificates (default True).
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout_s: float = 60.0,
        verify_tls: bool = True,
    ) -> None:
        self.base_url: str = _normalise_base_url(base_url)
        self.timeout_s: float = timeout_s
        self.verify_tls: bool = verify_tls
        self._api_key: str = api_key
        self._session: requests.Session = requests.Session()
        self._session.headers.update(
            {
                "User-Agent": _USER_AGENT,
                "Content-Type": "application/json",
                "Authorization": f"Bearer {api_key}",
            }
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def request(
        self,
        method: str,
        path: str,
        payload: Any = None,
    ) -> bytes:
        """Send one JSON request to *path* and return the raw response body.

        Args:
            method: HTTP verb (``"GET"``, ``"POST"``, ``"DELETE"``).
            path: URL path relative to :attr:`base_url`.
            payload: JSON-serialisable body, or ``None`` for no body.

        Returns:
            The response body bytes for any status below 400.

        Raises:
            PortnoxTransportError: On any transport-level failure.
            PortnoxRateLimitError: On HTTP 429.
            PortnoxRequestError: On any other status of 400 or above.
        """
        url = self.base_url + path
        body = json.dumps(payload) if payload is not None else None
        self._log_request(method, url, body)
        try:
            resp = self._session.request(
                method,
                url,
                data=body,
                timeout=self.timeout_s,
                verify=self.verify_tls,
            )
        except requests.exceptions.RequestException as exc:
            logger.error("HTTP request failed: %s %s: %s", method, url, exc)
            raise PortnoxTransportError(url, exc) from exc
        self._log_response(resp)
        self._raise_for_status(resp)
        return resp.content

    def close(self) -> None:
        """Close the underlying :class:`requests.Session`."""
        self._session.close()

    def __enter__(self) -> PortnoxHTTP:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _log_request(self, method: str, url: str, body: str | None) -> None:
        if not logger.isEnabledFor(logging.DEBUG):
            return
        dump = {
            "method": method,
            "url": url,
            "headers": {
                "Authorization": f"Bearer {mask_secret(self._api_key)}",
                "Content-Type": "application/json",
            },
            "body": body or "",
        }
        logger.debug("Full API Request:\n%s", json.dumps(dump, indent=2))

    @staticmethod
    def _log_response(resp: requests.Response) -> None:
        if not logger.isEnabledFor(logging.DEBUG):
            return
        dump = {
            "status": f"{resp.status_code} {resp.reason or ''}".strip(),
            "headers": dict(resp.headers),
            "body": resp.text,
        }
        logger.debug("Full API Response:\n%s", json.dumps(dump, indent=2))

    @staticmethod
    def _raise_for_status(resp: requests.Response) -> None:
        if resp.status_code < 400:
            return
        error_cls = (
            PortnoxRateLimitError
            if resp.status_code == HTTP_TOO_MANY_REQUESTS
            else PortnoxRequestError
        )
        raise error_cls(
            resp.status_code,
            resp.url or "",
            reason=resp.reason or "",
            body=resp.content,
        )
