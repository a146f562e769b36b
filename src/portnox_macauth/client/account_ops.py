"""Low-level MAC-based account operations."""

from __future__ import annotations

import logging
from typing import Any

from portnox_macauth.client.errors import (
    CODE_ACCOUNT_NOT_FOUND,
    HTTP_NOT_FOUND,
    PortnoxRequestError,
)
from portnox_macauth.client.session import PortnoxSession
from portnox_macauth.model.account import Account, AccountConfig
from portnox_macauth.model.mac import MacEntry
from portnox_macauth.parser.account import (
    parse_account,
    parse_error_body,
    parse_search_accounts,
)
from portnox_macauth.vendor.portnox.endpoints import ACCOUNT_SEARCH, ACCOUNTS, account_path

logger = logging.getLogger(__name__)


def account_create(session: PortnoxSession, config: AccountConfig) -> None:
    """Create an account, with its inline whitelist if one is declared.

    Raises:
        PortnoxError: If the call fails after retries.
    """
    logger.debug("Creating account %s", config.account_name)
    session.post(ACCOUNTS, config.to_payload())


def account_get(session: PortnoxSession, account_id: str) -> Account:
    """Fetch one account by id/name.

    Raises:
        PortnoxRequestError: On an HTTP error (see :func:`is_not_found`).
        PortnoxParseError: If the response is not a JSON object.
    """
    path = account_path(account_id)
    return parse_account(session.get(path), path)


def account_delete(session: PortnoxSession, account_id: str) -> None:
    logger.debug("Deleting account %s", account_id)
    session.delete(account_path(account_id))


def account_search(
    session: PortnoxSession,
    entries: list[MacEntry],
) -> list[Account]:
    """Search accounts whose whitelist matches *entries*.

    The filter sends each entry's ``Mac`` and ``Description`` plus its
    ``Expiration`` when set.
    """
    payload: dict[str, Any] = {"MacWhiteList": [e.to_payload() for e in entries]}
    return parse_search_accounts(session.post(ACCOUNT_SEARCH, payload), ACCOUNT_SEARCH)


def is_not_found(exc: Exception) -> bool:
    """Return ``True`` if *exc* means the account does not exist.

    That is an HTTP 404, or any error response whose body carries
    ``InternalErrorCode`` 5357.
    """
    if not isinstance(exc, PortnoxRequestError):
        return False
    if exc.status_code == HTTP_NOT_FOUND:
        return True
    code, message = parse_error_body(exc.body)
    if code == CODE_ACCOUNT_NOT_FOUND:
        logger.debug("Account not found: %s", message)
        return True
    return False
