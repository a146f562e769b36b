"""Low-level MAC whitelist write operations.

Each function translates typed entries into the exact JSON body the API
expects and delegates to :class:`~portnox_macauth.client.session.PortnoxSession`
for dispatch (and retry).

Payloads:

    ADD: POST /api/mac-based-accounts/mac-whitelist-add
        {"AccountName": <name>,
         "MacWhiteList": [{"Mac": ..., "Description": ..., "Expiration"?: ...}]}

    REMOVE: DELETE /api/mac-based-accounts/mac-whitelist-remove
        {"AccountName": <name>,
         "MacWhiteList": [{"Mac": ..., "Description"?: ..., "Expiration"?: ...}]}

The add endpoint upserts by ``Mac``.  The remove endpoint matches by
``Mac`` and, when given, narrows the match by the *stored* description and
expiration.
"""

from __future__ import annotations

import logging
from typing import Any

from portnox_macauth.client.session import PortnoxSession
from portnox_macauth.model.mac import MacChangeSet, MacEntry
from portnox_macauth.vendor.portnox.endpoints import WHITELIST_ADD, WHITELIST_REMOVE

logger = logging.getLogger(__name__)


def _payload(account_name: str, items: list[dict[str, Any]]) -> dict[str, Any]:
    return {"AccountName": account_name, "MacWhiteList": items}


def whitelist_add(
    session: PortnoxSession,
    account_name: str,
    entries: list[MacEntry],
) -> None:
    """Upsert *entries* into the account whitelist in one batched call.

    Raises:
        PortnoxError: If the call fails after retries.
    """
    logger.debug("Adding %d MAC entries to %s", len(entries), account_name)
    session.post(
        WHITELIST_ADD,
        _payload(account_name, [e.to_payload() for e in entries]),
    )


def whitelist_remove(
    session: PortnoxSession,
    account_name: str,
    entries: list[MacEntry],
    *,
    match_metadata: bool = False,
) -> None:
    """Remove *entries* from the account whitelist in one call.

    Args:
        session: Active session.
        account_name: Owning account.
        entries: Entries to remove.
        match_metadata: If ``True``, send each entry's description and
            expiration so the API only removes the entry with those stored
            values.  Otherwise only ``Mac`` is sent.

    Raises:
        ValueError: If *entries* is empty.
        PortnoxError: If the call fails after retries.
    """
    if not entries:
        raise ValueError("entries must not be empty")
    logger.debug(
        "Removing MAC entries %s from %s", [e.mac_address for e in entries], account_name
    )
    session.delete(
        WHITELIST_REMOVE,
        _payload(
            account_name,
            [e.to_payload(include_description=match_metadata) for e in entries],
        ),
    )


def apply_mac_changes(
    session: PortnoxSession,
    account_name: str,
    change_set: MacChangeSet,
) -> list[str]:
    """Apply *change_set* to the remote whitelist, removals first.

    Order of calls:

    1. One remove per dropped address (``Mac`` only).
    2. One remove per replaced address, matched by its *previous*
       description and expiration.
    3. One batched add of the full declared set, only if something new
       must be written.

    Nothing is rolled back on failure; re-running converges because both
    endpoints are keyed by address.

    Returns:
        Change keys in the order they were applied
        (``"remove:<mac>"``, ``"replace:<mac>"``, ``"add"``).
    """
    applied: list[str] = []
    for entry in change_set.to_remove:
        whitelist_remove(session, account_name, [entry])
        logger.info("Removed MAC %s from %s", entry.mac_address, account_name)
        applied.append(f"remove:{entry.mac_address}")

    for replacement in change_set.to_replace:
        whitelist_remove(session, account_name, [replacement.previous], match_metadata=True)
        logger.info("Cleared stale metadata for MAC %s on %s",
                    replacement.previous.mac_address, account_name)
        applied.append(f"replace:{replacement.previous.mac_address}")

    if change_set.needs_add:
        whitelist_add(session, account_name, change_set.to_add_or_update)
        logger.info("Upserted %d MAC entries on %s",
                    len(change_set.to_add_or_update), account_name)
        applied.append("add")
    return applied
