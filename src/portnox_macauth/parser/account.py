"""Parser for Portnox MAC-based account responses.

The API is not consistent about the shape of whitelist fields: newer
versions return ``MacWhiteList`` as a bare JSON array, older ones wrap it as
``{"_items": [...]}``.  Both are accepted here and produce the same entries.
Wrong-typed or absent fields degrade to empty values so that one odd field
cannot abort a whole read; only a malformed top-level document is fatal.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any

from portnox_macauth.client.errors import PortnoxParseError
from portnox_macauth.model.account import Account, SecureMabOptions, VendorEntry
from portnox_macauth.model.mac import MacEntry

logger = logging.getLogger(__name__)

_ITEMS_KEY: str = "_items"


def parse_json(body: bytes | str, endpoint: str = "") -> dict[str, Any]:
    """Decode *body* as a JSON object.

    Raises:
        PortnoxParseError: If *body* is not valid JSON or not an object.
    """
    try:
        result = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError, ValueError) as exc:
        raise PortnoxParseError(
            f"Non-JSON response from {endpoint!r}: {body[:200]!r}"
        ) from exc
    if not isinstance(result, dict):
        raise PortnoxParseError(
            f"Expected a JSON object from {endpoint!r}, got {type(result).__name__}"
        )
    return result


def _unwrap_items(raw: Any) -> list[Any]:
    """Return the list behind a bare-array or ``_items``-wrapped field."""
    if isinstance(raw, list):
        return raw
    if isinstance(raw, dict):
        items = raw.get(_ITEMS_KEY)
        if isinstance(items, list):
            return items
    return []


def _str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _int(value: Any) -> int | None:
    """Return *value* as an int, or ``None`` for booleans, non-numbers and NaN/Infinity."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return int(value)


def parse_mac_entry(raw: Any) -> MacEntry | None:
    """Convert one ``MacWhiteList`` item, or return ``None`` if it has no MAC."""
    if not isinstance(raw, dict):
        return None
    mac = raw.get("Mac")
    if not isinstance(mac, str) or not mac:
        return None
    expiration = raw.get("Expiration")
    return MacEntry(
        mac_address=mac,
        description=_str(raw.get("Description")),
        expiration=expiration if isinstance(expiration, str) and expiration else None,
    )


def parse_mac_whitelist(raw: Any) -> list[MacEntry]:
    """Normalise a ``MacWhiteList`` field into an ordered entry list.

    Args:
        raw: The decoded field value: a list, an ``{"_items": [...]}`` object,
            or anything else (treated as empty).

    Returns:
        Entries in remote order; items without a MAC are skipped.
    """
    entries: list[MacEntry] = []
    for item in _unwrap_items(raw):
        entry = parse_mac_entry(item)
        if entry is None:
            logger.debug("Skipping MacWhiteList item without Mac: %r", item)
            continue
        entries.append(entry)
    return entries


def parse_vendor_whitelist(raw: Any) -> list[VendorEntry]:
    """Normalise a ``VendorsWhiteList`` field."""
    vendors: list[VendorEntry] = []
    for item in _unwrap_items(raw):
        if not isinstance(item, dict):
            continue
        prefixes = [p for p in _unwrap_items(item.get("VendorPrefixes")) if isinstance(p, str)]
        vendors.append(
            VendorEntry(vendor_name=_str(item.get("VendorName")), vendor_prefixes=prefixes)
        )
    return vendors


def parse_secure_mab_options(raw: Any) -> SecureMabOptions | None:
    if not isinstance(raw, dict):
        return None
    action = raw.get("Action")
    enabled = raw.get("Enabled")
    return SecureMabOptions(
        action=_int(action),
        enabled=enabled if isinstance(enabled, bool) else None,
    )


def account_from_dict(data: dict[str, Any]) -> Account:
    """Build an :class:`Account` from one decoded account object."""
    options = data.get("AgentlessOptions")
    if not isinstance(options, dict):
        options = {}
    return Account(
        account_name=_str(data.get("AccountName")),
        account_id=_str(data.get("AccountId")),
        description=_str(data.get("Description")),
        block_reason=_str(data.get("BlockReason")),
        is_block_by_admin=data.get("IsBlockByAdmin") is True,
        created_at=_str(data.get("CreatedAt")),
        group_id=_str(data.get("GroupId")),
        org_id=_str(data.get("OrgId")),
        identity_type=_int(data.get("IdentityType")) or 0,
        last_updated_by=_str(data.get("LastUpdatedBy")),
        mac_whitelist=parse_mac_whitelist(options.get("MacWhiteList")),
        vendor_whitelist=parse_vendor_whitelist(options.get("VendorsWhiteList")),
        secure_mab_options=parse_secure_mab_options(options.get("SecureMabOptions")),
    )


def parse_account(body: bytes | str, endpoint: str = "") -> Account:
    """Parse a single-account GET response.

    Raises:
        PortnoxParseError: If *body* is not a JSON object.
    """
    return account_from_dict(parse_json(body, endpoint))


def parse_search_accounts(body: bytes | str, endpoint: str = "") -> list[Account]:
    """Parse a search response of the form ``{"Accounts": [...]}``.

    Raises:
        PortnoxParseError: If *body* is not a JSON object.
    """
    data = parse_json(body, endpoint)
    return [account_from_dict(a) for a in _unwrap_items(data.get("Accounts")) if isinstance(a, dict)]


def parse_error_body(body: bytes | str) -> tuple[int | None, str]:
    """Extract ``(InternalErrorCode, InternalError)`` from an error response.

    Never raises; an unparseable body yields ``(None, "")``.
    """
    try:
        data = parse_json(body)
    except PortnoxParseError:
        return None, ""
    return _int(data.get("InternalErrorCode")), _str(data.get("InternalError"))
