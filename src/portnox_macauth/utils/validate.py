"""Local validation of declared MAC entries."""

from __future__ import annotations

import re
from collections.abc import Iterable

from portnox_macauth.client.errors import PortnoxValidationError
from portnox_macauth.model.mac import MacEntry

MAC_RE = re.compile(r"^([0-9A-Fa-f]{2}[:-]){5}([0-9A-Fa-f]{2})$")
DESCRIPTION_RE = re.compile(r"^[a-zA-Z0-9-]*$")
DESCRIPTION_MAX_LEN: int = 64


def is_valid_mac(value: str) -> bool:
    """Return ``True`` for six hex pairs delimited by ``:`` or ``-``."""
    return MAC_RE.fullmatch(value) is not None


def is_valid_description(value: str) -> bool:
    return len(value) <= DESCRIPTION_MAX_LEN and DESCRIPTION_RE.fullmatch(value) is not None


def validate_mac_entry(entry: MacEntry) -> None:
    """Raise :exc:`PortnoxValidationError` if *entry* is malformed."""
    if not is_valid_mac(entry.mac_address):
        raise PortnoxValidationError(
            "mac_address",
            entry.mac_address,
            "must be a valid MAC address format (e.g., 00:00:00:00:00:00)",
        )
    if not is_valid_description(entry.description):
        raise PortnoxValidationError(
            "description",
            entry.description,
            "must contain only alphanumeric characters or dashes and be up to "
            f"{DESCRIPTION_MAX_LEN} characters long",
        )


def validate_mac_entries(entries: Iterable[MacEntry]) -> None:
    """Validate every entry and reject duplicate addresses."""
    seen: set[str] = set()
    for entry in entries:
        validate_mac_entry(entry)
        if entry.mac_address in seen:
            raise PortnoxValidationError(
                "mac_address", entry.mac_address, "is declared more than once"
            )
        seen.add(entry.mac_address)
