"""Ordering helpers for MAC whitelist state.

The API returns whitelist entries in no particular order, while the caller's
configuration is an ordered list.  Results are sorted deterministically and
then permuted back into the order the caller declared, so a remote reorder
never shows up as a change.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable

from portnox_macauth.model.mac import MacEntry


def declared_order(entries: Iterable[MacEntry]) -> list[str]:
    """Return MAC keys in declaration order, first occurrence wins."""
    order: list[str] = []
    seen: set[str] = set()
    for entry in entries:
        if entry.mac_address not in seen:
            seen.add(entry.mac_address)
            order.append(entry.mac_address)
    return order


def sort_entries(entries: Iterable[MacEntry]) -> list[MacEntry]:
    """Sort by ``mac_address`` then ``description`` (stable)."""
    return sorted(entries, key=lambda e: (e.mac_address, e.description))


def filter_entries(entries: Iterable[MacEntry], keys: Collection[str]) -> list[MacEntry]:
    """Keep only entries whose address is in *keys*."""
    return [e for e in entries if e.mac_address in keys]


def reorder_entries(entries: Iterable[MacEntry], order: list[str]) -> list[MacEntry]:
    """Arrange *entries* to follow *order*.

    Entries whose address appears in *order* come first, in that order.
    The rest follow in their incoming order.  One entry per address is kept.
    """
    by_mac: dict[str, MacEntry] = {}
    for entry in entries:
        by_mac.setdefault(entry.mac_address, entry)

    ordered: list[MacEntry] = []
    for mac in order:
        entry = by_mac.pop(mac, None)
        if entry is not None:
            ordered.append(entry)
    ordered.extend(by_mac.values())
    return ordered
