"""MAC whitelist change-set planner.

Compares the *previous* whitelist state (as last persisted by the caller)
against the *declared* one and produces a :class:`MacChangeSet` describing
what must be removed, replaced and (re)added.  Entries are keyed by
``mac_address`` only.
"""

from __future__ import annotations

from collections.abc import Iterable

from portnox_macauth.model.mac import MacChangeSet, MacEntry, MacReplacement


def _expiration(entry: MacEntry) -> str | None:
    # "" and None both mean "no expiration"
    return entry.expiration or None


def entry_changed(previous: MacEntry, declared: MacEntry) -> bool:
    """Return ``True`` if description or expiration differ."""
    return (
        previous.description != declared.description
        or _expiration(previous) != _expiration(declared)
    )


def key_entries(entries: Iterable[MacEntry]) -> dict[str, MacEntry]:
    """Index *entries* by MAC address; a later duplicate wins."""
    return {e.mac_address: e for e in entries}


def plan_mac_changes(
    previous: Iterable[MacEntry],
    declared: Iterable[MacEntry],
) -> MacChangeSet:
    """Compute the changes needed to move the whitelist from *previous* to *declared*.

    Args:
        previous: Entries as last persisted (any order).
        declared: Entries as now declared, in declaration order.

    Returns:
        A :class:`MacChangeSet`.  ``to_remove`` follows *previous* order;
        ``to_replace``, ``to_create`` and ``to_add_or_update`` follow
        *declared* order.
    """
    previous_by_mac = key_entries(previous)
    declared_list = list(key_entries(declared).values())
    declared_macs = {e.mac_address for e in declared_list}

    to_remove = [e for mac, e in previous_by_mac.items() if mac not in declared_macs]

    to_replace: list[MacReplacement] = []
    to_create: list[MacEntry] = []
    for entry in declared_list:
        old = previous_by_mac.get(entry.mac_address)
        if old is None:
            to_create.append(entry)
        elif entry_changed(old, entry):
            to_replace.append(MacReplacement(previous=old, declared=entry))

    return MacChangeSet(
        to_remove=to_remove,
        to_replace=to_replace,
        to_create=to_create,
        to_add_or_update=declared_list,
    )
