"""Typed model for MAC whitelist entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class MacEntry:
    """One allow-listed hardware address.

    Attributes:
        mac_address: Six hex pairs separated by ``:`` or ``-``.  This is the
            identity key when diffing; two entries with the same address are
            the same entry.
        description: Up to 64 alphanumeric-or-dash characters.
        expiration: Opaque timestamp string passed through verbatim, or
            ``None`` when no expiration is set.
    """

    mac_address: str
    description: str = ""
    expiration: str | None = None

    def to_payload(self, *, include_description: bool = True) -> dict[str, Any]:
        """Serialise to a ``MacWhiteList`` item of the vendor API."""
        item: dict[str, Any] = {"Mac": self.mac_address}
        if include_description:
            item["Description"] = self.description
        if self.expiration:
            item["Expiration"] = self.expiration
        return item


@dataclass
class MacReplacement:
    """A declared entry whose description or expiration differs from before.

    Attributes:
        previous: Entry as last known; its values address the remote removal.
        declared: Entry as now declared.
    """

    previous: MacEntry
    declared: MacEntry


@dataclass
class MacChangeSet:
    """Planned whitelist changes produced by :func:`plan_mac_changes`.

    Attributes:
        to_remove: Previously known entries no longer declared.
        to_replace: Entries declared with modified metadata.
        to_create: Declared entries whose address was not previously known.
        to_add_or_update: The full declared set in declared order; the add
            endpoint upserts per address.
    """

    to_remove: list[MacEntry] = field(default_factory=list)
    to_replace: list[MacReplacement] = field(default_factory=list)
    to_create: list[MacEntry] = field(default_factory=list)
    to_add_or_update: list[MacEntry] = field(default_factory=list)

    @property
    def needs_add(self) -> bool:
        """``True`` if the batched add call has anything new to write."""
        return bool(self.to_create or self.to_replace)

    @property
    def has_changes(self) -> bool:
        return bool(self.to_remove) or self.needs_add
