"""Typed models for MAC-based accounts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from portnox_macauth.model.mac import MacEntry


@dataclass
class VendorEntry:
    """A whitelisted vendor and the MAC prefixes it owns (read-only).

    Attributes:
        vendor_name: Vendor display name.
        vendor_prefixes: OUI prefixes, in remote order.
    """

    vendor_name: str
    vendor_prefixes: list[str] = field(default_factory=list)


@dataclass
class SecureMabOptions:
    """Secure MAB settings reported for an account."""

    action: int | None = None
    enabled: bool | None = None


@dataclass
class Account:
    """A MAC-based account as returned by the API.

    Attributes:
        account_name: Primary key; immutable after creation.
        account_id: Remote identifier (often equal to the name).
        description: Free-text description.
        block_reason: Why the account is blocked, if it is.
        is_block_by_admin: Admin-block flag.
        created_at: Creation timestamp string.
        group_id: Owning group identifier.
        org_id: Owning organisation identifier.
        identity_type: Small integer identity-type enum.
        last_updated_by: Who last changed the account.
        mac_whitelist: Allow-listed MAC entries, in remote order.
        vendor_whitelist: Allow-listed vendors.
        secure_mab_options: Secure MAB options, or ``None`` if absent.
    """

    account_name: str
    account_id: str = ""
    description: str = ""
    block_reason: str = ""
    is_block_by_admin: bool = False
    created_at: str = ""
    group_id: str = ""
    org_id: str = ""
    identity_type: int = 0
    last_updated_by: str = ""
    mac_whitelist: list[MacEntry] = field(default_factory=list)
    vendor_whitelist: list[VendorEntry] = field(default_factory=list)
    secure_mab_options: SecureMabOptions | None = None


@dataclass
class AccountConfig:
    """Desired account used as input to ``create_account``.

    Only ``account_name``, ``description`` and ``mac_whitelist`` are sent
    to the API; the whole config is kept on the returned
    :class:`~portnox_macauth.model.state.AccountState`.
    """

    account_name: str
    description: str = ""
    group_id: str | None = None
    mac_whitelist: list[MacEntry] = field(default_factory=list)
    vendors_whitelist: list[str] = field(default_factory=list)
    put_devices_into_voice_vlan: bool | None = None
    identity_pre_shared_key: str | None = None

    def to_payload(self) -> dict[str, Any]:
        """Serialise to the account-create request body."""
        account: dict[str, str] = {"AccountName": self.account_name}
        if self.description:
            account["Description"] = self.description
        payload: dict[str, Any] = {"MacBasedAccounts": [account]}
        if self.mac_whitelist:
            payload["MacWhiteList"] = [e.to_payload() for e in self.mac_whitelist]
        return payload
