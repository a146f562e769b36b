"""Renderers turning typed state into plain dicts for the plugin host."""

from __future__ import annotations

from typing import Any

from portnox_macauth.model.account import Account, AccountConfig
from portnox_macauth.model.mac import MacChangeSet, MacEntry
from portnox_macauth.model.state import Diagnostic


def render_mac_entries(entries: list[MacEntry]) -> list[dict[str, Any]]:
    """Serialize entries with the host-facing field names."""
    return [
        {
            "mac_address": e.mac_address,
            "description": e.description,
            "expiration": e.expiration,
        }
        for e in entries
    ]


def render_change_set(change_set: MacChangeSet) -> dict[str, Any]:
    """Serialize *change_set* to a JSON-serializable dict.

    Returns:
        A dict with keys:

        - ``"summary"``: count per change kind.
        - ``"total_changes"``: number of remote calls the apply would make.
        - ``"remove"`` / ``"create"``: lists of MAC addresses.
        - ``"replace"``: list of ``{"mac_address", "from", "to"}`` dicts.
    """
    summary = {
        "remove": len(change_set.to_remove),
        "replace": len(change_set.to_replace),
        "create": len(change_set.to_create),
    }
    total = summary["remove"] + summary["replace"] + (1 if change_set.needs_add else 0)
    return {
        "summary": summary,
        "total_changes": total,
        "remove": [e.mac_address for e in change_set.to_remove],
        "replace": [
            {
                "mac_address": r.declared.mac_address,
                "from": {"description": r.previous.description, "expiration": r.previous.expiration},
                "to": {"description": r.declared.description, "expiration": r.declared.expiration},
            }
            for r in change_set.to_replace
        ],
        "create": [e.mac_address for e in change_set.to_create],
    }


def render_account(account: Account) -> dict[str, Any]:
    """Serialize *account* using the data-source attribute names."""
    secure_mab: dict[str, str] = {}
    if account.secure_mab_options is not None:
        if account.secure_mab_options.action is not None:
            secure_mab["action"] = str(account.secure_mab_options.action)
        if account.secure_mab_options.enabled is not None:
            secure_mab["enabled"] = "true" if account.secure_mab_options.enabled else "false"
    return {
        "account_id": account.account_id,
        "account_name": account.account_name,
        "description": account.description,
        "block_reason": account.block_reason,
        "is_block_by_admin": account.is_block_by_admin,
        "created_at": account.created_at,
        "group_id": account.group_id,
        "org_id": account.org_id,
        "identity_type": account.identity_type,
        "last_updated_by": account.last_updated_by,
        "mac_whitelist": render_mac_entries(account.mac_whitelist),
        "vendor_whitelist": [
            {"vendor_name": v.vendor_name, "vendor_prefixes": list(v.vendor_prefixes)}
            for v in account.vendor_whitelist
        ],
        "secure_mab_options": secure_mab,
    }


def render_account_config(config: AccountConfig) -> dict[str, Any]:
    """Serialize the declared account settings; the pre-shared key is reduced to a flag."""
    return {
        "account_name": config.account_name,
        "description": config.description,
        "group_id": config.group_id,
        "mac_whitelist": render_mac_entries(config.mac_whitelist),
        "vendors_whitelist": list(config.vendors_whitelist),
        "put_devices_into_voice_vlan": config.put_devices_into_voice_vlan,
        "identity_pre_shared_key_set": bool(config.identity_pre_shared_key),
    }


def render_diagnostics(diagnostics: list[Diagnostic]) -> list[str]:
    return [f"{d.summary}: {d.detail}" if d.detail else d.summary for d in diagnostics]
