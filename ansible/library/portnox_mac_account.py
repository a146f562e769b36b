#!/usr/bin/python3
# Copyright: (c) 2024, portnox-macauth contributors
# SPDX-License-Identifier: Apache-2.0
"""Ansible module: portnox_mac_account, create or delete Portnox MAC-based accounts."""

from __future__ import annotations

DOCUMENTATION = r"""
---
module: portnox_mac_account
short_description: Manage Portnox MAC-based accounts
description:
  - Ensures a MAC-based account exists (optionally with an inline MAC whitelist) or is absent.
  - Accounts are never updated in place; use M(portnox_mac_addresses) for the whitelist.
  - Supports Ansible check mode (dry-run) natively.
options:
  api_key:
    description: Portnox API key. Falls back to C(PORTNOX_API_KEY).
    required: true
    type: str
    no_log: true
  base_url:
    description: API base URL. Falls back to C(PORTNOX_BASE_URL).
    type: str
    default: https://clear.portnox.com:8081/CloudPortalBackEnd
  retries:
    description: Maximum attempts per API call when rate limited.
    type: int
    default: 3
  retry_interval:
    description: Base backoff interval in seconds.
    type: float
    default: 1
  account_name:
    description: Name of the account; also its identifier.
    required: true
    type: str
  description:
    description: Account description, sent on creation only.
    type: str
    default: ""
  group_id:
    description: Group the account belongs to.
    type: str
  mac_whitelist:
    description: >
      Inline whitelist posted with the account on creation. Each entry
      needs C(mac_address) and may carry C(description) and C(expiration).
    type: list
    elements: dict
    default: []
  vendors_whitelist:
    description: Names of whitelisted vendors, recorded with the declared settings.
    type: list
    elements: str
    default: []
  put_devices_into_voice_vlan:
    description: Voice VLAN placement flag, recorded with the declared settings.
    type: bool
  identity_pre_shared_key:
    description: Identity pre-shared key; only whether it is set is returned.
    type: str
    no_log: true
  state:
    description: C(present) or C(absent).
    type: str
    choices: [present, absent]
    default: present
requirements:
  - portnox-macauth >= 0.1.0
author:
  - portnox-macauth contributors
"""

EXAMPLES = r"""
- name: Ensure the printers account exists
  portnox_mac_account:
    account_name: printers
    description: office-printers
"""

RETURN = r"""
changed:
  description: Whether the account was (or would be) created or deleted.
  type: bool
  returned: always
account:
  description: The account as read back from the API, or empty after deletion.
  type: dict
  returned: always
declared:
  description: The declared settings, including those the create call does not send.
  type: dict
  returned: always
warnings:
  description: Non-fatal diagnostics, such as the account having vanished.
  type: list
  elements: str
  returned: always
"""

from ansible.module_utils.basic import AnsibleModule, env_fallback  # noqa: E402


def run_module() -> None:
    module = AnsibleModule(
        argument_spec=dict(
            api_key=dict(type="str", required=True, no_log=True,
                         fallback=(env_fallback, ["PORTNOX_API_KEY", "TF_VAR_PORTNOX_API_KEY"])),
            base_url=dict(type="str", fallback=(env_fallback, ["PORTNOX_BASE_URL"]),
                          default="https://clear.portnox.com:8081/CloudPortalBackEnd"),
            retries=dict(type="int", default=3),
            retry_interval=dict(type="float", default=1),
            account_name=dict(type="str", required=True),
            description=dict(type="str", default=""),
            group_id=dict(type="str"),
            mac_whitelist=dict(type="list", elements="dict", default=[]),
            vendors_whitelist=dict(type="list", elements="str", default=[]),
            put_devices_into_voice_vlan=dict(type="bool"),
            identity_pre_shared_key=dict(type="str", no_log=True),
            state=dict(type="str", choices=["present", "absent"], default="present"),
        ),
        supports_check_mode=True,
    )

    p = module.params
    changed = False

    try:
        from portnox_macauth.driver import PortnoxDriver
        from portnox_macauth.model.account import AccountConfig
        from portnox_macauth.model.mac import MacEntry
        from portnox_macauth.utils.render import (
            render_account,
            render_account_config,
            render_diagnostics,
        )
        from portnox_macauth.utils.validate import validate_mac_entries

        config = AccountConfig(
            account_name=p["account_name"],
            description=p["description"],
            group_id=p["group_id"],
            mac_whitelist=[
                MacEntry(
                    mac_address=str(item["mac_address"]),
                    description=str(item.get("description") or ""),
                    expiration=item.get("expiration") or None,
                )
                for item in p["mac_whitelist"]
            ],
            vendors_whitelist=list(p["vendors_whitelist"]),
            put_devices_into_voice_vlan=p["put_devices_into_voice_vlan"],
            identity_pre_shared_key=p["identity_pre_shared_key"],
        )
        validate_mac_entries(config.mac_whitelist)

        driver = PortnoxDriver(
            api_key=p["api_key"],
            base_url=p["base_url"],
            optional_args={"retries": p["retries"], "retry_interval": p["retry_interval"]},
        )
        driver.open()
        try:
            state = driver.read_account(config.account_name)
            warnings = render_diagnostics(state.diagnostics)
            if p["state"] == "present" and not state.exists:
                changed = True
                if not module.check_mode:
                    driver.create_account(config)
                    state = driver.read_account(config.account_name)
            elif p["state"] == "absent" and state.exists:
                changed = True
                if not module.check_mode:
                    state = driver.delete_account(config.account_name)
        finally:
            driver.close()

    except Exception as exc:
        module.fail_json(msg=str(exc))
        return

    module.exit_json(
        changed=changed,
        account=render_account(state.account) if state.account is not None else {},
        declared=render_account_config(config),
        warnings=warnings,
    )


def main() -> None:
    run_module()


if __name__ == "__main__":
    main()
