#!/usr/bin/python3
# Copyright: (c) 2024, portnox-macauth contributors
# SPDX-License-Identifier: Apache-2.0
"""Ansible module: portnox_mac_addresses, idempotent MAC whitelist management."""

from __future__ import annotations

DOCUMENTATION = r"""
---
module: portnox_mac_addresses
short_description: Manage the MAC whitelist of a Portnox MAC-based account
description:
  - Idempotent add/update/remove of MAC whitelist entries on a Portnox Clear account.
  - Wraps portnox-macauth C(PortnoxDriver.update_mac_addresses()) for diff-aware apply.
  - Returned entries keep the order they were declared in.
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
    description: Base backoff interval in seconds; doubles on every retry.
    type: float
    default: 1
  verify_tls:
    description: Verify TLS certificates.
    type: bool
    default: true
  account_name:
    description: Name of the MAC-based account.
    required: true
    type: str
  mac_addresses:
    description: >
      Desired whitelist entries. Each entry needs C(mac_address) and may
      carry C(description) (alphanumeric or dash, up to 64 characters) and
      C(expiration) (passed to the API verbatim).
    type: list
    elements: dict
    default: []
  purge:
    description: >
      Remove whitelist entries present on the account but absent from
      I(mac_addresses). When false, only the listed addresses are touched.
    type: bool
    default: false
  state:
    description: C(present) to ensure the entries exist, C(absent) to remove them.
    type: str
    choices: [present, absent]
    default: present
notes:
  - Run this module on the Ansible controller (C(connection: local)).
  - portnox-macauth must be installed in the Python environment used by Ansible.
requirements:
  - portnox-macauth >= 0.1.0
author:
  - portnox-macauth contributors
"""

EXAMPLES = r"""
- name: Allow two printers (check mode)
  portnox_mac_addresses:
    account_name: printers
    mac_addresses:
      - mac_address: "AA:BB:CC:DD:EE:01"
        description: floor1
      - mac_address: "AA:BB:CC:DD:EE:02"
        description: floor2
        expiration: "2027-01-01T00:00:00Z"
  check_mode: true

- name: Make the whitelist exactly this list
  portnox_mac_addresses:
    account_name: printers
    purge: true
    mac_addresses:
      - mac_address: "AA:BB:CC:DD:EE:01"
        description: floor1
"""

RETURN = r"""
changed:
  description: Whether any whitelist change was made (or would be in check mode).
  type: bool
  returned: always
diff:
  description: Planned change set with C(summary), C(total_changes), C(remove), C(replace) and C(create).
  type: dict
  returned: always
mac_addresses:
  description: Resulting entries in declared order.
  type: list
  elements: dict
  returned: always
"""

from ansible.module_utils.basic import AnsibleModule, env_fallback  # noqa: E402


def _build_entries(param: list[dict] | None) -> list:  # type: ignore[type-arg]
    """Convert module params into MacEntry instances."""
    from portnox_macauth.model.mac import MacEntry

    entries = []
    for item in param or []:
        entries.append(
            MacEntry(
                mac_address=str(item["mac_address"]),
                description=str(item.get("description") or ""),
                expiration=item.get("expiration") or None,
            )
        )
    return entries


def run_module() -> None:
    argument_spec = dict(
        api_key=dict(type="str", required=True, no_log=True,
                     fallback=(env_fallback, ["PORTNOX_API_KEY", "TF_VAR_PORTNOX_API_KEY"])),
        base_url=dict(type="str", fallback=(env_fallback, ["PORTNOX_BASE_URL"]),
                      default="https://clear.portnox.com:8081/CloudPortalBackEnd"),
        retries=dict(type="int", default=3),
        retry_interval=dict(type="float", default=1),
        verify_tls=dict(type="bool", default=True),
        account_name=dict(type="str", required=True),
        mac_addresses=dict(type="list", elements="dict", default=[]),
        purge=dict(type="bool", default=False),
        state=dict(type="str", choices=["present", "absent"], default="present"),
    )

    module = AnsibleModule(
        argument_spec=argument_spec,
        supports_check_mode=True,
    )

    p = module.params

    try:
        from portnox_macauth.driver import PortnoxDriver
        from portnox_macauth.utils.order import declared_order, filter_entries
        from portnox_macauth.utils.render import render_change_set, render_mac_entries
        from portnox_macauth.utils.validate import validate_mac_entries

        declared = _build_entries(p["mac_addresses"])
        validate_mac_entries(declared)
        account_name = p["account_name"]

        driver = PortnoxDriver(
            api_key=p["api_key"],
            base_url=p["base_url"],
            optional_args={
                "retries": p["retries"],
                "retry_interval": p["retry_interval"],
                "verify_tls": p["verify_tls"],
            },
        )
        driver.open()
        try:
            remote = driver.get_account(account_name).mac_whitelist
            managed = set(declared_order(declared))
            if p["state"] == "absent":
                present = filter_entries(remote, managed)
                if present and not module.check_mode:
                    driver.delete_mac_addresses(account_name, present)
                module.exit_json(
                    changed=bool(present),
                    diff={"remove": [e.mac_address for e in present]},
                    mac_addresses=[],
                )
                return

            previous = remote if p["purge"] else filter_entries(remote, managed)
            change_set = driver.plan_mac_addresses(declared, previous)
            if module.check_mode or not change_set.has_changes:
                module.exit_json(
                    changed=change_set.has_changes,
                    diff=render_change_set(change_set),
                    mac_addresses=render_mac_entries(declared),
                )
                return
            result = driver.update_mac_addresses(account_name, declared, previous)
        finally:
            driver.close()

    except Exception as exc:
        module.fail_json(msg=str(exc))
        return

    module.exit_json(
        changed=True,
        diff=render_change_set(change_set),
        mac_addresses=render_mac_entries(result.mac_addresses),
    )


def main() -> None:
    run_module()


if __name__ == "__main__":
    main()
