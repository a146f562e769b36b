#!/usr/bin/python3
# Copyright: (c) 2024, portnox-macauth contributors
# SPDX-License-Identifier: Apache-2.0
"""Ansible module: portnox_mac_account_info, read a Portnox MAC-based account."""

from __future__ import annotations

DOCUMENTATION = r"""
---
module: portnox_mac_account_info
short_description: Read a Portnox MAC-based account
description:
  - Returns the account attributes, MAC whitelist, vendor whitelist and secure MAB options.
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
  account_id:
    description: Identifier (name) of the account.
    required: true
    type: str
requirements:
  - portnox-macauth >= 0.1.0
author:
  - portnox-macauth contributors
"""

RETURN = r"""
account:
  description: The account as returned by the API.
  type: dict
  returned: always
"""

from ansible.module_utils.basic import AnsibleModule, env_fallback  # noqa: E402


def main() -> None:
    module = AnsibleModule(
        argument_spec=dict(
            api_key=dict(type="str", required=True, no_log=True,
                         fallback=(env_fallback, ["PORTNOX_API_KEY", "TF_VAR_PORTNOX_API_KEY"])),
            base_url=dict(type="str", fallback=(env_fallback, ["PORTNOX_BASE_URL"]),
                          default="https://clear.portnox.com:8081/CloudPortalBackEnd"),
            account_id=dict(type="str", required=True),
        ),
        supports_check_mode=True,
    )

    try:
        from portnox_macauth.driver import PortnoxDriver
        from portnox_macauth.utils.render import render_account

        with PortnoxDriver(api_key=module.params["api_key"],
                           base_url=module.params["base_url"]) as driver:
            account = driver.get_account(module.params["account_id"])
    except Exception as exc:
        module.fail_json(msg=str(exc))
        return

    module.exit_json(changed=False, account=render_account(account))


if __name__ == "__main__":
    main()
