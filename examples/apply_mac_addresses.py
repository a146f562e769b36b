#!/usr/bin/env python3
"""Example: reconcile the MAC whitelist of a Portnox MAC-based account.

Only the addresses listed in ``DESIRED`` are managed.  ``PREVIOUS`` stands in
for the state a configuration tool would have persisted after its last run;
addresses in ``PREVIOUS`` but not in ``DESIRED`` are removed.

Usage (dry run, default):

    PORTNOX_API_KEY=... PORTNOX_ACCOUNT=printers python examples/apply_mac_addresses.py

Usage (live apply):

    APPLY=1 PORTNOX_API_KEY=... PORTNOX_ACCOUNT=printers python examples/apply_mac_addresses.py

Environment variables:
    PORTNOX_API_KEY   API key (required).
    PORTNOX_BASE_URL  API base URL (default: Portnox Clear production).
    PORTNOX_ACCOUNT   Account name (required).
    APPLY             Set to "1" to actually apply changes (default: dry-run).
"""

from __future__ import annotations

import logging
import os
import sys

from portnox_macauth.driver import PortnoxDriver
from portnox_macauth.model.config import ProviderConfig
from portnox_macauth.model.mac import MacEntry
from portnox_macauth.utils.render import render_change_set

DESIRED: list[MacEntry] = [
    MacEntry("AA:BB:CC:DD:EE:01", "floor1"),
    MacEntry("AA:BB:CC:DD:EE:02", "floor2", expiration="2027-01-01T00:00:00Z"),
]

PREVIOUS: list[MacEntry] = [
    MacEntry("AA:BB:CC:DD:EE:01", "floor1"),
    MacEntry("AA:BB:CC:DD:EE:03", "retired"),
]

account = os.environ.get("PORTNOX_ACCOUNT", "")
if not account:
    print("ERROR: PORTNOX_ACCOUNT environment variable is required.", file=sys.stderr)
    sys.exit(1)

apply_changes = os.environ.get("APPLY", "0") == "1"
logging.basicConfig(level=logging.INFO)

try:
    config = ProviderConfig.from_env()
except ValueError as exc:
    print(f"ERROR: {exc}", file=sys.stderr)
    sys.exit(1)

print(f"Account       : {account}")
print(f"Apply changes : {apply_changes}")
print()

with PortnoxDriver.from_config(config) as driver:
    try:
        plan = render_change_set(driver.plan_mac_addresses(DESIRED, PREVIOUS))
        print("=== PLAN ===")
        print(f"  Remove : {plan['remove']}")
        print(f"  Replace: {[r['mac_address'] for r in plan['replace']]}")
        print(f"  Create : {plan['create']}")
        print()

        if not apply_changes:
            print("Dry-run only -- set APPLY=1 to apply changes.")
            sys.exit(0)

        state = driver.update_mac_addresses(account, DESIRED, PREVIOUS)
        print("=== RESULT ===")
        for entry in state.mac_addresses:
            print(f"  {entry.mac_address}  {entry.description}  {entry.expiration or '-'}")
    except Exception as exc:  # noqa: BLE001
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)
