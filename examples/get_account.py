#!/usr/bin/env python3
"""Example: read a MAC-based account with portnox-macauth."""

from __future__ import annotations

import json
import sys

from portnox_macauth.driver import PortnoxDriver
from portnox_macauth.model.config import ProviderConfig
from portnox_macauth.utils.render import render_account

ACCOUNT_ID = sys.argv[1] if len(sys.argv) > 1 else "printers"

with PortnoxDriver.from_config(ProviderConfig.from_env()) as driver:
    account = driver.get_account(ACCOUNT_ID)

print(json.dumps(render_account(account), indent=2))
