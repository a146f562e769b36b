"""Unit tests for ProviderConfig and the render helpers."""

from __future__ import annotations

import pytest

from portnox_macauth.model.account import Account, AccountConfig, SecureMabOptions, VendorEntry
from portnox_macauth.model.config import ProviderConfig
from portnox_macauth.model.mac import MacEntry
from portnox_macauth.model.state import resource_missing
from portnox_macauth.utils.mac_diff import plan_mac_changes
from portnox_macauth.utils.render import (
    render_account,
    render_account_config,
    render_change_set,
    render_diagnostics,
    render_mac_entries,
)
from portnox_macauth.vendor.portnox.endpoints import DEFAULT_BASE_URL

_ENV_VARS = (
    "PORTNOX_API_KEY",
    "TF_VAR_PORTNOX_API_KEY",
    "PORTNOX_BASE_URL",
    "PORTNOX_RETRIES",
    "PORTNOX_RETRY_INTERVAL",
    "PORTNOX_TIMEOUT",
    "PORTNOX_VERIFY_TLS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


# ---------------------------------------------------------------------------
# ProviderConfig
# ---------------------------------------------------------------------------

class TestProviderConfig:
    def test_defaults(self) -> None:
        config = ProviderConfig(api_key="k")
        assert config.base_url == DEFAULT_BASE_URL
        assert config.retries == 3
        assert config.retry_interval == 1.0
        assert config.retry_transport_errors is False

    def test_empty_key_rejected(self) -> None:
        with pytest.raises(ValueError, match="PORTNOX_API_KEY"):
            ProviderConfig(api_key="")

    def test_zero_retries_rejected(self) -> None:
        with pytest.raises(ValueError):
            ProviderConfig(api_key="k", retries=0)

    def test_negative_interval_rejected(self) -> None:
        with pytest.raises(ValueError):
            ProviderConfig(api_key="k", retry_interval=-1)

    def test_repr_hides_key(self) -> None:
        assert "top-secret" not in repr(ProviderConfig(api_key="top-secret"))

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PORTNOX_API_KEY", "env-key")
        monkeypatch.setenv("PORTNOX_BASE_URL", "https://portnox.example.com")
        monkeypatch.setenv("PORTNOX_RETRIES", "5")
        monkeypatch.setenv("PORTNOX_RETRY_INTERVAL", "0.5")
        monkeypatch.setenv("PORTNOX_VERIFY_TLS", "false")
        config = ProviderConfig.from_env()
        assert config.api_key == "env-key"
        assert config.base_url == "https://portnox.example.com"
        assert config.retries == 5
        assert config.retry_interval == 0.5
        assert config.verify_tls is False

    def test_from_env_fallback_variable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TF_VAR_PORTNOX_API_KEY", "tf-key")
        assert ProviderConfig.from_env().api_key == "tf-key"

    def test_overrides_win_over_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PORTNOX_API_KEY", "env-key")
        config = ProviderConfig.from_env(api_key="explicit", retries=None)
        assert config.api_key == "explicit"
        assert config.retries == 3

    def test_from_env_without_key_raises(self) -> None:
        with pytest.raises(ValueError):
            ProviderConfig.from_env()


# ---------------------------------------------------------------------------
# render
# ---------------------------------------------------------------------------

def test_render_mac_entries() -> None:
    rendered = render_mac_entries([MacEntry("AA:BB:CC:DD:EE:01", "p1", "2027-01-01")])
    assert rendered == [
        {"mac_address": "AA:BB:CC:DD:EE:01", "description": "p1", "expiration": "2027-01-01"}
    ]


def test_render_change_set_counts_calls() -> None:
    previous = [MacEntry("AA:BB:CC:DD:EE:01", "old"), MacEntry("AA:BB:CC:DD:EE:03")]
    declared = [MacEntry("AA:BB:CC:DD:EE:01", "new"), MacEntry("AA:BB:CC:DD:EE:02")]
    rendered = render_change_set(plan_mac_changes(previous, declared))
    assert rendered["summary"] == {"remove": 1, "replace": 1, "create": 1}
    assert rendered["total_changes"] == 3
    assert rendered["remove"] == ["AA:BB:CC:DD:EE:03"]
    assert rendered["replace"][0]["from"]["description"] == "old"
    assert rendered["create"] == ["AA:BB:CC:DD:EE:02"]


def test_render_change_set_empty() -> None:
    entries = [MacEntry("AA:BB:CC:DD:EE:01")]
    assert render_change_set(plan_mac_changes(entries, entries))["total_changes"] == 0


def test_render_account_secure_mab_as_strings() -> None:
    account = Account(
        account_name="printers",
        vendor_whitelist=[VendorEntry("HP", ["00:1A:4B"])],
        secure_mab_options=SecureMabOptions(action=2, enabled=True),
    )
    rendered = render_account(account)
    assert rendered["secure_mab_options"] == {"action": "2", "enabled": "true"}
    assert rendered["vendor_whitelist"] == [{"vendor_name": "HP", "vendor_prefixes": ["00:1A:4B"]}]
    assert rendered["mac_whitelist"] == []


def test_render_account_without_secure_mab() -> None:
    assert render_account(Account(account_name="x"))["secure_mab_options"] == {}


def test_render_diagnostics() -> None:
    lines = render_diagnostics([resource_missing("gone")])
    assert lines == ["Resource not found: gone"]


def test_render_account_config_hides_pre_shared_key() -> None:
    config = AccountConfig(
        "printers",
        vendors_whitelist=["HP", "Axis"],
        put_devices_into_voice_vlan=True,
        identity_pre_shared_key="s3cret",
    )
    rendered = render_account_config(config)
    assert rendered["vendors_whitelist"] == ["HP", "Axis"]
    assert rendered["put_devices_into_voice_vlan"] is True
    assert rendered["identity_pre_shared_key_set"] is True
    assert "s3cret" not in str(rendered)


def test_render_account_config_defaults() -> None:
    rendered = render_account_config(AccountConfig("printers"))
    assert rendered["put_devices_into_voice_vlan"] is None
    assert rendered["identity_pre_shared_key_set"] is False
