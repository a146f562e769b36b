"""Unit tests for the Ansible modules under ansible/library.

The modules are loaded from their files and run against a stand-in
``AnsibleModule`` whose ``exit_json``/``fail_json`` raise, like the real
ones do via ``SystemExit``.
"""

from __future__ import annotations

import importlib.util
from pathlib import Path
from types import ModuleType
from typing import Any

import pytest
import responses as responses_lib

pytest.importorskip("ansible.module_utils.basic")

_LIBRARY = Path(__file__).resolve().parents[2] / "ansible" / "library"
_BASE = "https://portnox.example.com/CloudPortalBackEnd"
_ACCOUNTS = f"{_BASE}/api/mac-based-accounts"


class ModuleExit(SystemExit):
    def __init__(self, result: dict[str, Any]) -> None:
        super().__init__(0)
        self.result = result


class ModuleFail(SystemExit):
    def __init__(self, result: dict[str, Any]) -> None:
        super().__init__(1)
        self.result = result


def _load(name: str) -> ModuleType:
    spec = importlib.util.spec_from_file_location(name, _LIBRARY / f"{name}.py")
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _fake_ansible_module(params: dict[str, Any], check_mode: bool = False) -> type:
    class FakeAnsibleModule:
        def __init__(self, argument_spec: dict[str, Any], supports_check_mode: bool = False) -> None:
            self.params = {k: v.get("default") for k, v in argument_spec.items()}
            self.params.update(params)
            self.check_mode = check_mode

        def exit_json(self, **kwargs: Any) -> None:
            raise ModuleExit(kwargs)

        def fail_json(self, **kwargs: Any) -> None:
            raise ModuleFail(kwargs)

    return FakeAnsibleModule


def _run(name: str, monkeypatch: pytest.MonkeyPatch, params: dict[str, Any], **kwargs: Any) -> None:
    module = _load(name)
    monkeypatch.setattr(module, "AnsibleModule", _fake_ansible_module(params, **kwargs))
    module.run_module()


# ---------------------------------------------------------------------------
# portnox_mac_addresses
# ---------------------------------------------------------------------------

@responses_lib.activate
def test_addresses_invalid_mac_fails_without_request(monkeypatch: pytest.MonkeyPatch) -> None:
    params = {
        "api_key": "key-123",
        "base_url": _BASE,
        "account_name": "printers",
        "mac_addresses": [{"mac_address": "zz"}],
    }
    with pytest.raises(ModuleFail) as exc_info:
        _run("portnox_mac_addresses", monkeypatch, params)
    assert "mac_address" in exc_info.value.result["msg"]
    assert len(responses_lib.calls) == 0


@responses_lib.activate
def test_addresses_check_mode_reports_plan(monkeypatch: pytest.MonkeyPatch) -> None:
    responses_lib.add(
        responses_lib.GET,
        f"{_ACCOUNTS}/printers",
        json={"AccountName": "printers", "AgentlessOptions": {"MacWhiteList": []}},
    )
    params = {
        "api_key": "key-123",
        "base_url": _BASE,
        "account_name": "printers",
        "mac_addresses": [{"mac_address": "AA:BB:CC:DD:EE:01", "description": "p1"}],
    }
    with pytest.raises(ModuleExit) as exc_info:
        _run("portnox_mac_addresses", monkeypatch, params, check_mode=True)
    result = exc_info.value.result
    assert result["changed"] is True
    assert result["diff"]["create"] == ["AA:BB:CC:DD:EE:01"]
    assert len(responses_lib.calls) == 1


# ---------------------------------------------------------------------------
# portnox_mac_account
# ---------------------------------------------------------------------------

@responses_lib.activate
def test_account_invalid_inline_mac_fails_without_request(monkeypatch: pytest.MonkeyPatch) -> None:
    params = {
        "api_key": "key-123",
        "base_url": _BASE,
        "account_name": "printers",
        "mac_whitelist": [{"mac_address": "AA:BB:CC:DD:EE:01", "description": "bad desc"}],
    }
    with pytest.raises(ModuleFail) as exc_info:
        _run("portnox_mac_account", monkeypatch, params)
    assert "description" in exc_info.value.result["msg"]
    assert len(responses_lib.calls) == 0


@responses_lib.activate
def test_account_create_returns_declared_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    responses_lib.add(
        responses_lib.GET,
        f"{_ACCOUNTS}/printers",
        json={"InternalErrorCode": 5357},
        status=400,
    )
    responses_lib.add(responses_lib.POST, _ACCOUNTS, json={})
    responses_lib.add(responses_lib.GET, f"{_ACCOUNTS}/printers", json={"AccountName": "printers"})
    params = {
        "api_key": "key-123",
        "base_url": _BASE,
        "account_name": "printers",
        "vendors_whitelist": ["HP"],
        "put_devices_into_voice_vlan": True,
        "identity_pre_shared_key": "s3cret",
    }
    with pytest.raises(ModuleExit) as exc_info:
        _run("portnox_mac_account", monkeypatch, params)
    result = exc_info.value.result
    assert result["changed"] is True
    assert result["account"]["account_name"] == "printers"
    assert result["declared"]["vendors_whitelist"] == ["HP"]
    assert result["declared"]["put_devices_into_voice_vlan"] is True
    assert result["declared"]["identity_pre_shared_key_set"] is True
    assert "s3cret" not in str(result)
