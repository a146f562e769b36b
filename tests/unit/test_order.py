"""Unit tests for portnox_macauth.utils.order and .validate."""

from __future__ import annotations

import pytest

from portnox_macauth.client.errors import PortnoxValidationError
from portnox_macauth.model.mac import MacEntry
from portnox_macauth.utils.order import (
    declared_order,
    filter_entries,
    reorder_entries,
    sort_entries,
)
from portnox_macauth.utils.validate import (
    is_valid_description,
    is_valid_mac,
    validate_mac_entries,
    validate_mac_entry,
)

MAC1 = "AA:BB:CC:DD:EE:01"
MAC2 = "AA:BB:CC:DD:EE:02"
MAC3 = "AA:BB:CC:DD:EE:03"


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------

class TestOrdering:
    def test_declared_order_first_occurrence(self) -> None:
        entries = [MacEntry(MAC2), MacEntry(MAC1), MacEntry(MAC2, "dup")]
        assert declared_order(entries) == [MAC2, MAC1]

    def test_reverse_remote_order_restored(self) -> None:
        declared = [MacEntry(MAC1, "d1"), MacEntry(MAC2, "d2")]
        remote = [MacEntry(MAC2, "d2"), MacEntry(MAC1, "d1")]
        result = reorder_entries(remote, declared_order(declared))
        assert [e.mac_address for e in result] == [MAC1, MAC2]

    def test_unknown_entries_appended_in_incoming_order(self) -> None:
        remote = [MacEntry(MAC3), MacEntry(MAC2), MacEntry(MAC1)]
        result = reorder_entries(remote, [MAC1])
        assert [e.mac_address for e in result] == [MAC1, MAC3, MAC2]

    def test_declared_but_missing_remotely_dropped(self) -> None:
        result = reorder_entries([MacEntry(MAC2)], [MAC1, MAC2])
        assert [e.mac_address for e in result] == [MAC2]

    def test_sort_by_mac_then_description(self) -> None:
        entries = [MacEntry(MAC2, "a"), MacEntry(MAC1, "z"), MacEntry(MAC1, "b")]
        result = sort_entries(entries)
        assert [(e.mac_address, e.description) for e in result] == [
            (MAC1, "b"),
            (MAC1, "z"),
            (MAC2, "a"),
        ]

    def test_filter_entries(self) -> None:
        entries = [MacEntry(MAC1), MacEntry(MAC2)]
        assert filter_entries(entries, {MAC2}) == [MacEntry(MAC2)]


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "mac",
    ["AA:BB:CC:DD:EE:FF", "aa-bb-cc-dd-ee-ff", "00:11:22:33:44:55", "0a:1B-2c:3D-4e:5F"],
)
def test_valid_macs_accepted(mac: str) -> None:
    assert is_valid_mac(mac)


@pytest.mark.parametrize(
    "mac",
    [
        "",
        "AA:BB:CC:DD:EE",
        "AA:BB:CC:DD:EE:FF:00",
        "AABBCCDDEEFF",
        "AA.BB.CC.DD.EE.FF",
        "GG:BB:CC:DD:EE:FF",
        "AA:BB:CC:DD:EE:FF\n",
        " AA:BB:CC:DD:EE:FF",
    ],
)
def test_invalid_macs_rejected(mac: str) -> None:
    assert not is_valid_mac(mac)


@pytest.mark.parametrize("desc", ["", "printer-1", "A" * 64])
def test_valid_descriptions(desc: str) -> None:
    assert is_valid_description(desc)


@pytest.mark.parametrize("desc", ["A" * 65, "has space", "under_score", "dot.", "ümlaut"])
def test_invalid_descriptions(desc: str) -> None:
    assert not is_valid_description(desc)


def test_validate_entry_reports_field() -> None:
    with pytest.raises(PortnoxValidationError) as exc_info:
        validate_mac_entry(MacEntry(MAC1, "bad description"))
    assert exc_info.value.field == "description"


def test_validate_entries_rejects_duplicates() -> None:
    with pytest.raises(PortnoxValidationError) as exc_info:
        validate_mac_entries([MacEntry(MAC1), MacEntry(MAC1, "again")])
    assert exc_info.value.field == "mac_address"
