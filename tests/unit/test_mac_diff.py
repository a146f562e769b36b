"""Unit tests for portnox_macauth.utils.mac_diff.plan_mac_changes."""

from __future__ import annotations

from portnox_macauth.model.mac import MacEntry
from portnox_macauth.utils.mac_diff import entry_changed, plan_mac_changes

MAC1 = "AA:BB:CC:DD:EE:01"
MAC2 = "AA:BB:CC:DD:EE:02"
MAC3 = "AA:BB:CC:DD:EE:03"


def make_entry(mac: str, description: str = "", expiration: str | None = None) -> MacEntry:
    return MacEntry(mac_address=mac, description=description, expiration=expiration)


# ---------------------------------------------------------------------------
# No-change cases
# ---------------------------------------------------------------------------

class TestNoChange:
    def test_identical_sets_produce_no_changes(self) -> None:
        entries = [make_entry(MAC1, "foo"), make_entry(MAC2, "bar")]
        cs = plan_mac_changes(entries, list(entries))
        assert cs.to_remove == []
        assert cs.to_replace == []
        assert cs.to_create == []
        assert cs.has_changes is False
        assert cs.needs_add is False

    def test_reordering_is_not_a_change(self) -> None:
        previous = [make_entry(MAC1, "foo"), make_entry(MAC2, "bar")]
        declared = [make_entry(MAC2, "bar"), make_entry(MAC1, "foo")]
        assert plan_mac_changes(previous, declared).has_changes is False

    def test_empty_expiration_equals_absent(self) -> None:
        cs = plan_mac_changes([make_entry(MAC1, "foo", None)], [make_entry(MAC1, "foo", "")])
        assert cs.to_replace == []


# ---------------------------------------------------------------------------
# Remove / create
# ---------------------------------------------------------------------------

class TestRemoveCreate:
    def test_scenario_remove_one_add_both(self) -> None:
        declared = [make_entry(MAC1, "foo"), make_entry(MAC2, "bar")]
        previous = [make_entry(MAC1, "foo"), make_entry(MAC3, "baz")]
        cs = plan_mac_changes(previous, declared)
        assert [e.mac_address for e in cs.to_remove] == [MAC3]
        assert cs.to_replace == []
        assert [e.mac_address for e in cs.to_create] == [MAC2]
        assert [e.mac_address for e in cs.to_add_or_update] == [MAC1, MAC2]

    def test_everything_new_when_no_previous(self) -> None:
        declared = [make_entry(MAC2), make_entry(MAC1)]
        cs = plan_mac_changes([], declared)
        assert [e.mac_address for e in cs.to_create] == [MAC2, MAC1]
        assert cs.to_remove == []

    def test_empty_declaration_removes_everything(self) -> None:
        previous = [make_entry(MAC1), make_entry(MAC2)]
        cs = plan_mac_changes(previous, [])
        assert [e.mac_address for e in cs.to_remove] == [MAC1, MAC2]
        assert cs.to_add_or_update == []
        assert cs.needs_add is False
        assert cs.has_changes is True


# ---------------------------------------------------------------------------
# Replace
# ---------------------------------------------------------------------------

class TestReplace:
    def test_description_change_is_replace(self) -> None:
        cs = plan_mac_changes([make_entry(MAC1, "old")], [make_entry(MAC1, "new")])
        assert len(cs.to_replace) == 1
        assert cs.to_replace[0].previous.description == "old"
        assert cs.to_replace[0].declared.description == "new"
        assert cs.to_create == []

    def test_expiration_set_is_replace(self) -> None:
        cs = plan_mac_changes([make_entry(MAC1, "d")], [make_entry(MAC1, "d", "2027-01-01")])
        assert [r.declared.mac_address for r in cs.to_replace] == [MAC1]

    def test_expiration_cleared_is_replace(self) -> None:
        cs = plan_mac_changes([make_entry(MAC1, "d", "2027-01-01")], [make_entry(MAC1, "d")])
        assert len(cs.to_replace) == 1

    def test_both_fields_changed_single_replace(self) -> None:
        cs = plan_mac_changes(
            [make_entry(MAC1, "old", "2026-01-01")],
            [make_entry(MAC1, "new", "2027-01-01")],
        )
        assert len(cs.to_replace) == 1
        assert cs.needs_add is True


def test_entry_changed_treats_empty_expiration_as_none() -> None:
    assert entry_changed(make_entry(MAC1, "a", ""), make_entry(MAC1, "a", None)) is False
    assert entry_changed(make_entry(MAC1, "a"), make_entry(MAC1, "b")) is True
