"""Resource state records handed back to the plugin host."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from portnox_macauth.model.account import Account, AccountConfig
from portnox_macauth.model.mac import MacEntry


@dataclass
class Diagnostic:
    """A non-fatal message attached to an operation result."""

    severity: Literal["warning", "error"]
    summary: str
    detail: str = ""


@dataclass
class ResourceState:
    """Common part of every resource state.

    Attributes:
        id: Local identity; an empty string means the resource is gone and
            the host should plan to recreate it.
        diagnostics: Warnings raised while producing this state.
    """

    id: str = ""
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def exists(self) -> bool:
        return bool(self.id)


@dataclass
class AccountState(ResourceState):
    """State of one account.

    Attributes:
        account: Account as known after the operation.
        config: Declared settings recorded on create, including the ones
            the create call does not send.
    """

    account: Account | None = None
    config: AccountConfig | None = None


@dataclass
class MacAddressesState(ResourceState):
    """State of a whitelist collection, entries in declared order."""

    account_name: str = ""
    mac_addresses: list[MacEntry] = field(default_factory=list)


@dataclass
class MacAddressState(ResourceState):
    account_name: str = ""
    entry: MacEntry | None = None


def resource_missing(detail: str = "") -> Diagnostic:
    """Warning used when the remote object has disappeared out-of-band."""
    return Diagnostic(
        severity="warning",
        summary="Resource not found",
        detail=detail
        or "The resource is missing from the API and will be recreated on the next apply.",
    )
