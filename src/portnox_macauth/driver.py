"""Portnox MAC-based account driver: top-level resource operations."""

from __future__ import annotations

import logging
from typing import Any

from portnox_macauth.client.account_ops import (
    account_create,
    account_delete,
    account_get,
    account_search,
    is_not_found,
)
from portnox_macauth.client.errors import PortnoxError, PortnoxNotFoundError, PortnoxRequestError
from portnox_macauth.client.retry import RetryPolicy
from portnox_macauth.client.session import PortnoxCredentials, PortnoxSession
from portnox_macauth.client.whitelist_ops import (
    apply_mac_changes,
    whitelist_add,
    whitelist_remove,
)
from portnox_macauth.model.account import Account, AccountConfig
from portnox_macauth.model.config import ProviderConfig
from portnox_macauth.model.mac import MacChangeSet, MacEntry
from portnox_macauth.model.state import (
    AccountState,
    MacAddressesState,
    MacAddressState,
    resource_missing,
)
from portnox_macauth.utils.mac_diff import plan_mac_changes
from portnox_macauth.utils.order import (
    declared_order,
    filter_entries,
    reorder_entries,
    sort_entries,
)
from portnox_macauth.utils.validate import validate_mac_entries, validate_mac_entry
from portnox_macauth.vendor.portnox.endpoints import DEFAULT_BASE_URL

logger = logging.getLogger(__name__)


def _pick_account(accounts: list[Account], account_name: str) -> Account | None:
    """Return the search result named *account_name*, if any.

    The search matches by MAC, so other accounts holding the same address
    may be returned as well; those are never used.
    """
    for account in accounts:
        if account.account_name == account_name:
            return account
    return None


def parse_import_id(import_id: str) -> tuple[str, set[str]]:
    """Split ``"account"`` or ``"account,mac1;mac2"`` into name and MAC filter."""
    account_name, _, macs = import_id.partition(",")
    mac_filter = {m.strip() for m in macs.split(";") if m.strip()}
    return account_name.strip(), mac_filter


class PortnoxDriver:
    """Driver for MAC-based accounts and their MAC whitelists.

    Every operation takes the caller's declared configuration (and, where
    relevant, the previously persisted state) and returns the new state.
    No state is kept between operations apart from the configured
    credential and base URL.

    Args:
        api_key: Portnox API key.
        base_url: API base URL.
        timeout: Default request timeout in seconds.
        optional_args: Optional driver configuration overrides.
            Supported keys:

            - ``retries`` (int): Max attempts per API call (default 3).
            - ``retry_interval`` (float): Base backoff in seconds (default 1).
            - ``retry_transport_errors`` (bool): Also retry transport
              errors (default ``False``).
            - ``verify_tls`` (bool): Verify TLS certificates (default ``True``).
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: int = 60,
        optional_args: dict[str, Any] | None = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self.optional_args: dict[str, Any] = optional_args or {}
        self._credentials = PortnoxCredentials(api_key=api_key)
        self._retry_policy = RetryPolicy(
            retries=int(self.optional_args.get("retries", 3)),
            retry_interval=float(self.optional_args.get("retry_interval", 1)),
            retry_transport_errors=bool(
                self.optional_args.get("retry_transport_errors", False)
            ),
        )
        self._verify_tls: bool = bool(self.optional_args.get("verify_tls", True))
        self._session: PortnoxSession | None = None

        logger.debug(
            "PortnoxDriver initialised: base_url=%s retries=%d retry_interval=%s",
            self.base_url,
            self._retry_policy.retries,
            self._retry_policy.retry_interval,
        )

    @classmethod
    def from_config(cls, config: ProviderConfig) -> PortnoxDriver:
        """Build a driver from a :class:`ProviderConfig`."""
        return cls(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=int(config.timeout_s),
            optional_args={
                "retries": config.retries,
                "retry_interval": config.retry_interval,
                "retry_transport_errors": config.retry_transport_errors,
                "verify_tls": config.verify_tls,
            },
        )

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    def open(self) -> None:
        """Create the HTTP session.  No request is sent."""
        logger.info("Opening session to %s", self.base_url)
        self._session = PortnoxSession(
            base_url=self.base_url,
            credentials=self._credentials,
            retry_policy=self._retry_policy,
            timeout_s=float(self.timeout),
            verify_tls=self._verify_tls,
        )

    def close(self) -> None:
        """Close the HTTP session (best-effort; never raises)."""
        if self._session is not None:
            try:
                self._session.close()
            except Exception:  # noqa: BLE001
                logger.debug("Session close failed (ignored)", exc_info=True)
            finally:
                self._session = None

    def __enter__(self) -> PortnoxDriver:
        self.open()
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------

    def create_account(self, config: AccountConfig) -> AccountState:
        """Create an account, posting any inline whitelist with it.

        Raises:
            PortnoxValidationError: If an inline entry is malformed.
            PortnoxError: If the API call fails.
        """
        validate_mac_entries(config.mac_whitelist)
        session = self._require_session()
        account_create(session, config)
        logger.info("Created account %s", config.account_name)
        return AccountState(
            id=config.account_name,
            account=Account(
                account_name=config.account_name,
                description=config.description,
                group_id=config.group_id or "",
                mac_whitelist=list(config.mac_whitelist),
            ),
            config=config,
        )

    def read_account(self, account_id: str) -> AccountState:
        """Read an account back by id.

        If the API reports the account as missing (HTTP 404 or
        ``InternalErrorCode`` 5357), the returned state has an empty ``id``
        and carries a warning instead of raising.

        Raises:
            PortnoxError: On any other failure.
        """
        session = self._require_session()
        try:
            account = account_get(session, account_id)
        except PortnoxRequestError as exc:
            if not is_not_found(exc):
                raise
            logger.warning("Account %s not found; clearing local identity", account_id)
            return AccountState(id="", diagnostics=[resource_missing()])
        return AccountState(id=account_id, account=account)

    def delete_account(self, account_id: str) -> AccountState:
        session = self._require_session()
        account_delete(session, account_id)
        logger.info("Deleted account %s", account_id)
        return AccountState(id="")

    def get_account(self, account_id: str) -> Account:
        """Return the full account record (data-source read).

        Raises:
            PortnoxError: If the account cannot be fetched.
        """
        session = self._require_session()
        return account_get(session, account_id)

    # ------------------------------------------------------------------
    # MAC whitelist collection
    # ------------------------------------------------------------------

    def plan_mac_addresses(
        self,
        declared: list[MacEntry],
        previous: list[MacEntry],
    ) -> MacChangeSet:
        """Validate *declared* and return the change set, without applying it."""
        validate_mac_entries(declared)
        return plan_mac_changes(previous, declared)

    def create_mac_addresses(
        self,
        account_name: str,
        declared: list[MacEntry],
    ) -> MacAddressesState:
        """Add every declared entry in a single batched call.

        Raises:
            PortnoxValidationError: If a declared entry is malformed.
            PortnoxError: If the API call fails.
        """
        validate_mac_entries(declared)
        session = self._require_session()
        order = declared_order(declared)
        whitelist_add(session, account_name, declared)
        logger.info("Added %d MAC entries to %s", len(declared), account_name)
        return MacAddressesState(
            id=account_name,
            account_name=account_name,
            mac_addresses=reorder_entries(declared, order),
        )

    def read_mac_addresses(
        self,
        account_name: str,
        declared: list[MacEntry],
        previous: list[MacEntry] | None = None,
    ) -> MacAddressesState:
        """Refresh whitelist state from the API, in declared order.

        Only addresses present in *declared* or *previous* are reported;
        entries the caller never managed are ignored.  Those known from
        *previous* but no longer declared are appended after the declared
        ones.

        Raises:
            PortnoxNotFoundError: If the search returns no account.
            PortnoxError: If the API call fails.
        """
        session = self._require_session()
        order = declared_order(declared)
        managed = set(order) | {e.mac_address for e in previous or []}

        accounts = account_search(session, declared)
        if not accounts:
            raise PortnoxNotFoundError(f"No account found with name {account_name}")
        account = _pick_account(accounts, account_name)
        if account is None:
            logger.warning("Account %s not among search results; whitelist is empty", account_name)
            current: list[MacEntry] = []
        else:
            current = account.mac_whitelist

        remote = sort_entries(filter_entries(current, managed))
        return MacAddressesState(
            id=account_name,
            account_name=account_name,
            mac_addresses=reorder_entries(remote, order),
        )

    def update_mac_addresses(
        self,
        account_name: str,
        declared: list[MacEntry],
        previous: list[MacEntry],
    ) -> MacAddressesState:
        """Reconcile the remote whitelist from *previous* to *declared*.

        Removals are issued before the batched add.  A failure part-way
        through propagates without rollback; re-running converges.

        Raises:
            PortnoxValidationError: If a declared entry is malformed.
            PortnoxError: If any API call fails.
        """
        order = declared_order(declared)
        change_set = self.plan_mac_addresses(declared, previous)
        session = self._require_session()
        if change_set.has_changes:
            applied = apply_mac_changes(session, account_name, change_set)
            logger.info("Applied %s to %s", applied, account_name)
        else:
            logger.debug("Whitelist of %s already up to date", account_name)
        return MacAddressesState(
            id=account_name,
            account_name=account_name,
            mac_addresses=reorder_entries(change_set.to_add_or_update, order),
        )

    def delete_mac_addresses(
        self,
        account_name: str,
        declared: list[MacEntry],
    ) -> MacAddressesState:
        """Remove every declared address (matched by MAC only)."""
        session = self._require_session()
        if declared:
            whitelist_remove(session, account_name, declared)
            logger.info("Removed %d MAC entries from %s", len(declared), account_name)
        return MacAddressesState(id="", account_name=account_name)

    def import_mac_addresses(self, import_id: str) -> MacAddressesState:
        """Adopt an existing whitelist.

        Args:
            import_id: ``"<account>"`` to import every entry, or
                ``"<account>,<mac1>;<mac2>"`` to import only those addresses.

        Returns:
            State with entries sorted by MAC address.

        Raises:
            PortnoxNotFoundError: If a MAC filter was given and none matched.
            PortnoxError: If the account cannot be fetched.
        """
        account_name, mac_filter = parse_import_id(import_id)
        session = self._require_session()
        account = account_get(session, account_name)
        entries = account.mac_whitelist
        if mac_filter:
            entries = filter_entries(entries, mac_filter)
            if not entries:
                raise PortnoxNotFoundError(
                    f"none of the specified MAC addresses were found in account {account_name}"
                )
        return MacAddressesState(
            id=account_name,
            account_name=account_name,
            mac_addresses=sorted(entries, key=lambda e: e.mac_address),
        )

    # ------------------------------------------------------------------
    # Single MAC entry
    # ------------------------------------------------------------------

    def create_mac_address(self, account_name: str, entry: MacEntry) -> MacAddressState:
        validate_mac_entry(entry)
        session = self._require_session()
        whitelist_add(session, account_name, [entry])
        logger.info("Added MAC %s to %s", entry.mac_address, account_name)
        return MacAddressState(
            id=f"{account_name}:{entry.mac_address}",
            account_name=account_name,
            entry=entry,
        )

    def read_mac_address(self, account_name: str, entry: MacEntry) -> MacAddressState:
        """Refresh one entry; a vanished entry clears the id with a warning."""
        session = self._require_session()
        accounts = account_search(session, [entry])
        remote: MacEntry | None = None
        account = _pick_account(accounts, account_name)
        if account is not None:
            found = filter_entries(account.mac_whitelist, {entry.mac_address})
            remote = found[0] if found else None
        if remote is None:
            logger.warning("MAC %s not found on %s", entry.mac_address, account_name)
            return MacAddressState(account_name=account_name, diagnostics=[resource_missing()])
        return MacAddressState(
            id=f"{account_name}:{remote.mac_address}",
            account_name=account_name,
            entry=remote,
        )

    def delete_mac_address(self, account_name: str, entry: MacEntry) -> MacAddressState:
        session = self._require_session()
        whitelist_remove(session, account_name, [entry], match_metadata=True)
        logger.info("Removed MAC %s from %s", entry.mac_address, account_name)
        return MacAddressState(account_name=account_name)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_session(self) -> PortnoxSession:
        """Return the active session or raise :exc:`.PortnoxError`."""
        if self._session is None:
            raise PortnoxError("Session not open; call open() first.")
        return self._session
