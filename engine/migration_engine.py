"""
Module 06 - Migration Engine

Orchestrates the vesting migration: validates a claimant's window and
proof, computes the vested ceiling, and moves balances through the
external collaborator while keeping the ledger consistent.

Mutations:
- migrate_vested: proof-backed, time-based; over-large requests are
  capped to what is currently claimable (success with a smaller effect)
- migrate_non_vested: allowance-backed; over-large requests are rejected
- set_vesting_window_merkle_root: administrative, replaces the single
  active root wholesale (leaves of a superseded root become unprovable
  unless re-included in the new tree)
- increase_non_vested: administrative allowance top-up

Each mutation runs inside one ledger transaction. The balance transfer
happens inside that transaction; if it raises, nothing is committed.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from core.balances.bridge import BalanceBridge
from core.clock import Clock, SystemClock
from core.config.runtime import RuntimeConfig
from core.crypto.hashing import normalize_hash, to_hex
from core.ledger.ledger import MigrationLedger
from core.ledger.store import InMemoryLedgerStore, JsonFileLedgerStore, LedgerStore
from core.merkle.leaf import window_leaf
from core.merkle.merkle_tree import verify_merkle_proof
from core.schemas.errors import (
    ClaimTooLargeException,
    InvalidWindowException,
    MigrationException,
    NotYetStartedException,
    ProofInvalidException,
)
from core.schemas.window import VestingWindow, check_amount, normalize_address
from core.vesting.calculator import claimable

from engine.permissions import Role, RolePermissions


logger = logging.getLogger(__name__)


class MigrationEngine:
    """
    The vesting migration engine.

    Usage:
        engine = MigrationEngine(ledger, balances, clock=SystemClock())
        engine.set_vesting_window_merkle_root(tree.root)
        granted = engine.migrate_vested(caller, receiver, amount, window, proof)
    """

    def __init__(
        self,
        ledger: MigrationLedger,
        balances: BalanceBridge,
        *,
        clock: Optional[Clock] = None,
        permissions: Optional[RolePermissions] = None,
    ) -> None:
        self._ledger = ledger
        self._balances = balances
        self._clock = clock or SystemClock()
        self._permissions = permissions

    @classmethod
    def from_config(
        cls,
        config: RuntimeConfig,
        balances: BalanceBridge,
        *,
        clock: Optional[Clock] = None,
    ) -> "MigrationEngine":
        """Wire an engine from runtime configuration."""
        store: LedgerStore
        if config.ledger.backend == "json":
            store = JsonFileLedgerStore(config.ledger.path)
        else:
            store = InMemoryLedgerStore()

        permissions = None
        if config.engine.enforce_permissions:
            permissions = RolePermissions.with_admins(config.engine.admins)

        return cls(
            MigrationLedger(store),
            balances,
            clock=clock,
            permissions=permissions,
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def ledger(self) -> MigrationLedger:
        return self._ledger

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def active_root(self) -> Optional[bytes]:
        return self._ledger.active_root

    def amount_migrated_from_window(self, leaf: bytes | str) -> int:
        return self._ledger.amount_migrated(normalize_hash(leaf))

    def non_vested_amounts(self, account: str) -> int:
        return self._ledger.allowance(account)

    def preview_vested(self, window: VestingWindow, now: Optional[int] = None) -> int:
        """
        What `window` could release right now, without proof or mutation.

        Raises:
            InvalidWindowException / NotYetStartedException as migrate_vested would
        """
        at = self._clock.now() if now is None else now
        return claimable(window, self._ledger.amount_migrated(window_leaf(window)), at)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def migrate_vested(
        self,
        caller: str,
        receiver: str,
        requested_amount: int,
        window: VestingWindow,
        proof: Sequence[bytes | str],
    ) -> int:
        """
        Migrate up to `requested_amount` vested from one window.

        The leaf is rebuilt with `caller` as the account, so only the
        window's owner can claim it. Returns the amount actually granted,
        which is min(requested_amount, claimable).

        Raises:
            InvalidWindowException: window_end <= window_start
            NotYetStartedException: now < window_start
            ProofInvalidException: proof does not link the leaf to the active root
            TransferFailedException: the balance collaborator refused
        """
        now = self._clock.now()
        try:
            check_amount(requested_amount)
            caller = normalize_address(caller)
            receiver = normalize_address(receiver)

            if window.window_end <= window.window_start:
                raise InvalidWindowException(window.window_start, window.window_end)
            if now < window.window_start:
                raise NotYetStartedException(window.window_start, now)

            claimed = window.with_account(caller)
            leaf = window_leaf(claimed)
            try:
                siblings = [normalize_hash(p) for p in proof]
            except ValueError as e:
                raise ProofInvalidException(to_hex(leaf), details={"reason": str(e)}) from e

            with self._ledger.transaction() as tx:
                root = tx.active_root
                if root is None or not verify_merkle_proof(root, leaf, siblings):
                    raise ProofInvalidException(to_hex(leaf))

                available = claimable(claimed, tx.migrated(leaf), now)
                grant = min(requested_amount, available)
                if grant > 0:
                    tx.add_migrated(leaf, grant)
                    self._balances.execute_transfer(caller, receiver, grant)
        except MigrationException as e:
            logger.warning(f"migrate_vested rejected for {caller}: {e.code} {e.details}")
            raise

        logger.info(
            f"Migrated {grant} vested (requested {requested_amount}) "
            f"from leaf {to_hex(leaf)} to {receiver} at {now}"
        )
        return grant

    def migrate_non_vested(self, caller: str, requested_amount: int) -> int:
        """
        Migrate exactly `requested_amount` from the caller's allowance.

        Raises:
            ClaimTooLargeException: requested_amount exceeds the allowance
            TransferFailedException: the balance collaborator refused
        """
        try:
            check_amount(requested_amount)
            caller = normalize_address(caller)

            with self._ledger.transaction() as tx:
                allowance = tx.allowance(caller)
                if requested_amount > allowance:
                    raise ClaimTooLargeException(requested_amount, allowance)
                tx.sub_allowance(caller, requested_amount)
                self._balances.execute_transfer(caller, caller, requested_amount)
        except MigrationException as e:
            logger.warning(f"migrate_non_vested rejected for {caller}: {e.code} {e.details}")
            raise

        logger.info(f"Migrated {requested_amount} non-vested for {caller}")
        return requested_amount

    def set_vesting_window_merkle_root(
        self,
        root: bytes | str,
        *,
        sender: Optional[str] = None,
    ) -> None:
        """
        Replace the active root. The previous root is not kept anywhere.

        Raises:
            PermissionDeniedException: permissions are enforced and sender lacks the role
            ValueError: root is not a 32-byte hash
        """
        if self._permissions is not None:
            self._permissions.require(Role.SET_VESTING_WINDOW_MERKLE_ROOT, sender)
        new_root = normalize_hash(root)

        with self._ledger.transaction() as tx:
            previous = tx.active_root
            tx.set_active_root(new_root)

        logger.info(
            f"Vesting window root set to {to_hex(new_root)} "
            f"(replaced {to_hex(previous) if previous else 'none'})"
        )

    def increase_non_vested(
        self,
        account: str,
        amount: int,
        *,
        sender: Optional[str] = None,
    ) -> int:
        """
        Top up an account's non-vested allowance. Returns the new allowance.

        Raises:
            PermissionDeniedException: permissions are enforced and sender lacks the role
        """
        if self._permissions is not None:
            self._permissions.require(Role.INCREASE_NON_VESTED, sender)
        check_amount(amount)
        account = normalize_address(account)

        with self._ledger.transaction() as tx:
            total = tx.add_allowance(account, amount)

        logger.info(f"Non-vested allowance for {account} increased by {amount} to {total}")
        return total
