"""
Module 04 - Migration Ledger
File: ledger.py

Purpose: Transactional access to the ledger state.

Every mutation goes through `MigrationLedger.transaction()`: the ledger
lock and the store lock are held for the whole validate-compute-update
sequence, the committed snapshot is reloaded from the store, mutations
land on a working copy, and the copy is saved only if the block exits
cleanly. An exception anywhere inside the block (including a failed
balance transfer) discards the copy.

The store is the source of truth. Queries and transactions reload it
every time, so several ledgers over one JSON file (CLI, API workers)
never act on a stale snapshot.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from core.crypto.hashing import from_hex, to_hex
from core.ledger.state import LedgerState
from core.ledger.store import InMemoryLedgerStore, LedgerStore
from core.schemas.errors import InvalidAmountException
from core.schemas.window import check_amount, normalize_address


logger = logging.getLogger(__name__)


def _leaf_key(leaf: bytes) -> str:
    return to_hex(leaf)


class LedgerTransaction:
    """Mutable view over a working copy of the ledger state."""

    def __init__(self, state: LedgerState) -> None:
        self._state = state

    @property
    def active_root(self) -> Optional[bytes]:
        root = self._state.active_root
        return from_hex(root) if root is not None else None

    def set_active_root(self, root: bytes) -> None:
        self._state.active_root = to_hex(root)

    def migrated(self, leaf: bytes) -> int:
        return self._state.migrated(_leaf_key(leaf))

    def add_migrated(self, leaf: bytes, amount: int) -> int:
        """Increase a leaf's migrated total. Returns the new total."""
        check_amount(amount)
        key = _leaf_key(leaf)
        total = self._state.migrated(key) + amount
        check_amount(total)
        self._state.migrated_from_window[key] = total
        return total

    def allowance(self, account: str) -> int:
        return self._state.allowance(normalize_address(account))

    def add_allowance(self, account: str, amount: int) -> int:
        check_amount(amount)
        key = normalize_address(account)
        total = self._state.allowance(key) + amount
        check_amount(total)
        self._state.non_vested_allowance[key] = total
        return total

    def sub_allowance(self, account: str, amount: int) -> int:
        """Decrease an allowance; callers check sufficiency first."""
        check_amount(amount)
        key = normalize_address(account)
        remaining = self._state.allowance(key) - amount
        if remaining < 0:
            raise InvalidAmountException(remaining, details={"account": key})
        self._state.non_vested_allowance[key] = remaining
        return remaining


class MigrationLedger:
    """
    Persistent per-leaf and per-account migration bookkeeping.

    Usage:
        ledger = MigrationLedger(JsonFileLedgerStore("ledger.json"))

        with ledger.transaction() as tx:
            tx.add_migrated(leaf, 10)
            collaborator.execute_transfer(...)   # raising here rolls back
    """

    def __init__(self, store: LedgerStore | None = None) -> None:
        self._store = store if store is not None else InMemoryLedgerStore()
        self._lock = threading.RLock()
        # Snapshot loaded by the outermost open block; nested blocks reuse it
        self._state: Optional[LedgerState] = None

    @contextmanager
    def _committed(self, exclusive: bool) -> Iterator[LedgerState]:
        with self._lock:
            if self._state is not None:
                yield self._state
                return
            with self._store.locked(exclusive=exclusive):
                self._state = self._store.load()
                try:
                    yield self._state
                finally:
                    self._state = None

    @property
    def active_root(self) -> Optional[bytes]:
        with self._committed(exclusive=False) as state:
            root = state.active_root
        return from_hex(root) if root is not None else None

    def amount_migrated(self, leaf: bytes) -> int:
        with self._committed(exclusive=False) as state:
            return state.migrated(_leaf_key(leaf))

    def allowance(self, account: str) -> int:
        key = normalize_address(account)
        with self._committed(exclusive=False) as state:
            return state.allowance(key)

    def snapshot(self) -> LedgerState:
        """Deep copy of the committed state."""
        with self._committed(exclusive=False) as state:
            return state.model_copy(deep=True)

    @contextmanager
    def transaction(self) -> Iterator[LedgerTransaction]:
        """Exclusive read-modify-write block; commits only on clean exit."""
        with self._committed(exclusive=True) as committed:
            working = committed.model_copy(deep=True)
            yield LedgerTransaction(working)
            self._store.save(working)
            logger.debug("Ledger transaction committed")
