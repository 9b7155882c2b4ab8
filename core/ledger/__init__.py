"""
Module 04 - Migration Ledger

Persistent, transactional record of what has been migrated per leaf and
what non-vested allowance remains per account.
"""
from .state import LedgerState
from .store import InMemoryLedgerStore, JsonFileLedgerStore, LedgerStore
from .ledger import LedgerTransaction, MigrationLedger

__all__ = [
    "LedgerState",
    "LedgerStore",
    "InMemoryLedgerStore",
    "JsonFileLedgerStore",
    "LedgerTransaction",
    "MigrationLedger",
]
