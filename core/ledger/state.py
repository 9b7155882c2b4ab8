"""
Module 04 - Migration Ledger
File: state.py

Purpose: The persisted ledger document.

Three pieces of state, the sole source of truth for double-spend
prevention:
- active_root: the one published commitment (replaced, never versioned)
- migrated_from_window: leaf -> cumulative amount migrated (never decreases)
- non_vested_allowance: account -> remaining pre-authorized amount

Absent keys read as zero.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from core.schemas.versioning import SCHEMA_VERSION
from core.schemas.window import UInt256


class LedgerState(BaseModel):
    """Snapshot of the migration ledger."""

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default=SCHEMA_VERSION)
    active_root: Optional[str] = Field(
        default=None,
        description="0x-hex root of the active commitment, None until first publication",
    )
    migrated_from_window: dict[str, UInt256] = Field(
        default_factory=dict,
        description="0x-hex leaf -> cumulative amount migrated",
    )
    non_vested_allowance: dict[str, UInt256] = Field(
        default_factory=dict,
        description="Checksum address -> remaining non-vested allowance",
    )

    def migrated(self, leaf_hex: str) -> int:
        return self.migrated_from_window.get(leaf_hex, 0)

    def allowance(self, account: str) -> int:
        return self.non_vested_allowance.get(account, 0)
