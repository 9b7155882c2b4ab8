"""
Module 07 - Commitment Publication

Administrative tooling: turn the full list of vesting windows into a
published commitment (root + per-claim proofs).

Only the root goes on-line (via set_vesting_window_merkle_root). The
commitment file carries the leaf ordering and every claim's proof; the
ordering cannot be re-derived from the root, so the file is the
published metadata claimants fetch their proofs from.

Identical windows hash to the same leaf and would share one ledger
entry. They are rejected unless `allow_duplicates=True` is passed
explicitly.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.crypto.hashing import normalize_hash, to_hex
from core.merkle.leaf import window_leaf
from core.merkle.merkle_proofs import MerkleVerifier
from core.merkle.merkle_tree import MerkleTree
from core.schemas.canonical import dumps_canonical
from core.schemas.errors import DuplicateWindowException, LeafNotFoundException
from core.schemas.versioning import SCHEMA_VERSION, assert_supported_schema_version
from core.schemas.window import VestingWindow, normalize_address


logger = logging.getLogger(__name__)


class CommitmentClaim(BaseModel):
    """One window as published, with its leaf and proof."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    index: int = Field(..., ge=0, description="Position in the published leaf ordering")
    address: str
    amount: str = Field(..., pattern=r"^[0-9]+$", description="Decimal base units")
    timestamp: int = Field(..., ge=0, description="Window start")
    vested_timestamp: int = Field(..., ge=0, alias="vestedTimestamp", description="Window end")
    leaf: str
    proof: list[str] = Field(default_factory=list)

    def window(self) -> VestingWindow:
        return VestingWindow(
            account=self.address,
            total_amount=int(self.amount),
            window_start=self.timestamp,
            window_end=self.vested_timestamp,
        )


class Commitment(BaseModel):
    """A published vesting-window commitment."""

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default=SCHEMA_VERSION)
    root: str
    leaf_count: int = Field(..., ge=1)
    allow_duplicates: bool = False
    claims: list[CommitmentClaim]

    def claims_for(self, account: str) -> list[CommitmentClaim]:
        """Every claim owned by `account` (an account may hold several windows)."""
        key = normalize_address(account)
        return [c for c in self.claims if normalize_address(c.address) == key]

    def claim_for_leaf(self, leaf: bytes | str) -> CommitmentClaim:
        """
        Raises:
            LeafNotFoundException: If no claim has this leaf
        """
        wanted = to_hex(normalize_hash(leaf))
        for claim in self.claims:
            if claim.leaf == wanted:
                return claim
        raise LeafNotFoundException(wanted)

    def verify_claim(self, claim: CommitmentClaim) -> bool:
        """Recompute the claim's leaf from its fields and check its proof."""
        leaf = window_leaf(claim.window())
        if to_hex(leaf) != claim.leaf:
            return False
        return MerkleVerifier.verify_leaf(self.root, leaf, claim.proof)


def _find_duplicates(leaves: Sequence[bytes]) -> dict[bytes, list[int]]:
    positions: dict[bytes, list[int]] = {}
    for index, leaf in enumerate(leaves):
        positions.setdefault(leaf, []).append(index)
    return {leaf: idx for leaf, idx in positions.items() if len(idx) > 1}


def build_commitment(
    windows: Iterable[VestingWindow],
    *,
    allow_duplicates: bool = False,
) -> Commitment:
    """
    Build the tree over `windows` (in the given order) and emit every proof.

    Raises:
        EmptyCommitmentException: If there are no windows
        DuplicateWindowException: If two windows are identical and
            duplicates are not allowed
    """
    windows = list(windows)
    leaves = [window_leaf(w) for w in windows]

    duplicates = _find_duplicates(leaves)
    if duplicates:
        if not allow_duplicates:
            leaf, indices = next(iter(duplicates.items()))
            raise DuplicateWindowException(to_hex(leaf), indices)
        logger.warning(
            f"{len(duplicates)} duplicate window(s) will share ledger entries"
        )

    tree = MerkleTree.build(leaves)

    claims = [
        CommitmentClaim(
            index=i,
            address=window.account,
            amount=str(window.total_amount),
            timestamp=window.window_start,
            vested_timestamp=window.window_end,
            leaf=to_hex(leaf),
            proof=[to_hex(s) for s in tree.get_proof_at(i)],
        )
        for i, (window, leaf) in enumerate(zip(windows, leaves))
    ]

    commitment = Commitment(
        root=to_hex(tree.root),
        leaf_count=len(leaves),
        allow_duplicates=allow_duplicates,
        claims=claims,
    )
    logger.info(f"Built commitment over {len(leaves)} windows, root {commitment.root}")
    return commitment


def load_windows(path: str | Path) -> list[VestingWindow]:
    """
    Read a JSON list of window records.

    Records use the producing tooling's names
    ({address, amount, timestamp, vestedTimestamp}); extra keys such as a
    precomputed `leaf` are ignored and recomputed.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON list of windows in {path}")
    try:
        return [VestingWindow.model_validate(record) for record in data]
    except ValidationError as e:
        raise ValueError(f"Invalid window record in {path}: {e}") from e


def save_commitment(commitment: Commitment, path: str | Path) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(dumps_canonical(commitment, indent=2) + "\n", encoding="utf-8")
    return out


def load_commitment(path: str | Path) -> Commitment:
    data: Any = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {path}")
    assert_supported_schema_version(data.get("schema_version", ""))
    return Commitment.model_validate(data)


__all__ = [
    "CommitmentClaim",
    "Commitment",
    "build_commitment",
    "load_windows",
    "save_commitment",
    "load_commitment",
]
