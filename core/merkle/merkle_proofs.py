"""
Module 02 - Merkle Proofs Convenience Wrappers
Window-level wrappers around the core Merkle tree functions.

Owner: Protocol/Crypto Engineer
Module ID: M02

This module provides class-based interfaces:
- MerkleProof: a proof bundled with its leaf, position and root
- MerkleProver: build proofs for vesting windows
- MerkleVerifier: verify windows or leaves against a root, accepting
  either raw bytes or 0x-hex strings
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from core.crypto.hashing import normalize_hash, to_hex
from core.merkle.leaf import window_leaf
from core.merkle.merkle_tree import MerkleTree, verify_merkle_proof
from core.schemas.window import VestingWindow


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle inclusion proof for a single leaf.

    Attributes:
        leaf: The leaf hash being proven
        index: Position of the leaf in the published ordering
        siblings: Sibling hashes from the leaf level upwards
        root: The root this proof was generated against
    """
    leaf: bytes
    index: int
    siblings: list[bytes]
    root: bytes

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")

    def hex_siblings(self) -> list[str]:
        return [to_hex(s) for s in self.siblings]

    def verify(self) -> bool:
        return verify_merkle_proof(self.root, self.leaf, self.siblings)


class MerkleProver:
    """
    Convenience class for generating proofs from windows.

    Example:
        >>> proof = MerkleProver.prove_window(windows, windows[1])
        >>> proof.verify()
        True
    """

    @staticmethod
    def tree_for_windows(windows: Sequence[VestingWindow]) -> MerkleTree:
        """Build a tree whose leaves are the windows' leaves, in order."""
        return MerkleTree.build([window_leaf(w) for w in windows])

    @staticmethod
    def prove(tree: MerkleTree, leaf: bytes) -> MerkleProof:
        """
        Build a MerkleProof for a leaf already in `tree`.

        Raises:
            LeafNotFoundException: If the leaf is not in the tree
        """
        index = tree.index_of(leaf)
        return MerkleProof(
            leaf=leaf,
            index=index,
            siblings=tree.get_proof_at(index),
            root=tree.root,
        )

    @staticmethod
    def prove_window(
        windows: Sequence[VestingWindow],
        window: VestingWindow,
    ) -> MerkleProof:
        """Build the tree over `windows` and prove `window` within it."""
        tree = MerkleProver.tree_for_windows(windows)
        return MerkleProver.prove(tree, window_leaf(window))


class MerkleVerifier:
    """Convenience class for verifying proofs."""

    @staticmethod
    def verify_leaf(
        root: bytes | str,
        leaf: bytes | str,
        proof: Sequence[bytes | str],
    ) -> bool:
        """
        Verify a leaf against a root.

        Malformed hashes (wrong length, bad hex) simply fail verification.
        """
        try:
            root_bytes = normalize_hash(root)
            leaf_bytes = normalize_hash(leaf)
            siblings = [normalize_hash(s) for s in proof]
        except ValueError:
            return False
        return verify_merkle_proof(root_bytes, leaf_bytes, siblings)

    @staticmethod
    def verify_window(
        root: bytes | str,
        window: VestingWindow,
        proof: Sequence[bytes | str],
    ) -> bool:
        """Reconstruct the window's leaf and verify it against `root`."""
        return MerkleVerifier.verify_leaf(root, window_leaf(window), proof)


__all__ = [
    "MerkleProof",
    "MerkleProver",
    "MerkleVerifier",
]
