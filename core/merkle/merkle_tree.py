"""
Module 02 - Merkle Tree Implementation
Deterministic Merkle tree construction, proof generation, and verification.

Owner: Protocol/Crypto Engineer
Module ID: M02

This module provides:
- MerkleTree: built once per publication cycle from an ordered leaf list
- Proof generation for any leaf (ordered sibling hashes, no direction bits)
- Proof verification against a root

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = keccak256(packed window), see core.merkle.leaf
2. Parent hashing: parent = keccak256(min(left, right) + max(left, right))
3. Padding rule: the last node of an odd level is paired with itself
4. Empty leaves: rejected with EmptyCommitmentException (no zero-root)
5. Single leaf: root = leaf, proof = []

Determinism Notes:
- No randomness or non-deterministic ordering
- Leaf ordering is defined by the administrative tool and is part of the
  published metadata; it cannot be re-derived from the root
- This module never sorts leaves, only sibling pairs
"""
from __future__ import annotations

from typing import Sequence

from core.crypto.hashing import hash_pair, to_hex
from core.schemas.errors import EmptyCommitmentException, LeafNotFoundException


def merkle_parent(left: bytes, right: bytes) -> bytes:
    """Compute the parent hash of two child nodes (order-independent)."""
    return hash_pair(left, right)


def _next_level(level: Sequence[bytes]) -> list[bytes]:
    parents: list[bytes] = []
    for i in range(0, len(level), 2):
        left = level[i]
        right = level[i + 1] if i + 1 < len(level) else level[i]
        parents.append(merkle_parent(left, right))
    return parents


class MerkleTree:
    """
    Binary hash tree over an ordered list of leaves.

    The tree is immutable. Publishing a new leaf set means building a
    whole new tree and republishing its root.

    Example:
        >>> tree = MerkleTree.build([leaf_a, leaf_b, leaf_c])
        >>> proof = tree.get_proof(leaf_c)
        >>> verify_merkle_proof(tree.root, leaf_c, proof)
        True
    """

    def __init__(self, levels: list[list[bytes]]) -> None:
        self._levels = levels
        self._positions: dict[bytes, int] = {}
        for index, leaf in enumerate(levels[0]):
            # Identical leaves share one identity; prove the first occurrence
            self._positions.setdefault(leaf, index)

    @classmethod
    def build(cls, leaves: Sequence[bytes]) -> "MerkleTree":
        """
        Build a tree from leaf hashes.

        Raises:
            EmptyCommitmentException: If `leaves` is empty
        """
        if len(leaves) == 0:
            raise EmptyCommitmentException()

        levels: list[list[bytes]] = [list(leaves)]
        while len(levels[-1]) > 1:
            levels.append(_next_level(levels[-1]))
        return cls(levels)

    @property
    def root(self) -> bytes:
        """The single top node."""
        return self._levels[-1][0]

    @property
    def leaves(self) -> list[bytes]:
        return list(self._levels[0])

    @property
    def levels(self) -> list[list[bytes]]:
        return [list(level) for level in self._levels]

    @property
    def depth(self) -> int:
        return len(self._levels)

    def __len__(self) -> int:
        return len(self._levels[0])

    def __contains__(self, leaf: object) -> bool:
        return leaf in self._positions

    def get_root(self) -> bytes:
        return self.root

    def index_of(self, leaf: bytes) -> int:
        """
        Position of a leaf in the published ordering.

        Raises:
            LeafNotFoundException: If the leaf is not in the tree
        """
        try:
            return self._positions[leaf]
        except KeyError:
            raise LeafNotFoundException(to_hex(leaf)) from None

    def get_proof(self, leaf: bytes) -> list[bytes]:
        """
        Sibling path from the leaf's level up to (not including) the root.

        Raises:
            LeafNotFoundException: If the leaf is not in the tree
        """
        return self.get_proof_at(self.index_of(leaf))

    def get_proof_at(self, index: int) -> list[bytes]:
        """Sibling path for the leaf at `index`."""
        if index < 0 or index >= len(self):
            raise IndexError(f"Leaf index {index} out of range for {len(self)} leaves")

        siblings: list[bytes] = []
        position = index
        for level in self._levels[:-1]:
            sibling = position ^ 1
            if sibling >= len(level):
                # Odd level: the last node is its own sibling
                sibling = position
            siblings.append(level[sibling])
            position //= 2
        return siblings

    def get_hex_proof(self, leaf: bytes) -> list[str]:
        return [to_hex(node) for node in self.get_proof(leaf)]


def build_merkle_root(leaves: Sequence[bytes]) -> bytes:
    """
    Compute the root for a sequence of leaf hashes.

    Raises:
        EmptyCommitmentException: If `leaves` is empty
    """
    return MerkleTree.build(leaves).root


def compute_root_from_proof(leaf: bytes, proof: Sequence[bytes]) -> bytes:
    """Fold a proof onto a leaf with the sorted-pair combiner."""
    current = leaf
    for sibling in proof:
        current = merkle_parent(current, sibling)
    return current


def verify_merkle_proof(root: bytes, leaf: bytes, proof: Sequence[bytes]) -> bool:
    """
    Check that `proof` links `leaf` to `root`.

    Returns:
        True if the recomputed root equals `root` exactly
    """
    return compute_root_from_proof(leaf, proof) == root


def compute_tree_depth(num_leaves: int) -> int:
    """
    Number of levels from leaves to root (inclusive).

    A single leaf has depth 1, two or three leaves have depth 2...
    Returns 0 for an empty leaf count.
    """
    if num_leaves == 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1
    return depth


__all__ = [
    "MerkleTree",
    "merkle_parent",
    "build_merkle_root",
    "compute_root_from_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
]
