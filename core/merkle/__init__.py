"""
Module 02 - Merkle Tree and Commitments
Deterministic Merkle tree construction + proof generation/verification
over vesting-window leaves.

Owner: Protocol/Crypto Engineer
Module ID: M02

Canonical Commitment Rules:
1. Leaf hashing: keccak256(address20 | amount32 | start32 | end32)
2. Parent hashing: keccak256(min(left, right) + max(left, right))
3. Padding: last node of an odd level is paired with itself
4. Empty tree: rejected
5. Single leaf: root = leaf

Usage:
    from core.merkle import MerkleTree, window_leaf, verify_merkle_proof

    leaves = [window_leaf(w) for w in windows]
    tree = MerkleTree.build(leaves)
    proof = tree.get_proof(leaves[2])
    assert verify_merkle_proof(tree.root, leaves[2], proof)
"""
from .leaf import (
    ENCODED_WINDOW_LENGTH,
    encode_window,
    window_leaf,
)

from .merkle_tree import (
    MerkleTree,
    merkle_parent,
    build_merkle_root,
    compute_root_from_proof,
    verify_merkle_proof,
    compute_tree_depth,
)

from .merkle_proofs import (
    MerkleProof,
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Leaf encoding
    "ENCODED_WINDOW_LENGTH",
    "encode_window",
    "window_leaf",
    # Tree
    "MerkleTree",
    "merkle_parent",
    "build_merkle_root",
    "compute_root_from_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
    # Convenience classes
    "MerkleProof",
    "MerkleProver",
    "MerkleVerifier",
]
