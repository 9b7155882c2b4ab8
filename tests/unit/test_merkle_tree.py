"""
Module 02 - Merkle Tree Unit Tests
Tests for core/merkle/merkle_tree.py and core/merkle/merkle_proofs.py

Tests:
1. Root determinism - same leaves -> same root
2. Odd levels - the last node is paired with itself
3. Proof verification - every index of every size verifies
4. Tamper detection - tampered sibling/leaf/root fails verification
5. Empty leaves - rejected
6. Single leaf - root equals leaf, empty proof
"""
import pytest

from core.crypto.hashing import hash_pair, keccak256, to_hex
from core.merkle.merkle_proofs import MerkleProof, MerkleProver, MerkleVerifier
from core.merkle.merkle_tree import (
    MerkleTree,
    build_merkle_root,
    compute_root_from_proof,
    compute_tree_depth,
    merkle_parent,
    verify_merkle_proof,
)
from core.merkle.leaf import window_leaf
from core.schemas.errors import EmptyCommitmentException, LeafNotFoundException

from fixtures.common import BOB, make_window, make_windows


def _leaves(n: int) -> list[bytes]:
    return [keccak256(f"leaf-{i}".encode()) for i in range(n)]


class TestEmptyTree:
    """Tests for empty tree behavior."""

    def test_build_rejects_empty(self):
        with pytest.raises(EmptyCommitmentException):
            MerkleTree.build([])

    def test_root_rejects_empty(self):
        with pytest.raises(EmptyCommitmentException) as exc_info:
            build_merkle_root([])
        assert exc_info.value.code == "EMPTY_COMMITMENT"


class TestSingleLeaf:
    """Tests for single leaf tree behavior."""

    def test_root_equals_leaf(self):
        leaf = keccak256(b"only")
        assert build_merkle_root([leaf]) == leaf

    def test_proof_empty(self):
        leaf = keccak256(b"only")
        tree = MerkleTree.build([leaf])
        assert tree.get_proof(leaf) == []
        assert verify_merkle_proof(tree.root, leaf, [])


class TestTreeShape:
    """Tests for node combination and odd levels."""

    def test_two_leaves(self):
        a, b = _leaves(2)
        assert build_merkle_root([a, b]) == hash_pair(a, b)

    def test_three_leaves_last_paired_with_itself(self):
        a, b, c = _leaves(3)
        expected = merkle_parent(merkle_parent(a, b), merkle_parent(c, c))
        assert build_merkle_root([a, b, c]) == expected

    def test_odd_proof_sibling_is_itself(self):
        a, b, c = _leaves(3)
        tree = MerkleTree.build([a, b, c])
        assert tree.get_proof(c) == [c, merkle_parent(a, b)]

    def test_levels(self):
        tree = MerkleTree.build(_leaves(5))
        assert [len(level) for level in tree.levels] == [5, 3, 2, 1]
        assert tree.levels[-1] == [tree.root]

    @pytest.mark.parametrize("n", range(1, 10))
    def test_depth_matches_compute_tree_depth(self, n):
        assert MerkleTree.build(_leaves(n)).depth == compute_tree_depth(n)

    def test_compute_tree_depth_values(self):
        assert compute_tree_depth(0) == 0
        assert compute_tree_depth(1) == 1
        assert compute_tree_depth(2) == 2
        assert compute_tree_depth(3) == 3
        assert compute_tree_depth(4) == 3
        assert compute_tree_depth(5) == 4


class TestRootDeterminism:
    """Tests for deterministic root computation."""

    def test_same_leaves_same_root(self):
        leaves = _leaves(7)
        assert build_merkle_root(leaves) == build_merkle_root(list(leaves))

    def test_pair_swap_keeps_root(self):
        """Sorted pairs make sibling order irrelevant."""
        a, b, c, d = _leaves(4)
        assert build_merkle_root([a, b, c, d]) == build_merkle_root([b, a, d, c])

    def test_different_leaves_different_root(self):
        assert build_merkle_root(_leaves(4)) != build_merkle_root(_leaves(5))


class TestProofVerification:
    """Tests for proof generation and verification."""

    @pytest.mark.parametrize("n", [1, 2, 3, 4, 5, 7, 8, 9, 16, 17])
    def test_every_index_verifies(self, n):
        leaves = _leaves(n)
        tree = MerkleTree.build(leaves)
        for leaf in leaves:
            assert verify_merkle_proof(tree.root, leaf, tree.get_proof(leaf))

    def test_proof_length_is_depth_minus_one(self):
        tree = MerkleTree.build(_leaves(8))
        assert len(tree.get_proof(tree.leaves[3])) == tree.depth - 1

    def test_compute_root_from_proof(self):
        leaves = _leaves(6)
        tree = MerkleTree.build(leaves)
        assert compute_root_from_proof(leaves[4], tree.get_proof(leaves[4])) == tree.root

    def test_hex_proof(self):
        leaves = _leaves(4)
        tree = MerkleTree.build(leaves)
        assert tree.get_hex_proof(leaves[0]) == [to_hex(s) for s in tree.get_proof(leaves[0])]

    def test_unknown_leaf_raises(self):
        tree = MerkleTree.build(_leaves(4))
        with pytest.raises(LeafNotFoundException) as exc_info:
            tree.get_proof(keccak256(b"stranger"))
        assert exc_info.value.code == "LEAF_NOT_FOUND"

    def test_index_out_of_range(self):
        tree = MerkleTree.build(_leaves(3))
        with pytest.raises(IndexError):
            tree.get_proof_at(3)

    def test_duplicate_leaves_prove_first_occurrence(self):
        a, b = _leaves(2)
        tree = MerkleTree.build([a, b, a])
        assert tree.index_of(a) == 0
        assert verify_merkle_proof(tree.root, a, tree.get_proof(a))
        assert verify_merkle_proof(tree.root, a, tree.get_proof_at(2))

    def test_contains_and_len(self):
        leaves = _leaves(3)
        tree = MerkleTree.build(leaves)
        assert len(tree) == 3
        assert leaves[1] in tree
        assert keccak256(b"stranger") not in tree


class TestTamperDetection:
    """Tampered inputs fail verification."""

    def setup_method(self):
        self.leaves = _leaves(5)
        self.tree = MerkleTree.build(self.leaves)
        self.leaf = self.leaves[2]
        self.proof = self.tree.get_proof(self.leaf)

    def test_tampered_sibling(self):
        proof = list(self.proof)
        proof[0] = keccak256(b"forged")
        assert not verify_merkle_proof(self.tree.root, self.leaf, proof)

    def test_tampered_leaf(self):
        assert not verify_merkle_proof(self.tree.root, keccak256(b"forged"), self.proof)

    def test_tampered_root(self):
        assert not verify_merkle_proof(keccak256(b"forged"), self.leaf, self.proof)

    def test_truncated_proof(self):
        assert not verify_merkle_proof(self.tree.root, self.leaf, self.proof[:-1])

    def test_other_leafs_proof(self):
        other = self.tree.get_proof(self.leaves[0])
        assert not verify_merkle_proof(self.tree.root, self.leaf, other)


class TestProverVerifier:
    """Tests for the window-level convenience wrappers."""

    def test_prove_window(self):
        windows = make_windows(5)
        proof = MerkleProver.prove_window(windows, windows[3])

        assert isinstance(proof, MerkleProof)
        assert proof.index == 3
        assert proof.leaf == window_leaf(windows[3])
        assert proof.verify()

    def test_verify_window_with_hex(self):
        windows = make_windows(3)
        proof = MerkleProver.prove_window(windows, windows[1])
        assert MerkleVerifier.verify_window(to_hex(proof.root), windows[1], proof.hex_siblings())

    def test_verify_window_wrong_owner(self):
        windows = make_windows(3)
        proof = MerkleProver.prove_window(windows, windows[0])
        stolen = windows[0].with_account(BOB)
        assert not MerkleVerifier.verify_window(proof.root, stolen, proof.siblings)

    def test_malformed_hex_fails_closed(self):
        windows = make_windows(2)
        proof = MerkleProver.prove_window(windows, windows[0])
        assert not MerkleVerifier.verify_leaf(proof.root, proof.leaf, ["0x1234"])
        assert not MerkleVerifier.verify_leaf("not-hex", proof.leaf, proof.siblings)

    def test_prove_missing_window(self):
        windows = make_windows(2)
        with pytest.raises(LeafNotFoundException):
            MerkleProver.prove_window(windows, make_window(total_amount=1))

    def test_negative_index_rejected(self):
        with pytest.raises(ValueError):
            MerkleProof(leaf=b"\x00" * 32, index=-1, siblings=[], root=b"\x00" * 32)
