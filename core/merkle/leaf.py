"""
Module 02 - Leaf Encoder
Packed encoding of a vesting window and its leaf hash.

Owner: Protocol/Crypto Engineer
Module ID: M02

Encoding (Hard Contract, identical on the tree-building and engine sides):
    account        20 bytes
    total_amount   32 bytes big-endian
    window_start   32 bytes big-endian
    window_end     32 bytes big-endian

leaf = keccak256(encoding), the same bytes Solidity's
abi.encodePacked(address, uint256, uint256, uint256) produces.
"""
from __future__ import annotations

from eth_utils import to_canonical_address

from core.crypto.hashing import keccak256
from core.schemas.window import VestingWindow


ADDRESS_WIDTH = 20
UINT_WIDTH = 32
ENCODED_WINDOW_LENGTH = ADDRESS_WIDTH + 3 * UINT_WIDTH


def encode_window(window: VestingWindow) -> bytes:
    """Serialize a window into its fixed 116-byte packed form."""
    return (
        to_canonical_address(window.account)
        + window.total_amount.to_bytes(UINT_WIDTH, "big")
        + window.window_start.to_bytes(UINT_WIDTH, "big")
        + window.window_end.to_bytes(UINT_WIDTH, "big")
    )


def window_leaf(window: VestingWindow) -> bytes:
    """Hash a window to its 32-byte leaf identifier."""
    return keccak256(encode_window(window))


__all__ = [
    "ENCODED_WINDOW_LENGTH",
    "encode_window",
    "window_leaf",
]
