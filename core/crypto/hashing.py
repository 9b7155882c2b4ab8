"""
Module 02 - Hashing Utilities
Keccak-256 hashing and hex helpers for the vesting-window commitment.

Owner: Protocol/Crypto Engineer
Module ID: M02

This module provides:
- Keccak-256 hashing for raw bytes (Ethereum keccak256, NOT hashlib sha3_256)
- The sorted-pair combiner used for every internal Merkle node
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Always hash raw bytes exactly as specified
- Pair hashing sorts the two children so proofs carry no direction bits
- All operations are deterministic
"""
from __future__ import annotations

from eth_utils import keccak


HASH_LENGTH = 32


def keccak256(data: bytes) -> bytes:
    """
    Compute the Keccak-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte Keccak-256 digest

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return keccak(primitive=data)


def hash_pair(a: bytes, b: bytes) -> bytes:
    """
    Hash two sibling nodes into their parent.

    The smaller value (bytewise) always goes first:
    parent = keccak256(min(a, b) + max(a, b))

    Args:
        a: One child hash
        b: The other child hash

    Returns:
        32-byte parent hash
    """
    if b < a:
        a, b = b, a
    return keccak256(a + b)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def normalize_hash(value: bytes | str) -> bytes:
    """
    Coerce a hash given as bytes or 0x-hex into exactly 32 bytes.

    Raises:
        ValueError: If the value does not decode to 32 bytes
    """
    raw = from_hex(value) if isinstance(value, str) else bytes(value)
    if len(raw) != HASH_LENGTH:
        raise ValueError(f"Hash must be {HASH_LENGTH} bytes, got {len(raw)}")
    return raw


__all__ = [
    "HASH_LENGTH",
    "keccak256",
    "hash_pair",
    "to_hex",
    "from_hex",
    "normalize_hash",
]
