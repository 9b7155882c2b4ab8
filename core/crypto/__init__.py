"""
Core cryptographic utilities.

Module 02 provides Keccak-256 hashing and hex helpers.
"""
from .hashing import (
    HASH_LENGTH,
    keccak256,
    hash_pair,
    to_hex,
    from_hex,
    normalize_hash,
)

__all__ = [
    "HASH_LENGTH",
    "keccak256",
    "hash_pair",
    "to_hex",
    "from_hex",
    "normalize_hash",
]
