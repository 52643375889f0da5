"""
Core cryptographic utilities.

Keccak-256 hashing, sorted-pair hashing and hex codecs.
"""
from .hashing import (
    HASH_SIZE,
    keccak256,
    hash_pair,
    is_hash,
    to_hex,
    from_hex,
    hash_from_hex,
)

__all__ = [
    "HASH_SIZE",
    "keccak256",
    "hash_pair",
    "is_hash",
    "to_hex",
    "from_hex",
    "hash_from_hex",
]
