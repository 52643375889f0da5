"""
Hashing Utilities
Keccak-256 hashing and hex codecs for airdrop Merkle commitments.

This module provides:
- Keccak-256 hashing for raw bytes (the EVM hash, not NIST SHA3-256)
- Sorted-pair hashing used for every internal Merkle node
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Always hash raw bytes exactly as specified
- Pair ordering is derived from byte comparison, never from tree position
- All operations are deterministic
"""
from __future__ import annotations

import re

from eth_utils import keccak


HASH_SIZE = 32

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]*")
_HASH_HEX = re.compile(r"0[xX][0-9a-fA-F]{64}")


def keccak256(data: bytes) -> bytes:
    """
    Compute Keccak-256 hash of raw bytes.

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
    Hash two sibling nodes in ascending byte order.

    parent = keccak256(min(a, b) + max(a, b))

    This is the rule the on-chain verifier applies, so the caller never
    needs to know which side of the tree a node sits on.
    """
    if a <= b:
        return keccak256(a + b)
    return keccak256(b + a)


def is_hash(value: object) -> bool:
    """Check that a value is a 32-byte hash."""
    return isinstance(value, (bytes, bytearray)) and len(value) == HASH_SIZE


def to_hex(data: bytes) -> str:
    """
    Convert bytes to lowercase hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + bytes(data).hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not isinstance(hex_string, str):
        raise ValueError(f"Hex value must be a string, got {type(hex_string).__name__}")

    if not hex_string.startswith(("0x", "0X")):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    # bytes.fromhex skips whitespace
    if not _HEX_DIGITS.fullmatch(hex_content):
        raise ValueError(f"Invalid hex characters in string: {hex_string[:10]}...")

    return bytes.fromhex(hex_content)


def hash_from_hex(hex_string: str) -> bytes:
    """
    Decode a 0x-prefixed 32-byte hash.

    Raises:
        ValueError: If the string is not valid hex or not exactly 32 bytes
    """
    if not isinstance(hex_string, str) or not _HASH_HEX.fullmatch(hex_string):
        raise ValueError(f"Expected a {HASH_SIZE}-byte hash: 0x followed by {HASH_SIZE * 2} hex characters")
    return from_hex(hex_string)


__all__ = [
    "HASH_SIZE",
    "keccak256",
    "hash_pair",
    "is_hash",
    "to_hex",
    "from_hex",
    "hash_from_hex",
]
