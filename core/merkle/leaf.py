"""
Leaf Encoding
Turns a recipient allocation into a 32-byte Merkle leaf.

Leaf rule (wire contract with the on-chain verifier):
    leaf = keccak256(abi.encodePacked(uint256 campaignId, address account,
                                      uint256 tokenId, uint256 amount))

Packed layout, 116 bytes, no padding between fields:
    campaignId (32, big-endian) || address (20) || tokenId (32) || amount (32)
"""
from __future__ import annotations

from typing import Any

from core.crypto.hashing import keccak256
from core.schemas.errors import EncodingError
from core.schemas.recipient import Recipient, normalize_address, parse_uint256


UINT256_SIZE = 32
ADDRESS_SIZE = 20
PACKED_LEAF_SIZE = UINT256_SIZE + ADDRESS_SIZE + UINT256_SIZE + UINT256_SIZE


def _uint256(value: Any, name: str) -> bytes:
    try:
        return parse_uint256(value, name).to_bytes(UINT256_SIZE, "big")
    except ValueError as e:
        raise EncodingError(str(e), field_name=name) from e


def _address(value: Any) -> bytes:
    try:
        return bytes.fromhex(normalize_address(value)[2:])
    except ValueError as e:
        raise EncodingError(str(e), field_name="address") from e


def pack_leaf_preimage(
    campaign_id: int,
    address: str | bytes,
    token_id: int,
    amount: int,
) -> bytes:
    """
    Build the 116-byte packed buffer that is hashed into a leaf.

    Raises:
        EncodingError: If any field is out of range or malformed
    """
    return (
        _uint256(campaign_id, "campaignId")
        + _address(address)
        + _uint256(token_id, "tokenId")
        + _uint256(amount, "amount")
    )


def encode_leaf(
    campaign_id: int,
    address: str | bytes,
    token_id: int,
    amount: int,
) -> bytes:
    """
    Encode one allocation into its 32-byte leaf.

    Args:
        campaign_id: Campaign identifier (uint256)
        address: 0x hex string (any case) or 20 raw bytes
        token_id: Token id (uint256)
        amount: Amount (uint256)

    Returns:
        32-byte Keccak-256 leaf

    Raises:
        EncodingError: If any field is out of range or malformed
    """
    return keccak256(pack_leaf_preimage(campaign_id, address, token_id, amount))


def encode_recipient_leaf(recipient: Recipient, campaign_id: int) -> bytes:
    """Encode a validated Recipient under a campaign."""
    return encode_leaf(
        campaign_id,
        recipient.address,
        recipient.token_id,
        recipient.amount,
    )


__all__ = [
    "PACKED_LEAF_SIZE",
    "pack_leaf_preimage",
    "encode_leaf",
    "encode_recipient_leaf",
]
