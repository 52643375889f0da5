"""
Schemas
File: recipient.py

Purpose: Typed airdrop inputs.

A Recipient is validated once, at the boundary where raw records enter
the system, so the leaf encoder only ever sees canonical values:
- address: lowercase 0x-prefixed 40-hex string (20 bytes)
- token_id / amount: integers in [0, 2**256)
"""

import re
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

UINT256_MAX: int = 2**256 - 1

ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")
_DECIMAL_PATTERN = re.compile(r"^[0-9]+$")


def normalize_address(value: Any) -> str:
    """
    Canonicalize an address to lowercase 0x hex.

    Accepts a 0x-prefixed hex string in any case or 20 raw bytes.

    Raises:
        ValueError: If the value is not a 20-byte address
    """
    if isinstance(value, (bytes, bytearray)):
        if len(value) != 20:
            raise ValueError(f"address must be 20 bytes, got {len(value)}")
        return "0x" + bytes(value).hex()
    if not isinstance(value, str):
        raise ValueError(f"address must be a hex string, got {type(value).__name__}")
    candidate = value.strip()
    if not ADDRESS_PATTERN.match(candidate):
        raise ValueError(f"invalid address: {value!r}")
    return candidate.lower()


def parse_uint256(value: Any, name: str = "value") -> int:
    """
    Parse a non-negative integer that fits in 256 bits.

    Accepts Python ints and base-10 strings. Booleans and floats are rejected
    so that ``True`` or ``1e18`` never turn silently into amounts.

    Raises:
        ValueError: If the value is not an integer in [0, 2**256)
    """
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got bool")
    if isinstance(value, str):
        text = value.strip()
        if not _DECIMAL_PATTERN.match(text):
            raise ValueError(f"{name} must be a non-negative base-10 integer, got {value!r}")
        value = int(text)
    if not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    if value > UINT256_MAX:
        raise ValueError(f"{name} exceeds uint256 range")
    return value


class Recipient(BaseModel):
    """
    One airdrop allocation: who receives how much of which token.

    Immutable once constructed. Accepts camelCase and snake_case keys
    (``tokenId`` / ``token_id``) so records from CSV and JSON inputs
    validate the same way.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    address: str = Field(
        ...,
        validation_alias=AliasChoices("address", "Address"),
        description="Recipient address, lowercase 0x hex",
    )
    token_id: int = Field(
        ...,
        validation_alias=AliasChoices("token_id", "tokenId", "TokenId"),
        serialization_alias="tokenId",
        description="Token id being airdropped (uint256)",
    )
    amount: int = Field(
        ...,
        validation_alias=AliasChoices("amount", "Amount"),
        description="Amount of the token (uint256)",
    )

    @field_validator("address", mode="before")
    @classmethod
    def _check_address(cls, v: Any) -> str:
        return normalize_address(v)

    @field_validator("token_id", mode="before")
    @classmethod
    def _check_token_id(cls, v: Any) -> int:
        return parse_uint256(v, "tokenId")

    @field_validator("amount", mode="before")
    @classmethod
    def _check_amount(cls, v: Any) -> int:
        return parse_uint256(v, "amount")

    @property
    def claim_key(self) -> tuple[str, int]:
        """Key identifying this allocation in a proof index."""
        return (self.address, self.token_id)


class CampaignContext(BaseModel):
    """Campaign scope for leaf encoding (domain separation)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    campaign_id: int = Field(
        default=0,
        validation_alias=AliasChoices("campaign_id", "campaignId"),
        serialization_alias="campaignId",
        description="Campaign identifier (uint256)",
    )

    @field_validator("campaign_id", mode="before")
    @classmethod
    def _check_campaign_id(cls, v: Any) -> int:
        return parse_uint256(v, "campaignId")


__all__ = [
    "UINT256_MAX",
    "ADDRESS_PATTERN",
    "normalize_address",
    "parse_uint256",
    "Recipient",
    "CampaignContext",
]
