"""
Schemas
File: proof.py

Purpose: Output shapes of a proof generation run.

These models mirror the JSON consumed downstream:
- the root goes to the on-chain commitment store
- the proofs mapping goes to a lookup service keyed by recipient
Integers are carried as decimal strings so uint256 values survive
JSON consumers that only have 53-bit numbers.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class ProofEntry(BaseModel):
    """Proof material for one recipient, address-keyed view."""

    model_config = ConfigDict(populate_by_name=True)

    proof: list[str] = Field(default_factory=list, description="Sibling hashes, leaf to root")
    token_id: str = Field(..., alias="tokenId")
    amount: str = Field(...)
    leaf: str = Field(..., description="0x-prefixed leaf hash")


class ClaimEntry(BaseModel):
    """Proof material for one (address, tokenId) allocation."""

    model_config = ConfigDict(populate_by_name=True)

    address: str
    token_id: str = Field(..., alias="tokenId")
    amount: str
    leaf: str
    proof: list[str] = Field(default_factory=list)

    def to_proof_entry(self) -> ProofEntry:
        return ProofEntry(
            proof=list(self.proof),
            token_id=self.token_id,
            amount=self.amount,
            leaf=self.leaf,
        )


class GenerationResult(BaseModel):
    """
    Result of generating a campaign's Merkle commitment.

    ``proofs`` is keyed by address only (one entry per address, last write
    wins); ``claims`` holds every (address, tokenId) allocation and is the
    authoritative index.
    """

    model_config = ConfigDict(populate_by_name=True)

    campaign_id: int = Field(..., alias="campaignId")
    root: str = Field(..., description="0x-prefixed Merkle root")
    total_recipients: int = Field(..., alias="totalRecipients")
    leaves: list[str] = Field(default_factory=list, description="Sorted leaf layer")
    proofs: dict[str, ProofEntry] = Field(default_factory=dict)
    claims: list[ClaimEntry] = Field(default_factory=list)

    @field_serializer("campaign_id")
    def _campaign_id_as_decimal(self, value: int) -> str:
        return str(value)

    def to_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys, matching the wire format."""
        return self.model_dump(mode="json", by_alias=True)

    def find_claim(self, address: str, token_id: int | str) -> ClaimEntry | None:
        """Find the claim for an (address, tokenId) pair."""
        address = address.lower()
        token_id = str(token_id)
        for claim in self.claims:
            if claim.address == address and claim.token_id == token_id:
                return claim
        return None

    def claims_for(self, address: str) -> list[ClaimEntry]:
        """All claims belonging to one address."""
        address = address.lower()
        return [c for c in self.claims if c.address == address]


class ProofResponse(BaseModel):
    """Proof handed to a claimant by the serving layer."""

    model_config = ConfigDict(populate_by_name=True)

    campaign_id: int = Field(..., alias="campaignId")
    address: str
    token_id: str = Field(..., alias="tokenId")
    amount: str
    proof: list[str] = Field(default_factory=list)
    leaf: str
    merkle_root: str = Field(..., alias="merkleRoot")

    @field_serializer("campaign_id")
    def _campaign_id_as_decimal(self, value: int) -> str:
        return str(value)


__all__ = [
    "ProofEntry",
    "ClaimEntry",
    "GenerationResult",
    "ProofResponse",
]
