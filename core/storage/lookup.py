"""
Proof Lookup Service

Serves stored proofs to claimants. Every proof handed out is re-checked:
the leaf is recomputed from the stored amount and campaign id and the
proof is verified against the stored root, so a corrupted store entry
surfaces as ProofMismatchException instead of an unclaimable proof.

Key layout:
    campaign:{campaign_id}:root                       -> 0x root
    campaign:{campaign_id}:meta                       -> {totalRecipients, ...}
    campaign:{campaign_id}:claim:{address}:{token_id} -> ClaimEntry dict
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from core.crypto.hashing import to_hex
from core.merkle.leaf import encode_leaf
from core.merkle.merkle_proofs import verify_hex_proof
from core.schemas.errors import (
    EncodingError,
    ProofMismatchException,
    ProofNotFoundException,
)
from core.schemas.proof import ClaimEntry, GenerationResult, ProofResponse
from core.schemas.recipient import normalize_address

from .store import KeyValueStore


logger = logging.getLogger(__name__)


def _root_key(campaign_id: int) -> str:
    return f"campaign:{campaign_id}:root"


def _meta_key(campaign_id: int) -> str:
    return f"campaign:{campaign_id}:meta"


def _claim_key(campaign_id: int, address: str, token_id: int | str) -> str:
    return f"campaign:{campaign_id}:claim:{address}:{token_id}"


class ProofLookupService:
    """
    Publishes generation results into a KeyValueStore and answers
    proof queries from it.

    Usage:
        service = ProofLookupService(InMemoryKeyValueStore())
        service.publish(result)
        response = service.get_proof(0, "0x11...11", 1)
    """

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def publish(self, result: GenerationResult) -> int:
        """
        Store a campaign's root and every claim.

        Returns:
            Number of claims stored
        """
        cid = result.campaign_id
        self.store.put(_root_key(cid), result.root)
        self.store.put(_meta_key(cid), {
            "campaignId": str(cid),
            "merkleRoot": result.root,
            "totalRecipients": result.total_recipients,
        })
        for claim in result.claims:
            self.store.put(
                _claim_key(cid, claim.address, claim.token_id),
                claim.model_dump(mode="json", by_alias=True),
            )
        logger.info(f"Published {len(result.claims)} claims for campaign {cid}")
        return len(result.claims)

    def get_root(self, campaign_id: int) -> str | None:
        return self.store.get(_root_key(campaign_id))

    def list_claims(self, campaign_id: int) -> list[str]:
        """Store keys of every claim published for a campaign."""
        return self.store.list(f"campaign:{campaign_id}:claim:")

    def get_proof(self, campaign_id: int, address: str, token_id: int | str) -> ProofResponse:
        """
        Look up and re-verify the proof for one claim.

        Raises:
            ProofNotFoundException: If the campaign or claim is unknown
            ProofMismatchException: If the stored proof does not verify
        """
        try:
            address = normalize_address(address)
        except ValueError:
            raise ProofNotFoundException(campaign_id, address, token_id) from None

        root = self.get_root(campaign_id)
        stored = self.store.get(_claim_key(campaign_id, address, token_id))
        if root is None or stored is None:
            raise ProofNotFoundException(campaign_id, address, token_id)

        claim = ClaimEntry.model_validate(stored)
        expected_leaf = to_hex(
            encode_leaf(campaign_id, address, int(claim.token_id), int(claim.amount))
        )
        if expected_leaf != claim.leaf:
            logger.error(f"Stored leaf for {address} tokenId {token_id} does not match its claim")
            raise ProofMismatchException(
                "Stored leaf does not match the recomputed leaf",
                details={"expected": expected_leaf, "stored": claim.leaf},
            )
        if not verify_hex_proof(claim.leaf, claim.proof, root):
            logger.error(f"Stored proof for {address} tokenId {token_id} does not verify")
            raise ProofMismatchException(
                "Stored proof does not verify against the campaign root",
                details={"merkleRoot": root, "leaf": claim.leaf},
            )

        return ProofResponse(
            campaign_id=campaign_id,
            address=address,
            token_id=claim.token_id,
            amount=claim.amount,
            proof=claim.proof,
            leaf=claim.leaf,
            merkle_root=root,
        )

    def is_eligible(
        self,
        campaign_id: int,
        address: str,
        token_id: int | str,
        amount: int | str,
        proof: Sequence[str],
    ) -> bool:
        """
        Check a claim submission against the stored root.

        Returns False for unknown campaigns and malformed submissions.
        """
        root = self.get_root(campaign_id)
        if root is None:
            return False
        try:
            leaf = encode_leaf(campaign_id, address, token_id, amount)
        except EncodingError:
            return False
        return verify_hex_proof(to_hex(leaf), proof, root)

    def status(self, campaign_id: int) -> dict[str, Any] | None:
        """Published metadata for a campaign, or None."""
        return self.store.get(_meta_key(campaign_id))


__all__ = ["ProofLookupService"]
