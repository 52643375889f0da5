"""
Proof Engine

Composes leaf encoding, tree building and proof generation into the single
entry point collaborators call once per campaign.

Key features:
- Pure and stateless: every call is an isolated computation over its inputs
- Fail-closed: one bad recipient aborts the whole generation, because a
  partial tree would commit to a root the omitted recipient cannot claim
- Deterministic: identical inputs give byte-identical leaves, root and proofs
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping, Sequence

from pydantic import ValidationError

from core.crypto.hashing import to_hex
from core.merkle.leaf import encode_recipient_leaf
from core.merkle.merkle_proofs import verify_hex_proof
from core.merkle.merkle_tree import build_tree, prove_leaf
from core.schemas.errors import EmptyTreeError, EncodingError
from core.schemas.proof import ClaimEntry, GenerationResult, ProofEntry
from core.schemas.recipient import Recipient, parse_uint256


logger = logging.getLogger(__name__)


class DuplicatePolicy(str, Enum):
    """What to do when the same (address, tokenId) appears twice."""
    LAST_WRITE_WINS = "last_write_wins"  # Later record replaces the earlier claim entry
    REJECT = "reject"  # Abort generation with EncodingError


@dataclass
class EngineConfig:
    """Configuration for proof generation."""

    duplicate_policy: DuplicatePolicy = DuplicatePolicy.LAST_WRITE_WINS

    @classmethod
    def from_value(cls, duplicate_policy: str) -> "EngineConfig":
        try:
            return cls(duplicate_policy=DuplicatePolicy(duplicate_policy))
        except ValueError:
            raise ValueError(
                f"Unknown duplicate policy '{duplicate_policy}', "
                f"expected one of {[p.value for p in DuplicatePolicy]}"
            ) from None


def _coerce_recipient(record: Any, index: int) -> Recipient:
    if isinstance(record, Recipient):
        return record
    if isinstance(record, Mapping):
        try:
            return Recipient.model_validate(dict(record))
        except ValidationError as e:
            first = e.errors()[0]
            raise EncodingError(
                f"Recipient {index} is invalid: {first.get('msg')}",
                field_name=".".join(str(p) for p in first.get("loc", ())) or None,
                details={"index": index},
            ) from e
    raise EncodingError(
        f"Recipient {index} must be a Recipient or mapping, got {type(record).__name__}",
        details={"index": index},
    )


def _campaign_id(campaign_id: Any) -> int:
    try:
        return parse_uint256(campaign_id, "campaignId")
    except ValueError as e:
        raise EncodingError(str(e), field_name="campaignId") from e


class ProofEngine:
    """
    Builds a campaign's Merkle commitment and every recipient's proof.

    Usage:
        engine = ProofEngine()
        result = engine.generate(recipients, campaign_id=0)
        assert engine.verify(result.claims[0].leaf, result.claims[0].proof, result.root)
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()

    def generate(
        self,
        recipients: Iterable[Recipient | Mapping[str, Any]],
        campaign_id: int = 0,
    ) -> GenerationResult:
        """
        Generate the root and proofs for a campaign.

        Args:
            recipients: Recipient models or raw mappings (validated strictly)
            campaign_id: Campaign identifier (uint256), scopes every leaf

        Returns:
            GenerationResult with root, sorted leaves, address-keyed proofs
            and the full (address, tokenId) claim index

        Raises:
            EncodingError: If the campaign id or any recipient is malformed,
                or a duplicate claim key is found under the reject policy
            EmptyTreeError: If there are no recipients
        """
        cid = _campaign_id(campaign_id)
        records = [_coerce_recipient(r, i) for i, r in enumerate(recipients)]
        if not records:
            raise EmptyTreeError("Cannot generate a campaign with no recipients")

        logger.info(f"Encoding {len(records)} recipients for campaign {cid}")
        leaves = [encode_recipient_leaf(r, cid) for r in records]
        tree = build_tree(leaves)
        logger.info(f"Built tree for campaign {cid}: depth={tree.depth} root={to_hex(tree.root)}")

        claims: dict[tuple[str, int], ClaimEntry] = {}
        proofs: dict[str, ProofEntry] = {}

        for index, (record, leaf) in enumerate(zip(records, leaves)):
            claim = ClaimEntry(
                address=record.address,
                token_id=str(record.token_id),
                amount=str(record.amount),
                leaf=to_hex(leaf),
                proof=[to_hex(p) for p in prove_leaf(tree, leaf)],
            )

            key = record.claim_key
            if key in claims:
                if self.config.duplicate_policy == DuplicatePolicy.REJECT:
                    raise EncodingError(
                        f"Duplicate claim for address {record.address} and tokenId {record.token_id}",
                        details={"index": index},
                    )
                logger.warning(
                    f"Duplicate claim for {record.address} tokenId {record.token_id}; "
                    f"record {index} replaces the earlier entry"
                )
            claims[key] = claim

            previous = proofs.get(record.address)
            if previous is not None and previous.token_id != claim.token_id:
                logger.warning(
                    f"Address {record.address} has several token ids; the address-keyed "
                    f"proofs view keeps tokenId {claim.token_id}, see claims for all of them"
                )
            proofs[record.address] = claim.to_proof_entry()

        return GenerationResult(
            campaign_id=cid,
            root=to_hex(tree.root),
            total_recipients=len(records),
            leaves=[to_hex(leaf) for leaf in tree.leaves],
            proofs=proofs,
            claims=[claims[key] for key in sorted(claims)],
        )

    def verify(self, leaf: str, proof: Sequence[str], root: str) -> bool:
        """
        Check a hex proof against a hex root.

        Returns False for any invalid or malformed proof; callers must treat
        False as a final rejection, not a transient failure.
        """
        return verify_hex_proof(leaf, proof, root)


def generate(
    recipients: Iterable[Recipient | Mapping[str, Any]],
    campaign_id: int = 0,
) -> GenerationResult:
    """Generate a campaign's root and proofs with the default configuration."""
    return ProofEngine().generate(recipients, campaign_id)


def verify(leaf: str, proof: Sequence[str], root: str) -> bool:
    """Verify a hex proof against a hex root. Never raises."""
    return verify_hex_proof(leaf, proof, root)


__all__ = [
    "DuplicatePolicy",
    "EngineConfig",
    "ProofEngine",
    "generate",
    "verify",
]
