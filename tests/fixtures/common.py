"""
Common test fixtures shared by all modules.

Provides factory functions for airdrop data structures:
- Recipient
- GenerationResult (via the proof engine)

plus the reference vector every implementation of the leaf rule must
reproduce (three recipients, campaigns 0 and 1).
"""

from typing import Any, Optional

from core.engine import ProofEngine
from core.schemas.proof import GenerationResult
from core.schemas.recipient import Recipient


# =============================================================================
# Reference Vector
# =============================================================================

ADDR_1 = "0x" + "11" * 20
ADDR_2 = "0x" + "22" * 20
ADDR_3 = "0x" + "33" * 20
ADDR_4 = "0x" + "44" * 20
ADDR_5 = "0x" + "55" * 20

REFERENCE_RECIPIENTS: list[dict[str, Any]] = [
    {"address": ADDR_1, "tokenId": 1, "amount": 100},
    {"address": ADDR_2, "tokenId": 1, "amount": 200},
    {"address": ADDR_3, "tokenId": 2, "amount": 150},
]

CAMPAIGN_0_ROOT = "0xeff836f7a4bf501fb4a9c7af926b5f8dab7ad4d82f5e9cb1c7a3d4758093fb64"
CAMPAIGN_1_ROOT = "0x6741c7c0b62080ce9b81995c2dc84c6a3d0c1a9fc821aac2fc30bc48514242b7"

CAMPAIGN_0_LEAVES = {
    ADDR_1: "0xaf4b5f11cde25fb1b6716bcbe7422d489c636ffbff26652a09665acabede203f",
    ADDR_2: "0x9750d3b0199155a4bdf43390b9c99da212d6ed8bfdca98d66305b5ab44ba5a26",
    ADDR_3: "0xf8122c8467fd1bf45e11e2097e34488d5cd0b9856349df8571d28e8683c1e85c",
}

CAMPAIGN_0_PROOFS = {
    ADDR_1: [CAMPAIGN_0_LEAVES[ADDR_2], CAMPAIGN_0_LEAVES[ADDR_3]],
    ADDR_2: [CAMPAIGN_0_LEAVES[ADDR_1], CAMPAIGN_0_LEAVES[ADDR_3]],
    ADDR_3: ["0xee47c29544d133a8980e79fa71b204bae9321945ebd4b21cbc9a8697acbf3aec"],
}

CAMPAIGN_1_LEAVES = {
    ADDR_1: "0x0bfeefe2ed0c618161cf8b7e0ff2e000f8b5957adec722f52fd8a78a0eda55d8",
    ADDR_2: "0xf5537678e1823813067e4d96e03354f500951d085925042c9807b2083aa96183",
    ADDR_3: "0x6cd3a66c81010820164325e405022bdf88093bc9535498ad6b5d534daa44ee81",
}

CAMPAIGN_1_PROOF_ADDR_2 = [
    "0xaf50bd757e88405f670d3f8cb709da6ae3273c8f597f939e12559a7797acddbe",
]

# Campaign 7, ADDR_1, tokenId 1, amount 100: single-leaf tree, root == leaf
SINGLE_LEAF_CAMPAIGN_7 = "0x85d475c408e5b0e28db33d9e5adec81deb6bf238c56e10f607ab263b4579204e"

# Reference recipients plus ADDR_4/3/1 and ADDR_5/3/2, campaign 0
FIVE_RECIPIENT_ROOT = "0x062333f30eec4243dd63ddc159769b9a55340efb2c50fd17e556202ec2a77f52"


# =============================================================================
# Recipient Factory
# =============================================================================

def make_recipient(
    index: int = 1,
    token_id: int = 1,
    amount: int = 100,
    address: Optional[str] = None,
) -> Recipient:
    """
    Create a Recipient for testing.

    Args:
        index: Used to derive a distinct address when none is given
        token_id: Token id
        amount: Amount
        address: Explicit address (overrides index)
    """
    if address is None:
        address = "0x" + f"{index:040x}"
    return Recipient(address=address, token_id=token_id, amount=amount)


def make_recipients(count: int, token_id: int = 1, base_amount: int = 100) -> list[Recipient]:
    """Create ``count`` recipients with distinct addresses and amounts."""
    return [
        make_recipient(index=i + 1, token_id=token_id, amount=base_amount + i)
        for i in range(count)
    ]


def make_reference_recipients() -> list[Recipient]:
    """The three recipients of the reference vector."""
    return [Recipient.model_validate(r) for r in REFERENCE_RECIPIENTS]


def make_generation_result(
    recipients: Optional[list[Recipient]] = None,
    campaign_id: int = 0,
) -> GenerationResult:
    """Run the proof engine over recipients (reference set by default)."""
    if recipients is None:
        recipients = make_reference_recipients()
    return ProofEngine().generate(recipients, campaign_id=campaign_id)
