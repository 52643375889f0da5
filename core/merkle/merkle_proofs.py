"""
Merkle Proofs Convenience Wrappers
Hex-string boundary and class-based interface over merkle_tree.py.

This module provides:
- verify_hex_proof: verification over 0x hex strings, never raises
- MerkleProver: build trees and proofs from leaves or recipients
- MerkleVerifier: verify proofs in bytes or hex form

The hex functions are what a serving layer calls with untrusted input,
so every malformed value is reported as an invalid proof.
"""
from __future__ import annotations

import logging
from typing import Sequence

from core.crypto.hashing import hash_from_hex, to_hex
from core.merkle.leaf import encode_recipient_leaf
from core.merkle.merkle_tree import (
    MerkleTree,
    build_tree,
    prove_leaf,
    verify_proof,
)
from core.schemas.recipient import Recipient


logger = logging.getLogger(__name__)


def verify_hex_proof(leaf: str, proof: Sequence[str], root: str) -> bool:
    """
    Verify a proof given as 0x-prefixed hex strings.

    Input hex may be upper or lower case. Any malformed value (missing
    prefix, bad characters, wrong length, non-string) yields False.

    Args:
        leaf: 0x-prefixed 64-hex leaf
        proof: 0x-prefixed 64-hex sibling hashes, leaf to root
        root: 0x-prefixed 64-hex root

    Returns:
        True if the proof is valid, False otherwise
    """
    if isinstance(proof, (str, bytes)):
        return False
    try:
        leaf_bytes = hash_from_hex(leaf)
        root_bytes = hash_from_hex(root)
        siblings = [hash_from_hex(p) for p in proof]
    except (ValueError, TypeError) as e:
        logger.debug(f"Rejecting malformed proof input: {e}")
        return False
    return verify_proof(leaf_bytes, siblings, root_bytes)


class MerkleProver:
    """
    Convenience class for building trees and proofs.

    Example:
        >>> tree = MerkleProver.tree_for_recipients(recipients, campaign_id=0)
        >>> proof = MerkleProver.prove(tree, tree.leaves[0])
    """

    @staticmethod
    def tree(leaves: Sequence[bytes]) -> MerkleTree:
        """Build a tree over pre-hashed leaves."""
        return build_tree(leaves)

    @staticmethod
    def tree_for_recipients(
        recipients: Sequence[Recipient],
        campaign_id: int,
    ) -> MerkleTree:
        """Encode recipients under a campaign and build their tree."""
        return build_tree([encode_recipient_leaf(r, campaign_id) for r in recipients])

    @staticmethod
    def prove(tree: MerkleTree, leaf: bytes) -> list[bytes]:
        """Sibling path for ``leaf``."""
        return prove_leaf(tree, leaf)

    @staticmethod
    def prove_hex(tree: MerkleTree, leaf: bytes) -> list[str]:
        """Sibling path for ``leaf`` as 0x hex strings."""
        return [to_hex(p) for p in prove_leaf(tree, leaf)]

    @staticmethod
    def prove_recipient(
        tree: MerkleTree,
        recipient: Recipient,
        campaign_id: int,
    ) -> list[bytes]:
        """Sibling path for a recipient's leaf."""
        return prove_leaf(tree, encode_recipient_leaf(recipient, campaign_id))


class MerkleVerifier:
    """
    Convenience class for verifying proofs.

    Example:
        >>> MerkleVerifier.verify_hex(leaf_hex, proof_hex, root_hex)
        True
    """

    @staticmethod
    def verify(leaf: bytes, proof: Sequence[bytes], root: bytes) -> bool:
        return verify_proof(leaf, proof, root)

    @staticmethod
    def verify_hex(leaf: str, proof: Sequence[str], root: str) -> bool:
        return verify_hex_proof(leaf, proof, root)

    @staticmethod
    def verify_recipient(
        recipient: Recipient,
        campaign_id: int,
        proof: Sequence[bytes],
        root: bytes,
    ) -> bool:
        """
        Verify a recipient's allocation against a root.

        The leaf is recomputed from the recipient, so a proof issued for a
        different amount, token or campaign is rejected.
        """
        leaf = encode_recipient_leaf(recipient, campaign_id)
        return verify_proof(leaf, proof, root)


__all__ = [
    "verify_hex_proof",
    "MerkleProver",
    "MerkleVerifier",
]
