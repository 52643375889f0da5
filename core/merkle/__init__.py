"""
Merkle Tree and Commitments
Deterministic sorted-pair Merkle tree construction + proof generation/verification.

This module provides:
- encode_leaf: Pack (campaignId, address, tokenId, amount) into a 32-byte leaf
- build_tree: Build the canonical tree (sorted leaves, sorted pairs)
- prove_leaf: Sibling path for a leaf
- verify_proof: Recompute the root from a leaf and its path

Canonical Commitment Rules:
1. Leaf hashing: keccak256(campaignId ‖ address ‖ tokenId ‖ amount), packed
2. Parent hashing: keccak256(min(a, b) + max(a, b))
3. Odd layer: promote the last node unchanged
4. Empty tree: EmptyTreeError
5. Single leaf: root = leaf

Usage:
    from core.merkle import encode_leaf, build_tree, prove_leaf, verify_proof

    leaves = [encode_leaf(0, r.address, r.token_id, r.amount) for r in recipients]
    tree = build_tree(leaves)
    proof = prove_leaf(tree, leaves[0])
    assert verify_proof(leaves[0], proof, tree.root)
"""
from .leaf import (
    PACKED_LEAF_SIZE,
    pack_leaf_preimage,
    encode_leaf,
    encode_recipient_leaf,
)

from .merkle_tree import (
    MerkleTree,
    merkle_parent,
    build_tree,
    build_merkle_root,
    prove_leaf,
    verify_proof,
    compute_tree_depth,
)

from .merkle_proofs import (
    verify_hex_proof,
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Leaf encoding
    "PACKED_LEAF_SIZE",
    "pack_leaf_preimage",
    "encode_leaf",
    "encode_recipient_leaf",
    # Core types
    "MerkleTree",
    # Core functions
    "merkle_parent",
    "build_tree",
    "build_merkle_root",
    "prove_leaf",
    "verify_proof",
    "compute_tree_depth",
    # Hex boundary and convenience classes
    "verify_hex_proof",
    "MerkleProver",
    "MerkleVerifier",
]
