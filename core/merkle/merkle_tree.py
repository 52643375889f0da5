"""
Merkle Tree Implementation
Deterministic sorted-pair Merkle tree construction, proof generation,
and verification.

This module provides:
- Canonical tree construction over sorted leaves
- Proof generation for any leaf in the tree
- Proof verification without materializing the tree

Canonical Commitment Rules (Hard Contracts):
1. Leaf layer: leaves sorted ascending by byte value before building
2. Parent hashing: parent = keccak256(min(a, b) + max(a, b))
3. Odd layer: the last node is promoted unchanged to the next layer
   (never duplicated, never hashed with itself)
4. Empty leaves: EmptyTreeError
5. Single leaf: root = leaf, proof = []

These rules reproduce merkletreejs with ``sortPairs: true`` over a
pre-sorted leaf list, and OpenZeppelin's ``MerkleProof.verify`` accepts
every proof produced here.

Determinism Notes:
- The input order of leaves never affects the root
- Sibling orientation is recomputed from byte comparison at verify time,
  so proofs carry no left/right flags
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from core.crypto.hashing import HASH_SIZE, hash_pair, is_hash, to_hex
from core.schemas.errors import EmptyTreeError, EncodingError, LeafNotFoundError


@dataclass(frozen=True)
class MerkleTree:
    """
    A fully materialized Merkle tree.

    Attributes:
        root: The 32-byte Merkle root
        layers: All layers bottom-up; layers[0] is the sorted leaf layer
                and layers[-1] == [root]
    """
    root: bytes
    layers: list[list[bytes]]
    _positions: dict[bytes, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        positions: dict[bytes, int] = {}
        for index, leaf in enumerate(self.layers[0]):
            positions.setdefault(leaf, index)
        object.__setattr__(self, "_positions", positions)

    @property
    def leaves(self) -> list[bytes]:
        """The sorted leaf layer."""
        return self.layers[0]

    @property
    def depth(self) -> int:
        """Number of layers, leaf layer and root layer included."""
        return len(self.layers)

    def contains(self, leaf: bytes) -> bool:
        return isinstance(leaf, (bytes, bytearray)) and bytes(leaf) in self._positions

    def index_of(self, leaf: bytes) -> int | None:
        """Position of the first occurrence of ``leaf`` in the leaf layer."""
        return self._positions.get(bytes(leaf))


def merkle_parent(a: bytes, b: bytes) -> bytes:
    """
    Compute the parent hash of two sibling nodes.

    Siblings are hashed in ascending byte order, so
    merkle_parent(a, b) == merkle_parent(b, a).
    """
    return hash_pair(a, b)


def _next_layer(layer: list[bytes]) -> list[bytes]:
    next_layer: list[bytes] = []
    for i in range(0, len(layer) - 1, 2):
        next_layer.append(merkle_parent(layer[i], layer[i + 1]))
    if len(layer) % 2 == 1:
        # Promote the unpaired node unchanged
        next_layer.append(layer[-1])
    return next_layer


def build_tree(leaves: Sequence[bytes]) -> MerkleTree:
    """
    Build a Merkle tree from a sequence of leaf hashes.

    Algorithm:
    1. Validate every leaf is 32 bytes
    2. Sort leaves ascending by byte value
    3. Reduce pairwise in list order until one node remains,
       promoting the last node of any odd-sized layer

    Example: sorted [a, b, c] -> [parent(a, b), c] -> [parent(parent(a, b), c)]

    Args:
        leaves: Leaf hashes, any order

    Returns:
        MerkleTree holding the root and every layer

    Raises:
        EmptyTreeError: If leaves is empty
        EncodingError: If any leaf is not exactly 32 bytes
    """
    if len(leaves) == 0:
        raise EmptyTreeError()

    for i, leaf in enumerate(leaves):
        if not is_hash(leaf):
            raise EncodingError(
                f"Leaf {i} must be {HASH_SIZE} bytes",
                field_name="leaf",
                details={"index": i},
            )

    current: list[bytes] = sorted(bytes(leaf) for leaf in leaves)
    layers: list[list[bytes]] = [current]

    while len(current) > 1:
        current = _next_layer(current)
        layers.append(current)

    return MerkleTree(root=current[0], layers=layers)


def build_merkle_root(leaves: Sequence[bytes]) -> bytes:
    """Compute only the root of the tree over ``leaves``."""
    return build_tree(leaves).root


def prove_leaf(tree: MerkleTree, leaf: bytes) -> list[bytes]:
    """
    Generate the sibling path for a leaf, bottom-up.

    The leaf is located by exact match in the sorted leaf layer (first
    occurrence when duplicated). At each layer the sibling at
    ``index ^ 1`` is recorded; a promoted node has no sibling and adds
    nothing to the proof for that layer.

    Args:
        tree: Tree produced by build_tree
        leaf: The 32-byte leaf to prove

    Returns:
        Ordered list of sibling hashes from leaf level to just below the root

    Raises:
        LeafNotFoundError: If the leaf is not in the tree
    """
    if not isinstance(leaf, (bytes, bytearray)):
        raise LeafNotFoundError(repr(leaf))
    index = tree.index_of(leaf)
    if index is None:
        raise LeafNotFoundError(to_hex(leaf))

    proof: list[bytes] = []
    for layer in tree.layers[:-1]:
        sibling_index = index ^ 1
        if sibling_index < len(layer):
            proof.append(layer[sibling_index])
        index //= 2

    return proof


def verify_proof(leaf: bytes, proof: Sequence[bytes], root: bytes) -> bool:
    """
    Verify that ``leaf`` is committed to by ``root``.

    Folds the proof into the leaf with the same sorted-pair rule used at
    construction time; this is exactly what the on-chain verifier does.
    Never raises: any value that is not a 32-byte hash makes the proof
    invalid.

    Args:
        leaf: Candidate leaf hash
        proof: Sibling hashes, leaf to root
        root: The committed root

    Returns:
        True if the recomputed root equals ``root``, False otherwise
    """
    if not is_hash(leaf) or not is_hash(root):
        return False
    if isinstance(proof, (bytes, bytearray, str)):
        return False

    try:
        siblings = list(proof)
    except TypeError:
        return False

    computed = bytes(leaf)
    for sibling in siblings:
        if not is_hash(sibling):
            return False
        computed = merkle_parent(computed, bytes(sibling))

    return computed == bytes(root)


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the number of layers of a tree with ``num_leaves`` leaves.

    A single leaf has depth 1, two leaves depth 2. Odd layers promote
    rather than pad, so the count is the number of halvings (rounding
    up) plus one.

    Returns:
        Tree depth (0 for empty tree)
    """
    if num_leaves <= 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1

    return depth


__all__ = [
    "MerkleTree",
    "merkle_parent",
    "build_tree",
    "build_merkle_root",
    "prove_leaf",
    "verify_proof",
    "compute_tree_depth",
]
