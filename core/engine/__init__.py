"""
Proof Engine

Single entry point for campaign proof generation and verification.

Usage:
    from core.engine import generate, verify

    result = generate(recipients, campaign_id=0)
    entry = result.proofs["0x1111111111111111111111111111111111111111"]
    assert verify(entry.leaf, entry.proof, result.root)
"""
from .proof_engine import (
    DuplicatePolicy,
    EngineConfig,
    ProofEngine,
    generate,
    verify,
)

__all__ = [
    "DuplicatePolicy",
    "EngineConfig",
    "ProofEngine",
    "generate",
    "verify",
]
