"""
CLI Verify Command

Check a single Merkle proof offline.

Usage:
    airdrop verify --leaf 0x.. --root 0x.. [--proof 0x.. ...] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from typing import Any

from core.engine import verify


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    leaf: str = ""
    root: str = ""
    proof: list[str] = field(default_factory=list)
    valid: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def print_summary_human(summary: VerifySummary) -> None:
    """Print summary in human-readable format."""
    print(f"leaf: {summary.leaf}")
    print(f"root: {summary.root}")
    print(f"proof_length: {len(summary.proof)}")
    print(f"valid: {str(summary.valid).lower()}")


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        EXIT_SUCCESS if the proof is valid, EXIT_VERIFICATION_FAILED otherwise
    """
    proof = list(args.proof or [])
    summary = VerifySummary(leaf=args.leaf, root=args.root, proof=proof)

    logger.info(f"Verifying proof of length {len(proof)} against {args.root}")
    summary.valid = verify(args.leaf, proof, args.root)

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS if summary.valid else EXIT_VERIFICATION_FAILED
