"""
CLI Proof Command

Look up a recipient's proof in a saved generation and re-verify it.

Usage:
    airdrop proof ./output 0xabc... [--token-id N] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from core.artifacts import ArtifactIOError, load_generation
from core.schemas.errors import ProofMismatchException, ProofNotFoundException
from core.schemas.recipient import normalize_address
from core.storage import InMemoryKeyValueStore, ProofLookupService


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class ProofSummary:
    """Summary of a proof lookup for CLI output."""
    output_dir: str = ""
    address: str = ""
    claims: list[dict[str, Any]] = field(default_factory=list)
    valid: bool = False
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if d["error"] is None:
            del d["error"]
        return d


def print_summary_human(summary: ProofSummary) -> None:
    """Print summary in human-readable format."""
    if summary.error:
        print(f"Error: {summary.error}", file=sys.stderr)
        return
    print(f"address: {summary.address}")
    for claim in summary.claims:
        print(f"\ntokenId: {claim['tokenId']}")
        print(f"amount: {claim['amount']}")
        print(f"leaf: {claim['leaf']}")
        print(f"merkleRoot: {claim['merkleRoot']}")
        print("proof:")
        for node in claim["proof"]:
            print(f"  {node}")
    print(f"\nvalid: {str(summary.valid).lower()}")


def _report(summary: ProofSummary, output_json: bool) -> None:
    if output_json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)


def proof_cmd(args: Namespace) -> int:
    """
    Execute the proof command.

    Without --token-id every claim of the address is returned.

    Returns:
        Exit code
    """
    summary = ProofSummary(output_dir=str(args.out_dir), address=args.address)

    try:
        address = normalize_address(args.address)
        result = load_generation(Path(args.out_dir))
    except (ArtifactIOError, ValueError) as e:
        summary.error = str(e)
        _report(summary, args.json)
        return EXIT_RUNTIME_ERROR

    summary.address = address
    service = ProofLookupService(InMemoryKeyValueStore())
    service.publish(result)

    if args.token_id is not None:
        token_ids = [str(args.token_id)]
    else:
        token_ids = [c.token_id for c in result.claims_for(address)]

    if not token_ids:
        summary.error = f"No claims for {address} in campaign {result.campaign_id}"
        _report(summary, args.json)
        return EXIT_RUNTIME_ERROR

    try:
        for token_id in token_ids:
            response = service.get_proof(result.campaign_id, address, token_id)
            summary.claims.append(response.model_dump(mode="json", by_alias=True))
    except ProofNotFoundException as e:
        summary.error = e.message
        _report(summary, args.json)
        return EXIT_RUNTIME_ERROR
    except ProofMismatchException as e:
        logger.error(f"Stored proof failed verification: {e.message}")
        summary.error = e.message
        _report(summary, args.json)
        return EXIT_VERIFICATION_FAILED

    summary.valid = True
    _report(summary, args.json)
    return EXIT_SUCCESS
