"""
CLI Generate Command

Build a campaign's Merkle root and proofs from a recipients file and
save them to an output directory.

Usage:
    airdrop generate recipients.csv [--campaign-id N] [--out DIR] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from core.artifacts import ArtifactIOError, save_generation
from core.engine import EngineConfig, ProofEngine
from core.ingest import load_recipients
from core.schemas.errors import AirdropException


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


@dataclass
class GenerateSummary:
    """Summary of a generation run for CLI output."""
    input_path: str = ""
    output_dir: str = ""
    campaign_id: str = ""
    merkle_root: str = ""
    total_recipients: int = 0
    total_claims: int = 0
    success: bool = False
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if d["error"] is None:
            del d["error"]
        return d


def print_summary_human(summary: GenerateSummary) -> None:
    """Print summary in human-readable format."""
    if summary.success:
        print(f"campaign_id: {summary.campaign_id}")
        print(f"merkle_root: {summary.merkle_root}")
        print(f"total_recipients: {summary.total_recipients}")
        print(f"total_claims: {summary.total_claims}")
        print(f"output: {summary.output_dir}")
    else:
        print("Generation failed", file=sys.stderr)
        if summary.error:
            print(f"Error: {summary.error}", file=sys.stderr)


def print_summary_json(summary: GenerateSummary) -> None:
    """Print summary as JSON."""
    print(json.dumps(summary.to_dict(), indent=2))


def _report(summary: GenerateSummary, output_json: bool) -> None:
    if output_json:
        print_summary_json(summary)
    else:
        print_summary_human(summary)


def generate_cmd(args: Namespace) -> int:
    """
    Execute the generate command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config = args.runtime_config
    input_path = Path(args.input)
    out_dir = Path(args.out or config.generation.output_dir)
    campaign_id = (
        args.campaign_id
        if args.campaign_id is not None
        else config.generation.default_campaign_id
    )
    policy = args.duplicate_policy or config.generation.duplicate_policy

    summary = GenerateSummary(
        input_path=str(input_path),
        output_dir=str(out_dir),
        campaign_id=str(campaign_id),
    )

    try:
        recipients = load_recipients(input_path)
        engine = ProofEngine(EngineConfig.from_value(policy))
        result = engine.generate(recipients, campaign_id=campaign_id)
        save_generation(result, out_dir)
    except (AirdropException, ArtifactIOError, FileNotFoundError, ValueError) as e:
        logger.error(f"Generation failed: {e}")
        summary.error = str(e)
        _report(summary, args.json)
        return EXIT_RUNTIME_ERROR

    summary.merkle_root = result.root
    summary.total_recipients = result.total_recipients
    summary.total_claims = len(result.claims)
    summary.success = True

    _report(summary, args.json)
    return EXIT_SUCCESS
