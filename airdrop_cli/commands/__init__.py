"""
CLI command modules.
"""

from airdrop_cli.commands import generate, verify, proof

__all__ = ["generate", "verify", "proof"]
