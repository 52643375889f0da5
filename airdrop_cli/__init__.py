"""
Airdrop CLI

Command-line interface for generating and checking airdrop Merkle proofs.

Usage:
    python -m airdrop_cli generate recipients.csv --campaign-id 1 --out ./output
    python -m airdrop_cli verify --leaf 0x.. --root 0x.. --proof 0x.. --proof 0x..
    python -m airdrop_cli proof ./output 0xabc...
"""

__version__ = "0.1.0"
