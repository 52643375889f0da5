"""
Test fixtures package for airdrop proof tests.

This package provides factory functions and reference vectors.

Usage:
    from fixtures.common import make_recipient, CAMPAIGN_0_ROOT

    def test_something():
        recipient = make_recipient(index=3, amount=500)
"""

from .common import (
    make_recipient,
    make_recipients,
    make_reference_recipients,
    make_generation_result,
)

__all__ = [
    "make_recipient",
    "make_recipients",
    "make_reference_recipients",
    "make_generation_result",
]
