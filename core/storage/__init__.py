"""
Proof storage and lookup.
"""

from .store import KeyValueStore, InMemoryKeyValueStore
from .lookup import ProofLookupService

__all__ = [
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "ProofLookupService",
]
