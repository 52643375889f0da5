"""
Key-Value Store

Storage interface consumed by the proof lookup service. Implementations
are injected; nothing here keeps module-level state.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class KeyValueStore(ABC):
    """Minimal string-keyed store for JSON-compatible values."""

    @abstractmethod
    def put(self, key: str, value: Any) -> None:
        """Store a value, replacing any previous one."""

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Return the value for key, or None if absent."""

    @abstractmethod
    def list(self, prefix: str = "") -> list[str]:
        """Return the sorted keys starting with prefix."""


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store, local to one instance."""

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}

    def put(self, key: str, value: Any) -> None:
        self._data[key] = value

    def get(self, key: str) -> Any | None:
        return self._data.get(key)

    def list(self, prefix: str = "") -> list[str]:
        return sorted(k for k in self._data if k.startswith(prefix))

    def __len__(self) -> int:
        return len(self._data)


__all__ = ["KeyValueStore", "InMemoryKeyValueStore"]
