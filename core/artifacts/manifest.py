"""
Generation Artifacts
File: manifest.py

Purpose: Manifest describing the files written for one campaign generation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

FORMAT_VERSION = "airdrop.v1"

REQUIRED_FILES = frozenset({
    "merkle_root",
    "proofs",
    "leaves",
    "claims",
})


@dataclass
class ManifestFileEntry:
    """Entry describing a single output file."""
    path: str
    sha256: str
    size: int  # bytes

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "sha256": self.sha256,
            "bytes": self.size,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ManifestFileEntry":
        return cls(
            path=data["path"],
            sha256=data["sha256"],
            size=data.get("bytes", 0),
        )


@dataclass
class GenerationManifest:
    """Manifest for a generation output directory."""
    format_version: str = FORMAT_VERSION
    campaign_id: int = 0
    merkle_root: str = ""
    files: dict[str, ManifestFileEntry] = field(default_factory=dict)
    created_at: str | None = None

    def __post_init__(self) -> None:
        if self.created_at is None:
            self.created_at = datetime.now(timezone.utc).isoformat()

    def to_dict(self) -> dict[str, Any]:
        return {
            "format_version": self.format_version,
            # uint256 campaign ids overflow JSON numbers in most consumers
            "campaign_id": str(self.campaign_id),
            "merkle_root": self.merkle_root,
            "files": {k: v.to_dict() for k, v in self.files.items()},
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GenerationManifest":
        files = {
            key: ManifestFileEntry.from_dict(entry)
            for key, entry in data.get("files", {}).items()
        }
        return cls(
            format_version=data.get("format_version", FORMAT_VERSION),
            campaign_id=int(data.get("campaign_id", 0)),
            merkle_root=data.get("merkle_root", ""),
            files=files,
            created_at=data.get("created_at"),
        )

    def add_file(self, key: str, path: str, sha256: str, size: int) -> None:
        self.files[key] = ManifestFileEntry(path=path, sha256=sha256, size=size)

    def get_file(self, key: str) -> ManifestFileEntry | None:
        return self.files.get(key)

    def missing_files(self) -> list[str]:
        """Required file keys absent from the manifest."""
        return sorted(f for f in REQUIRED_FILES if f not in self.files)


__all__ = [
    "FORMAT_VERSION",
    "REQUIRED_FILES",
    "ManifestFileEntry",
    "GenerationManifest",
]
