"""
Generation Artifacts
File: io.py

Purpose: Save and load a campaign's generation output to/from a directory.

Layout:
    merkle_root.json   campaignId, merkleRoot, totalRecipients, generatedAt
    proofs.json        address -> {proof, tokenId, amount, leaf}
    leaves.json        sorted leaves + totalLeaves
    claims.json        every (address, tokenId) claim with its proof
    manifest.json      sha256 + size of each file above
"""

from __future__ import annotations

import hashlib
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from core.schemas.canonical import dumps_canonical
from core.schemas.proof import GenerationResult

from core.artifacts.manifest import (
    FORMAT_VERSION,
    GenerationManifest,
)


logger = logging.getLogger(__name__)


MANIFEST_FILE = "manifest.json"
MERKLE_ROOT_FILE = "merkle_root.json"
PROOFS_FILE = "proofs.json"
LEAVES_FILE = "leaves.json"
CLAIMS_FILE = "claims.json"


class ArtifactIOError(Exception):
    """Error during artifact IO operations."""
    pass


class ArtifactHashMismatchError(ArtifactIOError):
    """Hash mismatch detected while loading artifacts."""
    def __init__(self, file_key: str, expected: str, actual: str):
        self.file_key = file_key
        self.expected = expected
        self.actual = actual
        super().__init__(f"Hash mismatch for {file_key}: expected {expected}, got {actual}")


class ArtifactMissingFileError(ArtifactIOError):
    """Required file missing from the output directory."""
    def __init__(self, file_key: str):
        self.file_key = file_key
        super().__init__(f"Required file missing: {file_key}")


def compute_sha256(data: bytes) -> str:
    """Compute SHA-256 hex digest of data."""
    return hashlib.sha256(data).hexdigest()


def _write_json_file(path: Path, obj: Any) -> tuple[str, int]:
    """Write object as indented canonical JSON, return (sha256, size)."""
    data = (dumps_canonical(obj, indent=2) + "\n").encode("utf-8")
    path.write_bytes(data)
    return compute_sha256(data), len(data)


def save_generation(
    result: GenerationResult,
    out_dir: str | Path,
    *,
    generated_at: datetime | None = None,
) -> Path:
    """
    Save a GenerationResult to a directory.

    Args:
        result: Output of the proof engine
        out_dir: Output directory (created if missing)
        generated_at: Timestamp recorded in merkle_root.json (default: now)

    Returns:
        Path to the output directory
    """
    out_path = Path(out_dir)
    out_path.mkdir(parents=True, exist_ok=True)

    generated_at = generated_at or datetime.now(timezone.utc)
    payload = result.to_dict()

    manifest = GenerationManifest(
        campaign_id=result.campaign_id,
        merkle_root=result.root,
        created_at=generated_at.isoformat(),
    )

    artifacts = [
        ("merkle_root", MERKLE_ROOT_FILE, {
            "campaignId": str(result.campaign_id),
            "merkleRoot": result.root,
            "totalRecipients": result.total_recipients,
            "generatedAt": generated_at,
        }),
        ("proofs", PROOFS_FILE, payload["proofs"]),
        ("leaves", LEAVES_FILE, {
            "leaves": payload["leaves"],
            "totalLeaves": len(payload["leaves"]),
        }),
        ("claims", CLAIMS_FILE, payload["claims"]),
    ]

    for key, filename, obj in artifacts:
        sha256, size = _write_json_file(out_path / filename, obj)
        manifest.add_file(key, filename, sha256, size)

    # Manifest last, so a partial write never looks complete
    (out_path / MANIFEST_FILE).write_text(
        dumps_canonical(manifest.to_dict(), indent=2) + "\n",
        encoding="utf-8",
    )

    logger.info(f"Saved generation for campaign {result.campaign_id} to {out_path}")
    return out_path


def load_manifest(path: str | Path) -> GenerationManifest:
    """Load the manifest from an output directory."""
    manifest_path = Path(path) / MANIFEST_FILE
    if not manifest_path.exists():
        raise ArtifactMissingFileError("manifest")
    try:
        data = json.loads(manifest_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ArtifactIOError(f"Invalid manifest JSON: {e}") from e
    return GenerationManifest.from_dict(data)


def load_generation(path: str | Path, *, verify_hashes: bool = True) -> GenerationResult:
    """
    Load a GenerationResult from an output directory.

    Args:
        path: Directory written by save_generation
        verify_hashes: Whether to check every file against the manifest

    Raises:
        ArtifactMissingFileError: If the manifest or a required file is missing
        ArtifactHashMismatchError: If a file's sha256 differs from the manifest
        ArtifactIOError: If the directory or its contents are unusable
    """
    path = Path(path)
    if not path.is_dir():
        raise ArtifactIOError(f"Not a directory: {path}")

    manifest = load_manifest(path)
    if manifest.format_version != FORMAT_VERSION:
        raise ArtifactIOError(f"Incompatible format version: {manifest.format_version}")

    missing = manifest.missing_files()
    if missing:
        raise ArtifactMissingFileError(missing[0])

    artifacts: dict[str, Any] = {}
    for key, entry in manifest.files.items():
        file_path = path / entry.path
        if not file_path.exists():
            raise ArtifactMissingFileError(key)
        data = file_path.read_bytes()
        if verify_hashes:
            actual = compute_sha256(data)
            if actual != entry.sha256:
                raise ArtifactHashMismatchError(key, entry.sha256, actual)
        artifacts[key] = json.loads(data.decode("utf-8"))

    root_info = artifacts["merkle_root"]
    return GenerationResult.model_validate({
        "campaignId": int(root_info["campaignId"]),
        "root": root_info["merkleRoot"],
        "totalRecipients": root_info["totalRecipients"],
        "leaves": artifacts["leaves"]["leaves"],
        "proofs": artifacts["proofs"],
        "claims": artifacts["claims"],
    })


__all__ = [
    "MANIFEST_FILE",
    "MERKLE_ROOT_FILE",
    "PROOFS_FILE",
    "LEAVES_FILE",
    "CLAIMS_FILE",
    "ArtifactIOError",
    "ArtifactHashMismatchError",
    "ArtifactMissingFileError",
    "compute_sha256",
    "save_generation",
    "load_manifest",
    "load_generation",
]
