"""
Generation Artifacts

Save and load campaign generation output with a sha256 manifest.
"""

from .manifest import (
    FORMAT_VERSION,
    REQUIRED_FILES,
    GenerationManifest,
    ManifestFileEntry,
)
from .io import (
    ArtifactHashMismatchError,
    ArtifactIOError,
    ArtifactMissingFileError,
    compute_sha256,
    load_generation,
    load_manifest,
    save_generation,
)

__all__ = [
    "FORMAT_VERSION",
    "REQUIRED_FILES",
    "GenerationManifest",
    "ManifestFileEntry",
    "ArtifactHashMismatchError",
    "ArtifactIOError",
    "ArtifactMissingFileError",
    "compute_sha256",
    "load_generation",
    "load_manifest",
    "save_generation",
]
