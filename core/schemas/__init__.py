"""
Schemas
File: __init__.py

Purpose: Export the public API for the schemas module.
"""

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonicalize_value,
    dumps_canonical,
    format_datetime_canonical,
)

# Error models and exceptions
from .errors import (
    AirdropError,
    AirdropException,
    CanonicalizationException,
    EmptyTreeError,
    EncodingError,
    ErrorCodes,
    LeafNotFoundError,
    ProofMismatchException,
    ProofNotFoundException,
    RecipientParseError,
)

# Inputs
from .recipient import (
    UINT256_MAX,
    CampaignContext,
    Recipient,
    normalize_address,
    parse_uint256,
)

# Outputs
from .proof import (
    ClaimEntry,
    GenerationResult,
    ProofEntry,
    ProofResponse,
)

__all__ = [
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonicalize_value",
    "dumps_canonical",
    "format_datetime_canonical",
    # Errors
    "AirdropError",
    "AirdropException",
    "CanonicalizationException",
    "EmptyTreeError",
    "EncodingError",
    "ErrorCodes",
    "LeafNotFoundError",
    "ProofMismatchException",
    "ProofNotFoundException",
    "RecipientParseError",
    # Inputs
    "UINT256_MAX",
    "CampaignContext",
    "Recipient",
    "normalize_address",
    "parse_uint256",
    # Outputs
    "ClaimEntry",
    "GenerationResult",
    "ProofEntry",
    "ProofResponse",
]
