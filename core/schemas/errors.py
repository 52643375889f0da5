"""
Schemas
File: errors.py

Purpose: Standard error taxonomy for the airdrop proof engine.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the engine."""

    # Encoding & Validation Errors
    ENCODING_ERROR = "ENCODING_ERROR"
    RECIPIENT_PARSE_ERROR = "RECIPIENT_PARSE_ERROR"
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"

    # Merkle Errors
    EMPTY_TREE = "EMPTY_TREE"
    LEAF_NOT_FOUND = "LEAF_NOT_FOUND"

    # Proof Lookup Errors
    PROOF_NOT_FOUND = "PROOF_NOT_FOUND"
    PROOF_MISMATCH = "PROOF_MISMATCH"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class AirdropError(BaseModel):
    """
    Base error model for structured error communication.

    Used when an error has to cross a boundary as data (CLI JSON output,
    a serving layer response) rather than as a raised exception.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.ENCODING_ERROR],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "AirdropException":
        """Convert this error model to a raised exception."""
        return AirdropException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class AirdropException(Exception):
    """
    Base exception for all airdrop engine errors.

    Carries structured error information and can be converted
    to/from AirdropError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "AIRDROP_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> AirdropError:
        """Convert this exception to an AirdropError model."""
        return AirdropError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EncodingError(AirdropException):
    """Raised when a recipient field cannot be packed into a leaf."""

    def __init__(
        self,
        message: str,
        field_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_name:
            full_details["field"] = field_name
        super().__init__(
            message=message,
            code=ErrorCodes.ENCODING_ERROR,
            details=full_details,
            retryable=False,
        )


class EmptyTreeError(AirdropException):
    """Raised when a tree is requested over zero leaves."""

    def __init__(self, message: str = "Cannot build a Merkle tree with no leaves") -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_TREE,
            retryable=False,
        )


class LeafNotFoundError(AirdropException):
    """Raised when a proof is requested for a leaf absent from the tree."""

    def __init__(self, leaf_hex: str) -> None:
        super().__init__(
            message=f"Leaf not found in tree: {leaf_hex}",
            code=ErrorCodes.LEAF_NOT_FOUND,
            details={"leaf": leaf_hex},
            retryable=False,
        )


class CanonicalizationException(AirdropException):
    """Raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
            retryable=False,
        )


class RecipientParseError(AirdropException):
    """Raised when an input file row cannot be turned into a Recipient."""

    def __init__(
        self,
        message: str,
        row: int | None = None,
        source: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if row is not None:
            full_details["row"] = row
        if source:
            full_details["source"] = source
        super().__init__(
            message=message,
            code=ErrorCodes.RECIPIENT_PARSE_ERROR,
            details=full_details,
            retryable=False,
        )


class ProofNotFoundException(AirdropException):
    """Raised when no published proof exists for a claim key."""

    def __init__(self, campaign_id: int, address: str, token_id: int) -> None:
        super().__init__(
            message=(
                f"No proof for address {address} and tokenId {token_id} "
                f"in campaign {campaign_id}"
            ),
            code=ErrorCodes.PROOF_NOT_FOUND,
            details={
                "campaign_id": campaign_id,
                "address": address,
                "token_id": str(token_id),
            },
            retryable=False,
        )


class ProofMismatchException(AirdropException):
    """Raised when a stored proof no longer matches its campaign commitment."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.PROOF_MISMATCH,
            details=details,
            retryable=False,
        )
