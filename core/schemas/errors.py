"""
Module 01 - Schemas
File: errors.py

Purpose: Standard error taxonomy for the vesting migration engine.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Every exception here is a rejection with no partial effect. None of them
are transient, so none are retryable.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the engine."""

    # Serialization Errors
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"

    # Window & Time Errors
    WRONG_PERIOD = "WRONG_PERIOD"
    NOT_YET_STARTED = "NOT_YET_STARTED"

    # Merkle & Commitment Errors
    MERKLE_PROOF_FAILED = "MERKLE_PROOF_FAILED"
    LEAF_NOT_FOUND = "LEAF_NOT_FOUND"
    EMPTY_COMMITMENT = "EMPTY_COMMITMENT"
    DUPLICATE_WINDOW = "DUPLICATE_WINDOW"

    # Claim Errors
    CLAIM_AMOUNT_TOO_LARGE = "CLAIM_AMOUNT_TOO_LARGE"
    INVALID_AMOUNT = "INVALID_AMOUNT"

    # Collaborator & Storage Errors
    TRANSFER_FAILED = "TRANSFER_FAILED"
    LEDGER_STORAGE_ERROR = "LEDGER_STORAGE_ERROR"

    # Access Errors
    PERMISSION_DENIED = "PERMISSION_DENIED"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class MigrationError(BaseModel):
    """
    Base error model for structured error communication.

    Used to pass engine rejections across the HTTP and CLI surfaces
    without raising.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.MERKLE_PROOF_FAILED],
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

    def to_exception(self) -> "MigrationException":
        """Convert this error model to a raised exception."""
        return MigrationException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class MigrationException(Exception):
    """
    Base exception for all vesting migration errors.

    Carries structured error information and can be converted
    to/from MigrationError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "MIGRATION_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> MigrationError:
        """Convert this exception to a MigrationError model."""
        return MigrationError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class CanonicalizationException(MigrationException):
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
        )


class InvalidWindowException(MigrationException):
    """Raised when a window's end is not strictly after its start."""

    def __init__(
        self,
        window_start: int,
        window_end: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = dict(details or {})
        full_details.update({"window_start": window_start, "window_end": window_end})
        super().__init__(
            message=ErrorCodes.WRONG_PERIOD,
            code=ErrorCodes.WRONG_PERIOD,
            details=full_details,
        )


class NotYetStartedException(MigrationException):
    """Raised when a window is queried before its start time."""

    def __init__(
        self,
        window_start: int,
        now: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = dict(details or {})
        full_details.update({"window_start": window_start, "now": now})
        super().__init__(
            message="WRONG TIME",
            code=ErrorCodes.NOT_YET_STARTED,
            details=full_details,
        )


class ProofInvalidException(MigrationException):
    """Raised when the recomputed root does not match the active root."""

    def __init__(
        self,
        leaf: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = dict(details or {})
        if leaf:
            full_details["leaf"] = leaf
        super().__init__(
            message=ErrorCodes.MERKLE_PROOF_FAILED,
            code=ErrorCodes.MERKLE_PROOF_FAILED,
            details=full_details,
        )


class ClaimTooLargeException(MigrationException):
    """Raised when a non-vested request exceeds the caller's allowance."""

    def __init__(
        self,
        requested: int,
        allowance: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = dict(details or {})
        full_details.update({"requested": requested, "allowance": allowance})
        super().__init__(
            message=ErrorCodes.CLAIM_AMOUNT_TOO_LARGE,
            code=ErrorCodes.CLAIM_AMOUNT_TOO_LARGE,
            details=full_details,
        )


class InvalidAmountException(MigrationException):
    """Raised for negative or out-of-range amounts."""

    def __init__(self, amount: int, details: dict[str, Any] | None = None) -> None:
        full_details = dict(details or {})
        full_details["amount"] = amount
        super().__init__(
            message=f"Amount must be a uint256, got {amount}",
            code=ErrorCodes.INVALID_AMOUNT,
            details=full_details,
        )


class LeafNotFoundException(MigrationException):
    """Raised when a proof is requested for a leaf absent from the tree."""

    def __init__(self, leaf: str, details: dict[str, Any] | None = None) -> None:
        full_details = dict(details or {})
        full_details["leaf"] = leaf
        super().__init__(
            message=f"Leaf not found in tree: {leaf}",
            code=ErrorCodes.LEAF_NOT_FOUND,
            details=full_details,
        )


class EmptyCommitmentException(MigrationException):
    """Raised when building a tree from zero leaves."""

    def __init__(self) -> None:
        super().__init__(
            message="Cannot build a commitment from zero leaves",
            code=ErrorCodes.EMPTY_COMMITMENT,
        )


class DuplicateWindowException(MigrationException):
    """Raised when two identical windows would share one leaf."""

    def __init__(
        self,
        leaf: str,
        indices: list[int],
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = dict(details or {})
        full_details.update({"leaf": leaf, "indices": indices})
        super().__init__(
            message=f"Duplicate vesting window at positions {indices}",
            code=ErrorCodes.DUPLICATE_WINDOW,
            details=full_details,
        )


class TransferFailedException(MigrationException):
    """Raised by a balance collaborator when a transfer cannot complete."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.TRANSFER_FAILED,
            details=details,
        )


class LedgerStorageException(MigrationException):
    """Raised when the ledger cannot be read from or written to storage."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = dict(details or {})
        if path:
            full_details["path"] = path
        super().__init__(
            message=message,
            code=ErrorCodes.LEDGER_STORAGE_ERROR,
            details=full_details,
        )


class PermissionDeniedException(MigrationException):
    """Raised when a sender lacks the role an administrative call requires."""

    def __init__(
        self,
        role: str,
        sender: str | None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = dict(details or {})
        full_details.update({"role": role, "sender": sender})
        super().__init__(
            message=f"Sender {sender} lacks role {role}",
            code=ErrorCodes.PERMISSION_DENIED,
            details=full_details,
        )
