"""
Module 01 - Schemas
File: __init__.py

Purpose: Export the public API for the schemas module.
This is the main entry point for other modules to import schema definitions.
"""

# Version constants
from .versioning import (
    SCHEMA_VERSION,
    SUPPORTED_SCHEMA_VERSIONS,
    SchemaVersion,
    UnsupportedSchemaVersionError,
    assert_supported_schema_version,
    is_compatible_schema_version,
)

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonicalize_value,
    dumps_canonical,
    loads_canonical,
)

# Error models and exceptions
from .errors import (
    CanonicalizationException,
    ClaimTooLargeException,
    DuplicateWindowException,
    EmptyCommitmentException,
    ErrorCodes,
    InvalidAmountException,
    InvalidWindowException,
    LeafNotFoundException,
    LedgerStorageException,
    MigrationError,
    MigrationException,
    NotYetStartedException,
    PermissionDeniedException,
    ProofInvalidException,
    TransferFailedException,
)

# Vesting window record
from .window import (
    UINT256_MAX,
    UInt256,
    VestingWindow,
    check_amount,
    normalize_address,
)

__all__ = [
    # Versioning
    "SCHEMA_VERSION",
    "SUPPORTED_SCHEMA_VERSIONS",
    "SchemaVersion",
    "UnsupportedSchemaVersionError",
    "assert_supported_schema_version",
    "is_compatible_schema_version",
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonicalize_value",
    "dumps_canonical",
    "loads_canonical",
    # Errors
    "CanonicalizationException",
    "ClaimTooLargeException",
    "DuplicateWindowException",
    "EmptyCommitmentException",
    "ErrorCodes",
    "InvalidAmountException",
    "InvalidWindowException",
    "LeafNotFoundException",
    "LedgerStorageException",
    "MigrationError",
    "MigrationException",
    "NotYetStartedException",
    "PermissionDeniedException",
    "ProofInvalidException",
    "TransferFailedException",
    # Window
    "UINT256_MAX",
    "UInt256",
    "VestingWindow",
    "check_amount",
    "normalize_address",
]
