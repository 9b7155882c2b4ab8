"""
Module 01 - Schemas
File: versioning.py

Purpose: Version constants for persisted formats (ledger snapshot and
published commitment files). Has no imports from other schema files.
"""

from typing import Literal

# Current format version stamped into every persisted document
SCHEMA_VERSION: str = "v1"

SchemaVersion = Literal["v1"]

SUPPORTED_SCHEMA_VERSIONS: frozenset[str] = frozenset({"v1"})


class UnsupportedSchemaVersionError(ValueError):
    """Raised when a persisted document carries an unknown format version."""

    def __init__(self, version: str, supported: frozenset[str] | None = None) -> None:
        self.version = version
        self.supported = supported or SUPPORTED_SCHEMA_VERSIONS
        super().__init__(
            f"Unsupported schema version: '{version}'. "
            f"Supported versions: {sorted(self.supported)}"
        )


def assert_supported_schema_version(version: str) -> None:
    """
    Validate that the given schema version is supported.

    Raises:
        UnsupportedSchemaVersionError: If the version is not supported.
    """
    if version not in SUPPORTED_SCHEMA_VERSIONS:
        raise UnsupportedSchemaVersionError(version)


def is_compatible_schema_version(version: str) -> bool:
    """Check if a schema version is compatible without raising."""
    return version in SUPPORTED_SCHEMA_VERSIONS
