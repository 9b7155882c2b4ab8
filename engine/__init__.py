"""
Vesting migration engine and its administrative tooling.
"""
from .commitment import (
    Commitment,
    CommitmentClaim,
    build_commitment,
    load_commitment,
    load_windows,
    save_commitment,
)
from .migration_engine import MigrationEngine
from .permissions import Role, RolePermissions

__all__ = [
    "Commitment",
    "CommitmentClaim",
    "build_commitment",
    "load_commitment",
    "load_windows",
    "save_commitment",
    "MigrationEngine",
    "Role",
    "RolePermissions",
]
