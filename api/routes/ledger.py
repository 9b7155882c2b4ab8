"""
Module 09 - Ledger Query Routes

Read-only views of the migration ledger, plus the preview used by
claimant UIs to show what a window could release right now.
"""

from fastapi import APIRouter, Depends

from api.deps import get_engine
from api.models.requests import PreviewRequest
from api.models.responses import (
    AllowanceResponse,
    MigratedResponse,
    PreviewResponse,
    RootResponse,
)
from core.crypto.hashing import normalize_hash, to_hex
from core.merkle.leaf import window_leaf
from core.schemas.window import normalize_address
from engine.migration_engine import MigrationEngine


router = APIRouter(tags=["ledger"])


@router.get("/root", response_model=RootResponse)
def get_root(engine: MigrationEngine = Depends(get_engine)) -> RootResponse:
    """The active vesting window root."""
    root = engine.active_root
    return RootResponse(root=to_hex(root) if root is not None else None)


@router.get("/windows/{leaf}/migrated", response_model=MigratedResponse)
def get_migrated(leaf: str, engine: MigrationEngine = Depends(get_engine)) -> MigratedResponse:
    """Amount migrated so far from the window with this leaf hash."""
    leaf_bytes = normalize_hash(leaf)
    return MigratedResponse(
        leaf=to_hex(leaf_bytes),
        migrated=engine.amount_migrated_from_window(leaf_bytes),
    )


@router.get("/accounts/{account}/non-vested", response_model=AllowanceResponse)
def get_non_vested(account: str, engine: MigrationEngine = Depends(get_engine)) -> AllowanceResponse:
    """Remaining non-vested allowance of an account."""
    key = normalize_address(account)
    return AllowanceResponse(account=key, allowance=engine.non_vested_amounts(key))


@router.post("/windows/preview", response_model=PreviewResponse)
def preview_window(
    request: PreviewRequest,
    engine: MigrationEngine = Depends(get_engine),
) -> PreviewResponse:
    """
    Claimable amount for a window, without proof and without side effects.

    A window that has not started or has an empty period is rejected the
    same way a migration would be.
    """
    now = request.now if request.now is not None else engine.clock.now()
    leaf = window_leaf(request.window)
    return PreviewResponse(
        leaf=to_hex(leaf),
        migrated=engine.amount_migrated_from_window(leaf),
        claimable=engine.preview_vested(request.window, now=now),
        now=now,
    )
