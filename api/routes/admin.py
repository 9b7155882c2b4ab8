"""
Module 09 - Administrative Routes

Root publication and non-vested allowance top-ups. When the engine
enforces permissions, `sender` must hold the matching role.

`sender` is taken from the request body as-is; nothing here
authenticates it. The role gate only protects anything when the service
runs behind an authenticating proxy that sets or checks `sender`.
"""

from fastapi import APIRouter, Depends

from api.deps import get_engine
from api.models.requests import IncreaseNonVestedRequest, SetRootRequest
from api.models.responses import AllowanceResponse, RootResponse
from core.crypto.hashing import to_hex
from core.schemas.window import normalize_address
from engine.migration_engine import MigrationEngine


router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/root", response_model=RootResponse)
def set_root(
    request: SetRootRequest,
    engine: MigrationEngine = Depends(get_engine),
) -> RootResponse:
    """Replace the active vesting window root."""
    engine.set_vesting_window_merkle_root(request.root, sender=request.sender)
    root = engine.active_root
    return RootResponse(root=to_hex(root) if root is not None else None)


@router.post("/non-vested", response_model=AllowanceResponse)
def increase_non_vested(
    request: IncreaseNonVestedRequest,
    engine: MigrationEngine = Depends(get_engine),
) -> AllowanceResponse:
    """Increase an account's non-vested allowance."""
    total = engine.increase_non_vested(request.account, request.amount, sender=request.sender)
    return AllowanceResponse(account=normalize_address(request.account), allowance=total)
