"""
Module 09 - Migration Routes

POST /migrate/vested and POST /migrate/non-vested.

`caller` is taken from the request body as-is and is not authenticated.
Anyone who can reach these routes can migrate on behalf of any
caller, and a vested claim may name any receiver. Expose them only
behind an authenticating proxy that binds `caller` to the signed-in
identity.
"""

from fastapi import APIRouter, Depends

from api.deps import get_engine
from api.models.requests import MigrateNonVestedRequest, MigrateVestedRequest
from api.models.responses import MigrateResponse
from core.schemas.window import normalize_address
from engine.migration_engine import MigrationEngine


router = APIRouter(prefix="/migrate", tags=["migrate"])


@router.post("/vested", response_model=MigrateResponse)
def migrate_vested(
    request: MigrateVestedRequest,
    engine: MigrationEngine = Depends(get_engine),
) -> MigrateResponse:
    """
    Migrate vested balance from one window.

    Requests above what is currently claimable succeed with the smaller
    amount; `granted` reports what actually moved.
    """
    granted = engine.migrate_vested(
        request.caller,
        request.receiver,
        request.amount,
        request.window,
        request.proof,
    )
    return MigrateResponse(
        caller=normalize_address(request.caller),
        receiver=normalize_address(request.receiver),
        requested=request.amount,
        granted=granted,
    )


@router.post("/non-vested", response_model=MigrateResponse)
def migrate_non_vested(
    request: MigrateNonVestedRequest,
    engine: MigrationEngine = Depends(get_engine),
) -> MigrateResponse:
    """Migrate exactly `amount` from the caller's non-vested allowance."""
    granted = engine.migrate_non_vested(request.caller, request.amount)
    caller = normalize_address(request.caller)
    return MigrateResponse(
        caller=caller,
        receiver=caller,
        requested=request.amount,
        granted=granted,
    )
