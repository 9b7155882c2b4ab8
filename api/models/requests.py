"""
Module 09 - API Request Models

Pydantic models for API request validation. Caller identity travels in
the body; authenticating it is the host's concern.
"""

from pydantic import BaseModel, Field

from core.schemas.window import UInt256, VestingWindow


class PreviewRequest(BaseModel):
    """Request body for POST /windows/preview."""

    window: VestingWindow = Field(..., description="The window to evaluate")
    now: int | None = Field(
        default=None,
        ge=0,
        description="Evaluate at this unix time instead of the server clock",
    )


class MigrateVestedRequest(BaseModel):
    """Request body for POST /migrate/vested."""

    caller: str = Field(..., description="Claimant address; must own the window")
    receiver: str = Field(..., description="Address credited with the output balance")
    amount: UInt256 = Field(..., description="Requested amount in base units")
    window: VestingWindow
    proof: list[str] = Field(default_factory=list, description="0x-hex sibling hashes")


class MigrateNonVestedRequest(BaseModel):
    """Request body for POST /migrate/non-vested."""

    caller: str
    amount: UInt256


class SetRootRequest(BaseModel):
    """Request body for POST /admin/root."""

    root: str = Field(..., description="0x-hex 32-byte root")
    sender: str | None = Field(default=None, description="Administrator address")


class IncreaseNonVestedRequest(BaseModel):
    """Request body for POST /admin/non-vested."""

    account: str
    amount: UInt256
    sender: str | None = None
