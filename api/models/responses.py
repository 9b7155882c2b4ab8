"""
Module 09 - API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "vestmig-api"
    version: str = "v1"


class RootResponse(BaseModel):
    """Response for GET /root and POST /admin/root."""

    ok: bool = True
    root: str | None = Field(default=None, description="Active root, null if never published")


class MigratedResponse(BaseModel):
    """Response for GET /windows/{leaf}/migrated."""

    ok: bool = True
    leaf: str
    migrated: int = Field(..., description="Total migrated from this window so far")


class AllowanceResponse(BaseModel):
    """Response for allowance queries and top-ups."""

    ok: bool = True
    account: str
    allowance: int


class PreviewResponse(BaseModel):
    """Response for POST /windows/preview."""

    ok: bool = True
    leaf: str
    migrated: int
    claimable: int
    now: int


class MigrateResponse(BaseModel):
    """Response for both migrate endpoints."""

    ok: bool = True
    caller: str
    receiver: str
    requested: int
    granted: int = Field(..., description="Amount actually moved")


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail = Field(..., description="Error details")
