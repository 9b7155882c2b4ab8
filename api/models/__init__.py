"""API request and response models."""

from api.models.requests import (
    IncreaseNonVestedRequest,
    MigrateNonVestedRequest,
    MigrateVestedRequest,
    PreviewRequest,
    SetRootRequest,
)
from api.models.responses import (
    AllowanceResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
    MigratedResponse,
    MigrateResponse,
    PreviewResponse,
    RootResponse,
)

__all__ = [
    "IncreaseNonVestedRequest",
    "MigrateNonVestedRequest",
    "MigrateVestedRequest",
    "PreviewRequest",
    "SetRootRequest",
    "AllowanceResponse",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "MigratedResponse",
    "MigrateResponse",
    "PreviewResponse",
    "RootResponse",
]
