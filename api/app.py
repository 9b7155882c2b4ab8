"""
Module 09 - FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import admin, health, ledger, migrate
from api.errors import (
    APIError,
    api_error_handler,
    generic_error_handler,
    migration_error_handler,
    value_error_handler,
)
from core.schemas.errors import MigrationException


def _resolve_log_level() -> int:
    """Resolve log level from VESTMIG_LOG_LEVEL, defaulting to INFO."""
    raw = os.getenv("VESTMIG_LOG_LEVEL", "INFO")
    return getattr(logging, raw.upper(), logging.INFO)


logging.basicConfig(
    level=_resolve_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Vesting Migration API",
        description="""
HTTP API for migrating balances out of committed vesting windows.

## Endpoints

- **GET /root** - Active vesting window root
- **GET /windows/{leaf}/migrated** - Amount already migrated from a window
- **GET /accounts/{account}/non-vested** - Remaining non-vested allowance
- **POST /windows/preview** - What a window could release right now
- **POST /migrate/vested** - Migrate vested balance with a Merkle proof
- **POST /migrate/non-vested** - Migrate from the non-vested allowance
- **POST /admin/root** - Publish a new root (replaces the old one)
- **POST /admin/non-vested** - Increase an allowance
- **GET /health** - Health check

## Errors

Rejections return `{"ok": false, "error": {"code", "message", "details"}}`:
403 for missing roles, 404 for unknown leaves, 409 for rejected
migrations, 422 for malformed input.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(MigrationException, migration_error_handler)
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(ledger.router)
    app.include_router(migrate.router)
    app.include_router(admin.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    from core.config.runtime import load_runtime_config

    config = load_runtime_config()
    uvicorn.run(app, host=config.api.host, port=config.api.port)
