"""API route handlers."""

from api.routes import admin, health, ledger, migrate

__all__ = ["admin", "health", "ledger", "migrate"]
