"""
Module 09 - API Dependencies

Dependency injection for the API. The engine is built once per process
from the runtime configuration; tests replace it through
`app.dependency_overrides[get_engine]`.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from core.balances.bridge import InMemoryBalanceBridge
from core.config.runtime import RuntimeConfig, load_runtime_config
from engine.migration_engine import MigrationEngine

logger = logging.getLogger(__name__)


_engine: Optional[MigrationEngine] = None
_engine_lock = threading.Lock()


def build_bridge(config: RuntimeConfig) -> InMemoryBalanceBridge:
    """In-process balances, seeded from `balances.seed_path` when set."""
    if config.balances.seed_path:
        return InMemoryBalanceBridge.from_seed_file(config.balances.seed_path)
    logger.warning("No balance seed configured; every input balance starts at zero")
    return InMemoryBalanceBridge()


def build_engine(config: RuntimeConfig | None = None) -> MigrationEngine:
    """
    Create an engine from configuration.

    The service holds balances in process; hosts with a real balance
    collaborator wire their own engine and override get_engine.
    """
    config = config or load_runtime_config()
    logger.info(
        f"Building engine: ledger={config.ledger.backend}:{config.ledger.path} "
        f"balances={config.balances.seed_path or 'empty'} "
        f"permissions={'on' if config.engine.enforce_permissions else 'off'}"
    )
    return MigrationEngine.from_config(config, build_bridge(config))


def get_engine() -> MigrationEngine:
    """Process-wide engine instance."""
    global _engine
    with _engine_lock:
        if _engine is None:
            _engine = build_engine()
        return _engine


def reset_engine() -> None:
    """Drop the cached engine so the next request rebuilds it."""
    global _engine
    with _engine_lock:
        _engine = None
