"""
Runtime Configuration Module

Provides configuration loading and management for the vesting migration engine.
"""

from .runtime import (
    ApiConfig,
    EngineConfig,
    LedgerConfig,
    RuntimeConfig,
    get_default_config_template,
    load_runtime_config,
)

__all__ = [
    "ApiConfig",
    "EngineConfig",
    "LedgerConfig",
    "RuntimeConfig",
    "get_default_config_template",
    "load_runtime_config",
]
