"""
Runtime Configuration

Central configuration for the ledger backend, engine permissions,
the service balance collaborator, the HTTP service and logging.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Optional
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


ENV_PREFIX = "VESTMIG_"

LEDGER_BACKENDS = ("memory", "json")


@dataclass
class LedgerConfig:
    """Where the migration ledger lives."""
    backend: str = "json"
    path: str = "vestmig-ledger.json"

    def __post_init__(self):
        if self.backend not in LEDGER_BACKENDS:
            raise ValueError(
                f"Unknown ledger backend {self.backend!r}, expected one of {LEDGER_BACKENDS}"
            )


@dataclass
class EngineConfig:
    """Administrative access control for the engine."""
    enforce_permissions: bool = False
    admins: list[str] = field(default_factory=list)


@dataclass
class BalancesConfig:
    """Input balances the in-process balance collaborator starts with."""
    seed_path: Optional[str] = None


@dataclass
class ApiConfig:
    """Configuration for the HTTP service."""
    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML or JSON file
    - Programmatic construction
    """
    ledger: LedgerConfig = field(default_factory=LedgerConfig)
    engine: EngineConfig = field(default_factory=EngineConfig)
    balances: BalancesConfig = field(default_factory=BalancesConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    log_level: str = "INFO"
    log_file: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - VESTMIG_LEDGER_BACKEND: memory or json
        - VESTMIG_LEDGER_PATH: path of the JSON ledger file
        - VESTMIG_ENFORCE_PERMISSIONS: require admin roles (true/false)
        - VESTMIG_ADMINS: comma-separated admin addresses
        - VESTMIG_BALANCES_SEED: JSON file of initial input balances
        - VESTMIG_LOG_LEVEL: log level
        - VESTMIG_LOG_FILE: optional log file
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}LEDGER_BACKEND"):
            overrides.setdefault("ledger", {})["backend"] = os.getenv(f"{ENV_PREFIX}LEDGER_BACKEND")
        if os.getenv(f"{ENV_PREFIX}LEDGER_PATH"):
            overrides.setdefault("ledger", {})["path"] = os.getenv(f"{ENV_PREFIX}LEDGER_PATH")

        if os.getenv(f"{ENV_PREFIX}ENFORCE_PERMISSIONS"):
            overrides.setdefault("engine", {})["enforce_permissions"] = (
                os.getenv(f"{ENV_PREFIX}ENFORCE_PERMISSIONS", "false").lower() == "true"
            )
        if os.getenv(f"{ENV_PREFIX}ADMINS"):
            overrides.setdefault("engine", {})["admins"] = [
                a.strip() for a in os.getenv(f"{ENV_PREFIX}ADMINS", "").split(",") if a.strip()
            ]

        if os.getenv(f"{ENV_PREFIX}BALANCES_SEED"):
            overrides.setdefault("balances", {})["seed_path"] = os.getenv(f"{ENV_PREFIX}BALANCES_SEED")

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file (JSON is valid YAML too)."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        ledger_data = data.get("ledger", {})
        engine_data = data.get("engine", {})
        balances_data = data.get("balances", {})
        api_data = data.get("api", {})

        return cls(
            ledger=LedgerConfig(**ledger_data) if ledger_data else LedgerConfig(),
            engine=EngineConfig(**engine_data) if engine_data else EngineConfig(),
            balances=BalancesConfig(**balances_data) if balances_data else BalancesConfig(),
            api=ApiConfig(**api_data) if api_data else ApiConfig(),
            log_level=data.get("log_level", "INFO"),
            log_file=data.get("log_file"),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        merged = self.to_dict()
        for key, value in overrides.items():
            if isinstance(value, dict):
                merged.setdefault(key, {}).update(value)
            else:
                merged[key] = value
        return RuntimeConfig.from_dict(merged)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ledger": {"backend": self.ledger.backend, "path": self.ledger.path},
            "engine": {
                "enforce_permissions": self.engine.enforce_permissions,
                "admins": list(self.engine.admins),
            },
            "balances": {"seed_path": self.balances.seed_path},
            "api": {"host": self.api.host, "port": self.api.port},
            "log_level": self.log_level,
            "log_file": self.log_file,
            "extra": dict(self.extra),
        }


CONFIG_SEARCH_PATHS = (
    Path("vestmig.json"),
    Path(".vestmig.json"),
    Path("vestmig.yaml"),
)


def default_config_paths() -> list[Path]:
    """Config file search order: working directory, then user config dir."""
    paths = [Path.cwd() / p for p in CONFIG_SEARCH_PATHS]
    paths.append(Path.home() / ".config" / "vestmig" / "config.json")
    return paths


def load_runtime_config(path: str | Path | None = None) -> RuntimeConfig:
    """
    Load configuration from an explicit file or the first default path
    found, then overlay environment variables.
    """
    config: RuntimeConfig | None = None

    if path is not None:
        config = RuntimeConfig.from_yaml(path)
    else:
        for candidate in default_config_paths():
            if candidate.exists():
                config = RuntimeConfig.from_yaml(candidate)
                break

    if config is None:
        config = RuntimeConfig()

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "ledger": {
    "backend": "json",
    "path": "vestmig-ledger.json"
  },
  "engine": {
    "enforce_permissions": false,
    "admins": []
  },
  "balances": {
    "seed_path": null
  },
  "api": {
    "host": "127.0.0.1",
    "port": 8000
  },
  "log_level": "INFO",
  "log_file": null
}
"""
