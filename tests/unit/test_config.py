"""
Runtime Configuration Unit Tests
Tests for core/config/runtime.py
"""
import json

import pytest

from core.config.runtime import (
    EngineConfig,
    LedgerConfig,
    RuntimeConfig,
    get_default_config_template,
    load_runtime_config,
)


class TestRuntimeConfig:
    """Tests for RuntimeConfig construction."""

    def test_defaults(self):
        config = RuntimeConfig()
        assert config.ledger.backend == "json"
        assert config.ledger.path == "vestmig-ledger.json"
        assert config.engine.enforce_permissions is False
        assert config.engine.admins == []
        assert config.api.port == 8000
        assert config.log_level == "INFO"
        assert config.balances.seed_path is None

    def test_from_dict_partial(self):
        config = RuntimeConfig.from_dict({"ledger": {"backend": "memory"}, "log_level": "DEBUG"})
        assert config.ledger.backend == "memory"
        assert config.ledger.path == "vestmig-ledger.json"
        assert config.log_level == "DEBUG"
        assert config.engine == EngineConfig()

    def test_unknown_backend_rejected(self):
        with pytest.raises(ValueError, match="Unknown ledger backend"):
            LedgerConfig(backend="postgres")

    def test_to_dict_round_trip(self):
        config = RuntimeConfig.from_dict({
            "ledger": {"backend": "memory", "path": "x.json"},
            "engine": {"enforce_permissions": True, "admins": ["0xabc"]},
            "balances": {"seed_path": "seed.json"},
        })
        assert RuntimeConfig.from_dict(config.to_dict()) == config

    def test_template_matches_defaults(self):
        data = json.loads(get_default_config_template())
        assert RuntimeConfig.from_dict(data) == RuntimeConfig()


class TestEnvOverrides:
    """Tests for VESTMIG_* environment variables."""

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("VESTMIG_LEDGER_BACKEND", "memory")
        monkeypatch.setenv("VESTMIG_ENFORCE_PERMISSIONS", "true")
        monkeypatch.setenv("VESTMIG_ADMINS", "0xaaa, 0xbbb ,")
        monkeypatch.setenv("VESTMIG_LOG_LEVEL", "WARNING")
        monkeypatch.setenv("VESTMIG_BALANCES_SEED", "balances.json")

        config = RuntimeConfig.from_env()

        assert config.ledger.backend == "memory"
        assert config.engine.enforce_permissions is True
        assert config.engine.admins == ["0xaaa", "0xbbb"]
        assert config.log_level == "WARNING"
        assert config.balances.seed_path == "balances.json"

    def test_env_overlays_file_values(self, monkeypatch):
        monkeypatch.setenv("VESTMIG_LEDGER_PATH", "/tmp/other.json")
        base = RuntimeConfig.from_dict({"ledger": {"backend": "json", "path": "a.json"}, "log_level": "DEBUG"})

        config = base.with_env_overrides()

        assert config.ledger.path == "/tmp/other.json"
        assert config.ledger.backend == "json"
        assert config.log_level == "DEBUG"

    def test_no_overrides_returns_same(self):
        config = RuntimeConfig()
        assert config.with_env_overrides() is config


class TestLoadRuntimeConfig:
    """Tests for file discovery and loading."""

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "vestmig.yaml"
        path.write_text("ledger:\n  backend: memory\nlog_level: ERROR\n")
        config = load_runtime_config(path)
        assert config.ledger.backend == "memory"
        assert config.log_level == "ERROR"

    def test_json_file(self, tmp_path):
        path = tmp_path / "vestmig.json"
        path.write_text(json.dumps({"api": {"port": 9001}}))
        assert load_runtime_config(path).api.port == 9001

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_runtime_config(tmp_path / "absent.json")

    def test_discovers_working_directory_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "vestmig.json").write_text(json.dumps({"ledger": {"backend": "memory"}}))
        assert load_runtime_config().ledger.backend == "memory"

    def test_env_applied_after_file(self, tmp_path, monkeypatch):
        path = tmp_path / "vestmig.json"
        path.write_text(json.dumps({"log_level": "DEBUG"}))
        monkeypatch.setenv("VESTMIG_LOG_LEVEL", "ERROR")
        assert load_runtime_config(path).log_level == "ERROR"
