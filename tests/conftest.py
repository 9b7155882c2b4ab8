"""
Pytest configuration and shared fixtures for vesting migration tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

make_window = _common.make_window
make_windows = _common.make_windows
make_tree = _common.make_tree
make_engine = _common.make_engine

from core.clock import FrozenClock


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def clock():
    """A frozen clock at the default window start."""
    return FrozenClock(_common.T0)


@pytest.fixture
def window():
    """Alice's 100-token, two-year window."""
    return make_window()


@pytest.fixture
def windows(window):
    """Alice's window followed by three distinct others."""
    return [window] + make_windows(4)[1:]


@pytest.fixture
def wired(windows, clock):
    """(engine, bridge, tree) with the root of `windows` published."""
    return make_engine(windows, clock=clock)


@pytest.fixture(autouse=True)
def _isolate_vestmig_env(monkeypatch):
    """Keep VESTMIG_* variables from the host out of every test."""
    import os
    for key in list(os.environ):
        if key.startswith("VESTMIG_"):
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
