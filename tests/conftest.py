"""
Pytest configuration and shared fixtures for Merkle root tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import os
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

make_leaf = _common.make_leaf
make_leaves = _common.make_leaves
make_leaf_lines = _common.make_leaf_lines
write_leaf_file = _common.write_leaf_file


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def leaves():
    """Seven deterministic leaves (odd count, padding at two levels)."""
    return make_leaves(7)


@pytest.fixture
def leaf_file(tmp_path, leaves):
    """A leaf file holding the `leaves` fixture."""
    return write_leaf_file(tmp_path / "leaves.txt", leaves)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep MERKLE_ROOT_* variables from the host out of every test."""
    for name in list(os.environ):
        if name.startswith("MERKLE_ROOT_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_default_config():
    """Reset the module-level default config between tests."""
    from core.config.runtime import set_default_config
    set_default_config(None)
    yield
    set_default_config(None)


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
