"""
Pytest configuration and shared fixtures for trieproof tests.

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

_trie = importlib.import_module("fixtures.trie_fixtures")

FixtureTrie = _trie.FixtureTrie
make_address = _trie.make_address
make_account = _trie.make_account
make_state_trie = _trie.make_state_trie
make_storage_trie = _trie.make_storage_trie
make_storage_proof_dict = _trie.make_storage_proof_dict
make_account_proof_dict = _trie.make_account_proof_dict
make_block_dict = _trie.make_block_dict


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def sample_trie():
    """A trie with enough keys to produce branch, extension and leaf nodes."""
    items = {
        bytes.fromhex("0000" + "00" * 30): b"a" * 40,
        bytes.fromhex("0001" + "00" * 30): b"b" * 40,
        bytes.fromhex("0100" + "00" * 30): b"c" * 40,
        bytes.fromhex("ab00" + "00" * 30): b"d" * 40,
        bytes.fromhex("abcd" + "00" * 30): b"e" * 40,
        bytes.fromhex("ff" * 32): b"f" * 40,
    }
    return FixtureTrie(items)


@pytest.fixture
def accounts():
    """Three funded accounts keyed by address."""
    return {
        make_address(1): make_account(nonce=1, balance=10**18),
        make_address(2): make_account(nonce=0, balance=5),
        make_address(3): make_account(nonce=42, balance=0),
    }


@pytest.fixture
def state_trie(accounts):
    """State trie over the accounts fixture."""
    return make_state_trie(accounts)


@pytest.fixture(autouse=True)
def _clear_trieproof_env(monkeypatch):
    """Keep a developer's TRIEPROOF_* settings out of the tests."""
    for name in [
        "TRIEPROOF_RPC_URL",
        "TRIEPROOF_RPC_TIMEOUT",
        "TRIEPROOF_RPC_MAX_RETRIES",
        "TRIEPROOF_MAX_PROOF_NODES",
        "TRIEPROOF_MAX_NODE_BYTES",
        "TRIEPROOF_LOG_LEVEL",
        "TRIEPROOF_LOG_FILE",
    ]:
        monkeypatch.delenv(name, raising=False)


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
