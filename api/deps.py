"""
API Dependencies

Dependency injection for the API.
Provides the configured proof verifier.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from core.config.runtime import RuntimeConfig
from core.trie.verifier import ProofVerifier

logger = logging.getLogger(__name__)


CONFIG_SEARCH_PATHS = (
    Path("trieproof.yaml"),
    Path("trieproof.yml"),
)


@lru_cache(maxsize=1)
def load_runtime_config() -> RuntimeConfig:
    """Load RuntimeConfig from a YAML file, then overlay environment variables.

    Search order for config file (relative to the working directory):
      1. ./trieproof.yaml
      2. ./trieproof.yml

    Environment variables ALWAYS override config file values.
    The .env file is loaded automatically by core.config.runtime on import.
    """
    config: RuntimeConfig | None = None

    for path in CONFIG_SEARCH_PATHS:
        if path.exists():
            config = RuntimeConfig.from_yaml(path)
            logger.info(f"Loaded config from {path}")
            break

    if config is None:
        config = RuntimeConfig()

    return config.with_env_overrides()


def get_verifier() -> ProofVerifier:
    """FastAPI dependency: verifier bounded by the runtime config."""
    return ProofVerifier(load_runtime_config().verifier)
