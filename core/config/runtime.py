"""
Runtime Configuration

Central configuration for the RPC client and verifier resource bounds.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Any, Optional
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


ENV_PREFIX = "TRIEPROOF_"


@dataclass
class RpcConfig:
    """Configuration for the Ethereum JSON-RPC endpoint."""
    url: Optional[str] = None
    timeout: float = 30.0
    max_retries: int = 3
    retry_delay: float = 1.0


@dataclass
class VerifierConfig:
    """Resource bounds applied before a proof is walked."""
    max_proof_nodes: int = 64
    max_node_bytes: int = 4096

    def __post_init__(self) -> None:
        if self.max_proof_nodes < 1:
            raise ValueError(f"max_proof_nodes must be positive, got {self.max_proof_nodes}")
        if self.max_node_bytes < 1:
            raise ValueError(f"max_node_bytes must be positive, got {self.max_node_bytes}")


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    rpc: RpcConfig = field(default_factory=RpcConfig)
    verifier: VerifierConfig = field(default_factory=VerifierConfig)
    log_level: str = "INFO"
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - TRIEPROOF_RPC_URL: JSON-RPC endpoint of an Ethereum node
        - TRIEPROOF_RPC_TIMEOUT: Request timeout in seconds
        - TRIEPROOF_RPC_MAX_RETRIES: Retries for transport failures
        - TRIEPROOF_MAX_PROOF_NODES: Upper bound on proof length
        - TRIEPROOF_MAX_NODE_BYTES: Upper bound on a single node's size
        - TRIEPROOF_LOG_LEVEL: Log level
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}RPC_URL"):
            overrides.setdefault("rpc", {})["url"] = os.getenv(f"{ENV_PREFIX}RPC_URL")
        if os.getenv(f"{ENV_PREFIX}RPC_TIMEOUT"):
            overrides.setdefault("rpc", {})["timeout"] = float(os.getenv(f"{ENV_PREFIX}RPC_TIMEOUT"))
        if os.getenv(f"{ENV_PREFIX}RPC_MAX_RETRIES"):
            overrides.setdefault("rpc", {})["max_retries"] = int(
                os.getenv(f"{ENV_PREFIX}RPC_MAX_RETRIES")
            )

        if os.getenv(f"{ENV_PREFIX}MAX_PROOF_NODES"):
            overrides.setdefault("verifier", {})["max_proof_nodes"] = int(
                os.getenv(f"{ENV_PREFIX}MAX_PROOF_NODES")
            )
        if os.getenv(f"{ENV_PREFIX}MAX_NODE_BYTES"):
            overrides.setdefault("verifier", {})["max_node_bytes"] = int(
                os.getenv(f"{ENV_PREFIX}MAX_NODE_BYTES")
            )

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        rpc_data = data.get("rpc", {}) or {}
        verifier_data = data.get("verifier", {}) or {}

        rpc = RpcConfig(**rpc_data) if rpc_data else RpcConfig()
        verifier = VerifierConfig(**verifier_data) if verifier_data else VerifierConfig()

        return cls(
            rpc=rpc,
            verifier=verifier,
            log_level=data.get("log_level", "INFO"),
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

        rpc = replace(self.rpc, **overrides.get("rpc", {}))
        verifier = replace(self.verifier, **overrides.get("verifier", {}))
        return RuntimeConfig(
            rpc=rpc,
            verifier=verifier,
            log_level=overrides.get("log_level", self.log_level),
            extra=dict(self.extra),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "rpc": {
                "url": self.rpc.url,
                "timeout": self.rpc.timeout,
                "max_retries": self.rpc.max_retries,
                "retry_delay": self.rpc.retry_delay,
            },
            "verifier": {
                "max_proof_nodes": self.verifier.max_proof_nodes,
                "max_node_bytes": self.verifier.max_node_bytes,
            },
            "log_level": self.log_level,
        }
