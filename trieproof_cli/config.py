"""
CLI Configuration

Configuration management for the trieproof CLI.
Supports environment variables and JSON configuration files.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from core.config.runtime import ENV_PREFIX, RpcConfig, RuntimeConfig, VerifierConfig


CONFIG_FILE_NAME = "trieproof.json"


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # RPC endpoint
    rpc_url: str | None = None
    rpc_timeout: float = 30.0
    rpc_max_retries: int = 3

    # Verifier bounds
    max_proof_nodes: int = 64
    max_node_bytes: int = 4096

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None

    # Output
    default_output_format: str = "human"  # "human" or "json"

    def to_runtime(self) -> RuntimeConfig:
        """Build the core RuntimeConfig these settings describe."""
        return RuntimeConfig(
            rpc=RpcConfig(
                url=self.rpc_url,
                timeout=self.rpc_timeout,
                max_retries=self.rpc_max_retries,
            ),
            verifier=VerifierConfig(
                max_proof_nodes=self.max_proof_nodes,
                max_node_bytes=self.max_node_bytes,
            ),
            log_level=self.log_level,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "rpc_url": self.rpc_url or "(not configured)",
            "rpc_timeout": self.rpc_timeout,
            "rpc_max_retries": self.rpc_max_retries,
            "max_proof_nodes": self.max_proof_nodes,
            "max_node_bytes": self.max_node_bytes,
            "log_level": self.log_level,
            "log_file": self.log_file,
            "default_output_format": self.default_output_format,
        }


def _apply_env(config: CLIConfig) -> CLIConfig:
    """Overlay TRIEPROOF_* environment variables (env takes precedence)."""
    if os.getenv(f"{ENV_PREFIX}RPC_URL"):
        config.rpc_url = os.getenv(f"{ENV_PREFIX}RPC_URL")
    if os.getenv(f"{ENV_PREFIX}RPC_TIMEOUT"):
        config.rpc_timeout = float(os.getenv(f"{ENV_PREFIX}RPC_TIMEOUT", "30"))
    if os.getenv(f"{ENV_PREFIX}RPC_MAX_RETRIES"):
        config.rpc_max_retries = int(os.getenv(f"{ENV_PREFIX}RPC_MAX_RETRIES", "3"))
    if os.getenv(f"{ENV_PREFIX}MAX_PROOF_NODES"):
        config.max_proof_nodes = int(os.getenv(f"{ENV_PREFIX}MAX_PROOF_NODES", "64"))
    if os.getenv(f"{ENV_PREFIX}MAX_NODE_BYTES"):
        config.max_node_bytes = int(os.getenv(f"{ENV_PREFIX}MAX_NODE_BYTES", "4096"))
    if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config.log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO")
    if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config.log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")
    return config


def load_config_from_env() -> CLIConfig:
    """Load configuration from environment variables."""
    return _apply_env(CLIConfig())


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        data = json.load(f)

    config = CLIConfig()

    config.rpc_url = data.get("rpc_url", config.rpc_url)
    config.rpc_timeout = data.get("rpc_timeout", config.rpc_timeout)
    config.rpc_max_retries = data.get("rpc_max_retries", config.rpc_max_retries)

    config.max_proof_nodes = data.get("max_proof_nodes", config.max_proof_nodes)
    config.max_node_bytes = data.get("max_node_bytes", config.max_node_bytes)

    config.log_level = data.get("log_level", config.log_level)
    config.log_file = data.get("log_file", config.log_file)
    config.default_output_format = data.get(
        "default_output_format", config.default_output_format
    )

    return config


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    config = CLIConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        default_paths = [
            Path.cwd() / CONFIG_FILE_NAME,
            Path.cwd() / f".{CONFIG_FILE_NAME}",
            Path.home() / ".config" / "trieproof" / "config.json",
        ]
        for default_path in default_paths:
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    return _apply_env(config)


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "rpc_url": "https://ethereum-rpc.example/v2/YOUR_KEY",
  "rpc_timeout": 30,
  "rpc_max_retries": 3,
  "max_proof_nodes": 64,
  "max_node_bytes": 4096,
  "log_level": "INFO",
  "log_file": null,
  "default_output_format": "human"
}
"""
