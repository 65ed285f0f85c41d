"""
Runtime Configuration Module

Provides configuration loading for the RPC client and verifier.
"""

from .runtime import RuntimeConfig, RpcConfig, VerifierConfig

__all__ = [
    "RuntimeConfig",
    "RpcConfig",
    "VerifierConfig",
]
