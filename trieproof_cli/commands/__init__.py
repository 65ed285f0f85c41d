"""
CLI command modules.
"""

from trieproof_cli.commands import account, verify

__all__ = ["account", "verify"]
