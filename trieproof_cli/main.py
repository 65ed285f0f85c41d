"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m trieproof_cli verify <proof.json> [--hash-key] [--value HEX] [--json]
    python -m trieproof_cli account <address> [--block N] [--storage-key SLOT ...] [--out PATH]
    python -m trieproof_cli config --init | --show

Environment Variables:
    TRIEPROOF_RPC_URL           JSON-RPC endpoint of an Ethereum node
    TRIEPROOF_RPC_TIMEOUT       Request timeout in seconds (default: 30)
    TRIEPROOF_MAX_PROOF_NODES   Reject longer proofs (default: 64)
    TRIEPROOF_LOG_LEVEL         Log level (default: INFO)
    TRIEPROOF_LOG_FILE          Also log to this file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from trieproof_cli import __version__
from trieproof_cli.commands import account, verify
from trieproof_cli.config import load_config, get_default_config_template


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="trieproof",
        description="Verify Ethereum Merkle-Patricia-Trie proofs and fetch account proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./trieproof.json or ~/.config/trieproof/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a proof file offline",
        description="Walk an MPT proof against its root and report present, absent or invalid.",
    )
    verify_parser.add_argument(
        "proof_file",
        type=str,
        help="JSON file with root, key, proof and optional value (or a ProofRequest)",
    )
    verify_parser.add_argument(
        "--value",
        type=str,
        default=None,
        help="Claimed value (0x hex); overrides the value in the file",
    )
    verify_parser.add_argument(
        "--hash-key",
        action="store_true",
        default=False,
        help="Hash the key with Keccak-256 before walking (secure trie keys)",
    )
    verify_parser.add_argument(
        "--require-present",
        action="store_true",
        default=False,
        help="Treat an absent key as a verification failure",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    verify_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Raise errors with tracebacks",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- account command ---
    account_parser = subparsers.add_parser(
        "account",
        help="Fetch and verify an account proof (online)",
        description="Fetch a block header and eth_getProof result, verify them and build a proof request.",
    )
    account_parser.add_argument(
        "address",
        type=str,
        help="Account address (0x, 20 bytes)",
    )
    account_parser.add_argument(
        "--block",
        type=str,
        default="latest",
        help="Block number or tag (default: latest)",
    )
    account_parser.add_argument(
        "--storage-key",
        action="append",
        default=None,
        help="Storage slot to prove as well (repeatable)",
    )
    account_parser.add_argument(
        "--rpc-url",
        type=str,
        default=None,
        help="JSON-RPC endpoint (overrides config)",
    )
    account_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the proof request JSON to this path",
    )
    account_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    account_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Include the block header and raise errors with tracebacks",
    )
    account_parser.set_defaults(func=account.account_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="trieproof.json",
        help="Path for config file (default: trieproof.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (TRIEPROOF_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: trieproof config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
