"""
CLI Account Command (online)

Fetch the block header and an account proof from an Ethereum node,
verify the account (and any requested storage slots) against the
header's state root, and print or save the resulting ProofRequest.

Usage:
    trieproof account 0x97aE...3448 [--block latest] [--storage-key 0x0 ...]
                      [--rpc-url URL] [--out request.json] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path
from typing import Any

from core.rpc.client import EthClient, JsonRpcClient
from core.rpc.proofs import AccountProofReport, retrieve_account_proof
from core.schemas.errors import ProofVerificationException, RpcException
from core.trie.account import decode_account
from core.trie.verifier import ProofVerifier


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def report_to_dict(report: AccountProofReport, include_header: bool = False) -> dict[str, Any]:
    """JSON view of a report."""
    d: dict[str, Any] = {
        "ok": report.ok,
        "address": report.proof.address,
        "block_number": report.header.block_number,
        "block_hash": report.header.hash,
        "state_root": report.header.state_root,
        "account": report.account_outcome.to_dict(),
        "request": report.request.to_wire(),
    }
    if report.storage_outcomes:
        d["storage"] = {
            slot: outcome.to_dict() for slot, outcome in report.storage_outcomes.items()
        }
    if include_header:
        d["header"] = report.header.to_wire()
    return d


def print_report_human(report: AccountProofReport) -> None:
    """Print report in human-readable format."""
    print(f"address: {report.proof.address}")
    print(f"block: {report.header.block_number} ({report.header.hash})")
    print(f"state_root: {report.header.state_root}")
    print(f"account: {report.account_outcome.status}")
    if report.account_outcome.is_present:
        account = decode_account(report.account_outcome.value)
        print(f"  nonce: {account.nonce}")
        print(f"  balance: {account.balance}")
        print(f"  storage_root: 0x{account.storage_root.hex()}")
        print(f"  code_hash: 0x{account.code_hash.hex()}")
    print(f"proof_nodes: {len(report.request.proof)}")

    if report.storage_outcomes:
        print(f"\nstorage ({len(report.storage_outcomes)}):")
        for slot, outcome in report.storage_outcomes.items():
            status = "✓" if outcome.ok else "✗"
            detail = outcome.reason or outcome.status
            print(f"  {status} {slot}: {detail}")


def account_cmd(args: Namespace) -> int:
    """
    Execute the account command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    runtime = args.cli_config.to_runtime()
    if args.rpc_url:
        runtime.rpc.url = args.rpc_url

    try:
        rpc = JsonRpcClient.from_config(runtime.rpc)
    except RpcException as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    client = EthClient(rpc)
    verifier = ProofVerifier(runtime.verifier)

    try:
        report = retrieve_account_proof(
            client,
            args.address,
            block=args.block,
            storage_keys=args.storage_key or [],
            verifier=verifier,
        )
    except ProofVerificationException as e:
        print(f"Account proof invalid: {e.message} ({e.code})", file=sys.stderr)
        return EXIT_VERIFICATION_FAILED
    except (RpcException, ValueError) as e:
        if args.debug:
            raise
        print(f"Error fetching proof: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    finally:
        client.close()

    if args.out:
        out_path = Path(args.out)
        out_path.write_text(json.dumps(report.request.to_wire(), indent=2))
        logger.info(f"Wrote proof request to {out_path}")

    if args.json:
        print(json.dumps(report_to_dict(report, include_header=args.debug), indent=2))
    else:
        print_report_human(report)

    return EXIT_SUCCESS if report.ok else EXIT_VERIFICATION_FAILED
