"""
CLI Verify Command

Verify an MPT proof stored in a JSON file, offline.

Two file layouts are accepted:

    {"root": "0x..", "key": "0x..", "proof": ["0x..", ...], "value": "0x.."}

or a ProofRequest as written by `trieproof account --out`:

    {"expectedRoot": "0x..", "key": "0x<nibble bytes>", "proof": [...],
     "keyIndex": 0, "proofIndex": 0, "expectedValue": "0x.."}

Usage:
    trieproof verify proof.json [--hash-key] [--require-present] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from core.crypto.hashing import coerce_bytes, keccak256, to_hex
from core.schemas.proof import ProofRequest
from core.schemas.verification import VerificationOutcome
from core.trie.nibbles import nibbles_to_key
from core.trie.verifier import ProofVerifier


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class ProofInput:
    """Verifier arguments read from a proof file."""
    root: str
    key: bytes
    proof: list[str]
    value: Optional[str] = None


def parse_proof_file(data: dict[str, Any]) -> ProofInput:
    """
    Read verifier arguments from either supported layout.

    Raises:
        ValueError: If required fields are missing or malformed
    """
    if "expectedRoot" in data:
        request = ProofRequest.model_validate(data)
        if request.key_index or request.proof_index:
            raise ValueError("Only requests starting at keyIndex=0, proofIndex=0 can be verified")
        nibbles = list(coerce_bytes(request.key))
        if any(n > 0x0F for n in nibbles):
            raise ValueError("ProofRequest key must hold one nibble per byte")
        return ProofInput(
            root=request.expected_root,
            key=nibbles_to_key(nibbles),
            proof=list(request.proof),
            value=request.expected_value,
        )

    missing = [name for name in ("root", "key", "proof") if name not in data]
    if missing:
        raise ValueError(f"Proof file is missing fields: {', '.join(missing)}")
    if not isinstance(data["proof"], list):
        raise ValueError("'proof' must be a list of hex strings")

    return ProofInput(
        root=data["root"],
        key=coerce_bytes(data["key"]),
        proof=list(data["proof"]),
        value=data.get("value"),
    )


def print_outcome_human(path: str, key: bytes, outcome: VerificationOutcome) -> None:
    """Print outcome in human-readable format."""
    print(f"proof: {path}")
    print(f"key: {to_hex(key)}")
    print(f"status: {outcome.status}")
    if outcome.value is not None:
        print(f"value: {to_hex(outcome.value)}")
    if outcome.reason:
        print(f"reason: {outcome.reason}")
        print(f"code: {outcome.code}")
    if outcome.node_index is not None:
        print(f"node_index: {outcome.node_index}")


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    proof_path = Path(args.proof_file)
    config = args.cli_config

    if not proof_path.exists():
        print(f"Error: Proof file not found: {proof_path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        with open(proof_path) as f:
            proof_input = parse_proof_file(json.load(f))
    except (ValueError, TypeError) as e:
        if args.debug:
            raise
        print(f"Error reading proof file: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    key = keccak256(proof_input.key) if args.hash_key else proof_input.key
    claimed = args.value if args.value is not None else proof_input.value

    logger.info(f"Verifying {len(proof_input.proof)} node proof for key {to_hex(key)}")
    verifier = ProofVerifier(config.to_runtime().verifier)
    outcome = verifier.verify(proof_input.root, key, proof_input.proof, claimed)

    if args.json:
        result = {"proof": str(proof_path), "key": to_hex(key), **outcome.to_dict()}
        print(json.dumps(result, indent=2))
    else:
        print_outcome_human(str(proof_path), key, outcome)

    if outcome.is_invalid:
        return EXIT_VERIFICATION_FAILED
    if args.require_present and not outcome.is_present:
        return EXIT_VERIFICATION_FAILED
    return EXIT_SUCCESS
