"""
Ethereum RPC Module

JSON-RPC access to an Ethereum node and account proof retrieval.
"""

from .client import BlockId, JsonRpcClient, EthClient, format_block_id
from .proofs import (
    AccountProofReport,
    build_account_proof_request,
    expand_key_to_nibble_bytes,
    fetch_account_proof,
    fetch_block_header,
    retrieve_account_proof,
)

__all__ = [
    "BlockId",
    "JsonRpcClient",
    "EthClient",
    "format_block_id",
    "AccountProofReport",
    "build_account_proof_request",
    "expand_key_to_nibble_bytes",
    "fetch_account_proof",
    "fetch_block_header",
    "retrieve_account_proof",
]
