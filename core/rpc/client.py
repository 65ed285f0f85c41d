"""
Ethereum JSON-RPC Client

JSON-RPC 2.0 over HTTP for the handful of calls proof retrieval needs:
eth_blockNumber, eth_getBlockByNumber and eth_getProof.
"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Optional, Sequence, Union

from core.config.runtime import RpcConfig
from core.crypto.hashing import from_quantity, to_quantity
from core.http.client import HttpClient, HttpError
from core.schemas.errors import RpcException


logger = logging.getLogger(__name__)


# A block number or one of the JSON-RPC block tags
BlockId = Union[int, str]

BLOCK_TAGS = frozenset({"latest", "earliest", "pending", "safe", "finalized"})


def format_block_id(block: BlockId) -> str:
    """
    Normalize a block reference to its JSON-RPC form.

    Example:
        >>> format_block_id(17)
        '0x11'
        >>> format_block_id("latest")
        'latest'
    """
    if isinstance(block, int):
        return to_quantity(block)
    if block in BLOCK_TAGS or block.startswith("0x"):
        return block
    if block.isdigit():
        return to_quantity(int(block))
    raise ValueError(f"Invalid block reference: {block!r}")


class JsonRpcClient:
    """
    Minimal JSON-RPC 2.0 client.

    Usage:
        rpc = JsonRpcClient("https://node.example")
        number = rpc.call("eth_blockNumber")
    """

    def __init__(
        self,
        url: str,
        *,
        http: Optional[HttpClient] = None,
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_delay: float = 1.0,
    ) -> None:
        if not url:
            raise ValueError("JSON-RPC url must not be empty")
        self.url = url
        self.http = http or HttpClient(
            timeout=timeout,
            max_retries=max_retries,
            retry_delay=retry_delay,
            default_headers={"Content-Type": "application/json"},
        )
        self._ids = itertools.count(1)

    @classmethod
    def from_config(cls, config: RpcConfig) -> "JsonRpcClient":
        if not config.url:
            raise RpcException("No RPC url configured (set TRIEPROOF_RPC_URL)")
        return cls(
            config.url,
            timeout=config.timeout,
            max_retries=config.max_retries,
            retry_delay=config.retry_delay,
        )

    def call(self, method: str, params: Sequence[Any] = ()) -> Any:
        """
        Invoke a method and return its result member.

        Raises:
            RpcException: Transport failure, malformed reply or error member
        """
        request_id = next(self._ids)
        payload = {
            "jsonrpc": "2.0",
            "id": request_id,
            "method": method,
            "params": list(params),
        }
        logger.debug(f"RPC -> {method} {payload['params']}")

        try:
            response = self.http.post(self.url, json=payload)
        except HttpError as e:
            raise RpcException(
                f"{method} failed: {e}",
                method=method,
                retryable=e.retryable,
                details={"status_code": e.status_code} if e.status_code else None,
            ) from e

        try:
            body = response.json()
        except ValueError as e:
            raise RpcException(f"{method} returned invalid JSON", method=method) from e

        if not isinstance(body, dict):
            raise RpcException(f"{method} returned a non-object reply", method=method)

        error = body.get("error")
        if error:
            code = error.get("code") if isinstance(error, dict) else None
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise RpcException(
                f"{method} error: {message}",
                method=method,
                rpc_code=code,
            )

        if "result" not in body:
            raise RpcException(f"{method} reply has no result", method=method)
        return body["result"]

    def close(self) -> None:
        self.http.close()


class EthClient:
    """Typed helpers over the eth_* namespace."""

    def __init__(self, rpc: JsonRpcClient) -> None:
        self.rpc = rpc

    def block_number(self) -> int:
        return from_quantity(self.rpc.call("eth_blockNumber"))

    def get_block(self, block: BlockId = "latest") -> dict[str, Any]:
        """Fetch a block without transaction bodies."""
        result = self.rpc.call("eth_getBlockByNumber", [format_block_id(block), False])
        if result is None:
            raise RpcException(f"Block not found: {block}", method="eth_getBlockByNumber")
        return result

    def get_proof(
        self,
        address: str,
        storage_keys: Sequence[str] = (),
        block: BlockId = "latest",
    ) -> dict[str, Any]:
        """Fetch an EIP-1186 account proof."""
        result = self.rpc.call(
            "eth_getProof",
            [address, list(storage_keys), format_block_id(block)],
        )
        if result is None:
            raise RpcException(f"No proof returned for {address}", method="eth_getProof")
        return result

    def close(self) -> None:
        self.rpc.close()
