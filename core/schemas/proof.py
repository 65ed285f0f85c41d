"""
Module 02 - Schemas
File: proof.py

Purpose: Wire schemas for Ethereum block headers, eth_getProof responses
and the proof verification request built from them.

Hex fields are kept as 0x strings exactly as the node returns them;
properties expose the decoded bytes/int views.
"""

from __future__ import annotations

import string
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.crypto.hashing import from_hex, from_quantity


def _check_hex(value: str) -> str:
    from_hex(value)
    return value


def _check_quantity(value: str) -> str:
    from_quantity(value)
    return value


def _slot_to_bytes(key: str) -> bytes:
    content = key[2:] if key.startswith(("0x", "0X")) else key
    if not all(c in string.hexdigits for c in content):
        raise ValueError(f"Invalid hex storage key: {key!r}")
    if len(content) % 2:
        content = "0" + content
    return bytes.fromhex(content)


# Storage slots are 32-byte words
SLOT_LENGTH = 32


# Header fields selected from eth_getBlockByNumber, in wire order
BLOCK_HEADER_FIELDS: tuple[str, ...] = (
    "hash",
    "parentHash",
    "sha3Uncles",
    "miner",
    "stateRoot",
    "transactionsRoot",
    "receiptsRoot",
    "logsBloom",
    "difficulty",
    "number",
    "gasLimit",
    "gasUsed",
    "timestamp",
    "extraData",
    "mixHash",
    "nonce",
    "totalDifficulty",
    "baseFeePerGas",
)


class BlockHeader(BaseModel):
    """
    Selected fields of a block as returned by eth_getBlockByNumber.

    Unknown keys (transactions, uncles, size, ...) are dropped.
    Fields that only exist on some networks/forks are optional.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    hash: str = Field(..., description="Block hash")
    parent_hash: str = Field(..., alias="parentHash")
    sha3_uncles: str = Field(..., alias="sha3Uncles")
    miner: str = Field(...)
    state_root: str = Field(..., alias="stateRoot", description="State trie root")
    transactions_root: str = Field(..., alias="transactionsRoot")
    receipts_root: str = Field(..., alias="receiptsRoot")
    logs_bloom: str = Field(..., alias="logsBloom")
    difficulty: str = Field(...)
    number: str = Field(..., description="Block number (quantity)")
    gas_limit: str = Field(..., alias="gasLimit")
    gas_used: str = Field(..., alias="gasUsed")
    timestamp: str = Field(...)
    extra_data: str = Field(..., alias="extraData")
    mix_hash: str | None = Field(default=None, alias="mixHash")
    nonce: str | None = Field(default=None)
    total_difficulty: str | None = Field(default=None, alias="totalDifficulty")
    base_fee_per_gas: str | None = Field(default=None, alias="baseFeePerGas")

    @field_validator("hash", "parent_hash", "state_root", "transactions_root", "receipts_root")
    @classmethod
    def _validate_hash(cls, v: str) -> str:
        if len(from_hex(v)) != 32:
            raise ValueError(f"expected a 32-byte hash, got {v}")
        return v

    @field_validator("number", "gas_limit", "gas_used", "timestamp", "difficulty")
    @classmethod
    def _validate_quantity(cls, v: str) -> str:
        return _check_quantity(v)

    @property
    def state_root_bytes(self) -> bytes:
        return from_hex(self.state_root)

    @property
    def block_number(self) -> int:
        return from_quantity(self.number)

    def to_wire(self) -> dict[str, Any]:
        """Header as camelCase JSON, in the selected field order."""
        data = self.model_dump(by_alias=True)
        return {name: data.get(name) for name in BLOCK_HEADER_FIELDS}


class StorageProof(BaseModel):
    """One entry of eth_getProof's storageProof list."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    key: str = Field(..., description="Storage slot (quantity or 32-byte hex)")
    value: str = Field(..., description="Slot value (quantity)")
    proof: list[str] = Field(default_factory=list, description="RLP nodes, root first")

    @field_validator("key")
    @classmethod
    def _validate_key(cls, v: str) -> str:
        slot = _slot_to_bytes(v)
        if len(slot) > SLOT_LENGTH:
            raise ValueError(f"Storage key must be at most {SLOT_LENGTH} bytes, got {len(slot)}")
        return v

    @field_validator("value")
    @classmethod
    def _validate_value(cls, v: str) -> str:
        return _check_quantity(v)

    @field_validator("proof")
    @classmethod
    def _validate_proof(cls, v: list[str]) -> list[str]:
        return [_check_hex(node) for node in v]

    @property
    def slot_bytes(self) -> bytes:
        """Slot as big-endian bytes; accepts both padded and quantity forms."""
        return _slot_to_bytes(self.key)

    @property
    def value_int(self) -> int:
        return from_quantity(self.value)

    @property
    def proof_nodes(self) -> list[bytes]:
        return [from_hex(node) for node in self.proof]


class AccountProof(BaseModel):
    """Result of eth_getProof (EIP-1186)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    address: str = Field(..., description="20-byte account address")
    account_proof: list[str] = Field(..., alias="accountProof")
    balance: str = Field(...)
    code_hash: str = Field(..., alias="codeHash")
    nonce: str = Field(...)
    storage_hash: str = Field(..., alias="storageHash")
    storage_proof: list[StorageProof] = Field(default_factory=list, alias="storageProof")

    @field_validator("address")
    @classmethod
    def _validate_address(cls, v: str) -> str:
        if len(from_hex(v)) != 20:
            raise ValueError(f"expected a 20-byte address, got {v}")
        return v

    @field_validator("code_hash", "storage_hash")
    @classmethod
    def _validate_hash(cls, v: str) -> str:
        if len(from_hex(v)) != 32:
            raise ValueError(f"expected a 32-byte hash, got {v}")
        return v

    @field_validator("balance", "nonce")
    @classmethod
    def _validate_quantity(cls, v: str) -> str:
        return _check_quantity(v)

    @field_validator("account_proof")
    @classmethod
    def _validate_proof(cls, v: list[str]) -> list[str]:
        return [_check_hex(node) for node in v]

    @property
    def address_bytes(self) -> bytes:
        return from_hex(self.address)

    @property
    def proof_nodes(self) -> list[bytes]:
        return [from_hex(node) for node in self.account_proof]

    @property
    def nonce_int(self) -> int:
        return from_quantity(self.nonce)

    @property
    def balance_int(self) -> int:
        return from_quantity(self.balance)

    @property
    def storage_hash_bytes(self) -> bytes:
        return from_hex(self.storage_hash)

    @property
    def code_hash_bytes(self) -> bytes:
        return from_hex(self.code_hash)


class ProofRequest(BaseModel):
    """
    Verification request for an on-chain MPT verifier.

    key is the nibble-expanded trie key (one byte per nibble) so a
    verifier can index it with key_index; proof holds the RLP node bytes.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    expected_root: str = Field(..., alias="expectedRoot")
    key: str = Field(...)
    proof: list[str] = Field(...)
    key_index: int = Field(default=0, alias="keyIndex", ge=0)
    proof_index: int = Field(default=0, alias="proofIndex", ge=0)
    expected_value: str | None = Field(
        default=None,
        alias="expectedValue",
        description="RLP account value proven at key; None when the key is absent",
    )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
