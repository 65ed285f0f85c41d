"""
trieproof CLI

Command-line interface for Merkle-Patricia-Trie proof verification.

Usage:
    python -m trieproof_cli verify proof.json
    python -m trieproof_cli account 0x97aEabe66E1e126358DF8b977D0F615A62173448 --out request.json
    python -m trieproof_cli config --show
"""

__version__ = "0.1.0"
