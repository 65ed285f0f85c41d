"""
Module 04 - Nibble Path Unit Tests
Tests for core/trie/nibbles.py
"""
import pytest

from core.schemas.errors import MalformedNodeException
from core.trie.nibbles import (
    decode_compact_path,
    encode_compact_path,
    key_to_nibbles,
    nibbles_to_key,
)


class TestKeyNibbles:

    def test_high_nibble_first(self):
        assert key_to_nibbles(b"\x12\xab") == [1, 2, 10, 11]

    def test_empty_key(self):
        assert key_to_nibbles(b"") == []

    def test_round_trip(self):
        key = bytes(range(0, 256, 7))
        assert nibbles_to_key(key_to_nibbles(key)) == key

    def test_odd_length_rejected(self):
        with pytest.raises(ValueError, match="odd"):
            nibbles_to_key([1, 2, 3])


class TestCompactPath:
    """Hex-prefix vectors from the Ethereum yellow paper / wiki."""

    @pytest.mark.parametrize("nibbles,is_leaf,expected", [
        ([1, 2, 3, 4, 5], False, "112345"),
        ([0, 1, 2, 3, 4, 5], False, "00012345"),
        ([0, 0xF, 1, 0xC, 0xB, 8], True, "200f1cb8"),
        ([0xF, 1, 0xC, 0xB, 8], True, "3f1cb8"),
        ([], False, "00"),
        ([], True, "20"),
        ([7], True, "37"),
    ])
    def test_encode(self, nibbles, is_leaf, expected):
        assert encode_compact_path(nibbles, is_leaf).hex() == expected

    @pytest.mark.parametrize("encoded,nibbles,is_leaf", [
        ("112345", [1, 2, 3, 4, 5], False),
        ("00012345", [0, 1, 2, 3, 4, 5], False),
        ("200f1cb8", [0, 0xF, 1, 0xC, 0xB, 8], True),
        ("3f1cb8", [0xF, 1, 0xC, 0xB, 8], True),
        ("20", [], True),
    ])
    def test_decode(self, encoded, nibbles, is_leaf):
        assert decode_compact_path(bytes.fromhex(encoded)) == (nibbles, is_leaf)

    def test_empty_rejected(self):
        with pytest.raises(MalformedNodeException):
            decode_compact_path(b"")

    @pytest.mark.parametrize("flag_byte", [0x40, 0x5A, 0xF0])
    def test_unknown_flag_rejected(self, flag_byte):
        with pytest.raises(MalformedNodeException, match="flag"):
            decode_compact_path(bytes([flag_byte, 0x12]))

    @pytest.mark.parametrize("first_byte", [0x01, 0x2F])
    def test_nonzero_padding_rejected(self, first_byte):
        with pytest.raises(MalformedNodeException, match="padding"):
            decode_compact_path(bytes([first_byte, 0x34]))
