"""Tests for bxl_tools.core.huffman module."""

import random

import pytest

from bxl_tools.core.huffman import HEADER_SIZE, LEAF_LEVEL, build_tree, decode, uncompressed_size
from bxl_tools.exceptions import FileFormatError

from conftest import LIBRARY_TEXT, encode_bxl


def _code_of(root, symbol):
    """Walk the tree and return the bit string leading to a symbol."""
    stack = [(root, "")]
    while stack:
        node, path = stack.pop()
        if node.is_leaf:
            if node.symbol == symbol:
                return path
            continue
        stack.append((node.left, path + "1"))
        stack.append((node.right, path + "0"))
    return None


class TestUncompressedSize:
    """Tests for the length header."""

    def test_lowest_bit_first(self):
        """The most significant bit of byte 0 is bit 0 of the length."""
        assert uncompressed_size(bytes([0x80, 0, 0, 0])) == 1

    def test_second_byte(self):
        """Byte 1 supplies bits 8 to 15."""
        assert uncompressed_size(bytes([0, 0x80, 0, 0])) == 256

    def test_bits_are_reversed(self):
        """The least significant bit of byte 0 is bit 7 of the length."""
        assert uncompressed_size(bytes([0x01, 0, 0, 0])) == 128

    def test_ignores_payload(self):
        """Only the first four bytes are read."""
        assert uncompressed_size(bytes([0x40, 0, 0, 0, 0xFF, 0xFF])) == 2

    def test_truncated_header(self):
        """Fewer than four bytes is a format error."""
        with pytest.raises(FileFormatError, match="truncated"):
            uncompressed_size(bytes([0x80, 0]))


class TestBuildTree:
    """Tests for the initial tree."""

    def test_initial_codes_are_byte_values(self):
        """Before any update a symbol's code is its own 8-bit value."""
        root = build_tree()
        assert _code_of(root, 0) == "00000000"
        assert _code_of(root, 0x41) == "01000001"
        assert _code_of(root, 0xFF) == "11111111"

    def test_all_weights_zero(self):
        """Every node starts with weight 0."""
        root = build_tree()
        assert root.weight == 0
        assert root.right.weight == 0
        assert root.parent is None

    def test_leaves_at_leaf_level(self):
        """Leaves sit on the last level and have no children."""
        node = build_tree()
        while not node.is_leaf:
            node = node.right
        assert node.level == LEAF_LEVEL
        assert node.left is None and node.right is None


class TestDecode:
    """Tests for decoding binary containers."""

    def test_decode_single_character(self):
        """A one-character payload decodes with the initial tree."""
        assert decode(bytes([0x80, 0, 0, 0, 0x82])) == "A"

    def test_decode_two_characters(self):
        """The second symbol is read from the updated tree."""
        assert decode(bytes([0x40, 0, 0, 0, 0x82, 0x30])) == "AB"

    def test_repeated_symbol_gets_shorter_code(self):
        """A symbol that keeps repeating moves towards the root."""
        assert decode(bytes([0xC0, 0, 0, 0, 0x82, 0x00, 0x00])) == "AAA"

    def test_stops_at_header_length(self):
        """Decoding ends once the header's length is reached."""
        assert decode(bytes([0x80, 0, 0, 0, 0x82, 0x00, 0x00])) == "A"

    def test_short_input_is_not_an_error(self):
        """Running out of input ends decoding with what was produced."""
        assert decode(bytes([0x50, 0, 0, 0, 0x82, 0x00, 0x00])) == "A" * 7

    def test_header_only(self):
        """No payload decodes to an empty string."""
        assert decode(bytes(HEADER_SIZE)) == ""

    def test_empty_length_with_payload(self):
        """A zero length decodes nothing even when bytes follow."""
        assert decode(bytes([0, 0, 0, 0, 0x82])) == ""

    def test_truncated_header(self):
        """Decoding a too-short container raises FileFormatError."""
        with pytest.raises(FileFormatError):
            decode(b"\x80")


class TestRoundTrip:
    """Decoding containers built with the adaptive encoder."""

    def test_encoder_agrees_with_hand_built_fixture(self):
        """The encoder produces the same bits as the hand-derived single character."""
        assert encode_bxl(b"A") == bytes([0x80, 0, 0, 0, 0x82, 0x00])

    def test_symbol_moves_up_after_one_use(self):
        """One occurrence is enough to shorten a symbol's code."""
        root = build_tree()
        leaf = root
        for bit in _code_of(root, 0x41):
            leaf = leaf.left if bit == "1" else leaf.right
        leaf.weight += 1
        leaf.update_tree()
        assert len(_code_of(root, 0x41)) < 8

    @pytest.mark.parametrize("size", [1, 17, 300, 5_000, 40_000])
    def test_library_text(self, size):
        """Library text of varying length survives compression."""
        text = (LIBRARY_TEXT * (size // len(LIBRARY_TEXT) + 1))[:size]
        data = encode_bxl(text.encode("latin-1"))
        assert uncompressed_size(data) == size
        assert decode(data) == text

    def test_random_latin1(self):
        """Every byte value decodes to the matching code point."""
        rng = random.Random(20)
        data = b"#" + bytes(rng.randrange(256) for _ in range(20_000))
        assert decode(encode_bxl(data)) == data.decode("latin-1")

    def test_empty(self):
        """An empty payload round-trips."""
        assert decode(encode_bxl(b"")) == ""

    def test_truncated_payload_keeps_prefix(self):
        """Cutting the payload short yields a prefix of the text."""
        text = LIBRARY_TEXT * 3
        data = encode_bxl(text.encode("latin-1"))
        partial = decode(data[: len(data) // 2])
        assert 0 < len(partial) < len(text)
        assert text.startswith(partial)
