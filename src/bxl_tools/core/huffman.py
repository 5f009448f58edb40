"""
Adaptive Huffman decoder for binary BXL containers.

A binary ``.bxl`` file is a 4-byte length header followed by a bit stream coded
against a 256-leaf tree that reorders itself as symbols are decoded. The text it
decodes to is the same grammar found in ``.xlr`` files.

Example::

    from bxl_tools.core.huffman import decode

    text = decode(Path("part.bxl").read_bytes())
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Optional

from bxl_tools.exceptions import FileFormatError

logger = logging.getLogger(__name__)

HEADER_SIZE = 4

# Leaves sit at this level; levels 0-7 hold internal nodes
LEAF_LEVEL = 8


class HuffmanNode:
    """Node of the adaptive decoding tree."""

    __slots__ = ("parent", "left", "right", "level", "symbol", "weight")

    def __init__(self, parent: Optional[HuffmanNode], level: int, symbol: int = 0):
        self.parent = parent
        self.left: Optional[HuffmanNode] = None
        self.right: Optional[HuffmanNode] = None
        self.level = level
        self.symbol = symbol
        self.weight = 0

    @property
    def is_leaf(self) -> bool:
        return self.level >= LEAF_LEVEL

    def _replace_child(self, old: HuffmanNode, new: HuffmanNode) -> None:
        new.parent = self
        if self.right is old:
            self.right = new
        elif self.left is old:
            self.left = new

    def _needs_swapping(self) -> bool:
        parent = self.parent
        return parent is not None and parent.parent is not None and self.weight > parent.weight

    def update_tree(self) -> None:
        """Bubble this node towards the root while it outweighs its parent.

        Each step swaps the node into its parent's slot, the parent into the
        uncle's slot and the uncle into the node's old slot, then re-checks from
        both the node and the former grandparent.
        """
        while self._needs_swapping():
            parent = self.parent
            grandparent = parent.parent
            uncle = grandparent.left if grandparent.right is parent else grandparent.right

            grandparent._replace_child(parent, self)
            grandparent._replace_child(uncle, parent)
            parent._replace_child(self, uncle)

            parent.weight = parent.right.weight + parent.left.weight
            grandparent.weight = self.weight + parent.weight

            parent.update_tree()
            grandparent.update_tree()


def build_tree() -> HuffmanNode:
    """Build the initial tree with all weights at zero.

    Nodes are created depth first, completing a node's right subtree before its
    left one, and leaf symbols are numbered in creation order. The initial code
    of a symbol is therefore its own 8-bit value, where a 1 bit means "left".
    """
    symbols = iter(range(256))
    root = HuffmanNode(None, 0)
    _fill(root, symbols)
    return root


def _fill(node: HuffmanNode, symbols: Iterator[int]) -> None:
    level = node.level + 1
    if level == LEAF_LEVEL:
        node.right = HuffmanNode(node, level, next(symbols))
        node.left = HuffmanNode(node, level, next(symbols))
        return
    node.right = HuffmanNode(node, level)
    _fill(node.right, symbols)
    node.left = HuffmanNode(node, level)
    _fill(node.left, symbols)


def uncompressed_size(data: bytes) -> int:
    """Read the decoded length from the 4-byte header.

    Each header byte is bit-reversed and byte 0 supplies the lowest 8 bits.

    Raises:
        FileFormatError: If fewer than 4 bytes are available
    """
    if len(data) < HEADER_SIZE:
        raise FileFormatError(
            "Binary BXL header is truncated",
            context={"size": len(data), "expected": HEADER_SIZE},
            suggestions=["Check that the file is a compressed .bxl and not decoded text"],
        )

    size = 0
    mask = 0
    for byte in data[:HEADER_SIZE]:
        for bit in range(7, -1, -1):
            if byte & (1 << bit):
                size |= 1 << mask
            mask += 1
    return size


class _BitReader:
    """MSB-first bit reader over the payload that follows the header.

    The reader starts positioned on bit 0 of an empty byte, so the first bit
    it yields is always 0 and no input is consumed until the second read.
    """

    def __init__(self, data: bytes, offset: int):
        self._data = data
        self._index = offset
        self._byte = 0
        self._bit = 0

    @property
    def has_bytes(self) -> bool:
        """True while there are input bytes left to fetch."""
        return self._index < len(self._data)

    def read_bit(self) -> Optional[int]:
        """Return the next bit, or None once the input is exhausted."""
        if self._bit < 0:
            if self._index >= len(self._data):
                return None
            self._byte = self._data[self._index]
            self._index += 1
            self._bit = 7
        value = (self._byte >> self._bit) & 1
        self._bit -= 1
        return value


def decode(data: bytes) -> str:
    """Decode a binary BXL container to text.

    Decoding stops when the header's length is reached or when the last input
    byte has been fetched, whichever happens first. A short result is not an
    error.

    Args:
        data: Raw file contents including the 4-byte header

    Returns:
        Decoded text, one character per byte value

    Raises:
        FileFormatError: If the header is truncated
    """
    size = uncompressed_size(data)
    root = build_tree()
    reader = _BitReader(data, HEADER_SIZE)
    output: list[str] = []

    while reader.has_bytes and len(output) != size:
        node = root
        while not node.is_leaf:
            bit = reader.read_bit()
            if bit is None:
                break
            node = node.left if bit else node.right
        else:
            output.append(chr(node.symbol))
            node.weight += 1
            node.update_tree()
            continue
        break

    if len(output) < size:
        logger.debug(f"Input exhausted after {len(output)} of {size} characters")
    return "".join(output)
