"""
File I/O entry points for BXL and XLR files.

``.xlr`` files are plain BXL text. Every other extension (normally ``.bxl``)
is treated as the compressed binary container unless a file type is forced.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Optional

from bxl_tools.core.huffman import decode
from bxl_tools.core.logs import Logs
from bxl_tools.exceptions import FileNotFoundError as BxlFileNotFoundError
from bxl_tools.parser.parser import parse_text
from bxl_tools.progress import ProgressCallback
from bxl_tools.schema.document import BxlDocument

logger = logging.getLogger(__name__)

TEXT_EXTENSION = ".xlr"


class BxlFileType(Enum):
    """How a file's contents are interpreted."""

    FROM_EXTENSION = "auto"
    BINARY = "binary"
    TEXT = "text"

    @classmethod
    def from_string(cls, s: str) -> BxlFileType:
        """Parse a file type name ("auto", "binary", "text"), case-insensitive."""
        wanted = s.strip().lower()
        for member in cls:
            if member.value == wanted or member.name.lower() == wanted:
                return member
        raise ValueError(f"Unknown file type: {s}")


def is_binary(path: str | Path, file_type: BxlFileType = BxlFileType.FROM_EXTENSION) -> bool:
    """Return True if the file should go through the binary decoder."""
    if file_type is BxlFileType.BINARY:
        return True
    if file_type is BxlFileType.TEXT:
        return False
    return Path(path).suffix.lower() != TEXT_EXTENSION


def decode_bxl(data: bytes) -> str:
    """Decode a binary BXL container to its text."""
    return decode(data)


def decode_file(
    path: str | Path, file_type: BxlFileType = BxlFileType.FROM_EXTENSION
) -> str:
    """
    Load the text of a BXL or XLR file.

    Args:
        path: Path to the file
        file_type: Force binary or text interpretation

    Returns:
        Decoded BXL text

    Raises:
        FileNotFoundError: If the file doesn't exist
        FileFormatError: If a binary file is too short to hold its header
    """
    path = Path(path)
    if not path.exists():
        raise BxlFileNotFoundError(
            "BXL file not found",
            context={"file": str(path)},
            suggestions=[
                "Check that the file path is correct",
                "Ensure the file has a .bxl or .xlr extension",
            ],
        )

    if is_binary(path, file_type):
        logger.debug(f"Decoding binary BXL file {path}")
        return decode_bxl(path.read_bytes())
    return path.read_text(encoding="utf-8", errors="replace")


def read_text(
    text: str,
    reference_name: str = "",
    progress: Optional[ProgressCallback] = None,
) -> tuple[BxlDocument, Logs]:
    """
    Parse BXL text.

    Args:
        text: Decoded BXL text
        reference_name: File name used in diagnostics
        progress: Optional callback receiving percentages from 0 to 100

    Returns:
        The document and the diagnostics produced while parsing it
    """
    return parse_text(text, reference_name, progress)


def read_file(
    path: str | Path,
    file_type: BxlFileType = BxlFileType.FROM_EXTENSION,
    progress: Optional[ProgressCallback] = None,
) -> tuple[BxlDocument, Logs]:
    """
    Load and parse a BXL or XLR file.

    Example::

        doc, logs = read_file("LM358.bxl")
        if not logs.has_errors:
            print([c.name for c in doc.components])
    """
    path = Path(path)
    text = decode_file(path, file_type)
    return read_text(text, str(path), progress)
