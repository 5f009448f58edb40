"""BXL core utilities: binary decoding, diagnostics and file I/O."""

from .bxl_file import BxlFileType, decode_bxl, decode_file, is_binary, read_file, read_text
from .huffman import decode, uncompressed_size
from .logs import LogEntry, Logs, LogSeverity

__all__ = [
    "BxlFileType",
    "decode",
    "decode_bxl",
    "decode_file",
    "is_binary",
    "read_file",
    "read_text",
    "uncompressed_size",
    "LogEntry",
    "Logs",
    "LogSeverity",
]
