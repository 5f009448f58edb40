"""
bxl-tools: Python tools for BXL and XLR CAD interchange files.

BXL files carry component libraries (footprints, schematic symbols and the
components tying them together) and, for full design exports, board and
schematic instance data. A ``.bxl`` file is compressed with an adaptive Huffman
code; ``.xlr`` files hold the same grammar as plain text.

Modules:
    core: Binary decoding, diagnostics and file entry points
    parser: Tokenizer and recursive-descent parser
    schema: Data models for library and instance data
    progress: Progress callbacks
    config: Configuration file loading

Quick Start::

    from bxl_tools import read_file

    doc, logs = read_file("LM358.bxl")
    for entry in logs.errors:
        print(entry.message)

    component = doc.get_component("LM358")
    footprint = doc.get_footprint(component.pattern_name)
"""

__version__ = "0.1.0"

# Core
from bxl_tools.core.bxl_file import (
    BxlFileType,
    decode_bxl,
    decode_file,
    is_binary,
    read_file,
    read_text,
)
from bxl_tools.core.logs import LogEntry, Logs, LogSeverity

# Parser
from bxl_tools.parser import BxlParser

# Schema models
from bxl_tools.schema import BxlDocument, Component, Pattern, Point, Symbol

# Exceptions
from bxl_tools.exceptions import (
    BxlToolsError,
    FileFormatError,
    ParseError,
    SyntaxViolation,
    TokenizationError,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "BxlFileType",
    "decode_bxl",
    "decode_file",
    "is_binary",
    "read_file",
    "read_text",
    "LogEntry",
    "Logs",
    "LogSeverity",
    # Parser
    "BxlParser",
    # Schema
    "BxlDocument",
    "Component",
    "Pattern",
    "Point",
    "Symbol",
    # Exceptions
    "BxlToolsError",
    "FileFormatError",
    "ParseError",
    "SyntaxViolation",
    "TokenizationError",
]
