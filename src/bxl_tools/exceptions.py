"""
Custom exception hierarchy for bxl-tools.

Every error carries a message plus optional context (file, line, column) and
suggestions, which are rendered as indented blocks by ``str()``.

Parsing itself never lets these escape: tokenizer and syntax failures are caught by
``BxlParser.execute`` and recorded in the parse log. They surface to callers only at
the file boundary (missing file, truncated binary header) and in configuration.

Example::

    from bxl_tools.exceptions import FileFormatError

    raise FileFormatError(
        "Binary BXL header is truncated",
        context={"file": "part.bxl", "size": 2},
        suggestions=["Check that the file was downloaded completely"]
    )
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class BxlToolsError(Exception):
    """
    Base exception for all bxl-tools errors.

    Provides consistent formatting with context and suggestions.

    Attributes:
        context: Dictionary of contextual information (file, line, etc.)
        suggestions: List of actionable suggestions for fixing the error
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context and suggestions."""
        parts = [self.message]

        if self.context:
            parts.append("\n\nContext:")
            for key, value in self.context.items():
                parts.append(f"\n  {key}: {value}")

        if self.suggestions:
            parts.append("\n\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"\n  - {suggestion}")

        return "".join(parts)

    def __str__(self) -> str:
        return self._format_message()


class ParseError(BxlToolsError):
    """
    BXL text could not be parsed at some position.

    Base class for the two fatal parse conditions. Both carry the line and
    column of the offending token so the parser can report them.

    Example::

        raise ParseError(
            "Unexpected token",
            context={"file": "part.xlr", "line": 42, "column": 15},
        )
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        file_path: Optional[Union[str, Path]] = None,
    ):
        # Build context from convenience parameters
        ctx = context or {}
        if file_path and "file" not in ctx:
            ctx["file"] = str(file_path)
        if line is not None and "line" not in ctx:
            ctx["line"] = line
        if column is not None and "column" not in ctx:
            ctx["column"] = column

        self.line = line
        self.column = column
        super().__init__(message, ctx, suggestions)


class TokenizationError(ParseError):
    """
    No token pattern matched the input at the current position.

    Always fatal to the enclosing parse.
    """

    pass


class SyntaxViolation(ParseError):
    """
    A required keyword, punctuation or literal was not found.

    Raised by the parser after the violation has been logged; it unwinds
    straight to ``BxlParser.execute``, which keeps the partial document.
    """

    pass


class FileFormatError(BxlToolsError):
    """
    File format not recognized or corrupted.

    Raised when a binary BXL container is too short to hold its length header.

    Example::

        raise FileFormatError(
            "Binary BXL header is truncated",
            context={"file": "part.bxl", "size": 3},
            suggestions=["Use --type text if the file is already decoded"]
        )
    """

    pass


class FileNotFoundError(BxlToolsError):
    """
    An input file does not exist.

    Shadows the builtin inside this package so callers can catch every
    bxl-tools failure through ``BxlToolsError``.

    Example::

        raise FileNotFoundError(
            "BXL file not found",
            context={"file": "missing.bxl"},
            suggestions=["Check that the file path is correct"]
        )
    """

    pass


class ConfigurationError(BxlToolsError):
    """
    Configuration or settings error.

    Raised when a configuration value is present but not one of the accepted choices.

    Example::

        raise ConfigurationError(
            "Invalid file type",
            context={"file_type": "zip", "available": ["auto", "binary", "text"]},
            suggestions=["Use one of the available file types"]
        )
    """

    pass


__all__ = [
    "BxlToolsError",
    "ParseError",
    "TokenizationError",
    "SyntaxViolation",
    "FileFormatError",
    "FileNotFoundError",
    "ConfigurationError",
]
