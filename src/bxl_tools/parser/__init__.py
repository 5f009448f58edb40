"""Tokenizer and recursive-descent parser for BXL text."""

from .parser import BxlParser, parse_text
from .tokenizer import DEFAULT_PATTERNS, PatternTable, Token, Tokenizer, TokenKind

__all__ = [
    "BxlParser",
    "parse_text",
    "DEFAULT_PATTERNS",
    "PatternTable",
    "Token",
    "Tokenizer",
    "TokenKind",
]
