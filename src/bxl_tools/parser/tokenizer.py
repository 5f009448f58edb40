"""
Tokenizer for BXL text.

Produces a lookahead-1 stream of typed tokens. Keywords are only recognized at
parenthesis depth 0, so property names and values inside ``( ... )`` can reuse
keyword spellings. Depth is reset at every newline so a line with unbalanced
parentheses cannot disable keyword recognition for the rest of the file.

Example::

    from bxl_tools.parser.tokenizer import Tokenizer, TokenKind

    tokenizer = Tokenizer('Pad (Number 1) (PinName "1")')
    while tokenizer.kind is not TokenKind.END_OF_INPUT:
        print(tokenizer.kind, tokenizer.value)
        tokenizer.advance()
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum, auto
from types import MappingProxyType
from typing import Any, NamedTuple, Optional

from bxl_tools.exceptions import TokenizationError


class TokenKind(Enum):
    """Kinds of tokens produced by the tokenizer."""

    NONE = auto()
    END_OF_INPUT = auto()

    # Sections and section-level keywords
    LAYER_DATA = auto()
    LAYER = auto()
    NAME = auto()
    LAYER_TYPE = auto()
    BOARD_LAYER_TYPE = auto()
    LAYER_ORDER = auto()
    TEXT_STYLES = auto()
    PAD_STACKS = auto()
    PATTERNS = auto()
    MODELS_3D = auto()
    SYMBOLS = auto()
    COMPONENTS = auto()
    SUPER_COMPONENTS = auto()
    ATTACHED_FILES = auto()
    WORKSPACE_SIZE = auto()
    COMPONENT_INSTANCES = auto()
    VIA_INSTANCES = auto()
    VIA = auto()
    NETS = auto()
    NET = auto()
    SCHEMATIC_COMPONENT_INSTANCES = auto()
    SCHEMATIC_NETS = auto()
    SCHEMATIC_DATA = auto()
    UNITS = auto()
    SHEET = auto()
    WORKSPACE = auto()
    SHEETS = auto()
    NUMBER = auto()
    SHOW_BORDER = auto()
    BORDER_NAME = auto()
    SCALE_FACTOR = auto()
    OFFSET = auto()
    WIRE = auto()
    PORT = auto()
    JUNCTION = auto()
    COPPERPOUR = auto()
    LAYERS = auto()
    LAYER_NUMBER = auto()
    LAYER_TECHNICAL_DATA = auto()
    END_OF_FILE = auto()

    # Begin/end pairs
    PADSTACK = auto()
    END_PADSTACK = auto()
    PATTERN = auto()
    END_PATTERN = auto()
    SYMBOL = auto()
    END_SYMBOL = auto()
    COMPONENT = auto()
    END_COMPONENT = auto()
    DATA = auto()
    END_DATA = auto()
    COMP_PINS = auto()
    END_COMP_PINS = auto()
    COMP_DATA = auto()
    END_COMP_DATA = auto()
    ATTACHED_SYMBOLS = auto()
    END_ATTACHED_SYMBOLS = auto()
    PIN_MAP = auto()
    END_PIN_MAP = auto()

    # Item and header keywords
    TEXT_STYLE = auto()
    ORIGIN_POINT = auto()
    PICK_POINT = auto()
    GLUE_POINT = auto()
    PINS_RENAMED = auto()
    PATTERN_NAME = auto()
    ALTERNATE_PATTERN = auto()
    ORIGINAL_NAME = auto()
    EDITED = auto()
    SOURCE_LIBRARY = auto()
    REF_DES_PREFIX = auto()
    NUMBER_OF_PINS = auto()
    NUM_PARTS = auto()
    COMPOSITION = auto()
    ALT_IEEE = auto()
    ALT_DEMORGAN = auto()
    PATTERN_PINS = auto()
    REVISION_LEVEL = auto()
    REVISION_NOTE = auto()
    SHAPES = auto()
    PAD_SHAPE = auto()
    PAD = auto()
    DELETED_PAD = auto()
    POLY = auto()
    POLY_KEEPOUT = auto()
    LINE = auto()
    ARC = auto()
    TEXT = auto()
    PIN = auto()
    PIN_DES = auto()
    PIN_NAME = auto()
    ATTRIBUTE = auto()
    WIZARD = auto()
    TEMPLATE_DATA = auto()
    COMP_PIN = auto()
    ATTACHED_SYMBOL = auto()
    RELATED_FILES = auto()
    PAD_NUM = auto()

    # Punctuation
    PAREN_L = auto()
    PAREN_R = auto()
    COMMA = auto()
    COLON = auto()
    SLASH = auto()

    # Literals
    LIT_DECIMAL = auto()
    LIT_INTEGER = auto()
    LIT_BOOLEAN = auto()
    LIT_STRING = auto()
    IDENTIFIER = auto()
    COMMENT = auto()


K = TokenKind

# Keyword lexemes in match priority order
KEYWORDS: tuple[tuple[TokenKind, str], ...] = (
    (K.LAYER_DATA, "LayerData"),
    (K.LAYER, "Layer"),
    (K.NAME, "Name"),
    (K.LAYER_TYPE, "LayerType"),
    (K.BOARD_LAYER_TYPE, "BoardLayerType"),
    (K.LAYER_ORDER, "LayerOrder"),
    (K.TEXT_STYLES, "TextStyles"),
    (K.PAD_STACKS, "PadStacks"),
    (K.PATTERNS, "Patterns"),
    (K.MODELS_3D, "3DModels"),
    (K.SYMBOLS, "Symbols"),
    (K.COMPONENTS, "Components"),
    (K.SUPER_COMPONENTS, "SuperComponents"),
    (K.ATTACHED_FILES, "AttachedFiles"),
    (K.WORKSPACE_SIZE, "WorkSpaceSize"),
    (K.COMPONENT_INSTANCES, "ComponentInstances"),
    (K.VIA_INSTANCES, "ViaInstances"),
    (K.VIA, "Via"),
    (K.NETS, "Nets"),
    (K.NET, "Net"),
    (K.SCHEMATIC_COMPONENT_INSTANCES, "SchematicComponentInstances"),
    (K.SCHEMATIC_NETS, "SchematicNets"),
    (K.SCHEMATIC_DATA, "SchematicData"),
    (K.UNITS, "Units"),
    (K.SHEET, "Sheet"),
    (K.WORKSPACE, "Workspace"),
    (K.SHEETS, "Sheets"),
    (K.NUMBER, "Number"),
    (K.SHOW_BORDER, "ShowBorder"),
    (K.BORDER_NAME, "BorderName"),
    (K.SCALE_FACTOR, "ScaleFactor"),
    (K.OFFSET, "OffSet"),
    (K.WIRE, "Wire"),
    (K.PORT, "Port"),
    (K.JUNCTION, "Junction"),
    (K.COPPERPOUR, "Copperpour"),
    (K.LAYERS, "Layers"),
    (K.LAYER_NUMBER, "LayerNumber"),
    (K.LAYER_TECHNICAL_DATA, "LayerTechnicalData"),
    (K.END_OF_FILE, "End of File"),
    (K.PADSTACK, "PadStack"),
    (K.END_PADSTACK, "EndPadStack"),
    (K.PATTERN, "Pattern"),
    (K.END_PATTERN, "EndPattern"),
    (K.SYMBOL, "Symbol"),
    (K.END_SYMBOL, "EndSymbol"),
    (K.COMPONENT, "Component"),
    (K.END_COMPONENT, "EndComponent"),
    (K.DATA, "Data"),
    (K.END_DATA, "EndData"),
    (K.COMP_PINS, "CompPins"),
    (K.END_COMP_PINS, "EndCompPins"),
    (K.COMP_DATA, "CompData"),
    (K.END_COMP_DATA, "EndCompData"),
    (K.ATTACHED_SYMBOLS, "AttachedSymbols"),
    (K.END_ATTACHED_SYMBOLS, "EndAttachedSymbols"),
    (K.PIN_MAP, "PinMap"),
    (K.END_PIN_MAP, "EndPinMap"),
    (K.TEXT_STYLE, "TextStyle"),
    (K.ORIGIN_POINT, "OriginPoint"),
    (K.PICK_POINT, "PickPoint"),
    (K.GLUE_POINT, "GluePoint"),
    (K.PINS_RENAMED, "PinsRenamed"),
    (K.PATTERN_NAME, "PatternName"),
    (K.ALTERNATE_PATTERN, "AlternatePattern"),
    (K.ORIGINAL_NAME, "OriginalName"),
    (K.EDITED, "Edited"),
    (K.SOURCE_LIBRARY, "SourceLibrary"),
    (K.REF_DES_PREFIX, "RefDesPrefix"),
    (K.NUMBER_OF_PINS, "NumberofPins"),
    (K.NUM_PARTS, "NumParts"),
    (K.COMPOSITION, "Composition"),
    (K.ALT_IEEE, "AltIEEE"),
    (K.ALT_DEMORGAN, "AltDeMorgan"),
    (K.PATTERN_PINS, "PatternPins"),
    (K.REVISION_LEVEL, "Revision Level"),
    (K.REVISION_NOTE, "Revision Note"),
    (K.SHAPES, "Shapes"),
    (K.PAD_SHAPE, "PadShape"),
    (K.PAD, "Pad"),
    (K.DELETED_PAD, "Deletedpad"),
    (K.POLY, "Poly"),
    (K.POLY_KEEPOUT, "Polykeepout"),
    (K.LINE, "Line"),
    (K.ARC, "Arc"),
    (K.TEXT, "Text"),
    (K.PIN, "Pin"),
    (K.PIN_DES, "PinDes"),
    (K.PIN_NAME, "PinName"),
    (K.ATTRIBUTE, "Attribute"),
    (K.WIZARD, "Wizard"),
    (K.TEMPLATE_DATA, "Templatedata"),
    (K.COMP_PIN, "CompPin"),
    (K.ATTACHED_SYMBOL, "AttachedSymbol"),
    (K.RELATED_FILES, "RelatedFiles"),
    (K.PAD_NUM, "PadNum"),
)

# Lexeme spelling for each keyword kind, used in diagnostics
KEYWORD_LEXEMES: Mapping[TokenKind, str] = MappingProxyType(dict(KEYWORDS))


def _to_boolean(lexeme: str) -> bool:
    return lexeme.lower() == "true"


class TokenMatcher(NamedTuple):
    """A compiled pattern and the converter for the lexeme it matches."""

    kind: TokenKind
    regex: re.Pattern
    convert: Optional[Callable[[str], Any]] = None


# Order matters: the first matcher to succeed wins
GENERAL_PATTERNS: tuple[tuple[TokenKind, str, Optional[Callable[[str], Any]]], ...] = (
    (K.PAREN_L, r"\(", None),
    (K.PAREN_R, r"\)", None),
    (K.COMMA, r",", None),
    (K.COLON, r":", None),
    (K.SLASH, r"/", None),
    (K.LIT_DECIMAL, r"[-+]?\d*\.\d+(?:e-\d+)?\b", float),
    (K.LIT_INTEGER, r"[-+]?\d+\b", int),
    (K.LIT_BOOLEAN, r"(?:True|False)\b", _to_boolean),
    # Some files wrap strings in doubled quotes
    (K.LIT_STRING, r'"".*?""', lambda lexeme: lexeme[2:-2]),
    # Plain strings, also allowing inch marks such as "0.180" (4.57mm)" inside
    (
        K.LIT_STRING,
        r'"(?:\d"\s*[(,]?\s*\d+(?:\.\d+)?mm|[^"\n])*"',
        lambda lexeme: lexeme[1:-1],
    ),
    # These two pin types are written with a space
    (K.IDENTIFIER, r"Open Collector|Open Emitter", None),
    (K.IDENTIFIER, r"[\w-]+", None),
    (K.COMMENT, r"#[^\n]*(?:\n|\Z)", None),
)


@dataclass(frozen=True)
class PatternTable:
    """Compiled keyword and general matchers shared by every tokenizer.

    Keyword matchers are indexed by their lowercased first character so that
    only plausible keywords are attempted at a given position.
    """

    keywords: Mapping[str, tuple[TokenMatcher, ...]]
    general: tuple[TokenMatcher, ...]

    @classmethod
    def build(cls) -> PatternTable:
        index: dict[str, list[TokenMatcher]] = {}
        for kind, lexeme in KEYWORDS:
            regex = re.compile(re.escape(lexeme) + r"\b", re.IGNORECASE)
            index.setdefault(lexeme[0].lower(), []).append(TokenMatcher(kind, regex))

        general = tuple(
            TokenMatcher(kind, re.compile(pattern, re.IGNORECASE), convert)
            for kind, pattern, convert in GENERAL_PATTERNS
        )
        keywords = MappingProxyType({key: tuple(matchers) for key, matchers in index.items()})
        return cls(keywords=keywords, general=general)

    def keywords_for(self, char: str) -> tuple[TokenMatcher, ...]:
        return self.keywords.get(char.lower(), ())


DEFAULT_PATTERNS = PatternTable.build()

_WHITESPACE = re.compile(r"\s*")


@dataclass(frozen=True)
class Token:
    """A matched token with its source text and typed value."""

    kind: TokenKind
    lexeme: str = ""
    value: Any = None


NO_TOKEN = Token(TokenKind.NONE)
END_TOKEN = Token(TokenKind.END_OF_INPUT)


@dataclass(frozen=True)
class TokenizerState:
    """Snapshot of the tokenizer position, used for recovery and diagnostics.

    ``position`` always points at the start of ``current``.
    """

    paren_level: int
    position: int
    line: int
    column: int
    current: Token


class Tokenizer:
    """Lookahead-1 tokenizer over a BXL text."""

    def __init__(self, text: str, patterns: PatternTable = DEFAULT_PATTERNS):
        self._text = text
        self._patterns = patterns
        self._paren_level = 0
        self._position = 0
        self._line = 1
        self._column = 1
        self._current = NO_TOKEN

    @property
    def text(self) -> str:
        return self._text

    @property
    def current(self) -> Token:
        return self._current

    @property
    def kind(self) -> TokenKind:
        """Kind of the current (lookahead) token."""
        return self._current.kind

    @property
    def lexeme(self) -> str:
        return self._current.lexeme

    @property
    def value(self) -> Any:
        return self._current.value

    @property
    def position(self) -> int:
        return self._position

    @property
    def line(self) -> int:
        return self._line

    @property
    def column(self) -> int:
        return self._column

    @property
    def paren_level(self) -> int:
        return self._paren_level

    @property
    def is_eof(self) -> bool:
        return self._position >= len(self._text)

    @property
    def state(self) -> TokenizerState:
        return TokenizerState(
            paren_level=self._paren_level,
            position=self._position,
            line=self._line,
            column=self._column,
            current=self._current,
        )

    def restore(self, state: TokenizerState) -> None:
        """Return to a previously captured state."""
        self._paren_level = state.paren_level
        self._position = state.position
        self._line = state.line
        self._column = state.column
        self._current = state.current

    def reset(self) -> Token:
        """Rewind to the start of the input and read the first token."""
        self.restore(TokenizerState(0, 0, 1, 1, NO_TOKEN))
        return self.advance()

    def advance(self) -> Token:
        """Move past the current token and read the next one.

        Comments are consumed here and never returned.

        Raises:
            TokenizationError: If no pattern matches at the new position
        """
        while True:
            self._move(len(self._current.lexeme))
            self._move(_WHITESPACE.match(self._text, self._position).end() - self._position)

            if self.is_eof:
                self._current = END_TOKEN
                return self._current

            token = self._match()
            if token is None:
                raise TokenizationError(
                    f"Unrecognized input: {self._text[self._position:self._position + 10]}",
                    line=self._line,
                    column=self._column,
                )

            if token.kind is TokenKind.PAREN_L:
                self._paren_level += 1
            elif token.kind is TokenKind.PAREN_R:
                self._paren_level -= 1

            self._current = token
            if token.kind is not TokenKind.COMMENT:
                return token

    def skip_until(self, char: str) -> None:
        """Package the input up to (not including) ``char`` as a discardable token.

        The next ``advance`` resumes at ``char``, or at the end of input if it
        does not occur again.
        """
        end = self._text.find(char, self._position)
        if end < 0:
            end = len(self._text)
        self._current = Token(TokenKind.COMMENT, self._text[self._position:end])

    def _match(self) -> Optional[Token]:
        text = self._text
        pos = self._position

        if self._paren_level == 0 and (pos == 0 or text[pos - 1] != "("):
            for matcher in self._patterns.keywords_for(text[pos]):
                m = matcher.regex.match(text, pos)
                if m:
                    return Token(matcher.kind, m.group(), m.group())

        for matcher in self._patterns.general:
            m = matcher.regex.match(text, pos)
            if m:
                lexeme = m.group()
                value = matcher.convert(lexeme) if matcher.convert else lexeme
                return Token(matcher.kind, lexeme, value)
        return None

    def _move(self, count: int) -> None:
        """Advance the position, tracking lines and columns.

        Crossing a newline resets the parenthesis depth.
        """
        if count <= 0:
            return
        start = self._position
        end = start + count
        newlines = self._text.count("\n", start, end)
        if newlines:
            self._line += newlines
            self._column = end - self._text.rfind("\n", start, end)
            self._paren_level = 0
        else:
            self._column += count
        self._position = end
