"""Tests for bxl_tools.parser.tokenizer module."""

import pytest

from bxl_tools.exceptions import TokenizationError
from bxl_tools.parser.tokenizer import (
    DEFAULT_PATTERNS,
    KEYWORD_LEXEMES,
    Tokenizer,
    TokenKind,
)

from conftest import BOARD_TEXT, LIBRARY_TEXT, SCHEMATIC_TEXT

K = TokenKind


def tokens(text):
    """Collect (kind, value) pairs for a whole text."""
    tokenizer = Tokenizer(text)
    tokenizer.reset()
    result = []
    while tokenizer.kind is not K.END_OF_INPUT:
        result.append((tokenizer.kind, tokenizer.value))
        tokenizer.advance()
    return result


def kinds(text):
    return [kind for kind, _ in tokens(text)]


class TestKeywords:
    """Tests for keyword recognition."""

    def test_keyword_at_top_level(self):
        """Keywords are recognized outside parentheses."""
        assert tokens("Layer") == [(K.LAYER, "Layer")]

    def test_keyword_case_insensitive(self):
        """Keyword matching ignores case; the value keeps the source spelling."""
        assert tokens("layerdata") == [(K.LAYER_DATA, "layerdata")]

    def test_keyword_inside_parentheses_is_identifier(self):
        """Property names that spell keywords stay identifiers."""
        assert tokens('(Name "Layer")') == [
            (K.PAREN_L, "("),
            (K.IDENTIFIER, "Name"),
            (K.LIT_STRING, "Layer"),
            (K.PAREN_R, ")"),
        ]

    def test_longer_keyword_not_split(self):
        """A keyword only matches at a word boundary."""
        assert kinds("Sheets Sheet") == [K.SHEETS, K.SHEET]
        assert kinds("PinDes PinName Pin") == [K.PIN_DES, K.PIN_NAME, K.PIN]

    def test_keyword_with_spaces(self):
        """Multi-word keywords are single tokens."""
        assert kinds("End of File") == [K.END_OF_FILE]
        assert kinds("Revision Level Revision Note") == [K.REVISION_LEVEL, K.REVISION_NOTE]

    def test_keyword_starting_with_digit(self):
        """3DModels is a keyword, not a number."""
        assert kinds("3DModels : 0") == [K.MODELS_3D, K.COLON, K.LIT_INTEGER]

    def test_depth_resets_at_newline(self):
        """An unclosed parenthesis does not hide keywords on the next line."""
        assert kinds("Pad (Number 1\nPad") == [
            K.PAD,
            K.PAREN_L,
            K.IDENTIFIER,
            K.LIT_INTEGER,
            K.PAD,
        ]

    def test_keyword_table_indexed_by_first_char(self):
        """Only keywords sharing the first character are candidates."""
        candidates = {m.kind for m in DEFAULT_PATTERNS.keywords_for("E")}
        assert K.END_OF_FILE in candidates
        assert K.LAYER not in candidates

    def test_lexeme_lookup(self):
        """Each keyword kind maps back to its spelling."""
        assert KEYWORD_LEXEMES[K.SUPER_COMPONENTS] == "SuperComponents"


class TestLiterals:
    """Tests for literal and identifier tokens."""

    def test_integer(self):
        """Signed integers are converted to int."""
        assert tokens("(-150)")[1] == (K.LIT_INTEGER, -150)

    def test_decimal(self):
        """Decimals are converted to float."""
        assert tokens("(1.5)")[1] == (K.LIT_DECIMAL, 1.5)
        assert tokens("(-.5)")[1] == (K.LIT_DECIMAL, -0.5)

    def test_decimal_with_exponent(self):
        """Negative exponents are part of the decimal."""
        assert tokens("(2.5e-3)")[1] == (K.LIT_DECIMAL, pytest.approx(0.0025))

    def test_boolean(self):
        """Booleans are converted regardless of case."""
        assert tokens("(True false)")[1:3] == [(K.LIT_BOOLEAN, True), (K.LIT_BOOLEAN, False)]

    def test_string(self):
        """Quotes are stripped from string values."""
        assert tokens('"SOIC8"') == [(K.LIT_STRING, "SOIC8")]

    def test_doubled_quote_string(self):
        """Strings wrapped in doubled quotes lose both quote pairs."""
        assert tokens('""hello""') == [(K.LIT_STRING, "hello")]

    def test_string_with_inch_mark(self):
        """An inch mark followed by a millimetre value stays inside the string."""
        assert tokens('"0.180" (4.57mm)"') == [(K.LIT_STRING, '0.180" (4.57mm)')]

    def test_open_collector_is_one_identifier(self):
        """Pin types written with a space are single identifiers."""
        assert tokens("(Open Collector)")[1] == (K.IDENTIFIER, "Open Collector")

    def test_identifier_with_hyphen(self):
        """Identifiers may contain hyphens and underscores."""
        assert tokens("(TOP_SILK IN1-)")[1:3] == [
            (K.IDENTIFIER, "TOP_SILK"),
            (K.IDENTIFIER, "IN1-"),
        ]

    def test_punctuation(self):
        """Punctuation tokens are recognized."""
        assert kinds("(U1/4, 2):") == [
            K.PAREN_L,
            K.IDENTIFIER,
            K.SLASH,
            K.LIT_INTEGER,
            K.COMMA,
            K.LIT_INTEGER,
            K.PAREN_R,
            K.COLON,
        ]


class TestTokenizer:
    """Tests for tokenizer state handling."""

    def test_comments_are_skipped(self):
        """Comments never reach the caller."""
        assert kinds("# header\nPad # trailing\nLine") == [K.PAD, K.LINE]

    def test_empty_text(self):
        """An empty text is immediately at end of input."""
        tokenizer = Tokenizer("")
        assert tokenizer.reset().kind is K.END_OF_INPUT
        assert tokenizer.is_eof

    def test_line_and_column(self):
        """Line and column point at the start of the current token."""
        tokenizer = Tokenizer("Pad\n  Line")
        tokenizer.reset()
        assert (tokenizer.line, tokenizer.column) == (1, 1)
        tokenizer.advance()
        assert tokenizer.kind is K.LINE
        assert (tokenizer.line, tokenizer.column) == (2, 3)
        assert tokenizer.position == 6

    def test_paren_level(self):
        """Depth follows the parentheses read so far."""
        tokenizer = Tokenizer("((x)")
        tokenizer.reset()
        assert tokenizer.paren_level == 1
        tokenizer.advance()
        assert tokenizer.paren_level == 2
        tokenizer.advance()
        tokenizer.advance()
        assert tokenizer.kind is K.PAREN_R
        assert tokenizer.paren_level == 1

    def test_unrecognized_input(self):
        """Input no pattern matches raises TokenizationError."""
        tokenizer = Tokenizer("Pad $$$")
        tokenizer.reset()
        with pytest.raises(TokenizationError, match="Unrecognized input") as exc_info:
            tokenizer.advance()
        assert exc_info.value.line == 1
        assert exc_info.value.column == 5

    def test_skip_until_packages_text(self):
        """skip_until wraps the rest of a value so the next token is the delimiter."""
        tokenizer = Tokenizer("(Attr junk $ more) (Next 1)")
        tokenizer.reset()
        tokenizer.advance()
        tokenizer.advance()
        assert tokenizer.value == "junk"

        tokenizer.skip_until(")")
        assert tokenizer.kind is K.COMMENT
        assert tokenizer.lexeme == "junk $ more"
        assert tokenizer.advance().kind is K.PAREN_R
        assert tokenizer.advance().kind is K.PAREN_L

    def test_skip_until_missing_char(self):
        """Without the delimiter everything up to the end is skipped."""
        tokenizer = Tokenizer("(Attr junk")
        tokenizer.reset()
        tokenizer.advance()
        tokenizer.skip_until(")")
        assert tokenizer.advance().kind is K.END_OF_INPUT

    def test_restore_state(self):
        """A captured state can be restored after reading ahead."""
        tokenizer = Tokenizer("Pad Line Arc")
        tokenizer.reset()
        state = tokenizer.state
        tokenizer.advance()
        tokenizer.advance()
        assert tokenizer.kind is K.ARC

        tokenizer.restore(state)
        assert tokenizer.kind is K.PAD
        assert tokenizer.column == 1
        assert tokenizer.advance().kind is K.LINE

    def test_reset_repeats_token_sequence(self):
        """Tokenizing again after reset yields the identical sequence."""
        tokenizer = Tokenizer(LIBRARY_TEXT + BOARD_TEXT + SCHEMATIC_TEXT)

        def collect():
            token = tokenizer.reset()
            result = []
            while True:
                result.append(
                    (token.kind, token.lexeme, tokenizer.line, tokenizer.column, tokenizer.paren_level)
                )
                if token.kind is K.END_OF_INPUT:
                    return result
                token = tokenizer.advance()

        first = collect()
        assert len(first) > 100
        assert any(kind is K.PAREN_L for kind, *_ in first)
        assert collect() == first
