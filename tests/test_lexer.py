"""
Wordy Lexer Test Suite
======================

Tests for the tokenizer: word classification, operators, numbers,
nested comments, positions and lexical errors.
"""

import pytest

from wordy.errors import SourceLocation
from wordy.translator.lexer import Lexer, Token, TokenType, tokenize, KEYWORDS
from wordy.translator.errors import (
    IntegerRangeError,
    LexicalError,
    ReservedIdentifierError,
    UnterminatedCommentError,
)


def lex(source: str) -> list[Token]:
    return list(Lexer(source, "test.wdy").tokenize())


def kinds(source: str) -> list[tuple[TokenType, object]]:
    return [(t.type, t.value) for t in lex(source)]


# =============================================================================
# Basic Scanning
# =============================================================================

class TestLexer:
    """Tests for basic token generation."""

    def test_empty_source(self):
        """Empty source produces no tokens at all."""
        assert lex("") == []

    def test_whitespace_only(self):
        """Whitespace-only source produces no tokens."""
        assert lex("   \n\t  \r\n  ") == []

    def test_no_eof_token(self):
        """The end-of-input marker is never yielded."""
        tokens = lex("display(1)")
        assert all(t.type != TokenType.EOF for t in tokens)
        assert len(tokens) == 4

    def test_simple_function(self):
        """A small function tokenizes into the expected kinds and values."""
        assert kinds("to main do display(42) end") == [
            (TokenType.KEYWORD, "to"),
            (TokenType.IDENTIFIER, "main"),
            (TokenType.KEYWORD, "do"),
            (TokenType.IDENTIFIER, "display"),
            (TokenType.LPAREN, "("),
            (TokenType.NUMBER, 42),
            (TokenType.RPAREN, ")"),
            (TokenType.KEYWORD, "end"),
        ]

    def test_comma(self):
        """Commas separate parameters and arguments."""
        assert [t.type for t in lex("(a, b)")] == [
            TokenType.LPAREN,
            TokenType.IDENTIFIER,
            TokenType.COMMA,
            TokenType.IDENTIFIER,
            TokenType.RPAREN,
        ]

    def test_tokenize_restarts(self):
        """Each call to tokenize() starts again from the beginning."""
        lexer = Lexer("set x to 1", "test.wdy")
        first = list(lexer.tokenize())
        second = list(lexer.tokenize())
        assert first == second
        assert len(first) == 4

    def test_tokenize_is_lazy(self):
        """Tokens before a lexical error are produced before it is raised."""
        stream = tokenize("set x /* never closed")
        assert next(stream) == Token(TokenType.KEYWORD, "set")
        assert next(stream) == Token(TokenType.IDENTIFIER, "x")
        with pytest.raises(UnterminatedCommentError):
            next(stream)


# =============================================================================
# Word Classification
# =============================================================================

class TestWords:
    """Tests for keyword, spelled operator and identifier classification."""

    @pytest.mark.parametrize("word", sorted(KEYWORDS))
    def test_reserved_words(self, word):
        """Every reserved word lexes as a KEYWORD."""
        assert kinds(word) == [(TokenType.KEYWORD, word)]

    @pytest.mark.parametrize("word", ["and", "or", "not", "modulo"])
    def test_spelled_operators(self, word):
        """Spelled-out operators lex as OPERATOR tokens."""
        assert kinds(word) == [(TokenType.OPERATOR, word)]

    def test_keyword_classification_sequence(self):
        """Keywords, spelled operators and identifiers in one stream."""
        assert kinds("to with and foo") == [
            (TokenType.KEYWORD, "to"),
            (TokenType.KEYWORD, "with"),
            (TokenType.OPERATOR, "and"),
            (TokenType.IDENTIFIER, "foo"),
        ]

    def test_keyword_prefix_is_identifier(self):
        """A word that only starts with a keyword is an identifier."""
        assert kinds("today endless android") == [
            (TokenType.IDENTIFIER, "today"),
            (TokenType.IDENTIFIER, "endless"),
            (TokenType.IDENTIFIER, "android"),
        ]

    def test_identifier_characters(self):
        """Identifiers may contain digits and underscores after the first char."""
        assert kinds("_tmp x1 loop_count2") == [
            (TokenType.IDENTIFIER, "_tmp"),
            (TokenType.IDENTIFIER, "x1"),
            (TokenType.IDENTIFIER, "loop_count2"),
        ]

    def test_words_are_case_sensitive(self):
        """Reserved words are lower case only."""
        assert kinds("To END") == [
            (TokenType.IDENTIFIER, "To"),
            (TokenType.IDENTIFIER, "END"),
        ]

    def test_temporary_prefix_is_reserved(self):
        """Names the generator uses for temporaries cannot be written by hand."""
        with pytest.raises(ReservedIdentifierError) as exc_info:
            lex("variable x\nset __WORDY_TEMP_1 to 2")
        assert isinstance(exc_info.value, LexicalError)
        assert exc_info.value.name == "__WORDY_TEMP_1"
        assert exc_info.value.location == SourceLocation("test.wdy", 2, 5)
        assert "set __WORDY_TEMP_1 to 2" in str(exc_info.value)

    def test_near_reserved_names_allowed(self):
        assert kinds("__WORDY_TEMP WORDY_TEMP_1 __wordy_temp_1") == [
            (TokenType.IDENTIFIER, "__WORDY_TEMP"),
            (TokenType.IDENTIFIER, "WORDY_TEMP_1"),
            (TokenType.IDENTIFIER, "__wordy_temp_1"),
        ]

    def test_is_operator(self):
        plus, word = lex("+ and")
        assert plus.is_operator("+", "-")
        assert not plus.is_operator("*")
        assert word.is_operator("and")
        assert not Token(TokenType.IDENTIFIER, "and").is_operator("and")


# =============================================================================
# Numbers and Operators
# =============================================================================

class TestNumbersAndOperators:
    """Tests for integer literals and symbolic operators."""

    def test_decimal_number(self):
        """Digits form a NUMBER token with an int value."""
        tokens = lex("12345")
        assert tokens == [Token(TokenType.NUMBER, 12345)]
        assert isinstance(tokens[0].value, int)

    def test_number_then_word(self):
        """A digit run stops at the first non-digit."""
        assert kinds("10x") == [
            (TokenType.NUMBER, 10),
            (TokenType.IDENTIFIER, "x"),
        ]

    def test_largest_number(self):
        """2147483647 is the largest literal accepted."""
        assert kinds("2147483647") == [(TokenType.NUMBER, 2147483647)]

    def test_number_out_of_range(self):
        """A literal above the signed 32-bit range is a lexical error."""
        with pytest.raises(IntegerRangeError) as exc_info:
            lex("set x to 2147483648")
        assert isinstance(exc_info.value, LexicalError)
        assert exc_info.value.location == SourceLocation("test.wdy", 1, 10)

    def test_minus_is_operator(self):
        """Negative numbers are an operator followed by a number."""
        assert kinds("-5") == [
            (TokenType.OPERATOR, "-"),
            (TokenType.NUMBER, 5),
        ]

    @pytest.mark.parametrize("op", ["+", "-", "*", "/", "=", "<", ">", "~", "|", "&"])
    def test_single_operators(self, op):
        """Each single operator character forms its own token."""
        assert kinds(f"a {op} b")[1] == (TokenType.OPERATOR, op)

    @pytest.mark.parametrize("op", [">=", "<=", "!="])
    def test_two_character_operators(self, op):
        """Adjacent operator characters are matched greedily."""
        assert kinds(f"a{op}b") == [
            (TokenType.IDENTIFIER, "a"),
            (TokenType.OPERATOR, op),
            (TokenType.IDENTIFIER, "b"),
        ]

    def test_greedy_operator_run(self):
        """Any run of operator characters becomes one token."""
        assert kinds("1 +- 2")[1] == (TokenType.OPERATOR, "+-")

    def test_parenthesis_ends_operator(self):
        """Parentheses are never part of an operator run."""
        assert kinds("-(1)") == [
            (TokenType.OPERATOR, "-"),
            (TokenType.LPAREN, "("),
            (TokenType.NUMBER, 1),
            (TokenType.RPAREN, ")"),
        ]

    def test_unknown_character(self):
        """Characters outside the alphabet become ERROR tokens."""
        assert kinds("a # b") == [
            (TokenType.IDENTIFIER, "a"),
            (TokenType.ERROR, "#"),
            (TokenType.IDENTIFIER, "b"),
        ]


# =============================================================================
# Comments
# =============================================================================

class TestComments:
    """Tests for nested block comments."""

    def test_block_comment(self):
        """Comments are skipped, including across lines."""
        assert kinds("/* comment\n\nstuff */42") == [(TokenType.NUMBER, 42)]

    def test_nested_comment(self):
        """Nested comments are skipped as a whole."""
        assert kinds("/* a /* b */ c */ x") == [(TokenType.IDENTIFIER, "x")]

    def test_deeply_nested_comment(self):
        """Nesting works to any depth."""
        assert kinds("/*1/*2/*3*/2*/1*/ y /**/") == [(TokenType.IDENTIFIER, "y")]

    def test_unterminated_comment(self):
        """A comment still open at end of input is fatal."""
        with pytest.raises(UnterminatedCommentError) as exc_info:
            lex("x /* a /* b */")
        error = exc_info.value
        assert isinstance(error, LexicalError)
        assert error.depth == 1
        assert error.location == SourceLocation("test.wdy", 1, 3)

    def test_unterminated_nested_comment_depth(self):
        """The error reports how many comments were left open."""
        with pytest.raises(UnterminatedCommentError) as exc_info:
            lex("/* /* /*")
        assert exc_info.value.depth == 3

    def test_comment_separates_tokens(self):
        """A comment between two words splits them."""
        assert kinds("a/**/b") == [
            (TokenType.IDENTIFIER, "a"),
            (TokenType.IDENTIFIER, "b"),
        ]


# =============================================================================
# Positions
# =============================================================================

class TestPositions:
    """Tests for line/column tracking."""

    def test_first_token_position(self):
        """Lines and columns both start at 1."""
        token = lex("x")[0]
        assert (token.line, token.column) == (1, 1)

    def test_columns_on_one_line(self):
        """Columns count characters from the start of the line."""
        tokens = lex("to main do return end")
        assert [(t.line, t.column) for t in tokens] == [
            (1, 1), (1, 4), (1, 9), (1, 12), (1, 19),
        ]

    def test_newline_resets_column(self):
        """A newline advances the line and resets the column."""
        tokens = lex("do\n  x\n\ny")
        assert [(t.line, t.column) for t in tokens] == [(1, 1), (2, 3), (4, 1)]

    def test_position_after_comment(self):
        """Positions account for text consumed by comments."""
        token = lex("/* one\ntwo */ z")[0]
        assert (token.line, token.column) == (2, 8)

    def test_location_property(self):
        """Tokens expose their position as a SourceLocation."""
        token = lex("\n  abc")[0]
        assert token.location == SourceLocation("test.wdy", 2, 3)
        assert str(token.location) == "test.wdy:2:3"

    def test_equality_ignores_position(self):
        """Tokens compare by kind and value only."""
        assert Token(TokenType.IDENTIFIER, "a", 1, 1) == Token(TokenType.IDENTIFIER, "a", 9, 9)
        assert Token(TokenType.IDENTIFIER, "a") != Token(TokenType.KEYWORD, "a")
