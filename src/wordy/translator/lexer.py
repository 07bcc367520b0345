"""
Wordy Lexer (Tokenizer)
=======================

This module implements the lexer for the Wordy language. It converts
source text into a lazy stream of tokens for the parser.

Token Categories
----------------
- Keywords: to, with, return, do, end, if, then, else, set, change, ...
- Identifiers: variable and function names
- Numbers: decimal integer literals (signed 32-bit range)
- Operators: symbolic (+, -, *, /, =, !=, <, <=, >, >=, ~, |, &)
  and spelled out (and, or, not, modulo)
- Delimiters: (, ), ,

Words share one alphabet, so a word is classified in a fixed order:
reserved word first, then spelled-out operator, then plain identifier.
Identifiers starting with RESERVED_PREFIX (__WORDY_TEMP_) are rejected
with ReservedIdentifierError; the code generator owns that namespace.

Comments
--------
Block comments only: /* comment */. Comments nest to any depth, so

    /* outer /* inner */ still a comment */

is skipped entirely. A comment still open at end of input is a fatal
UnterminatedCommentError.

Unknown Characters
------------------
A character outside the Wordy alphabet does not stop the lexer; it is
emitted as an ERROR token and the parser decides that it is fatal.

Example Usage
-------------
>>> from wordy.translator.lexer import Lexer
>>> for token in Lexer("set x to 1 + 2").tokenize():
...     print(token)
Token(KEYWORD, 'set', 1:1)
Token(IDENTIFIER, 'x', 1:5)
Token(KEYWORD, 'to', 1:7)
Token(NUMBER, 1, 1:10)
Token(OPERATOR, '+', 1:12)
Token(NUMBER, 2, 1:14)
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator
import string

from wordy.errors import SourceLocation
from wordy.translator.errors import (
    IntegerRangeError,
    ReservedIdentifierError,
    UnterminatedCommentError,
)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """Token categories for the Wordy language."""

    NUMBER = auto()         # Integer literal
    IDENTIFIER = auto()     # Variable/function names
    KEYWORD = auto()        # Reserved words
    OPERATOR = auto()       # Symbolic or spelled-out operators
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    COMMA = auto()          # ,
    ERROR = auto()          # Character outside the alphabet
    EOF = auto()            # End of input (never yielded by tokenize)


# =============================================================================
# Word Tables
# =============================================================================

KEYWORDS: frozenset[str] = frozenset({
    "to", "with", "is", "return", "do", "end",
    "if", "then", "else", "let", "be", "forever",
    "while", "for", "each", "in",
    "set", "through", "change", "by", "variable",
})

WORD_OPERATORS: frozenset[str] = frozenset({"and", "or", "not", "modulo"})

# Characters that can appear in a symbolic operator run
OPERATOR_CHARS = "+=-*/<>~|&!"

INT32_MAX = 2**31 - 1

# Names the code generator uses for its temporaries
RESERVED_PREFIX = "__WORDY_TEMP_"


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token from Wordy source.

    Position fields are excluded from equality, so two tokens are equal
    when their type and value match regardless of where they appeared.

    Attributes:
        type: The TokenType classification
        value: int for NUMBER, the source text for everything else
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    type: TokenType
    value: str | int | None = None
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)
    filename: str = field(default="<input>", compare=False)

    def __repr__(self) -> str:
        """Format token for debugging output."""
        if self.value is not None:
            if isinstance(self.value, int):
                return f"Token({self.type.name}, {self.value}, {self.line}:{self.column})"
            return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    @property
    def text(self) -> str:
        """The token as it is shown in diagnostics."""
        if self.type == TokenType.EOF:
            return "end of input"
        return str(self.value)

    def is_keyword(self, word: str) -> bool:
        """Return True if this token is the reserved word `word`."""
        return self.type == TokenType.KEYWORD and self.value == word

    def is_operator(self, *spellings: str) -> bool:
        """Return True if this token is one of the given operators."""
        return self.type == TokenType.OPERATOR and self.value in spellings


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes Wordy source code.

    The lexer keeps a cursor into the source plus running line/column
    counters. Tokens are produced on demand; iterating tokenize() again
    starts over from the beginning of the source.

    Usage:
        lexer = Lexer(source_text, filename)
        tokens = list(lexer.tokenize())

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for error reporting)
    """

    IDENT_START = string.ascii_letters + "_"
    IDENT_CHARS = string.ascii_letters + string.digits + "_"

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename
        self._reset()

    def _reset(self) -> None:
        self._pos = 0
        self._line = 1
        self._column = 1
        self._line_start_pos = 0

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens from the source code.

        Iteration stops at end of input; no EOF token is yielded.

        Yields:
            Token objects for each lexical element

        Raises:
            UnterminatedCommentError: If a block comment is never closed
            IntegerRangeError: If a literal exceeds the 32-bit range
        """
        self._reset()
        while True:
            self._skip_whitespace_and_comments()
            if self._at_end():
                return
            yield self._scan_token()

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """Character at current position + offset, or '' past the end."""
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Consume and return the current character, tracking line/column."""
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
            self._line_start_pos = self._pos
        else:
            self._column += 1

        return char

    def _make_token(
        self,
        token_type: TokenType,
        value: str | int | None,
        start_line: int,
        start_column: int,
    ) -> Token:
        return Token(
            type=token_type,
            value=value,
            line=start_line,
            column=start_column,
            filename=self.filename,
        )

    def _line_text(self, line_start: int) -> str:
        """Source text of the line beginning at line_start."""
        line_end = self.source.find("\n", line_start)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[line_start:line_end]

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace_and_comments(self) -> None:
        while not self._at_end():
            char = self._peek()

            if char.isspace():
                self._advance()
                continue

            if char == "/" and self._peek(1) == "*":
                self._skip_block_comment()
                continue

            break

    def _skip_block_comment(self) -> None:
        """
        Skip a block comment, honouring nested comments.

        Each '/*' opens one more level and each '*/' closes one; the
        comment ends when the depth returns to zero.

        Raises:
            UnterminatedCommentError: If input ends with the depth above zero
        """
        start = SourceLocation(self.filename, self._line, self._column)
        start_line_pos = self._line_start_pos

        self._advance()
        self._advance()
        depth = 1

        while depth > 0:
            if self._at_end():
                raise UnterminatedCommentError(
                    depth,
                    start,
                    self._line_text(start_line_pos),
                )
            if self._peek() == "/" and self._peek(1) == "*":
                self._advance()
                self._advance()
                depth += 1
            elif self._peek() == "*" and self._peek(1) == "/":
                self._advance()
                self._advance()
                depth -= 1
            else:
                self._advance()

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> Token:
        start_line = self._line
        start_column = self._column

        char = self._peek()

        if char in self.IDENT_START:
            return self._scan_word(start_line, start_column)

        if char in string.digits:
            return self._scan_number(start_line, start_column)

        single_tokens = {
            "(": TokenType.LPAREN,
            ")": TokenType.RPAREN,
            ",": TokenType.COMMA,
        }
        if char in single_tokens:
            self._advance()
            return self._make_token(single_tokens[char], char, start_line, start_column)

        if char in OPERATOR_CHARS:
            return self._scan_operator(start_line, start_column)

        # Unknown character: handed to the parser as an ERROR token
        self._advance()
        return self._make_token(TokenType.ERROR, char, start_line, start_column)

    def _scan_word(self, start_line: int, start_column: int) -> Token:
        """
        Scan a word and classify it.

        Reserved words win over spelled-out operators, which win over
        plain identifiers.
        """
        line_start = self._line_start_pos
        chars = []
        while self._peek() and self._peek() in self.IDENT_CHARS:
            chars.append(self._advance())

        word = "".join(chars)

        if word.startswith(RESERVED_PREFIX):
            raise ReservedIdentifierError(
                word,
                SourceLocation(self.filename, start_line, start_column),
                self._line_text(line_start),
            )

        if word in KEYWORDS:
            token_type = TokenType.KEYWORD
        elif word in WORD_OPERATORS:
            token_type = TokenType.OPERATOR
        else:
            token_type = TokenType.IDENTIFIER

        return self._make_token(token_type, word, start_line, start_column)

    def _scan_number(self, start_line: int, start_column: int) -> Token:
        """
        Scan a decimal literal.

        There is no sign here: '-' is always an operator and negation is
        built by the parser.
        """
        line_start = self._line_start_pos
        chars = []
        while self._peek() and self._peek() in string.digits:
            chars.append(self._advance())

        text = "".join(chars)
        value = int(text)
        if value > INT32_MAX:
            raise IntegerRangeError(
                text,
                SourceLocation(self.filename, start_line, start_column),
                self._line_text(line_start),
            )

        return self._make_token(TokenType.NUMBER, value, start_line, start_column)

    def _scan_operator(self, start_line: int, start_column: int) -> Token:
        """Scan a maximal run of operator characters (e.g. '>=', '!=')."""
        chars = []
        while self._peek() and self._peek() in OPERATOR_CHARS:
            chars.append(self._advance())

        return self._make_token(TokenType.OPERATOR, "".join(chars), start_line, start_column)


# =============================================================================
# Convenience Functions
# =============================================================================

def tokenize(source: str, filename: str = "<input>") -> Iterator[Token]:
    """
    Tokenize Wordy source code.

    Args:
        source: The Wordy source code
        filename: Source filename for error messages

    Returns:
        A lazy iterator over the tokens
    """
    return Lexer(source, filename).tokenize()
