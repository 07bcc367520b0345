"""
Wordy Translator Error Hierarchy
================================

This module defines the exception hierarchy for the Wordy-to-C
translator. All exceptions inherit from TranslationError, which itself
inherits from the base WordyError for consistent error handling across
the package.

Exception Hierarchy
-------------------
TranslationError (base for all translator errors)
├── LexicalError - text the lexer cannot turn into tokens
│   ├── InvalidCharacterError - unexpected character reached the parser
│   ├── UnterminatedCommentError - '/*' without matching '*/'
│   ├── IntegerRangeError - literal outside the signed 32-bit range
│   └── ReservedIdentifierError - name using the temporary-name prefix
├── WordySyntaxError - token sequences the parser cannot accept
│   ├── UnexpectedTokenError - a token other than the expected one
│   ├── UnexpectedEndOfInputError - tokens ran out mid-construct
│   └── InvalidRangeKindError - 'for each' range not 'to' or 'through'
└── InternalConsistencyError - AST violating the generator's invariants

Every error aborts the whole translation. There is no recovery and no
warnings channel: output is all-or-nothing.

Error Message Format
--------------------
    prog.wdy:3:12: error: unexpected token 'end'
        do return end
                  ^
    hint: expected an expression
"""

from typing import Optional

from wordy.errors import WordyError, SourceLocation


# =============================================================================
# Base Translator Exception
# =============================================================================

class TranslationError(WordyError):
    """
    Base exception for all translator errors.

    Provides the common message layout: source location, the source line
    with a caret under the offending column, and an optional hint.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The actual source text at the error location
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

            prog.wdy:1:18: error: unexpected token 'end'
                to main do return end
                                  ^
            hint: expected an expression
        """
        parts = []

        # Location prefix: filename:line:column: error: message
        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Lexical Errors
# =============================================================================

class LexicalError(TranslationError):
    """
    Source text that cannot be tokenized.

    Unknown characters are first emitted as ERROR tokens; they become a
    LexicalError when the parser reaches them. Unterminated comments,
    out-of-range literals and reserved names are raised by the lexer
    directly.
    """
    pass


class InvalidCharacterError(LexicalError):
    """
    A character that is not part of the Wordy alphabet.

    Example:
        set x to 4 # 2
    """

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"invalid character '{char}' (0x{ord(char):02X})",
            location=location,
            source_line=source_line,
        )


class UnterminatedCommentError(LexicalError):
    """
    Block comment still open at end of input.

    Comments nest, so every '/*' needs its own '*/':

        /* outer /* inner */ still inside the outer comment
    """

    def __init__(
        self,
        depth: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.depth = depth
        closers = "'*/'" if depth == 1 else f"{depth} more '*/'"
        super().__init__(
            "unterminated block comment",
            location=location,
            hint=f"add {closers} to close the comment",
            source_line=source_line,
        )


class IntegerRangeError(LexicalError):
    """Integer literal that does not fit in a signed 32-bit integer."""

    def __init__(
        self,
        text: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.text = text
        super().__init__(
            f"integer literal '{text}' out of range",
            location=location,
            hint="integer literals must be at most 2147483647",
            source_line=source_line,
        )


class ReservedIdentifierError(LexicalError):
    """
    Identifier that starts with the prefix reserved for generated
    temporaries (__WORDY_TEMP_).
    """

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.name = name
        super().__init__(
            f"identifier '{name}' uses a reserved prefix",
            location=location,
            hint="names starting with '__WORDY_TEMP_' are reserved for the translator",
            source_line=source_line,
        )


# =============================================================================
# Syntax Errors
# =============================================================================

class WordySyntaxError(TranslationError):
    """
    Token sequence that does not match the Wordy grammar.

    Always carries the location of the offending token and a description
    of what the parser expected there.
    """
    pass


class UnexpectedTokenError(WordySyntaxError):
    """
    Unexpected token during parsing.

    Raised when the parser finds a token that doesn't match the
    expected grammar rule.
    """

    def __init__(
        self,
        found: str,
        expected: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        self.expected = expected

        hint = None
        if expected:
            hint = f"expected {expected}"

        super().__init__(
            f"unexpected token '{found}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UnexpectedEndOfInputError(WordySyntaxError):
    """
    Input ended in the middle of a construct.

    Example:
        to main do display(1)       /* missing 'end' */
    """

    def __init__(
        self,
        expected: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.expected = expected
        super().__init__(
            "unexpected end of input",
            location=location,
            hint=f"expected {expected}",
            source_line=source_line,
        )


class InvalidRangeKindError(WordySyntaxError):
    """
    A 'for each' range whose bounds are not joined by 'to' or 'through'.

    Example:
        for each i in 1 until 10 display(i)
    """

    def __init__(
        self,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        super().__init__(
            f"invalid range keyword '{found}'",
            location=location,
            hint="use 'to' for an exclusive end or 'through' for an inclusive end",
            source_line=source_line,
        )


# =============================================================================
# Code Generation Errors
# =============================================================================

class InternalConsistencyError(TranslationError):
    """
    AST reached the code generator in a shape the parser never produces.

    This indicates a bug in whatever built the tree, not a problem with
    the user's program.
    """

    def __init__(self, message: str, location: Optional[SourceLocation] = None):
        super().__init__(
            f"internal consistency error: {message}",
            location=location,
        )
