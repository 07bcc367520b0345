"""
Wordy Error Hierarchy
=====================

This module defines the root of the exception hierarchy for the Wordy
toolchain. All exceptions inherit from WordyError, allowing callers to
catch every toolchain error with a single except clause if desired.

Exception Hierarchy
-------------------
WordyError (base)
└── TranslationError (see wordy.translator.errors)
    ├── LexicalError - characters the lexer cannot accept
    ├── WordySyntaxError - token sequences the parser cannot accept
    └── InternalConsistencyError - malformed AST reaching the generator

Design Philosophy
-----------------
Each exception captures source location information (filename, line,
column) when applicable, so messages point straight at the offending
text:

    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class WordyError(Exception):
    """
    Base exception for all Wordy toolchain errors.

    All exceptions in the package inherit from this class, allowing
    callers to catch all toolchain errors with a single except clause:

        try:
            c_text = translate(source)
        except WordyError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Used by tokens, AST nodes and errors to record where something
    appears in the source text. The frozen design ensures locations
    cannot be accidentally modified once recorded.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"
