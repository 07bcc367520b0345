"""
Wordy - An English-like Language Translated to C
================================================

This package provides a translator for Wordy, a small imperative
language whose programs read like sentences:

    to square with (n) return n * n

    to main do
        for each i in 1 through 10 display(square(i))
    end

Main Components
---------------
- **translator**: lexer, parser, AST and C code generator
- **cli**: the `wordyc` command-line tool

Quick Start
-----------
    >>> from wordy import translate
    >>> c_text = translate("to main do display(1 + 2 * 3) end")

Or from the shell:
    $ wordyc square.wdy -o square.c
    $ cc square.c -o square && ./square
"""

__version__ = "1.0.0"

from wordy.errors import WordyError, SourceLocation
from wordy.translator import (
    Translator,
    TranslatorOptions,
    TranslationResult,
    TranslationError,
    translate,
    translate_file,
)

__all__ = [
    "__version__",
    "WordyError",
    "SourceLocation",
    "Translator",
    "TranslatorOptions",
    "TranslationResult",
    "TranslationError",
    "translate",
    "translate_file",
]
