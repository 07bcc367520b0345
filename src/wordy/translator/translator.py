"""
Wordy Translator Main Module
============================

This module provides the main translator interface for Wordy.
It orchestrates the complete translation process:

    Source → Lex → Parse → Generate → C

Usage
-----
Command line:
    $ wordyc hello.wdy -o hello.c

Programmatic:
    >>> from wordy.translator import translate
    >>> c_text = translate('to main do display(42) end')

Translation is all-or-nothing: the first error aborts the run and
propagates as a TranslationError. No partial output is ever produced.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import logging

from wordy.translator.lexer import Lexer, Token
from wordy.translator.parser import Parser
from wordy.translator.codegen import CodeGenerator
from wordy.translator.ast import ProgramNode

logger = logging.getLogger(__name__)


@dataclass
class TranslatorOptions:
    """
    Translator configuration options.

    Attributes:
        indent: Text of one indentation level in the generated C
        emit_runtime: If True (default), wrap the output in the runtime
                     prologue (stdio include, display and read) and the
                     epilogue. Set to False to get only the translated
                     functions, e.g. for linking against another runtime.
    """
    indent: str = "    "
    emit_runtime: bool = True


@dataclass
class TranslationResult:
    """
    Result of a translation.

    Attributes:
        filename: Source filename
        success: True if translation succeeded
        output: Generated C source (if successful)
        ast: Abstract syntax tree (if parsing succeeded)
        token_count: Number of tokens lexed
    """
    filename: str = ""
    success: bool = False
    output: str = ""
    ast: Optional[ProgramNode] = None
    token_count: int = 0


class Translator:
    """
    Wordy to C translator.

    Example:
        translator = Translator()
        result = translator.translate_file("hello.wdy")
        print(result.output)

    Attributes:
        options: Translator configuration options
    """

    def __init__(self, options: Optional[TranslatorOptions] = None):
        self.options = options or TranslatorOptions()

    def translate_source(self, source: str, filename: str = "<input>") -> TranslationResult:
        """
        Translate Wordy source code to C.

        Args:
            source: Wordy source code string
            filename: Source filename for error messages

        Returns:
            TranslationResult containing the C output

        Raises:
            TranslationError: If any stage fails
        """
        result = TranslationResult(filename=filename)

        # Stage 1: Lexical analysis
        tokens = self._lex(source, filename)
        result.token_count = len(tokens)
        logger.debug("%s: %d tokens", filename, len(tokens))

        # Stage 2: Parsing
        ast = self._parse(tokens, filename, source.splitlines())
        result.ast = ast

        # Stage 3: Code generation
        result.output = self._generate(ast)
        result.success = True
        logger.debug("%s: generated %d bytes of C", filename, len(result.output))

        return result

    def translate_file(self, filepath: str | Path) -> TranslationResult:
        """
        Translate a Wordy source file to C.

        Args:
            filepath: Path to the Wordy source file

        Returns:
            TranslationResult containing the C output

        Raises:
            TranslationError: If translation fails
            FileNotFoundError: If source file not found
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding="utf-8")
        return self.translate_source(source, str(filepath))

    def _lex(self, source: str, filename: str) -> list[Token]:
        lexer = Lexer(source, filename)
        return list(lexer.tokenize())

    def _parse(self, tokens: list[Token], filename: str, source_lines: list[str]) -> ProgramNode:
        parser = Parser(tokens, filename, source_lines)
        return parser.parse()

    def _generate(self, ast: ProgramNode) -> str:
        generator = CodeGenerator(
            indent=self.options.indent,
            emit_runtime=self.options.emit_runtime,
        )
        return generator.generate(ast)


# =============================================================================
# Convenience Functions
# =============================================================================

def translate(source: str, filename: str = "<input>") -> str:
    """
    Translate Wordy source code to C.

    This is a convenience function for simple translation tasks.

    Args:
        source: Wordy source code
        filename: Source filename for error messages

    Returns:
        Generated C source code

    Raises:
        TranslationError: If translation fails

    Example:
        >>> c_text = translate('to main do display(42) end')
        >>> 'display(42);' in c_text
        True
    """
    return Translator().translate_source(source, filename).output


def translate_file(filepath: str | Path, output_path: Optional[str | Path] = None) -> str:
    """
    Translate a Wordy source file.

    Args:
        filepath: Path to Wordy source file
        output_path: Optional path to write the C output

    Returns:
        Generated C source code

    Raises:
        TranslationError: If translation fails
        FileNotFoundError: If source file not found
    """
    c_text = Translator().translate_file(filepath).output

    if output_path:
        Path(output_path).write_text(c_text, encoding="utf-8")

    return c_text
