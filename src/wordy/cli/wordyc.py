"""
wordyc - Wordy to C Translator Command-Line Interface
=====================================================

This module implements the command-line interface for the Wordy
translator.

Usage Examples
--------------
Translate a file, C on stdout:
    $ wordyc hello.wdy

With output file:
    $ wordyc hello.wdy -o hello.c

From a pipe, straight into the C compiler:
    $ cat hello.wdy | wordyc | cc -x c - -o hello

Debugging the front end:
    $ wordyc --tokens hello.wdy
    $ wordyc --ast hello.wdy
"""

import logging
from pathlib import Path
from typing import Optional, TextIO

import click

from wordy import __version__
from wordy.translator import Translator, TranslatorOptions
from wordy.translator.ast import ASTPrinter
from wordy.translator.lexer import Lexer
from wordy.cli.errors import handle_cli_exception

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.File("r", encoding="utf-8"),
    default="-",
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output C file (default: stdout)",
)
@click.option(
    "--indent",
    type=click.IntRange(min=0),
    default=4,
    show_default=True,
    help="Spaces per indentation level in the generated C",
)
@click.option(
    "--no-runtime",
    is_flag=True,
    help="Omit the runtime prologue (display, read) and epilogue",
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Print the token stream and exit (for debugging)",
)
@click.option(
    "--ast",
    is_flag=True,
    help="Print AST and exit (for debugging)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="wordyc")
def main(
    input_file: TextIO,
    output: Optional[Path],
    indent: int,
    no_runtime: bool,
    tokens: bool,
    ast: bool,
    verbose: bool,
) -> None:
    """
    Translate a Wordy program to C.

    INPUT_FILE is the Wordy source file to translate; use - (the
    default) to read standard input.

    \b
    Examples:
        wordyc hello.wdy              # C on stdout
        wordyc hello.wdy -o hello.c   # Specify output file
        wordyc --no-runtime lib.wdy   # Functions only
        wordyc --ast hello.wdy        # Dump the parse tree

    Nothing is written when translation fails; the error is reported on
    stderr with its file, line and column.
    """
    setup_logging(verbose)
    filename = getattr(input_file, "name", "<stdin>")

    options = TranslatorOptions(
        indent=" " * indent,
        emit_runtime=not no_runtime,
    )

    try:
        source = input_file.read()
        logger.debug("Read %d characters from %s", len(source), filename)

        # Token dump mode
        if tokens:
            for token in Lexer(source, filename).tokenize():
                click.echo(repr(token))
            return

        result = Translator(options).translate_source(source, filename)

        # AST dump mode
        if ast:
            printer = ASTPrinter()
            click.echo(printer.print(result.ast))
            return

        if output is None:
            click.echo(result.output, nl=False)
        else:
            output.write_text(result.output, encoding="utf-8")
            logger.debug("Wrote %d bytes to %s", len(result.output), output)

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
