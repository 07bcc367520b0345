"""
CLI Error Handling
==================

Maps exceptions raised while translating to messages on stderr and
process exit codes.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click


class ExitCode(IntEnum):
    """Standard exit codes for CLI tools."""
    SUCCESS = 0
    BUILD_ERROR = 1      # Lexical or syntax error in the Wordy source
    INVALID_ARGS = 2     # Invalid arguments or missing files
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception and exit with the matching exit code.

    Translation errors are already formatted with location, source line
    and hint, so they are printed as they are.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    from wordy.errors import WordyError
    from wordy.translator.errors import InternalConsistencyError

    if isinstance(error, InternalConsistencyError):
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)

    elif isinstance(error, WordyError):
        click.echo(str(error), err=True)
        sys.exit(ExitCode.BUILD_ERROR)

    elif isinstance(error, click.BadParameter):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, (FileNotFoundError, PermissionError, IsADirectoryError)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
