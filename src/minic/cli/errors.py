"""
CLI Error Handling
==================

Provides consistent error reporting and exit codes for the minic command.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from minic.errors import MinicError


class ExitCode(IntEnum):
    """Standard exit codes."""
    SUCCESS = 0
    SOURCE_ERROR = 1     # Lexical, syntax, symbol or evaluation error
    INVALID_ARGS = 2     # Invalid arguments or unreadable files
    INTERNAL_ERROR = 3   # Unexpected internal error


def report(message: str, line: int | None = None) -> None:
    """Write one diagnostic line to stderr."""
    if line is not None:
        message = f"{message} on line {line}"
    click.echo(message, err=True)


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception and exit with the matching exit code.

    Source errors print their one-line report, plus the hint in verbose
    mode. Internal errors print a traceback in verbose mode.

    Raises:
        SystemExit: Always
    """
    if isinstance(error, MinicError):
        report(f"{error.kind}: {error.message}", error.line)
        if verbose and error.hint:
            click.echo(f"hint: {error.hint}", err=True)
        sys.exit(ExitCode.SOURCE_ERROR)

    elif isinstance(error, (click.BadParameter, ValueError)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, OSError):
        # Missing or unreadable input files
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
