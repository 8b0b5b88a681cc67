"""
Unified CLI Error Handling
==========================

Provides consistent error handling and exit codes for the hrm tool.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click


class ExitCode(IntEnum):
    """Standard exit codes for the CLI."""
    SUCCESS = 0
    DECODE_ERROR = 1     # Profile data could not be decoded
    INVALID_ARGS = 2     # Invalid arguments or missing files
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception and exit with the matching exit code.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always
    """
    from hrm_profile.errors import (
        HRMError,
        PreconditionError,
        ProfileNotFoundError,
    )

    if isinstance(error, (PreconditionError, ProfileNotFoundError)):
        # Bad floor/tab/profile, or nothing to open
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, HRMError):
        click.echo(f"Decode error: {error}", err=True)
        sys.exit(ExitCode.DECODE_ERROR)

    elif isinstance(error, (click.BadParameter, FileNotFoundError, PermissionError)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
