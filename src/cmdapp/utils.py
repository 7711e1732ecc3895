"""Shared helpers for writing diagnostics."""

from __future__ import annotations

import sys
import traceback
from typing import TYPE_CHECKING, Optional, TextIO

from cmdapp.exceptions import CmdAppError

if TYPE_CHECKING:
    from rich.console import Console

__all__ = ["format_error", "print_error", "print_message", "get_error_console"]


def get_error_console(file: Optional[TextIO] = None) -> Console:
    """Create a Rich console writing to ``file`` (default: current stderr).

    Markup, highlighting and emoji codes are disabled so that usage lines such
    as ``[<args>]`` are printed verbatim, and soft wrapping keeps long
    messages on one line.
    """
    from rich.console import Console

    return Console(
        file=file if file is not None else sys.stderr,
        markup=False,
        highlight=False,
        emoji=False,
        soft_wrap=True,
    )


def print_message(message: str, file: Optional[TextIO] = None, style: Optional[str] = None) -> None:
    """Print a diagnostic line, styled only when the stream is a terminal.

    Other streams get the message verbatim, tabs included.
    """
    console = get_error_console(file)
    if not console.is_terminal:
        console.file.write(message + "\n")
        return
    console.print(message, style=style)


def print_error(
    e: Exception,
    file: Optional[TextIO] = None,
    verbose: bool = False,
) -> None:
    """
    Print an exception for the user.

    Args:
        e: The exception to print
        file: Destination stream (default: current stderr)
        verbose: If True, print the full stack trace instead
    """
    if verbose:
        # Always use plain text for stack traces
        print(traceback.format_exc(), file=file if file is not None else sys.stderr)
        return

    print_message(format_error(e), file=file, style="bold red")


def format_error(e: Exception) -> str:
    """
    Format an exception for user-friendly display (plain text).

    Args:
        e: The exception to format

    Returns:
        Formatted error message string
    """
    if isinstance(e, CmdAppError):
        return f"Error: {e}"

    # For other exceptions, show type and message
    return f"Error: {type(e).__name__}: {e}"
