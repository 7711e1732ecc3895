"""
Exception hierarchy for cmdapp.

Every error raised by the framework derives from :class:`CmdAppError`, which
carries optional context and suggestions and formats them into its message.
Each class also declares the :class:`~cmdapp.outcome.OutcomeKind` it maps to
when an action raises it, so the dispatcher classifies errors by kind rather
than by identity.

Example::

    from cmdapp.exceptions import UsageError

    def action_up(flags, args):
        opts = flags.parse(args)
        if not opts.args:
            raise UsageError()
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from cmdapp.outcome import OutcomeKind


class CmdAppError(Exception):
    """
    Base exception for all cmdapp errors.

    Attributes:
        message: The bare error message
        context: Dictionary of contextual information (file, line, etc.)
        suggestions: List of actionable suggestions for fixing the error
    """

    kind = OutcomeKind.OTHER
    default_message = "command failed"

    def __init__(
        self,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message if message is not None else self.default_message
        self.context = context or {}
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context and suggestions."""
        parts = [self.message]

        if self.context:
            parts.append("\n\nContext:")
            for key, value in self.context.items():
                parts.append(f"\n  {key}: {value}")

        if self.suggestions:
            parts.append("\n\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"\n  - {suggestion}")

        return "".join(parts)

    def __str__(self) -> str:
        return self._format_message()


class UsageError(CmdAppError):
    """
    The command was invoked incorrectly.

    Raise (or return) this from an action to have the dispatcher print the
    command usage and exit with code 2.
    """

    kind = OutcomeKind.USAGE_ERROR
    default_message = "usage error"


class HelpRequested(CmdAppError):
    """
    Help was requested with ``-h``/``--help``.

    Raised by :meth:`cmdapp.flags.FlagSet.parse` after the help text has been
    printed. Not a failure as such, but the program still exits with code 2.
    """

    kind = OutcomeKind.HELP_REQUESTED
    default_message = "help requested"


class FlagError(CmdAppError):
    """
    The argument list could not be parsed into flags.

    Example::

        raise FlagError(
            "unrecognized arguments: -x",
            context={"command": "up"},
        )
    """

    default_message = "invalid flags"


class ParseError(CmdAppError):
    """
    Source file could not be parsed by the generator.

    Example::

        raise ParseError(
            "invalid syntax",
            file_path="commands.py",
            line=12,
            column=4,
        )
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        file_path: Optional[Union[str, Path]] = None,
    ):
        # Build context from convenience parameters
        ctx = context or {}
        if file_path and "file" not in ctx:
            ctx["file"] = str(file_path)
        if line is not None and "line" not in ctx:
            ctx["line"] = line
        if column is not None and "column" not in ctx:
            ctx["column"] = column

        super().__init__(message, ctx, suggestions)


class ConfigError(CmdAppError):
    """
    Configuration file is invalid or unreadable.

    Example::

        raise ConfigError(
            "Invalid TOML in .cmdapp.toml",
            suggestions=["Check the file for unbalanced quotes"],
        )
    """

    pass


__all__ = [
    "CmdAppError",
    "UsageError",
    "HelpRequested",
    "FlagError",
    "ParseError",
    "ConfigError",
]
