"""
Per-command flag parsing built on argparse.

A :class:`FlagSet` is an ``argparse.ArgumentParser`` that reports help and
malformed input as exceptions instead of exiting, so the dispatcher can turn
them into outcomes. Actions receive an empty FlagSet, declare their options
with ``add_argument`` and call :meth:`FlagSet.parse`::

    def action_up(flags, args):
        flags.add_argument("-f", dest="start", type=int, default=1,
                           help="count starts from this number")
        opts = flags.parse(args)
        for i in range(opts.start, int(opts.args[0]) + 1):
            print(i)
"""

from __future__ import annotations

import argparse
import logging
import sys
from enum import Enum
from typing import Callable, List, NoReturn, Optional, Sequence, TextIO

from cmdapp.exceptions import FlagError, HelpRequested

logger = logging.getLogger(__name__)

# Destination of the catch-all positional holding non-flag arguments
ARGS_DEST = "args"


class ErrorHandling(Enum):
    """What a FlagSet does when parsing fails or help is requested."""

    CONTINUE_ON_ERROR = "continue"
    EXIT_ON_ERROR = "exit"

    @classmethod
    def from_name(cls, name: str) -> "ErrorHandling":
        for member in cls:
            if member.value == name or member.name == name.upper():
                return member
        raise ValueError(f"unknown flag error handling: {name!r}")


class FlagSet(argparse.ArgumentParser):
    """Flag definitions and parser for a single command.

    Args:
        name: Command name, used as the parser's ``prog``
        output: Stream for help and error text (None = current stderr)
        error_handling: Raise on errors, or terminate through ``exit``
        exit: Process termination hook used with EXIT_ON_ERROR
    """

    def __init__(
        self,
        name: str = "",
        output: Optional[TextIO] = None,
        error_handling: ErrorHandling = ErrorHandling.CONTINUE_ON_ERROR,
        exit: Optional[Callable[[int], object]] = None,
    ):
        super().__init__(prog=name, add_help=True, allow_abbrev=False)
        self.name = name
        self.output = output
        self.error_handling = error_handling
        self._exit = exit if exit is not None else sys.exit
        # Called instead of argparse's help output when set. argparse already
        # owns the ``usage`` attribute (its usage string).
        self.usage_func: Optional[Callable[[], None]] = None

    def _out(self) -> TextIO:
        return self.output if self.output is not None else sys.stderr

    def parse(self, args: Sequence[str]) -> argparse.Namespace:
        """Parse ``args`` into a namespace.

        Flags are read up to the first non-flag token. Unless the action
        declared positionals of its own, the remaining tokens are collected
        in ``namespace.args``.
        """
        if not any(not action.option_strings for action in self._actions):
            self.add_argument(ARGS_DEST, nargs=argparse.REMAINDER, help=argparse.SUPPRESS)
        namespace = self.parse_args(list(args))
        logger.debug("%s: parsed flags %s", self.name or "<main>", vars(namespace))
        return namespace

    def flag_actions(self) -> List[argparse.Action]:
        """Declared options, excluding help and positionals."""
        return [
            action
            for action in self._actions
            if action.option_strings and "-h" not in action.option_strings
        ]

    def has_flags(self) -> bool:
        return bool(self.flag_actions())

    def format_defaults(self) -> str:
        """Render every declared option with its help text."""
        formatter = self.formatter_class(prog=self.prog)
        formatter.add_arguments(self.flag_actions())
        return formatter.format_help()

    def print_help(self, file: Optional[TextIO] = None) -> None:
        if self.usage_func is not None:
            self.usage_func()
            return
        self._print_message(self.format_help(), file or self._out())

    def print_usage(self, file: Optional[TextIO] = None) -> None:
        self.print_help(file)

    def exit(self, status: int = 0, message: Optional[str] = None) -> NoReturn:
        # argparse exits with status 0 right after printing help
        if message:
            self._print_message(message, self._out())
        if status == 0:
            self._terminate(HelpRequested())
        self._terminate(FlagError(message.strip() if message else None))

    def error(self, message: str) -> NoReturn:
        prefix = f"{self.prog}: " if self.prog else ""
        self._print_message(f"{prefix}error: {message}\n", self._out())
        self.print_help()
        self._terminate(FlagError(message, context={"command": self.name or "<main>"}))

    def _terminate(self, error: Exception) -> NoReturn:
        if self.error_handling is ErrorHandling.EXIT_ON_ERROR:
            self._exit(2)
        raise error


__all__ = ["ErrorHandling", "FlagSet", "ARGS_DEST"]
