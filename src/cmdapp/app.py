"""
Command registry and dispatcher.

An :class:`App` maps command names to :class:`~cmdapp.command.Command`
definitions, resolves an argument vector to a command, runs its action and
turns the outcome into a process exit code::

    app = App(name="counter")
    app.use(Command(name="up", action=action_up, short="count up!",
                    long="up [-f <from>] <count>"))
    app.run(sys.argv[1:])
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Sequence, TextIO, Tuple

from cmdapp.command import MAIN_COMMAND, Command
from cmdapp.flags import ErrorHandling, FlagSet
from cmdapp.outcome import Outcome, OutcomeKind, exit_code
from cmdapp.usage import command_list, program_usage
from cmdapp.utils import print_message

if TYPE_CHECKING:
    from cmdapp.config import Config

logger = logging.getLogger(__name__)

# Arguments starting with this character are flags, never command names
FLAG_PREFIX = "-"


@dataclass
class App:
    """A CLI program with commands.

    Attributes:
        name: Program name shown in the usage header
        commands: Registered commands keyed by name
        error_writer: Stream for usage and diagnostics (None = current stderr)
        flag_error_handling: Error handling of the flag sets given to actions
        exit: Process termination hook called by :meth:`run`
    """

    name: str = ""
    commands: Dict[str, Command] = field(default_factory=dict)
    error_writer: Optional[TextIO] = None
    flag_error_handling: ErrorHandling = ErrorHandling.CONTINUE_ON_ERROR
    exit: Callable[[int], object] = sys.exit

    @classmethod
    def from_config(cls, config: "Config", **overrides) -> "App":
        """Build an App from the ``[app]`` section of a loaded config."""
        settings = {
            "name": config.app.name or "",
            "flag_error_handling": ErrorHandling.from_name(config.app.flag_error_handling),
        }
        settings.update(overrides)
        return cls(**settings)

    def use(self, command: Command) -> None:
        """Register a command, replacing any command of the same name."""
        if command.name in self.commands:
            logger.debug("replacing command %r", command.name)
        self.commands[command.name] = command

    def resolve(self, args: Sequence[str]) -> Tuple[Optional[Command], List[str]]:
        """Find the command handling ``args`` and the arguments it receives.

        An empty vector, or one starting with a flag, goes to the main action
        unchanged. A leading registered name selects that command and is
        consumed. Anything else also goes to the main action, with the
        unrecognized token left in place so the main action can reject it.
        The command is None when no main action is registered for those cases.
        """
        args = list(args)
        if not args or args[0].startswith(FLAG_PREFIX):
            return self.commands.get(MAIN_COMMAND), args
        if args[0] in self.commands:
            return self.commands[args[0]], args[1:]
        return self.commands.get(MAIN_COMMAND), args

    def dispatch(self, args: Optional[Sequence[str]] = None) -> Outcome:
        """Resolve and run a command, returning how it ended.

        Prints the program usage when no command handles ``args``, and the
        command usage when the action reports a usage error.
        """
        if args is None:
            args = sys.argv[1:]

        command, rest = self.resolve(args)
        if command is None:
            logger.debug("no command for %r", list(args))
            self.print_usage()
            return Outcome.usage()

        logger.debug("dispatching %r with %r", command.name or "<main>", rest)

        flags = FlagSet(
            command.name,
            output=self.error_writer,
            error_handling=self.flag_error_handling,
            exit=self.exit,
        )

        def usage() -> None:
            out = self._writer()
            out.write(command.usage(flags) + "\n")
            if command.is_main:
                out.write(command_list(self.commands))

        flags.usage_func = usage

        try:
            outcome = Outcome.from_result(command.action(flags, rest))
        except Exception as e:
            logger.debug("command %r raised %r", command.name or "<main>", e)
            outcome = Outcome.from_error(e)

        if outcome.kind is OutcomeKind.USAGE_ERROR:
            usage()

        logger.debug("command %r finished: %s", command.name or "<main>", outcome.kind.value)
        return outcome

    def run(self, args: Optional[Sequence[str]] = None) -> None:
        """Entry point of the program.

        Dispatches ``args`` (default ``sys.argv[1:]``) and terminates through
        :attr:`exit`: 0 on success, 2 on usage errors and help requests, 1 on
        any other error after printing its message.
        """
        outcome = self.dispatch(args)
        if outcome.kind is OutcomeKind.OTHER:
            print_message(outcome.message, file=self.error_writer, style="red")
        self.exit(exit_code(outcome))

    def usage(self) -> str:
        return program_usage(self)

    def print_usage(self) -> None:
        """Print the usage of the program with its commands listed."""
        self._writer().write(self.usage())

    def _writer(self) -> TextIO:
        return self.error_writer if self.error_writer is not None else sys.stderr


__all__ = ["App", "FLAG_PREFIX"]
