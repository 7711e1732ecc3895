"""Command definition."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, List, Optional

if TYPE_CHECKING:
    from cmdapp.flags import FlagSet

# Name under which the main (no sub-command) action is registered
MAIN_COMMAND = ""

Action = Callable[["FlagSet", List[str]], object]


@dataclass(frozen=True)
class Command:
    """One of the commands of an App.

    Attributes:
        name: Command name; the empty string denotes the main action
        action: Implementation, called as ``action(flags, args)``. ``flags`` is
            an empty FlagSet on which the action declares and parses its own
            options; ``args`` are the arguments after the command name.
            Return None on success, raise or return UsageError to have the
            usage shown, raise anything else to fail.
        short: One line description, shown in the command list
        long: Long description. Its first line should be a usage line
            starting with the command name; shown with ``-h``.
    """

    name: str
    action: Action
    short: str = ""
    long: str = ""

    @property
    def is_main(self) -> bool:
        return self.name == MAIN_COMMAND

    def usage(self, flags: Optional["FlagSet"] = None) -> str:
        """Return the usage documentation of the command."""
        from cmdapp.usage import command_usage

        return command_usage(self, flags)


__all__ = ["Command", "Action", "MAIN_COMMAND"]
