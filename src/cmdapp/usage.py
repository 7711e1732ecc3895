"""
Usage text rendering.

Two kinds of help are produced: the program usage listing every registered
command, and the usage of a single command built from its long description
and declared flags.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping, Optional

from cmdapp.command import MAIN_COMMAND

if TYPE_CHECKING:
    from cmdapp.app import App
    from cmdapp.command import Command
    from cmdapp.flags import FlagSet

# Label shown in the command list for the main action
MAIN_LABEL = "<no command>"

# Column layout of the command list
INDENT = "    "
PADDING = 4


def program_usage(app: "App") -> str:
    """Render the program usage header followed by the command list."""
    return f"Usage: {app.name} <command> [<args>]\n\n" + command_list(app.commands)


def command_list(commands: Mapping[str, "Command"]) -> str:
    """Render the ``Commands:`` section, one line per command sorted by name.

    Short descriptions are aligned in a single column regardless of the
    length of the command names.
    """
    labels = {name: (MAIN_LABEL if name == MAIN_COMMAND else name) for name in commands}
    width = max((len(label) for label in labels.values()), default=0) + PADDING

    lines = ["Commands:\n"]
    for name in sorted(commands):
        line = f"{INDENT}{labels[name].ljust(width)}{commands[name].short}".rstrip()
        lines.append(line + "\n")
    return "".join(lines)


def command_usage(command: "Command", flags: Optional["FlagSet"] = None) -> str:
    """Render the usage of a single command.

    Returns ``"Usage: " + command.long``, followed by an ``Options:`` section
    when ``flags`` declares any options.
    """
    usage = f"Usage: {command.long}"

    if flags is None or not flags.has_flags():
        return usage

    return usage + "\n\nOptions:\n" + flags.format_defaults()


__all__ = ["program_usage", "command_list", "command_usage", "MAIN_LABEL"]
