"""
cmdapp: a small framework for command-line programs with sub-commands.

Each command has a name, a one line description, a long description whose
first line is its usage, and an action that declares and parses its own
flags. The ``cmdapp.gen`` subpackage generates the registration code from
``+command`` tags in function docstrings.

Quick Start::

    import cmdapp

    def action_smile(flags, args):
        flags.parse(args)
        print("( ^_^)")

    cmdapp.use(cmdapp.Command(name="smile", action=action_smile,
                              short="show smile", long="smile\\n\\nShows smile."))

    if __name__ == "__main__":
        cmdapp.run()

Programs that want an explicit registry construct an :class:`App` and call
``app.run()`` instead; the module-level shortcuts all operate on
:func:`default_app`.
"""

import os
import sys
from typing import Dict, Optional, Sequence

__version__ = "0.3.0"

from cmdapp.app import App
from cmdapp.command import MAIN_COMMAND, Command
from cmdapp.exceptions import CmdAppError, FlagError, HelpRequested, UsageError
from cmdapp.flags import ErrorHandling, FlagSet
from cmdapp.outcome import Outcome, OutcomeKind, exit_code

# Commands of the default app
COMMANDS: Dict[str, Command] = {}

_default_app: Optional[App] = None


def default_app() -> App:
    """Return the process-wide App, creating it on first use.

    Its name is the script name, its commands are :data:`COMMANDS`, and flag
    errors terminate the process.
    """
    global _default_app
    if _default_app is None:
        _default_app = App(
            name=os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "",
            commands=COMMANDS,
            flag_error_handling=ErrorHandling.EXIT_ON_ERROR,
        )
    return _default_app


def use(command: Command) -> None:
    """Shortcut for ``default_app().use(command)``."""
    default_app().use(command)


def dispatch(args: Optional[Sequence[str]] = None) -> Outcome:
    """Shortcut for ``default_app().dispatch(args)``."""
    return default_app().dispatch(args)


def run(args: Optional[Sequence[str]] = None) -> None:
    """Shortcut for ``default_app().run(args)``."""
    default_app().run(args)


__all__ = [
    "__version__",
    "App",
    "Command",
    "MAIN_COMMAND",
    "COMMANDS",
    "FlagSet",
    "ErrorHandling",
    "Outcome",
    "OutcomeKind",
    "exit_code",
    "CmdAppError",
    "UsageError",
    "HelpRequested",
    "FlagError",
    "default_app",
    "use",
    "dispatch",
    "run",
]
