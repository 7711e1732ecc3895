# Code generated by cmdapp-gen from commands.py. DO NOT EDIT.

from __future__ import annotations

from cmdapp import App, Command, default_app
from commands import action_main, action_up, action_smile


def register_commands(app: App | None = None) -> None:
    """Register the commands declared in commands."""
    if app is None:
        app = default_app()
    app.use(
        Command(
            name='',
            action=action_main,
            short='show version or usage',
            long='counter [-version] <command> [<args>]\n\nWithout a command, prints the version when -version is given.',
        )
    )
    app.use(
        Command(
            name='up',
            action=action_up,
            short='count up!',
            long='up [-f <from>] <count>\n\nCounts up to specified count. If -f flag was specified, counting starts\nwith that number.',
        )
    )
    app.use(
        Command(
            name='smile',
            action=action_smile,
            short='show smile',
            long='smile\n\nShows smile.\n\nNOTE: as this action does not call flags.parse(), passing -h to this\ncommand does not show the help.',
        )
    )
