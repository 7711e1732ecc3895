"""
Commands of the counter example.

The docstring tags below are turned into commands by cmdapp-gen; rerun it
after changing them:

    cmdapp-gen -o commands_gen.py commands.py
"""

import logging

from cmdapp import UsageError

log = logging.getLogger("counter")

VERSION = "1.0"


def action_main(flags, args):
    """+main - show version or usage

    counter [-version] <command> [<args>]

    Without a command, prints the version when -version is given.
    """
    flags.add_argument("-version", action="store_true", help="print the version")
    opts = flags.parse(args)
    if opts.args:
        log.error("unknown command: %s", opts.args[0])
        raise UsageError()
    if not opts.version:
        raise UsageError()
    log.info("counter %s", VERSION)


def action_up(flags, args):
    """+command up - count up!

    up [-f <from>] <count>

    Counts up to specified count. If -f flag was specified, counting starts
    with that number.
    """
    flags.add_argument("-f", dest="start", type=int, default=1, help="count starts from this number")
    opts = flags.parse(args)

    if len(opts.args) < 1:
        raise UsageError()

    count = int(opts.args[0], 0)
    for i in range(opts.start, count + 1):
        log.info("count: %d", i)


def action_smile(flags, args):
    """+command smile - show smile

    smile

    Shows smile.

    NOTE: as this action does not call flags.parse(), passing -h to this
    command does not show the help.
    """
    log.info("( ^_^)")
