"""
cmdapp-gen: write the command registration module for a source file.

Usage:
    cmdapp-gen -o commands_gen.py commands.py
    cmdapp-gen -o myprog/_commands.py -m myprog.commands myprog/commands.py

Options not given on the command line are taken from the ``[gen]`` section
of .cmdapp.toml.
"""

import argparse
import io
import logging
import sys
from pathlib import Path
from typing import List, Optional

from cmdapp import __version__
from cmdapp.config import Config, get_config_paths
from cmdapp.exceptions import CmdAppError
from cmdapp.gen import generate
from cmdapp.logging import enable_verbose
from cmdapp.utils import print_error

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for cmdapp-gen."""
    parser = argparse.ArgumentParser(
        prog="cmdapp-gen",
        description="Generate cmdapp command registrations from +command docstrings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("input", nargs="?", help="Python source file to scan")
    parser.add_argument("-o", "--out", help="Output file")
    parser.add_argument(
        "-m", "--module", help="Module to import the actions from (default: input file stem)"
    )
    parser.add_argument(
        "-f", "--function", help="Name of the generated function (default: register_commands)"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log each discovered command and show tracebacks on errors",
    )
    parser.add_argument("--version", action="version", version=f"cmdapp-gen {__version__}")

    args = parser.parse_args(argv)

    if args.verbose:
        enable_verbose("DEBUG")

    try:
        config = Config.load()
    except CmdAppError as e:
        print_error(e, verbose=args.verbose)
        return 1

    out = args.out or config.gen.output
    if not out:
        parser.error("-o/--out should be specified")
    if not args.input:
        parser.error("input file required")

    module = args.module or config.gen.module
    function = args.function or config.gen.function

    logger.debug("config files: %s", get_config_paths())
    if not args.out:
        logger.debug("output %s from %s", out, config.get_source("gen.output"))

    # Generate into memory first so a failed run leaves no partial output
    buf = io.StringIO()
    try:
        tags = generate(buf, args.input, module=module, function=function)
    except (CmdAppError, OSError, ValueError) as e:
        print_error(e, verbose=args.verbose)
        return 1

    try:
        Path(out).write_text(buf.getvalue(), encoding="utf-8")
    except OSError as e:
        print_error(e, verbose=args.verbose)
        return 1

    logger.info("wrote %d command(s) from %s to %s", len(tags), args.input, out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
