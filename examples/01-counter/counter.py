#!/usr/bin/env python3
"""
Example: Counter

A program with two commands and a main action, registered from docstring
tags by the generated commands_gen module.

Usage:
    python counter.py up -f 3 5
    python counter.py smile
    python counter.py -version
    python counter.py up -h
"""

import logging

import cmdapp
from commands_gen import register_commands


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    register_commands()
    cmdapp.run()


if __name__ == "__main__":
    main()
