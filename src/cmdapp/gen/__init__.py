"""
Generate cmdapp command registrations from function docstrings.

A function becomes a command when its docstring carries a tag::

    def action_up(flags, args):
        \"\"\"+command up - count up!

        up [-f <from>] <count>

        Counts up to specified count.
        \"\"\"

The first line gives the command name and its short description; everything
after it is the long description, whose first line is the usage line. A
``+main - <short>`` tag registers the function as the main action, run when
no command name is given. Functions whose tag does not follow this format are
skipped.

:func:`generate` writes a module defining ``register_commands(app=None)``,
which registers every tagged function on ``app`` (the default app when
omitted).
"""

from __future__ import annotations

import ast
import logging
import re
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import List, Optional, TextIO, Union

from cmdapp.command import MAIN_COMMAND
from cmdapp.exceptions import ParseError

logger = logging.getLogger(__name__)

COMMAND_MARKER = "+command"
MAIN_MARKER = "+main"

# <name> - <short>\n<long>
COMMAND_TAG_RE = re.compile(r"^[ \t]*(\S+)[ \t]+-[ \t]+(.+)\n((?s:.+))")
# - <short>\n<long>
MAIN_TAG_RE = re.compile(r"^[ \t]+-[ \t]+(.+)\n((?s:.+))")

DEFAULT_FUNCTION = "register_commands"

# Names the generated module imports from cmdapp
RESERVED_NAMES = frozenset({"App", "Command", "default_app"})

FILE_TEMPLATE = '''\
# Code generated by cmdapp-gen from {source}. DO NOT EDIT.

from __future__ import annotations

from cmdapp import App, Command, default_app
{imports}

def {function}(app: App | None = None) -> None:
    """Register the commands declared in {module}."""
    if app is None:
        app = default_app()
{registrations}'''

COMMAND_TEMPLATE = """\
    app.use(
        Command(
            name={name!r},
            action={action},
            short={short!r},
            long={long!r},
        )
    )
"""

# Longest import line emitted on a single line
MAX_LINE = 88


class TagKind(Enum):
    COMMAND = "command"
    MAIN = "main"


@dataclass(frozen=True)
class DocTag:
    """A parsed ``+command``/``+main`` tag.

    Attributes:
        kind: COMMAND or MAIN
        name: Command name ("" for the main action)
        short: One line description
        long: Long description, usage line first
        function: Name of the tagged function
        lineno: Line of the function definition
    """

    kind: TagKind
    name: str
    short: str
    long: str
    function: str = ""
    lineno: int = 0


def parse_doc_tag(doc: str) -> Optional[DocTag]:
    """Parse the command tag in a docstring.

    Returns None when the docstring has no tag or the tag is malformed.
    """
    command_pos = doc.find(COMMAND_MARKER)
    main_pos = doc.find(MAIN_MARKER)

    if command_pos != -1 and (main_pos == -1 or command_pos < main_pos):
        m = COMMAND_TAG_RE.match(doc[command_pos + len(COMMAND_MARKER):])
        if m is None:
            logger.debug("malformed %s tag: %r", COMMAND_MARKER, doc)
            return None
        name, short, long = m.groups()
        return DocTag(TagKind.COMMAND, name, short.strip(), long.strip())

    if main_pos != -1:
        m = MAIN_TAG_RE.match(doc[main_pos + len(MAIN_MARKER):])
        if m is None:
            logger.debug("malformed %s tag: %r", MAIN_MARKER, doc)
            return None
        short, long = m.groups()
        return DocTag(TagKind.MAIN, MAIN_COMMAND, short.strip(), long.strip())

    return None


def find_doc_tags(path: Union[str, Path], src: Union[str, bytes, None] = None) -> List[DocTag]:
    """Collect the tags of the top-level functions of a source file.

    Args:
        path: Source file path, read when ``src`` is not given
        src: Source text to parse instead of reading ``path``

    Returns:
        Tags in declaration order

    Raises:
        ParseError: If the source is not valid Python
        OSError: If the file cannot be read
    """
    if src is None:
        src = Path(path).read_bytes()

    try:
        tree = ast.parse(src, filename=str(path))
    except (SyntaxError, ValueError) as e:
        line = getattr(e, "lineno", None)
        column = getattr(e, "offset", None)
        raise ParseError(
            getattr(e, "msg", None) or str(e),
            file_path=path,
            line=line,
            column=column,
        ) from e

    tags = []
    for node in tree.body:
        if not isinstance(node, ast.FunctionDef):
            continue
        doc = ast.get_docstring(node)
        if not doc:
            continue
        tag = parse_doc_tag(doc)
        if tag is None:
            continue
        logger.debug("%s:%d: %s %r", path, node.lineno, node.name, tag.name or "<main>")
        tags.append(replace(tag, function=node.name, lineno=node.lineno))

    return tags


def render(
    tags: List[DocTag],
    module: str,
    source: str = "",
    function: str = DEFAULT_FUNCTION,
) -> str:
    """Render the registration module for ``tags``.

    Args:
        tags: Tags to register, in order
        module: Module the tagged functions are imported from
        source: Source file name mentioned in the header
        function: Name of the generated registration function
    """
    if not function.isidentifier():
        raise ValueError(f"invalid function name: {function!r}")
    if not all(part.isidentifier() for part in module.lstrip(".").split(".")):
        raise ValueError(f"invalid module name: {module!r}")

    imports = ""
    names = list(dict.fromkeys(tag.function for tag in tags))
    clashes = sorted(RESERVED_NAMES.intersection(names + [function]))
    if clashes:
        raise ValueError(f"names clash with the cmdapp imports: {', '.join(clashes)}")
    if names:
        imports = _format_import(module, names)

    registrations = "".join(
        COMMAND_TEMPLATE.format(
            name=tag.name,
            action=tag.function,
            short=tag.short,
            long=tag.long,
        )
        for tag in tags
    )

    return FILE_TEMPLATE.format(
        source=source or module,
        imports=imports,
        function=function,
        module=module,
        registrations=registrations,
    )


def _format_import(module: str, names: List[str]) -> str:
    line = f"from {module} import {', '.join(names)}\n"
    if len(line) <= MAX_LINE:
        return line
    body = "".join(f"    {name},\n" for name in names)
    return f"from {module} import (\n{body})\n"


def generate(
    w: TextIO,
    path: Union[str, Path],
    src: Union[str, bytes, None] = None,
    module: Optional[str] = None,
    function: str = DEFAULT_FUNCTION,
) -> List[DocTag]:
    """Read a source file for tagged command actions and write the module
    that registers them.

    Args:
        w: Destination stream
        path: Source file path
        src: Source text to use instead of reading ``path``
        module: Module to import the actions from (default: the file stem)
        function: Name of the generated registration function

    Returns:
        The tags that were registered
    """
    tags = find_doc_tags(path, src)
    code = render(
        tags,
        module=module or Path(path).stem,
        source=Path(path).name,
        function=function,
    )
    w.write(code)
    logger.debug("generated %d registration(s) from %s", len(tags), path)
    return tags


__all__ = [
    "TagKind",
    "DocTag",
    "parse_doc_tag",
    "find_doc_tags",
    "render",
    "generate",
    "COMMAND_MARKER",
    "MAIN_MARKER",
]
