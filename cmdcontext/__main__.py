"""
Inspect how a command invocation is parsed.

    python -m cmdcontext [--value-flags=CHARS] COMMAND [ARGS...]

The parsed context is pretty-printed with rich; faults are rendered on stderr
and exit with status 1.
"""
import sys

from rich.pretty import pprint

from .context import CommandContext

__prog__ = "cmdcontext"


def main(argv=None, /):
    arguments = list(sys.argv[1:] if argv is None else argv)
    valueflags = ""
    if arguments and arguments[0].startswith("--value-flags="):
        valueflags = arguments.pop(0).partition("=")[2]
    context = CommandContext(arguments, valueflags, shell=True, fancy=True)
    pprint(context)
    return context


if __name__ == '__main__':
    main()
