"""
cmdcontext faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing issues
  (errors and warnings). Codes are grouped by phase so that logs and searches
  stay predictable.
- CommandException / CommandWarning: base types that carry message + options and
  know how to render themselves in a friendly, lowercased, and actionable way.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

Phases
- construction faults (EmptyCommandError, DuplicatedValueFlagError,
  MissingFlagValueError, UnterminatedQuoteError) abort the parse; no partial
  context is ever returned.
- access faults (NumberFormatError, ArgumentIndexError, AbsentFlagError) are
  raised to the caller of one accessor and leave the context usable. They also
  derive from the matching builtin (ValueError, IndexError, LookupError) so
  plain `except ValueError` call sites keep working.

Integration
- CommandContext triggers faults with trigger(fault, **options), forwarding its
  own shell/fancy/colorful options and the command name.
- In non-shell mode, exceptions are raised and warnings go through `warnings`;
  in shell mode, both are rendered via rich on stderr.
"""
import copy
import inspect
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .internals import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - construction (1111x)
      • EMPTY_COMMAND, DUPLICATED_VALUE_FLAG, MISSING_FLAG_VALUE, UNTERMINATED_QUOTE
    - access (1113x)
      • NUMBER_FORMAT, ARGUMENT_INDEX, ABSENT_FLAG
    - warnings (1211x)
      • UNTERMINATED_QUOTE_WARNING
    """
    # --- construction errors (111xx) ---
    EMPTY_COMMAND               = 11111
    DUPLICATED_VALUE_FLAG       = 11112
    MISSING_FLAG_VALUE          = 11113
    UNTERMINATED_QUOTE          = 11114

    # --- access errors (113xx) ---
    NUMBER_FORMAT               = 11131
    ARGUMENT_INDEX              = 11132
    ABSENT_FLAG                 = 11133

    # --- warnings (12xxx) ---
    UNTERMINATED_QUOTE_WARNING  = 12111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette):
    """
    shared rich renderable for errors and warnings.

    palette keys are the style names used by the header/body; the host may
    override any of them through a __styles__ mapping in __main__.
    """
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", True)
    fancy = options.get("fancy", False)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), styles[style])

    code = options.get("code")
    header = Text.assemble(
        "[ ",
        text(getattr(main, "__prog__", options.get("command") or "cmdcontext"), "prog-name"),
        " — ",
        text(code.normalize() if isinstance(code, FaultCode) else "?", "code"),
        " | ",
        text(str(options.get("title", type(fault).__name__)).title(), "title"),
        " ]"
    )
    message = text(fault.message, "message")
    hint = options.get("hint")
    body = [message]
    if hint:
        body.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

    if fancy:
        width = console.width - 4
        try:
            width = int(width * options["ratio"])
        except KeyError:
            width = None
        return Panel(Group(*body), title=header, title_align="left", width=width)

    return Group(header, *body)


class CommandException(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return "" if self.message is Unset else self.message

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "title": "bold #FF4DA6",  # friendly pinky title

            # body
            "message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class EmptyCommandError(CommandException): ...
class DuplicatedValueFlagError(CommandException): ...
class MissingFlagValueError(CommandException): ...
class UnterminatedQuoteError(CommandException): ...

class NumberFormatError(CommandException, ValueError): ...
class ArgumentIndexError(CommandException, IndexError): ...
class AbsentFlagError(CommandException, LookupError): ...


class CommandWarning(ABC, Warning):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return "" if self.message is Unset else self.message

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnterminatedQuoteWarning(CommandWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console; otherwise, exceptions are
      raised and warnings are emitted.

    typical options
    - command, shell, fancy, colorful, title, code, hint, docs, and any other
      context the reporter may want to show (e.g., token/index/flag/value).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    lookup
    - the host application may expose a __docs__ mapping in __main__ where keys
      are FaultCode instances and values are short documentation strings.
    - when not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "CommandException",
    "EmptyCommandError",
    "DuplicatedValueFlagError",
    "MissingFlagValueError",
    "UnterminatedQuoteError",
    "NumberFormatError",
    "ArgumentIndexError",
    "AbsentFlagError",
    "CommandWarning",
    "UnterminatedQuoteWarning",
    "FaultCode",
    "trigger",
    "getdoc",
)
