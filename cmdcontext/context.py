r"""
cmdcontext command context (parsed arguments and typed accessors).

Overview
- CommandContext(arguments, valueflags=(), *, quoting="lenient", shell=False, fancy=False, colorful=True)
  • Parses one already whitespace-split command invocation. arguments[0] is the
    command name; the rest go through tokens.join() and tokens.extract().
  • Everything is computed inside the constructor; the result is a sealed,
    read-only value (see internals.StorageGuard) that is safe to share across threads.

Accessors
- Positionals: length(), get_string(), get_integer(), get_double(), arguments.
- Flags: has_flag(), get_flag(), get_flag_integer(), get_flag_double(), flags, value_flags.
- Raw input: command, get_command(), get_raw_args(), get_joined_string().

Defaults
- A default only covers absence (index out of range, flag not given). A value
  that is present but malformed always triggers NumberFormatError.
- Without a default, absence triggers ArgumentIndexError (positionals) or
  AbsentFlagError (typed flag getters). get_flag() returns None instead.

Numeric literals (ASCII digits only)
- integer: [+-]?[0-9]+
- double:  [+-]?(NaN|Infinity|<decimal>([eE][+-]?[0-9]+)?[fFdD]?) with optional
  surrounding whitespace

Example
    >>> context = CommandContext(["give", "-an", "5", "steve", "diamond sword"], "n")
    >>> context.has_flag("a"), context.get_flag_integer("n"), context.get_string(0)
    (True, 5, 'steve')
    >>> context.get_joined_string(1)
    'diamond sword'
"""
import functools
import operator
import re
from collections.abc import Sequence

from .faults import *
from .internals import Unset, StorageGuard, nullify, view, ordinal
from .tokens import join, extract, valueflags as _valueflags

_INTEGER = re.compile(r"[+-]?[0-9]+")

_DOUBLE = re.compile(r"""
    \s*
    (?:
        (?P<special>[+-]?(?:NaN|Infinity))
      | (?P<decimal>[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)[fFdD]?
    )
    \s*
""", re.VERBOSE)


def _integer(value):
    if not _INTEGER.fullmatch(value):
        raise ValueError(value)
    return int(value)


def _double(value):
    if not (match := _DOUBLE.fullmatch(value)):
        raise ValueError(value)
    return float(match["special"] or match["decimal"])


class CommandContext(StorageGuard):
    """
    Read-only view over one parsed command invocation.

    Construction
    - arguments: Sequence[str]
      Raw tokens; arguments[0] is the command name and must exist.
    - valueflags: Iterable[str] | None
      Single characters that take a value (-n 5). None or empty means every dash-letter
      bundle is made of boolean flags.
    - quoting: "lenient" | "warn" | "strict"
      Unterminated quote policy, see tokens.join().
    - shell / fancy / colorful: bool
      Fault presentation; forwarded to faults.trigger() for every fault this
      context raises, both at construction and at access time.

    Faults
    - construction: EmptyCommandError, DuplicatedValueFlagError,
      MissingFlagValueError, UnterminatedQuoteError (strict quoting only).
    - access: NumberFormatError, ArgumentIndexError, AbsentFlagError.
    """

    __displayable__ = (
        "command",
        "arguments",
        "flags",
        "value_flags",
    )

    def __new__(
            cls,
            arguments,
            valueflags=(),
            /,
            *,
            quoting="lenient",
            shell=False,
            fancy=False,
            colorful=True
    ):
        if isinstance(arguments, str) or not isinstance(arguments, Sequence):
            raise TypeError(f"{cls.__name__} arguments must be a sequence of strings")
        if not all(isinstance(argument, str) for argument in arguments):
            raise TypeError(f"{cls.__name__} arguments must be a sequence of strings")

        options = {
            "shell": bool(shell),
            "fancy": bool(fancy),
            "colorful": bool(colorful),
        }

        if not arguments:
            trigger(EmptyCommandError(
                "no command given, the input has no tokens at all",
                title="empty command",
                code=FaultCode.EMPTY_COMMAND,
                hint="the first token must be the command name",
                docs=getdoc(FaultCode.EMPTY_COMMAND),
            ), **options)

        raw = tuple(arguments)
        options["command"] = raw[0]
        flags = _valueflags(valueflags)

        tokens = join(raw[1:], 1, quoting=quoting, **options)
        booleans, values, positionals = extract(tokens, flags, **options)

        with super().__new__(cls) as self:
            setattr(self, "-raw", raw)
            setattr(self, "-arguments", positionals)
            setattr(self, "-flags", booleans)
            setattr(self, "-value_flags", values)
            setattr(self, "-options", options)
        return self

    @classmethod
    def fromline(cls, line, valueflags=(), /, **options):
        """
        Build a context from a whole command line.

        The line is split on single spaces, so runs of spaces leave empty tokens
        behind; join() drops those, while get_joined_string() keeps them and
        therefore reproduces the original spacing. A leading '/' on the command
        name is stripped ("/give steve" → command "give").
        """
        if not isinstance(line, str):
            raise TypeError(f"{cls.__name__}.fromline() argument must be a string")
        arguments = line.split(" ") if line else []
        if arguments and arguments[0].startswith("/"):
            arguments[0] = arguments[0][1:]
        return cls(arguments, valueflags, **options)

    arguments = view("arguments")
    flags = view("flags")
    value_flags = view("value_flags")

    @property
    def command(self):
        return object.__getattribute__(self, "-raw")[0]

    def _trigger(self, fault, /):
        trigger(fault, **object.__getattribute__(self, "-options"))

    def _positional(self, index, required, /):
        if not isinstance(index, int) or isinstance(index, bool):
            raise TypeError("argument index must be an integer")
        if 0 <= index < len(self.arguments):
            return self.arguments[index]
        if not required:
            return Unset
        self._trigger(ArgumentIndexError(
            "no argument at %s position, only %d given" % (
                ordinal(index + 1) if index >= 0 else "negative", len(self.arguments)
            ),
            title="argument index out of range",
            code=FaultCode.ARGUMENT_INDEX,
            hint="valid indices run from 0 to %d" % (len(self.arguments) - 1)
            if self.arguments else "this command was given no arguments",
            index=index,
            docs=getdoc(FaultCode.ARGUMENT_INDEX),
        ))

    def _convert(self, converter, value, kind, /, **context):
        try:
            return converter(value)
        except ValueError:
            self._trigger(NumberFormatError(
                "%r is not a valid %s" % (value, kind),
                title="malformed number",
                code=FaultCode.NUMBER_FORMAT,
                hint="use a literal such as %s" % ("42" if kind == "integer" else "4.2"),
                value=value,
                docs=getdoc(FaultCode.NUMBER_FORMAT),
                **context,
            ))

    def _typed(self, index, default, converter, kind, /):
        if (token := self._positional(index, default is Unset)) is Unset:
            return default
        return self._convert(converter, token.value, kind, index=index)

    def _typed_flag(self, flag, default, converter, kind, /):
        _check_flag(flag)
        if (value := self.value_flags.get(flag, Unset)) is not Unset:
            return self._convert(converter, value, kind, flag=flag)
        if default is not Unset:
            return default
        self._trigger(AbsentFlagError(
            "value flag '-%s' was not given" % flag,
            title="absent value flag",
            code=FaultCode.ABSENT_FLAG,
            hint="pass a default for optional flags",
            flag=flag,
            docs=getdoc(FaultCode.ABSENT_FLAG),
        ))

    def length(self):
        """
        Number of positional arguments (flags and flag values excluded).
        """
        return len(self.arguments)

    def get_command(self):
        return self.command

    def get_string(self, index, default=Unset):
        """
        Positional argument `index` as written (after quote joining).

        Returns `default` when the index is out of range and a default was given.
        """
        token = self._positional(index, default is Unset)
        return default if token is Unset else token.value

    def get_integer(self, index, default=Unset):
        """
        Positional argument `index` parsed as an integer.

        The default only covers an out-of-range index; a malformed value
        triggers NumberFormatError either way.
        """
        return self._typed(index, default, _integer, "integer")

    def get_double(self, index, default=Unset):
        """
        Positional argument `index` parsed as a float (same default rules as get_integer()).
        """
        return self._typed(index, default, _double, "double")

    def has_flag(self, flag):
        """
        Whether `flag` was given, either as a boolean flag or with a value.
        """
        _check_flag(flag)
        return flag in self.flags or flag in self.value_flags

    def get_flag(self, flag, default=None):
        """
        Value of the value flag `flag`, or `default` when it was not given.
        """
        _check_flag(flag)
        return nullify(self.value_flags.get(flag, Unset), default)

    def get_flag_integer(self, flag, default=Unset):
        return self._typed_flag(flag, default, _integer, "integer")

    def get_flag_double(self, flag, default=Unset):
        return self._typed_flag(flag, default, _double, "double")

    def get_joined_string(self, index):
        """
        Verbatim tail of the raw input, starting at the raw token that produced
        positional argument `index`.

        Quotes, flags and empty tokens inside the tail are kept exactly as given.
        """
        token = self._positional(index, True)
        return " ".join(object.__getattribute__(self, "-raw")[token.origin:])

    def get_raw_args(self):
        """
        The untouched raw input, command name included (index 0).
        """
        return object.__getattribute__(self, "-raw")

    def __rich_repr__(self):
        for name in type(self).__displayable__:
            yield name, getattr(self, name)

    def __repr__(self):
        return f"{type(self).__name__}({
            ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
        })"

    def __eq__(self, other):
        if not isinstance(other, CommandContext):
            return NotImplemented
        return self.get_raw_args() == other.get_raw_args() and tuple(self.__rich_repr__()) == tuple(other.__rich_repr__())

    def __hash__(self):
        return hash((self.get_raw_args(), self.arguments, self.flags, tuple(sorted(self.value_flags.items()))))


def _check_flag(flag):
    if not isinstance(flag, str) or len(flag) != 1:
        raise TypeError("flag must be a single character")


__all__ = (
    "CommandContext",
)
