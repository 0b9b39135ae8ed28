r"""
cmdcontext tokenization passes.

Overview
- Token: (value, origin) record shared by both passes. `origin` is the index
  of the raw token (in the full raw input, command name at 0) where the token
  began, so any later stage can map back to the verbatim input.

- join(arguments, start=0, *, quoting="lenient")
  • Quote joiner: merges '...' / "..." spans that cross whitespace-split tokens
    into one logical token. Empty and all-whitespace tokens outside a span are
    dropped. Unterminated spans fall back to the literal opening token.

- extract(tokens, valueflags=())
  • Flag extractor: pulls Unix-style bundles (-abc) out of the logical tokens.
    Characters in `valueflags` consume the next unconsumed token as their value;
    the rest are presence-only booleans. "--" ends flag scanning.

Data flow
    raw tokens → join() → logical tokens → extract() → flags + value flags + positionals

Both passes are pure: they build private mutable state and return frozen
containers (tuple, frozenset, MappingProxyType). Faults are surfaced through
faults.trigger(), so callers pass the same shell/fancy/colorful options they
use everywhere else as keyword arguments.

Examples
    >>> join(["'hello", "world'", "-f"], 1)
    (Token(value='hello world', origin=1), Token(value='-f', origin=3))
    >>> extract(join(["-an", "5", "pos1"], 1), "n")
    (frozenset({'a'}), mappingproxy({'n': '5'}), (Token(value='pos1', origin=3),))
"""
import re
from collections import namedtuple
from collections.abc import Iterable
from types import MappingProxyType

from .faults import *
from .internals import ordinal

QUOTES = frozenset("'\"")

QUOTING = ("lenient", "warn", "strict")

TERMINATOR = "--"

_BUNDLE = re.compile(r"-[a-zA-Z]+")


class Token(namedtuple("Token", ("value", "origin"))):
    """
    One logical token (or positional argument) and the raw index it began at.
    """
    __slots__ = ()


def _close(arguments, index, quote):
    """
    Return the index of the raw token closing the span opened at `index`, or -1.

    A token closes the span when its last character is the opening quote. The
    opening token closes itself only when it is longer than the quote alone.
    Empty tokens inside the span never close it.
    """
    for pivot in range(index, len(arguments)):
        argument = arguments[pivot]
        if pivot == index and len(argument) < 2:
            continue
        if argument and argument[-1] == quote:
            return pivot
    return -1


def join(arguments, /, start=0, *, quoting="lenient", **options):
    """
    Merge quoted multi-token spans into single logical tokens.

    Parameters
    - arguments: Sequence[str]
      Raw arguments, command name excluded.
    - start: int
      Raw index of arguments[0]; origins are start + position.
    - quoting: "lenient" | "warn" | "strict"
      What to do with an unterminated span:
      • lenient: keep the opening token literally, silently.
      • warn:    same, and trigger an UnterminatedQuoteWarning.
      • strict:  trigger an UnterminatedQuoteError.
    - options: forwarded to faults.trigger().

    Returns
    - tuple[Token, ...] in input order.
    """
    if quoting not in QUOTING:
        raise ValueError(f"join() 'quoting' must be one of {', '.join(map(repr, QUOTING))}")

    tokens = []
    index = 0
    while index < len(arguments):
        argument = arguments[index]
        if not argument.strip():
            index += 1
            continue

        if argument[0] in QUOTES:
            quote = argument[0]
            if (end := _close(arguments, index, quote)) >= 0:
                pieces = list(arguments[index:end + 1])
                pieces[0] = pieces[0][1:]
                pieces[-1] = pieces[-1][:-1]
                tokens.append(Token(" ".join(pieces), start + index))
                index = end + 1
                continue

            if quoting != "lenient":
                fault = UnterminatedQuoteError if quoting == "strict" else UnterminatedQuoteWarning
                trigger(fault(
                    "unterminated %s quote in %r at %s position" % (
                        "single" if quote == "'" else "double", argument, ordinal(start + index)
                    ),
                    title="unterminated quote",
                    code=FaultCode.UNTERMINATED_QUOTE if quoting == "strict" else FaultCode.UNTERMINATED_QUOTE_WARNING,
                    hint="close the span with a token ending in %s" % quote,
                    token=argument,
                    index=start + index,
                    docs=getdoc(FaultCode.UNTERMINATED_QUOTE),
                ), **options)

        tokens.append(Token(argument, start + index))
        index += 1

    return tuple(tokens)


def valueflags(flags, /):
    """
    Normalize a value-flag declaration into a frozenset of single characters.

    Accepts any iterable of one-character strings; a plain string is read
    character by character ("nm" declares -n and -m).
    None declares no value flags at all, same as an empty iterable.
    """
    if flags is None:
        return frozenset()
    if not isinstance(flags, Iterable):
        raise TypeError("value flags must be an iterable of single characters")
    normalized = set()
    for flag in flags:
        if not isinstance(flag, str):
            raise TypeError("value flags must be an iterable of single characters")
        if len(flag) != 1:
            raise ValueError(f"value flag {flag!r} must be a single character")
        normalized.add(flag)
    return frozenset(normalized)


def extract(tokens, flags=frozenset(), /, **options):
    """
    Separate flag bundles from positional tokens.

    Parameters
    - tokens: Sequence[Token]
      Logical tokens, typically the output of join().
    - flags: Iterable[str]
      Characters that take a value (see valueflags()).
    - options: forwarded to faults.trigger().

    Returns
    - (booleans, values, positionals)
      • booleans: frozenset[str] of presence-only flags.
      • values: MappingProxyType[str, str] of value flags.
      • positionals: tuple[Token, ...] with origins inherited unchanged.

    Faults
    - DuplicatedValueFlagError: a value flag is given twice across the input.
    - MissingFlagValueError: a value flag has no token left to consume.
    """
    flags = valueflags(flags)

    booleans = set()
    values = {}
    positionals = []

    cursor = 0
    while cursor < len(tokens):
        token = tokens[cursor]
        cursor += 1

        if token.value == TERMINATOR:
            positionals.extend(tokens[cursor:])
            break

        if not _BUNDLE.fullmatch(token.value):
            positionals.append(token)
            continue

        for flag in token.value[1:]:
            if flag not in flags:
                booleans.add(flag)
                continue

            if flag in values:
                trigger(DuplicatedValueFlagError(
                    "value flag %r already given, repeated at %s position" % (flag, ordinal(token.origin)),
                    title="duplicated value flag",
                    code=FaultCode.DUPLICATED_VALUE_FLAG,
                    hint="give -%s only once" % flag,
                    flag=flag,
                    token=token.value,
                    index=token.origin,
                    docs=getdoc(FaultCode.DUPLICATED_VALUE_FLAG),
                ), **options)

            if cursor >= len(tokens):
                trigger(MissingFlagValueError(
                    "no value specified for the '-%s' flag at %s position" % (flag, ordinal(token.origin)),
                    title="missing flag value",
                    code=FaultCode.MISSING_FLAG_VALUE,
                    hint="provide a value after the flag (e.g., -%s value)" % flag,
                    flag=flag,
                    token=token.value,
                    index=token.origin,
                    docs=getdoc(FaultCode.MISSING_FLAG_VALUE),
                ), **options)

            values[flag] = tokens[cursor].value
            cursor += 1

    return frozenset(booleans), MappingProxyType(values), tuple(positionals)


__all__ = (
    "Token",
    "join",
    "extract",
    "valueflags",
)
