import functools
from collections.abc import Sequence, Mapping, Set
from contextlib import contextmanager
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    internal singleton sentinel representing an "unset" value.

    intent
    - used by the accessors to distinguish "no default given" from a caller‑supplied
      default (including None or other falsy values).
    - although this class is importable, it is intended for internal use only.

    behavior
    - truthiness: bool(Unset) is False.
    - identity: Unset is a process‑wide singleton (see __new__).
    - display: repr(Unset) -> "Unset" (human‑friendly).
    - final: subclassing is forbidden to preserve semantics (see __init_subclass__).
    """

    def __or__(self, other, /):
        """
        support UnsetType | T in annotations (internal convenience only).
        """
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """
        support T | UnsetType in annotations (internal convenience only).
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        """
        return the singleton instance (process‑wide).
        """
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()
"""
internal singleton instance of UnsetType.

note
- exposed for completeness, but intended for internal API use only.
"""


def nullify(object, default=None, /):
    """
    internal helper: return `default` when `object` is Unset; otherwise return `object`.

    notes
    - falsy values such as None, 0 or "" are passed through unchanged.
    - this function does not copy; it simply passes through the object.
    """
    return default if object is Unset else object


def rename(x, /, name=None):
    """
    set a stable __name__/__qualname__ on a callable, or return a curried renamer.

    parameters
    - x: callable | str
      • callable → rename in place.
      • str      → desired name; returns a callable that will rename a future function.
    - name: str | None
      target name to assign.

    errors
    - TypeError if a callable is given and the name is not a string.
    """
    if isinstance(x, str):
        return functools.partial(rename, name=x)
    if not isinstance(name, str):
        raise TypeError("callable name must be a string")
    x.__qualname__ = name
    x.__name__ = name
    return x


class StorageGuard:
    """
    internal base that turns a class into a build-once, read-only value.

    storage convention
    - backing fields live under non-identifier names prefixed with '-'
      (e.g., '-arguments'); they cannot be read directly and are exposed
      through view() properties.

    build phase
    - toggled by the private flag '__building' on the instance.
    - __new__ is context-managed so subclasses can write backing fields safely:
        with super().__new__(cls) as self:
            setattr(self, "-field", value)
        # after the 'with' block the instance is sealed.
    - once sealed, every assignment or deletion raises AttributeError.
    - when the 'with' block exits through an exception the half-built instance
      is simply discarded; callers never observe it.
    """
    __slots__ = ("__building", "__dict__")

    @contextmanager
    def __new__(cls):
        self = super().__new__(cls)
        object.__setattr__(self, "_StorageGuard__building", True)
        try:
            yield self
        finally:
            object.__setattr__(self, "_StorageGuard__building", False)

    def __getattribute__(self, name, /):
        if isinstance(name, str) and name.startswith("-"):
            raise AttributeError("internal storage is not accessible")
        return object.__getattribute__(self, name)

    def __setattr__(self, name, value, /):
        if not self.__building:
            raise AttributeError(f"{type(self).__name__!r} object is read-only")
        return object.__setattr__(self, name, value)

    def __delattr__(self, name, /):
        raise AttributeError(f"{type(self).__name__!r} object is read-only")


def view(name):
    """
    internal: build a read-only view over a backing field.

    behavior
    - exposes a property that returns an immutable view of the underlying value:
      • Sequence (non-str) → tuple
      • Mapping           → MappingProxyType
      • Set               → frozenset
      • other types       → returned as-is
    """

    @rename(name)
    def getter(self):
        value = object.__getattribute__(self, "-" + name)
        if isinstance(value, Sequence) and not isinstance(value, str | tuple):
            return tuple(value)
        if isinstance(value, Mapping) and not isinstance(value, MappingProxyType):
            return MappingProxyType(value)
        if isinstance(value, Set) and not isinstance(value, frozenset):
            return frozenset(value)
        return value

    return property(getter)


def ordinal(number):
    """
    Return a human-friendly ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth") for nicer phrasing in messages.
    - Other numbers use numeric ordinals with correct English suffixes.
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    # 11th, 12th, 13th (and 111th, 112th, 113th, …)
    if 10 < number % 100 < 20:
        return f"{number}th"
    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


__all__ = (
    "UnsetType",
    "Unset",
    "nullify",
    "rename",
    "StorageGuard",
    "view",
    "ordinal",
)
