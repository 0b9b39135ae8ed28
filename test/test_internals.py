"""
Tests for internal helpers.

This module verifies:
- Unset sentinel semantics (singleton, falsy, stable repr, final type).
- nullify() and rename() contracts.
- StorageGuard sealing and view() freezing.
- ordinal() labels used in fault messages.
"""
import unittest
from types import MappingProxyType
from unittest import TestCase

from cmdcontext.internals import *


class Box(StorageGuard):
    items = view("items")
    names = view("names")
    index = view("index")

    def __new__(cls, items, names, index):
        with super().__new__(cls) as self:
            setattr(self, "-items", list(items))
            setattr(self, "-names", dict(names))
            setattr(self, "-index", set(index))
        return self


class UnsetTest(TestCase):
    """
    Test suite for the Unset sentinel and nullify().
    """

    def testSingleton(self) -> None:
        self.assertIs(Unset, UnsetType())

    def testFalsy(self) -> None:
        self.assertFalse(bool(Unset))

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testFinalClass(self) -> None:
        with self.assertRaises(TypeError):
            type("UnsetChild", (UnsetType,), {})

    def testNullify(self) -> None:
        """
        Only the sentinel is replaced; other falsy values pass through.
        """
        self.assertEqual(nullify(Unset, "fallback"), "fallback")
        self.assertIsNone(nullify(Unset))
        self.assertIsNone(nullify(None, "fallback"))
        self.assertEqual(nullify(0, 5), 0)


class RenameTest(TestCase):

    def testFunctionForm(self) -> None:
        def original(): ...
        rename(original, "renamed")
        self.assertEqual(original.__name__, "renamed")
        self.assertEqual(original.__qualname__, "renamed")

    def testCurriedForm(self) -> None:
        @rename("renamed")
        def original(): ...
        self.assertEqual(original.__name__, "renamed")

    def testNameMustBeString(self) -> None:
        with self.assertRaises(TypeError):
            rename(lambda: None, 1)


class StorageGuardTest(TestCase):
    """
    Test suite for StorageGuard sealing and view() freezing.
    """

    def setUp(self) -> None:
        self.box = Box([1, 2], {"a": 1}, {3})

    def testViewsAreFrozen(self) -> None:
        self.assertEqual(self.box.items, (1, 2))
        self.assertIsInstance(self.box.names, MappingProxyType)
        self.assertEqual(self.box.index, frozenset({3}))

    def testSealedAfterBuild(self) -> None:
        with self.assertRaises(AttributeError):
            self.box.items = (3,)
        with self.assertRaises(AttributeError):
            setattr(self.box, "-items", [])
        with self.assertRaises(AttributeError):
            del self.box.items

    def testBackingStorageHidden(self) -> None:
        with self.assertRaises(AttributeError):
            getattr(self.box, "-items")

    def testFailedBuildLeavesNothingBehind(self) -> None:
        with self.assertRaises(TypeError):
            Box([1], 5, ())


class OrdinalTest(TestCase):

    def testWords(self) -> None:
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(3), "third")
        self.assertEqual(ordinal(10), "tenth")

    def testSuffixes(self) -> None:
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(103), "103rd")
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(112), "112th")
        self.assertEqual(ordinal(0), "0th")


if __name__ == '__main__':
    unittest.main()
