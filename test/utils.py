"""
Tests for the internal utilities.

This module verifies the semantic guarantees of the helpers shared across the package:
- Unset: singleton identity, falsy semantics, representation, copying, finality.
- coalesce: only Unset is replaced.
- rename: stable names for generated callables.
- mirror / RecordType: read-only, copied views and generated representations.
"""
import copy
import pickle
import unittest
from unittest import TestCase

from cmdsyntax.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `UnsetType` singleton.
    """

    def testSingleton(self) -> None:
        self.assertIs(UnsetType(), UnsetType())
        self.assertIs(Unset, UnsetType())

    def testFalsy(self) -> None:
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)
        self.assertNotEqual(Unset, 0)

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testCopyPreservesIdentity(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testFinal(self) -> None:
        with self.assertRaises(TypeError):
            class Subclass(UnsetType):  # NOQA
                pass

    def testUnion(self) -> None:
        self.assertIsInstance("text", str | Unset)
        self.assertIsInstance(Unset, str | Unset)


class HelpersTest(TestCase):
    """
    Test suite for coalesce(), rename() and mirror().
    """

    def testCoalesce(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce([], "fallback"), [])

    def testRename(self) -> None:
        def function():
            pass

        self.assertIs(rename(function, "renamed"), function)
        self.assertEqual(function.__name__, "renamed")
        self.assertEqual(function.__qualname__, "renamed")

    def testRenameDecorator(self) -> None:
        @rename("renamed")
        def function():
            pass

        self.assertEqual(function.__name__, "renamed")

    def testRenameRejectsBadArguments(self) -> None:
        with self.assertRaises(TypeError):
            rename("a", "b")
        with self.assertRaises(TypeError):
            rename()

    def testMirrorCopiesContainers(self) -> None:
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = [1, [2]]

        holder = Holder()
        items = holder.items
        items.append(3)
        items[1].append(4)
        self.assertEqual(holder.items, [1, [2]])
        with self.assertRaises(AttributeError):
            holder.items = []

    def testRecordType(self) -> None:
        class SampleRecord(metaclass=RecordType):
            __introspectable__ = ("name", "size")

            def __init__(self, name, size):
                self._name = name
                self._size = size

        record = SampleRecord("a", 1)
        self.assertEqual(SampleRecord.__typename__, "sample-record")
        self.assertEqual(record.name, "a")
        self.assertEqual(repr(record), "sample-record(name='a', size=1)")
        self.assertEqual(list(record.__rich_repr__()), [("name", "a"), ("size", 1)])


if __name__ == "__main__":
    unittest.main()
