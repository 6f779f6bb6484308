"""
Tests for the internal helpers and sentinels.

This module verifies:
- The Unset sentinel: singleton identity, falsiness, finality, union support.
- coalesce() and rename().
- mirror() read-only properties returning fresh container copies.
- IntrospectableType type names and representations.
- The DEFAULT_COMMAND sentinel: singleton identity, hashing, rich rendering.
"""
import copy
import io
import unittest
from collections import Counter
from unittest import TestCase

from rich.console import Console
from rich.text import Text

from termost.default import DEFAULT_COMMAND
from termost.internals import IntrospectableType
from termost.utils import Unset, UnsetType, coalesce, mirror, rename


class TestUnset(TestCase):

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testFalsy(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testNotSubclassable(self):
        with self.assertRaises(TypeError):
            type("Subclass", (UnsetType,), {})

    def testUnion(self):
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("x", str | Unset)

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)
        self.assertIsNone(coalesce(Unset))


class TestRename(TestCase):

    def testRenames(self):
        @rename("other")
        def function():
            pass

        self.assertEqual((function.__name__, function.__qualname__), ("other", "other"))

    def testInvalidArguments(self):
        with self.assertRaises(TypeError):
            rename(42)
        with self.assertRaises(TypeError):
            rename("name")("not callable")


class Record(metaclass=IntrospectableType):
    __introspectable__ = ("items", "mapping", "label")
    __displayable__ = ("label",)

    def __init__(self):
        self._items = [1, [2]]
        self._mapping = {"a": [1]}
        self._label = "record"


class TestMirror(TestCase):

    def testReadOnly(self):
        with self.assertRaises(AttributeError):
            Record().label = "other"

    def testFreshCopies(self):
        record = Record()
        record.items[1].append(3)
        record.mapping["a"].append(2)
        self.assertEqual(record.items, [1, [2]])
        self.assertEqual(record.mapping, {"a": [1]})

    def testStandaloneMirror(self):
        class Holder:
            values = mirror("values")

            def __init__(self):
                self._values = (1, 2)

        self.assertEqual(Holder().values, (1, 2))

    def testOtherMappingsAreHandedOutAsIs(self):
        class Holder:
            counts = mirror("counts")

            def __init__(self):
                self._counts = Counter("aab")

        holder = Holder()
        self.assertIs(holder.counts, holder._counts)


class TestIntrospectableType(TestCase):

    def testTypename(self):
        self.assertEqual(Record.__typename__, "record")
        self.assertEqual(IntrospectableType("StepValueHolder", (), {}).__typename__, "step-value-holder")

    def testRepr(self):
        self.assertEqual(repr(Record()), "record(label='record')")


class TestDefaultCommand(TestCase):

    def testSingleton(self):
        self.assertIs(type(DEFAULT_COMMAND)(), DEFAULT_COMMAND)
        self.assertIs(copy.copy(DEFAULT_COMMAND), DEFAULT_COMMAND)

    def testNeverEqualsAName(self):
        self.assertNotEqual(DEFAULT_COMMAND, "default")
        self.assertEqual({DEFAULT_COMMAND: 1}[DEFAULT_COMMAND], 1)

    def testRepr(self):
        self.assertEqual(repr(DEFAULT_COMMAND), "(default)")

    def testRichRendering(self):
        rendered = DEFAULT_COMMAND.__rich__()
        self.assertIsInstance(rendered, Text)
        self.assertEqual(rendered.plain, "(default)")
        console = Console(file=io.StringIO(), record=True, width=20)
        console.print(DEFAULT_COMMAND)
        self.assertIn("(default)", console.export_text())


if __name__ == "__main__":
    unittest.main()
