"""
Tests for the shared helpers (Unset sentinel, coalesce, rename, mirror).

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from canopy.utils import *


class UnsetTest(TestCase):

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsyAndPrintable(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testFinal(self):
        with self.assertRaises(TypeError):
            class Subclass(UnsetType):  # NOQA: F-841
                pass

    def testUnionWithTypes(self):
        self.assertIsInstance("text", str | Unset)
        self.assertIsInstance(Unset, str | Unset)
        self.assertNotIsInstance(3, str | Unset)


class CoalesceTest(TestCase):

    def testUnsetIsReplaced(self):
        self.assertEqual(coalesce(Unset, 25), 25)
        self.assertIsNone(coalesce(Unset))

    def testFalsyValuesAreKept(self):
        for value in (None, 0, "", ()):
            with self.subTest(value=value):
                self.assertIs(coalesce(value, "default"), value)


class RenameTest(TestCase):

    def testDirectForm(self):
        def function():
            pass
        self.assertIs(rename(function, "renamed"), function)
        self.assertEqual(function.__name__, "renamed")
        self.assertEqual(function.__qualname__, "renamed")

    def testDecoratorForm(self):
        @rename("renamed")
        def function():
            pass
        self.assertEqual(function.__name__, "renamed")

    def testRejectsBadArguments(self):
        with self.assertRaises(TypeError):
            rename(3, "name")
        with self.assertRaises(TypeError):
            rename(lambda: None, 3)
        with self.assertRaises(TypeError):
            rename()


class MirrorTest(TestCase):

    def testContainersAreCopied(self):
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = [1, [2, 3]]

        holder = Holder()
        items = holder.items
        items.append(4)
        items[1].append(5)
        self.assertEqual(holder.items, [1, [2, 3]])

    def testReadOnly(self):
        class Holder:
            value = mirror("value")

            def __init__(self):
                self._value = 1

        with self.assertRaises(AttributeError):
            Holder().value = 2


if __name__ == '__main__':
    unittest.main()
