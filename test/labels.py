"""
Tests for the label table.

Scope
- Built-in defaults, pass-through of unknown keys.
- Overrides from the constructor, from label(), and from __labels__ in __main__.
"""
import unittest
from unittest import TestCase, mock

from canopy.labels import LabelTable


class LabelTableTest(TestCase):

    def testDefaultsMapToThemselves(self):
        labels = LabelTable()
        for key in ("Usage", "OPTIONS", "REQUIRED", "Needs", "Excludes", "Env", "Positionals", "SUBCOMMAND", "SUBCOMMANDS"):
            with self.subTest(key=key):
                self.assertEqual(labels[key], key)

    def testUnknownKeysPassThrough(self):
        self.assertEqual(LabelTable().get_label("TEXT"), "TEXT")
        with self.assertRaises(KeyError):
            LabelTable()["TEXT"]

    def testConstructorOverrides(self):
        labels = LabelTable({"Usage": "Uso"})
        self.assertEqual(labels.get_label("Usage"), "Uso")
        self.assertEqual(labels.get_label("OPTIONS"), "OPTIONS")

    def testLabel(self):
        labels = LabelTable()
        labels.label("TEXT", "STRING")
        self.assertEqual(labels.get_label("TEXT"), "STRING")
        self.assertIn("TEXT", labels)

    def testLabelRejectsNonStrings(self):
        with self.assertRaises(TypeError):
            LabelTable().label("Usage", 3)

    def testHostOverrides(self):
        with mock.patch.object(__import__("__main__"), "__labels__", {"Usage": "Usage du programme"}, create=True):
            self.assertEqual(LabelTable().get_label("Usage"), "Usage du programme")
            self.assertEqual(LabelTable({"Usage": "Uso"}).get_label("Usage"), "Uso")

    def testHostOverridesMustBeAMapping(self):
        with mock.patch.object(__import__("__main__"), "__labels__", ["Usage"], create=True):
            with self.assertRaises(TypeError):
                LabelTable().get_label("Usage")


if __name__ == '__main__':
    unittest.main()
