"""
Tests for the plain-text layout helpers.

Scope
- Two-column layout: padding, overflow to a continuation line, embedded
  newlines and right-column wrapping.
- Alias line of anonymous option groups.
- Blank-line collapse and block indentation as pure transforms over lines.
"""
import unittest
from unittest import TestCase

from canopy.text import *


class FormatHelpTest(TestCase):

    def testPadsNameToWidth(self):
        self.assertEqual(format_help("one", "Description One", 10), "  one     Description One\n")

    def testLongNameMovesDescriptionDown(self):
        self.assertEqual(
            format_help("a-very-long-name", "descr", 10),
            "  a-very-long-name\n" + " " * 10 + "descr\n",
        )

    def testNameFillingTheColumnMovesDescriptionDown(self):
        self.assertEqual(format_help("abcd", "descr", 6), "  abcd\n      descr\n")

    def testEmptyDescription(self):
        self.assertEqual(format_help("x", "", 8), "  x     \n")

    def testEmbeddedNewlinesAreReindented(self):
        self.assertEqual(format_help("ab", "one\ntwo", 6), "  ab  one\n      two\n")

    def testWrap(self):
        self.assertEqual(format_help("ab", "alpha beta", 6, wrap=5), "  ab  alpha\n      beta\n")


class FormatAliasesTest(TestCase):

    def testAliases(self):
        self.assertEqual(format_aliases(("x", "y"), 20), " " * 11 + "aliases: x, y\n")

    def testLabelEndsAtWidth(self):
        line = format_aliases(("x",), 27)
        self.assertEqual(line.index("x"), 27)
        self.assertTrue(line.startswith(" " * 18 + "aliases: "))

    def testNoAliases(self):
        self.assertEqual(format_aliases((), 20), "")


class CollapseTest(TestCase):

    def testDropsInnerBlankLines(self):
        self.assertEqual(collapse(["a", "", "", "b", ""]), ["a", "b", ""])

    def testKeepsFirstAndLast(self):
        self.assertEqual(collapse(["", "a", "", ""]), ["", "a", ""])

    def testIdempotent(self):
        for lines in (["a", "", "", "b", ""], ["", "", "x", "", "y"], [""], ["a"]):
            with self.subTest(lines=lines):
                once = collapse(lines)
                self.assertEqual(collapse(once), once)


class IndentTest(TestCase):

    def testFirstLineIsKept(self):
        self.assertEqual(indent(["head", "x", "y"], "│  "), ["head", "│  x", "│  y"])

    def testSingleLine(self):
        self.assertEqual(indent(["head"], "  "), ["head"])


if __name__ == '__main__':
    unittest.main()
