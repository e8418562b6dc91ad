"""
Tests for grouping and tree-connector rules.

Scope
- classify(): first-seen order, case-insensitive deduplication, empty groups left out.
- siblings(): filtered by group and name, in definition order.
- resolve(): glyph and continuation bar; exactly one last per list.
- rails(): open bars of the ancestors, outermost first.
"""
import unittest
from unittest import TestCase

from canopy import CommandNode, OptionNode
from canopy.tree import *


def build():
    app = CommandNode("app", help_flag=())
    one = app.add_subcommand("one", "Description One")
    one.add_subcommand("three", "Description Three")
    one.add_subcommand("six", "Description Six")
    two = app.add_subcommand("two", "Description Two")
    four = two.add_subcommand("four", "Description Four")
    four.add_subcommand("five", "Description Five")
    app.add_subcommand("hidden", "Not listed", group="")
    return app


class ClassifyTest(TestCase):

    def testFirstSeenCaseInsensitive(self):
        options = [
            OptionNode("--a", group="Alpha"),
            OptionNode("--b", group="alpha"),
            OptionNode("--c", group="Beta"),
            OptionNode("--d", group=""),
            OptionNode("--e", group="ALPHA"),
        ]
        self.assertEqual(classify(options), ["Alpha", "Beta"])

    def testEmpty(self):
        self.assertEqual(classify([]), [])

    def testSameGroup(self):
        self.assertTrue(same_group("Subcommands", "SUBCOMMANDS"))
        self.assertFalse(same_group("Subcommands", "Commands"))


class SiblingsTest(TestCase):

    def testRootIsAlone(self):
        app = build()
        self.assertEqual(siblings(app), [app])

    def testFilteredByGroup(self):
        app = build()
        one, two, hidden = app.get_subcommands()
        self.assertEqual(siblings(one), [one, two])
        self.assertEqual(siblings(hidden), [hidden])

    def testUnnamedIsAlone(self):
        app = build()
        anonymous = app.add_subcommand("", "Grouped", group="Subcommands")
        self.assertEqual(siblings(anonymous), [anonymous])
        self.assertEqual(siblings(app.get_subcommands()[0]), app.get_subcommands()[:2])


class ResolveTest(TestCase):

    def testRootLevel(self):
        connector = resolve(build())
        self.assertEqual(connector, Connector(ANGLE, "", True))

    def testMidAndLastBranch(self):
        app = build()
        one, two, _ = app.get_subcommands()
        self.assertEqual(resolve(one), Connector(FORK, LINE, False))
        self.assertEqual(resolve(two), Connector(ANGLE, "", True))

    def testHiddenSiblingDoesNotStealLast(self):
        app = build()
        two = app.get_subcommands()[1]
        self.assertEqual(app.get_subcommands()[-1].name, "hidden")
        self.assertTrue(resolve(two).last)

    def testExplicitGroup(self):
        app = build()
        one, two, _ = app.get_subcommands()
        self.assertTrue(resolve(one, [one]).last)
        self.assertFalse(resolve(two, [two, one]).last)

    def testRails(self):
        app = build()
        one, two, _ = app.get_subcommands()
        three, six = one.get_subcommands()
        five = two.get_subcommands()[0].get_subcommands()[0]
        self.assertEqual(rails(three), (True,))
        self.assertEqual(rails(six), (True,))
        self.assertEqual(rails(five), (False, False))
        self.assertEqual(rails(app), ())
        self.assertEqual(rails(one), ())

    def testExactlyOneLast(self):
        app = build()
        for command in (app, *app.get_subcommands()):
            for group in classify(command.get_subcommands(lambda x: x.name)):
                members = command.get_subcommands(lambda x: x.name and same_group(x.group, group))
                with self.subTest(command=command.name, group=group):
                    lasts = [member for member in members if resolve(member, members).last]
                    self.assertEqual(len(lasts), 1)
                    self.assertIs(lasts[0], members[-1])

    def testBarOnlyOnNonLast(self):
        app = build()
        one, two, _ = app.get_subcommands()
        for child in (one, two):
            connector = resolve(child)
            self.assertEqual(bool(connector.bar), not connector.last)


if __name__ == '__main__':
    unittest.main()
