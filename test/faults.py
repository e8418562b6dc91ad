"""
Fault tests (codes, options, rich rendering).

Scope
- UnknownFormatModeError carries its code, title and hint as options.
- __rich__ renders a header naming the program, the message and the hint.
- Codes can be relabelled through __codes__ in __main__.
"""
import unittest
from unittest import TestCase, mock

from rich.console import Console

from canopy import CommandNode, FaultCode, RenderException, UnknownFormatModeError


def capture(renderable):
    console = Console(width=120, color_system=None, force_terminal=False)
    with console.capture() as capture:
        console.print(renderable)
    return capture.get()


class FaultTest(TestCase):

    def testOptions(self):
        fault = UnknownFormatModeError("boom", mode="bogus")
        self.assertEqual(fault.options["code"], FaultCode.UNKNOWN_FORMAT_MODE)
        self.assertEqual(fault.options["title"], "internal error")
        self.assertEqual(fault.options["mode"], "bogus")
        self.assertFalse(fault.options["colorful"])
        self.assertEqual(str(fault), "boom")

    def testOptionsAreReadOnly(self):
        with self.assertRaises(TypeError):
            UnknownFormatModeError("boom").options["code"] = 0

    def testIsRenderException(self):
        self.assertTrue(issubclass(UnknownFormatModeError, RenderException))

    def testRichWithCommand(self):
        app = CommandNode("app")
        three = app.add_subcommand("one").add_subcommand("three")
        output = capture(UnknownFormatModeError("boom", command=three))
        self.assertIn("[ app one three — 21101 | Internal Error ]", output)
        self.assertIn("boom", output)
        self.assertIn(" → pass one of the FormatMode members", output)

    def testRichWithoutCommand(self):
        output = capture(UnknownFormatModeError("boom"))
        self.assertIn("[ canopy — 21101 | Internal Error ]", output)

    def testColorfulRendersSameText(self):
        self.assertEqual(
            capture(UnknownFormatModeError("boom", colorful=True)),
            capture(UnknownFormatModeError("boom")),
        )

    def testHostCodes(self):
        codes = {FaultCode.UNKNOWN_FORMAT_MODE: "E-MODE"}
        with mock.patch.object(__import__("__main__"), "__codes__", codes, create=True):
            self.assertEqual(FaultCode.UNKNOWN_FORMAT_MODE.normalize(), "E-MODE")
            self.assertIn("[ canopy — E-MODE | Internal Error ]", capture(UnknownFormatModeError("boom")))


if __name__ == '__main__':
    unittest.main()
