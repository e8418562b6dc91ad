"""
Canopy faults.

Scope
- FaultCode: stable numeric identifiers for the failures the renderer can raise.
- RenderException: base type carrying a message plus context options, able to
  render itself through rich.
- UnknownFormatModeError: a format mode reached a switch that expects an
  exhaustive set of modes. This is a defect in the caller or in a custom
  formatter, never a user input problem, so it is always raised.

Rendering
- console.print(fault) shows a one-line header "[ <program> — <code> | <title> ]"
  followed by the message and a hint. Colors follow the palette below and can
  be overridden through a __styles__ mapping in __main__; codes can be
  relabelled through a __codes__ mapping in __main__.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.text import Text

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes of the renderer.

    grouping
    - internal consistency (21xxx)
      • UNKNOWN_FORMAT_MODE
    """
    # --- internal consistency (21xxx) ---
    UNKNOWN_FORMAT_MODE = 21101

    def normalize(self):
        """
        return the host-normalized label of this code (see __codes__ in __main__).
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class RenderException(Exception):
    """
    Base class of renderer failures.

    Options commonly carried
    - code: FaultCode
    - title: short, lowercase headline
    - hint: one actionable sentence
    - command: the node being rendered (its route names the program)
    - colorful: whether __rich__ applies the palette
    """
    code = Unset
    title = Unset
    hint = Unset

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType({
            "code": self.code,
            "title": self.title,
            "hint": self.hint,
            "colorful": False,
        } | options)

    def __rich__(self):
        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(__import__("__main__"), "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            return Text(str(fragment), styles[style] if self.options["colorful"] else "")

        command = self.options.get("command")
        prog = " ".join(node.name for node in command.path if node.name) if command is not None else "canopy"
        code = self.options["code"]

        header = Text.assemble(
            "[ ",
            text(prog, "prog-name"),
            " — ",
            text(code.normalize() if code else "?", "code"),
            " | ",
            text(str(self.options["title"] or "error").title(), "error-title"),
            " ]",
        )
        renders = [header, text(self.message, "error-message")]
        if self.options["hint"]:
            renders.append(Text.assemble(text(" → ", "hint-arrow"), text(self.options["hint"], "hint")))
        return Group(*renders)


class UnknownFormatModeError(RenderException):
    code = FaultCode.UNKNOWN_FORMAT_MODE
    title = "internal error"
    hint = "pass one of the FormatMode members"


__all__ = (
    "FaultCode",
    "RenderException",
    "UnknownFormatModeError",
)
