"""
Console output of rendered help.

display() renders a command and prints the text through rich. The text is
printed as-is: markup, highlighting and re-wrapping are disabled so the
columns computed by the formatter survive. With colorful=True, the usage
label, section headers and tree glyphs are styled.

Palette keys
- usage-label, group-label, tree-glyph, required-label

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
"""
import re
from collections import defaultdict

from rich.console import Console
from rich.text import Text

from .nodes import FormatMode
from .tree import LINE, ANGLE, FORK
from .utils import Unset, coalesce


def stylize(help, /, *, colorful=False, labels=Unset):
    """
    Wrap rendered help into a rich Text, styled when colorful is set.
    """
    text = Text(help, end="")
    if not colorful:
        return text

    styles = defaultdict(str, {
        "usage-label": "bold #00E6FF",
        "group-label": "bold #FFFFFF",
        "tree-glyph": "#4B5563",
        "required-label": "bold #FF4D94",
    } | getattr(__import__("__main__"), "__styles__", {}))

    usage = coalesce(labels, {}).get("Usage", "Usage")
    required = coalesce(labels, {}).get("REQUIRED", "REQUIRED")

    text.highlight_regex(rf"(?m)^{re.escape(usage)}:", styles["usage-label"])
    text.highlight_regex(rf"(?m)^[^\s{LINE}{ANGLE}{FORK}][^\n]*:$", styles["group-label"])
    text.highlight_regex(rf"[{LINE}{ANGLE}{FORK}]", styles["tree-glyph"])
    text.highlight_regex(rf"\b{re.escape(required)}\b", styles["required-label"])
    return text


def display(command, mode=FormatMode.NORMAL, /, *, name=Unset, console=Unset, colorful=False):
    """
    Render the help of command and print it.

    Parameters
    - command: CommandNode
    - mode: FormatMode
    - name: str | Unset
      Invocation name (defaults to the route from the root).
    - console: rich.console.Console | Unset
      Destination; defaults to a console on standard output.
    - colorful: bool
      Apply the palette.
    """
    console = coalesce(console, Console())
    help = command.help(name, mode)
    console.print(
        stylize(help, colorful=colorful, labels=command.formatter.labels if colorful else Unset),
        markup=False,
        highlight=False,
        soft_wrap=True,
        end="",
    )


__all__ = (
    "stylize",
    "display",
)
