"""
Plain-text layout helpers for help output.

- format_help(name, descr, width): two-column line (name left, description right).
- format_aliases(aliases, width): the "aliases:" line of an option group.
- collapse(lines) / indent(lines, prefix): the two transforms applied to an
  expanded command block, as pure functions over a list of lines.
"""
import textwrap


def format_help(name, descr, width, /, wrap=None):
    """
    Lay out one entry as a left column and a right column.

    The left column is the name indented by two spaces and padded to width.
    When the padded name reaches width, the description starts on the next
    line instead, indented by width spaces. Newlines inside the description
    are re-indented the same way, and wrap (when given) folds each line of
    the description to that many columns first.

    >>> format_help("one", "Description One", 10)
    '  one     Description One\\n'
    >>> format_help("a-very-long-name", "descr", 10)
    '  a-very-long-name\\n          descr\\n'
    """
    name = "  " + name
    out = name.ljust(width)
    if descr:
        if len(name) >= width:
            out += "\n" + " " * width
        lines = descr.split("\n")
        if wrap:
            lines = [wrapped for line in lines for wrapped in (textwrap.wrap(line, wrap) or [""])]
        out += ("\n" + " " * width).join(lines)
    return out + "\n"


def format_aliases(aliases, width, /):
    """
    Render the alias line printed under an anonymous option group.

    The label is right-aligned to width so the aliases start in the
    description column.

    >>> format_aliases(("x", "y"), 20)
    '           aliases: x, y\\n'
    """
    if not aliases:
        return ""
    label = "     aliases: ".rjust(width)
    separator = "\n" + " " * len(label)
    return label + ", ".join(alias.replace("\n", separator) for alias in aliases) + "\n"


def collapse(lines, /):
    """
    Drop the empty lines left between consecutive line breaks.

    The first line and the last one (the empty string after a final line
    break) are kept, so the result still starts and ends like the input.
    Applying it twice gives the same result as applying it once.
    """
    return [line for index, line in enumerate(lines) if line or index in (0, len(lines) - 1)]


def indent(lines, prefix, /):
    """
    Prefix every line but the first (the block's own header) with prefix.
    """
    return lines[:1] + [prefix + line for line in lines[1:]]


__all__ = (
    "format_help",
    "format_aliases",
    "collapse",
    "indent",
)
