"""
Canopy help formatters.

What this module provides
- FormatterBase: the renderer interface (column width, right-column wrap,
  label table, make_help).
- Formatter: the tree renderer. Builds usage lines, option groups and a
  pseudographic tree of nested subcommands:

      Subcommands:
      ├  one                    Description One
      │  ├  three               Description Three
      │  └  six                 Description Six
      │
      └  two                    Description Two
         └  four                Description Four

- FormatterLambda: adapts a plain callable into a formatter.
- render(command, name, mode): entry point; picks the node's formatter.

Every make_* method returns a fresh string and only reads the tree, so a
subclass can override any single piece (an option's "opts" column, the
footer, the usage line) and keep the rest.

Layout by mode
- NORMAL / ALL / ALL_COMPACT: description, usage, positionals, option groups,
  subcommand listing, blank line, footer.
- SUB / SUB_COMPACT: the command as an indented block (make_expanded).
"""
import logging
from abc import ABC, abstractmethod

from .faults import UnknownFormatModeError
from .labels import LabelTable
from .nodes import CommandNode, FormatMode
from .text import format_help, format_aliases, collapse, indent
from .tree import classify, same_group, resolve
from .utils import Unset, coalesce

logger = logging.getLogger(__name__)


class FormatterBase(ABC):
    """
    Interface and shared configuration of help formatters.

    Parameters
    - column_width: int
      Width of the left column (names), including its two-space indent.
    - labels: Mapping[str, str]
      Label overrides (see canopy.labels).
    - wrap: int | None
      Width the right column (descriptions) is folded to; None keeps lines whole.
    """

    def __init__(self, column_width=30, /, labels=(), *, wrap=None):
        self.column_width = column_width
        self.wrap = wrap
        self._labels = LabelTable(labels)

    @property
    def column_width(self):
        return self._column_width

    @column_width.setter
    def column_width(self, value):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError("formatter 'column_width' must be an integer")
        elif value < 1:
            raise ValueError("formatter 'column_width' must be a positive integer")
        self._column_width = value

    @property
    def wrap(self):
        return self._wrap

    @wrap.setter
    def wrap(self, value):
        if value is not None and (not isinstance(value, int) or isinstance(value, bool)):
            raise TypeError("formatter 'wrap' must be an integer or None")
        elif value is not None and value < 1:
            raise ValueError("formatter 'wrap' must be a positive integer")
        self._wrap = value

    @property
    def labels(self):
        return self._labels

    def label(self, key, value, /):
        self._labels.label(key, value)

    def get_label(self, key, /):
        return self._labels.get_label(key)

    @abstractmethod
    def make_help(self, command, name, mode):
        """
        Return the help text of command, invoked as name, in the given mode.
        """
        raise NotImplementedError

    def __call__(self, command, name, mode):
        return self.make_help(command, name, mode)


class FormatterLambda(FormatterBase):
    """
    Formatter backed by a callable(command, name, mode) -> str.
    """

    def __init__(self, callback, /):
        if not callable(callback):
            raise TypeError("formatter-lambda callback must be callable")
        super().__init__()
        self._callback = callback

    def make_help(self, command, name, mode):
        return self._callback(command, name, mode)


class Formatter(FormatterBase):
    """
    Default tree formatter.

    The left column defaults to 25 characters, which keeps the tree listing
    compact; pass another width (or set column_width) to widen it.
    """

    def __init__(self, column_width=25, /, labels=(), *, wrap=None):
        super().__init__(column_width, labels, wrap=wrap)

    def _format_help(self, name, descr):
        return format_help(name, descr, self.column_width, self.wrap)

    # ── Options ─────────────────────────────────────────────────────────────

    def make_option_name(self, option, positional):
        if positional:
            return option.get_name(True, False)
        return option.get_name(False, True)

    def make_option_opts(self, option):
        """
        Return the annotation written after an option's name.

        A custom option_text replaces everything. Otherwise, for options
        taking values: type label, [default], " ..." (unbounded) or " x N"
        (more than one value), REQUIRED; then, for every option, the
        environment variable and the Needs/Excludes references.
        """
        if option.option_text:
            return " " + option.option_text

        out = ""
        if option.type_size != 0:
            if option.type_name:
                out += " " + self.get_label(option.type_name)
            if option.default:
                out += " [" + option.default + "] "
            if option.unbounded:
                out += " ..."
            elif option.expected_min > 1:
                out += " x " + str(option.expected)
            if option.required:
                out += " " + self.get_label("REQUIRED")
        if option.envname:
            out += " (" + self.get_label("Env") + ":" + option.envname + ")"
        if needs := option.needs:
            out += " " + self.get_label("Needs") + ":" + "".join(" " + x.get_name() for x in needs)
        if excludes := option.excludes:
            out += " " + self.get_label("Excludes") + ":" + "".join(" " + x.get_name() for x in excludes)
        return out

    def make_option_desc(self, option):
        return option.descr

    def make_option(self, option, positional):
        return self._format_help(
            self.make_option_name(option, positional) + self.make_option_opts(option),
            self.make_option_desc(option),
        )

    def make_option_usage(self, option):
        """
        Return the usage token of a positional: name, name... or name(Nx),
        bracketed when the positional is optional.
        """
        out = self.make_option_name(option, True)
        if option.unbounded:
            out += "..."
        elif option.expected_max > 1:
            out += "(" + str(option.expected) + "x)"
        return out if option.required else "[" + out + "]"

    # ── Sections ────────────────────────────────────────────────────────────

    def make_group(self, group, positional, options):
        return "\n" + group + ":\n" + "".join(self.make_option(option, positional) for option in options)

    def make_positionals(self, command):
        options = command.get_options(lambda x: x.group and x.positional)
        if not options:
            return ""
        return self.make_group(self.get_label("Positionals"), True, options)

    def make_groups(self, command, mode):
        """
        Return every named option group, separated by blank lines.

        Nested views (SUB, SUB_COMPACT) leave the built-in help, help-all and
        autocomplete flags out.
        """
        hidden = []
        if mode in (FormatMode.SUB, FormatMode.SUB_COMPACT):
            hidden = [command.help_option, command.help_all_option, command.autocomplete_option]

        blocks = []
        for group in classify(command.get_options()):
            options = command.get_options(
                lambda x: same_group(x.group, group) and x.nonpositional and not any(x is y for y in hidden)
            )
            if options:
                blocks.append(self.make_group(group, False, options))
        return "\n".join(blocks)

    def make_description(self, command):
        """
        Return the description followed by the option requirement clause.
        """
        descr = command.descr
        minimum, maximum = command.require_option_min, command.require_option_max

        if command.required:
            descr += " " + self.get_label("REQUIRED") + " "

        if minimum == maximum and minimum > 0:
            if minimum == 1:
                descr += " \n[Exactly 1 of the following options is required]"
            else:
                descr += " \n[Exactly " + str(minimum) + "options from the following list are required]"
        elif maximum > 0:
            if minimum > 0:
                descr += f" \n[Between {minimum} and {maximum} of the follow options are required]"
            else:
                descr += f" \n[At most {maximum} of the following options are allowed]"
        elif minimum > 0:
            descr += f" \n[At least {minimum} of the following options are required]"

        return descr + "\n" if descr else ""

    def make_usage(self, command, name):
        out = self.get_label("Usage") + ":" + (" " + name if name else "")

        if command.get_options(lambda x: x.nonpositional):
            out += " [" + self.get_label("OPTIONS") + "]"

        if positionals := command.get_options(lambda x: x.group and x.positional):
            out += " " + " ".join(map(self.make_option_usage, positionals))

        if command.get_subcommands(lambda x: not x.disabled and x.name):
            minimum, maximum = command.require_subcommand_min, command.require_subcommand_max
            label = self.get_label("SUBCOMMANDS" if max(minimum, maximum) > 1 else "SUBCOMMAND")
            out += " " + (label if minimum else "[" + label + "]")

        return out + "\n"

    def make_footer(self, command):
        if not command.footer:
            return ""
        return "\n" + command.footer + "\n"

    # ── Subcommands ─────────────────────────────────────────────────────────

    def make_subcommand(self, command):
        return self._format_help(command.display_name(True), command.descr)

    def _delegate(self, command, mode):
        # Children render through their own formatter when they carry one.
        formatter = coalesce(command._formatter, self)
        if formatter is not self:
            logger.debug("delegating %r to %r", command.name, formatter)
        return formatter.make_help(command, command.name, mode)

    def make_subcommands(self, command, mode):
        """
        Return the subcommand listing of command.

        Anonymous grouped children are expanded first, without header. Then,
        per group: a header (except in SUB_COMPACT) and each named child,
        drawn according to mode.
        """
        out = []
        children = command.get_subcommands()

        for child in children:
            if not child.name and child.group:
                out.append(self.make_expanded(child))

        for group in classify(child for child in children if child.name):
            if mode is not FormatMode.SUB_COMPACT:
                out.append("\n" + group + ":\n")

            members = command.get_subcommands(lambda x: x.name and same_group(x.group, group))
            for child in members:
                connector = resolve(child, members)
                match mode:
                    case FormatMode.ALL:
                        out.append(connector.glyph + self._delegate(child, FormatMode.SUB) + "\n")
                    case FormatMode.ALL_COMPACT:
                        out.append(connector.glyph + self._delegate(child, FormatMode.SUB_COMPACT) + connector.bar + "\n")
                    case FormatMode.NORMAL | FormatMode.SUB:
                        out.append(self.make_subcommand(child))
                    case FormatMode.SUB_COMPACT:
                        out.append(connector.glyph + self.make_expanded(child, mode))
                    case _:
                        raise UnknownFormatModeError(
                            "internal error: unknown help type requested", mode=mode, command=command
                        )

        return "".join(out)

    def make_expanded(self, command, mode=FormatMode.SUB):
        """
        Return command as a block nested under its parent.

        SUB_COMPACT gives a one-line entry followed by the compact subtree;
        other modes give the name line, description, aliases (anonymous
        groups), positionals, option groups and the child listing. Blank lines
        are dropped and every line after the first is indented, with a
        continuation bar when command is not the last of its siblings.
        """
        if mode is FormatMode.SUB_COMPACT:
            out = self._format_help(command.display_name(True), command.descr)
            out += self.make_subcommands(command, mode)
        else:
            out = command.display_name(True) + "\n"
            out += self.make_description(command)
            if not command.name and command.aliases:
                out += format_aliases(command.aliases, self.column_width + 2)
            out += self.make_positionals(command)
            out += self.make_groups(command, mode)
            out += self.make_subcommands(command, mode)

        lines = collapse(out.split("\n"))
        if len(lines) > 1 and not lines[-1]:
            lines.pop()

        connector = resolve(command)
        return "\n".join(indent(lines, (connector.bar or " ") + "  ")) + "\n"

    # ── Whole page ──────────────────────────────────────────────────────────

    def make_help(self, command, name, mode):
        if mode in (FormatMode.SUB, FormatMode.SUB_COMPACT):
            return self.make_expanded(command, mode)

        out = ""
        if not command.name and command.group and command.parent is not None:
            out += command.group + ":\n"

        out += self.make_description(command)
        out += self.make_usage(command, name)
        out += self.make_positionals(command)
        out += self.make_groups(command, mode)
        out += self.make_subcommands(command, mode)
        out += "\n" + self.make_footer(command)
        return out


def render(command, name=Unset, mode=FormatMode.NORMAL, /):
    """
    Render the help text of command.

    Parameters
    - command: CommandNode
    - name: str | Unset
      Invocation name for the usage line; defaults to the route from the root.
    - mode: FormatMode

    Raises
    - UnknownFormatModeError when mode is not a FormatMode member and the
      command has subcommands to list.
    """
    if not isinstance(command, CommandNode):
        raise TypeError("render() argument must be a command node")
    name = coalesce(name, " ".join(node.name for node in command.path if node.name))
    logger.debug("rendering help of %r (mode=%s)", name, getattr(mode, "value", mode))
    return command.formatter.make_help(command, name, mode)


__all__ = (
    "FormatterBase",
    "FormatterLambda",
    "Formatter",
    "render",
)
