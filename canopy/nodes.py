"""
Canopy command model: the read-only tree the help renderer walks.

What this module provides
- FormatMode: which help layout a render call commits to.
- OptionNode: one option or positional argument (names, arity, type label,
  default, environment variable, needs/excludes cross-references).
- CommandNode: one command or subcommand (description, group, aliases,
  requirement counts, footer, ordered children and options).

Core ideas
- Nodes are assembled once, top-down (add_subcommand/add_option/add_flag),
  and only queried afterwards. Every public attribute is a read-only property;
  containers are handed out as copies.
- A child holds its parent through a weak reference: the tree is owned from
  the root down, never the other way around.
- Built-in options (help, help-all, autocomplete) are ordinary OptionNodes
  that the command also remembers by reference, so renderers can hide them.

Quick start
    from canopy import CommandNode, FormatMode

    app = CommandNode("app", "Demo application")
    app.add_flag("--flag", descr="This is a flag")
    one = app.add_subcommand("one", "Description One")
    one.add_subcommand("three", "Description Three")

    print(app.help(mode=FormatMode.ALL_COMPACT))
"""
import enum
import functools
import operator
import re
import weakref
from collections.abc import Iterable
from types import EllipsisType

from .utils import *


class FormatMode(enum.Enum):
    """
    Help layouts.

    - NORMAL: full help of one command, children listed one line each.
    - SUB: a command rendered as a nested block (its own children one line each).
    - SUB_COMPACT: a command rendered as one line with its compact subtree.
    - ALL: full help with every child expanded as a SUB block.
    - ALL_COMPACT: full help with every child drawn as a compact subtree.
    """
    NORMAL = "normal"
    SUB = "sub"
    SUB_COMPACT = "sub-compact"
    ALL = "all"
    ALL_COMPACT = "all-compact"


class NodeType(type):
    """
    Metaclass of the model classes.

    Responsibilities
    - Derive __typename__ from the class name ("CommandNode" -> "command-node")
      for messages and representations.
    - Expose every name listed in __introspectable__ as a read-only property
      mirroring the private "_name" field.
    - Provide __repr__/__rich_repr__ limited to __displayable__ (or to
      __introspectable__ when unset).
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_string(cls, field, value, /):
    if not isinstance(value, str):
        raise TypeError(f"{cls.__typename__} '{field}' must be a string")
    return value


def _sanitize_strings(cls, field, values, /):
    if isinstance(values, str) or not isinstance(values, Iterable):
        raise TypeError(f"{cls.__typename__} '{field}' must be an iterable of strings")
    return tuple(_sanitize_string(cls, field, value) for value in values)


def _sanitize_nargs(cls, nargs, /):
    """
    Normalize an arity into a (min, max) pair, max being Ellipsis when unbounded.

    Accepted forms
    - int n >= 0: exactly n values (0 makes the option a flag)
    - Ellipsis: one or more values
    - (min, max): min >= 0, max >= min or Ellipsis
    """
    if isinstance(nargs, bool):
        raise TypeError(f"{cls.__typename__} 'nargs' must be an integer, ellipsis or a pair")
    if isinstance(nargs, int):
        if nargs < 0:
            raise ValueError(f"{cls.__typename__} 'nargs' cannot be negative")
        return nargs, nargs
    if nargs is Ellipsis:
        return 1, Ellipsis
    if isinstance(nargs, tuple) and len(nargs) == 2:
        minimum, maximum = nargs
        if not isinstance(minimum, int) or not isinstance(maximum, int | EllipsisType):
            raise TypeError(f"{cls.__typename__} 'nargs' bounds must be integers (or ellipsis as maximum)")
        if minimum < 0 or (maximum is not Ellipsis and maximum < minimum):
            raise ValueError(f"{cls.__typename__} 'nargs' bounds must satisfy 0 <= min <= max")
        return minimum, maximum
    raise TypeError(f"{cls.__typename__} 'nargs' must be an integer, ellipsis or a pair")


def _sanitize_requirement(cls, field, value, /):
    """
    Normalize a requirement count into a (min, max) pair; max 0 means unlimited.

    Accepted forms
    - int n >= 0: exactly n
    - int -n: at most n
    - (min, max): explicit bounds
    """
    if isinstance(value, bool):
        raise TypeError(f"{cls.__typename__} '{field}' must be an integer or a pair")
    if isinstance(value, int):
        return (value, value) if value >= 0 else (0, -value)
    if isinstance(value, tuple) and len(value) == 2 and all(isinstance(x, int) and not isinstance(x, bool) for x in value):
        minimum, maximum = value
        if minimum < 0 or maximum < 0:
            raise ValueError(f"{cls.__typename__} '{field}' bounds cannot be negative")
        if maximum and maximum < minimum:
            raise ValueError(f"{cls.__typename__} '{field}' maximum cannot be lower than its minimum")
        return minimum, maximum
    raise TypeError(f"{cls.__typename__} '{field}' must be an integer or a pair")


class OptionNode(metaclass=NodeType):
    """
    One option or positional argument, as shown in help.

    Names
    - "-x": short form, "--name": long form, a bare word: positional name.
      An option may carry several dashed forms and at most one positional name.

    Arity (nargs)
    - 0 for flags, n for a fixed count, ... for unbounded, or (min, max).

    Properties
    - positional / nonpositional: whether a positional / a dashed name exists.
    - expected_min, expected_max, expected, unbounded, type_size: arity views.
    - command: the CommandNode the option was added to (None until attached).
    """

    __introspectable__ = (
        "names",
        "descr",
        "group",
        "required",
        "type_name",
        "default",
        "option_text",
        "envname",
        "needs",
        "excludes",
    )

    __displayable__ = (
        "names",
        "descr",
        "group",
        "required",
        "type_name",
        "default",
        "envname",
    )

    def __init__(
            self,
            *names,
            descr="",
            group="Options",
            required=False,
            nargs=1,
            type_name=Unset,
            default=Unset,
            option_text="",
            envname="",
            needs=(),
            excludes=()
    ):
        cls = type(self)
        if not names:
            raise TypeError(f"{cls.__typename__} must specify at least one name")

        shorts, longs, positional = [], [], []
        for name in names:
            if not isinstance(name, str):
                raise TypeError(f"{cls.__typename__} names must be strings")
            elif name in shorts + longs + positional:
                raise ValueError(f"{cls.__typename__} names cannot contain duplicates")
            elif re.fullmatch(r"-[^\W_]", name):
                shorts.append(name)
            elif re.fullmatch(r"--[^\W\d_][\w.-]*", name):
                longs.append(name)
            elif re.fullmatch(r"[^\W\d][\w-]*", name):
                if positional:
                    raise ValueError(f"{cls.__typename__} cannot have more than one positional name")
                positional.append(name)
            else:
                raise ValueError(f"{cls.__typename__} name {name!r} is not a valid short, long or positional name")

        self._names = names
        self._shorts = tuple(shorts)
        self._longs = tuple(longs)
        self._pname = positional[0] if positional else ""
        self._descr = _sanitize_string(cls, "descr", descr)
        self._group = _sanitize_string(cls, "group", group)
        self._required = bool(required)
        self._nargs = _sanitize_nargs(cls, nargs)
        self._type_name = _sanitize_string(cls, "type_name", coalesce(type_name, "TEXT" if self._nargs[1] else ""))
        self._default = "" if default is Unset else str(default)
        self._option_text = _sanitize_string(cls, "option_text", option_text)
        self._envname = _sanitize_string(cls, "envname", envname)

        for field, references in (("needs", needs), ("excludes", excludes)):
            if not isinstance(references, Iterable) or not all(isinstance(x, OptionNode) for x in references):
                raise TypeError(f"{cls.__typename__} '{field}' must be an iterable of options")
        self._needs = tuple(needs)
        self._excludes = tuple(excludes)
        self._command = None

    @property
    def command(self):
        return self._command() if self._command is not None else None

    @property
    def positional(self):
        return bool(self._pname)

    @property
    def nonpositional(self):
        return bool(self._shorts or self._longs)

    @property
    def expected_min(self):
        return self._nargs[0]

    @property
    def expected_max(self):
        return self._nargs[1]

    @property
    def expected(self):
        return self._nargs[0]

    @property
    def unbounded(self):
        return self._nargs[1] is Ellipsis

    @property
    def type_size(self):
        return 0 if self._nargs[1] == 0 else 1

    def get_name(self, positional=False, all_options=False):
        """
        Return the display name of the option.

        - Hidden options (empty group) have no name.
        - all_options: every dashed form joined with ",", preceded by the
          positional name when positional is set or when it is the only name.
        - positional: the positional name.
        - otherwise: the first long form, else the first short form, else the
          positional name.
        """
        if not self._group:
            return ""

        if all_options:
            names = []
            if (positional and self._pname) or not (self._shorts or self._longs):
                names.append(self._pname)
            names.extend(self._shorts)
            names.extend(self._longs)
            return ",".join(names)

        if positional:
            return self._pname
        if self._longs:
            return self._longs[0]
        if self._shorts:
            return self._shorts[0]
        return self._pname


class CommandNode(metaclass=NodeType):
    """
    One command or subcommand of the tree.

    Responsibilities
    - Introspection: read-only name, description, group, aliases, flags,
      requirement counts and footer.
    - Composition: ordered children (add_subcommand) and options
      (add_option/add_flag); a weak back-reference to the parent.
    - Rendering: help() renders through the node's formatter, which is its
      own one or else the nearest ancestor's (see formatter).

    Lifecycle
    - Built top-down by the definition layer; frozen while rendered.
    - Help, help-all and autocomplete flags are added at construction when
      requested; the help flag defaults to "-h, --help" on a root and to the
      parent's help names on a child. Pass () to go without.
    """

    __introspectable__ = (
        "name",
        "descr",
        "group",
        "aliases",
        "required",
        "disabled",
        "footer",
        "require_subcommand_min",
        "require_subcommand_max",
        "require_option_min",
        "require_option_max",
        "subcommands",
        "options",
    )

    __displayable__ = (
        "name",
        "descr",
        "group",
        "aliases",
        "required",
        "subcommands",
    )

    @property
    def parent(self):
        """
        Return the parent command, or None for a root (or an orphaned node).
        """
        return self._parent() if self._parent is not None else None

    @property
    def root(self):
        """
        Return the topmost command of the tree this node belongs to.
        """
        child, parent = self, self.parent
        while parent is not None:
            child, parent = parent, parent.parent
        return child

    @property
    def path(self):
        """
        Return the chain of commands from the root down to this node.
        """
        path = [command := self]
        while command.parent is not None:
            path.append(command := command.parent)
        return tuple(reversed(path))

    @property
    def help_option(self):
        return self._help_option

    @property
    def help_all_option(self):
        return self._help_all_option

    @property
    def autocomplete_option(self):
        return self._autocomplete_option

    @property
    def formatter(self):
        """
        Return the formatter rendering this node.

        Walks up the tree for the first node carrying its own formatter and
        falls back to the default tree formatter.
        """
        node = self
        while node is not None:
            if node._formatter is not Unset:
                return node._formatter
            node = node.parent
        from .formatter import Formatter
        return Formatter()

    def __init__(
            self,
            name="",
            descr="",
            /,
            parent=Unset,
            *,
            group="Subcommands",
            aliases=(),
            required=False,
            disabled=False,
            footer="",
            require_subcommand=0,
            require_option=0,
            help_flag=Unset,
            help_all_flag=(),
            autocomplete_flag=(),
            formatter=Unset
    ):
        """
        Construct a command and attach it to parent.

        Parameters
        - name: str
          Command name; "" makes an anonymous option-group pseudo-node.
        - descr: str
          One-line description.
        - parent: CommandNode | Unset
          Command to attach under (names must be unique among siblings).
        - group: str
          Header the command is listed under in its parent's help; "" hides it.
        - aliases: Iterable[str]
        - required, disabled: bool
        - footer: str
          Text printed at the very end of the command's full help.
        - require_subcommand, require_option: int | (int, int)
          n (exactly n), -n (at most n), or (min, max) with max 0 meaning unlimited.
        - help_flag, help_all_flag, autocomplete_flag: Iterable[str]
          Names of the built-in flags to add; () adds none.
        - formatter: FormatterBase | Unset
          Renderer for this node and, unless they set their own, its descendants.

        Raises
        - TypeError/ValueError on malformed metadata or duplicate names.
        """
        cls = type(self)
        if not isinstance(parent, CommandNode | Unset):
            raise TypeError(f"{cls.__typename__} 'parent' must be a command node")
        if formatter is not Unset and not callable(getattr(formatter, "make_help", None)):
            raise TypeError(f"{cls.__typename__} 'formatter' must provide make_help()")

        self._name = _sanitize_string(cls, "name", name)
        if re.search(r"\s", self._name):
            raise ValueError(f"{cls.__typename__} 'name' cannot contain whitespace")
        self._descr = _sanitize_string(cls, "descr", descr)
        self._group = _sanitize_string(cls, "group", group)
        self._aliases = _sanitize_strings(cls, "aliases", aliases)
        self._required = bool(required)
        self._disabled = bool(disabled)
        self._footer = _sanitize_string(cls, "footer", footer)
        self._require_subcommand_min, self._require_subcommand_max = _sanitize_requirement(
            cls, "require_subcommand", require_subcommand
        )
        self._require_option_min, self._require_option_max = _sanitize_requirement(
            cls, "require_option", require_option
        )
        self._formatter = formatter
        self._subcommands = []
        self._options = []
        self._parent = None

        if parent:
            if self._name and any(
                    self._name in (child.name, *child.aliases) for child in parent._subcommands
            ):
                typeof = "subcommand" if parent.parent is not None else "command"
                raise ValueError(f"{cls.__typename__} {typeof} name {self._name!r} is already in use")
            parent._subcommands.append(self)
            self._parent = weakref.ref(parent)

        if help_flag is Unset:
            inherited = parent.help_option if parent else Unset
            help_flag = ("-h", "--help") if inherited is Unset else (inherited.names if inherited else ())

        self._help_option = self._builtin(help_flag, "Print this help message and exit")
        self._help_all_option = self._builtin(help_all_flag, "Expand all help")
        self._autocomplete_option = self._builtin(autocomplete_flag, "Print the shell completion script")

    def _builtin(self, names, descr):
        names = _sanitize_strings(type(self), "flag", names)
        return self.add_flag(*names, descr=descr) if names else None

    def add_subcommand(self, name="", descr="", /, **options):
        """
        Create a child command under this one and return it.
        """
        return type(self)(name, descr, self, **options)

    def add_option(self, *names, **options):
        """
        Create an option of this command and return it.

        Raises
        - ValueError when a name is already used by another option of the
          command, or when needs/excludes point outside this tree.
        """
        option = OptionNode(*names, **options)

        taken = {name for other in self._options for name in other.names}
        if duplicates := taken.intersection(option.names):
            raise ValueError(f"{type(option).__typename__} name {sorted(duplicates)[0]!r} is already in use")

        for reference in (*option.needs, *option.excludes):
            if reference.command is None or reference.command.root is not self.root:
                raise ValueError(
                    f"{type(option).__typename__} {option.get_name(all_options=True)!r} refers to an option "
                    f"outside of this command tree"
                )

        option._command = weakref.ref(self)
        self._options.append(option)
        return option

    def add_flag(self, *names, **options):
        """
        Create a presence-only option (no values) and return it.
        """
        if "nargs" in options:
            raise TypeError("add_flag() does not accept 'nargs'")
        return self.add_option(*names, nargs=0, **options)

    def get_subcommands(self, filter=None, /):
        """
        Return the children in definition order, optionally filtered by a predicate.
        """
        return [child for child in self._subcommands if filter is None or filter(child)]

    def get_options(self, filter=None, /):
        """
        Return the options in definition order, optionally filtered by a predicate.
        """
        return [option for option in self._options if filter is None or filter(option)]

    def display_name(self, with_aliases=False):
        """
        Return the name shown in listings.

        Anonymous nodes show "[Option Group: <group>]"; with_aliases appends
        ", <alias>" for each alias.
        """
        if not self._name:
            return f"[Option Group: {self._group}]"
        if not with_aliases or not self._aliases:
            return self._name
        return ", ".join((self._name, *self._aliases))

    def help(self, name=Unset, mode=FormatMode.NORMAL):
        """
        Render the help text of this command.

        Parameters
        - name: str | Unset
          Invocation name shown in the usage line; defaults to the route from
          the root (e.g. "app one three").
        - mode: FormatMode
        """
        from .formatter import render
        return render(self, name, mode)

    def print_help(self, mode=FormatMode.NORMAL, /, **options):
        """
        Render and print the help text of this command (see canopy.console).
        """
        from .console import display
        display(self, mode, **options)


__all__ = (
    "FormatMode",
    "OptionNode",
    "CommandNode",
)
