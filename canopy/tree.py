"""
Grouping and tree-connector rules of the subcommand listing.

- classify(nodes): ordered, case-insensitively distinct group labels.
- siblings(node): the filtered sibling list a node is drawn within.
- resolve(node): which connector glyph and continuation bar the node gets.
- rails(node): which ancestors keep a bar open beside the node.

The glyphs are drawn as follows, a non-last sibling keeping a bar on every
line of its block so that the next sibling visually hangs from it:

    ├  one       Description One
    │  └  three  Description Three
    └  two       Description Two
"""
import collections

LINE = "\u2502"   # │
ANGLE = "\u2514"  # └
FORK = "\u251c"   # ├


def same_group(left, right, /):
    return left.lower() == right.lower()


def classify(nodes, /):
    """
    Return the group labels of nodes in first-seen order.

    Labels differing only in case count once (the first spelling is kept);
    nodes without a group are left out.
    """
    groups = []
    for node in nodes:
        if node.group and not any(same_group(node.group, group) for group in groups):
            groups.append(node.group)
    return groups


def siblings(node, /):
    """
    Return the named children of node's parent sharing node's group.

    Unnamed pseudo-nodes never take part in a tree listing, so they are not
    counted as anyone's sibling and are alone in their own list.
    """
    parent = node.parent
    if parent is None or not node.name:
        return [node]
    return parent.get_subcommands(lambda x: x.name and same_group(x.group, node.group))


Connector = collections.namedtuple("Connector", ("glyph", "bar", "last"))


def _is_last(node, group):
    return not group or group[-1] is node


def resolve(node, group=None, /):
    """
    Resolve the connector of node within its filtered sibling list.

    Parameters
    - node: CommandNode
    - group: list[CommandNode] | None
      The sibling list to test against; defaults to siblings(node).

    Returns
    - Connector(glyph, bar, last)
      • glyph: ANGLE when node is the last of the list, FORK otherwise.
      • bar: LINE when node is not last, "" otherwise.
      • last: whether node is last.

    A node without a parent is root-level: it is last and has no bar.
    """
    if node.parent is None:
        return Connector(ANGLE, "", True)

    last = _is_last(node, siblings(node) if group is None else group)
    return Connector(ANGLE if last else FORK, "" if last else LINE, last)


def rails(node, /):
    """
    Return, for each ancestor between the root and node (outermost first),
    whether that ancestor is not last and keeps a bar open beside node.
    """
    out = []
    ancestor = node.parent
    while ancestor is not None and ancestor.parent is not None:
        out.append(not _is_last(ancestor, siblings(ancestor)))
        ancestor = ancestor.parent
    return tuple(reversed(out))


__all__ = (
    "LINE",
    "ANGLE",
    "FORK",
    "Connector",
    "same_group",
    "classify",
    "siblings",
    "resolve",
    "rails",
)
